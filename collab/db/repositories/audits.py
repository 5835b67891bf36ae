"""
Audit log repository functions.
"""
from __future__ import annotations

from typing import Optional
from sqlalchemy.orm import Session

from collab.db import schemas, models


def create_audit_log(
    db: Session,
    audit_log: schemas.AuditLogCreate,
    actor_user_id: int,
    teamspace_id: Optional[int] = None,
) -> models.AuditLog:
    data = audit_log.model_dump()
    metadata_payload = data.pop('metadata', None)
    db_audit_log = models.AuditLog(
        **data,
        actor_user_id=actor_user_id,
        teamspace_id=teamspace_id,
        metadata_json=metadata_payload,
    )
    db.add(db_audit_log)
    db.commit()
    db.refresh(db_audit_log)
    return db_audit_log


def get_audit_logs(
    db: Session,
    teamspace_id: Optional[int] = None,
    user_id: Optional[int] = None,
    action_type: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
):
    query = db.query(models.AuditLog)
    if teamspace_id is not None:
        query = query.filter(models.AuditLog.teamspace_id == teamspace_id)
    if user_id is not None:
        query = query.filter(models.AuditLog.actor_user_id == user_id)
    if action_type:
        query = query.filter(models.AuditLog.action_type == action_type)
    return query.order_by(models.AuditLog.created_at.desc(), models.AuditLog.id.desc()).offset(skip).limit(limit).all()
