"""
Audit logging helpers and enums.

Single entry point to persist normalized audit records for teamspace,
membership, project and task lifecycle actions.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from collab.db import models, schemas
from collab.db.repositories import audits as audit_repo


class AuditAction(str, Enum):
    # Project
    PROJECT_CREATE = "project_create"
    PROJECT_UPDATE = "project_update"
    PROJECT_DELETE = "project_delete"
    # Teamspace
    TEAMSPACE_CREATE = "teamspace_create"
    TEAMSPACE_UPDATE = "teamspace_update"
    TEAMSPACE_DELETE = "teamspace_delete"
    # Membership
    MEMBER_ADD = "member_add"
    MEMBER_REMOVE = "member_remove"
    MEMBER_ROLE_CHANGE = "member_role_change"
    # Task
    TASK_CREATE = "task_create"
    TASK_UPDATE = "task_update"
    TASK_DELETE = "task_delete"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[int] = None,
    actor_user_id: int,
    teamspace_id: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> models.AuditLog:
    """Persist one audit record."""
    # Store plain string values, not Enum reprs
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )
    return audit_repo.create_audit_log(
        db,
        audit_log=audit_log,
        actor_user_id=actor_user_id,
        teamspace_id=teamspace_id,
    )


def log_task(
    db: Session,
    *,
    actor_user_id: int,
    teamspace_id: int,
    task_id: int,
    action: AuditAction,
    title: Optional[str] = None,
) -> models.AuditLog:
    return log(
        db,
        action=action,
        target_type="task",
        target_id=task_id,
        actor_user_id=actor_user_id,
        teamspace_id=teamspace_id,
        metadata={"title": title} if title else None,
    )


__all__ = ["AuditAction", "AuditStatus", "log", "log_task"]
