"""
Audit log API endpoints.

Teamspace managers page through the teamspace's audit trail, newest first.
"""
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from collab.db.database import get_db
from collab.db import schemas
from collab.db.repositories import audits as audit_repo
from collab.api.deps import get_current_user_context
from collab.api.permissions import can_manage_teamspace
from collab.api.teamspaces import get_teamspace_or_404

router = APIRouter(prefix="/api/teamspaces/{teamspace_id}/audits", tags=["audits"])


@router.get("", response_model=List[schemas.AuditLog])
def list_audit_logs(
    teamspace_id: int,
    user_id: Optional[int] = Query(None, alias="userId"),
    action_type: Optional[str] = Query(None, alias="actionType"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    if not can_manage_teamspace(teamspace_id, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return audit_repo.get_audit_logs(
        db,
        teamspace_id=teamspace_id,
        user_id=user_id,
        action_type=action_type,
        skip=skip,
        limit=limit,
    )
