"""
Teamspaces API endpoints.

Manage teamspaces and their memberships with owner/admin role enforcement and
audited lifecycle actions. A teamspace always keeps at least one owner.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from collab.db.database import get_db
from collab.db import models, schemas
from collab.db.repositories import projects as project_repo
from collab.db.repositories import teamspaces as teamspace_repo
from collab.db.repositories import users as user_repo
from collab.api.deps import get_current_user_context
from collab.api.permissions import (
    can_manage_project,
    can_manage_teamspace,
    can_read_teamspace,
    get_teamspace_membership,
)
from collab.audit import AuditAction, log
from collab.utils.role_permissions import ROLE_OWNER

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/teamspaces", tags=["teamspaces"])


def get_teamspace_or_404(db: Session, teamspace_id: int) -> models.Teamspace:
    teamspace = teamspace_repo.get_teamspace(db, teamspace_id)
    if teamspace is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teamspace not found")
    return teamspace


def _require_read(teamspace_id: int, current_user: dict) -> None:
    if not can_read_teamspace(teamspace_id, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a member of this teamspace")


def _require_manage(teamspace_id: int, current_user: dict) -> None:
    if not can_manage_teamspace(teamspace_id, current_user):
        logger.warning("teamspace_manage_denied: teamspace=%s user=%s", teamspace_id, current_user.get("username"))
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


def _require_owner_for_owner_role(teamspace_id: int, current_user: dict) -> None:
    if current_user.get("is_superadmin"):
        return
    membership = get_teamspace_membership(teamspace_id, current_user)
    if not membership or membership.get("role") != ROLE_OWNER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only owners can grant or revoke the owner role")


def _ensure_unique_name(db: Session, name: str, project_id, exclude_id=None) -> None:
    # Names are unique within a project; standalone teamspaces are not constrained
    if project_id is None:
        return
    existing = teamspace_repo.get_teamspace_by_name(db, name, project_id=project_id)
    if existing is not None and existing.id != exclude_id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Teamspace name already exists in this project")


def _name_conflict(db: Session, exc: IntegrityError) -> HTTPException:
    # A concurrent writer took the name between the check and the commit
    db.rollback()
    logger.warning("teamspace_name_conflict: %s", exc.orig)
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Teamspace name already exists in this project")


@router.post("", response_model=schemas.Teamspace, status_code=status.HTTP_201_CREATED)
def create_teamspace(
    teamspace: schemas.TeamspaceCreate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    if teamspace.project_id is not None:
        project = project_repo.get_project(db, teamspace.project_id)
        if project is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
        if not can_manage_project(project, current_user):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    _ensure_unique_name(db, teamspace.name, teamspace.project_id)

    try:
        db_teamspace = teamspace_repo.create_teamspace(db, teamspace, user_id=user.id)
    except IntegrityError as exc:
        raise _name_conflict(db, exc)
    log(
        db,
        action=AuditAction.TEAMSPACE_CREATE,
        target_type="teamspace",
        target_id=db_teamspace.id,
        actor_user_id=user.id,
        teamspace_id=db_teamspace.id,
        metadata={"name": db_teamspace.name, "project_id": db_teamspace.project_id},
    )
    logger.info("teamspace_created: id=%s creator=%s", db_teamspace.id, user.username)
    return db_teamspace


@router.get("", response_model=List[schemas.Teamspace])
def list_teamspaces(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    """List teamspaces where the caller is a member."""
    user, _ = user_context
    return teamspace_repo.get_teamspaces_for_user(db, user.id, skip=skip, limit=limit)


@router.get("/{teamspace_id}", response_model=schemas.Teamspace)
def get_teamspace(
    teamspace_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _, current_user = user_context
    teamspace = get_teamspace_or_404(db, teamspace_id)
    _require_read(teamspace_id, current_user)
    return teamspace


@router.put("/{teamspace_id}", response_model=schemas.Teamspace)
def update_teamspace(
    teamspace_id: int,
    teamspace: schemas.TeamspaceUpdate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    db_teamspace = get_teamspace_or_404(db, teamspace_id)
    _require_manage(teamspace_id, current_user)
    if teamspace.name is not None and teamspace.name != db_teamspace.name:
        _ensure_unique_name(db, teamspace.name, db_teamspace.project_id, exclude_id=teamspace_id)

    try:
        updated = teamspace_repo.update_teamspace(db, teamspace_id, teamspace)
    except IntegrityError as exc:
        raise _name_conflict(db, exc)
    log(
        db,
        action=AuditAction.TEAMSPACE_UPDATE,
        target_type="teamspace",
        target_id=teamspace_id,
        actor_user_id=user.id,
        teamspace_id=teamspace_id,
        metadata=teamspace.model_dump(exclude_unset=True),
    )
    return updated


@router.delete("/{teamspace_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_teamspace(
    teamspace_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    db_teamspace = get_teamspace_or_404(db, teamspace_id)
    _require_manage(teamspace_id, current_user)
    name = db_teamspace.name
    teamspace_repo.delete_teamspace(db, teamspace_id)
    # The teamspace row is gone, so the record is not linked to it
    log(
        db,
        action=AuditAction.TEAMSPACE_DELETE,
        target_type="teamspace",
        target_id=teamspace_id,
        actor_user_id=user.id,
        metadata={"name": name},
    )
    logger.info("teamspace_deleted: id=%s by=%s", teamspace_id, user.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Members

@router.get("/{teamspace_id}/members", response_model=List[schemas.TeamspaceMember])
def list_members(
    teamspace_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    _require_read(teamspace_id, current_user)
    return teamspace_repo.get_teamspace_members(db, teamspace_id)


@router.post("/{teamspace_id}/members", response_model=schemas.TeamspaceMember, status_code=status.HTTP_201_CREATED)
def add_member(
    teamspace_id: int,
    member: schemas.TeamspaceMemberCreate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    _require_manage(teamspace_id, current_user)
    role = member.role.value
    if role == ROLE_OWNER:
        _require_owner_for_owner_role(teamspace_id, current_user)

    target = user_repo.get_user_by_username(db, member.username.strip())
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if teamspace_repo.get_teamspace_member(db, teamspace_id, target.id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User is already a member")

    db_member = teamspace_repo.create_teamspace_member(db, teamspace_id, target.id, role)
    log(
        db,
        action=AuditAction.MEMBER_ADD,
        target_type="user",
        target_id=target.id,
        actor_user_id=user.id,
        teamspace_id=teamspace_id,
        metadata={"username": target.username, "role": role},
    )
    logger.info("member_added: teamspace=%s user=%s role=%s", teamspace_id, target.username, role)
    return db_member


@router.put("/{teamspace_id}/members/{user_id}", response_model=schemas.TeamspaceMember)
def update_member(
    teamspace_id: int,
    user_id: int,
    member: schemas.TeamspaceMemberUpdate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    _require_manage(teamspace_id, current_user)
    db_member = teamspace_repo.get_teamspace_member(db, teamspace_id, user_id)
    if db_member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")

    old_role = db_member.role
    new_role = member.role.value if member.role is not None else old_role
    if ROLE_OWNER in (old_role, new_role) and old_role != new_role:
        _require_owner_for_owner_role(teamspace_id, current_user)
        if old_role == ROLE_OWNER and teamspace_repo.count_owners(db, teamspace_id) <= 1:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Cannot demote the last owner")

    updated = teamspace_repo.update_teamspace_member(db, teamspace_id, user_id, member)
    if new_role != old_role:
        log(
            db,
            action=AuditAction.MEMBER_ROLE_CHANGE,
            target_type="user",
            target_id=user_id,
            actor_user_id=user.id,
            teamspace_id=teamspace_id,
            metadata={"old_role": old_role, "new_role": new_role},
        )
        logger.info("member_role_changed: teamspace=%s user=%s %s->%s", teamspace_id, user_id, old_role, new_role)
    return updated


@router.delete("/{teamspace_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    teamspace_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    """Remove a member; any member may remove themselves."""
    user, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    if user_id != user.id:
        _require_manage(teamspace_id, current_user)
    db_member = teamspace_repo.get_teamspace_member(db, teamspace_id, user_id)
    if db_member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    if db_member.role == ROLE_OWNER:
        if user_id != user.id:
            _require_owner_for_owner_role(teamspace_id, current_user)
        if teamspace_repo.count_owners(db, teamspace_id) <= 1:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Cannot remove the last owner")

    teamspace_repo.delete_teamspace_member(db, teamspace_id, user_id)
    log(
        db,
        action=AuditAction.MEMBER_REMOVE,
        target_type="user",
        target_id=user_id,
        actor_user_id=user.id,
        teamspace_id=teamspace_id,
    )
    logger.info("member_removed: teamspace=%s user=%s by=%s", teamspace_id, user_id, user.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
