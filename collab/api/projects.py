"""
Projects API endpoints.

Projects group teamspaces; only the owner (or a superadmin) may read or change
one. Lifecycle actions are audited.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from collab.db.database import get_db
from collab.db import schemas
from collab.db.repositories import projects as project_repo
from collab.db.repositories import teamspaces as teamspace_repo
from collab.api.deps import get_current_user_context
from collab.api.permissions import can_manage_project, can_read_teamspace
from collab.audit import AuditAction, log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _get_project_or_404(db: Session, project_id: int):
    project = project_repo.get_project(db, project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def _get_managed_project(db: Session, project_id: int, current_user: dict):
    project = _get_project_or_404(db, project_id)
    if not can_manage_project(project, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return project


@router.post("", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project: schemas.ProjectCreate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, _ = user_context
    db_project = project_repo.create_project(db, project, owner_id=user.id)
    log(
        db,
        action=AuditAction.PROJECT_CREATE,
        target_type="project",
        target_id=db_project.id,
        actor_user_id=user.id,
        metadata={"name": db_project.name},
    )
    logger.info("project_created: id=%s owner=%s", db_project.id, user.username)
    return db_project


@router.get("", response_model=List[schemas.Project])
def list_projects(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    owner_id = None if current_user.get("is_superadmin") else user.id
    return project_repo.get_projects(db, owner_id=owner_id, skip=skip, limit=limit)


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(
    project_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _, current_user = user_context
    return _get_managed_project(db, project_id, current_user)


@router.put("/{project_id}", response_model=schemas.Project)
def update_project(
    project_id: int,
    project: schemas.ProjectUpdate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    _get_managed_project(db, project_id, current_user)
    updated = project_repo.update_project(db, project_id, project)
    log(
        db,
        action=AuditAction.PROJECT_UPDATE,
        target_type="project",
        target_id=project_id,
        actor_user_id=user.id,
        metadata=project.model_dump(exclude_unset=True),
    )
    return updated


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    project = _get_managed_project(db, project_id, current_user)
    name = project.name
    project_repo.delete_project(db, project_id)
    log(
        db,
        action=AuditAction.PROJECT_DELETE,
        target_type="project",
        target_id=project_id,
        actor_user_id=user.id,
        metadata={"name": name},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{project_id}/teamspaces", response_model=List[schemas.Teamspace])
def list_project_teamspaces(
    project_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _, current_user = user_context
    project = _get_project_or_404(db, project_id)
    teamspaces = teamspace_repo.get_project_teamspaces(db, project_id)
    if can_manage_project(project, current_user):
        return teamspaces
    return [ts for ts in teamspaces if can_read_teamspace(ts.id, current_user)]
