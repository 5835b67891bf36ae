"""
Teamspace task endpoints.

Members with read access list and fetch tasks; creating, updating and
deleting require write access. Assignees must belong to the teamspace.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from collab.db.database import get_db
from collab.db import schemas
from collab.db.repositories import tasks as task_repo
from collab.db.repositories import teamspaces as teamspace_repo
from collab.api.deps import get_current_user_context
from collab.api.permissions import can_read_teamspace, can_write_teamspace
from collab.api.teamspaces import get_teamspace_or_404
from collab.audit import AuditAction, log_task

router = APIRouter(prefix="/api/teamspaces/{teamspace_id}/tasks", tags=["tasks"])


def _require_read(teamspace_id: int, current_user: dict) -> None:
    if not can_read_teamspace(teamspace_id, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a member of this teamspace")


def _require_write(teamspace_id: int, current_user: dict) -> None:
    if not can_write_teamspace(teamspace_id, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Write access required")


def _validate_assignee(db: Session, teamspace_id: int, assignee_id: Optional[int]) -> None:
    if assignee_id is None:
        return
    if teamspace_repo.get_teamspace_member(db, teamspace_id, assignee_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Assignee must be a member of the teamspace")


def _get_task_or_404(db: Session, teamspace_id: int, task_id: int):
    task = task_repo.get_task(db, teamspace_id, task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=List[schemas.Task])
def list_tasks(
    teamspace_id: int,
    status_filter: Optional[schemas.TaskStatus] = Query(None, alias="status"),
    assignee_id: Optional[int] = Query(None, alias="assigneeId"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    _require_read(teamspace_id, current_user)
    return task_repo.get_tasks(
        db,
        teamspace_id,
        status=status_filter.value if status_filter else None,
        assignee_id=assignee_id,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=schemas.Task, status_code=status.HTTP_201_CREATED)
def create_task(
    teamspace_id: int,
    task: schemas.TaskCreate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    _require_write(teamspace_id, current_user)
    _validate_assignee(db, teamspace_id, task.assignee_id)

    db_task = task_repo.create_task(db, teamspace_id, task, created_by=user.id)
    log_task(
        db,
        actor_user_id=user.id,
        teamspace_id=teamspace_id,
        task_id=db_task.id,
        action=AuditAction.TASK_CREATE,
        title=db_task.title,
    )
    return db_task


@router.get("/{task_id}", response_model=schemas.Task)
def get_task(
    teamspace_id: int,
    task_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    _, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    _require_read(teamspace_id, current_user)
    return _get_task_or_404(db, teamspace_id, task_id)


@router.put("/{task_id}", response_model=schemas.Task)
def update_task(
    teamspace_id: int,
    task_id: int,
    task: schemas.TaskUpdate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    _require_write(teamspace_id, current_user)
    _get_task_or_404(db, teamspace_id, task_id)
    _validate_assignee(db, teamspace_id, task.assignee_id)

    updated = task_repo.update_task(db, teamspace_id, task_id, task)
    log_task(
        db,
        actor_user_id=user.id,
        teamspace_id=teamspace_id,
        task_id=task_id,
        action=AuditAction.TASK_UPDATE,
        title=updated.title,
    )
    return updated


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    teamspace_id: int,
    task_id: int,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    get_teamspace_or_404(db, teamspace_id)
    _require_write(teamspace_id, current_user)
    task = _get_task_or_404(db, teamspace_id, task_id)
    title = task.title
    task_repo.delete_task(db, teamspace_id, task_id)
    log_task(
        db,
        actor_user_id=user.id,
        teamspace_id=teamspace_id,
        task_id=task_id,
        action=AuditAction.TASK_DELETE,
        title=title,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
