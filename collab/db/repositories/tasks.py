"""
Task repository functions.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy.orm import Session

from collab.db import models, schemas


def create_task(db: Session, teamspace_id: int, task: schemas.TaskCreate, created_by: int) -> models.Task:
    data = task.model_dump()
    data["status"] = getattr(data["status"], "value", data["status"])
    db_task = models.Task(teamspace_id=teamspace_id, created_by=created_by, **data)
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task


def get_task(db: Session, teamspace_id: int, task_id: int) -> Optional[models.Task]:
    return (
        db.query(models.Task)
        .filter(models.Task.id == task_id, models.Task.teamspace_id == teamspace_id)
        .first()
    )


def get_tasks(
    db: Session,
    teamspace_id: int,
    *,
    status: Optional[str] = None,
    assignee_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.Task]:
    q = db.query(models.Task).filter(models.Task.teamspace_id == teamspace_id)
    if status:
        q = q.filter(models.Task.status == status)
    if assignee_id is not None:
        q = q.filter(models.Task.assignee_id == assignee_id)
    return q.order_by(models.Task.created_at.asc(), models.Task.id.asc()).offset(skip).limit(limit).all()


def update_task(db: Session, teamspace_id: int, task_id: int, task: schemas.TaskUpdate) -> Optional[models.Task]:
    db_task = get_task(db, teamspace_id, task_id)
    if db_task:
        update_data = task.model_dump(exclude_unset=True)
        if update_data.get("status") is not None:
            update_data["status"] = getattr(update_data["status"], "value", update_data["status"])
        for key, value in update_data.items():
            setattr(db_task, key, value)
        db.commit()
        db.refresh(db_task)
    return db_task


def delete_task(db: Session, teamspace_id: int, task_id: int) -> bool:
    db_task = get_task(db, teamspace_id, task_id)
    if db_task:
        db.delete(db_task)
        db.commit()
        return True
    return False
