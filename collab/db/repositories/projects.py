"""
Project repository functions.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy.orm import Session

from collab.db import models, schemas


def create_project(db: Session, project: schemas.ProjectCreate, owner_id: int) -> models.Project:
    db_project = models.Project(
        name=project.name,
        description=project.description,
        owner_id=owner_id,
    )
    db.add(db_project)
    db.commit()
    db.refresh(db_project)
    return db_project


def get_project(db: Session, project_id: int) -> Optional[models.Project]:
    return db.query(models.Project).filter(models.Project.id == project_id).first()


def get_projects(db: Session, owner_id: Optional[int] = None, skip: int = 0, limit: int = 100) -> List[models.Project]:
    q = db.query(models.Project)
    if owner_id is not None:
        q = q.filter(models.Project.owner_id == owner_id)
    return q.order_by(models.Project.id.asc()).offset(skip).limit(limit).all()


def update_project(db: Session, project_id: int, project: schemas.ProjectUpdate) -> Optional[models.Project]:
    db_project = get_project(db, project_id)
    if db_project:
        update_data = project.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_project, key, value)
        db.commit()
        db.refresh(db_project)
    return db_project


def delete_project(db: Session, project_id: int) -> bool:
    db_project = get_project(db, project_id)
    if db_project:
        db.delete(db_project)
        db.commit()
        return True
    return False
