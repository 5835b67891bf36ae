"""
Teamspace repository functions.

Implements CRUD for teamspaces and their memberships.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy.orm import Session

from collab.db import models, schemas
from collab.utils.role_permissions import ROLE_OWNER, resolve_permissions


def create_teamspace(db: Session, teamspace: schemas.TeamspaceCreate, user_id: int) -> models.Teamspace:
    db_teamspace = models.Teamspace(
        name=teamspace.name,
        description=teamspace.description,
        project_id=teamspace.project_id,
        created_by=user_id,
    )
    db.add(db_teamspace)
    db.flush()
    # Creator becomes owner
    db_member = models.TeamspaceMembership(
        teamspace_id=db_teamspace.id,
        user_id=user_id,
        role=ROLE_OWNER,
        **resolve_permissions(ROLE_OWNER),
    )
    db.add(db_member)
    db.commit()
    db.refresh(db_teamspace)
    return db_teamspace


def get_teamspace(db: Session, teamspace_id: int) -> Optional[models.Teamspace]:
    return db.query(models.Teamspace).filter(models.Teamspace.id == teamspace_id).first()


def teamspace_exists(db: Session, teamspace_id: int) -> bool:
    return db.query(models.Teamspace.id).filter(models.Teamspace.id == teamspace_id).first() is not None


def get_teamspace_by_name(db: Session, name: str, project_id: Optional[int] = None) -> Optional[models.Teamspace]:
    q = db.query(models.Teamspace).filter(models.Teamspace.name == name)
    if project_id is None:
        q = q.filter(models.Teamspace.project_id.is_(None))
    else:
        q = q.filter(models.Teamspace.project_id == project_id)
    return q.first()


def get_teamspaces_for_user(db: Session, user_id: int, skip: int = 0, limit: int = 100) -> List[models.Teamspace]:
    return (
        db.query(models.Teamspace)
        .join(models.TeamspaceMembership)
        .filter(models.TeamspaceMembership.user_id == user_id)
        .order_by(models.Teamspace.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_project_teamspaces(db: Session, project_id: int) -> List[models.Teamspace]:
    return (
        db.query(models.Teamspace)
        .filter(models.Teamspace.project_id == project_id)
        .order_by(models.Teamspace.id.asc())
        .all()
    )


def update_teamspace(db: Session, teamspace_id: int, teamspace: schemas.TeamspaceUpdate) -> Optional[models.Teamspace]:
    db_teamspace = get_teamspace(db, teamspace_id)
    if db_teamspace:
        update_data = teamspace.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_teamspace, key, value)
        db.commit()
        db.refresh(db_teamspace)
    return db_teamspace


def delete_teamspace(db: Session, teamspace_id: int) -> bool:
    db_teamspace = get_teamspace(db, teamspace_id)
    if db_teamspace:
        db.delete(db_teamspace)
        db.commit()
        return True
    return False


def create_teamspace_member(db: Session, teamspace_id: int, user_id: int, role: str) -> models.TeamspaceMembership:
    db_member = models.TeamspaceMembership(
        teamspace_id=teamspace_id,
        user_id=user_id,
        role=role,
        **resolve_permissions(role),
    )
    db.add(db_member)
    db.commit()
    db.refresh(db_member)
    return db_member


def get_teamspace_member(db: Session, teamspace_id: int, user_id: int) -> Optional[models.TeamspaceMembership]:
    return (
        db.query(models.TeamspaceMembership)
        .filter(
            models.TeamspaceMembership.teamspace_id == teamspace_id,
            models.TeamspaceMembership.user_id == user_id,
        )
        .first()
    )


def get_teamspace_members(db: Session, teamspace_id: int) -> List[models.TeamspaceMembership]:
    return (
        db.query(models.TeamspaceMembership)
        .filter(models.TeamspaceMembership.teamspace_id == teamspace_id)
        .order_by(models.TeamspaceMembership.created_at.asc(), models.TeamspaceMembership.user_id.asc())
        .all()
    )


def count_owners(db: Session, teamspace_id: int) -> int:
    return (
        db.query(models.TeamspaceMembership)
        .filter(
            models.TeamspaceMembership.teamspace_id == teamspace_id,
            models.TeamspaceMembership.role == ROLE_OWNER,
        )
        .count()
    )


def update_teamspace_member(
    db: Session,
    teamspace_id: int,
    user_id: int,
    member: schemas.TeamspaceMemberUpdate,
) -> Optional[models.TeamspaceMembership]:
    db_member = get_teamspace_member(db, teamspace_id, user_id)
    if db_member:
        update_data = member.model_dump(exclude_unset=True)
        new_role = update_data.pop("role", None)
        if new_role is not None:
            role_value = getattr(new_role, "value", new_role)
            # A role change resets the flags to that role's defaults unless overridden
            perms = resolve_permissions(
                role_value,
                can_read=update_data.get("can_read"),
                can_write=update_data.get("can_write"),
            )
            db_member.role = role_value
            db_member.can_read = perms["can_read"]
            db_member.can_write = perms["can_write"]
        else:
            for key, value in update_data.items():
                if value is not None:
                    setattr(db_member, key, value)
        db.commit()
        db.refresh(db_member)
    return db_member


def delete_teamspace_member(db: Session, teamspace_id: int, user_id: int) -> bool:
    db_member = get_teamspace_member(db, teamspace_id, user_id)
    if db_member:
        db.delete(db_member)
        db.commit()
        return True
    return False


def get_user_memberships(db: Session, user_id: int) -> List[dict]:
    """Memberships of a user joined to their teamspace names."""
    rows = (
        db.query(models.TeamspaceMembership, models.Teamspace)
        .join(models.Teamspace, models.Teamspace.id == models.TeamspaceMembership.teamspace_id)
        .filter(models.TeamspaceMembership.user_id == user_id)
        .order_by(models.Teamspace.id.asc())
        .all()
    )
    return [
        {
            "teamspace_id": m.teamspace_id,
            "teamspace_name": ts.name,
            "role": m.role,
            "can_read": bool(m.can_read),
            "can_write": bool(m.can_write),
        }
        for m, ts in rows
    ]
