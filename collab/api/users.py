"""
Users API endpoints.

Self profile (read and update) and public profile lookup by username.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from collab.db.database import get_db
from collab.api.deps import get_current_user_context
from collab.db import schemas
from collab.db.repositories import users as user_repo

router = APIRouter(prefix="/api/users", tags=["users"])


def _current_user_response(user, memberships) -> schemas.CurrentUser:
    profile = schemas.User.model_validate(user).model_dump()
    return schemas.CurrentUser(**profile, memberships=memberships)


@router.get("/me", response_model=schemas.CurrentUser)
def get_me(user_context = Depends(get_current_user_context)):
    user, current_user = user_context
    return _current_user_response(user, current_user.get("memberships") or [])


@router.patch("/me", response_model=schemas.CurrentUser)
def update_me(
    payload: schemas.UserUpdate,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    if payload.email is not None and payload.email != user.email:
        existing = user_repo.get_user_by_email(db, payload.email)
        if existing is not None and existing.id != user.id:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")
    updated = user_repo.update_user(db, user.id, payload)
    return _current_user_response(updated, current_user.get("memberships") or [])


@router.get("/{username}", response_model=schemas.UserPublic)
def get_user_by_username(
    username: str,
    db: Session = Depends(get_db),
    user_context = Depends(get_current_user_context),
):
    db_user = user_repo.get_user_by_username(db, username)
    if db_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return db_user
