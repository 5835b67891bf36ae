"""
Authentication helpers and identity resolution.

Parses reverse-proxy identity headers and upserts users, elevating usernames
listed in ADMIN_USERNAMES to superadmin.
"""
import logging
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from collab.db import models, schemas
from collab.db.repositories import users as user_repo
from collab.utils.runtime import admin_usernames

logger = logging.getLogger("collab.auth")


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    email = email.strip().lower()
    return email or None


def _normalize_username(username: Optional[str]) -> Optional[str]:
    if not username:
        return None
    username = username.strip()
    return username or None


def resolve_identity_from_headers(
    x_auth_request_user: Optional[str],
    x_auth_request_email: Optional[str],
    x_forwarded_user: Optional[str],
    x_forwarded_email: Optional[str],
) -> Tuple[Optional[str], Optional[str]]:
    """Return (username, email); the username falls back to the email local part."""
    username = _normalize_username(x_auth_request_user or x_forwarded_user)
    email = _normalize_email(x_auth_request_email or x_forwarded_email)
    if not username and email:
        username = email.split("@")[0]
    return username, email


def get_or_create_user(db: Session, username: str, email: Optional[str] = None) -> models.User:
    user = user_repo.get_user_by_username(db, username)
    is_admin = username.lower() in admin_usernames()
    if not user:
        # Email is unique; skip it when another account already claimed it
        if email and user_repo.get_user_by_email(db, email) is not None:
            email = None
        user = user_repo.create_user(db, schemas.UserCreate(username=username, email=email), is_superadmin=is_admin)
        logger.info("user_provisioned: username=%s superadmin=%s", username, is_admin)
        return user

    # Existing users might predate a new ADMIN_USERNAMES value; promote them when necessary.
    if is_admin and not user.is_superadmin:
        user.is_superadmin = True
        db.commit()
        db.refresh(user)
    return user
