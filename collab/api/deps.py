"""
API dependency helpers.

Resolves the calling user from proxy headers and wires services for routes.
"""
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from collab.db.database import get_db
from collab.db.repositories import teamspaces as teamspace_repo
from collab.api.auth import resolve_identity_from_headers, get_or_create_user
from collab.services.chat_service import ChatService
from collab.utils.runtime import DEV_EMAIL, DEV_USERNAME, dev_mode_active

# Contract:
# Returns (sqlalchemy User model, current_user_context_dict)
# Raises 401 if identity cannot be resolved.

def get_current_user_context(
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> Tuple[Any, Dict[str, Any]]:
    if dev_mode_active():
        username, email = DEV_USERNAME, DEV_EMAIL
    else:
        username, email = resolve_identity_from_headers(
            x_auth_request_user=x_auth_request_user,
            x_auth_request_email=x_auth_request_email,
            x_forwarded_user=x_forwarded_user,
            x_forwarded_email=x_forwarded_email,
        )
        if not username:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    user = get_or_create_user(db, username=username, email=email)

    memberships = teamspace_repo.get_user_memberships(db, user.id)
    current_user = {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "display_name": user.display_name,
        "is_superadmin": bool(user.is_superadmin),
        "memberships": memberships,
        "memberships_by_teamspace": {m["teamspace_id"]: m for m in memberships},
    }
    return user, current_user


def get_chat_service(db: Session = Depends(get_db)) -> ChatService:
    return ChatService(db)
