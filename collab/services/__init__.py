"""Business logic services package."""

from .chat_service import ChatService
from .errors import (
    ServiceError,
    NotFoundError,
    UserNotFoundError,
    TeamspaceNotFoundError,
    PermissionDeniedError,
    ConflictError,
)

__all__ = [
    "ChatService",
    "ServiceError",
    "NotFoundError",
    "UserNotFoundError",
    "TeamspaceNotFoundError",
    "PermissionDeniedError",
    "ConflictError",
]
