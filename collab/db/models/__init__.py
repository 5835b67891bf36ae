"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc` and all ORM classes from a single import point so
callers can use `from collab.db import models`.
"""

from .base import Base, now_utc, as_utc  # re-export

# Domain models
from .users import User
from .projects import Project
from .teamspaces import Teamspace, TeamspaceMembership
from .tasks import Task
from .chats import Chat
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    "as_utc",
    # users/projects/teamspaces
    "User",
    "Project",
    "Teamspace",
    "TeamspaceMembership",
    # work items
    "Task",
    "Chat",
    # audit
    "AuditLog",
]
