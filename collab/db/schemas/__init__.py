"""
Domain-split Pydantic schemas with a single aggregation point.

Callers use `from collab.db import schemas` and refer to `schemas.<Name>`.
"""

from .common import CamelModel, OrmCamelModel
from .users import UserPublic, User, UserCreate, UserUpdate, MembershipSummary, CurrentUser
from .projects import ProjectBase, ProjectCreate, ProjectUpdate, Project
from .teamspaces import (
    TeamspaceBase,
    TeamspaceCreate,
    TeamspaceUpdate,
    Teamspace,
    TeamspaceMemberCreate,
    TeamspaceMemberUpdate,
    TeamspaceMember,
)
from .tasks import TaskStatus, TaskBase, TaskCreate, TaskUpdate, Task
from .chats import MAX_MESSAGE_LENGTH, ChatMessageRequest, ChatMessageResponse
from .audits import AuditLogCreate, AuditLog

__all__ = [
    # Base
    "CamelModel",
    "OrmCamelModel",
    # Users
    "UserPublic",
    "User",
    "UserCreate",
    "UserUpdate",
    "MembershipSummary",
    "CurrentUser",
    # Projects
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "Project",
    # Teamspaces
    "TeamspaceBase",
    "TeamspaceCreate",
    "TeamspaceUpdate",
    "Teamspace",
    "TeamspaceMemberCreate",
    "TeamspaceMemberUpdate",
    "TeamspaceMember",
    # Tasks
    "TaskStatus",
    "TaskBase",
    "TaskCreate",
    "TaskUpdate",
    "Task",
    # Chat
    "MAX_MESSAGE_LENGTH",
    "ChatMessageRequest",
    "ChatMessageResponse",
    # Audits
    "AuditLogCreate",
    "AuditLog",
]
