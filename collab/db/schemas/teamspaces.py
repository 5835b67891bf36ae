from datetime import datetime
from pydantic import Field, field_validator

from collab.utils.role_permissions import RoleEnum
from .common import CamelModel, OrmCamelModel


class TeamspaceBase(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    description: str | None = None


class TeamspaceCreate(TeamspaceBase):
    project_id: int | None = None


class TeamspaceUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, v):
        # Omit the field to keep the current name
        if v is None:
            raise ValueError("name cannot be null")
        return v


class Teamspace(OrmCamelModel):
    id: int
    name: str
    description: str | None = None
    project_id: int | None = None
    created_by: int | None = None
    created_at: datetime
    updated_at: datetime


class TeamspaceMemberCreate(CamelModel):
    username: str = Field(min_length=1)
    role: RoleEnum = RoleEnum.editor


class TeamspaceMemberUpdate(CamelModel):
    role: RoleEnum | None = None
    can_read: bool | None = None
    can_write: bool | None = None


class TeamspaceMember(OrmCamelModel):
    teamspace_id: int
    user_id: int
    username: str
    display_name: str | None = None
    role: str
    can_read: bool
    can_write: bool
    created_at: datetime
