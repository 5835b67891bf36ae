from datetime import datetime
from pydantic import field_validator

from .common import CamelModel, OrmCamelModel


class UserPublic(OrmCamelModel):
    id: int
    username: str
    display_name: str | None = None


class User(UserPublic):
    email: str | None = None
    is_superadmin: bool
    created_at: datetime
    updated_at: datetime


class UserCreate(CamelModel):
    username: str
    email: str | None = None
    display_name: str | None = None


class UserUpdate(CamelModel):
    display_name: str | None = None
    email: str | None = None

    @field_validator("display_name")
    @classmethod
    def _validate_display_name(cls, v):
        if v is None:
            return v
        s = v.strip()
        if len(s) == 0 or len(s) > 80:
            raise ValueError("display_name must be 1..80 characters")
        return s

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v):
        if v is None:
            return v
        s = v.strip().lower()
        if "@" not in s:
            raise ValueError("email must contain '@'")
        return s


class MembershipSummary(CamelModel):
    teamspace_id: int
    teamspace_name: str | None = None
    role: str
    can_read: bool
    can_write: bool


class CurrentUser(User):
    memberships: list[MembershipSummary] = []
