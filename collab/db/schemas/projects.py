from datetime import datetime
from pydantic import Field, field_validator

from .common import CamelModel, OrmCamelModel


class ProjectBase(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    description: str | None = None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, v):
        if v is None:
            raise ValueError("name cannot be null")
        return v


class Project(OrmCamelModel):
    id: int
    name: str
    description: str | None = None
    owner_id: int
    created_at: datetime
    updated_at: datetime
