from datetime import datetime
from enum import Enum
from pydantic import Field, field_validator

from .common import CamelModel, OrmCamelModel


class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    done = "done"


class TaskBase(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus = TaskStatus.todo
    assignee_id: int | None = None
    due_date: datetime | None = None


class TaskCreate(TaskBase):
    pass


class TaskUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus | None = None
    assignee_id: int | None = None
    due_date: datetime | None = None

    @field_validator("title", "status")
    @classmethod
    def _not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class Task(OrmCamelModel):
    id: int
    teamspace_id: int
    title: str
    description: str | None = None
    status: TaskStatus
    assignee_id: int | None = None
    created_by: int | None = None
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
