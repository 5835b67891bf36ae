from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import AliasChoices, BaseModel, Field

from .common import OrmCamelModel


class AuditLogCreate(BaseModel):
    action_type: str
    status: str
    target_type: Optional[str] = None
    target_id: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None


class AuditLog(OrmCamelModel):
    id: int
    teamspace_id: Optional[int] = None
    actor_user_id: int
    action_type: str
    status: str
    target_type: Optional[str] = None
    target_id: Optional[int] = None
    # Model stores this under `metadata_json`; SQLAlchemy reserves `metadata`
    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("metadata_json", "metadata"),
        serialization_alias="metadata",
    )
    created_at: datetime
