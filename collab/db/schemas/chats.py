from datetime import datetime
from pydantic import field_validator

from .common import CamelModel

MAX_MESSAGE_LENGTH = 255


class ChatMessageRequest(CamelModel):
    """Inbound chat payload; sender and timestamp are assigned by the server."""
    message: str

    @field_validator("message")
    @classmethod
    def _validate_message(cls, v: str):
        s = v.strip()
        if not s:
            raise ValueError("message must not be blank")
        if len(s) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"message must be at most {MAX_MESSAGE_LENGTH} characters")
        return s


class ChatMessageResponse(CamelModel):
    id: int
    message: str
    timestamp: datetime
    teamspace_id: int
    sender_id: int
    sender_username: str
