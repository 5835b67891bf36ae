"""
Teamspace chat endpoints.

Members list the conversation oldest-first and post new messages; the sender
is the authenticated user and the timestamp is assigned server-side.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from collab.db import schemas
from collab.api.deps import get_chat_service, get_current_user_context
from collab.api.permissions import can_read_teamspace
from collab.services.chat_service import ChatService

logger = logging.getLogger("collab.chat")

router = APIRouter(prefix="/api/teamspaces/{teamspace_id}/chat", tags=["chat"])


def _require_chat_access(chat_service: ChatService, teamspace_id: int, current_user: dict) -> None:
    # Unknown teamspaces are reported as 404 before membership is considered
    chat_service.ensure_teamspace(teamspace_id)
    if not can_read_teamspace(teamspace_id, current_user):
        logger.warning("chat_access_denied: teamspace=%s user=%s", teamspace_id, current_user.get("username"))
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a member of this teamspace")


@router.get("", response_model=List[schemas.ChatMessageResponse])
def get_teamspace_chat(
    teamspace_id: int,
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    chat_service: ChatService = Depends(get_chat_service),
    user_context = Depends(get_current_user_context),
):
    _, current_user = user_context
    _require_chat_access(chat_service, teamspace_id, current_user)
    return chat_service.get_teamspace_chat(teamspace_id, skip=skip, limit=limit, check_exists=False)


@router.post("", response_model=schemas.ChatMessageResponse, status_code=status.HTTP_201_CREATED)
def add_chat_message(
    teamspace_id: int,
    chat_message_request: schemas.ChatMessageRequest,
    chat_service: ChatService = Depends(get_chat_service),
    user_context = Depends(get_current_user_context),
):
    user, current_user = user_context
    _require_chat_access(chat_service, teamspace_id, current_user)
    return chat_service.add_chat_message(teamspace_id, chat_message_request, user.username, check_exists=False)
