"""
Chat service: lists and posts teamspace chat messages.

Sits between the chat router and the chat/user repositories, resolving the
sender by username and mapping `Chat` rows to response DTOs.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from collab.db import models, schemas
from collab.db.models import as_utc, now_utc
from collab.db.repositories import chats as chat_repo
from collab.db.repositories import teamspaces as teamspace_repo
from collab.db.repositories import users as user_repo
from collab.services.errors import TeamspaceNotFoundError, UserNotFoundError

logger = logging.getLogger("collab.chat")


class ChatService:
    """Service class for teamspace chat operations.

    Repositories are injected so tests can substitute mocks; by default the
    module-level repository functions are used.
    """

    def __init__(self, db: Session, chat_repository=None, user_repository=None, teamspace_repository=None):
        self.db = db
        self.chat_repository = chat_repository or chat_repo
        self.user_repository = user_repository or user_repo
        self.teamspace_repository = teamspace_repository or teamspace_repo

    def get_teamspace_chat(
        self,
        teamspace_id: int,
        skip: int = 0,
        limit: Optional[int] = None,
        check_exists: bool = True,
    ) -> List[schemas.ChatMessageResponse]:
        """Return the teamspace's messages in chronological order.

        Callers that already ran `ensure_teamspace` pass check_exists=False.
        """
        if check_exists:
            self.ensure_teamspace(teamspace_id)
        chats = self.chat_repository.find_by_teamspace_id_order_by_timestamp_asc(
            self.db, teamspace_id, skip=skip, limit=limit
        )
        return [self.map_chat_to_response(chat) for chat in chats]

    def add_chat_message(
        self,
        teamspace_id: int,
        chat_message_request: schemas.ChatMessageRequest,
        username: str,
        check_exists: bool = True,
    ) -> schemas.ChatMessageResponse:
        """Persist a message from `username` with a server-assigned timestamp.

        Raises:
            UserNotFoundError: no user has this username
            TeamspaceNotFoundError: the teamspace does not exist
        """
        sender = self.user_repository.get_user_by_username(self.db, username)
        if sender is None:
            raise UserNotFoundError()
        if check_exists:
            self.ensure_teamspace(teamspace_id)

        chat = models.Chat(
            message=chat_message_request.message,
            timestamp=now_utc(),
            teamspace_id=teamspace_id,
            sender=sender,
        )
        saved_chat = self.chat_repository.save(self.db, chat)
        logger.info("chat_message_posted: teamspace=%s sender=%s id=%s", teamspace_id, username, saved_chat.id)
        return self.map_chat_to_response(saved_chat)

    @staticmethod
    def map_chat_to_response(chat: models.Chat) -> schemas.ChatMessageResponse:
        return schemas.ChatMessageResponse(
            id=chat.id,
            message=chat.message,
            timestamp=as_utc(chat.timestamp),
            teamspace_id=chat.teamspace_id,
            sender_id=chat.sender.id,
            sender_username=chat.sender.username,
        )

    def ensure_teamspace(self, teamspace_id: int) -> None:
        """Raise TeamspaceNotFoundError unless the teamspace exists."""
        if not self.teamspace_repository.teamspace_exists(self.db, teamspace_id):
            raise TeamspaceNotFoundError()
