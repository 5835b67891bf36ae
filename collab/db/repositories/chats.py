"""
Chat repository functions.

Ordered lookup of a teamspace's messages and insertion of new ones.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy.orm import Session

from collab.db import models


def find_by_teamspace_id_order_by_timestamp_asc(
    db: Session,
    teamspace_id: int,
    skip: int = 0,
    limit: Optional[int] = None,
) -> List[models.Chat]:
    """Messages for a teamspace, oldest first (ties broken by id)."""
    q = (
        db.query(models.Chat)
        .filter(models.Chat.teamspace_id == teamspace_id)
        .order_by(models.Chat.timestamp.asc(), models.Chat.id.asc())
    )
    if skip:
        q = q.offset(skip)
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def save(db: Session, chat: models.Chat) -> models.Chat:
    db.add(chat)
    db.commit()
    db.refresh(chat)
    return chat
