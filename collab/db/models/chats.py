from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base


class Chat(Base):
    __tablename__ = 'chats'
    id = Column(Integer, primary_key=True, autoincrement=True)
    message = Column(String(255), nullable=False)
    # Server-assigned; drives chronological ordering
    timestamp = Column(DateTime(timezone=True), nullable=False)
    teamspace_id = Column(Integer, ForeignKey('teamspaces.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    teamspace = relationship("Teamspace", back_populates="chats")
    sender = relationship("User", lazy="joined")

    __table_args__ = (
        Index('idx_chats_teamspace_id_timestamp', 'teamspace_id', 'timestamp'),
    )
