from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Teamspace(Base):
    __tablename__ = 'teamspaces'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=True)
    created_by = Column(Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    project = relationship("Project", back_populates="teamspaces")
    memberships = relationship("TeamspaceMembership", back_populates="teamspace", cascade="all, delete-orphan")
    tasks = relationship("Task", back_populates="teamspace", cascade="all, delete-orphan")
    chats = relationship("Chat", back_populates="teamspace", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint('project_id', 'name', name='uq_teamspaces_project_id_name'),
    )


class TeamspaceMembership(Base):
    __tablename__ = 'teamspace_members'
    teamspace_id = Column(Integer, ForeignKey('teamspaces.id', ondelete='CASCADE'), primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    role = Column(String(20), nullable=False)  # 'owner'|'admin'|'editor'|'viewer'
    can_read = Column(Boolean, nullable=False, default=True)
    can_write = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    teamspace = relationship("Teamspace", back_populates="memberships")
    user = relationship("User", lazy="joined")

    __table_args__ = (
        Index('idx_teamspace_members_user_id', 'user_id'),
        CheckConstraint("role in ('owner','admin','editor','viewer')", name='ck_teamspace_members_role'),
    )

    @property
    def username(self):
        return self.user.username if self.user is not None else None

    @property
    def display_name(self):
        return self.user.display_name if self.user is not None else None
