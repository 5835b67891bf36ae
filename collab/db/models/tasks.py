from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Task(Base):
    __tablename__ = 'tasks'
    id = Column(Integer, primary_key=True, autoincrement=True)
    teamspace_id = Column(Integer, ForeignKey('teamspaces.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default='todo')  # todo|in_progress|done
    assignee_id = Column(Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_by = Column(Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    teamspace = relationship("Teamspace", back_populates="tasks")
    assignee = relationship("User", foreign_keys=[assignee_id])

    __table_args__ = (
        Index('idx_tasks_teamspace_id_status', 'teamspace_id', 'status'),
        CheckConstraint("status in ('todo','in_progress','done')", name='ck_tasks_status'),
    )
