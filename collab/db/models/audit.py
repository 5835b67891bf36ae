from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import JSONB
from .base import Base, now_utc


class AuditLog(Base):
    __tablename__ = 'audit_logs'
    id = Column(Integer, primary_key=True, autoincrement=True)
    teamspace_id = Column(Integer, ForeignKey('teamspaces.id', ondelete='SET NULL'), nullable=True)
    actor_user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    action_type = Column(Text, nullable=False)
    target_type = Column(Text, nullable=True)
    target_id = Column(Integer, nullable=True)
    status = Column(Text, nullable=False)
    # Non-reserved Python attribute name; DB column stays 'metadata'
    metadata_json = Column('metadata', JSONB, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('ix_audit_logs_teamspace_id_created_at', 'teamspace_id', 'created_at'),
        Index('ix_audit_logs_actor_user_id_created_at', 'actor_user_id', 'created_at'),
        Index('ix_audit_logs_action_type', 'action_type'),
    )
