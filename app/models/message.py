"""ORM model for broadcast messages. Immutable once created; read state is client-side."""

from sqlalchemy import Column, DateTime, String, Text

from app.models.base import Base, new_id, utcnow


class Message(Base):
    """
    sender is a denormalized display name, not a foreign key.

    priority: 'urgent', 'important' or 'info'
    type: 'broadcast', 'alert' or 'general' (optional)
    """

    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=new_id)
    sender = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)
    subject = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    priority = Column(String(20), nullable=False, default="info")
    type = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
