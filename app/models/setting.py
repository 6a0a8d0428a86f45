"""ORM model for portal-wide key/value settings."""

from sqlalchemy import Column, DateTime, String, Text

from app.models.base import Base, new_id, utcnow


class Setting(Base):
    __tablename__ = "settings"

    id = Column(String(36), primary_key=True, default=new_id)
    key = Column(String(100), nullable=False, unique=True, index=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
