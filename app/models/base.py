"""SQLAlchemy declarative Base and shared model configuration."""

import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def new_id() -> str:
    """Opaque, globally unique primary key."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)
