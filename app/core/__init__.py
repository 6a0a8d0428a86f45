"""Core app configuration, database access, security and the error types."""

from app.core.config import Settings, get_settings, settings
from app.core.database import get_db
from app.core.errors import AppError

__all__ = ["AppError", "Settings", "get_settings", "get_db", "settings"]
