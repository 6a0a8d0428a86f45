"""Schemas for key/value settings."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class SettingUpdate(CamelModel):
    value: str = Field(..., max_length=10_000)


class SettingRead(CamelModel):
    id: str
    key: str
    value: str | None = None
    updated_at: datetime
