"""Schemas for broadcast messages."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.common import CamelModel

Priority = Literal["urgent", "important", "info"]
MessageType = Literal["broadcast", "alert", "general"]


class MessageCreate(CamelModel):
    subject: str | None = Field(default=None, max_length=255)
    content: str = Field(..., min_length=1, max_length=20_000)
    priority: Priority = "info"
    type: MessageType | None = None


class MessageRead(CamelModel):
    id: str
    sender: str
    role: str
    subject: str | None = None
    content: str
    priority: Priority
    type: MessageType | None = None
    created_at: datetime
