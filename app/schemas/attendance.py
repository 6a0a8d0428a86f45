"""Schemas for attendance declarations."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.profile import ProfileBrief

ItemType = Literal["staff", "epu", "diu", "stage"]
AttendanceStatus = Literal["pending", "confirmed", "rejected"]


class AttendanceCreate(CamelModel):
    item_type: ItemType
    item_id: str | None = Field(default=None, max_length=36)


class AttendanceValidate(CamelModel):
    status: Literal["confirmed", "rejected"]


class AttendanceRead(CamelModel):
    id: str
    profile_id: str
    item_type: ItemType
    item_id: str | None = None
    status: AttendanceStatus
    created_at: datetime
    profile: ProfileBrief | None = None
