"""Schemas for leisure events, participants and event funds."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, reject_null
from app.schemas.profile import ProfileBrief

EventType = Literal["voyage", "pique-nique", "fete"]
ParticipantStatus = Literal["pending", "approved", "rejected"]
PaymentStatus = Literal["pending", "paid"]


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: EventType | None = None
    event_date: datetime | None = None
    location: str | None = Field(default=None, max_length=255)
    max_participants: int | None = Field(default=None, gt=0)
    cost_per_person: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)


class EventUpdate(EventCreate):
    title: str | None = Field(default=None, min_length=1, max_length=255)

    @field_validator("title", mode="before")
    @classmethod
    def title_not_null(cls, v: object) -> object:
        return reject_null(v)


class ParticipantCreate(CamelModel):
    event_id: str = Field(..., min_length=1, max_length=36)
    profile_id: str = Field(..., min_length=1, max_length=36)
    status: ParticipantStatus = "pending"


class ParticipantStatusUpdate(CamelModel):
    status: ParticipantStatus


class LeisureContributionCreate(CamelModel):
    event_id: str = Field(..., min_length=1, max_length=36)
    profile_id: str = Field(..., min_length=1, max_length=36)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    payment_status: PaymentStatus = "pending"


class ParticipantRead(CamelModel):
    id: str
    event_id: str
    profile_id: str
    status: ParticipantStatus
    created_at: datetime
    profile: ProfileBrief | None = None


class LeisureContributionRead(CamelModel):
    id: str
    event_id: str
    profile_id: str
    amount: float
    payment_status: PaymentStatus
    created_at: datetime
    profile: ProfileBrief | None = None


class EventRead(CamelModel):
    id: str
    title: str
    description: str | None = None
    type: EventType | None = None
    event_date: datetime | None = None
    location: str | None = None
    max_participants: int | None = None
    cost_per_person: float | None = None
    created_by: str | None = None
    created_at: datetime
    participants: list[ParticipantRead] = []
    contributions: list[LeisureContributionRead] = []
