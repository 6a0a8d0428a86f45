"""Schemas for the contribution ledger. Amounts are Decimal in, float out."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, reject_null
from app.schemas.profile import ProfileBrief

ContributionStatus = Literal["pending", "paid", "overdue"]


class ContributionCreate(CamelModel):
    profile_id: str = Field(..., min_length=1, max_length=36)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    month: str | None = Field(default=None, max_length=20)
    year: str | None = Field(default=None, max_length=10)
    status: ContributionStatus = "pending"
    payment_method: str | None = Field(default=None, max_length=50)
    payment_date: datetime | None = None


class ContributionUpdate(CamelModel):
    profile_id: str | None = Field(default=None, min_length=1, max_length=36)
    amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    month: str | None = Field(default=None, max_length=20)
    year: str | None = Field(default=None, max_length=10)
    status: ContributionStatus | None = None
    payment_method: str | None = Field(default=None, max_length=50)
    payment_date: datetime | None = None

    @field_validator("profile_id", "amount", "status", mode="before")
    @classmethod
    def required_not_null(cls, v: object) -> object:
        return reject_null(v)


class ContributionStatusUpdate(CamelModel):
    status: ContributionStatus


class ContributionRead(CamelModel):
    id: str
    profile_id: str
    amount: float
    month: str | None = None
    year: str | None = None
    status: ContributionStatus
    payment_method: str | None = None
    payment_date: datetime | None = None
    created_at: datetime
    profile: ProfileBrief | None = None
