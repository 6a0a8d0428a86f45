"""Schemas for internship sites and resident assignment."""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel, reject_null
from app.schemas.profile import ProfileBrief


class SiteCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str | None = Field(default=None, max_length=100)
    supervisor: str | None = Field(default=None, max_length=255)
    duration: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: object) -> object:
        # The client sends "" when the field is left empty
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SiteUpdate(SiteCreate):
    name: str | None = Field(default=None, min_length=1, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, v: object) -> object:
        return reject_null(v)


class SiteRead(CamelModel):
    id: str
    name: str
    type: str | None = None
    supervisor: str | None = None
    duration: str | None = None
    address: str | None = None
    city: str | None = None
    phone: str | None = None
    email: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    created_at: datetime
    residents: list[ProfileBrief] = []


class AssignResidentRequest(CamelModel):
    resident_id: str = Field(..., min_length=1, max_length=36)
