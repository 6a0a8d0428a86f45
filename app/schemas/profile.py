"""Schemas for profiles and the approval workflow."""

from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.auth import ProfileStatus, Role
from app.schemas.common import CamelModel, reject_null


class ProfileRead(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    year: str | None = None
    hospital: str | None = None
    site_id: str | None = None
    role: Role
    status: ProfileStatus
    avatar: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ProfileBrief(CamelModel):
    """Embedded profile reference (residents of a site, payers of a contribution)."""

    id: str
    first_name: str
    last_name: str
    email: str | None = None
    year: str | None = None
    hospital: str | None = None


class ProfileSelfUpdate(CamelModel):
    """Fields a member may change on their own profile."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    year: str | None = Field(default=None, max_length=20)
    hospital: str | None = Field(default=None, max_length=255)
    avatar: str | None = Field(default=None, max_length=1024)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def names_not_null(cls, v: object) -> object:
        return reject_null(v)


class ProfileAdminUpdate(ProfileSelfUpdate):
    """Admin edit: any field, including role and status."""

    role: Role | None = None
    status: ProfileStatus | None = None

    @field_validator("role", "status", mode="before")
    @classmethod
    def role_status_not_null(cls, v: object) -> object:
        return reject_null(v)


class ApproveRequest(CamelModel):
    grant_admin: bool = False


class RoleUpdate(CamelModel):
    role: Role


class BulkApproveRequest(CamelModel):
    ids: list[str] = Field(..., min_length=1, max_length=500)
    grant_admin: bool = False


class BulkDeleteRequest(CamelModel):
    ids: list[str] = Field(..., min_length=1, max_length=500)


class BulkResult(CamelModel):
    """Outcome of a bulk operation; ids are processed independently, in order."""

    processed: int
    succeeded: list[str]
    failed: list[str]

    @property
    def ok(self) -> bool:
        return not self.failed
