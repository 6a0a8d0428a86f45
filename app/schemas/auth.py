"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import EmailStr, Field, field_validator

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.common import CamelModel

Role = Literal["resident", "admin"]
ProfileStatus = Literal["pending", "approved", "rejected"]


class SignupRequest(CamelModel):
    """Self-service registration: creates a User and its Profile."""

    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    year: str | None = Field(default=None, max_length=20)
    hospital: str | None = Field(default=None, max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class RefreshRequest(CamelModel):
    token: str | None = None


class UserSummary(CamelModel):
    """Profile-level summary returned with tokens; id is the profile id."""

    id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    status: ProfileStatus


class TokenResponse(CamelModel):
    """JWT returned after signup or login. Send it as ``Authorization: Bearer <token>``."""

    token: str
    user: UserSummary


class RefreshResponse(CamelModel):
    token: str


class RegisterResponse(CamelModel):
    message: str
    user: UserSummary


class CurrentUser(CamelModel):
    """Authenticated identity resolved by the authorization gate (id is the profile id)."""

    id: str
    user_id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
