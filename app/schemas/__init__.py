"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, LoginRequest, SignupRequest, TokenResponse
from app.schemas.common import CamelModel, ErrorResponse, MessageResponse
from app.schemas.health import HealthResponse
from app.schemas.message import MessageCreate, MessageRead
from app.schemas.profile import BulkResult, ProfileRead

__all__ = [
    "BulkResult",
    "CamelModel",
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageCreate",
    "MessageRead",
    "MessageResponse",
    "ProfileRead",
    "SignupRequest",
    "TokenResponse",
]
