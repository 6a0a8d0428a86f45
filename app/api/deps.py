"""Request dependencies: authorization gate, rate limiting and shared app state."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.errors import AuthenticationError, AuthorizationError, RateLimitError
from app.core.ratelimit import AUTH_KEY_PREFIX, FixedWindowRateLimiter, client_ip
from app.core.security import TokenExpired, TokenInvalid, decode_access_token
from app.models import Profile
from app.realtime import RealtimeHub
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_hub(request: Request) -> RealtimeHub:
    return request.app.state.hub


def get_upload_dir(request: Request) -> Path:
    return Path(request.app.state.settings.UPLOAD_DIR)


def _resolve_user(token: str, db: Session) -> CurrentUser:
    try:
        payload = decode_access_token(token)
    except TokenExpired:
        raise AuthenticationError("Token expired", code="TOKEN_EXPIRED")
    except TokenInvalid:
        raise AuthenticationError("Invalid token", code="INVALID_TOKEN")

    profile = db.query(Profile).filter(Profile.user_id == payload["sub"]).first()
    if profile is None:
        raise AuthenticationError("User not found", code="USER_NOT_FOUND")
    return CurrentUser(
        id=profile.id,
        user_id=profile.user_id,
        email=profile.email or payload.get("email") or "",
        role=profile.role,
    )


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT bound to an existing profile. Raises 401 otherwise."""
    if credentials is None:
        raise AuthenticationError("No token provided", code="NO_TOKEN")
    user = _resolve_user(credentials.credentials, db)
    request.state.user = user
    return user


def get_optional_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser | None:
    """Dependency: like get_current_user, but any failure proceeds anonymously."""
    if credentials is None:
        return None
    try:
        user = _resolve_user(credentials.credentials, db)
    except AuthenticationError:
        return None
    request.state.user = user
    return user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != "admin":
        raise AuthorizationError("Admin access required")
    return current_user


def auth_rate_limit(request: Request) -> None:
    """Dependency: stricter fixed window for authentication endpoints, keyed apart from the general one."""
    settings: Settings = request.app.state.settings
    limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
    ip = client_ip(request)
    decision = limiter.hit(
        f"{AUTH_KEY_PREFIX}{ip}",
        settings.AUTH_RATE_LIMIT_MAX_REQUESTS,
        settings.AUTH_RATE_LIMIT_WINDOW_SECONDS,
    )
    if not decision.allowed:
        logger.warning("Auth rate limit exceeded for %s", ip)
        raise RateLimitError(
            "Too many authentication attempts. Please try again later.",
            retry_after=decision.retry_after,
        )


DbSession = Annotated[Session, Depends(get_db)]
AuthUser = Annotated[CurrentUser, Depends(get_current_user)]
AdminUser = Annotated[CurrentUser, Depends(require_admin)]
Hub = Annotated[RealtimeHub, Depends(get_hub)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_optional_user)]
