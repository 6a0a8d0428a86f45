"""Signup, login and token refresh. All routes share the strict auth rate limit."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.deps import DbSession, auth_rate_limit, get_app_settings
from app.core.config import Settings
from app.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RefreshResponse,
    RegisterResponse,
    SignupRequest,
    TokenResponse,
    UserSummary,
)
from app.services import accounts

router = APIRouter(dependencies=[Depends(auth_rate_limit)])


def _summary(user, profile) -> UserSummary:
    return UserSummary(
        id=profile.id,
        email=user.email,
        first_name=profile.first_name,
        last_name=profile.last_name,
        role=profile.role,
        status=profile.status,
    )


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: DbSession,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenResponse:
    """Create a User and its Profile atomically and return a token for the new account."""
    user, profile = accounts.signup(db, body, status=settings.SIGNUP_DEFAULT_STATUS)
    return TokenResponse(token=accounts.issue_token(user), user=_summary(user, profile))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: SignupRequest,
    db: DbSession,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RegisterResponse:
    """Same as signup, but no token: the account waits for an admin's approval."""
    user, profile = accounts.signup(db, body, status=settings.SIGNUP_DEFAULT_STATUS)
    message = (
        "Registration complete. Your request is awaiting approval."
        if profile.status == "pending"
        else "Registration complete."
    )
    return RegisterResponse(message=message, user=_summary(user, profile))


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: DbSession) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user, profile = accounts.authenticate(db, body.email, body.password)
    return TokenResponse(token=accounts.issue_token(user), user=_summary(user, profile))


@router.post("/refresh", response_model=RefreshResponse)
def refresh(body: RefreshRequest, db: DbSession) -> RefreshResponse:
    """Reissue a token from a valid or recently expired one."""
    return RefreshResponse(token=accounts.refresh(db, body.token))
