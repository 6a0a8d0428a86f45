"""Credential store: signup, login and token refresh."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import AppError, AuthenticationError, ConflictError, NotFoundError
from app.core.security import (
    TokenError,
    create_access_token,
    decode_refreshable_token,
    hash_password,
    verify_password,
)
from app.models import Profile, Setting, User
from app.schemas.auth import SignupRequest

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "app_name": "AMIS RIM TOGO",
    "monthly_contribution": "5000",
    "currency": "FCFA",
    "academic_year": "2025-2026",
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_user_by_email(db: Session, email: str) -> User | None:
    """Case-insensitive lookup."""
    return (
        db.query(User)
        .filter(func.lower(User.email) == normalize_email(email))
        .first()
    )


def count_users(db: Session) -> int:
    return db.query(User).count()


def signup(db: Session, payload: SignupRequest, status: str = "pending") -> tuple[User, Profile]:
    """
    Create a User and its Profile in one transaction.

    Raises ConflictError (400 USER_EXISTS) for a duplicate email. If the profile
    insert fails, the user insert is rolled back with it.
    """
    email = normalize_email(payload.email)
    if find_user_by_email(db, email) is not None:
        raise ConflictError("User already exists", status_code=400, code="USER_EXISTS")

    user = User(email=email, password_hash=hash_password(payload.password))
    profile = Profile(
        user=user,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=email,
        phone=payload.phone,
        year=payload.year,
        hospital=payload.hospital,
        role="resident",
        status=status,
    )
    try:
        db.add(user)
        db.flush()
        db.add(profile)
        db.flush()
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if find_user_by_email(db, email) is not None:
            # Lost a race with a concurrent signup for the same email
            raise ConflictError("User already exists", status_code=400, code="USER_EXISTS") from e
        logger.exception("Signup transaction rolled back for %s", email)
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Signup transaction rolled back for %s", email)
        raise
    db.refresh(user)
    db.refresh(profile)
    logger.info("New signup: profile=%s status=%s", profile.id, profile.status)
    return user, profile


def authenticate(db: Session, email: str, password: str) -> tuple[User, Profile]:
    """Verify credentials; return the user and profile or raise 401 INVALID_CREDENTIALS."""
    user = find_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", normalize_email(email))
        raise AppError("Invalid credentials", status_code=401, code="INVALID_CREDENTIALS")
    if user.profile is None:
        raise NotFoundError("Profile not found", code="PROFILE_NOT_FOUND")
    logger.info("Login: profile=%s", user.profile.id)
    return user, user.profile


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.email)


def refresh(db: Session, token: str | None) -> str:
    """Reissue a token from a valid or recently expired one for a user that still exists."""
    if not token:
        raise AppError("Token required", status_code=400, code="TOKEN_REQUIRED")
    try:
        payload = decode_refreshable_token(token)
    except TokenError as e:
        raise AuthenticationError("Invalid token", code="INVALID_TOKEN") from e

    user = db.get(User, payload["sub"])
    if user is None:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")
    return issue_token(user)


def ensure_admin(
    db: Session,
    email: str,
    password: str,
    first_name: str = "Admin",
    last_name: str = "AMIS RIM",
) -> tuple[Profile, bool]:
    """Create an approved admin account unless the email is taken; return (profile, created)."""
    existing = find_user_by_email(db, email)
    if existing is not None:
        return existing.profile, False
    email = normalize_email(email)
    user = User(email=email, password_hash=hash_password(password))
    profile = Profile(
        user=user,
        first_name=first_name,
        last_name=last_name,
        email=email,
        role="admin",
        status="approved",
    )
    db.add(user)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile, True


def seed_default_settings(db: Session) -> int:
    """Upsert the portal's default settings; return how many keys were written."""
    for key, value in DEFAULT_SETTINGS.items():
        row = db.query(Setting).filter(Setting.key == key).first()
        if row is None:
            db.add(Setting(key=key, value=value))
        else:
            row.value = value
    db.commit()
    return len(DEFAULT_SETTINGS)
