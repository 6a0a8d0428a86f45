"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


class TokenError(Exception):
    """Base class for bearer token failures."""


class TokenInvalid(TokenError):
    """Signature, structure or claims are not acceptable."""


class TokenExpired(TokenError):
    """Token was valid but its exp claim has passed."""


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with sub (user id), email, iat and exp."""
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRE_MINUTES))
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def _decode(token: str, leeway: timedelta | int = 0) -> dict[str, Any]:
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            leeway=leeway,
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpired("Token expired") from e
    except jwt.PyJWTError as e:
        raise TokenInvalid("Invalid token") from e
    if not payload.get("sub"):
        raise TokenInvalid("Invalid token payload")
    return payload


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, email, exp, iat).
    Raises TokenExpired when exp has passed and TokenInvalid for anything else.
    """
    return _decode(token)


def decode_refreshable_token(token: str) -> dict[str, Any]:
    """Like decode_access_token, but tolerate expiry within the refresh grace window."""
    return _decode(token, leeway=timedelta(minutes=settings.JWT_REFRESH_GRACE_MINUTES))
