"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# Max lengths for username and password validation.
USERNAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 128

# Claims every access token must carry.
REQUIRED_CLAIMS = ["id", "role", "exp"]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Verified against when the username does not exist, so an unknown account
# costs the same bcrypt work as a wrong password.
DUMMY_PASSWORD_HASH: str = hash_password("storefront-timing-equalization")


def create_access_token(
    user_id: str | int,
    username: str,
    role: str,
    now: datetime | None = None,
) -> str:
    """
    Create a JWT access token.

    Claims: id (account id as string), user (username), role, iat and
    exp = iat + JWT_EXPIRE_MINUTES.
    """
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "id": str(user_id),
        "user": username,
        "role": role,
        "iat": issued_at,
        "exp": expire,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (id, user, role, iat, exp).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": REQUIRED_CLAIMS},
    )
