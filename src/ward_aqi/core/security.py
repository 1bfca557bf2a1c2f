"""Password hashing and bearer tokens for dashboard accounts."""

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import jwt
from jwt.exceptions import PyJWTError

if TYPE_CHECKING:
    from passlib.context import CryptContext

from .config import settings

# pbkdf2_sha256 has no bcrypt 72-byte limit; the context is built on first use
_pwd_context: "CryptContext | None" = None


def _get_pwd_context() -> "CryptContext":
    global _pwd_context
    if _pwd_context is None:
        from passlib.context import CryptContext

        _pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
    return _pwd_context


def hash_password(password: str) -> str:
    """Hash a password with a random salt."""
    return _get_pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored hash."""
    return _get_pwd_context().verify(plain_password, hashed_password)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a bearer token for ``data`` that expires after ``expires_delta``.

    Defaults to the configured token lifetime.
    """
    lifetime = expires_delta or timedelta(minutes=settings.jwt_expiration_minutes)
    payload = {**data, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Return the token's claims, or None if it is invalid or expired."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except PyJWTError:
        return None
