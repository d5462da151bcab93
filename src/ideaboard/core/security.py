"""Password hashing and access-token helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from ideaboard.core.errors import AuthenticationFailed
from ideaboard.core.settings import settings


def hash_password(password: str) -> str:
    """Return a bcrypt hash of ``password``."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    user_id: int,
    *,
    username: str | None = None,
    avatar: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token carrying the identity id, handle and avatar."""
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "avatar": avatar,
        "exp": expire,
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises:
        AuthenticationFailed: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise AuthenticationFailed("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise AuthenticationFailed("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise AuthenticationFailed("Could not validate credentials") from err
