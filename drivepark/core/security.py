"""Security helpers (password hashing and bearer access tokens)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from argon2 import PasswordHasher, exceptions as argon_exc

from drivepark.core.config import get_settings

_ph = PasswordHasher()


class InvalidAccessToken(Exception):
    """Raised when a bearer token cannot be decoded or is expired."""


def hash_password(password: str) -> str:
    return _ph.hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    if not stored_hash:
        return False
    try:
        return _ph.verify(stored_hash, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


def create_access_token(subject: str, *, extra_claims: dict[str, Any] | None = None) -> str:
    """Issue a signed JWT whose `sub` is the user id."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = dict(extra_claims or {})
    payload.update(
        {
            "sub": subject,
            "iat": now,
            "exp": now + timedelta(seconds=max(60, settings.jwt_ttl_seconds)),
        }
    )
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidAccessToken(str(exc)) from exc
    if not payload.get("sub"):
        raise InvalidAccessToken("missing subject")
    return payload
