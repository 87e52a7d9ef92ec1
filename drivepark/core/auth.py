"""
Bearer identity capability.

Every backend request resolves to exactly one of Authenticated or Anonymous.
Services that need a caller take the identity as an argument and check it
themselves.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

from fastapi import Request

from drivepark.core.security import InvalidAccessToken, decode_access_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anonymous:
    is_authenticated = False


@dataclass(frozen=True)
class Authenticated:
    user_id: str
    claims: dict[str, Any] = field(default_factory=dict, compare=False)
    is_authenticated = True


Identity = Union[Authenticated, Anonymous]


def bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_identity(request: Request) -> Identity:
    """FastAPI dependency: decode the bearer token, if any, into an identity."""
    token = bearer_token(request)
    if not token:
        return Anonymous()
    try:
        claims = decode_access_token(token)
    except InvalidAccessToken as exc:
        logger.info("rejected bearer token: %s", exc)
        return Anonymous()
    return Authenticated(user_id=str(claims["sub"]), claims=claims)
