"""User lookup use case, gated by the caller's identity."""
from __future__ import annotations

from drivepark.core.auth import Authenticated, Identity
from drivepark.db.models import User
from drivepark.repositories.sql_repository import SQLRepository


class UserError(Exception):
    """Base exception for user lookups."""


class UnauthorizedError(UserError):
    """Raised when the caller has no valid identity."""


class UserNotFoundError(UserError):
    """Raised when no user has the requested id."""


def _iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def public_profile(entity: User) -> dict:
    return {
        "id": entity.id,
        "email": entity.email,
        "firstName": entity.first_name,
        "lastName": entity.last_name,
        "avatarUrl": entity.avatar_url,
        "role": entity.role,
        "createdAt": _iso(entity.created_at),
    }


class UserService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def get_user(self, identity: Identity, user_id: str) -> dict:
        if not isinstance(identity, Authenticated):
            raise UnauthorizedError("Authentication required")
        entity = self.repository.get_user(user_id)
        if not entity:
            raise UserNotFoundError(f"User {user_id} not found")
        return public_profile(entity)
