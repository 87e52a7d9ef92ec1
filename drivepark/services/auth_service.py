"""
Login use case: check the password and issue a bearer access token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from drivepark.core.security import create_access_token, verify_password
from drivepark.repositories.sql_repository import SQLRepository
from drivepark.services.user_service import public_profile

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base class for authentication-related exceptions."""


class InvalidCredentialsError(AuthError):
    pass


@dataclass
class LoginSuccess:
    access_token: str
    user: dict
    token_type: str = "bearer"


@dataclass
class AuthService:
    """Handles the password login flow."""

    repository: SQLRepository | None = None

    def __post_init__(self):
        if self.repository is None:
            self.repository = SQLRepository()

    def login(self, email: str, password: str) -> LoginSuccess:
        user = self.repository.get_user_by_email(email)
        if not user or not verify_password(password or "", user.password_hash):
            logger.info("failed login for %s", (email or "").strip().lower())
            raise InvalidCredentialsError("Invalid email or password")
        token = create_access_token(user.id, extra_claims={"role": user.role})
        return LoginSuccess(access_token=token, user=public_profile(user))
