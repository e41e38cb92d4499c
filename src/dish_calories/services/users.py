"""User registration and login."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from dish_calories.domain.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from dish_calories.domain.models import AuthSession, UserRecord
from dish_calories.services.security import TokenService, hash_password, verify_password

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for an email, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""

    def create_user(
        self, email: str, first_name: str, last_name: str, password_hash: str
    ) -> UserRecord:
        """Create and return a new user record."""

    def touch_last_login(self, user_id: UUID, logged_in_at: datetime) -> UserRecord:
        """Update and return the user with a new last login timestamp."""


@dataclass
class UserService:
    """Application service for registration, login and token checks."""

    repository: UserRepository
    token_service: TokenService

    def register(
        self, first_name: str, last_name: str, email: str, password: str
    ) -> AuthSession:
        """Create a user and issue a token."""
        normalized = normalize_email(email)
        if self.repository.get_by_email(normalized):
            raise EmailAlreadyRegisteredError("User with this email already exists")

        user = self.repository.create_user(
            email=normalized,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            password_hash=hash_password(password),
        )
        _logger.info("New user registered: %s", normalized)
        return AuthSession(user=user, token=self.token_service.issue(user))

    def login(self, email: str, password: str) -> AuthSession:
        """Verify credentials, record the login and issue a token."""
        normalized = normalize_email(email)
        user = self.repository.get_by_email(normalized)
        if user is None or not verify_password(password, user.password_hash):
            _logger.info("Failed login attempt: %s", normalized)
            raise InvalidCredentialsError("Invalid email or password")

        user = self.repository.touch_last_login(user.id, datetime.now(tz=UTC))
        _logger.info("User logged in: %s", normalized)
        return AuthSession(user=user, token=self.token_service.issue(user))

    def authenticate(self, token: str) -> UserRecord:
        """Return the user a token was issued for."""
        claims = self.token_service.decode(token)
        try:
            user_id = UUID(str(claims.get("sub")))
        except ValueError as exc:
            raise InvalidTokenError("Invalid token subject") from exc
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise InvalidTokenError("User not found")
        return user


def normalize_email(email: str) -> str:
    """Return the canonical stored form of an email."""
    return email.strip().lower()
