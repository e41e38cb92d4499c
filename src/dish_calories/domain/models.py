"""Domain models for user accounts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    password_hash: str
    created_at: datetime
    last_login_at: datetime | None = None


@dataclass(frozen=True)
class AuthSession:
    """Authenticated user with an issued access token."""

    user: UserRecord
    token: str
