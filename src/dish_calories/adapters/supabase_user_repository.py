"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from dish_calories.domain.models import UserRecord
from dish_calories.services.users import UserRepository

_USER_COLUMNS = (
    "id, email, first_name, last_name, password_hash, created_at, last_login_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for an email, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def create_user(
        self, email: str, first_name: str, last_name: str, password_hash: str
    ) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "email": email,
                    "first_name": first_name,
                    "last_name": last_name,
                    "password_hash": password_hash,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _to_user(response.data[0])

    def touch_last_login(self, user_id: UUID, logged_in_at: datetime) -> UserRecord:
        """Update the last_login_at timestamp for a user."""
        response = (
            self.client.table("users")
            .update({"last_login_at": logged_in_at.isoformat()})
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user login in Supabase")
        return _to_user(response.data[0])


def _to_user(row: dict[str, object]) -> UserRecord:
    last_login_at = row.get("last_login_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        email=str(row["email"]),
        first_name=str(row["first_name"]),
        last_name=str(row["last_name"]),
        password_hash=str(row["password_hash"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        last_login_at=(
            datetime.fromisoformat(str(last_login_at)) if last_login_at else None
        ),
    )
