"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_ordering.adapters.supabase_queries import (
    UNIQUE_VIOLATION,
    encode_row,
    execute,
    parse_timestamp,
)
from food_ordering.domain.errors import ConflictError, UpstreamError
from food_ordering.domain.models import UserRecord
from food_ordering.services.assets import parse_image
from food_ordering.services.users import UserRepository

_TABLE = "users"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        return self._find_one("id", str(user_id))

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with the email, if present."""
        return self._find_one("email", email)

    def get_by_name(self, name: str) -> UserRecord | None:
        """Return the user with the given name, if present."""
        return self._find_one("name", name)

    def list_users(self) -> list[UserRecord]:
        """Return every user."""
        response = execute(
            self.client.table(_TABLE).select("*").order("created_at"), "list users"
        )
        return [_parse_user(row) for row in response.data or []]

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Insert a user row and return it."""
        response = execute(
            self.client.table(_TABLE).insert(encode_row(payload)),
            "insert user",
            errors={UNIQUE_VIOLATION: ConflictError("User already exists")},
        )
        if not response.data:
            raise UpstreamError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Update a user row and return it."""
        response = execute(
            self.client.table(_TABLE)
            .update(encode_row(payload))
            .eq("id", str(user_id)),
            "update user",
            errors={UNIQUE_VIOLATION: ConflictError("User already exists")},
        )
        if not response.data:
            raise UpstreamError("Failed to update user in Supabase")
        return _parse_user(response.data[0])

    def delete_user(self, user_id: UUID) -> None:
        """Delete a user row."""
        execute(
            self.client.table(_TABLE).delete().eq("id", str(user_id)), "delete user"
        )

    def _find_one(self, column: str, value: str) -> UserRecord | None:
        response = execute(
            self.client.table(_TABLE).select("*").eq(column, value).limit(1),
            "select user",
        )
        if response.data:
            return _parse_user(response.data[0])
        return None


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a user row into a domain model."""
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        password_hash=str(row.get("password_hash", "")),
        bio=row.get("bio"),
        status=row.get("status"),
        image=parse_image(row.get("image_url"), row.get("image_handle")),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
