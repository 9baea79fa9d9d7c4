"""Supabase implementation for menu categories."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_ordering.adapters.supabase_queries import (
    FOREIGN_KEY_VIOLATION,
    encode_row,
    execute,
    parse_timestamp,
)
from food_ordering.domain.errors import ConflictError, UpstreamError
from food_ordering.domain.models import CategoryRecord
from food_ordering.services.assets import parse_image
from food_ordering.services.categories import CategoryRepository

_TABLE = "categories"


@dataclass
class SupabaseCategoryRepository(CategoryRepository):
    """Supabase-backed repository for categories."""

    client: Client

    def get_category(self, category_id: UUID) -> CategoryRecord | None:
        """Return a category by id, if present."""
        response = execute(
            self.client.table(_TABLE).select("*").eq("id", str(category_id)).limit(1),
            "select category",
        )
        if not response.data:
            return None
        return parse_category(response.data[0])

    def list_categories(self) -> list[CategoryRecord]:
        """Return every category."""
        response = execute(
            self.client.table(_TABLE).select("*").order("created_at"),
            "list categories",
        )
        return [parse_category(row) for row in response.data or []]

    def create_category(self, payload: dict[str, object]) -> CategoryRecord:
        """Insert a category and return it."""
        response = execute(
            self.client.table(_TABLE).insert(encode_row(payload)), "insert category"
        )
        if not response.data:
            raise UpstreamError("Failed to create category")
        return parse_category(response.data[0])

    def update_category(
        self, category_id: UUID, payload: dict[str, object]
    ) -> CategoryRecord:
        """Update a category and return it."""
        response = execute(
            self.client.table(_TABLE)
            .update(encode_row(payload))
            .eq("id", str(category_id)),
            "update category",
        )
        if not response.data:
            raise UpstreamError("Failed to update category")
        return parse_category(response.data[0])

    def delete_category(self, category_id: UUID) -> None:
        """Delete a category row."""
        execute(
            self.client.table(_TABLE).delete().eq("id", str(category_id)),
            "delete category",
            errors={
                FOREIGN_KEY_VIOLATION: ConflictError("Category still has food items")
            },
        )

    def has_food_items(self, category_id: UUID) -> bool:
        """Return true when any food item references the category."""
        response = execute(
            self.client.table("food_items")
            .select("id")
            .eq("category_id", str(category_id))
            .limit(1),
            "select food items by category",
        )
        return bool(response.data)


def parse_category(row: dict[str, object]) -> CategoryRecord:
    """Parse a category row into a domain model."""
    return CategoryRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        description=row.get("description"),
        image=parse_image(row.get("image_url"), row.get("image_handle")),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
