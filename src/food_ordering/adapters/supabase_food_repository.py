"""Supabase implementation for food items."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_ordering.adapters.supabase_category_repository import parse_category
from food_ordering.adapters.supabase_queries import (
    FOREIGN_KEY_VIOLATION,
    UNIQUE_VIOLATION,
    encode_row,
    execute,
    parse_timestamp,
)
from food_ordering.domain.errors import ConflictError, NotFoundError, UpstreamError
from food_ordering.domain.models import FoodItemRecord
from food_ordering.services.assets import parse_image
from food_ordering.services.foods import DUPLICATE_FOOD_ITEM, FoodItemRepository

_TABLE = "food_items"
# Embeds the referenced category row under the "category" key.
_SELECT_WITH_CATEGORY = "*, category:categories(*)"


@dataclass
class SupabaseFoodItemRepository(FoodItemRepository):
    """Supabase-backed repository for food items."""

    client: Client

    def get_food_item(self, food_id: UUID) -> FoodItemRecord | None:
        """Return a food item with its category, if present."""
        response = execute(
            self.client.table(_TABLE)
            .select(_SELECT_WITH_CATEGORY)
            .eq("id", str(food_id))
            .limit(1),
            "select food item",
        )
        if not response.data:
            return None
        return _parse_food_item(response.data[0])

    def find_by_name_and_category(
        self, name: str, category_id: UUID
    ) -> FoodItemRecord | None:
        """Return the item holding a (name, category) pair, if any."""
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("name", name)
            .eq("category_id", str(category_id))
            .limit(1),
            "select food item by name",
        )
        if not response.data:
            return None
        return _parse_food_item(response.data[0])

    def list_food_items(self) -> list[FoodItemRecord]:
        """Return every food item with its category."""
        response = execute(
            self.client.table(_TABLE)
            .select(_SELECT_WITH_CATEGORY)
            .order("created_at"),
            "list food items",
        )
        return [_parse_food_item(row) for row in response.data or []]

    def create_food_item(self, payload: dict[str, object]) -> FoodItemRecord:
        """Insert a food item and return it."""
        response = execute(
            self.client.table(_TABLE).insert(encode_row(payload)),
            "insert food item",
            errors=_write_errors(),
        )
        if not response.data:
            raise UpstreamError("Failed to create food item")
        return _parse_food_item(response.data[0])

    def update_food_item(
        self, food_id: UUID, payload: dict[str, object]
    ) -> FoodItemRecord:
        """Update a food item and return it."""
        response = execute(
            self.client.table(_TABLE)
            .update(encode_row(payload))
            .eq("id", str(food_id)),
            "update food item",
            errors=_write_errors(),
        )
        if not response.data:
            raise UpstreamError("Failed to update food item")
        return _parse_food_item(response.data[0])

    def delete_food_item(self, food_id: UUID) -> None:
        """Delete a food item row."""
        execute(
            self.client.table(_TABLE).delete().eq("id", str(food_id)),
            "delete food item",
        )


def _write_errors() -> dict[str, ConflictError | NotFoundError]:
    return {
        UNIQUE_VIOLATION: ConflictError(DUPLICATE_FOOD_ITEM),
        FOREIGN_KEY_VIOLATION: NotFoundError("Category not found"),
    }


def _parse_food_item(row: dict[str, object]) -> FoodItemRecord:
    """Parse a food item row into a domain model."""
    category_row = row.get("category")
    category = parse_category(category_row) if isinstance(category_row, dict) else None
    return FoodItemRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        description=str(row.get("description", "")),
        price=float(row.get("price", 0.0)),
        category_id=UUID(str(row["category_id"])),
        food_type=str(row.get("type", "")),
        is_vegetarian=bool(row.get("is_vegetarian")),
        available=bool(row.get("available", True)),
        image=parse_image(row.get("image_url"), row.get("image_handle")),
        category=category,
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
