"""Services for managing food items."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from food_ordering.domain.errors import ConflictError, NotFoundError
from food_ordering.domain.models import Attachment, CategoryRecord, FoodItemRecord
from food_ordering.domain.payloads import FoodItemCreate, FoodItemUpdate, parse_payload
from food_ordering.services.assets import (
    AssetStore,
    discard_asset,
    image_columns,
    persist_with_asset,
    replace_asset,
    upload_attachment,
)
from food_ordering.services.categories import CategoryRepository

logger = logging.getLogger(__name__)

DUPLICATE_FOOD_ITEM = "Food item with this name already exists in this category"

# Payload field name -> storage column.
_COLUMNS = {
    "name": "name",
    "description": "description",
    "price": "price",
    "category": "category_id",
    "food_type": "type",
    "is_vegetarian": "is_vegetarian",
    "available": "available",
}


class FoodItemRepository(Protocol):
    """Persistence interface for food items.

    Reads resolve the item's category.
    """

    def get_food_item(self, food_id: UUID) -> FoodItemRecord | None:
        """Return a food item by id, if present."""

    def find_by_name_and_category(
        self, name: str, category_id: UUID
    ) -> FoodItemRecord | None:
        """Return the item holding a (name, category) pair, if any."""

    def list_food_items(self) -> list[FoodItemRecord]:
        """Return every food item."""

    def create_food_item(self, payload: dict[str, object]) -> FoodItemRecord:
        """Create a food item and return it."""

    def update_food_item(
        self, food_id: UUID, payload: dict[str, object]
    ) -> FoodItemRecord:
        """Update a food item and return it."""

    def delete_food_item(self, food_id: UUID) -> None:
        """Remove the food item row."""


@dataclass
class FoodItemService:
    """Application service for food item operations."""

    repository: FoodItemRepository
    category_repository: CategoryRepository
    asset_store: AssetStore

    def create_food_item(
        self, payload: Mapping[str, object], attachment: Attachment | None = None
    ) -> FoodItemRecord:
        """Create a food item in an existing category."""
        data = parse_payload(FoodItemCreate, payload)
        category = self._require_category(data.category)
        if self.repository.find_by_name_and_category(data.name, category.id):
            raise ConflictError(DUPLICATE_FOOD_ITEM)

        image = upload_attachment(self.asset_store, attachment)
        row = {**_to_columns(data.model_dump()), **image_columns(image)}
        food_item = persist_with_asset(
            self.asset_store, image, lambda: self.repository.create_food_item(row)
        )
        logger.info("Created food item", extra={"food_id": str(food_item.id)})
        return replace(food_item, category=category)

    def get_food_item(self, food_id: UUID) -> FoodItemRecord:
        """Return a food item with its category or raise ``NotFoundError``."""
        food_item = self.repository.get_food_item(food_id)
        if food_item is None:
            raise NotFoundError("Food item not found")
        return food_item

    def list_food_items(self) -> list[FoodItemRecord]:
        """Return all food items with their categories."""
        return self.repository.list_food_items()

    def update_food_item(
        self,
        food_id: UUID,
        payload: Mapping[str, object],
        attachment: Attachment | None = None,
    ) -> FoodItemRecord:
        """Apply the supplied fields to a food item."""
        data = parse_payload(FoodItemUpdate, payload)
        food_item = self.get_food_item(food_id)

        category = food_item.category
        category_id = food_item.category_id
        if data.category is not None and data.category != food_item.category_id:
            category = self._require_category(data.category)
            category_id = category.id
        name = data.name if data.name is not None else food_item.name
        if (name, category_id) != (food_item.name, food_item.category_id):
            existing = self.repository.find_by_name_and_category(name, category_id)
            if existing and existing.id != food_item.id:
                raise ConflictError(DUPLICATE_FOOD_ITEM)

        changes = _to_columns(data.model_dump(exclude_none=True))
        image = None
        if attachment is not None:
            image = replace_asset(self.asset_store, food_item.image, attachment)
            changes.update(image_columns(image))
        changes["updated_at"] = datetime.now(tz=UTC)

        updated = persist_with_asset(
            self.asset_store,
            image,
            lambda: self.repository.update_food_item(food_item.id, changes),
        )
        return replace(updated, category=category)

    def delete_food_item(self, food_id: UUID) -> UUID:
        """Delete a food item and its image."""
        food_item = self.get_food_item(food_id)
        discard_asset(self.asset_store, food_item.image)
        self.repository.delete_food_item(food_item.id)
        logger.info("Deleted food item", extra={"food_id": str(food_item.id)})
        return food_item.id

    def _require_category(self, category_id: UUID) -> CategoryRecord:
        category = self.category_repository.get_category(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category


def _to_columns(fields: dict[str, object]) -> dict[str, object]:
    return {_COLUMNS[key]: value for key, value in fields.items() if key in _COLUMNS}
