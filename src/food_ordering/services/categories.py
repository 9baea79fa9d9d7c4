"""Services for managing menu categories."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from food_ordering.domain.errors import ConflictError, NotFoundError
from food_ordering.domain.models import Attachment, CategoryRecord
from food_ordering.domain.payloads import CategoryCreate, CategoryUpdate, parse_payload
from food_ordering.services.assets import (
    AssetStore,
    discard_asset,
    image_columns,
    persist_with_asset,
    replace_asset,
    upload_attachment,
)

logger = logging.getLogger(__name__)


class CategoryRepository(Protocol):
    """Persistence interface for categories."""

    def get_category(self, category_id: UUID) -> CategoryRecord | None:
        """Return a category by id, if present."""

    def list_categories(self) -> list[CategoryRecord]:
        """Return every category."""

    def create_category(self, payload: dict[str, object]) -> CategoryRecord:
        """Create a category and return it."""

    def update_category(
        self, category_id: UUID, payload: dict[str, object]
    ) -> CategoryRecord:
        """Update a category and return it."""

    def delete_category(self, category_id: UUID) -> None:
        """Remove the category row."""

    def has_food_items(self, category_id: UUID) -> bool:
        """Return true when any food item references the category."""


@dataclass
class CategoryService:
    """Application service for category operations."""

    repository: CategoryRepository
    asset_store: AssetStore

    def create_category(
        self, payload: Mapping[str, object], attachment: Attachment | None = None
    ) -> CategoryRecord:
        """Create a category."""
        data = parse_payload(CategoryCreate, payload)
        image = upload_attachment(self.asset_store, attachment)
        row = {
            "name": data.name,
            "description": data.description,
            **image_columns(image),
        }
        category = persist_with_asset(
            self.asset_store, image, lambda: self.repository.create_category(row)
        )
        logger.info("Created category", extra={"category_id": str(category.id)})
        return category

    def get_category(self, category_id: UUID) -> CategoryRecord:
        """Return a category or raise ``NotFoundError``."""
        category = self.repository.get_category(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def list_categories(self) -> list[CategoryRecord]:
        """Return all categories."""
        return self.repository.list_categories()

    def update_category(
        self,
        category_id: UUID,
        payload: Mapping[str, object],
        attachment: Attachment | None = None,
    ) -> CategoryRecord:
        """Apply the supplied fields to a category."""
        data = parse_payload(CategoryUpdate, payload)
        category = self.get_category(category_id)

        changes: dict[str, object] = data.model_dump(exclude_none=True)
        image = None
        if attachment is not None:
            image = replace_asset(self.asset_store, category.image, attachment)
            changes.update(image_columns(image))
        changes["updated_at"] = datetime.now(tz=UTC)

        return persist_with_asset(
            self.asset_store,
            image,
            lambda: self.repository.update_category(category.id, changes),
        )

    def delete_category(self, category_id: UUID) -> UUID:
        """Delete a category that no food item references."""
        category = self.get_category(category_id)
        if self.repository.has_food_items(category.id):
            raise ConflictError("Category still has food items")
        discard_asset(self.asset_store, category.image)
        self.repository.delete_category(category.id)
        logger.info("Deleted category", extra={"category_id": str(category.id)})
        return category.id
