"""Domain models for the food ordering API."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class AssetRef:
    """Location and deletion handle of an uploaded asset."""

    url: str
    handle: str


@dataclass(frozen=True)
class Attachment:
    """An accepted upload waiting to be pushed to the asset store."""

    filename: str
    content_type: str
    data: bytes
    field: str = "image"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    password_hash: str
    bio: str | None = None
    status: str | None = None
    image: AssetRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CategoryRecord:
    """Represents a menu category."""

    id: UUID
    name: str
    description: str | None = None
    image: AssetRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class FoodItemRecord:
    """Represents a food item on the menu.

    ``category`` is only populated on reads that resolve the reference.
    """

    id: UUID
    name: str
    description: str
    price: float
    category_id: UUID
    food_type: str
    is_vegetarian: bool
    available: bool = True
    image: AssetRef | None = None
    category: CategoryRecord | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
