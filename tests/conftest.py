"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from food_ordering.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from food_ordering.adapters.jwt_token_issuer import JwtTokenIssuer
from food_ordering.config import Settings
from food_ordering.containers import AppContainer
from food_ordering.domain.errors import ConflictError, UpstreamError
from food_ordering.domain.models import (
    AssetRef,
    Attachment,
    CategoryRecord,
    FoodItemRecord,
    UserRecord,
)
from food_ordering.services.assets import AssetStore, parse_image
from food_ordering.services.categories import CategoryRepository, CategoryService
from food_ordering.services.foods import (
    DUPLICATE_FOOD_ITEM,
    FoodItemRepository,
    FoodItemService,
)
from food_ordering.services.uploads import UploadPolicy
from food_ordering.services.users import UserRepository, UserService

_IMAGE_COLUMNS = ("image_url", "image_handle")


def _image_from(
    payload: dict[str, object], current: AssetRef | None
) -> AssetRef | None:
    if not any(column in payload for column in _IMAGE_COLUMNS):
        return current
    return parse_image(payload.get("image_url"), payload.get("image_handle"))


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository that enforces unique email and name."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_name(self, name: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.name == name), None)

    def list_users(self) -> list[UserRecord]:
        return list(self.users.values())

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        self._check_unique(payload, exclude=None)
        user = UserRecord(
            id=uuid4(),
            name=str(payload["name"]),
            email=str(payload["email"]),
            password_hash=str(payload["password_hash"]),
            bio=payload.get("bio"),
            status=payload.get("status"),
            image=_image_from(payload, None),
            created_at=datetime.now(tz=UTC),
        )
        self.users[user.id] = user
        return user

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        self._check_unique(payload, exclude=user_id)
        current = self.users[user_id]
        updated = replace(
            current,
            name=payload.get("name", current.name),
            email=payload.get("email", current.email),
            password_hash=payload.get("password_hash", current.password_hash),
            bio=payload.get("bio", current.bio),
            status=payload.get("status", current.status),
            image=_image_from(payload, current.image),
            updated_at=payload.get("updated_at", current.updated_at),
        )
        self.users[user_id] = updated
        return updated

    def delete_user(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)

    def _check_unique(self, payload: dict[str, object], exclude: UUID | None) -> None:
        for user in self.users.values():
            if user.id == exclude:
                continue
            if payload.get("email") == user.email or payload.get("name") == user.name:
                raise ConflictError("User already exists")


@dataclass
class InMemoryCategoryRepository(CategoryRepository):
    """In-memory category repository; shares the food item table."""

    categories: dict[UUID, CategoryRecord] = field(default_factory=dict)
    food_items: dict[UUID, FoodItemRecord] = field(default_factory=dict)

    def get_category(self, category_id: UUID) -> CategoryRecord | None:
        return self.categories.get(category_id)

    def list_categories(self) -> list[CategoryRecord]:
        return list(self.categories.values())

    def create_category(self, payload: dict[str, object]) -> CategoryRecord:
        category = CategoryRecord(
            id=uuid4(),
            name=str(payload["name"]),
            description=payload.get("description"),
            image=_image_from(payload, None),
            created_at=datetime.now(tz=UTC),
        )
        self.categories[category.id] = category
        return category

    def update_category(
        self, category_id: UUID, payload: dict[str, object]
    ) -> CategoryRecord:
        current = self.categories[category_id]
        updated = replace(
            current,
            name=payload.get("name", current.name),
            description=payload.get("description", current.description),
            image=_image_from(payload, current.image),
            updated_at=payload.get("updated_at", current.updated_at),
        )
        self.categories[category_id] = updated
        return updated

    def delete_category(self, category_id: UUID) -> None:
        self.categories.pop(category_id, None)

    def has_food_items(self, category_id: UUID) -> bool:
        return any(item.category_id == category_id for item in self.food_items.values())


@dataclass
class InMemoryFoodItemRepository(FoodItemRepository):
    """In-memory food item repository that resolves categories on reads."""

    categories: InMemoryCategoryRepository
    items: dict[UUID, FoodItemRecord] = field(default_factory=dict)

    def get_food_item(self, food_id: UUID) -> FoodItemRecord | None:
        item = self.items.get(food_id)
        return self._resolve(item) if item else None

    def find_by_name_and_category(
        self, name: str, category_id: UUID
    ) -> FoodItemRecord | None:
        for item in self.items.values():
            if item.name == name and item.category_id == category_id:
                return item
        return None

    def list_food_items(self) -> list[FoodItemRecord]:
        return [self._resolve(item) for item in self.items.values()]

    def create_food_item(self, payload: dict[str, object]) -> FoodItemRecord:
        category_id = payload["category_id"]
        if self.find_by_name_and_category(str(payload["name"]), category_id):
            raise ConflictError(DUPLICATE_FOOD_ITEM)
        item = FoodItemRecord(
            id=uuid4(),
            name=str(payload["name"]),
            description=str(payload["description"]),
            price=float(payload["price"]),
            category_id=category_id,
            food_type=str(payload["type"]),
            is_vegetarian=bool(payload["is_vegetarian"]),
            available=bool(payload.get("available", True)),
            image=_image_from(payload, None),
            created_at=datetime.now(tz=UTC),
        )
        self.items[item.id] = item
        return item

    def update_food_item(
        self, food_id: UUID, payload: dict[str, object]
    ) -> FoodItemRecord:
        current = self.items[food_id]
        updated = replace(
            current,
            name=payload.get("name", current.name),
            description=payload.get("description", current.description),
            price=payload.get("price", current.price),
            category_id=payload.get("category_id", current.category_id),
            food_type=payload.get("type", current.food_type),
            is_vegetarian=payload.get("is_vegetarian", current.is_vegetarian),
            available=payload.get("available", current.available),
            image=_image_from(payload, current.image),
            category=None,
            updated_at=payload.get("updated_at", current.updated_at),
        )
        self.items[food_id] = updated
        return updated

    def delete_food_item(self, food_id: UUID) -> None:
        self.items.pop(food_id, None)

    def _resolve(self, item: FoodItemRecord) -> FoodItemRecord:
        return replace(item, category=self.categories.get_category(item.category_id))


@dataclass
class FakeAssetStore(AssetStore):
    """Asset store that records uploads and deletions."""

    uploads: list[Attachment] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    fail_upload: bool = False
    fail_delete: bool = False

    def upload(self, attachment: Attachment) -> AssetRef:
        if self.fail_upload:
            raise UpstreamError("Asset provider unavailable")
        self.uploads.append(attachment)
        return AssetRef(
            url=f"https://assets.example.com/{attachment.filename}",
            handle=attachment.filename,
        )

    def delete(self, handle: str) -> None:
        if self.fail_delete:
            raise UpstreamError("Asset provider unavailable")
        self.deleted.append(handle)


def make_attachment(name: str = "photo.png") -> Attachment:
    """Build an accepted PNG attachment."""
    return UploadPolicy().accept("image", name, "image/png", b"\x89PNG fake")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        jwt_secret="test-secret",
        upload_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def asset_store() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def category_repository() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository()


@pytest.fixture
def food_item_repository(
    category_repository: InMemoryCategoryRepository,
) -> InMemoryFoodItemRepository:
    repository = InMemoryFoodItemRepository(categories=category_repository)
    category_repository.food_items = repository.items
    return repository


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository, asset_store: FakeAssetStore
) -> UserService:
    return UserService(
        repository=user_repository,
        asset_store=asset_store,
        password_hasher=BcryptPasswordHasher(rounds=4),
        token_issuer=JwtTokenIssuer(secret="test-secret"),
    )


@pytest.fixture
def category_service(
    category_repository: InMemoryCategoryRepository, asset_store: FakeAssetStore
) -> CategoryService:
    return CategoryService(repository=category_repository, asset_store=asset_store)


@pytest.fixture
def food_item_service(
    food_item_repository: InMemoryFoodItemRepository,
    category_repository: InMemoryCategoryRepository,
    asset_store: FakeAssetStore,
) -> FoodItemService:
    return FoodItemService(
        repository=food_item_repository,
        category_repository=category_repository,
        asset_store=asset_store,
    )


@pytest.fixture
def container(
    settings: Settings,
    user_service: UserService,
    category_service: CategoryService,
    food_item_service: FoodItemService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        upload_policy=UploadPolicy(max_bytes=settings.upload_max_bytes),
        user_service=user_service,
        category_service=category_service,
        food_item_service=food_item_service,
    )
