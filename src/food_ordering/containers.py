"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from supabase import create_client

from food_ordering.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from food_ordering.adapters.jwt_token_issuer import JwtTokenIssuer
from food_ordering.adapters.local_asset_store import LocalAssetStore
from food_ordering.adapters.supabase_asset_store import SupabaseAssetStore
from food_ordering.adapters.supabase_category_repository import (
    SupabaseCategoryRepository,
)
from food_ordering.adapters.supabase_food_repository import SupabaseFoodItemRepository
from food_ordering.adapters.supabase_user_repository import SupabaseUserRepository
from food_ordering.config import Settings
from food_ordering.services.assets import AssetStore
from food_ordering.services.categories import CategoryService
from food_ordering.services.foods import FoodItemService
from food_ordering.services.uploads import UploadPolicy, resolve_mime_types
from food_ordering.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    upload_policy: UploadPolicy
    user_service: UserService
    category_service: CategoryService
    food_item_service: FoodItemService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    asset_store: AssetStore
    if resolved_settings.asset_bucket:
        asset_store = SupabaseAssetStore(
            supabase_client, bucket=resolved_settings.asset_bucket
        )
    else:
        asset_store = LocalAssetStore(Path(resolved_settings.upload_dir))

    category_repository = SupabaseCategoryRepository(supabase_client)
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        asset_store=asset_store,
        password_hasher=BcryptPasswordHasher(),
        token_issuer=JwtTokenIssuer(
            secret=resolved_settings.jwt_secret,
            algorithm=resolved_settings.jwt_algorithm,
            default_expiry=timedelta(hours=resolved_settings.jwt_expires_hours),
        ),
    )
    category_service = CategoryService(
        repository=category_repository, asset_store=asset_store
    )
    food_item_service = FoodItemService(
        repository=SupabaseFoodItemRepository(supabase_client),
        category_repository=category_repository,
        asset_store=asset_store,
    )
    upload_policy = UploadPolicy(
        mime_types=resolve_mime_types(["images"]),
        max_bytes=resolved_settings.upload_max_bytes,
    )

    return AppContainer(
        settings=resolved_settings,
        upload_policy=upload_policy,
        user_service=user_service,
        category_service=category_service,
        food_item_service=food_item_service,
    )
