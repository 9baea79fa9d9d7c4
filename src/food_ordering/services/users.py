"""User-related business logic."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from food_ordering.domain.errors import AuthError, ConflictError, NotFoundError
from food_ordering.domain.models import Attachment, UserRecord
from food_ordering.domain.payloads import (
    LoginRequest,
    UserCreate,
    UserUpdate,
    parse_payload,
)
from food_ordering.services.assets import (
    AssetStore,
    discard_asset,
    image_columns,
    persist_with_asset,
    replace_asset,
    upload_attachment,
)
from food_ordering.services.serializers import serialize_user

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with the email, if present."""

    def get_by_name(self, name: str) -> UserRecord | None:
        """Return the user with the given name, if present."""

    def list_users(self) -> list[UserRecord]:
        """Return every user."""

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create and return a new user record."""

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Apply column changes and return the updated user."""

    def delete_user(self, user_id: UUID) -> None:
        """Remove the user row."""


class PasswordHasher(Protocol):
    """One-way salted password hashing."""

    def hash(self, password: str) -> str:
        """Return a salted hash of the password."""

    def verify(self, password: str, password_hash: str) -> bool:
        """Return true when the password matches the hash."""


class TokenIssuer(Protocol):
    """Signs and verifies bearer tokens."""

    def issue(
        self, claims: dict[str, object], expires_in: timedelta | None = None
    ) -> str:
        """Return a signed token embedding the claims."""

    def verify(self, token: str) -> dict[str, object]:
        """Return the claims of a valid token or raise ``AuthError``."""


@dataclass(frozen=True)
class LoginResult:
    """Token issued for an authenticated user."""

    token: str
    user: UserRecord


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    asset_store: AssetStore
    password_hasher: PasswordHasher
    token_issuer: TokenIssuer

    def create_user(
        self, payload: Mapping[str, object], attachment: Attachment | None = None
    ) -> UserRecord:
        """Register a new user."""
        data = parse_payload(UserCreate, payload)
        if self.repository.get_by_email(data.email):
            raise ConflictError("User already exists")
        if self.repository.get_by_name(data.name):
            raise ConflictError("User name already taken")

        image = upload_attachment(self.asset_store, attachment)
        row = {
            "name": data.name,
            "email": data.email,
            "password_hash": self.password_hasher.hash(data.password),
            "bio": data.bio,
            "status": data.status,
            **image_columns(image),
        }
        user = persist_with_asset(
            self.asset_store, image, lambda: self.repository.create_user(row)
        )
        logger.info("Created user", extra={"user_id": str(user.id)})
        return user

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise ``NotFoundError``."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_users(self) -> list[UserRecord]:
        """Return all users."""
        return self.repository.list_users()

    def update_user(
        self,
        user_id: UUID,
        payload: Mapping[str, object],
        attachment: Attachment | None = None,
    ) -> UserRecord:
        """Apply the supplied fields to a user."""
        data = parse_payload(UserUpdate, payload)
        user = self.get_user(user_id)

        changes: dict[str, object] = data.model_dump(exclude_none=True)
        if "email" in changes and changes["email"] != user.email:
            existing = self.repository.get_by_email(data.email)
            if existing and existing.id != user.id:
                raise ConflictError("User already exists")
        if "name" in changes and changes["name"] != user.name:
            existing = self.repository.get_by_name(data.name)
            if existing and existing.id != user.id:
                raise ConflictError("User name already taken")
        if "password" in changes:
            changes["password_hash"] = self.password_hasher.hash(
                str(changes.pop("password"))
            )

        image = None
        if attachment is not None:
            image = replace_asset(self.asset_store, user.image, attachment)
            changes.update(image_columns(image))
        changes["updated_at"] = datetime.now(tz=UTC)

        return persist_with_asset(
            self.asset_store,
            image,
            lambda: self.repository.update_user(user.id, changes),
        )

    def delete_user(self, user_id: UUID) -> UUID:
        """Delete a user and its profile image."""
        user = self.get_user(user_id)
        discard_asset(self.asset_store, user.image)
        self.repository.delete_user(user.id)
        logger.info("Deleted user", extra={"user_id": str(user.id)})
        return user.id

    def login(self, payload: Mapping[str, object]) -> LoginResult:
        """Check credentials and issue a token."""
        data = parse_payload(LoginRequest, payload)
        user = self.repository.get_by_email(data.email)
        if user is None or not self.password_hasher.verify(
            data.password, user.password_hash
        ):
            raise AuthError("Invalid credentials")
        token = self.token_issuer.issue(
            {"email": user.email, "user": serialize_user(user)}
        )
        return LoginResult(token=token, user=user)

    def authenticate(self, token: str) -> UserRecord:
        """Resolve the user a bearer token was issued to."""
        claims = self.token_issuer.verify(token)
        email = claims.get("email")
        user = self.repository.get_by_email(email) if isinstance(email, str) else None
        if user is None:
            raise AuthError("Invalid token")
        return user
