"""Pydantic models for incoming resource payloads."""

from collections.abc import Mapping
from typing import Annotated, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError

from food_ordering.domain.errors import ValidationError

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UserCreate(_Payload):
    """Registration payload."""

    name: NonEmptyStr
    email: NonEmptyStr
    password: str = Field(min_length=1)
    bio: str | None = None
    status: str | None = None

    @field_validator("password")
    @classmethod
    def _password_fits_hash(cls, value: str) -> str:
        return _check_password_length(value)


class UserUpdate(_Payload):
    """Partial user update."""

    name: NonEmptyStr | None = None
    email: NonEmptyStr | None = None
    password: str | None = Field(default=None, min_length=1)
    bio: str | None = None
    status: str | None = None

    @field_validator("password")
    @classmethod
    def _password_fits_hash(cls, value: str | None) -> str | None:
        return None if value is None else _check_password_length(value)


class LoginRequest(_Payload):
    """Login credentials."""

    email: NonEmptyStr
    password: str = Field(min_length=1)


class CategoryCreate(_Payload):
    """New category payload."""

    name: NonEmptyStr
    description: str | None = None


class CategoryUpdate(_Payload):
    """Partial category update."""

    name: NonEmptyStr | None = None
    description: str | None = None


class FoodItemCreate(_Payload):
    """New food item payload."""

    name: NonEmptyStr
    description: NonEmptyStr
    price: float = Field(ge=0, allow_inf_nan=False)
    category: UUID
    food_type: NonEmptyStr = Field(alias="type")
    is_vegetarian: bool = Field(alias="isVegetarian")
    available: bool = True


class FoodItemUpdate(_Payload):
    """Partial food item update."""

    name: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    category: UUID | None = None
    food_type: NonEmptyStr | None = Field(default=None, alias="type")
    is_vegetarian: bool | None = Field(default=None, alias="isVegetarian")
    available: bool | None = None


PayloadT = TypeVar("PayloadT", bound=BaseModel)


def parse_payload(model: type[PayloadT], payload: Mapping[str, object]) -> PayloadT:
    """Validate a raw payload, raising ``ValidationError`` with the bad fields."""
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as exc:
        fields = sorted(
            {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
        )
        raise ValidationError(fields=fields) from exc


def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value
