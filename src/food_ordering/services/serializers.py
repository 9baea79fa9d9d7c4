"""JSON representations of domain records."""

from datetime import datetime

from food_ordering.domain.models import CategoryRecord, FoodItemRecord, UserRecord


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Public view of a user. The password hash is never included."""
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "bio": user.bio,
        "status": user.status,
        "profileImage": user.image.url if user.image else None,
        "createdAt": _isoformat(user.created_at),
        "updatedAt": _isoformat(user.updated_at),
    }


def serialize_category(category: CategoryRecord) -> dict[str, object]:
    return {
        "id": str(category.id),
        "name": category.name,
        "description": category.description,
        "imageUrl": category.image.url if category.image else None,
        "createdAt": _isoformat(category.created_at),
        "updatedAt": _isoformat(category.updated_at),
    }


def serialize_food_item(food_item: FoodItemRecord) -> dict[str, object]:
    """Food item view; the category is inlined when it has been resolved."""
    return {
        "id": str(food_item.id),
        "name": food_item.name,
        "description": food_item.description,
        "price": food_item.price,
        "category": serialize_category(food_item.category)
        if food_item.category
        else str(food_item.category_id),
        "type": food_item.food_type,
        "available": food_item.available,
        "isVegetarian": food_item.is_vegetarian,
        "imageUrl": food_item.image.url if food_item.image else None,
        "createdAt": _isoformat(food_item.created_at),
        "updatedAt": _isoformat(food_item.updated_at),
    }


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
