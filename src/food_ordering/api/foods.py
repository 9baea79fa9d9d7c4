"""Food item endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse  # noqa: TC002

from food_ordering.api.envelope import success_response
from food_ordering.api.forms import read_submission
from food_ordering.services.serializers import serialize_food_item

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(prefix="/api/food/v1", tags=["food"])


@router.post("/foodItems", status_code=status.HTTP_201_CREATED)
async def create_food_item(request: Request) -> JSONResponse:
    """Create a food item in an existing category."""
    container: AppContainer = request.app.state.container
    payload, attachment = await read_submission(request, container.upload_policy)
    food_item = container.food_item_service.create_food_item(payload, attachment)
    return success_response(
        "Food item created successfully",
        serialize_food_item(food_item),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/foodItems")
async def list_food_items(request: Request) -> JSONResponse:
    """Return all food items with their categories inlined."""
    container: AppContainer = request.app.state.container
    food_items = container.food_item_service.list_food_items()
    return success_response(
        "Food items retrieved successfully",
        [serialize_food_item(food_item) for food_item in food_items],
    )


@router.get("/foodItems/{food_id}")
async def get_food_item(food_id: UUID, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    food_item = container.food_item_service.get_food_item(food_id)
    return success_response(
        "Food item retrieved successfully", serialize_food_item(food_item)
    )


@router.put("/foodItems/{food_id}")
async def update_food_item(food_id: UUID, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    payload, attachment = await read_submission(request, container.upload_policy)
    food_item = container.food_item_service.update_food_item(
        food_id, payload, attachment
    )
    return success_response(
        "Food item updated successfully", serialize_food_item(food_item)
    )


@router.delete("/foodItems/{food_id}")
async def delete_food_item(food_id: UUID, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    deleted_id = container.food_item_service.delete_food_item(food_id)
    return success_response(
        "Food item deleted successfully", {"foodId": str(deleted_id)}
    )
