"""Category endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse  # noqa: TC002

from food_ordering.api.envelope import success_response
from food_ordering.api.forms import read_submission
from food_ordering.services.serializers import serialize_category

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(prefix="/api/category/v1", tags=["categories"])


@router.post("/categories", status_code=status.HTTP_201_CREATED)
async def create_category(request: Request) -> JSONResponse:
    """Create a category, optionally with an image."""
    container: AppContainer = request.app.state.container
    payload, attachment = await read_submission(request, container.upload_policy)
    category = container.category_service.create_category(payload, attachment)
    return success_response(
        "Category created successfully",
        serialize_category(category),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/categories")
async def list_categories(request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    categories = container.category_service.list_categories()
    return success_response(
        "Categories retrieved successfully",
        [serialize_category(category) for category in categories],
    )


@router.get("/categories/{category_id}")
async def get_category(category_id: UUID, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    category = container.category_service.get_category(category_id)
    return success_response(
        "Category retrieved successfully", serialize_category(category)
    )


@router.put("/categories/{category_id}")
async def update_category(category_id: UUID, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    payload, attachment = await read_submission(request, container.upload_policy)
    category = container.category_service.update_category(
        category_id, payload, attachment
    )
    return success_response(
        "Category updated successfully", serialize_category(category)
    )


@router.delete("/categories/{category_id}")
async def delete_category(category_id: UUID, request: Request) -> JSONResponse:
    """Delete a category that has no food items."""
    container: AppContainer = request.app.state.container
    deleted_id = container.category_service.delete_category(category_id)
    return success_response(
        "Category deleted successfully", {"categoryId": str(deleted_id)}
    )
