"""User endpoints: registration, login and account management."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse  # noqa: TC002
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from food_ordering.api.envelope import success_response
from food_ordering.api.forms import read_submission
from food_ordering.domain.errors import AuthError
from food_ordering.domain.models import UserRecord  # noqa: TC001
from food_ordering.services.serializers import serialize_user

if TYPE_CHECKING:
    from food_ordering.containers import AppContainer

router = APIRouter(prefix="/api/user/v1", tags=["users"])

_bearer = HTTPBearer(auto_error=False)


async def current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> UserRecord:
    """Resolve the user behind the bearer token."""
    if credentials is None:
        raise AuthError("Authentication required")
    container: AppContainer = request.app.state.container
    return container.user_service.authenticate(credentials.credentials)


@router.post("/createUser", status_code=status.HTTP_201_CREATED)
async def create_user(request: Request) -> JSONResponse:
    """Register a user, optionally with a profile image."""
    container: AppContainer = request.app.state.container
    payload, attachment = await read_submission(request, container.upload_policy)
    # bcrypt work runs off the event loop.
    user = await run_in_threadpool(
        container.user_service.create_user, payload, attachment
    )
    return success_response(
        "User created successfully",
        serialize_user(user),
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/login")
async def login(request: Request) -> JSONResponse:
    """Exchange credentials for a bearer token."""
    container: AppContainer = request.app.state.container
    payload, _ = await read_submission(request, container.upload_policy)
    result = await run_in_threadpool(container.user_service.login, payload)
    return success_response(
        "User logged in successfully",
        {"token": result.token, "user": serialize_user(result.user)},
    )


@router.get("/me")
async def me(user: UserRecord = Depends(current_user)) -> JSONResponse:
    """Return the authenticated user."""
    return success_response("User retrieved successfully", serialize_user(user))


@router.get("/users")
async def list_users(request: Request) -> JSONResponse:
    """Return all users."""
    container: AppContainer = request.app.state.container
    users = container.user_service.list_users()
    return success_response(
        "Users retrieved successfully", [serialize_user(user) for user in users]
    )


@router.get("/users/{user_id}")
async def get_user(user_id: UUID, request: Request) -> JSONResponse:
    """Return a single user."""
    container: AppContainer = request.app.state.container
    user = container.user_service.get_user(user_id)
    return success_response("User retrieved successfully", serialize_user(user))


@router.put("/users/{user_id}")
async def update_user(user_id: UUID, request: Request) -> JSONResponse:
    """Update the supplied user fields."""
    container: AppContainer = request.app.state.container
    payload, attachment = await read_submission(request, container.upload_policy)
    user = await run_in_threadpool(
        container.user_service.update_user, user_id, payload, attachment
    )
    return success_response("User updated successfully", serialize_user(user))


@router.delete("/users/{user_id}")
async def delete_user(user_id: UUID, request: Request) -> JSONResponse:
    """Delete a user."""
    container: AppContainer = request.app.state.container
    deleted_id = container.user_service.delete_user(user_id)
    return success_response("User deleted successfully", {"userId": str(deleted_id)})
