"""Uniform response envelope and the centralized error handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from food_ordering.domain.errors import (
    GENERIC_ERROR_MESSAGE,
    AppError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def envelope(
    status_code: int, success: bool, message: str, data: object | None = None
) -> dict[str, object]:
    """Build the ``{statusCode, success, message, data}`` body."""
    return {
        "statusCode": status_code,
        "success": success,
        "message": message,
        "data": data,
    }


def success_response(
    message: str, data: object | None = None, status_code: int = status.HTTP_200_OK
) -> JSONResponse:
    """Return a successful enveloped response."""
    return JSONResponse(
        status_code=status_code, content=envelope(status_code, True, message, data)
    )


def error_response(
    status_code: int, message: str, data: object | None = None
) -> JSONResponse:
    """Return a failed enveloped response.

    Carries the security headers itself; unhandled-error responses never pass
    through the header middleware.
    """
    return JSONResponse(
        status_code=status_code,
        content=envelope(status_code, False, message, data),
        headers=SECURITY_HEADERS,
    )


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        logger.error(
            "Upstream failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.detail,
            exc_info=exc.cause,
        )
    elif exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request failed: %s", exc.message, exc_info=exc)
    return error_response(exc.status_code, exc.message, exc.data)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted({str(error["loc"][-1]) for error in exc.errors() if error["loc"]})
    return await handle_app_error(request, ValidationError(fields=fields))


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"No route found for {request.url.path}"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message)


def handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Too many requests from this IP, please try again later.",
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error to the envelope."""
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit)
    app.add_exception_handler(Exception, handle_unexpected)
