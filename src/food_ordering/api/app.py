"""FastAPI application factory."""

import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from food_ordering.api.categories import router as categories_router
from food_ordering.api.envelope import SECURITY_HEADERS, register_exception_handlers
from food_ordering.api.foods import router as foods_router
from food_ordering.api.users import router as users_router
from food_ordering.app_logging import configure_logging
from food_ordering.config import parse_cors_origins
from food_ordering.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    settings = container.settings

    app = FastAPI(title="Food Ordering API")
    app.state.container = container
    app.state.limiter = Limiter(
        key_func=get_remote_address, default_limits=[settings.rate_limit]
    )
    register_exception_handlers(app)

    app.add_middleware(SlowAPIMiddleware)

    @app.middleware("http")
    async def security_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(users_router)
    app.include_router(categories_router)
    app.include_router(foods_router)

    if not settings.asset_bucket:
        app.mount(
            "/uploads",
            StaticFiles(directory=Path(settings.upload_dir), check_dir=False),
            name="uploads",
        )
        logger.info("Serving uploads from %s", settings.upload_dir)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
