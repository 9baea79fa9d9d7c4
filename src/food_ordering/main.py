"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from food_ordering.config import Settings


def main() -> None:
    """Run the API on the configured port."""
    settings = Settings()
    uvicorn.run("food_ordering.api.asgi:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
