"""ASGI entrypoint for the food ordering API."""

from food_ordering.api.app import create_app
from food_ordering.containers import build_container

app = create_app(build_container())
