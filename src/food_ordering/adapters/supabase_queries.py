"""Helpers shared by the Supabase repositories."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

import httpx
from postgrest.exceptions import APIError

from food_ordering.domain.errors import AppError, UpstreamError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def execute(
    query: Any,
    action: str,
    errors: Mapping[str, AppError] | None = None,
) -> Any:
    """Execute a PostgREST query, translating client failures.

    ``errors`` maps Postgres error codes to the application error raised for
    them; anything else becomes an ``UpstreamError``.
    """
    try:
        return query.execute()
    except APIError as exc:
        mapped = (errors or {}).get(str(exc.code))
        if mapped is not None:
            raise mapped from exc
        raise UpstreamError(f"Supabase {action} failed", cause=exc) from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(f"Supabase {action} failed", cause=exc) from exc


def encode_row(payload: Mapping[str, object]) -> dict[str, object]:
    """Convert Python values into JSON-friendly column values."""
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, datetime):
            row[key] = value.isoformat()
        elif isinstance(value, UUID):
            row[key] = str(value)
        else:
            row[key] = value
    return row


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
