"""Asset store interface and lifecycle helpers shared by the resource services."""

import logging
from collections.abc import Callable
from typing import Protocol, TypeVar

from food_ordering.domain.errors import AppError
from food_ordering.domain.models import AssetRef, Attachment

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AssetStore(Protocol):
    """Interface for storing uploaded binaries."""

    def upload(self, attachment: Attachment) -> AssetRef:
        """Store the attachment and return its URL and deletion handle."""

    def delete(self, handle: str) -> None:
        """Remove the asset identified by the deletion handle."""


def upload_attachment(
    store: AssetStore, attachment: Attachment | None
) -> AssetRef | None:
    """Upload the attachment, if any."""
    if attachment is None:
        return None
    return store.upload(attachment)


def discard_asset(store: AssetStore, image: AssetRef | None) -> None:
    """Delete an asset without letting provider failures escape."""
    if image is None:
        return
    try:
        store.delete(image.handle)
    except Exception:
        logger.warning(
            "Failed to delete asset", extra={"handle": image.handle}, exc_info=True
        )


def replace_asset(
    store: AssetStore, current: AssetRef | None, attachment: Attachment
) -> AssetRef:
    """Drop the current asset and upload its replacement."""
    discard_asset(store, current)
    return store.upload(attachment)


def persist_with_asset(
    store: AssetStore, image: AssetRef | None, persist: Callable[[], T]
) -> T:
    """Run a write, removing a freshly uploaded asset if the write fails."""
    try:
        return persist()
    except AppError:
        discard_asset(store, image)
        raise


def image_columns(image: AssetRef | None) -> dict[str, object]:
    """Flatten an asset reference into storage columns."""
    if image is None:
        return {"image_url": None, "image_handle": None}
    return {"image_url": image.url, "image_handle": image.handle}


def parse_image(url: object, handle: object) -> AssetRef | None:
    """Rebuild an asset reference; both parts must be present."""
    if isinstance(url, str) and url and isinstance(handle, str) and handle:
        return AssetRef(url=url, handle=handle)
    return None
