"""Tests for upload acceptance and asset helpers."""

import logging

import pytest

from food_ordering.adapters.local_asset_store import LocalAssetStore
from food_ordering.domain.errors import ConflictError, ValidationError
from food_ordering.domain.models import AssetRef
from food_ordering.services.assets import (
    discard_asset,
    image_columns,
    parse_image,
    persist_with_asset,
)
from food_ordering.services.uploads import (
    ALLOWED_MIME_TYPES,
    UploadPolicy,
    generate_filename,
    resolve_mime_types,
)
from tests.conftest import FakeAssetStore, make_attachment


def test_resolve_mime_types_defaults_to_all() -> None:
    assert resolve_mime_types() == frozenset(ALLOWED_MIME_TYPES["all"])
    assert resolve_mime_types(["unknown"]) == frozenset(ALLOWED_MIME_TYPES["all"])


def test_resolve_mime_types_combines_groups() -> None:
    allowed = resolve_mime_types(["images", "pdfs"])

    assert "image/png" in allowed
    assert "application/pdf" in allowed
    assert "video/mp4" not in allowed


def test_generate_filename_keeps_extension() -> None:
    first = generate_filename("C:\\photos\\Cola.PNG", "image")
    second = generate_filename("C:\\photos\\Cola.PNG", "image")

    assert first.endswith("-image.png")
    assert first != second


def test_policy_accepts_image() -> None:
    attachment = UploadPolicy().accept("image", "cola.jpg", "image/jpeg", b"data")

    assert attachment.content_type == "image/jpeg"
    assert attachment.filename.endswith("-image.jpg")
    assert attachment.data == b"data"


def test_policy_rejects_disallowed_type() -> None:
    with pytest.raises(ValidationError) as exc_info:
        UploadPolicy().accept("image", "notes.pdf", "application/pdf", b"%PDF")

    assert exc_info.value.fields == ["image"]


def test_policy_rejects_oversized_file() -> None:
    policy = UploadPolicy(max_bytes=4)

    with pytest.raises(ValidationError):
        policy.accept("image", "big.png", "image/png", b"12345")


def test_discard_asset_logs_failures(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    store = FakeAssetStore(fail_delete=True)
    monkeypatch.setattr(logging.getLogger("food_ordering"), "propagate", True)
    caplog.set_level(logging.WARNING, logger="food_ordering.services.assets")

    discard_asset(store, AssetRef(url="https://x/y.png", handle="y.png"))

    assert "Failed to delete asset" in caplog.text


def test_persist_with_asset_cleans_up_on_error() -> None:
    store = FakeAssetStore()
    image = AssetRef(url="https://x/y.png", handle="y.png")

    def fail() -> None:
        raise ConflictError("taken")

    with pytest.raises(ConflictError):
        persist_with_asset(store, image, fail)

    assert store.deleted == ["y.png"]


def test_image_columns_round_trip() -> None:
    image = AssetRef(url="https://x/y.png", handle="y.png")
    columns = image_columns(image)

    assert parse_image(columns["image_url"], columns["image_handle"]) == image
    assert image_columns(None) == {"image_url": None, "image_handle": None}
    assert parse_image("https://x/y.png", None) is None


def test_local_asset_store_writes_and_deletes(tmp_path) -> None:
    store = LocalAssetStore(tmp_path / "uploads")
    attachment = make_attachment()

    image = store.upload(attachment)
    stored = tmp_path / "uploads" / attachment.filename

    assert image.url == f"/uploads/{attachment.filename}"
    assert stored.read_bytes() == attachment.data

    store.delete(image.handle)
    store.delete(image.handle)

    assert not stored.exists()


def test_local_asset_store_confines_handles(tmp_path) -> None:
    outside = tmp_path / "secret.txt"
    outside.write_text("keep")
    store = LocalAssetStore(tmp_path / "uploads")

    store.delete("../secret.txt")

    assert outside.exists()


def test_policy_check_size_allows_unknown_size() -> None:
    policy = UploadPolicy(max_bytes=4)

    policy.check_size("image", None)
    policy.check_size("image", 4)

    with pytest.raises(ValidationError) as exc_info:
        policy.check_size("image", 5)

    assert exc_info.value.fields == ["image"]
