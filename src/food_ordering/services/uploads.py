"""Upload acceptance rules for attachments."""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from uuid import uuid4

from food_ordering.domain.errors import ValidationError
from food_ordering.domain.models import Attachment

IMAGE_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif")
VIDEO_MIME_TYPES = ("video/mp4", "video/mpeg", "video/ogg", "video/webm", "video/avi")
PDF_MIME_TYPES = ("application/pdf",)

ALLOWED_MIME_TYPES: dict[str, tuple[str, ...]] = {
    "images": IMAGE_MIME_TYPES,
    "videos": VIDEO_MIME_TYPES,
    "pdfs": PDF_MIME_TYPES,
    "all": IMAGE_MIME_TYPES + VIDEO_MIME_TYPES + PDF_MIME_TYPES,
}

DEFAULT_MAX_BYTES = 50 * 1024 * 1024


def resolve_mime_types(file_types: list[str] | None = None) -> frozenset[str]:
    """Return the MIME types allowed for the named groups.

    Unknown group names are ignored; an empty selection allows every group.
    """
    allowed: set[str] = set()
    for file_type in file_types or []:
        allowed.update(ALLOWED_MIME_TYPES.get(file_type, ()))
    return frozenset(allowed or ALLOWED_MIME_TYPES["all"])


def generate_filename(original_name: str | None, field_name: str) -> str:
    """Build a collision-resistant storage name that keeps the extension."""
    cleaned = (original_name or "").replace("\\", "/")
    extension = PurePosixPath(cleaned).suffix.lower()
    return f"{uuid4()}-{field_name or 'file'}{extension}"


@dataclass(frozen=True)
class UploadPolicy:
    """Checks an incoming file against the allow-list and size cap."""

    mime_types: frozenset[str] = field(
        default_factory=lambda: resolve_mime_types(["images"])
    )
    max_bytes: int = DEFAULT_MAX_BYTES

    def check_size(self, field_name: str, size: int | None) -> None:
        """Reject a file whose declared or actual size exceeds the cap."""
        if size is not None and size > self.max_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {self.max_bytes} bytes.",
                fields=[field_name],
            )

    def accept(
        self,
        field_name: str,
        original_name: str | None,
        content_type: str | None,
        data: bytes,
    ) -> Attachment:
        """Return an attachment ready for upload or raise ``ValidationError``."""
        if content_type not in self.mime_types:
            raise ValidationError(
                "Invalid file type. Only specified file types are allowed.",
                fields=[field_name],
            )
        self.check_size(field_name, len(data))
        return Attachment(
            filename=generate_filename(original_name, field_name),
            content_type=content_type,
            data=data,
            field=field_name,
        )
