"""Asset store writing uploads to a local directory."""

from dataclasses import dataclass
from pathlib import Path

from food_ordering.domain.errors import UpstreamError
from food_ordering.domain.models import AssetRef, Attachment
from food_ordering.services.assets import AssetStore


@dataclass
class LocalAssetStore(AssetStore):
    """Keeps uploads on disk; the API serves them under ``url_prefix``."""

    directory: Path
    url_prefix: str = "/uploads"

    def upload(self, attachment: Attachment) -> AssetRef:
        """Write the attachment to disk."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._path(attachment.filename).write_bytes(attachment.data)
        except OSError as exc:
            raise UpstreamError(
                f"Failed to write upload {attachment.filename}", cause=exc
            ) from exc
        return AssetRef(
            url=f"{self.url_prefix.rstrip('/')}/{attachment.filename}",
            handle=attachment.filename,
        )

    def delete(self, handle: str) -> None:
        """Remove a stored upload; missing files are ignored."""
        try:
            self._path(handle).unlink(missing_ok=True)
        except OSError as exc:
            raise UpstreamError(f"Failed to delete upload {handle}", cause=exc) from exc

    def _path(self, handle: str) -> Path:
        # Handles are bare file names; never follow directories out of the root.
        return self.directory / Path(handle).name
