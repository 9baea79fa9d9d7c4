"""Supabase Storage asset store."""

from dataclasses import dataclass

from supabase import Client

from food_ordering.domain.errors import UpstreamError
from food_ordering.domain.models import AssetRef, Attachment
from food_ordering.services.assets import AssetStore


@dataclass
class SupabaseAssetStore(AssetStore):
    """Stores uploads in a public Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, attachment: Attachment) -> AssetRef:
        """Upload the attachment and return its public URL."""
        bucket = self.client.storage.from_(self.bucket)
        try:
            bucket.upload(
                path=attachment.filename,
                file=attachment.data,
                file_options={"content-type": attachment.content_type},
            )
            url = bucket.get_public_url(attachment.filename)
        except Exception as exc:
            raise UpstreamError(
                f"Failed to upload {attachment.filename} to {self.bucket}", cause=exc
            ) from exc
        return AssetRef(url=url, handle=attachment.filename)

    def delete(self, handle: str) -> None:
        """Remove an object from the bucket."""
        try:
            self.client.storage.from_(self.bucket).remove([handle])
        except Exception as exc:
            raise UpstreamError(
                f"Failed to delete {handle} from {self.bucket}", cause=exc
            ) from exc
