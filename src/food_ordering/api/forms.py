"""Reading resource payloads from JSON, urlencoded or multipart requests."""

from fastapi import Request
from starlette.datastructures import UploadFile

from food_ordering.domain.errors import ValidationError
from food_ordering.domain.models import Attachment
from food_ordering.services.uploads import UploadPolicy

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def read_submission(
    request: Request, policy: UploadPolicy, file_field: str = "image"
) -> tuple[dict[str, object], Attachment | None]:
    """Return the request fields and the accepted upload, if any.

    Only ``file_field`` may carry a file, and only one.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as exc:
            raise ValidationError("Request body must be valid JSON") from exc
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        return body, None

    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        payload: dict[str, object] = {}
        attachment = None
        for key, value in form.multi_items():
            if not isinstance(value, UploadFile):
                payload[key] = value
                continue
            if not value.filename:
                # Browsers send an empty part for an untouched file input.
                continue
            if key != file_field:
                raise ValidationError(f"Unexpected file field: {key}", fields=[key])
            if attachment is not None:
                raise ValidationError(
                    f"Only one file is accepted for {key}", fields=[key]
                )
            # The parser spools parts to disk; only read ones within the cap.
            policy.check_size(key, value.size)
            attachment = policy.accept(
                key, value.filename, value.content_type, await value.read()
            )
        return payload, attachment

    if (await request.body()).strip():
        raise ValidationError(f"Unsupported content type: {content_type or 'none'}")
    return {}, None
