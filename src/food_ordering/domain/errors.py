"""Application error taxonomy.

Every error carries the HTTP status it maps to and a message that is safe to
show to API clients. The envelope handlers in ``food_ordering.api.envelope``
turn these into responses.
"""

GENERIC_ERROR_MESSAGE = (
    "An error occurred while processing your request. Please try again later."
)


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None, data: object | None = None) -> None:
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing, empty or malformed input."""

    status_code = 400
    default_message = "Please provide all required fields"

    def __init__(
        self, message: str | None = None, fields: list[str] | None = None
    ) -> None:
        self.fields = fields or []
        if message is None and self.fields:
            message = f"{self.default_message}: {', '.join(self.fields)}"
        super().__init__(message, data={"fields": self.fields} if self.fields else None)


class ConflictError(AppError):
    """A uniqueness constraint would be violated."""

    status_code = 400
    default_message = "Resource already exists"


class NotFoundError(AppError):
    """The requested entity or a referenced entity does not exist."""

    status_code = 404
    default_message = "Resource not found"


class AuthError(AppError):
    """Credentials or bearer token were rejected."""

    status_code = 401
    default_message = "Invalid credentials"


class UpstreamError(AppError):
    """The store or the asset provider failed.

    ``detail`` and ``cause`` are for logs only; clients always receive the
    generic message.
    """

    status_code = 500

    def __init__(self, detail: str, cause: BaseException | None = None) -> None:
        self.detail = detail
        self.cause = cause
        super().__init__()

    def __str__(self) -> str:
        return self.detail
