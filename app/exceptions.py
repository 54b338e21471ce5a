from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message, shown to the user as-is
        details: optional mapping with extra context (field errors, ids)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Unexpected error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"


class UnauthorizedError(AppError):
    """Raised when authentication fails or no signed-in darent is present."""

    http_status = 401
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    """Raised when the signed-in darent may not touch the requested resource."""

    http_status = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    """Raised when a requested document was not found."""

    http_status = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Raised when a resource conflict occurs (e.g., duplicate email)."""

    http_status = 409
    default_message = "Conflict"


class StorageError(AppError):
    """Raised when the photo storage backend fails."""

    http_status = 502
    default_message = "Photo storage failed"
