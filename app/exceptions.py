from typing import Any, Mapping, Optional

from domain.enums import LocationErrorCode, SearchErrorCode


class AppError(Exception):
    """Base class for errors raised by stores, repositories and sessions.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Application error"

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
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"


class NotFoundError(AppError):
    """Raised when a requested restaurant, menu or place was not found."""

    http_status = 404
    default_message = "Not found"


class StorageError(AppError):
    """Raised when the favorites store cannot be opened, saved to or deleted from."""

    http_status = 503
    default_message = "Storage failure"


class SearchError(AppError):
    """Raised when a nearby-places search fails.

    ``code`` is always a SearchErrorCode value; EMPTY_DATA covers missing or
    unparseable payloads.
    """

    http_status = 502
    default_message = "Place search failed"

    def __init__(self, code: SearchErrorCode, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message or code.value, details=details, code=code.value)
        self.error_code = code


class LocationError(AppError):
    """Raised when the device location is denied or cannot be fixed."""

    http_status = 409
    default_message = "Location unavailable"

    def __init__(self, code: LocationErrorCode, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message or code.value, details=details, code=code.value)
        self.error_code = code
