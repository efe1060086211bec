"""Centralized exception hierarchy for the content API.

All custom exceptions inherit from AppException, which carries:
- a human-readable message (used when no translation exists)
- a machine-readable error code and an HTTP status code
- an i18n message_key plus interpolation params
- an optional details dict

The exception handler in main.py renders these as JSON, translating the
message into the request locale.

Locale resolution itself never raises; it returns None and callers decide
what an unknown locale means. Writes reject one with UnsupportedLocaleError.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        *,
        message_key: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.message_key = message_key
        self.params = params or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        result: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.message_key:
            result["message_key"] = self.message_key
        return result


class ResourceNotFoundError(AppException):
    """Requested content entry (or other resource) does not exist."""

    def __init__(self, resource: str, identifier: str | None = None):
        msg = f"{resource} not found"
        message_key = "error_not_found"
        params: dict[str, Any] = {"resource": resource}
        if identifier:
            msg = f"{resource} not found: {identifier}"
            message_key = "error_not_found_with_id"
            params["id"] = identifier
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            404,
            {"resource": resource, "id": identifier}
            if identifier
            else {"resource": resource},
            message_key=message_key,
            params=params,
        )


class ResourceExistsError(AppException):
    """Resource already exists, e.g. a translation in the target locale."""

    def __init__(self, resource: str, field: str | None = None):
        msg = f"{resource} already exists"
        message_key = "error_already_exists"
        params: dict[str, Any] = {"resource": resource}
        if field:
            msg = f"{resource} with this {field} already exists"
            message_key = "error_already_exists_with_field"
            params["field"] = field
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_EXISTS",
            409,
            {"resource": resource, "field": field} if field else {"resource": resource},
            message_key=message_key,
            params=params,
        )


class ValidationError(AppException):
    """Request validation failed (beyond Pydantic's automatic validation)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message,
            "VALIDATION_ERROR",
            422,
            {"field": field} if field else {},
            message_key="error_validation_with_message",
            params={"message": message},
        )


class UnsupportedLocaleError(ValidationError):
    """A write names a locale that matches no configured locale."""

    def __init__(self, locale: str):
        super().__init__(f"Unsupported locale: {locale}", field="locale")
        self.error_code = "UNSUPPORTED_LOCALE"
        self.message_key = "error_unsupported_locale"
        self.params = {"code": locale}


class ContentStoreError(AppException):
    """The content store failed to execute a query."""

    def __init__(self, operation: str, message: str | None = None):
        msg = f"Content store {operation} failed"
        message_key = "error_content_store"
        params: dict[str, Any] = {"operation": operation}
        if message:
            msg = f"Content store {operation} failed: {message}"
            message_key = "error_content_store_with_message"
            params["message"] = message
        super().__init__(
            msg,
            "CONTENT_STORE_ERROR",
            503,
            {"operation": operation},
            message_key=message_key,
            params=params,
        )
