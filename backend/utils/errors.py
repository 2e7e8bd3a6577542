# backend/utils/errors.py
"""Storefront error types and their user-facing messages."""
from typing import Optional


class StorefrontError(Exception):
    """Base class for failures of the storefront's collaborators."""

    status_code = 500
    code = "unknown"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "")
        self.message = message


class PermissionDeniedError(StorefrontError):
    status_code = 403
    code = "permission-denied"


class NotFoundError(StorefrontError):
    status_code = 404
    code = "not-found"


class ServiceUnavailableError(StorefrontError):
    status_code = 503
    code = "unavailable"


class EmptyCartError(StorefrontError):
    status_code = 400
    code = "empty-cart"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Cart is empty")


# Friendly text per error code, shown in notifications instead of raw errors
_MESSAGES = {
    "permission-denied": "Access Denied: You do not have permission to perform this action.",
    "unavailable": "Service temporarily unavailable. Please check your connection.",
    "not-found": "The requested resource was not found.",
    "invalid-credential": "Invalid email or password. Please try again.",
}


def get_error_message(error: Optional[BaseException]) -> str:
    if error is None:
        return "An unknown error occurred."

    code = getattr(error, "code", None)
    if code in _MESSAGES:
        return _MESSAGES[code]

    message = getattr(error, "message", None) or str(error)
    if message:
        return message

    return "Something went wrong. Please try again."


def storefront_error_from_db(error: Exception) -> StorefrontError:
    """Map a database failure to the storefront error a caller can act on."""
    text = str(error).lower()
    if "readonly" in text or "permission denied" in text:
        return PermissionDeniedError(str(error))
    return ServiceUnavailableError(str(error))
