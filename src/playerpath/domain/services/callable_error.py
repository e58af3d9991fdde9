"""Structured errors returned by callable operations."""

from enum import Enum


class ErrorCategory(str, Enum):
    """Error categories understood by the mobile clients."""

    UNAUTHENTICATED = "unauthenticated"
    INVALID_ARGUMENT = "invalid-argument"
    NOT_FOUND = "not-found"
    PERMISSION_DENIED = "permission-denied"
    INTERNAL = "internal"


class CallableError(Exception):
    """Raised by a callable operation with a user-displayable message.

    Args:
        category: Error category.
        message: Human-readable error message.
    """

    def __init__(self, category: ErrorCategory, message: str) -> None:
        self.category = category
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.category.value, "message": self.message}
