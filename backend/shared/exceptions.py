"""
Base exception classes for the Userbase backend.

Every error raised by the repository and security layers is a UserbaseError
carrying a message and an ErrorKind classification. Callers branch on
``error.kind`` rather than on concrete exception types; the subclasses exist
so each layer can raise something descriptive with a stable code.
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Classification shared by all Userbase errors."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    CONNECTION_FAILURE = "connection_failure"
    STORE_FAILURE = "store_failure"
    AUTH_FAILURE = "auth_failure"
    INTERNAL_FAILURE = "internal_failure"


# HTTP status per classification, used by the API error handler.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.AUTH_FAILURE: 403,
    ErrorKind.CONNECTION_FAILURE: 500,
    ErrorKind.STORE_FAILURE: 500,
    ErrorKind.INTERNAL_FAILURE: 500,
}


class UserbaseError(Exception):
    """
    Base exception for all Userbase errors.

    All custom exceptions should inherit from this class and set ``kind``.
    """

    kind: ErrorKind = ErrorKind.INTERNAL_FAILURE

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    @property
    def status_code(self) -> int:
        """HTTP status the API layer reports for this error."""
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(UserbaseError):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(UserbaseError):
    """Uniqueness or integrity constraint violated."""

    kind = ErrorKind.CONFLICT


class ConnectionFailureError(UserbaseError):
    """A connection to the store could not be acquired."""

    kind = ErrorKind.CONNECTION_FAILURE


class StoreError(UserbaseError):
    """The underlying store failed while executing a statement."""

    kind = ErrorKind.STORE_FAILURE


class AuthenticationError(UserbaseError):
    """Authentication failed (invalid, expired or missing credentials)."""

    kind = ErrorKind.AUTH_FAILURE


class InternalError(UserbaseError):
    """Unexpected internal failure."""

    kind = ErrorKind.INTERNAL_FAILURE
