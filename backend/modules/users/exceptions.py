"""
Users module exceptions.

These exceptions are raised by the repository, security and service layers
and carry the classification the API error handler maps to HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
)


class UserNotFoundError(NotFoundError):
    """Raised when no user matches the lookup key."""

    def __init__(self, key: str, field: str = "id"):
        super().__init__(
            f"User not found: {field}={key}",
            code="USER_NOT_FOUND",
            details={field: key},
        )


class DuplicateUserError(ConflictError):
    """Raised when a user with the same id or email already exists."""

    def __init__(self, message: str = "A user with that id or email already exists"):
        super().__init__(message, code="DUPLICATE_USER")


class InvalidTokenError(AuthenticationError):
    """Raised when a token is malformed or its signature does not verify."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a token's exp claim is in the past."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no token is supplied."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match a user."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class TokenSigningError(InternalError):
    """Raised when a token cannot be signed."""

    def __init__(self, message: str):
        super().__init__(f"Could not sign token: {message}", code="TOKEN_SIGNING_FAILED")
