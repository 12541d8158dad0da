"""
Users module.

Handles user persistence, password hashing and access tokens.

Public API:
- IUserRepository: Interface for user storage
- ISecurityService: Interface for hashing and tokens
- IUserService: Interface for account workflows
- User, UserUpdate, TokenPayload: Core models
- Users exceptions: UserNotFoundError, DuplicateUserError, etc.
"""

from .interfaces import IUserRepository, ISecurityService, IUserService
from .models import User, UserUpdate, TokenPayload
from .exceptions import (
    UserNotFoundError,
    DuplicateUserError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    TokenSigningError,
)

__all__ = [
    # Interfaces
    "IUserRepository",
    "ISecurityService",
    "IUserService",
    # Models
    "User",
    "UserUpdate",
    "TokenPayload",
    # Exceptions
    "UserNotFoundError",
    "DuplicateUserError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "TokenSigningError",
]
