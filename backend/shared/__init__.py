"""
Shared infrastructure for the Userbase backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: PostgreSQL connection pool
- workers: Bounded thread pool for blocking calls
- repository: Base repository with error translation
- exceptions: Base exception classes and error classification
- models: Pagination models

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import (
    ConnectionPool,
    IConnectionProvider,
    get_connection_pool,
    reset_connection_pool,
)
from .workers import WorkerPool, get_worker_pool, reset_worker_pool
from .exceptions import (
    ErrorKind,
    UserbaseError,
    NotFoundError,
    ConflictError,
    ConnectionFailureError,
    StoreError,
    AuthenticationError,
    InternalError,
)
from .models import QueryParams, PageParams, ResultPaging

__all__ = [
    "Settings",
    "get_settings",
    "ConnectionPool",
    "IConnectionProvider",
    "get_connection_pool",
    "reset_connection_pool",
    "WorkerPool",
    "get_worker_pool",
    "reset_worker_pool",
    "ErrorKind",
    "UserbaseError",
    "NotFoundError",
    "ConflictError",
    "ConnectionFailureError",
    "StoreError",
    "AuthenticationError",
    "InternalError",
    "QueryParams",
    "PageParams",
    "ResultPaging",
]
