"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together the concrete
repository and security service behind the users module interfaces.
Route handlers only ever see the interfaces.

Sync dependencies run on FastAPI's threadpool, so first access to the
container and its services can happen from several threads at once.
"""

import threading
from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.users.interfaces import IUserRepository, ISecurityService, IUserService
    from shared.database import ConnectionPool


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._user_repository: "IUserRepository | None" = None
        self._security_service: "ISecurityService | None" = None
        self._user_service: "IUserService | None" = None

    @property
    def connection_pool(self) -> "ConnectionPool":
        """Get the shared connection pool."""
        from shared.database import get_connection_pool
        return get_connection_pool()

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        with self._lock:
            if self._user_repository is None:
                from modules.users.repository import get_user_repository
                self._user_repository = get_user_repository()
            return self._user_repository

    @property
    def security(self) -> "ISecurityService":
        """Get the security service instance."""
        with self._lock:
            if self._security_service is None:
                from modules.users.security import get_security_service
                self._security_service = get_security_service()
            return self._security_service

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        with self._lock:
            if self._user_service is None:
                from modules.users.service import UserService
                self._user_service = UserService(
                    repository=self.user_repository,
                    security=self.security,
                )
            return self._user_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        with self._lock:
            self._user_repository = None
            self._security_service = None
            self._user_service = None


# Module-level container singleton
_container: ServiceContainer | None = None
_container_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    with _container_lock:
        if _container is None:
            _container = ServiceContainer()
        return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    with _container_lock:
        _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_user_service() -> "IUserService":
    """FastAPI dependency for the user service."""
    return get_container().users
