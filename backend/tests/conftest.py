"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory IUserRepository, a security service with test secrets, and
resets for every module-level singleton.
"""

import pytest
from datetime import datetime, timezone
from typing import Callable, Optional

from api.dependencies import reset_container
from modules.users.exceptions import DuplicateUserError, UserNotFoundError
from modules.users.models import User, UserUpdate
from modules.users.repository import reset_user_repository
from modules.users.security import SecurityService, reset_security_service
from shared.models import QueryParams, ResultPaging
from shared.workers import WorkerPool


# Test secrets (only for testing)
TEST_SALT = "test-salt-for-testing-only"
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"


class InMemoryUserRepository:
    """IUserRepository backed by a dict, keyed by id, in insertion order."""

    def __init__(self) -> None:
        self.rows: dict[str, User] = {}

    async def get_all(self, params: QueryParams) -> ResultPaging[User]:
        users = list(self.rows.values())
        return ResultPaging[User](
            total=len(users),
            items=users[params.offset:params.offset + params.limit],
        )

    async def find(self, user_id: str) -> User:
        if user_id not in self.rows:
            raise UserNotFoundError(user_id)
        return self.rows[user_id]

    async def find_by_email(self, email: str) -> User:
        for user in self.rows.values():
            if user.email == email:
                return user
        raise UserNotFoundError(email, field="email")

    async def create(self, user: User) -> User:
        if user.id in self.rows or any(u.email == user.email for u in self.rows.values()):
            raise DuplicateUserError()
        self.rows[user.id] = user
        return user

    async def update(self, user_id: str, patch: UserUpdate) -> User:
        current = await self.find(user_id)
        if any(u.email == patch.email and u.id != user_id for u in self.rows.values()):
            raise DuplicateUserError("A user with that email already exists")
        self.rows[user_id] = current.model_copy(update=patch.model_dump())
        return self.rows[user_id]

    async def update_password(
        self, user_id: str, password_digest: str, updated_by: str, updated_at: datetime
    ) -> User:
        current = await self.find(user_id)
        self.rows[user_id] = current.model_copy(
            update={
                "password": password_digest,
                "updated_by": updated_by,
                "updated_at": updated_at,
            }
        )
        return self.rows[user_id]

    async def delete(self, user_id: str) -> None:
        self.rows.pop(user_id, None)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module-level singletons before and after each test."""
    reset_container()
    reset_security_service()
    reset_user_repository()
    yield
    reset_container()
    reset_security_service()
    reset_user_repository()


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Factory for User records with sensible defaults."""

    def _make(
        user_id: str = "user-123",
        email: str = "test@example.com",
        password: str = "digest",
        created_at: Optional[datetime] = None,
        **overrides,
    ) -> User:
        now = created_at or datetime(2024, 1, 1, tzinfo=timezone.utc)
        data = {
            "id": user_id,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": email,
            "password": password,
            "created_by": user_id,
            "updated_by": user_id,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return User(**data)

    return _make


@pytest.fixture
def memory_repository() -> InMemoryUserRepository:
    """Provide an empty in-memory user repository."""
    return InMemoryUserRepository()


@pytest.fixture
def security() -> SecurityService:
    """Security service with test secrets, hashing inline."""
    return SecurityService(salt=TEST_SALT, jwt_key=TEST_JWT_SECRET)


@pytest.fixture
def workers():
    """A small worker pool, shut down after the test."""
    pool = WorkerPool(2, name="test-worker")
    yield pool
    pool.shutdown()
