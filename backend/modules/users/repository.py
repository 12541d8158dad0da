"""
User repository for database access.

Encapsulates all PostgreSQL queries and data mapping for the ``users`` table
(layout in schema.sql).
"""

import logging
import threading
from datetime import datetime
from typing import Any, Optional

from shared.database import IConnectionProvider, get_connection_pool
from shared.exceptions import ConflictError
from shared.models import QueryParams, ResultPaging
from shared.repository import BaseRepository
from shared.workers import WorkerPool, get_worker_pool

from .exceptions import DuplicateUserError, UserNotFoundError
from .models import User, UserUpdate

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    "id",
    "first_name",
    "last_name",
    "email",
    "password",
    "created_by",
    "updated_by",
    "created_at",
    "updated_at",
)
_SELECT_USER = f"SELECT {', '.join(USER_COLUMNS)} FROM users"


class UserRepository(BaseRepository[User]):
    """
    PostgreSQL-backed IUserRepository.

    Each public method is one transaction on one pooled connection, executed
    on the worker pool.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for deciding who may call what.
    """

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_all(self, params: QueryParams) -> ResultPaging[User]:
        """
        List users with pagination.

        The count and the page are read in the same transaction. Under
        PostgreSQL's default READ COMMITTED isolation each statement takes its
        own snapshot, so a concurrent write between them can make ``total``
        and ``items`` disagree by that write; this is accepted.
        """
        limit, offset = params.limit, params.offset

        def query(cur: Any) -> tuple[int, list[dict[str, Any]]]:
            cur.execute("SELECT COUNT(*) AS total FROM users")
            total = cur.fetchone()["total"]
            cur.execute(
                f"{_SELECT_USER} ORDER BY created_at, id LIMIT %s OFFSET %s",
                (limit, offset),
            )
            return total, cur.fetchall()

        total, rows = await self._run(query)
        return ResultPaging[User](
            total=total,
            items=[self._map_to_user(row) for row in rows],
        )

    async def find(self, user_id: str) -> User:
        row = await self._fetch_one("id", user_id)
        if row is None:
            raise UserNotFoundError(user_id)
        return self._map_to_user(row)

    async def find_by_email(self, email: str) -> User:
        row = await self._fetch_one("email", email)
        if row is None:
            raise UserNotFoundError(email, field="email")
        return self._map_to_user(row)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create(self, user: User) -> User:
        """
        Insert a new user row.

        Returns the given record unchanged; nothing is assigned by the store.
        """
        values = tuple(getattr(user, column) for column in USER_COLUMNS)
        placeholders = ", ".join(["%s"] * len(USER_COLUMNS))

        def query(cur: Any) -> None:
            cur.execute(
                f"INSERT INTO users ({', '.join(USER_COLUMNS)}) VALUES ({placeholders})",
                values,
            )

        try:
            await self._run(query)
        except ConflictError as e:
            raise DuplicateUserError() from e

        logger.debug(f"Created user {user.id}")
        return user

    async def update(self, user_id: str, patch: UserUpdate) -> User:
        """Overwrite profile fields, then re-read the row in the same transaction."""

        def query(cur: Any) -> dict[str, Any]:
            cur.execute(
                """
                UPDATE users
                   SET first_name = %s, last_name = %s, email = %s,
                       updated_by = %s, updated_at = %s
                 WHERE id = %s
                """,
                (
                    patch.first_name,
                    patch.last_name,
                    patch.email,
                    patch.updated_by,
                    patch.updated_at,
                    user_id,
                ),
            )
            return self._refetch_updated(cur, user_id)

        try:
            row = await self._run(query)
        except ConflictError as e:
            raise DuplicateUserError("A user with that email already exists") from e

        logger.debug(f"Updated user {user_id}")
        return self._map_to_user(row)

    async def update_password(
        self,
        user_id: str,
        password_digest: str,
        updated_by: str,
        updated_at: datetime,
    ) -> User:
        def query(cur: Any) -> dict[str, Any]:
            cur.execute(
                "UPDATE users SET password = %s, updated_by = %s, updated_at = %s WHERE id = %s",
                (password_digest, updated_by, updated_at, user_id),
            )
            return self._refetch_updated(cur, user_id)

        row = await self._run(query)
        logger.debug(f"Rotated password for user {user_id}")
        return self._map_to_user(row)

    async def delete(self, user_id: str) -> None:
        """Delete a user; a missing id is a no-op."""

        def query(cur: Any) -> int:
            cur.execute("DELETE FROM users WHERE id = %s", (user_id,))
            return cur.rowcount

        deleted = await self._run(query)
        logger.debug(f"Deleted user {user_id} ({deleted} row(s))")

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    async def _fetch_one(self, column: str, value: str) -> Optional[dict[str, Any]]:
        # column is always one of our literals, never caller input
        def query(cur: Any) -> Optional[dict[str, Any]]:
            cur.execute(f"{_SELECT_USER} WHERE {column} = %s", (value,))
            return cur.fetchone()

        return await self._run(query)

    @staticmethod
    def _refetch_updated(cur: Any, user_id: str) -> dict[str, Any]:
        if cur.rowcount == 0:
            raise UserNotFoundError(user_id)
        cur.execute(f"{_SELECT_USER} WHERE id = %s", (user_id,))
        return cur.fetchone()

    @staticmethod
    def _map_to_user(row: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(row["id"]),
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            password=row["password"],
            created_by=row["created_by"],
            updated_by=row["updated_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


# Module-level instance getter
_repository_instance: Optional[UserRepository] = None
_repository_lock = threading.Lock()


def get_user_repository(
    pool: Optional[IConnectionProvider] = None,
    workers: Optional[WorkerPool] = None,
) -> UserRepository:
    """Get the user repository singleton, wired to the shared pools by default."""
    global _repository_instance
    if _repository_instance is not None:
        return _repository_instance

    with _repository_lock:
        if _repository_instance is None:
            _repository_instance = UserRepository(
                pool or get_connection_pool(),
                workers or get_worker_pool(),
            )
        return _repository_instance


def reset_user_repository() -> None:
    """Reset the repository singleton (for testing and shutdown)."""
    global _repository_instance
    with _repository_lock:
        _repository_instance = None
