"""
Base repository class for database access.

Provides a common abstraction layer for all repositories: a shared connection
provider, a worker pool for blocking driver calls, and translation of driver
errors into the Userbase error taxonomy.
"""

import logging
from typing import Any, Callable, Generic, TypeVar

import psycopg2
import psycopg2.errors
from psycopg2.extras import RealDictCursor

from .database import IConnectionProvider
from .exceptions import ConflictError, StoreError, UserbaseError
from .workers import WorkerPool

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Connection provider access via self._pool
    - Offloaded execution via self._run, one exclusive connection per call
    - Generic type parameter for model type hints

    Subclasses write their queries as plain functions of a cursor and pass them
    to ``_run``. Rows come back as dicts (RealDictCursor); subclasses handle
    dict-to-Pydantic mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            async def find(self, user_id: str) -> User:
                def query(cur):
                    cur.execute("SELECT * FROM users WHERE id = %s", (user_id,))
                    return cur.fetchone()

                row = await self._run(query)
                ...
    """

    def __init__(self, pool: IConnectionProvider, workers: WorkerPool) -> None:
        """
        Initialize the repository.

        Args:
            pool: Shared connection provider. Not owned; never closed here.
            workers: Worker pool that runs blocking driver calls.
        """
        self._pool = pool
        self._workers = workers

    async def _run(self, work: Callable[[Any], R]) -> R:
        """
        Run ``work(cursor)`` inside one transaction on a worker thread.

        The connection is committed when ``work`` returns and rolled back when
        it raises. Driver errors are re-raised as ConflictError (unique
        violations) or StoreError.
        """
        return await self._workers.run(self._execute, work)

    def _execute(self, work: Callable[[Any], R]) -> R:
        try:
            with self._pool.connection() as conn:
                with conn.cursor(cursor_factory=RealDictCursor) as cur:
                    return work(cur)
        except UserbaseError:
            raise
        except psycopg2.errors.UniqueViolation as e:
            raise ConflictError(
                f"Uniqueness constraint violated: {e}",
                code="UNIQUE_VIOLATION",
                details={"constraint": getattr(getattr(e, "diag", None), "constraint_name", None)},
            ) from e
        except psycopg2.Error as e:
            logger.warning(f"Store failure in {self.__class__.__name__}: {e}")
            raise StoreError(f"Database error: {e}", code="STORE_FAILURE") from e
