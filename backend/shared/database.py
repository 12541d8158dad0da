"""
PostgreSQL connection pool.

Wraps psycopg2's ThreadedConnectionPool with two guarantees the raw pool does
not give:

- callers past the pool's capacity wait (up to a timeout) instead of failing
  immediately with PoolError;
- every checked-out connection is committed or rolled back and handed back to
  the pool on every exit path.

Repositories depend on IConnectionProvider, not on this class, so tests and
other stores can supply their own provider.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, ContextManager, Iterator, Optional, Protocol, runtime_checkable

import psycopg2
from psycopg2.pool import ThreadedConnectionPool

from .config import get_settings
from .exceptions import ConnectionFailureError

logger = logging.getLogger(__name__)


@runtime_checkable
class IConnectionProvider(Protocol):
    """
    Source of exclusive DB-API connections.

    ``connection()`` yields a connection used by exactly one unit of work.
    Leaving the block commits; an exception rolls back. Either way the
    connection is released.
    """

    def connection(self) -> ContextManager[Any]:
        ...


class ConnectionPool:
    """Bounded, blocking pool of psycopg2 connections."""

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
        timeout: float = 30.0,
        pool_factory: Callable[..., Any] = ThreadedConnectionPool,
    ) -> None:
        """
        Open the pool.

        Args:
            dsn: libpq connection string or URL.
            min_size: Connections opened eagerly.
            max_size: Upper bound on simultaneously checked-out connections.
            timeout: Seconds a caller waits for a free connection.
            pool_factory: Underlying pool constructor (overridable for tests).

        Raises:
            ConnectionFailureError: If the initial connections cannot be opened.
        """
        if max_size < 1 or min_size < 0 or min_size > max_size:
            raise ValueError("Pool sizes must satisfy 0 <= min_size <= max_size, max_size >= 1")
        try:
            self._pool = pool_factory(min_size, max_size, dsn)
        except psycopg2.Error as e:
            raise ConnectionFailureError(
                f"Could not open database pool: {e}",
                code="POOL_OPEN_FAILED",
            ) from e
        self._slots = threading.BoundedSemaphore(max_size)
        self._timeout = timeout
        self._max_size = max_size

    @property
    def max_size(self) -> int:
        return self._max_size

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """
        Check out a connection for one unit of work.

        Raises:
            ConnectionFailureError: If no connection frees up within the
                timeout or the pool cannot hand one out.
        """
        if not self._slots.acquire(timeout=self._timeout):
            raise ConnectionFailureError(
                f"Timed out after {self._timeout}s waiting for a database connection",
                code="POOL_TIMEOUT",
                details={"timeout": self._timeout, "max_size": self._max_size},
            )
        try:
            try:
                conn = self._pool.getconn()
            except psycopg2.Error as e:
                raise ConnectionFailureError(
                    f"Could not acquire database connection: {e}",
                    code="CONNECTION_ACQUIRE_FAILED",
                ) from e

            discard = False
            try:
                yield conn
                conn.commit()
            except BaseException:
                discard = not self._rollback(conn)
                raise
            finally:
                self._pool.putconn(conn, close=discard or bool(conn.closed))
        finally:
            self._slots.release()

    def check(self) -> None:
        """
        Run a trivial query on a pooled connection.

        Raises:
            ConnectionFailureError: If the store cannot answer.
        """
        try:
            with self.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1")
                    cur.fetchone()
        except psycopg2.Error as e:
            raise ConnectionFailureError(
                f"Database check failed: {e}",
                code="CHECK_FAILED",
            ) from e

    def close(self) -> None:
        """Close every connection held by the pool."""
        self._pool.closeall()

    @staticmethod
    def _rollback(conn: Any) -> bool:
        """Roll back; returns False when the connection is unusable."""
        try:
            conn.rollback()
            return True
        except psycopg2.Error as e:
            logger.warning(f"Rollback failed, discarding connection: {e}")
            return False


# Module-level pool cache
_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def get_connection_pool() -> ConnectionPool:
    """
    Get the process-wide connection pool, opening it on first use.

    Returns:
        ConnectionPool configured from settings

    Raises:
        RuntimeError: If USERBASE_DATABASE_URL is not set.
    """
    global _pool

    if _pool is not None:
        return _pool

    with _pool_lock:
        if _pool is None:
            settings = get_settings()
            if not settings.database_url:
                raise RuntimeError(
                    "Database configuration missing. "
                    "Set the USERBASE_DATABASE_URL environment variable."
                )
            _pool = ConnectionPool(
                settings.database_url,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                timeout=settings.db_pool_timeout,
            )
            logger.info(
                f"Opened database pool (min={settings.db_pool_min_size}, "
                f"max={settings.db_pool_max_size})"
            )
        return _pool


def reset_connection_pool() -> None:
    """
    Close and forget the cached pool.

    Useful for testing or when configuration changes.
    """
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.close()
        _pool = None
