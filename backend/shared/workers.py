"""
Bounded worker pool for blocking work.

Store calls (psycopg2) and password hashing block the calling thread. They are
handed to a fixed-size thread pool and awaited from the event loop so other
requests keep making progress.
"""

import asyncio
import functools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

from .config import get_settings

logger = logging.getLogger(__name__)

R = TypeVar("R")


class WorkerPool:
    """A fixed number of threads that run blocking callables for async callers."""

    def __init__(self, max_workers: int, name: str = "userbase-worker") -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=name,
        )

    @property
    def max_workers(self) -> int:
        return self._max_workers

    async def run(self, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """
        Run ``func(*args, **kwargs)`` on a worker thread and await its result.

        Exceptions raised by ``func`` propagate to the awaiting caller. If the
        caller is cancelled the call still runs to completion on its thread.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, functools.partial(func, *args, **kwargs)
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and optionally wait for running calls."""
        self._executor.shutdown(wait=wait)


# Module-level worker pool cache
_worker_pool: Optional[WorkerPool] = None
_worker_pool_lock = threading.Lock()


def get_worker_pool() -> WorkerPool:
    """Get the process-wide worker pool, sized from settings."""
    global _worker_pool
    if _worker_pool is not None:
        return _worker_pool

    with _worker_pool_lock:
        if _worker_pool is None:
            settings = get_settings()
            _worker_pool = WorkerPool(settings.db_worker_threads)
            logger.debug(f"Started worker pool with {settings.db_worker_threads} threads")
        return _worker_pool


def reset_worker_pool() -> None:
    """
    Shut down and forget the cached worker pool.

    Useful for testing or on application shutdown.
    """
    global _worker_pool
    with _worker_pool_lock:
        if _worker_pool is not None:
            _worker_pool.shutdown(wait=False)
        _worker_pool = None
