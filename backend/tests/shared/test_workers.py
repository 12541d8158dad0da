"""Tests for shared/workers.py."""

import asyncio
import threading
import time

import pytest
from unittest.mock import MagicMock, patch

from shared.workers import WorkerPool, get_worker_pool, reset_worker_pool


class TestWorkerPool:
    def test_rejects_zero_workers(self):
        with pytest.raises(ValueError):
            WorkerPool(0)

    @pytest.mark.asyncio
    async def test_runs_callable_with_arguments(self, workers):
        """Should return the callable's result."""
        result = await workers.run(lambda a, b=0: a + b, 2, b=3)
        assert result == 5

    @pytest.mark.asyncio
    async def test_runs_off_the_event_loop_thread(self, workers):
        """Work should execute on a worker thread, not the loop's thread."""
        loop_thread = threading.get_ident()
        worker_thread = await workers.run(threading.get_ident)
        assert worker_thread != loop_thread

    @pytest.mark.asyncio
    async def test_propagates_exceptions(self, workers):
        def fail():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            await workers.run(fail)

    @pytest.mark.asyncio
    async def test_loop_stays_responsive_during_blocking_work(self, workers):
        """Blocking work must not stall other coroutines."""
        release = threading.Event()
        ticks = []

        async def ticker():
            for _ in range(3):
                ticks.append(True)
                await asyncio.sleep(0)
            release.set()

        blocked = workers.run(release.wait, 2.0)
        results = await asyncio.gather(blocked, ticker())

        assert results[0] is True
        assert len(ticks) == 3


class TestGetWorkerPool:
    def setup_method(self):
        reset_worker_pool()

    def teardown_method(self):
        reset_worker_pool()

    @patch("shared.workers.get_settings")
    def test_sized_from_settings(self, mock_settings):
        mock_settings.return_value.db_worker_threads = 3
        assert get_worker_pool().max_workers == 3

    @patch("shared.workers.get_settings")
    def test_caches_pool(self, mock_settings):
        mock_settings.return_value.db_worker_threads = 2
        assert get_worker_pool() is get_worker_pool()

    @patch("shared.workers.get_settings")
    def test_reset_creates_new_pool(self, mock_settings):
        mock_settings.return_value.db_worker_threads = 2
        first = get_worker_pool()
        reset_worker_pool()
        assert get_worker_pool() is not first

    @patch("shared.workers.WorkerPool")
    @patch("shared.workers.get_settings")
    def test_concurrent_first_use_starts_one_pool(self, mock_settings, mock_pool):
        """Threads racing on first use must share a single worker pool."""
        mock_settings.return_value.db_worker_threads = 2

        def slow_pool(*args, **kwargs):
            time.sleep(0.2)
            return MagicMock()

        mock_pool.side_effect = slow_pool
        results = []
        threads = [threading.Thread(target=lambda: results.append(get_worker_pool())) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        mock_pool.assert_called_once()
        assert len(set(map(id, results))) == 1
