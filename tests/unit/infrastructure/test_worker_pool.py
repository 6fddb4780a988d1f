"""Tests for vecstore.services.worker_pool."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

from vecstore.config import Config


class TestWorkerPool:
    def setup_method(self):
        from vecstore.services import worker_pool

        worker_pool.shutdown_executor()

    def teardown_method(self):
        from vecstore.services import worker_pool

        worker_pool.shutdown_executor()

    def test_get_executor_creates_bounded_pool(self):
        from vecstore.services import worker_pool

        with patch.object(Config, "WORKER_POOL_MAX_WORKERS", 3):
            executor = worker_pool.get_executor()

        assert isinstance(executor, ThreadPoolExecutor)
        assert executor._max_workers == 3

    def test_get_executor_returns_same_instance(self):
        from vecstore.services import worker_pool

        assert worker_pool.get_executor() is worker_pool.get_executor()

    def test_runs_work_off_the_caller_thread(self):
        import threading

        from vecstore.services import worker_pool

        caller = threading.get_ident()
        worker = worker_pool.get_executor().submit(threading.get_ident).result(timeout=5)
        assert worker != caller

    def test_shutdown_resets(self):
        from vecstore.services import worker_pool

        first = worker_pool.get_executor()
        worker_pool.shutdown_executor()
        assert worker_pool._executor is None
        assert worker_pool.get_executor() is not first

    def test_shutdown_noop_when_none(self):
        from vecstore.services import worker_pool

        worker_pool.shutdown_executor()
        worker_pool.shutdown_executor()  # Should not raise
        assert worker_pool._executor is None
