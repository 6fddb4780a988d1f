import logging
import shutil
import sqlite3
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from vecstore.config import Config


@pytest.fixture
def temp_data_dir():
    """Create an isolated temporary data directory for tests."""
    path = Path(tempfile.mkdtemp())
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, temp_data_dir):
    """Redirect Config paths into the temp directory and keep logs off disk."""
    monkeypatch.setattr(Config, "LOG_DIR", temp_data_dir / "logs")
    monkeypatch.setattr(Config, "LOG_TO_FILE", False)
    yield


@pytest.fixture
def executor():
    """Dedicated worker pool so tests never share the module-level one."""
    pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="test-worker")
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def sqlite_conn():
    """Empty in-memory database usable from worker threads."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    yield conn
    conn.close()


@pytest.fixture(scope="session", autouse=True)
def shutdown_shared_worker_pool():
    """Stop the shared executor once the session finishes."""
    yield
    from vecstore.services.worker_pool import shutdown_executor

    logging.getLogger("test.conftest").debug("Shutting down shared worker pool")
    shutdown_executor(wait=True)
