"""
Shared bounded worker pool (singleton).

Blocking backend calls (metadata queries, schema bootstrap, index
listing) are submitted here so callers get a Future instead of
blocking. Sized by WORKER_POOL_MAX_WORKERS.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from vecstore.config import Config


_executor = None
_executor_lock = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    """Get or create the shared executor (lazy, thread-safe)."""
    global _executor
    if _executor is None:
        with _executor_lock:
            if _executor is None:
                _executor = ThreadPoolExecutor(
                    max_workers=Config.WORKER_POOL_MAX_WORKERS,
                    thread_name_prefix="vecstore-worker",
                )
    return _executor


def shutdown_executor(wait: bool = True) -> None:
    """Shut down the shared executor (idempotent, thread-safe)."""
    global _executor
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=wait)
            _executor = None
