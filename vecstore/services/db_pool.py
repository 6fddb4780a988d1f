"""
Shared PostgreSQL connection pool (singleton).

Provides a single psycopg ConnectionPool from which long-lived store
connections are checked out. The pool, not the vector store, owns the
connection lifecycle: stores only borrow a connection handed to them.

When DATABASE_URL is empty the pool is not created and
is_configured() returns False; callers should check before use.
"""

from __future__ import annotations

import threading

from vecstore.config import Config


_pool = None
_pool_lock = threading.Lock()


def is_configured() -> bool:
    """Return True when DATABASE_URL is set."""
    return bool(Config.DATABASE_URL)


def get_pool():
    """Get or create the shared ConnectionPool (lazy, thread-safe).

    Raises:
        ValueError: If DATABASE_URL is not configured.
    """
    global _pool
    if _pool is None:
        with _pool_lock:
            if _pool is None:
                if not is_configured():
                    raise ValueError("DATABASE_URL is not configured")
                from psycopg_pool import ConnectionPool

                _pool = ConnectionPool(
                    Config.DATABASE_URL,
                    min_size=Config.DB_POOL_MIN_SIZE,
                    max_size=Config.DB_POOL_MAX_SIZE,
                    timeout=Config.DB_POOL_TIMEOUT,
                    open=True,
                    check=ConnectionPool.check_connection,
                )
    return _pool


def acquire_connection():
    """Check a connection out of the shared pool.

    The caller must hand it back with release_connection() once every
    store and collection using it is done.
    """
    return get_pool().getconn()


def release_connection(conn) -> None:
    """Return a connection obtained from acquire_connection()."""
    get_pool().putconn(conn)


def close_pool() -> None:
    """Close the shared pool (idempotent, thread-safe)."""
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.close()
            _pool = None
