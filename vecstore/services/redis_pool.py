"""
Shared valkey client for the key/value vector store.

valkey-py clients carry their own connection pool, so one client per
process is shared by every store and collection. The server must have the
search module loaded (FT.* commands).
"""

from __future__ import annotations

import threading
from typing import Any

from vecstore.config import Config
from vecstore.utils import get_logger

logger = get_logger("redis_pool")

_client: Any = None
_client_lock = threading.Lock()


def is_configured() -> bool:
    return bool(Config.REDIS_URL)


def get_client() -> Any:
    """Return the process-wide client, creating it on first call.

    Raises:
        ValueError: If REDIS_URL is not configured.
    """
    global _client
    if _client is not None:
        return _client

    with _client_lock:
        if _client is None:
            if not is_configured():
                raise ValueError("REDIS_URL is not configured")
            import valkey

            # FT._LIST and FT.INFO replies are read as str
            _client = valkey.from_url(
                Config.REDIS_URL,
                decode_responses=True,
                socket_timeout=Config.REDIS_SOCKET_TIMEOUT,
            )
            logger.debug("Created shared valkey client")
    return _client


def close_client() -> None:
    """Close and forget the shared client. A failing close still forgets it."""
    global _client
    with _client_lock:
        client, _client = _client, None
    if client is None:
        return
    try:
        client.close()
    except Exception as e:
        logger.warning(f"Error while closing valkey client: {e}")
