"""
Service container for dependency injection.

Owns the shared backend handles (a pooled SQL connection, a Valkey client)
and builds the configured vector store on top of them. The container, not
the store, is responsible for releasing those handles.
"""

from __future__ import annotations

import threading
from typing import Any, Optional, TYPE_CHECKING

from vecstore.config import Config
from vecstore.services import db_pool, redis_pool
from vecstore.services.backend_registry import get_backend_registry
from vecstore.utils import configure_logging, get_logger
from vecstore.utils.errors import ConfigurationError

if TYPE_CHECKING:
    from vecstore.backends import VectorStore


class ServiceContainer:
    """
    Dependency injection container for vector store services.

    Usage:
        container = get_container()
        store = container.vector_store
        names = store.get_collection_names_async().result()
        container.close()
    """

    _instance: Optional[ServiceContainer] = None
    _instance_lock: threading.Lock = threading.Lock()

    def __init__(self):
        """Initialize service container (singleton)."""
        # Skip re-initialization if already initialized
        if hasattr(self, "logger"):
            return

        configure_logging()
        self.logger = get_logger("container")
        self._lock = threading.RLock()
        self._sql_connection: Any = None
        self._valkey_client: Any = None
        self._vector_store: Optional[VectorStore] = None

    def __new__(cls) -> ServiceContainer:
        """Ensure singleton pattern with double-checked locking."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def _get_config_attr(self, attr: str, default: str = "") -> str:
        """Get a Config attribute value."""
        return getattr(Config, attr, default)

    @property
    def sql_connection(self) -> Any:
        """
        Get the shared SQL connection (checked out of the pool on first use).

        Raises:
            ConfigurationError: If DATABASE_URL is not configured
        """
        with self._lock:
            if self._sql_connection is None:
                if not db_pool.is_configured():
                    raise ConfigurationError(
                        "SQL configuration missing: DATABASE_URL is required",
                        backend="sql",
                    )
                self._sql_connection = db_pool.acquire_connection()
                self.logger.debug("Acquired SQL connection from pool")
            return self._sql_connection

    @property
    def valkey_client(self) -> Any:
        """
        Get the shared Valkey client.

        Raises:
            ConfigurationError: If REDIS_URL is not configured
        """
        with self._lock:
            if self._valkey_client is None:
                if not redis_pool.is_configured():
                    raise ConfigurationError(
                        "Valkey configuration missing: REDIS_URL is required",
                        backend="valkey",
                    )
                self._valkey_client = redis_pool.get_client()
            return self._valkey_client

    @property
    def vector_store(self) -> VectorStore:
        """
        Get the configured vector store (lazy-loaded, prepared).

        Raises:
            ValueError: If VECTOR_STORE_BACKEND names an unknown backend
        """
        with self._lock:
            if self._vector_store is None:
                backend_name = self._get_config_attr("VECTOR_STORE_BACKEND", "sql")
                self._vector_store = get_backend_registry().create(
                    "vectorstore", backend_name, self
                )
                self.logger.info(f"Initialized '{backend_name}' vector store")
            return self._vector_store

    def close(self):
        """Drop the store, hand the SQL connection back and close the valkey client."""
        with self._lock:
            self._vector_store = None
            if self._sql_connection is not None:
                db_pool.release_connection(self._sql_connection)
                self._sql_connection = None
                self.logger.debug("Released SQL connection to pool")
            if self._valkey_client is not None:
                self._valkey_client = None
                redis_pool.close_client()
                self.logger.debug("Closed shared valkey client")

    def reset(self):
        """Reset all cached instances (for testing)."""
        self.close()
        self.logger.debug("Service container reset")


# Module-level singleton accessor
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container instance.

    Returns:
        ServiceContainer singleton
    """
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container():
    """Reset the global service container (for testing)."""
    global _container
    with ServiceContainer._instance_lock:
        if _container:
            _container.reset()
        _container = None
        ServiceContainer._instance = None
