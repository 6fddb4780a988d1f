"""
Backend registry for dynamic vector store instantiation.

Maps (backend_type, backend_name) to factory functions that build a
ready-to-use store from the service container's shared handles.
Adding a new backend requires only a single register() call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from vecstore.backends import VectorStore
    from vecstore.services.container import ServiceContainer

BackendFactory = Callable[["ServiceContainer"], "VectorStore"]


class BackendRegistry:
    """Registry mapping (backend_type, backend_name) to factory functions."""

    def __init__(self):
        self._factories: dict[tuple[str, str], BackendFactory] = {}

    def register(self, backend_type: str, backend_name: str, factory: BackendFactory) -> None:
        """Register a factory for a given backend type and name."""
        self._factories[(backend_type, backend_name)] = factory

    def create(self, backend_type: str, backend_name: str, container: ServiceContainer) -> Any:
        """Create a backend instance. Raises ValueError if unknown."""
        key = (backend_type, backend_name)
        if key not in self._factories:
            raise ValueError(f"Unknown {backend_type} backend: {backend_name}")
        return self._factories[key](container)

    def has(self, backend_type: str, backend_name: str) -> bool:
        """Check if a backend is registered."""
        return (backend_type, backend_name) in self._factories

    def names(self, backend_type: str) -> list[str]:
        """List registered backend names for a given type."""
        return [name for (btype, name) in self._factories if btype == backend_type]


# --- Vector store factories ---

def _create_sql_vector_store(container: ServiceContainer) -> Any:
    from vecstore.backends.vectorstores.sql_query_provider import DefaultSQLQueryProvider
    from vecstore.backends.vectorstores.sql_store import (
        DBAPIVectorStore,
        DBAPIVectorStoreOptions,
    )

    connection = container.sql_connection
    provider = DefaultSQLQueryProvider(
        connection,
        collections_table=container._get_config_attr("SQL_COLLECTIONS_TABLE"),
        prefix_for_collection_tables=container._get_config_attr("SQL_COLLECTION_TABLE_PREFIX"),
    )
    return (
        DBAPIVectorStore.builder()
        .with_connection(connection)
        .with_options(DBAPIVectorStoreOptions(query_provider=provider))
        .build()
    )


def _create_pgvector_vector_store(container: ServiceContainer) -> Any:
    from vecstore.backends.vectorstores.pgvector_query_provider import PgVectorQueryProvider
    from vecstore.backends.vectorstores.sql_store import (
        DBAPIVectorStore,
        DBAPIVectorStoreOptions,
    )

    connection = container.sql_connection
    provider = PgVectorQueryProvider(
        connection,
        collections_table=container._get_config_attr("SQL_COLLECTIONS_TABLE"),
        prefix_for_collection_tables=container._get_config_attr("SQL_COLLECTION_TABLE_PREFIX"),
    )
    return (
        DBAPIVectorStore.builder()
        .with_connection(connection)
        .with_options(DBAPIVectorStoreOptions(query_provider=provider))
        .build()
    )


def _create_valkey_vector_store(container: ServiceContainer) -> Any:
    from vecstore.backends.vectorstores.valkey_store import ValkeyVectorStore

    return ValkeyVectorStore.builder().with_client(container.valkey_client).build()


# --- Default registry ---

_default_registry = BackendRegistry()

_default_registry.register("vectorstore", "sql", _create_sql_vector_store)
_default_registry.register("vectorstore", "pgvector", _create_pgvector_vector_store)
_default_registry.register("vectorstore", "valkey", _create_valkey_vector_store)


def get_backend_registry() -> BackendRegistry:
    """Get the default backend registry."""
    return _default_registry
