"""Vector store over a DB-API 2.0 connection.

The store borrows the caller's connection. It resolves exactly one query
provider at construction (caller-supplied or the portable default) and
shares it, together with the connection, with every collection it hands out.
Construct it through ``DBAPIVectorStore.builder()`` to get a store whose
bootstrap has already run; when constructing directly, call
``prepare_async()`` before use.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any, Optional

from vecstore.backends.vectorstores.base import (
    RecordCollectionFactory,
    SQLVectorStore,
    validate_collection_name,
)
from vecstore.backends.vectorstores.record_definition import RecordDefinition
from vecstore.backends.vectorstores.sql_collection import (
    SQLRecordCollection,
    SQLRecordCollectionOptions,
)
from vecstore.backends.vectorstores.sql_query_provider import (
    DefaultSQLQueryProvider,
    SQLQueryProvider,
)
from vecstore.services.worker_pool import get_executor
from vecstore.utils import get_logger
from vecstore.utils.errors import ConfigurationError


@dataclass(frozen=True)
class DBAPIVectorStoreOptions:
    """Optional overrides for a ``DBAPIVectorStore``."""

    query_provider: Optional[SQLQueryProvider] = None
    collection_factory: Optional[RecordCollectionFactory] = None
    executor: Optional[Executor] = None


class DBAPIVectorStore(SQLVectorStore):
    """Relational vector store bound to one DB-API connection."""

    def __init__(self, connection: Any, options: Optional[DBAPIVectorStoreOptions] = None):
        self._connection = connection
        self._options = options or DBAPIVectorStoreOptions()

        if self._options.query_provider is not None:
            self._query_provider = self._options.query_provider
        else:
            self._query_provider = DefaultSQLQueryProvider(connection)

        self._executor = self._options.executor or get_executor()
        self.logger = get_logger("sql_store")
        self.logger.debug(
            f"Created SQL vector store with {type(self._query_provider).__name__}"
        )

    @staticmethod
    def builder() -> DBAPIVectorStore.Builder:
        return DBAPIVectorStore.Builder()

    @property
    def name(self) -> str:
        return "sql"

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def options(self) -> DBAPIVectorStoreOptions:
        return self._options

    @property
    def query_provider(self) -> SQLQueryProvider:
        return self._query_provider

    def get_collection(
        self,
        collection_name: str,
        record_type: Any,
        record_definition: Optional[RecordDefinition] = None,
    ) -> Any:
        validate_collection_name(collection_name, backend=self.name)
        collection_options = SQLRecordCollectionOptions(
            record_type=record_type,
            record_definition=record_definition,
            query_provider=self._query_provider,
            executor=self._executor,
        )

        factory = self._options.collection_factory
        if factory is not None:
            return factory.create_collection(
                self._connection, collection_name, collection_options
            )

        return SQLRecordCollection(self._connection, collection_name, collection_options)

    def get_collection_names_async(self) -> Future:
        return self._executor.submit(self._query_provider.get_collection_names)

    def prepare_async(self) -> Future:
        return self._executor.submit(self._query_provider.prepare_vector_store)

    def _prepare_and_return(self) -> DBAPIVectorStore:
        self._query_provider.prepare_vector_store()
        self.logger.debug("SQL vector store prepared")
        return self

    class Builder:
        """Builds a prepared ``DBAPIVectorStore``."""

        def __init__(self):
            self._connection: Any = None
            self._options: Optional[DBAPIVectorStoreOptions] = None

        def with_connection(self, connection: Any) -> DBAPIVectorStore.Builder:
            self._connection = connection
            return self

        def with_options(self, options: DBAPIVectorStoreOptions) -> DBAPIVectorStore.Builder:
            self._options = options
            return self

        def _construct(self) -> DBAPIVectorStore:
            if self._connection is None:
                raise ConfigurationError("connection is required", backend="sql")
            return DBAPIVectorStore(self._connection, self._options)

        def build(self) -> DBAPIVectorStore:
            """Construct the store and run its bootstrap on the calling thread.

            Never waits on the worker pool, so it is safe to call from a task
            already running on that pool.

            Raises:
                ConfigurationError: If no connection was set
            """
            return self._construct()._prepare_and_return()

        def build_async(self) -> Future:
            """Construct the store; resolves once its bootstrap completes.

            Raises:
                ConfigurationError: If no connection was set (before any work starts)
            """
            store = self._construct()
            return store._executor.submit(store._prepare_and_return)
