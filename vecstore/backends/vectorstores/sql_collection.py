"""Collection handle for relational vector stores."""

from __future__ import annotations

from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any, Optional

from vecstore.backends.vectorstores.base import (
    VectorStoreRecordCollection,
    validate_collection_name,
)
from vecstore.backends.vectorstores.record_definition import (
    RecordDefinition,
    resolve_record_definition,
)
from vecstore.backends.vectorstores.sql_query_provider import (
    DefaultSQLQueryProvider,
    SQLQueryProvider,
)
from vecstore.services.worker_pool import get_executor
from vecstore.utils import get_logger


@dataclass(frozen=True)
class SQLRecordCollectionOptions:
    """Options for one SQL collection.

    ``query_provider`` and ``executor`` are normally attached by the store so
    every collection shares the store's resolved strategy.
    """

    record_type: Any
    record_definition: Optional[RecordDefinition] = None
    query_provider: Optional[SQLQueryProvider] = None
    executor: Optional[Executor] = None


class SQLRecordCollection(VectorStoreRecordCollection):
    """Collection stored in a table managed by an ``SQLQueryProvider``."""

    def __init__(
        self,
        connection: Any,
        collection_name: str,
        options: SQLRecordCollectionOptions,
    ):
        validate_collection_name(collection_name, backend="sql")
        self._connection = connection
        self._collection_name = collection_name
        self._options = options
        self._query_provider = options.query_provider or DefaultSQLQueryProvider(connection)
        self._executor = options.executor or get_executor()
        self.logger = get_logger("sql_collection")

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def options(self) -> SQLRecordCollectionOptions:
        return self._options

    @property
    def query_provider(self) -> SQLQueryProvider:
        return self._query_provider

    def _record_definition(self) -> RecordDefinition:
        return resolve_record_definition(
            self._options.record_type, self._options.record_definition
        )

    def collection_exists_async(self) -> Future:
        return self._executor.submit(
            self._query_provider.collection_exists, self._collection_name
        )

    def _create(self) -> SQLRecordCollection:
        self._query_provider.create_collection(
            self._collection_name, self._record_definition()
        )
        return self

    def create_collection_async(self) -> Future:
        return self._executor.submit(self._create)

    def _create_if_not_exists(self) -> SQLRecordCollection:
        if self._query_provider.collection_exists(self._collection_name):
            return self
        return self._create()

    def create_collection_if_not_exists_async(self) -> Future:
        return self._executor.submit(self._create_if_not_exists)

    def delete_collection_async(self) -> Future:
        return self._executor.submit(
            self._query_provider.delete_collection, self._collection_name
        )
