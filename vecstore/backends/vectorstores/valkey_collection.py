"""Collection handle for Valkey/Redis search indexes.

Each collection is one FT index over HASH keys prefixed ``<name>:``.
"""

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
from vecstore.services.worker_pool import get_executor
from vecstore.utils import get_logger, log_collection_event

_UNKNOWN_INDEX_MARKERS = ("unknown index", "no such index", "not found")


@dataclass(frozen=True)
class ValkeyRecordCollectionOptions:
    """Options for one Valkey collection."""

    record_type: Any
    record_definition: Optional[RecordDefinition] = None
    prefix_collection_name: bool = True
    executor: Optional[Executor] = None


def _is_unknown_index_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(marker in message for marker in _UNKNOWN_INDEX_MARKERS)


class ValkeyRecordCollection(VectorStoreRecordCollection):
    """Collection backed by a search index on a shared Valkey client."""

    def __init__(
        self,
        client: Any,
        collection_name: str,
        options: ValkeyRecordCollectionOptions,
    ):
        validate_collection_name(collection_name, backend="valkey")
        self._client = client
        self._collection_name = collection_name
        self._options = options
        self._executor = options.executor or get_executor()
        self.logger = get_logger("valkey_collection")

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def client(self) -> Any:
        return self._client

    @property
    def options(self) -> ValkeyRecordCollectionOptions:
        return self._options

    @property
    def key_prefix(self) -> str:
        """Prefix applied to record keys ("" when prefixing is disabled)."""
        if self._options.prefix_collection_name:
            return f"{self._collection_name}:"
        return ""

    def index_schema(self) -> list[Any]:
        """FT.CREATE SCHEMA arguments for this collection's fields."""
        definition = resolve_record_definition(
            self._options.record_type, self._options.record_definition
        )
        schema: list[Any] = []
        for field in definition.data_fields:
            schema += [field.name, "TEXT"]
        for field in definition.vector_fields:
            schema += [
                field.name, "VECTOR", "HNSW", 6,
                "TYPE", "FLOAT32",
                "DIM", field.dimensions,
                "DISTANCE_METRIC", "COSINE",
            ]
        return schema

    def _exists(self) -> bool:
        from valkey.exceptions import ResponseError

        try:
            self._client.execute_command("FT.INFO", self._collection_name)
            return True
        except ResponseError as e:
            if _is_unknown_index_error(e):
                return False
            raise

    def collection_exists_async(self) -> Future:
        return self._executor.submit(self._exists)

    def _create(self) -> ValkeyRecordCollection:
        args: list[Any] = ["FT.CREATE", self._collection_name, "ON", "HASH"]
        if self.key_prefix:
            args += ["PREFIX", 1, self.key_prefix]
        args += ["SCHEMA"] + self.index_schema()
        self._client.execute_command(*args)
        log_collection_event(
            self.logger, "created", backend="valkey", collection=self._collection_name,
            key_prefix=self.key_prefix,
        )
        return self

    def create_collection_async(self) -> Future:
        return self._executor.submit(self._create)

    def _create_if_not_exists(self) -> ValkeyRecordCollection:
        if self._exists():
            return self
        return self._create()

    def create_collection_if_not_exists_async(self) -> Future:
        return self._executor.submit(self._create_if_not_exists)

    def _delete(self) -> None:
        self._client.execute_command("FT.DROPINDEX", self._collection_name, "DD")
        log_collection_event(self.logger, "deleted", backend="valkey", collection=self._collection_name)

    def delete_collection_async(self) -> Future:
        return self._executor.submit(self._delete)
