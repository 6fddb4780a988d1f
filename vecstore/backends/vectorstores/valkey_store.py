"""Vector store over a shared Valkey/Redis client.

The key/value backend needs no bootstrap: search indexes are created per
collection. The client is borrowed; the store never closes it.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any, Optional

from vecstore.backends.vectorstores.base import (
    RecordCollectionFactory,
    VectorStore,
    validate_collection_name,
)
from vecstore.backends.vectorstores.record_definition import RecordDefinition
from vecstore.backends.vectorstores.valkey_collection import (
    ValkeyRecordCollection,
    ValkeyRecordCollectionOptions,
)
from vecstore.services.worker_pool import get_executor
from vecstore.utils import get_logger
from vecstore.utils.errors import ConfigurationError


@dataclass(frozen=True)
class ValkeyVectorStoreOptions:
    """Optional overrides for a ``ValkeyVectorStore``."""

    collection_factory: Optional[RecordCollectionFactory] = None
    prefix_collection_name: bool = True
    executor: Optional[Executor] = None


def _decode(name: Any) -> str:
    if isinstance(name, bytes):
        return name.decode("utf-8")
    return str(name)


class ValkeyVectorStore(VectorStore):
    """Vector store whose collections are Valkey search indexes."""

    def __init__(self, client: Any, options: Optional[ValkeyVectorStoreOptions] = None):
        self._client = client
        self._options = options or ValkeyVectorStoreOptions()
        self._executor = self._options.executor or get_executor()
        self.logger = get_logger("valkey_store")

    @staticmethod
    def builder() -> ValkeyVectorStore.Builder:
        return ValkeyVectorStore.Builder()

    @property
    def name(self) -> str:
        return "valkey"

    @property
    def client(self) -> Any:
        return self._client

    @property
    def options(self) -> ValkeyVectorStoreOptions:
        return self._options

    def get_collection(
        self,
        collection_name: str,
        record_type: Any,
        record_definition: Optional[RecordDefinition] = None,
    ) -> Any:
        validate_collection_name(collection_name, backend=self.name)
        collection_options = ValkeyRecordCollectionOptions(
            record_type=record_type,
            record_definition=record_definition,
            prefix_collection_name=self._options.prefix_collection_name,
            executor=self._executor,
        )

        factory = self._options.collection_factory
        if factory is not None:
            return factory.create_collection(
                self._client, collection_name, collection_options
            )

        return ValkeyRecordCollection(self._client, collection_name, collection_options)

    def _list_indexes(self) -> list[str]:
        names = [_decode(n) for n in self._client.execute_command("FT._LIST") or []]
        self.logger.debug(f"Listed {len(names)} Valkey indexes")
        return names

    def get_collection_names_async(self) -> Future:
        return self._executor.submit(self._list_indexes)

    class Builder:
        """Builds a ``ValkeyVectorStore``; no bootstrap step is involved."""

        def __init__(self):
            self._client: Any = None
            self._options: Optional[ValkeyVectorStoreOptions] = None

        def with_client(self, client: Any) -> ValkeyVectorStore.Builder:
            self._client = client
            return self

        def with_options(self, options: ValkeyVectorStoreOptions) -> ValkeyVectorStore.Builder:
            self._options = options
            return self

        def build(self) -> ValkeyVectorStore:
            """Construct the store.

            Raises:
                ConfigurationError: If no client was set
            """
            if self._client is None:
                raise ConfigurationError("client is required", backend="valkey")
            return ValkeyVectorStore(self._client, self._options)

        def build_async(self) -> Future:
            """Same as build(), wrapped in an already-completed Future."""
            store = self.build()
            future: Future = Future()
            future.set_result(store)
            return future
