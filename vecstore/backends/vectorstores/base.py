"""Abstract contracts shared by every vector store backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Any, Optional

from vecstore.backends.vectorstores.record_definition import RecordDefinition
from vecstore.utils.errors import ValidationError


def validate_collection_name(collection_name: str, backend: Optional[str] = None) -> None:
    """Reject empty or non-string collection names."""
    if not isinstance(collection_name, str) or not collection_name.strip():
        raise ValidationError("collection_name must be a non-empty string", backend=backend)


class VectorStoreRecordCollection(ABC):
    """Handle to one named collection, bound to its store's backend handle.

    Instances are produced by ``VectorStore.get_collection`` (directly or via a
    ``RecordCollectionFactory``) and never own the handle they hold.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the collection within the backend."""
        raise NotImplementedError

    @abstractmethod
    def collection_exists_async(self) -> Future:
        """Resolve to True if backend storage for this collection exists."""
        raise NotImplementedError

    @abstractmethod
    def create_collection_async(self) -> Future:
        """Create backend storage; resolves to this collection."""
        raise NotImplementedError

    @abstractmethod
    def delete_collection_async(self) -> Future:
        """Drop backend storage; resolves to None."""
        raise NotImplementedError

    @abstractmethod
    def create_collection_if_not_exists_async(self) -> Future:
        """Create backend storage unless it already exists; resolves to this collection."""
        raise NotImplementedError


class RecordCollectionFactory(ABC):
    """Strategy deciding which collection implementation a store hands out."""

    @abstractmethod
    def create_collection(
        self,
        handle: Any,
        collection_name: str,
        options: Any,
    ) -> VectorStoreRecordCollection:
        """Build a collection bound to ``handle``.

        Args:
            handle: The store's backend connection or client (not owned)
            collection_name: Name of the collection
            options: Backend-specific collection options built by the store

        Returns:
            Collection instance; exceptions propagate to the caller unchanged
        """
        raise NotImplementedError


class VectorStore(ABC):
    """Entry point over one backend handle."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for logging/identification."""
        raise NotImplementedError

    @abstractmethod
    def get_collection(
        self,
        collection_name: str,
        record_type: Any,
        record_definition: Optional[RecordDefinition] = None,
    ) -> VectorStoreRecordCollection:
        """Get a collection handle. Pure construction, no I/O.

        Args:
            collection_name: Name of the collection (non-empty)
            record_type: Record type descriptor (dataclass type)
            record_definition: Optional explicit field definition

        Returns:
            Collection bound to this store's backend handle
        """
        raise NotImplementedError

    @abstractmethod
    def get_collection_names_async(self) -> Future:
        """Resolve to the names of all collections currently in the backend.

        Order is unspecified. Backend errors are set on the Future.
        """
        raise NotImplementedError


class SQLVectorStore(VectorStore):
    """Vector store over a relational backend that needs a bootstrap step."""

    @abstractmethod
    def prepare_async(self) -> Future:
        """Run the one-time bootstrap (idempotent); resolves to None."""
        raise NotImplementedError
