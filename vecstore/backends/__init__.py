"""
Backend abstractions for vecstore.

Provides swappable implementations for:
- Vector Stores: relational (DB-API, pgvector) and key/value (Valkey)
"""

from vecstore.backends.vectorstores import (
    RecordCollectionFactory,
    SQLVectorStore,
    VectorStore,
    VectorStoreRecordCollection,
)

__all__ = [
    "VectorStore",
    "SQLVectorStore",
    "VectorStoreRecordCollection",
    "RecordCollectionFactory",
]
