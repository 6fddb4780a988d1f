"""
vecstore: one store/collection contract over relational and key/value backends.
"""

from vecstore.backends.vectorstores import (
    DBAPIVectorStore,
    DBAPIVectorStoreOptions,
    RecordCollectionFactory,
    RecordDefinition,
    RecordField,
    ValkeyVectorStore,
    ValkeyVectorStoreOptions,
    VectorStore,
    VectorStoreRecordCollection,
)

__version__ = "0.1.0"

__all__ = [
    "VectorStore",
    "VectorStoreRecordCollection",
    "RecordCollectionFactory",
    "RecordDefinition",
    "RecordField",
    "DBAPIVectorStore",
    "DBAPIVectorStoreOptions",
    "ValkeyVectorStore",
    "ValkeyVectorStoreOptions",
]
