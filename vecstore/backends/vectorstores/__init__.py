"""Vector store backend abstractions.

Provides swappable implementations behind one store/collection contract:
- DBAPIVectorStore: any DB-API 2.0 connection (PostgreSQL, SQLite, ...)
- ValkeyVectorStore: Valkey/Redis with the search module
"""

from vecstore.backends.vectorstores.base import (
    RecordCollectionFactory,
    SQLVectorStore,
    VectorStore,
    VectorStoreRecordCollection,
)
from vecstore.backends.vectorstores.pgvector_query_provider import PgVectorQueryProvider
from vecstore.backends.vectorstores.record_definition import RecordDefinition, RecordField
from vecstore.backends.vectorstores.sql_collection import (
    SQLRecordCollection,
    SQLRecordCollectionOptions,
)
from vecstore.backends.vectorstores.sql_query_provider import (
    DefaultSQLQueryProvider,
    SQLQueryProvider,
)
from vecstore.backends.vectorstores.sql_store import DBAPIVectorStore, DBAPIVectorStoreOptions
from vecstore.backends.vectorstores.valkey_collection import (
    ValkeyRecordCollection,
    ValkeyRecordCollectionOptions,
)
from vecstore.backends.vectorstores.valkey_store import (
    ValkeyVectorStore,
    ValkeyVectorStoreOptions,
)

__all__ = [
    "VectorStore",
    "SQLVectorStore",
    "VectorStoreRecordCollection",
    "RecordCollectionFactory",
    "RecordDefinition",
    "RecordField",
    "SQLQueryProvider",
    "DefaultSQLQueryProvider",
    "PgVectorQueryProvider",
    "SQLRecordCollection",
    "SQLRecordCollectionOptions",
    "DBAPIVectorStore",
    "DBAPIVectorStoreOptions",
    "ValkeyRecordCollection",
    "ValkeyRecordCollectionOptions",
    "ValkeyVectorStore",
    "ValkeyVectorStoreOptions",
]
