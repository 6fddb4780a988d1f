"""SQL query providers: per-dialect bootstrap and collection DDL.

A query provider is bound to one DB-API 2.0 connection for the lifetime of
the store that resolved it. It never opens or closes that connection.
"""

from __future__ import annotations

import re
import sys
import threading
from abc import ABC, abstractmethod
from contextlib import closing
from typing import Any, Optional

from vecstore.backends.vectorstores.record_definition import RecordDefinition, RecordField
from vecstore.config import Config
from vecstore.utils import get_logger, log_collection_event
from vecstore.utils.errors import ValidationError

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_PARAMSTYLE_PLACEHOLDERS = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%s",
}


def quote_identifier(name: str) -> str:
    """Validate and double-quote a SQL identifier."""
    if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
        raise ValidationError(
            f"Invalid SQL identifier: {name!r}. "
            "Only letters, digits and underscore allowed, not starting with a digit."
        )
    return f'"{name}"'


def placeholder_for(connection: Any) -> str:
    """Parameter marker for the DB-API driver that created ``connection``.

    The driver is the top-level package of the connection's class; its
    ``paramstyle`` is read from there. Objects from modules without one
    (e.g. test doubles) get ``%s``.

    Raises:
        ValidationError: If the driver uses ``named`` or ``numeric`` parameters
    """
    driver = sys.modules.get(type(connection).__module__.split(".")[0])
    paramstyle = getattr(driver, "paramstyle", "format")
    try:
        return _PARAMSTYLE_PLACEHOLDERS[paramstyle]
    except KeyError:
        raise ValidationError(f"Unsupported DB-API paramstyle: {paramstyle!r}")


class SQLQueryProvider(ABC):
    """Strategy translating store/collection operations into SQL."""

    @abstractmethod
    def prepare_vector_store(self) -> None:
        """Create bookkeeping structures. Must be idempotent."""
        raise NotImplementedError

    @abstractmethod
    def get_collection_names(self) -> list[str]:
        """List collection names currently registered."""
        raise NotImplementedError

    @abstractmethod
    def collection_exists(self, collection_name: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def create_collection(
        self, collection_name: str, record_definition: RecordDefinition
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_collection(self, collection_name: str) -> None:
        raise NotImplementedError


class DefaultSQLQueryProvider(SQLQueryProvider):
    """Portable provider for any DB-API 2.0 connection.

    Collections are tracked in a bookkeeping table; each collection's records
    live in a table named ``prefix + collection_name``. Statements issued
    through one provider are serialized, since a DB-API connection runs one
    transaction at a time.
    """

    def __init__(
        self,
        connection: Any,
        collections_table: str = "",
        prefix_for_collection_tables: Optional[str] = None,
        placeholder: Optional[str] = None,
    ):
        self._connection = connection
        self._collections_table = collections_table or Config.SQL_COLLECTIONS_TABLE
        if prefix_for_collection_tables is None:
            prefix_for_collection_tables = Config.SQL_COLLECTION_TABLE_PREFIX
        self._prefix = prefix_for_collection_tables
        self._placeholder = placeholder or placeholder_for(connection)
        quote_identifier(self._collections_table)
        self._prepare_lock = threading.Lock()
        self._run_lock = threading.RLock()
        self._prepared = False
        self.logger = get_logger("sql_query_provider")

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def collections_table(self) -> str:
        return self._collections_table

    @property
    def placeholder(self) -> str:
        return self._placeholder

    def collection_table_name(self, collection_name: str) -> str:
        """Storage table name for a collection."""
        table = f"{self._prefix}{collection_name}"
        quote_identifier(table)
        return table

    def _run(self, statements: list[tuple[Any, tuple]], fetch: bool = False) -> list[tuple]:
        """Execute statements in one transaction, commit, return last fetch."""
        rows: list[tuple] = []
        with self._run_lock:
            try:
                with closing(self._connection.cursor()) as cur:
                    for stmt, params in statements:
                        if params:
                            cur.execute(stmt, params)
                        else:
                            cur.execute(stmt)
                    if fetch:
                        rows = list(cur.fetchall())
                self._connection.commit()
            except Exception:
                self._connection.rollback()
                raise
        return rows

    def prepare_vector_store(self) -> None:
        """Create the bookkeeping table if it doesn't exist.

        Idempotent and thread-safe. Repeated calls after the first success
        are no-ops, and the DDL itself is ``IF NOT EXISTS``. A failure in the
        DDL or in ``_after_prepare`` leaves the provider unprepared so the
        next call starts over.
        """
        if self._prepared:
            return

        with self._prepare_lock:
            if self._prepared:
                return
            self._run(self._prepare_statements())
            self._after_prepare()
            self._prepared = True
            self.logger.debug(f"Prepared vector store (table {self._collections_table})")

    def _prepare_statements(self) -> list[tuple[Any, tuple]]:
        return [(
            f"CREATE TABLE IF NOT EXISTS {quote_identifier(self._collections_table)} "
            f"(collection_id VARCHAR(255) PRIMARY KEY)",
            (),
        )]

    def _after_prepare(self) -> None:
        """Connection-level setup that must finish before the store is usable."""

    def get_collection_names(self) -> list[str]:
        rows = self._run(
            [(f"SELECT collection_id FROM {quote_identifier(self._collections_table)}", ())],
            fetch=True,
        )
        return [row[0] for row in rows]

    def collection_exists(self, collection_name: str) -> bool:
        rows = self._run(
            [(
                f"SELECT 1 FROM {quote_identifier(self._collections_table)} "
                f"WHERE collection_id = {self._placeholder}",
                (collection_name,),
            )],
            fetch=True,
        )
        return bool(rows)

    def column_type(self, field: RecordField) -> str:
        """SQL column type for a field; dialects override for vectors."""
        if field.kind == "key":
            return "VARCHAR(255) PRIMARY KEY"
        return "TEXT"

    def _create_collection_statements(
        self, collection_name: str, record_definition: RecordDefinition
    ) -> list[tuple[Any, tuple]]:
        table = quote_identifier(self.collection_table_name(collection_name))
        columns = ", ".join(
            f"{quote_identifier(f.name)} {self.column_type(f)}"
            for f in record_definition.fields
        )
        return [(f"CREATE TABLE IF NOT EXISTS {table} ({columns})", ())]

    def _register_statement(self, collection_name: str) -> tuple[Any, tuple]:
        """Insert into the bookkeeping table unless the name is already there."""
        table = quote_identifier(self._collections_table)
        return (
            f"INSERT INTO {table} (collection_id) "
            f"SELECT CAST({self._placeholder} AS VARCHAR(255)) "
            f"WHERE NOT EXISTS (SELECT 1 FROM {table} WHERE collection_id = {self._placeholder})",
            (collection_name, collection_name),
        )

    def create_collection(
        self, collection_name: str, record_definition: RecordDefinition
    ) -> None:
        """Create the storage table and register the collection in one transaction."""
        statements = self._create_collection_statements(collection_name, record_definition)
        statements.append(self._register_statement(collection_name))
        self._run(statements)
        log_collection_event(
            self.logger, "created", backend="sql", collection=collection_name,
            table=self.collection_table_name(collection_name),
        )

    def delete_collection(self, collection_name: str) -> None:
        """Drop the storage table and unregister the collection."""
        table = quote_identifier(self.collection_table_name(collection_name))
        self._run([
            (f"DROP TABLE IF EXISTS {table}", ()),
            (
                f"DELETE FROM {quote_identifier(self._collections_table)} "
                f"WHERE collection_id = {self._placeholder}",
                (collection_name,),
            ),
        ])
        log_collection_event(self.logger, "deleted", backend="sql", collection=collection_name)
