"""PostgreSQL + pgvector query provider.

Extends the portable provider with the pgvector extension bootstrap,
native ``vector(n)`` columns and one HNSW cosine index per vector field.
"""

from __future__ import annotations

from typing import Any, Optional

from vecstore.backends.vectorstores.record_definition import RecordDefinition, RecordField
from vecstore.backends.vectorstores.sql_query_provider import (
    DefaultSQLQueryProvider,
    quote_identifier,
)


class PgVectorQueryProvider(DefaultSQLQueryProvider):
    """Query provider for a psycopg (v3) connection to PostgreSQL+pgvector."""

    def __init__(
        self,
        connection: Any,
        collections_table: str = "",
        prefix_for_collection_tables: Optional[str] = None,
        hnsw_m: int = 16,
        hnsw_ef_construction: int = 64,
    ):
        super().__init__(
            connection,
            collections_table=collections_table,
            prefix_for_collection_tables=prefix_for_collection_tables,
            placeholder="%s",
        )
        self._hnsw_m = int(hnsw_m)
        self._hnsw_ef_construction = int(hnsw_ef_construction)

    def _prepare_statements(self) -> list[tuple[Any, tuple]]:
        return [("CREATE EXTENSION IF NOT EXISTS vector", ())] + super()._prepare_statements()

    def _after_prepare(self) -> None:
        # The vector type only exists once the extension is created
        from pgvector.psycopg import register_vector

        with self._run_lock:
            register_vector(self._connection)

    def column_type(self, field: RecordField) -> str:
        if field.kind == "vector":
            return f"vector({field.dimensions})"
        return super().column_type(field)

    def _create_collection_statements(
        self, collection_name: str, record_definition: RecordDefinition
    ) -> list[tuple[Any, tuple]]:
        from psycopg import sql

        statements = super()._create_collection_statements(collection_name, record_definition)
        table = self.collection_table_name(collection_name)
        for field in record_definition.vector_fields:
            quote_identifier(field.name)
            index_name = f"idx_{table}_{field.name}_hnsw"
            statements.append((
                sql.SQL(
                    "CREATE INDEX IF NOT EXISTS {} ON {} "
                    "USING hnsw ({} vector_cosine_ops) "
                    "WITH (m = {}, ef_construction = {})"
                ).format(
                    sql.Identifier(index_name),
                    sql.Identifier(table),
                    sql.Identifier(field.name),
                    sql.Literal(self._hnsw_m),
                    sql.Literal(self._hnsw_ef_construction),
                ),
                (),
            ))
        return statements
