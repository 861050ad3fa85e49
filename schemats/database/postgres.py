"""Postgres database introspector."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..diagnostics import DiagnosticCollector
from ..errors import ConnectionError
from .base import DatabaseIntrospector
from .models import ColumnDefinition, EnumTypes, TableDefinition

logger = logging.getLogger(__name__)


def group_enum_rows(rows: Iterable[Dict[str, Any]]) -> EnumTypes:
    """Group (name, value) rows from pg_enum into an enum catalog.

    Rows must already be ordered by enum sort order.
    """
    enum_types: EnumTypes = {}
    for row in rows:
        enum_types.setdefault(row["name"], []).append(row["value"])
    return enum_types


class PostgresIntrospector(DatabaseIntrospector):
    """Client for introspecting a Postgres schema."""

    DIALECT = "postgres"
    DEFAULT_SCHEMA = "public"
    ARRAY_PREFIX = "_"

    def __init__(
        self,
        connection_string: Optional[str] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        """Initialize Postgres introspector.

        Args:
            connection_string: libpq DSN or postgres:// URL. When empty,
                libpq falls back to the PGHOST, PGUSER, PGDATABASE, ...
                environment variables.
            diagnostics: Collector for missing schema/table reports
        """
        super().__init__(connection_string, diagnostics)

    def _open_connection(self):
        try:
            import psycopg2
        except ImportError:
            raise ImportError(
                "psycopg2 is required for Postgres introspection. "
                "Install it with: pip install psycopg2-binary"
            )

        try:
            return psycopg2.connect(self.connection_string or "")
        except psycopg2.Error as e:
            raise ConnectionError(
                f"Error connecting to Postgres: {e}",
                details={"dialect": self.DIALECT},
            ) from e

    def _cursor(self):
        from psycopg2.extras import RealDictCursor

        return self._connection.cursor(cursor_factory=RealDictCursor)

    def _driver_errors(self):
        import psycopg2

        return (psycopg2.Error,)

    def get_schema_tables(self, schema: str) -> List[str]:
        """Get all tables in a schema."""
        rows = self._query("""
            SELECT table_name
            FROM information_schema.columns
            WHERE table_schema = %s
            GROUP BY table_name
            ORDER BY table_name
        """, (schema,))

        if not rows:
            self._report_missing(f"Missing schema: {schema}", schema)
        return [row["table_name"] for row in rows]

    def get_table_definition(self, schema: str, table: str) -> TableDefinition:
        """Get all columns of a table, unwrapping array element types."""
        rows = self._query("""
            SELECT column_name, udt_name, is_nullable, column_default
            FROM information_schema.columns
            WHERE table_name = %s AND table_schema = %s
            ORDER BY ordinal_position
        """, (table, schema))

        if not rows:
            self._report_missing(f"Missing table: {schema}.{table}", schema, table)
        logger.debug("Fetched %d columns for %s.%s", len(rows), schema, table)

        table_definition: TableDefinition = {}
        for row in rows:
            udt_name = row["udt_name"]
            is_array = udt_name.startswith(self.ARRAY_PREFIX)
            table_definition[row["column_name"]] = ColumnDefinition(
                udt_name=udt_name[len(self.ARRAY_PREFIX):] if is_array else udt_name,
                is_nullable=row["is_nullable"] == "YES",
                is_array=is_array,
                has_default=row["column_default"] is not None,
            )
        return table_definition

    def get_enums(self, schema: str) -> EnumTypes:
        """Get the named enum types of a schema."""
        rows = self._query("""
            SELECT t.typname AS name, e.enumlabel AS value
            FROM pg_catalog.pg_type t
            JOIN pg_catalog.pg_enum e ON t.oid = e.enumtypid
            JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
            WHERE n.nspname = %s
            ORDER BY t.typname, e.enumsortorder
        """, (schema,))
        return group_enum_rows(rows)

    def get_column_comments(self, schema: str, table: str) -> Dict[str, str]:
        """Get column comments (COMMENT ON COLUMN) of a table."""
        rows = self._query("""
            SELECT a.attname AS column_name,
                   col_description(a.attrelid, a.attnum) AS description
            FROM pg_catalog.pg_attribute a
            JOIN pg_catalog.pg_class c ON c.oid = a.attrelid
            JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
            WHERE n.nspname = %s
              AND c.relname = %s
              AND a.attnum > 0
              AND NOT a.attisdropped
        """, (schema, table))
        return {row["column_name"]: row["description"] for row in rows if row["description"]}
