"""Abstract base class for database introspection."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from ..diagnostics import DiagnosticCollector, DiagnosticKind
from ..errors import ConnectionError
from .models import EnumTypes, TableDefinition

logger = logging.getLogger(__name__)


class DatabaseIntrospector(ABC):
    """Abstract base class for database introspection.

    Subclasses implement the catalog queries of one dialect. Everything
    downstream (type mapping, schema assembly) only relies on the methods
    declared here.
    """

    # Override in subclasses
    DIALECT: str = ""
    DEFAULT_SCHEMA: str = "public"

    def __init__(
        self,
        connection_string: Optional[str] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.connection_string = connection_string
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self.version = ""
        self._connection = None
        self._closed = False

    @property
    def dialect(self) -> str:
        return self.DIALECT

    @abstractmethod
    def _open_connection(self):
        """Open a driver connection.

        Raises:
            ImportError: If the driver package is not installed
            ConnectionError: If the server cannot be reached or rejects the login
        """
        pass

    @abstractmethod
    def _cursor(self):
        """Return a cursor whose rows are dicts keyed by column label."""
        pass

    def connect(self):
        """Connect to the database and read the server version."""
        if self._connection is not None:
            return self._connection
        if self._closed:
            raise ConnectionError(
                f"{self.DIALECT} connection has already been closed",
                details={"dialect": self.DIALECT},
            )

        self._connection = self._open_connection()
        rows = self._query("SELECT version() AS version")
        self.version = str(rows[0]["version"]) if rows else ""
        logger.info("Connected to %s server %s", self.DIALECT, self.version)
        return self._connection

    def close(self):
        """Close the connection. Safe to call more than once."""
        self._closed = True
        if self._connection is None:
            return
        connection, self._connection = self._connection, None
        connection.close()

    def _driver_errors(self) -> Tuple[Type[BaseException], ...]:
        """Base exception classes of the driver, wrapped as ConnectionError by _query."""
        return ()

    def _query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Execute a parameterised query and return its rows as dicts.

        Raises:
            ConnectionError: If the driver fails to run the query
        """
        if self._connection is None:
            self.connect()
        cursor = self._cursor()
        try:
            cursor.execute(sql, tuple(params) or None)
            return [dict(row) for row in cursor.fetchall()]
        except self._driver_errors() as e:
            raise ConnectionError(
                f"Query failed on {self.DIALECT}: {e}",
                details={"dialect": self.DIALECT, "query": " ".join(sql.split())},
            ) from e
        finally:
            cursor.close()

    def _report_missing(self, message: str, schema: str, table: Optional[str] = None):
        self.diagnostics.add(
            DiagnosticKind.MISSING_SCHEMA_OBJECT,
            message,
            schema=schema,
            table=table,
        )

    def get_default_schema(self) -> str:
        """Schema used when none is configured."""
        return self.DEFAULT_SCHEMA

    @abstractmethod
    def get_schema_tables(self, schema: str) -> List[str]:
        """Get all table names in a schema.

        Args:
            schema: Schema name

        Returns:
            Ordered list of table names, empty if the schema does not exist
        """
        pass

    @abstractmethod
    def get_table_definition(self, schema: str, table: str) -> TableDefinition:
        """Get the raw (unmapped) columns of a table.

        Args:
            schema: Schema name
            table: Table name

        Returns:
            Column definitions keyed by column name, empty if the table does
            not exist
        """
        pass

    @abstractmethod
    def get_enums(self, schema: str) -> EnumTypes:
        """Get the enum catalog of a schema.

        Args:
            schema: Schema name

        Returns:
            Enum name -> literal values in declared order
        """
        pass

    @abstractmethod
    def get_column_comments(self, schema: str, table: str) -> Dict[str, str]:
        """Get the non-empty column comments of a table.

        Args:
            schema: Schema name
            table: Table name

        Returns:
            Column name -> comment
        """
        pass

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
