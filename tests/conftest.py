"""Shared pytest fixtures for schemats tests."""

import copy
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from schemats.config import Config
from schemats.database.base import DatabaseIntrospector
from schemats.database.models import ColumnDefinition, EnumTypes, TableDefinition
from schemats.diagnostics import DiagnosticCollector
from schemats.errors import ConnectionError


class FakeIntrospector(DatabaseIntrospector):
    """In-memory introspector serving canned catalog data.

    Records every catalog call in ``calls`` so tests can check what was
    fetched and that nothing is queried after close().
    """

    DIALECT = "postgres"

    def __init__(
        self,
        connection_string: Optional[str] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
        tables: Optional[Dict[str, TableDefinition]] = None,
        enums: Optional[EnumTypes] = None,
        comments: Optional[Dict[str, Dict[str, str]]] = None,
        fail_connect: bool = False,
    ):
        super().__init__(connection_string, diagnostics)
        self.tables = tables or {}
        self.enums = enums or {}
        self.comments = comments or {}
        self.fail_connect = fail_connect
        self.calls: List[tuple] = []
        self.close_count = 0

    def _open_connection(self):
        self.calls.append(("connect",))
        if self.fail_connect:
            raise ConnectionError("Error connecting to fake server: connection refused")
        return MagicMock()

    def _cursor(self):
        cursor = MagicMock()
        cursor.fetchall.return_value = [{"version": "PostgreSQL 16.0 (fake)"}]
        return cursor

    def close(self):
        if self._connection is not None:
            self.close_count += 1
        super().close()

    def _check_open(self):
        if self._closed:
            raise ConnectionError("query after close")

    def get_schema_tables(self, schema: str) -> List[str]:
        self._check_open()
        self.calls.append(("get_schema_tables", schema))
        if not self.tables:
            self._report_missing(f"Missing schema: {schema}", schema)
        return list(self.tables)

    def get_table_definition(self, schema: str, table: str) -> TableDefinition:
        self._check_open()
        self.calls.append(("get_table_definition", schema, table))
        if table not in self.tables:
            self._report_missing(f"Missing table: {schema}.{table}", schema, table)
            return {}
        return copy.deepcopy(self.tables[table])

    def get_enums(self, schema: str) -> EnumTypes:
        self._check_open()
        self.calls.append(("get_enums", schema))
        return copy.deepcopy(self.enums)

    def get_column_comments(self, schema: str, table: str) -> Dict[str, str]:
        self._check_open()
        self.calls.append(("get_column_comments", schema, table))
        return dict(self.comments.get(table, {}))


@pytest.fixture
def config():
    """Default configuration for the public schema."""
    return Config(schema="public")


@pytest.fixture
def camel_config():
    """Configuration with camel case type and column names."""
    return Config(schema="public", camel_case=True)


@pytest.fixture
def diagnostics():
    """Create a fresh DiagnosticCollector for each test."""
    return DiagnosticCollector()


@pytest.fixture
def users_table():
    """users(id int4, role role_enum) as reported by Postgres."""
    return {
        "id": ColumnDefinition(udt_name="int4", is_nullable=False, has_default=True),
        "role": ColumnDefinition(udt_name="role_enum", is_nullable=False),
    }


@pytest.fixture
def role_enum():
    return {"role_enum": ["admin", "member"]}


@pytest.fixture
def fake_introspector(users_table, role_enum):
    """Introspector for a schema holding only the users table."""
    return FakeIntrospector(tables={"users": users_table}, enums=role_enum)


@pytest.fixture
def make_introspector():
    """Factory for FakeIntrospector with custom catalog data."""
    def _make(**kwargs) -> FakeIntrospector:
        return FakeIntrospector(**kwargs)
    return _make


@pytest.fixture
def fake_introspector_cls(users_table, role_enum):
    """FakeIntrospector subclass constructed the way the CLI constructs introspectors."""
    class CLIFakeIntrospector(FakeIntrospector):
        instances: List[FakeIntrospector] = []

        def __init__(self, connection_string=None, diagnostics=None):
            super().__init__(
                connection_string,
                diagnostics,
                tables={
                    "users": users_table,
                    "events": {
                        "payload": ColumnDefinition(
                            udt_name="jsonb", is_nullable=True, comment=None
                        ),
                    },
                },
                enums=role_enum,
                comments={"events": {"payload": "@type {EventPayload}"}},
            )
            CLIFakeIntrospector.instances.append(self)

    CLIFakeIntrospector.instances = []
    return CLIFakeIntrospector
