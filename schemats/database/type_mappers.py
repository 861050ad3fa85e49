"""Database-specific type mapping strategies."""

import re
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, Iterable, Optional, Set, Tuple

from ..config import Config
from ..diagnostics import DiagnosticCollector, DiagnosticKind
from ..errors import UnmappedTypeError
from .models import ColumnDefinition, TableDefinition

# Placeholder for JSON columns without a @type annotation
JSON_DEFAULT_TYPE = "unknown"

# Placeholder for native types without a mapping rule (non-strict mode)
FALLBACK_TYPE = "any"

ANNOTATION_PATTERN = re.compile(r"@type \{([^}]+)\}")


class TypeMapper(ABC):
    """Maps native column types of one dialect to TypeScript types.

    Subclasses provide ``DIALECT``, ``TYPE_MAP`` (native type -> TypeScript
    primitive) and ``JSON_TYPES``. Mapping never issues queries: enum names
    and column comments are fetched by the caller and passed in.
    """

    DIALECT: str = ""
    TYPE_MAP: Dict[str, str] = {}
    JSON_TYPES: Set[str] = set()

    def __init__(self, config: Config, diagnostics: Optional[DiagnosticCollector] = None):
        self.config = config
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()

    def map_table(
        self,
        table: TableDefinition,
        enum_types: Iterable[str],
        custom_types: Set[str],
        column_comments: Optional[Dict[str, str]] = None,
        table_name: Optional[str] = None,
    ) -> TableDefinition:
        """Resolve the TypeScript type of every column of a table.

        Args:
            table: Raw column definitions keyed by column name
            enum_types: Names of the enums available in the table's schema
            custom_types: Run-wide set that receives types named in
                ``@type {...}`` annotations
            column_comments: Column name -> comment
            table_name: Used in diagnostics and errors only

        Returns:
            New table definition with ``ts_type`` set on every column
        """
        enum_names = set(enum_types)
        comments = column_comments or {}
        return {
            column_name: self.map_column(
                column_name,
                column,
                enum_names,
                custom_types,
                comment=comments.get(column_name, column.comment),
                table_name=table_name,
            )
            for column_name, column in table.items()
        }

    def map_column(
        self,
        column_name: str,
        column: ColumnDefinition,
        enum_types: Set[str],
        custom_types: Set[str],
        comment: Optional[str] = None,
        table_name: Optional[str] = None,
    ) -> ColumnDefinition:
        """Resolve the TypeScript type of a single column."""
        if comment is None:
            comment = column.comment
        # Descriptors from an introspector are already unwrapped.
        if column.is_array:
            udt_name, is_array = column.udt_name, True
        else:
            udt_name, is_array = self.unwrap_array(column.udt_name)

        if udt_name in self.TYPE_MAP:
            ts_type = self.TYPE_MAP[udt_name]
        elif udt_name in self.JSON_TYPES:
            ts_type = self._json_type(comment, custom_types, column_name, table_name)
        elif udt_name in enum_types:
            ts_type = self.config.transform_type_name(udt_name)
        else:
            ts_type = self._fallback_type(udt_name, column_name, table_name)

        return replace(column, udt_name=udt_name, is_array=is_array, comment=comment, ts_type=ts_type)

    @abstractmethod
    def unwrap_array(self, udt_name: str) -> Tuple[str, bool]:
        """Strip the dialect's array marker, returning (element type, is_array)."""
        pass

    def _json_type(
        self,
        comment: Optional[str],
        custom_types: Set[str],
        column_name: str,
        table_name: Optional[str],
    ) -> str:
        if not comment or "@type" not in comment:
            return JSON_DEFAULT_TYPE

        match = ANNOTATION_PATTERN.search(comment)
        expression = match.group(1).strip() if match else ""
        if not expression:
            self.diagnostics.add(
                DiagnosticKind.ANNOTATION_PARSE_SKIP,
                f"Malformed @type annotation on column {column_name}, using [{JSON_DEFAULT_TYPE}]",
                schema=self.config.schema,
                table=table_name,
                column=column_name,
            )
            return JSON_DEFAULT_TYPE

        custom_types.add(expression)
        return expression

    def _fallback_type(self, udt_name: str, column_name: str, table_name: Optional[str]) -> str:
        if self.config.throw_on_missing_type:
            raise UnmappedTypeError(
                self.DIALECT,
                udt_name,
                column_name,
                table=table_name,
                schema=self.config.schema,
            )
        self.diagnostics.add(
            DiagnosticKind.UNMAPPED_TYPE_FALLBACK,
            f"Type [{udt_name}] has been mapped to [{FALLBACK_TYPE}] because no specific type has been found.",
            schema=self.config.schema,
            table=table_name,
            column=column_name,
        )
        return FALLBACK_TYPE


class PostgresTypeMapper(TypeMapper):
    """Type mapper for Postgres types (udt_name values)."""

    DIALECT = "postgres"
    ARRAY_PREFIX = "_"

    TYPE_MAP = {
        # String types
        "bpchar": "string",
        "char": "string",
        "varchar": "string",
        "text": "string",
        "citext": "string",
        "uuid": "string",
        "bytea": "string",
        "inet": "string",
        "time": "string",
        "timetz": "string",
        "interval": "string",
        "name": "string",
        # Numeric types
        "int2": "number",
        "int4": "number",
        "int8": "number",
        "float4": "number",
        "float8": "number",
        "numeric": "number",
        "money": "number",
        "oid": "number",
        # Boolean
        "bool": "boolean",
        # Date/Time types
        "date": "Date",
        "timestamp": "Date",
        "timestamptz": "Date",
    }

    JSON_TYPES = {"json", "jsonb"}

    def unwrap_array(self, udt_name: str) -> Tuple[str, bool]:
        """Array columns report their element type prefixed with an underscore (_int4)."""
        if udt_name.startswith(self.ARRAY_PREFIX):
            return udt_name[len(self.ARRAY_PREFIX):], True
        return udt_name, False


class MySQLTypeMapper(TypeMapper):
    """Type mapper for MySQL types (information_schema DATA_TYPE values).

    Follows the type conversions of the mysqljs driver where sensible.
    """

    DIALECT = "mysql"

    TYPE_MAP = {
        # String types; enum and set stay strings unless resolved to a named enum
        "char": "string",
        "varchar": "string",
        "text": "string",
        "tinytext": "string",
        "mediumtext": "string",
        "longtext": "string",
        "time": "string",
        "geometry": "string",
        "set": "string",
        "enum": "string",
        # Numeric types
        "integer": "number",
        "int": "number",
        "smallint": "number",
        "mediumint": "number",
        "bigint": "number",
        "double": "number",
        "decimal": "number",
        "numeric": "number",
        "float": "number",
        "year": "number",
        # tinyint(1) is the conventional boolean
        "tinyint": "boolean",
        # Date/Time types
        "date": "Date",
        "datetime": "Date",
        "timestamp": "Date",
        # Binary types
        "tinyblob": "Buffer",
        "mediumblob": "Buffer",
        "longblob": "Buffer",
        "blob": "Buffer",
        "binary": "Buffer",
        "varbinary": "Buffer",
        "bit": "Buffer",
    }

    JSON_TYPES = {"json"}

    def unwrap_array(self, udt_name: str) -> Tuple[str, bool]:
        """MySQL has no array columns."""
        return udt_name, False


TYPE_MAPPERS = {
    PostgresTypeMapper.DIALECT: PostgresTypeMapper,
    MySQLTypeMapper.DIALECT: MySQLTypeMapper,
}


def get_type_mapper(
    dialect: str,
    config: Config,
    diagnostics: Optional[DiagnosticCollector] = None,
) -> TypeMapper:
    """Create the type mapper for a dialect name."""
    try:
        mapper_cls = TYPE_MAPPERS[dialect]
    except KeyError:
        raise ValueError(f"Unsupported dialect: {dialect}. Expected one of {sorted(TYPE_MAPPERS)}")
    return mapper_cls(config, diagnostics)
