"""Database introspection module for schemats.

This module provides a dialect-neutral introspection contract with
implementations for Postgres and MySQL, plus the per-dialect type mappers.
"""

from .models import ColumnDefinition, TableDefinition, EnumTypes, SchemaDefinition
from .base import DatabaseIntrospector
from .enums import parse_enumeration, enum_name_from_column, merge_enum
from .type_mappers import (
    TypeMapper,
    PostgresTypeMapper,
    MySQLTypeMapper,
    get_type_mapper,
    JSON_DEFAULT_TYPE,
    FALLBACK_TYPE,
)
from .postgres import PostgresIntrospector
from .mysql import MySQLIntrospector

INTROSPECTORS = {
    PostgresIntrospector.DIALECT: PostgresIntrospector,
    MySQLIntrospector.DIALECT: MySQLIntrospector,
}

__all__ = [
    # Data models
    "ColumnDefinition",
    "TableDefinition",
    "EnumTypes",
    "SchemaDefinition",
    # Base classes
    "DatabaseIntrospector",
    # Inline enums
    "parse_enumeration",
    "enum_name_from_column",
    "merge_enum",
    # Type mappers
    "TypeMapper",
    "PostgresTypeMapper",
    "MySQLTypeMapper",
    "get_type_mapper",
    "JSON_DEFAULT_TYPE",
    "FALLBACK_TYPE",
    # Introspectors
    "PostgresIntrospector",
    "MySQLIntrospector",
    "INTROSPECTORS",
]
