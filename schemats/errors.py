"""Error types for schemats."""

import json
from typing import Optional, Dict, Any, List


class SchematsError(Exception):
    """Base exception for schemats errors."""

    def __init__(self, message: str, code: str = "SCHEMATS_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConnectionError(SchematsError):
    """Cannot reach or authenticate to the database."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class UnmappedTypeError(SchematsError):
    """A native column type has no mapping rule and strict mode is on."""

    def __init__(
        self,
        dialect: str,
        udt_name: str,
        column: str,
        table: Optional[str] = None,
        schema: Optional[str] = None,
    ):
        location = ".".join(part for part in (schema, table, column) if part)
        super().__init__(
            f"Type [{udt_name}] of column {location} has no {dialect} mapping",
            code="UNMAPPED_TYPE",
            details={
                "dialect": dialect,
                "udt_name": udt_name,
                "schema": schema,
                "table": table,
                "column": column,
            },
        )
        self.dialect = dialect
        self.udt_name = udt_name
        self.schema = schema
        self.table = table
        self.column = column


class EnumCollisionError(SchematsError):
    """Two columns synthesize the same enum name with different values."""

    def __init__(
        self,
        enum_name: str,
        existing: List[str],
        conflicting: List[str],
        column: Optional[str] = None,
        schema: Optional[str] = None,
    ):
        super().__init__(
            f"Multiple enums with the same name and contradicting types were found: "
            f"{enum_name}: {json.dumps(existing)} and {json.dumps(conflicting)}",
            code="ENUM_COLLISION",
            details={
                "enum_name": enum_name,
                "existing": list(existing),
                "conflicting": list(conflicting),
                "column": column,
                "schema": schema,
            },
        )
        self.enum_name = enum_name
        self.existing = list(existing)
        self.conflicting = list(conflicting)
