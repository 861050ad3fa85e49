"""Helpers for enums declared inline on columns (MySQL enum/set)."""

import re
from typing import List, Optional

from ..errors import EnumCollisionError
from .models import EnumTypes

_CONSTRUCTOR_PATTERN = re.compile(r"^\s*(enum|set)\s*\(\s*'(.*)'\s*\)\s*$", re.IGNORECASE | re.DOTALL)


def parse_enumeration(column_type: str) -> List[str]:
    """Extract the literal values of an inline enum or set type.

        parse_enumeration("enum('a','b','c')") -> ["a", "b", "c"]
        parse_enumeration("set('x','y')")      -> ["x", "y"]

    Values keep their declared order and text; doubled quotes used by the
    catalog to escape a quote are folded back to a single quote.
    """
    match = _CONSTRUCTOR_PATTERN.match(column_type)
    if not match:
        return []
    return [value.replace("''", "'") for value in match.group(2).split("','")]


def enum_name_from_column(data_type: str, column_name: str) -> str:
    """Synthesize a name for an anonymous inline enum (enum_status)."""
    return f"{data_type}_{column_name}"


def merge_enum(
    enum_types: EnumTypes,
    enum_name: str,
    values: List[str],
    column: Optional[str] = None,
    schema: Optional[str] = None,
) -> EnumTypes:
    """Add an enum to the catalog, coalescing identical definitions.

    Raises:
        EnumCollisionError: If the name already maps to a different
            ordered list of values.
    """
    existing = enum_types.get(enum_name)
    if existing is not None and existing != values:
        raise EnumCollisionError(enum_name, existing, values, column=column, schema=schema)
    enum_types[enum_name] = list(values)
    return enum_types
