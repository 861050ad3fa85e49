"""Database data models for schema introspection."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from ..diagnostics import Diagnostic


@dataclass
class ColumnDefinition:
    """Represents a database column, before and after type mapping.

    ``udt_name`` is the native type name with any array marker stripped;
    ``ts_type`` is only set on columns returned by a type mapper.
    """
    udt_name: str
    is_nullable: bool = True
    is_array: bool = False
    has_default: bool = False
    comment: Optional[str] = None
    ts_type: Optional[str] = None


# Column name -> column, in catalog ordinal order
TableDefinition = Dict[str, ColumnDefinition]

# Enum name -> literal values in declared order
EnumTypes = Dict[str, List[str]]


@dataclass
class SchemaDefinition:
    """Mapped tables and enums of one schema, ready for code generation."""
    schema: str
    tables: Dict[str, TableDefinition] = field(default_factory=dict)
    enums: EnumTypes = field(default_factory=dict)
    custom_types: Set[str] = field(default_factory=set)
    diagnostics: List["Diagnostic"] = field(default_factory=list)

    def sorted_custom_types(self) -> List[str]:
        """Custom types in a stable order for import statements."""
        return sorted(self.custom_types)

    def get_table(self, table_name: str) -> Optional[TableDefinition]:
        return self.tables.get(table_name)
