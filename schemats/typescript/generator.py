"""TypeScript code generator for introspected schemas."""

import re
from typing import List, Optional

from ..config import Config
from ..database.models import ColumnDefinition, SchemaDefinition, TableDefinition

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
# Names TypeScript reads as numbers, which enum members may not have
_NUMERIC_NAME = re.compile(r"^([+-]?(\d|\.\d)|-?Infinity$|NaN$)")


def quote_literal(value: str) -> str:
    """Quote a value as a single-quoted TypeScript string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n").replace("\r", "\\r")
    return f"'{escaped}'"


def property_key(name: str) -> str:
    """Property or enum member key, quoted when it is not a plain identifier."""
    return name if _IDENTIFIER.match(name) else quote_literal(name)


def enum_member_keys(values: List[str]) -> List[str]:
    """Member keys for enum values, prefixing numeric-looking names with underscores."""
    keys: List[str] = []
    taken = set(values)
    for value in values:
        key = value
        if _NUMERIC_NAME.match(value):
            key = "_" + value
            while key in taken:
                key = "_" + key
            taken.add(key)
        keys.append(property_key(key))
    return keys


class TypeScriptGenerator:
    """Generates TypeScript declarations from a mapped schema definition."""

    def __init__(self, definition: SchemaDefinition, config: Config):
        self.definition = definition
        self.config = config

    def generate_header(self, command: Optional[str] = None) -> str:
        """Generate the banner comment marking the file as generated."""
        lines = [
            "/**",
            " * AUTO-GENERATED FILE - DO NOT EDIT!",
            " *",
            " * This file was automatically generated by schemats",
        ]
        if command:
            lines.append(f" * $ {command}")
        lines.append(" *")
        lines.append(" */")
        return "\n".join(lines)

    def generate_imports(self) -> str:
        """Generate the import of custom types named in @type annotations.

        Only plain identifiers are imported; inline type expressions such as
        ``Array<Foo>`` or ``{ a: string }`` are emitted as-is where used.
        """
        if not self.config.types_file:
            return ""
        names = [name for name in self.definition.sorted_custom_types() if _IDENTIFIER.match(name)]
        if not names:
            return ""
        return f"import {{ {', '.join(names)} }} from {quote_literal(self.config.types_file)}"

    def generate_enums(self) -> str:
        """Generate enum declarations, or literal unions when enums are disabled."""
        enum_defs = []
        for enum_name, values in self.definition.enums.items():
            type_name = self.config.transform_type_name(enum_name)
            if self.config.enums:
                lines = [f"export enum {type_name} {{"]
                members = [
                    f"  {key} = {quote_literal(value)}"
                    for key, value in zip(enum_member_keys(values), values)
                ]
                lines.append(",\n".join(members))
                lines.append("}")
                enum_defs.append("\n".join(lines))
            else:
                union = " | ".join(quote_literal(value) for value in values) or "never"
                enum_defs.append(f"export type {type_name} = {union}")
        return "\n\n".join(enum_defs)

    def generate_column_type(self, column: ColumnDefinition) -> str:
        """TypeScript type of a mapped column, with array and null wrappers."""
        ts_type = column.ts_type or "any"
        if column.is_array:
            ts_type = f"Array<{ts_type}>"
        if column.is_nullable:
            ts_type = f"{ts_type} | null"
        return ts_type

    def generate_table_interface(self, table_name: str, table: TableDefinition) -> str:
        """Generate the interface of one table."""
        lines = [f"export interface {self.config.transform_type_name(table_name)} {{"]
        for column_name, column in table.items():
            prop_name = property_key(self.config.transform_column_name(column_name))
            lines.append(f"  {prop_name}: {self.generate_column_type(column)}")
        lines.append("}")
        return "\n".join(lines)

    def generate_table_interfaces(self) -> str:
        """Generate interfaces for every table."""
        return "\n\n".join(
            self.generate_table_interface(table_name, table)
            for table_name, table in self.definition.tables.items()
        )

    def generate_all(self, command: Optional[str] = None) -> str:
        """Generate the complete file content.

        Args:
            command: Command line shown in the header, if any

        Returns:
            TypeScript source ending with a newline
        """
        sections: List[str] = []
        if self.config.write_header:
            sections.append(self.generate_header(command))
        sections.extend([
            self.generate_imports(),
            self.generate_enums(),
            self.generate_table_interfaces(),
        ])
        return "\n\n".join(section for section in sections if section) + "\n"
