"""TypeScript code generation module."""

from .generator import TypeScriptGenerator, quote_literal, property_key, enum_member_keys

__all__ = [
    "TypeScriptGenerator",
    "quote_literal",
    "property_key",
    "enum_member_keys",
]
