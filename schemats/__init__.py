"""schemats - TypeScript declarations generated from live database schemas."""

from .config import Config
from .assembler import SchemaAssembler, generate
from .diagnostics import Diagnostic, DiagnosticCollector, DiagnosticKind
from .errors import SchematsError, ConnectionError, UnmappedTypeError, EnumCollisionError

__version__ = "0.1.0"

__all__ = [
    "Config",
    "SchemaAssembler",
    "generate",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
    "SchematsError",
    "ConnectionError",
    "UnmappedTypeError",
    "EnumCollisionError",
]
