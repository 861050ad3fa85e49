"""Non-fatal diagnostics collected during a generation run.

Diagnostics never end up in the generated source. They are logged as they are
recorded and kept on the collector so the CLI can print a summary on stderr.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """Kinds of non-fatal conditions."""
    MISSING_SCHEMA_OBJECT = "missing_schema_object"
    ANNOTATION_PARSE_SKIP = "annotation_parse_skip"
    UNMAPPED_TYPE_FALLBACK = "unmapped_type_fallback"


@dataclass(frozen=True)
class Diagnostic:
    """A single non-fatal condition found while introspecting or mapping."""
    kind: DiagnosticKind
    message: str
    schema: Optional[str] = None
    table: Optional[str] = None
    column: Optional[str] = None

    @property
    def location(self) -> str:
        return ".".join(part for part in (self.schema, self.table, self.column) if part)


class DiagnosticCollector:
    """Thread-safe accumulator of diagnostics for one run."""

    def __init__(self):
        self._lock = threading.Lock()
        self._diagnostics: List[Diagnostic] = []

    def add(
        self,
        kind: DiagnosticKind,
        message: str,
        schema: Optional[str] = None,
        table: Optional[str] = None,
        column: Optional[str] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, schema=schema, table=table, column=column)
        with self._lock:
            self._diagnostics.append(diagnostic)
        logger.info("%s: %s", kind.value, message)
        return diagnostic

    @property
    def diagnostics(self) -> List[Diagnostic]:
        with self._lock:
            return list(self._diagnostics)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    def __len__(self) -> int:
        with self._lock:
            return len(self._diagnostics)
