"""Tracking context for include resolution.

The context is purely observational: it records which files were included
and which directives could not be expanded, for reports and strict mode. It
never changes what the resolver produces.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Set


class DiagnosticKind(str, Enum):
    """Why a directive was left unresolved."""

    CIRCULAR = "circular"
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class IncludeDiagnostic:
    """One directive that was left verbatim in the output."""

    kind: DiagnosticKind
    directive: str  # exact matched text, e.g. "@include(foo.md)"
    argument: str  # trimmed path argument
    path: Path  # absolute path the argument resolved to
    message: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "directive": self.directive,
            "argument": self.argument,
            "path": str(self.path),
            "message": self.message,
        }


@dataclass
class IncludeContext:
    """Per-resolution record of included files and diagnostics."""

    includes_resolved: Set[Path] = field(default_factory=set)
    diagnostics: List[IncludeDiagnostic] = field(default_factory=list)

    def record_include(self, path: Path) -> None:
        """Record that an include was resolved."""
        self.includes_resolved.add(path)

    def record_diagnostic(self, diagnostic: IncludeDiagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def dependencies(self) -> List[Path]:
        """Included files, sorted for deterministic output."""
        return sorted(self.includes_resolved)

    @property
    def has_unresolved(self) -> bool:
        return bool(self.diagnostics)


__all__ = ["DiagnosticKind", "IncludeDiagnostic", "IncludeContext"]
