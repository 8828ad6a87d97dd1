"""Partials error classes."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from partials.core.composition.context import IncludeDiagnostic


class PartialsError(Exception):
    """Base class for all Partials errors."""


class ConfigError(PartialsError):
    """Raised when configuration cannot be loaded or fails validation."""


class CompileError(PartialsError):
    """Raised when a single source document cannot be compiled."""

    def __init__(self, message: str, source: Path | None = None) -> None:
        super().__init__(message)
        self.source = source


class SourceNotFoundError(CompileError):
    """Raised when the top-level source document cannot be read."""


class UnresolvedIncludeError(CompileError):
    """Raised in strict mode when directives were left unresolved."""

    def __init__(
        self,
        message: str,
        source: Path | None = None,
        diagnostics: Sequence["IncludeDiagnostic"] = (),
    ) -> None:
        super().__init__(message, source)
        self.diagnostics = list(diagnostics)


__all__ = [
    "PartialsError",
    "ConfigError",
    "CompileError",
    "SourceNotFoundError",
    "UnresolvedIncludeError",
]
