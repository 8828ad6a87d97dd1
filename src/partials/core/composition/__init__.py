"""Document composition: include resolution and compilation.

Public API:
- resolve_includes / IncludeResolver: expand ``@include(path)`` directives
- Compiler: resolve ``*.src.md`` sources and write flattened outputs
"""
from __future__ import annotations

from .compiler import CompileReport, CompileResult, Compiler, discover_sources, output_name_for
from .context import DiagnosticKind, IncludeContext, IncludeDiagnostic
from .includes import INCLUDE_PATTERN, IncludeResolver, resolve_includes

__all__ = [
    "INCLUDE_PATTERN",
    "IncludeResolver",
    "resolve_includes",
    "DiagnosticKind",
    "IncludeContext",
    "IncludeDiagnostic",
    "CompileReport",
    "CompileResult",
    "Compiler",
    "discover_sources",
    "output_name_for",
]
