"""Compile ``*.src.md`` sources into flattened documents.

A source is read, its ``@include`` directives are resolved, and the result is
written atomically to the output directory under the same name with the
source suffix swapped for the output suffix (``agent.src.md`` -> ``agent.md``).
Batch compiles isolate failures: one unreadable source never stops the others.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from partials.core.composition.context import IncludeContext, IncludeDiagnostic
from partials.core.composition.includes import IncludeResolver
from partials.core.errors import CompileError, UnresolvedIncludeError
from partials.core.utils.io import PathLike, ensure_directory, write_text

if TYPE_CHECKING:
    from partials.core.config import CompileConfig

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.src.md"
DEFAULT_SOURCE_SUFFIX = ".src.md"
DEFAULT_OUTPUT_SUFFIX = ".md"


def output_name_for(
    source: PathLike,
    source_suffix: str = DEFAULT_SOURCE_SUFFIX,
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> str:
    """Return the output file name for ``source``.

    Example:
        >>> output_name_for("sources/reviewer.src.md")
        'reviewer.md'
        >>> output_name_for("notes.txt")
        'notes.md'
    """
    name = Path(source).name
    if name.endswith(source_suffix) and len(name) > len(source_suffix):
        return name[: -len(source_suffix)] + output_suffix
    return Path(name).stem + output_suffix


def discover_sources(sources_dir: PathLike, pattern: str = DEFAULT_PATTERN) -> List[Path]:
    """Return sorted absolute paths of files in ``sources_dir`` matching ``pattern``."""
    root = Path(sources_dir)
    if not root.is_dir():
        logger.debug("Sources directory %s does not exist", root)
        return []
    return sorted(p.resolve() for p in root.glob(pattern) if p.is_file())


@dataclass
class CompileResult:
    """Outcome of compiling a single source."""

    source: Path
    output: Path
    dependencies: List[Path] = field(default_factory=list)
    diagnostics: List[IncludeDiagnostic] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": str(self.source),
            "output": str(self.output),
            "dependencies": [str(p) for p in self.dependencies],
            "unresolved": [d.to_dict() for d in self.diagnostics],
        }


@dataclass
class CompileReport:
    """Outcome of a batch compile."""

    succeeded: List[CompileResult] = field(default_factory=list)
    failed: Dict[Path, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "succeeded": [r.to_dict() for r in self.succeeded],
            "failed": {str(p): msg for p, msg in self.failed.items()},
        }


class Compiler:
    """Resolve sources and write the flattened output files."""

    def __init__(
        self,
        output_dir: PathLike,
        *,
        sources_dir: Optional[PathLike] = None,
        pattern: str = DEFAULT_PATTERN,
        source_suffix: str = DEFAULT_SOURCE_SUFFIX,
        output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
        encoding: str = "utf-8",
        strict: bool = False,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.sources_dir = Path(sources_dir) if sources_dir is not None else None
        self.pattern = pattern
        self.source_suffix = source_suffix
        self.output_suffix = output_suffix
        self.encoding = encoding
        self.strict = strict
        self.resolver = IncludeResolver(encoding=encoding)

    @classmethod
    def from_config(cls, config: CompileConfig, **overrides: Any) -> Compiler:
        """Build a compiler from a :class:`~partials.core.config.CompileConfig`."""
        kwargs: Dict[str, Any] = {
            "sources_dir": config.sources_dir,
            "pattern": config.pattern,
            "source_suffix": config.source_suffix,
            "output_suffix": config.output_suffix,
            "encoding": config.encoding,
            "strict": config.strict,
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        output_dir = kwargs.pop("output_dir", config.output_dir)
        return cls(output_dir, **kwargs)

    def output_path_for(self, source: PathLike) -> Path:
        return self.output_dir / output_name_for(source, self.source_suffix, self.output_suffix)

    def compile(self, source: PathLike) -> CompileResult:
        """Compile one source file.

        Raises:
            SourceNotFoundError: If the source cannot be read
            UnresolvedIncludeError: In strict mode, if any directive stayed unresolved
        """
        source_path = Path(source).resolve()
        output_path = self.output_path_for(source_path)
        logger.info("Compiling %s...", source_path.name)

        context = IncludeContext()
        try:
            compiled = self.resolver.resolve_file(source_path, context)
        except LookupError as exc:
            raise CompileError(f"{source_path.name}: unknown encoding {self.encoding!r}", source=source_path) from exc
        except RecursionError as exc:
            raise CompileError(f"{source_path.name}: include chain too deep", source=source_path) from exc

        if self.strict and context.has_unresolved:
            directives = ", ".join(d.directive for d in context.diagnostics)
            raise UnresolvedIncludeError(
                f"{source_path.name}: unresolved includes: {directives}",
                source=source_path,
                diagnostics=context.diagnostics,
            )

        ensure_directory(self.output_dir)
        write_text(output_path, compiled, encoding=self.encoding)
        logger.info("Created %s", output_path.name)

        return CompileResult(
            source=source_path,
            output=output_path,
            dependencies=context.dependencies,
            diagnostics=list(context.diagnostics),
        )

    def discover(self) -> List[Path]:
        if self.sources_dir is None:
            return []
        return discover_sources(self.sources_dir, self.pattern)

    def compile_all(self, sources: Optional[Iterable[PathLike]] = None) -> CompileReport:
        """Compile ``sources`` (or every discovered source) one after another.

        Per-source failures are logged and collected in the report.
        """
        targets = [Path(s) for s in sources] if sources else self.discover()
        report = CompileReport()
        if not targets:
            logger.info("No %s files found to compile.", self.pattern)
            return report

        claimed: Dict[Path, Path] = {}
        for source in targets:
            output_path = self.output_path_for(source)
            if output_path in claimed:
                message = f"output {output_path.name} already written from {claimed[output_path]}"
                logger.warning("Skipping %s: %s", source.name, message)
                report.failed[source.resolve()] = message
                continue
            try:
                result = self.compile(source)
            except CompileError as exc:
                logger.error("Failed to compile %s: %s", source.name, exc)
                report.failed[source.resolve()] = str(exc)
            except OSError as exc:
                logger.error("Failed to write output for %s: %s", source.name, exc)
                report.failed[source.resolve()] = str(exc)
            else:
                claimed[output_path] = result.source
                report.succeeded.append(result)

        logger.info("Compilation complete (%d/%d succeeded)", len(report.succeeded), report.total)
        return report


__all__ = [
    "CompileReport",
    "CompileResult",
    "Compiler",
    "discover_sources",
    "output_name_for",
]
