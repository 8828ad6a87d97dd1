"""Include resolution for ``@include(path)`` directives.

A directive is replaced by the content of the referenced file, itself
expanded recursively with that file's directory as the new base. Paths
already on the current ancestor chain are not entered again, so a cycle
leaves the closing directive verbatim instead of recursing forever.

Directive-level failures never raise: the directive stays in the output as
written, a message goes to the module logger, and a diagnostic is recorded
on the optional ``IncludeContext``.
"""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, Optional

from partials.core.composition.context import DiagnosticKind, IncludeContext, IncludeDiagnostic
from partials.core.errors import SourceNotFoundError
from partials.core.utils.io import PathLike, read_text

logger = logging.getLogger(__name__)

# @include(<anything but a closing paren>)
INCLUDE_PATTERN = re.compile(r"@include\(([^)]+)\)")

Reader = Callable[[Path, str], str]


def _absolute(base_path: PathLike, argument: str) -> Path:
    # Lexical normalisation; an absolute argument replaces the base.
    return Path(os.path.normpath(os.path.join(os.path.abspath(base_path), argument)))


class IncludeResolver:
    """Resolve ``@include(path)`` directives recursively.

    The resolver holds no state between calls. The visited set is a
    ``frozenset`` passed down by value, so two sibling branches that include
    the same file (a diamond) both expand it; only a repeat on the ancestor
    chain counts as a cycle.
    """

    def __init__(self, *, encoding: str = "utf-8", reader: Optional[Reader] = None) -> None:
        """Initialize the resolver.

        Args:
            encoding: Text encoding used to read included files
            reader: Optional ``(path, encoding) -> str`` replacement for the
                file system reader
        """
        self.encoding = encoding
        self._reader: Reader = reader or (lambda path, enc: read_text(path, encoding=enc))

    def resolve(
        self,
        document: str,
        base_path: PathLike,
        visited: Iterable[Path] = frozenset(),
        context: Optional[IncludeContext] = None,
    ) -> str:
        """Expand every directive in ``document``.

        Args:
            document: Text to scan for directives
            base_path: Directory relative paths are resolved against
            visited: Absolute paths on the current ancestor chain
            context: Optional tracking context

        Returns:
            The document with every resolvable directive substituted
        """
        chain: FrozenSet[Path] = frozenset(Path(os.path.abspath(p)) for p in visited)

        def _replace(match: re.Match[str]) -> str:
            return self._expand(match, base_path, chain, context)

        return INCLUDE_PATTERN.sub(_replace, document)

    def resolve_file(self, path: PathLike, context: Optional[IncludeContext] = None) -> str:
        """Read ``path`` and expand its directives.

        The file itself seeds the ancestor chain, so an include that leads
        back to it is reported as circular.

        Raises:
            SourceNotFoundError: If the top-level file cannot be read
        """
        source = _absolute(os.getcwd(), str(path))
        try:
            document = self._reader(source, self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceNotFoundError(f"Cannot read source {source}: {exc}", source=source) from exc
        return self.resolve(document, source.parent, frozenset({source}), context)

    def _expand(
        self,
        match: re.Match[str],
        base_path: PathLike,
        chain: FrozenSet[Path],
        context: Optional[IncludeContext],
    ) -> str:
        directive = match.group(0)
        argument = match.group(1).strip()
        target = _absolute(base_path, argument)

        if target in chain:
            logger.warning("Circular include detected: %s", argument)
            self._record(
                context, DiagnosticKind.CIRCULAR, directive, argument, target,
                f"Circular include detected: {argument}",
            )
            return directive

        try:
            content = self._reader(target, self.encoding)
        except FileNotFoundError as exc:
            logger.error("Error including %s: %s", argument, exc)
            self._record(context, DiagnosticKind.NOT_FOUND, directive, argument, target, str(exc))
            return directive
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error including %s: %s", argument, exc)
            self._record(context, DiagnosticKind.UNREADABLE, directive, argument, target, str(exc))
            return directive

        if context is not None:
            context.record_include(target)
        return self.resolve(content, target.parent, chain | {target}, context)

    @staticmethod
    def _record(
        context: Optional[IncludeContext],
        kind: DiagnosticKind,
        directive: str,
        argument: str,
        target: Path,
        message: str,
    ) -> None:
        if context is None:
            return
        context.record_diagnostic(
            IncludeDiagnostic(kind=kind, directive=directive, argument=argument, path=target, message=message)
        )


def resolve_includes(
    document: str,
    base_path: PathLike,
    visited: Iterable[Path] = frozenset(),
    *,
    context: Optional[IncludeContext] = None,
    encoding: str = "utf-8",
) -> str:
    """Resolve ``@include(path)`` directives in ``document``.

    Convenience wrapper around :class:`IncludeResolver`. Never raises for
    missing, unreadable or circular includes; those directives are left in
    the returned text.

    Example:
        >>> resolve_includes("no directives here", "/tmp")
        'no directives here'
    """
    return IncludeResolver(encoding=encoding).resolve(document, base_path, visited, context)


__all__ = ["INCLUDE_PATTERN", "IncludeResolver", "resolve_includes"]
