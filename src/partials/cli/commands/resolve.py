"""
Partials resolve command.

SUMMARY: Resolve @include directives in one file and print the result
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from partials.cli import OutputFormatter, add_json_flag, add_repo_root_flag, add_strict_flag, get_repo_root
from partials.core.composition import IncludeContext, IncludeResolver
from partials.core.config import CompileConfig
from partials.core.errors import ConfigError, SourceNotFoundError
from partials.core.logging import configure_logging
from partials.core.utils.io import write_text

SUMMARY = "Resolve @include directives in one file and print the result"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("file", help="Document to resolve")
    parser.add_argument("-o", "--output", help="Write the result to this path instead of stdout")
    add_strict_flag(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        cfg = CompileConfig(repo_root=get_repo_root(args))
    except ConfigError as exc:
        formatter.error(exc, error_code="config_error")
        return 1

    if not getattr(args, "log_level", None):
        configure_logging(cfg.log_level)

    context = IncludeContext()
    try:
        content = IncludeResolver(encoding=cfg.encoding).resolve_file(args.file, context)
    except SourceNotFoundError as exc:
        formatter.error(exc, error_code="source_not_found")
        return 1
    except RecursionError:
        formatter.error(RuntimeError(args.file), f"Include chain too deep in {args.file}", error_code="too_deep")
        return 1

    strict = cfg.strict if args.strict is None else args.strict
    if strict and context.has_unresolved:
        directives = ", ".join(d.directive for d in context.diagnostics)
        formatter.error(RuntimeError(directives), f"Unresolved includes: {directives}", error_code="unresolved")
        return 1

    if args.output:
        write_text(Path(args.output), content, encoding=cfg.encoding)

    if formatter.json_mode:
        payload = {
            "source": str(Path(args.file).resolve()),
            "dependencies": [str(p) for p in context.dependencies],
            "unresolved": [d.to_dict() for d in context.diagnostics],
        }
        if args.output:
            payload["output"] = str(Path(args.output).resolve())
        else:
            payload["content"] = content
        formatter.json_output(payload)
    elif not args.output:
        sys.stdout.write(content)

    return 0
