"""
Partials compile command.

SUMMARY: Compile *.src.md sources into flattened documents

With no SOURCES, every file matching ``compile.pattern`` in
``compile.sourcesDir`` is compiled. Each failure is reported and the
remaining sources are still compiled; the exit code is 1 if any failed.
"""
from __future__ import annotations

import argparse

from partials.cli import (
    OutputFormatter,
    add_json_flag,
    add_repo_root_flag,
    add_strict_flag,
    get_repo_root,
    print_success,
)
from partials.core.composition import Compiler
from partials.core.config import CompileConfig
from partials.core.errors import ConfigError
from partials.core.logging import configure_logging

SUMMARY = "Compile *.src.md sources into flattened documents"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "sources",
        nargs="*",
        help="Source files to compile (default: discover in the sources directory)",
    )
    parser.add_argument("--sources-dir", help="Directory scanned for sources (overrides compile.sourcesDir)")
    parser.add_argument("--output-dir", help="Directory compiled files are written to (overrides compile.outputDir)")
    parser.add_argument("--pattern", help="Glob used to discover sources (overrides compile.pattern)")
    add_strict_flag(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Compile sources - explicit files or the discovered set."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        cfg = CompileConfig(repo_root=get_repo_root(args))
    except ConfigError as exc:
        formatter.error(exc, error_code="config_error")
        return 1

    if not getattr(args, "log_level", None):
        configure_logging(cfg.log_level)

    compiler = Compiler.from_config(
        cfg,
        sources_dir=args.sources_dir,
        output_dir=args.output_dir,
        pattern=args.pattern,
        strict=args.strict,
    )
    report = compiler.compile_all(args.sources or None)

    if formatter.json_mode:
        formatter.json_output({"status": "success" if report.ok else "failed", **report.to_dict()})
        return 0 if report.ok else 1

    if report.total == 0:
        formatter.text(f"No {compiler.pattern} files found to compile.")
        return 0

    formatter.text(f"Compilation complete ({len(report.succeeded)}/{report.total} succeeded)")
    for result in report.succeeded:
        print_success(result.output.name)
        for diag in result.diagnostics:
            formatter.text(f"    unresolved: {diag.directive} ({diag.kind.value})")
    for source, message in report.failed.items():
        formatter.error(RuntimeError(message), f"{source.name}: {message}")

    return 0 if report.ok else 1
