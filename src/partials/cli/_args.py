"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for repository root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override repository root path",
    )


def add_strict_flag(parser: argparse.ArgumentParser) -> None:
    """Add --strict flag (fail on unresolved includes)."""
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail instead of writing output when an include cannot be resolved",
    )
