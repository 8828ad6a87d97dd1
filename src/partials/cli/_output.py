"""Unified CLI output formatting utilities.

Supports both JSON and text output modes. Results go to stdout, errors to
stderr.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Optional


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        """Output error result to stderr."""
        msg = message or str(error)
        if self.json_mode:
            output = {"error": error_code, "message": msg}
            print(json.dumps(output, indent=self.indent), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message)


def print_success(message: str) -> None:
    """Print success message with checkmark."""
    print(f"✓ {message}")

