"""
Partials CLI package.

Top-level commands are auto-discovered from ``partials.cli.commands``; each
module exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""
from ._args import add_json_flag, add_repo_root_flag, add_strict_flag
from ._output import OutputFormatter, print_success
from ._utils import get_repo_root

__all__ = [
    "OutputFormatter",
    "print_success",
    "add_json_flag",
    "add_repo_root_flag",
    "add_strict_flag",
    "get_repo_root",
]
