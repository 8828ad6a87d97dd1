"""Shared utilities (I/O, merging, path resolution)."""
from __future__ import annotations

from .io import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    read_text,
    read_yaml,
    write_text,
)
from .merge import deep_merge
from .paths import get_project_config_dir, resolve_project_root

__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_directory",
    "ensure_parent_dir",
    "read_text",
    "read_yaml",
    "write_text",
    "deep_merge",
    "get_project_config_dir",
    "resolve_project_root",
]
