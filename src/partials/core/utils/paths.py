"""Project root resolution."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

PROJECT_CONFIG_DIR = ".partials"
_ROOT_MARKERS = (PROJECT_CONFIG_DIR, ".git")


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root.

    Resolution priority:
    1. PARTIALS_PROJECT_ROOT environment variable
    2. Nearest ancestor of ``start`` (default: cwd) containing ``.partials/`` or ``.git``
    3. ``start`` itself
    """
    env_root = os.environ.get("PARTIALS_PROJECT_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    here = (start or Path.cwd()).resolve()
    for candidate in (here, *here.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return here


def get_project_config_dir(repo_root: Path) -> Path:
    """Return ``<repo_root>/.partials`` (not created)."""
    return Path(repo_root) / PROJECT_CONFIG_DIR


__all__ = ["PROJECT_CONFIG_DIR", "resolve_project_root", "get_project_config_dir"]
