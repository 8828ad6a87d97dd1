"""Typed accessor for the ``compile`` configuration section."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .manager import ConfigManager


class CompileConfig:
    """Compile settings with paths resolved against the repo root.

    Usage:
        cfg = CompileConfig(repo_root=Path("/path/to/project"))
        print(cfg.sources_dir, cfg.pattern)
    """

    def __init__(self, repo_root: Optional[Path] = None, config: Optional[Dict[str, Any]] = None) -> None:
        manager = ConfigManager(repo_root)
        self.repo_root = manager.repo_root
        self._config = config if config is not None else manager.load_config()

    @cached_property
    def section(self) -> Dict[str, Any]:
        return self._config.get("compile", {}) or {}

    def _path(self, key: str, default: str) -> Path:
        raw = Path(str(self.section.get(key, default))).expanduser()
        return raw if raw.is_absolute() else (self.repo_root / raw)

    @cached_property
    def sources_dir(self) -> Path:
        return self._path("sourcesDir", "sources")

    @cached_property
    def output_dir(self) -> Path:
        return self._path("outputDir", "compiled")

    @cached_property
    def pattern(self) -> str:
        return str(self.section.get("pattern", "*.src.md"))

    @cached_property
    def source_suffix(self) -> str:
        return str(self.section.get("sourceSuffix", ".src.md"))

    @cached_property
    def output_suffix(self) -> str:
        return str(self.section.get("outputSuffix", ".md"))

    @cached_property
    def encoding(self) -> str:
        return str(self.section.get("encoding", "utf-8"))

    @cached_property
    def strict(self) -> bool:
        return bool(self.section.get("strict", False))

    @cached_property
    def log_level(self) -> str:
        return str((self._config.get("logging", {}) or {}).get("level", "INFO"))


__all__ = ["CompileConfig"]
