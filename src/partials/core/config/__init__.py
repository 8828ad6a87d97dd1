"""Configuration loading for Partials."""
from __future__ import annotations

from .compile import CompileConfig
from .manager import ConfigManager

__all__ = ["CompileConfig", "ConfigManager"]
