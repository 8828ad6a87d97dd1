"""
Partials configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import codecs
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import jsonschema
import yaml

from partials.core.errors import ConfigError
from partials.core.utils.io import read_yaml
from partials.core.utils.merge import deep_merge
from partials.core.utils.paths import get_project_config_dir, resolve_project_root
from partials.data import get_data_path, read_json

logger = logging.getLogger(__name__)

ENV_PREFIX = "PARTIALS_"
PROJECT_CONFIG_FILENAMES = ("config.yaml", "config.yml")


class ConfigManager:
    """Load, merge, and validate Partials configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: PARTIALS_<SECTION>__<KEY>
    2. Project config: <repo_root>/.partials/config.yaml
    3. Bundled defaults: partials.data/config/defaults.yaml
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else resolve_project_root()
        self.core_defaults_path = get_data_path("config", "defaults.yaml")
        self.project_config_dir = get_project_config_dir(self.repo_root)

    @property
    def project_config_path(self) -> Optional[Path]:
        for name in PROJECT_CONFIG_FILENAMES:
            candidate = self.project_config_dir / name
            if candidate.exists():
                return candidate
        return None

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        return data

    # ---- environment overrides -------------------------------------------

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return s
        return s

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX) :]
            # Only PARTIALS_<SECTION>__<KEY> names are config paths; others
            # (e.g. PARTIALS_PROJECT_ROOT) are plain environment settings.
            if "__" not in raw:
                continue
            segs = raw.split("__")
            if any(not seg for seg in segs):
                logger.warning("Ignoring malformed config override %s", key)
                continue
            yield segs, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Dict[str, Any] = root
        for i, part in enumerate(path):
            # Case-insensitive match against existing keys (env names are usually upper-case).
            candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            use_key = candidates.get(part.lower(), part.lower())
            if i == len(path) - 1:
                cur[use_key] = value
                return
            nxt = cur.get(use_key)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[use_key] = nxt
            cur = nxt

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ---- loading -----------------------------------------------------------

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_json("schemas", "config.schema.json")
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: [str(p) for p in e.path])
        if errors:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err.path) or '<root>'}: {err.message}" for err in errors
            )
            raise ConfigError(f"Invalid configuration: {details}")

        encoding = (config.get("compile") or {}).get("encoding")
        if encoding is not None:
            try:
                codecs.lookup(encoding)
            except LookupError as exc:
                raise ConfigError(f"Invalid configuration: compile.encoding: unknown encoding {encoding!r}") from exc

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration dictionary.

        Raises:
            ConfigError: On unreadable YAML or schema violations
        """
        cfg = self.load_yaml(self.core_defaults_path)

        project_path = self.project_config_path
        if project_path is not None:
            logger.debug("Loading project config %s", project_path)
            cfg = deep_merge(cfg, self.load_yaml(project_path))

        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg


__all__ = ["ConfigManager", "ENV_PREFIX"]
