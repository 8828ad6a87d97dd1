from __future__ import annotations

from pathlib import Path

import pytest

from partials.core.config import CompileConfig, ConfigManager
from partials.core.errors import ConfigError
from partials.data import get_data_path


def test_bundled_defaults_load_and_validate(tmp_path: Path) -> None:
    cfg = ConfigManager(tmp_path).load_config()

    assert cfg["compile"]["pattern"] == "*.src.md"
    assert cfg["compile"]["strict"] is False
    assert cfg["logging"]["level"] == "INFO"


def test_bundled_files_exist() -> None:
    assert get_data_path("config", "defaults.yaml").is_file()
    assert get_data_path("schemas", "config.schema.json").is_file()


def test_project_config_overrides_defaults(tmp_path: Path, write) -> None:
    write(".partials/config.yaml", "compile:\n  outputDir: agents\n")

    cfg = ConfigManager(tmp_path).load_config()

    assert cfg["compile"]["outputDir"] == "agents"
    assert cfg["compile"]["sourcesDir"] == "sources"


def test_project_config_yml_extension(tmp_path: Path, write) -> None:
    write(".partials/config.yml", "logging:\n  level: DEBUG\n")

    assert ConfigManager(tmp_path).load_config()["logging"]["level"] == "DEBUG"


def test_env_overrides_are_coerced(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARTIALS_COMPILE__STRICT", "true")
    monkeypatch.setenv("PARTIALS_COMPILE__OUTPUTDIR", "built")
    monkeypatch.setenv("PARTIALS_PROJECT_ROOT", str(tmp_path))

    cfg = ConfigManager(tmp_path).load_config()

    assert cfg["compile"]["strict"] is True
    assert cfg["compile"]["outputDir"] == "built"
    assert "project" not in cfg


def test_schema_violation_raises(tmp_path: Path, write) -> None:
    write(".partials/config.yaml", "compile:\n  strict: maybe\n")

    with pytest.raises(ConfigError, match="compile.strict"):
        ConfigManager(tmp_path).load_config()


def test_unknown_compile_key_rejected(tmp_path: Path, write) -> None:
    write(".partials/config.yaml", "compile:\n  outptuDir: typo\n")

    with pytest.raises(ConfigError):
        ConfigManager(tmp_path).load_config()


def test_invalid_yaml_raises(tmp_path: Path, write) -> None:
    write(".partials/config.yaml", "compile: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigManager(tmp_path).load_config()


def test_non_mapping_yaml_raises(tmp_path: Path, write) -> None:
    write(".partials/config.yaml", "- just\n- a list\n")

    with pytest.raises(ConfigError, match="mapping"):
        ConfigManager(tmp_path).load_config()


def test_validation_can_be_skipped(tmp_path: Path, write) -> None:
    write(".partials/config.yaml", "compile:\n  strict: maybe\n")

    assert ConfigManager(tmp_path).load_config(validate=False)["compile"]["strict"] == "maybe"


def test_compile_config_resolves_paths(tmp_path: Path, write) -> None:
    write(".partials/config.yaml", f"compile:\n  sourcesDir: src\n  outputDir: {tmp_path / 'abs-out'}\n")

    cfg = CompileConfig(repo_root=tmp_path)

    assert cfg.sources_dir == tmp_path / "src"
    assert cfg.output_dir == tmp_path / "abs-out"
    assert cfg.source_suffix == ".src.md"
    assert cfg.output_suffix == ".md"
    assert cfg.encoding == "utf-8"
    assert cfg.log_level == "INFO"


def test_repo_root_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARTIALS_PROJECT_ROOT", str(tmp_path))

    assert ConfigManager().repo_root == tmp_path.resolve()


def test_unknown_encoding_rejected(tmp_path: Path, write) -> None:
    write(".partials/config.yaml", "compile:\n  encoding: bogus-codec\n")

    with pytest.raises(ConfigError, match="compile.encoding"):
        ConfigManager(tmp_path).load_config()


def test_known_encoding_alias_accepted(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARTIALS_COMPILE__ENCODING", "latin-1")

    assert CompileConfig(repo_root=tmp_path).encoding == "latin-1"
