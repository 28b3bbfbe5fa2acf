"""Unit tests for argschema configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from argschema.config import CONFIG_ENV_VAR, ArgSchemaConfig, load_config
from argschema.errors import ConfigError


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = load_config()

    assert config == ArgSchemaConfig()
    assert config.namespace == "appium"
    assert config.main_class_field == "mainClass"
    assert config.schema_field == "schema"
    assert config.indent == 2
    assert config.legacy_self_checks is False


def test_loads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "argschema.yaml"
    path.write_text("namespace: plugin\nindent: 4\nlegacy_self_checks: true\n")

    config = load_config(path)

    assert config.namespace == "plugin"
    assert config.indent == 4
    assert config.legacy_self_checks is True
    assert config.manifest_name == "package.json"


def test_env_var_points_at_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "argschema.yaml"
    path.write_text("schema_field: configSchema\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_config().schema_field == "configSchema"


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "argschema.yaml"
    path.write_text("")

    assert load_config(path) == ArgSchemaConfig()


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Failed to read"):
        load_config(tmp_path / "missing.yaml")


def test_non_mapping_raises(tmp_path: Path) -> None:
    path = tmp_path / "argschema.yaml"
    path.write_text("- a\n- b\n")

    with pytest.raises(ConfigError, match="must be a mapping"):
        load_config(path)


@pytest.mark.parametrize(
    ("config", "match"),
    [
        ({"indent": -1}, "indent"),
        ({"indent": True}, "indent"),
        ({"namespace": ""}, "namespace"),
        ({"legacy_self_checks": "yes"}, "legacy_self_checks"),
    ],
)
def test_invalid_values_raise(config, match) -> None:
    with pytest.raises(ConfigError, match=match):
        ArgSchemaConfig.from_config(config)
