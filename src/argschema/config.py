"""Configuration for manifest field names and schema output."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from argschema.errors import ConfigError
from argschema.translator import DEFAULT_CLI_DEST_KEY
from argschema.types import DEFAULT_SCHEMA_URI

CONFIG_ENV_VAR = "ARGSCHEMA_CONFIG"


@dataclass(frozen=True)
class ArgSchemaConfig:
    """Where the driver declares its main class and where the schema goes."""

    manifest_name: str = "package.json"
    namespace: str = "appium"
    main_class_field: str = "mainClass"
    schema_field: str = "schema"
    schema_uri: str = DEFAULT_SCHEMA_URI
    cli_dest_key: str = DEFAULT_CLI_DEST_KEY
    constraints_attr: str = "argsConstraints"
    indent: int = 2
    legacy_self_checks: bool = False

    @staticmethod
    def _require_str(data: Mapping[str, Any], key: str, default: str) -> str:
        value = data.get(key, default)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"Config '{key}' must be a non-empty string")
        return value

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ArgSchemaConfig":
        """Create a config from a mapping, using defaults for missing keys."""
        defaults = cls()
        indent = config.get("indent", defaults.indent)
        if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
            raise ConfigError("Config 'indent' must be a non-negative integer")
        legacy = config.get("legacy_self_checks", defaults.legacy_self_checks)
        if not isinstance(legacy, bool):
            raise ConfigError("Config 'legacy_self_checks' must be a boolean")

        return cls(
            manifest_name=cls._require_str(config, "manifest_name", defaults.manifest_name),
            namespace=cls._require_str(config, "namespace", defaults.namespace),
            main_class_field=cls._require_str(
                config, "main_class_field", defaults.main_class_field
            ),
            schema_field=cls._require_str(config, "schema_field", defaults.schema_field),
            schema_uri=cls._require_str(config, "schema_uri", defaults.schema_uri),
            cli_dest_key=cls._require_str(config, "cli_dest_key", defaults.cli_dest_key),
            constraints_attr=cls._require_str(
                config, "constraints_attr", defaults.constraints_attr
            ),
            indent=indent,
            legacy_self_checks=legacy,
        )


def load_config(config_path: str | os.PathLike[str] | None = None) -> ArgSchemaConfig:
    """Load config from YAML, falling back to ``$ARGSCHEMA_CONFIG`` then defaults."""
    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR) or None
    if config_path is None:
        return ArgSchemaConfig()

    path = Path(config_path)
    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as exc:
        raise ConfigError(f"Failed to read config at {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config at {path}: {exc}") from exc

    if raw is None:
        return ArgSchemaConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Config at {path} must be a mapping")
    return ArgSchemaConfig.from_config(raw)
