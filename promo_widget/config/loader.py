from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.appearance import AppearanceOptions
from ..models.config_models import HeaderPolicy, OutputConfig, WidgetConfig

"""Config loader.

Responsibilities:
- Load the YAML config (default ``config/widget.yml``)
- Validate it against ``widget_schema.json`` shipped next to this module
- Fill every missing key with its default
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "config_from_dict",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/widget.yml")
SCHEMA_PATH = Path(__file__).parent / "widget_schema.json"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or broken, or the data does not
            satisfy it (unknown keys, wrong types, values outside the enums)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def config_from_dict(data: dict[str, Any]) -> WidgetConfig:
    """Build a WidgetConfig from already-parsed config data."""
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")
    _validate_config_schema(data)

    defaults = HeaderPolicy()
    hd = data.get("header_detection", {})
    header = HeaderPolicy(
        expected_columns=tuple(hd.get("expected_columns", defaults.expected_columns)),
        max_missing=hd.get("max_missing", defaults.max_missing),
        min_present=hd.get("min_present"),
        scan_rows=hd.get("scan_rows", defaults.scan_rows),
    )

    ap = data.get("appearance", {})
    try:
        appearance = AppearanceOptions(**ap)
    except ValueError as e:
        raise ConfigError(f"config validation failed: {e}") from e

    output = OutputConfig(**data.get("output", {}))
    return WidgetConfig(header=header, appearance=appearance, output=output)


def load_config(path: Path) -> WidgetConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    return config_from_dict(data)
