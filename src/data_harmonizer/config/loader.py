from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import HarmonizerConfig, PivotConfig

"""Config loader.

Responsibilities:
- Load the YAML config (default config/harmonizer.yml)
- Validate it against the packaged config_schema.json
- Apply defaults (timezone=UTC, forecast_months=6, pivot agg_type=count)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/harmonizer.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the
            config data violates it (missing keys, wrong types, extra keys).
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


def load_config(path: Path) -> HarmonizerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    tz = data.get("timezone", "UTC")
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {tz}") from e

    pivot_raw = data.get("pivot")
    pivot = None
    if pivot_raw:
        pivot = PivotConfig(
            row_field=pivot_raw["row_field"],
            column_field=pivot_raw["column_field"],
            value_field=pivot_raw["value_field"],
            agg_type=pivot_raw.get("agg_type", "count"),
        )
    return HarmonizerConfig(
        source_directory=data["source_directory"],
        sheet_name=data.get("sheet_name"),
        keep_na_strings=data.get("keep_na_strings"),
        timezone=tz,
        forecast_months=data.get("forecast_months", 6),
        pivot=pivot,
    )
