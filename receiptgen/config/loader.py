from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AppConfig, ReceiptSettings
from ..models.receipt_field import ReceiptField

"""Config loader.

Responsibilities:
- Load the YAML config (default config/receipts.yml)
- Validate it against the packaged config_schema.json
- Apply defaults and build the AppConfig value object
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/receipts.yml")
CONFIG_ENV_VAR = "RECEIPTGEN_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (missing required keys, wrong
            types, unknown keys).
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


def resolve_config_path(cli_value: str | None = None) -> Path:
    """--config value, else $RECEIPTGEN_CONFIG, else config/receipts.yml."""
    if cli_value:
        return Path(cli_value)
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    rs_raw = data.get("receipt_settings") or {}
    defaults = ReceiptSettings()
    settings = ReceiptSettings(
        starting_number=rs_raw.get("starting_number", defaults.starting_number),
        currency=rs_raw.get("currency", defaults.currency),
        currency_symbol=rs_raw.get("currency_symbol", defaults.currency_symbol),
        date_format=rs_raw.get("date_format", defaults.date_format),
    )
    overrides = {
        str(header): ReceiptField(field)
        for header, field in (data.get("column_overrides") or {}).items()
    }
    return AppConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", "./output"),
        receipt_settings=settings,
        column_overrides=overrides,
        header_search_rows=data.get("header_search_rows", 10),
        workers=data.get("workers", 1),
        keep_na_strings=data.get("keep_na_strings"),
    )
