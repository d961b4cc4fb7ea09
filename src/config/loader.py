from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from src.models.config_models import (
    DEFAULT_ROW_NUMBER_COLUMN,
    ON_ERROR_ABORT,
    ON_ERROR_CONTINUE,
    LocalizeConfig,
)

"""Config loader.

Responsibilities:
- Load the YAML config (default config/localize.yml)
- Validate it against config_schema.json (jsonschema)
- Apply defaults for missing keys
- Apply environment overrides (PICTURELIST_OUTPUT_DIR / PICTURELIST_ON_ERROR)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/localize.yml")

ENV_OUTPUT_DIR = "PICTURELIST_OUTPUT_DIR"
ENV_ON_ERROR = "PICTURELIST_ON_ERROR"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid or the data violates it
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


def config_from_mapping(data: dict[str, Any]) -> LocalizeConfig:
    _validate_config_schema(data)
    targets = data.get("target_languages")
    return LocalizeConfig(
        sheet=data.get("sheet"),
        row_number_column=data.get("row_number_column", DEFAULT_ROW_NUMBER_COLUMN),
        source_language=data.get("source_language"),
        target_languages=tuple(targets) if targets else None,
        output_directory=data.get("output_directory"),
        on_error=data.get("on_error", ON_ERROR_CONTINUE),
        skip_empty_targets=data.get("skip_empty_targets", False),
    )


def load_config(path: Path | None = None) -> LocalizeConfig:
    """Load configuration.

    ``path=None`` reads DEFAULT_CONFIG_PATH when it exists and falls back to
    built-in defaults otherwise; an explicit path must exist.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return LocalizeConfig()
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return config_from_mapping(data)


def apply_env_overrides(config: LocalizeConfig, environ: dict[str, str] | None = None) -> LocalizeConfig:
    """Apply PICTURELIST_* environment variables on top of ``config``."""
    env = os.environ if environ is None else environ
    on_error = env.get(ENV_ON_ERROR)
    if on_error is not None:
        on_error = on_error.strip().lower()
        if on_error not in (ON_ERROR_CONTINUE, ON_ERROR_ABORT):
            raise ConfigError(f"{ENV_ON_ERROR} must be 'continue' or 'abort', got {on_error!r}")
    output_dir = env.get(ENV_OUTPUT_DIR) or None
    return config.with_overrides(on_error=on_error, output_directory=output_dir)
