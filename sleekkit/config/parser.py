"""YAML configuration parser for SleekKit.

This module provides parsing and validation for ``sleek.yaml`` files. Keys may
be written in snake_case or in the editor-style camelCase used by the sleek
editor integration (``indentSpaces``, ``linesBetweenQueries``, ...).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from sleekkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "sleek.yaml"

INDENT_RANGE = (1, 16)
LINES_BETWEEN_QUERIES_RANGE = (0, 10)

_CAMEL_CASE_KEYS = {
    "indentSpaces": "indent_spaces",
    "linesBetweenQueries": "lines_between_queries",
    "trailingNewline": "trailing_newline",
    "storageDir": "storage_dir",
    "checkIntervalHours": "check_interval_hours",
    "httpTimeout": "http_timeout",
}


@dataclass
class SleekConfig:
    """Formatting options and acquisition settings."""

    executable: str = "sleek"
    indent_spaces: int = 4
    uppercase: bool = True
    lines_between_queries: int = 2
    trailing_newline: bool = False
    storage_dir: Optional[str] = None
    check_interval_hours: float = 24
    http_timeout: Optional[float] = None


def clamp(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def _int_field(data: Dict[str, Any], key: str, default: int, bounds) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")

    clamped = clamp(value, *bounds)
    if clamped != value:
        logger.warning(
            f"{key}={value} is outside {bounds[0]}-{bounds[1]}, using {clamped}"
        )
    return clamped


def _bool_field(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _optional_number(data: Dict[str, Any], key: str, default):
    value = data.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value!r}")
    return value


def normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map camelCase keys onto their snake_case names."""
    normalized = {}
    for key, value in data.items():
        normalized[_CAMEL_CASE_KEYS.get(key, key)] = value
    return normalized


def validate_config(data: Optional[Dict[str, Any]] = None) -> SleekConfig:
    """
    Build a SleekConfig from a partial mapping.

    Missing keys take their defaults. Out-of-range integers are clamped,
    never rejected.

    Raises:
        ConfigError: If a value has the wrong type
    """
    data = normalize_keys(data or {})

    unknown = set(data) - set(SleekConfig.__dataclass_fields__)
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {', '.join(sorted(unknown))}")

    executable = data.get("executable") or "sleek"
    if not isinstance(executable, str):
        raise ConfigError(f"executable must be a string, got {executable!r}")

    storage_dir = data.get("storage_dir")
    if storage_dir is not None and not isinstance(storage_dir, str):
        raise ConfigError(f"storage_dir must be a string, got {storage_dir!r}")

    return SleekConfig(
        executable=executable,
        indent_spaces=_int_field(data, "indent_spaces", 4, INDENT_RANGE),
        uppercase=_bool_field(data, "uppercase", True),
        lines_between_queries=_int_field(
            data, "lines_between_queries", 2, LINES_BETWEEN_QUERIES_RANGE
        ),
        trailing_newline=_bool_field(data, "trailing_newline", False),
        storage_dir=storage_dir,
        check_interval_hours=_optional_number(data, "check_interval_hours", 24) or 24,
        http_timeout=_optional_number(data, "http_timeout", None),
    )


def parse_config(config_path: Path) -> SleekConfig:
    """
    Parse a sleek.yaml configuration file.

    An empty file yields the defaults.

    Raises:
        ConfigError: If the file is missing or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        return SleekConfig()

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    return validate_config(data)


def load_config(config_path: Optional[Path] = None, search_dir: Optional[Path] = None) -> SleekConfig:
    """
    Load configuration from an explicit path or ``<search_dir>/sleek.yaml``.

    Falls back to defaults when no explicit path is given and no file exists.
    """
    if config_path is not None:
        return parse_config(config_path)

    default_path = Path(search_dir or Path.cwd()) / DEFAULT_CONFIG_FILE
    if default_path.exists():
        return parse_config(default_path)

    logger.debug("No config file found, using defaults")
    return SleekConfig()
