"""
Configuration Loader for Batch Processor

This module loads the batch processor settings from `config/settings.yml`
and applies environment-variable overrides on top of them.

Precedence (highest first):
- Environment variables (BATCH_INPUT_PATH, BATCH_OUTPUT_PATH, BATCH_LOG_LEVEL)
- YAML configuration file
- Built-in defaults
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


DEFAULT_INPUT_PATH = "data/input.sample.json"
DEFAULT_OUTPUT_PATH = "data/output.sample.json"
DEFAULT_LOG_LEVEL = "info"

CONFIG_PATH_ENV = "BATCH_PROCESSOR_CONFIG"
ENV_OVERRIDES = {
    "default_input_path": "BATCH_INPUT_PATH",
    "default_output_path": "BATCH_OUTPUT_PATH",
    "log_level": "BATCH_LOG_LEVEL",
}


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or parsed."""
    pass


@dataclass(frozen=True)
class BatchConfig:
    """Settings for a single batch run. Read-only once loaded."""

    default_input_path: str = DEFAULT_INPUT_PATH
    default_output_path: str = DEFAULT_OUTPUT_PATH
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "BatchConfig":
        """Create BatchConfig from dictionary, falling back to defaults for missing keys."""
        return cls(
            default_input_path=_string_setting(config_dict, "default_input_path", DEFAULT_INPUT_PATH),
            default_output_path=_string_setting(config_dict, "default_output_path", DEFAULT_OUTPUT_PATH),
            log_level=_string_setting(config_dict, "log_level", DEFAULT_LOG_LEVEL),
        )


def _string_setting(config_dict: Mapping[str, Any], key: str, default: str) -> str:
    value = config_dict.get(key)
    if value is None or value == "":
        return default
    if not isinstance(value, str):
        raise ConfigError(f"`{key}` must be a string, got {type(value).__name__}")
    return value


def _project_root() -> Path:
    """Return the project root path based on this file's location."""
    return Path(__file__).resolve().parent.parent.parent


def default_config_path() -> Path:
    """Return the settings file location, honouring BATCH_PROCESSOR_CONFIG."""
    override = os.getenv(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return _project_root() / "config" / "settings.yml"


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    for key, env_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config_dict[key] = value
    return config_dict


def load_batch_config(config_path: Optional[str] = None) -> BatchConfig:
    """
    Load batch processor configuration from a YAML file.

    An explicitly requested file must exist. When no path is given and the
    default settings file is absent, built-in defaults are used.

    Args:
        config_path: Path to a settings YAML file. If None, uses
            BATCH_PROCESSOR_CONFIG or `config/settings.yml`.

    Returns:
        BatchConfig with environment overrides applied

    Raises:
        ConfigError: If an explicit config file is missing, unreadable,
            or is not a valid YAML mapping

    Example:
        >>> config = load_batch_config('config/settings.yml')
        >>> config.log_level
        'info'
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else default_config_path()

    raw_config: Any = None
    if path.is_file():
        try:
            with path.open("r", encoding="utf-8") as handle:
                raw_config = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    elif explicit:
        raise ConfigError(f"Configuration file not found: {path}")
    else:
        logger.debug("No settings file at %s, using built-in defaults", path)

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, Mapping):
        raise ConfigError(f"Configuration file {path} must contain a mapping at the top level")

    config = BatchConfig.from_dict(_apply_env_overrides(dict(raw_config)))
    logger.debug(
        "Batch configuration loaded from %s (log_level=%s)",
        path,
        config.log_level,
    )
    return config


__all__ = ["BatchConfig", "ConfigError", "load_batch_config", "default_config_path"]
