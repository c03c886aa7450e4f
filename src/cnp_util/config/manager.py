"""Configuration manager for loading and managing configuration.

This module provides the main configuration loading and management functionality,
including support for JSON configuration files, environment variable overrides,
and configuration validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from cnp_util.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from cnp_util.config.schema import Config, CsvConfig, LoggingConfig, ValidationConfig
from cnp_util.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "CNP_UTIL_"

# (environment suffix, config section, field, is_bool)
_ENV_OVERRIDES = [
    ("MODE", "validation", "mode", False),
    ("CENTURY_POLICY", "validation", "century_policy", False),
    ("LANGUAGE", "validation", "language", False),
    ("CNP_COLUMN", "csv", "cnp_column", False),
    ("CHECK_DEMOGRAPHICS", "csv", "check_demographics", True),
    ("LOG_LEVEL", "logging", "level", False),
    ("LOG_FILE", "logging", "log_file", False),
    ("REDACT_PII", "logging", "redact_pii", True),
]


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (CNP_UTIL_* prefix)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./config/config.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed

    Example:
        >>> config = load_config(Path("custom/config.json"))
        >>> config.validation.mode
        <ValidationMode.CHECKSUM: 'checksum'>
    """
    # Load .env file if present in project root
    load_dotenv()

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)
    config_dict = _apply_env_overrides(config_dict)

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and ensure all "
            f"values match the expected format."
        ) from e


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If JSON is malformed or the file cannot be read
    """
    if not config_path.exists():
        logger.info(
            f"Config file not found: {config_path}. Using default configuration."
        )
        # Deep copy of defaults to avoid mutation
        return json.loads(json.dumps(DEFAULT_CONFIG))

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check file permissions and path"
        ) from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a JSON object at top level"
        )

    logger.info(f"Loaded configuration from {config_path}")
    return config_dict


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with CNP_UTIL_ prefix.

    Environment variables follow the pattern: CNP_UTIL_<FIELD>
    For example: CNP_UTIL_MODE, CNP_UTIL_LOG_LEVEL

    Args:
        config_dict: Configuration dictionary to update

    Returns:
        Updated configuration dictionary with environment overrides applied
    """
    for suffix, section, field, is_bool in _ENV_OVERRIDES:
        raw = os.getenv(f"{ENV_PREFIX}{suffix}")
        if not raw:
            continue
        value = _parse_bool(raw) if is_bool else raw
        config_dict.setdefault(section, {})[field] = value
        logger.debug(f"Override: {section}.{field} from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string.

    Args:
        value: String value to parse (case-insensitive)

    Returns:
        Boolean value
    """
    return value.lower() in ("true", "1", "yes", "on")


def get_validation_config(config: Config) -> ValidationConfig:
    """Get CNP validation policy configuration."""
    return config.validation


def get_csv_config(config: Config) -> CsvConfig:
    """Get bulk CSV validation configuration."""
    return config.csv


def get_logging_config(config: Config) -> LoggingConfig:
    """Get logging configuration.

    Args:
        config: Configuration instance

    Returns:
        LoggingConfig instance

    Example:
        >>> config = load_config()
        >>> logging_cfg = get_logging_config(config)
        >>> log_level = logging_cfg.level
    """
    return config.logging
