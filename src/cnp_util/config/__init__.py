"""Config module.

This module provides configuration management functionality.
"""

from cnp_util.config.manager import (
    get_csv_config,
    get_logging_config,
    get_validation_config,
    load_config,
)
from cnp_util.config.schema import (
    Config,
    CsvConfig,
    LoggingConfig,
    ValidationConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Helper functions
    "get_validation_config",
    "get_csv_config",
    "get_logging_config",
    # Configuration models
    "Config",
    "ValidationConfig",
    "CsvConfig",
    "LoggingConfig",
]
