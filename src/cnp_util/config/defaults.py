"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Default configuration dictionary
# This is used as a fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "validation": {
        # Control digit is enforced unless format_only is chosen explicitly
        "mode": "checksum",
        # Official digit-to-century table
        "century_policy": "fixed_table",
        "language": "en",
    },
    "csv": {
        "cnp_column": "cnp",
        "check_demographics": True,
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/cnp-util.log",
        # Do not redact PII by default (user must opt-in for privacy)
        "redact_pii": False,
    },
}

# Default configuration file path
DEFAULT_CONFIG_PATH = "config/config.json"
