"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from cnp_util.cnp.messages import SUPPORTED_LANGUAGES
from cnp_util.models.cnp import CenturyPolicy, ValidationMode


class ValidationConfig(BaseModel):
    """Configuration for CNP validation policy.

    Attributes:
        mode: "checksum" (system of record) or "format_only"
        century_policy: "fixed_table" (official) or "age_heuristic"
        language: Language of user-facing messages ("en" or "ro")
    """

    mode: ValidationMode = Field(
        default=ValidationMode.CHECKSUM,
        description="Validation mode: checksum or format_only",
    )
    century_policy: CenturyPolicy = Field(
        default=CenturyPolicy.FIXED_TABLE,
        description="Century policy: fixed_table or age_heuristic",
    )
    language: str = Field(default="en", description="Message language: en or ro")

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate message language.

        Args:
            v: Language code

        Returns:
            Validated language code (lowercase)

        Raises:
            ValueError: If language is not supported
        """
        v_lower = v.lower()
        if v_lower not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Invalid language: {v}. Must be one of: {', '.join(SUPPORTED_LANGUAGES)}"
            )
        return v_lower


class CsvConfig(BaseModel):
    """Configuration for bulk CSV validation.

    Attributes:
        cnp_column: Name of the CSV column holding the CNP
        check_demographics: Cross-check dob/gender columns against the CNP
    """

    cnp_column: str = Field(default="cnp", min_length=1, description="CNP column name")
    check_demographics: bool = Field(
        default=True,
        description="Warn when dob/gender columns disagree with the decoded CNP",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_pii: Whether to redact PII from logs
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/cnp-util.log"),
        description="Log file path"
    )
    redact_pii: bool = Field(
        default=False,
        description="Redact PII from logs"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Args:
            v: Log level string

        Returns:
            Validated log level (uppercase)

        Raises:
            ValueError: If log level is not valid
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return v_upper


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        validation: CNP validation policy
        csv: Bulk CSV validation settings
        logging: Logging configuration

    Example:
        >>> config = Config(validation=ValidationConfig(mode="format_only"))
        >>> config.validation.mode
        <ValidationMode.FORMAT_ONLY: 'format_only'>
    """

    validation: ValidationConfig = ValidationConfig()
    csv: CsvConfig = CsvConfig()
    logging: LoggingConfig = LoggingConfig()
