"""Unit tests for configuration management.

Tests cover configuration loading, validation, environment variable overrides,
and error handling.
"""

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from cnp_util.config import (
    Config,
    CsvConfig,
    LoggingConfig,
    ValidationConfig,
    get_csv_config,
    get_logging_config,
    get_validation_config,
    load_config,
)
from cnp_util.config.defaults import DEFAULT_CONFIG
from cnp_util.models.cnp import CenturyPolicy, ValidationMode
from cnp_util.utils.exceptions import ConfigurationError

ENV_VARS = [
    "CNP_UTIL_MODE",
    "CNP_UTIL_CENTURY_POLICY",
    "CNP_UTIL_LANGUAGE",
    "CNP_UTIL_CNP_COLUMN",
    "CNP_UTIL_CHECK_DEMOGRAPHICS",
    "CNP_UTIL_LOG_LEVEL",
    "CNP_UTIL_LOG_FILE",
    "CNP_UTIL_REDACT_PII",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration overrides inherited from the shell."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write_config(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestConfigurationSchema:
    """Test pydantic configuration models validation."""

    def test_validation_config_defaults(self) -> None:
        """Test the checksum mode and fixed table are the defaults."""
        # Arrange & Act
        config = ValidationConfig()

        # Assert
        assert config.mode is ValidationMode.CHECKSUM
        assert config.century_policy is CenturyPolicy.FIXED_TABLE
        assert config.language == "en"

    def test_validation_config_accepts_enum_values(self) -> None:
        config = ValidationConfig(mode="format_only", century_policy="age_heuristic")

        assert config.mode is ValidationMode.FORMAT_ONLY
        assert config.century_policy is CenturyPolicy.AGE_HEURISTIC

    def test_validation_config_rejects_unknown_mode(self) -> None:
        with pytest.raises(ValidationError):
            ValidationConfig(mode="lenient")

    def test_validation_config_normalizes_language(self) -> None:
        assert ValidationConfig(language="RO").language == "ro"

    def test_validation_config_rejects_unknown_language(self) -> None:
        """Test that only supported message languages are accepted."""
        with pytest.raises(ValidationError) as exc_info:
            ValidationConfig(language="fr")

        assert "Invalid language" in str(exc_info.value)

    def test_csv_config_rejects_empty_column(self) -> None:
        with pytest.raises(ValidationError):
            CsvConfig(cnp_column="")

    def test_logging_config_normalizes_level(self) -> None:
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_logging_config_invalid_level(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            LoggingConfig(level="VERBOSE")

        assert "Invalid log level" in str(exc_info.value)

    def test_default_config_dict_matches_models(self) -> None:
        """Test DEFAULT_CONFIG produces the same values as model defaults."""
        assert Config(**DEFAULT_CONFIG) == Config()


class TestLoadConfig:
    """Test configuration file loading."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        # Act
        config = load_config(tmp_path / "absent.json")

        # Assert
        assert config.validation.mode is ValidationMode.CHECKSUM
        assert config.csv.cnp_column == "cnp"
        assert config.logging.redact_pii is False

    def test_loads_values_from_file(self, tmp_path: Path) -> None:
        # Arrange
        config_file = _write_config(
            tmp_path / "config.json",
            {
                "validation": {"mode": "format_only", "language": "ro"},
                "csv": {"cnp_column": "personal_id"},
            },
        )

        # Act
        config = load_config(config_file)

        # Assert
        assert config.validation.mode is ValidationMode.FORMAT_ONLY
        assert config.validation.language == "ro"
        assert config.csv.cnp_column == "personal_id"
        assert config.logging.level == "INFO"

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_config(config_file)

    def test_non_object_top_level_raises(self, tmp_path: Path) -> None:
        config_file = _write_config(tmp_path / "config.json", ["a", "b"])

        with pytest.raises(ConfigurationError, match="JSON object"):
            load_config(config_file)

    def test_schema_violation_raises_with_fix_hint(self, tmp_path: Path) -> None:
        """Test pydantic errors are wrapped in ConfigurationError."""
        config_file = _write_config(
            tmp_path / "config.json", {"validation": {"century_policy": "guess"}}
        )

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Configuration validation failed" in str(exc_info.value)
        assert "Fix:" in str(exc_info.value)


class TestEnvironmentOverrides:
    """Test CNP_UTIL_* environment variable overrides."""

    def test_env_overrides_file_values(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Arrange
        config_file = _write_config(
            tmp_path / "config.json", {"validation": {"mode": "checksum"}}
        )
        monkeypatch.setenv("CNP_UTIL_MODE", "format_only")
        monkeypatch.setenv("CNP_UTIL_CENTURY_POLICY", "age_heuristic")
        monkeypatch.setenv("CNP_UTIL_LOG_LEVEL", "debug")

        # Act
        config = load_config(config_file)

        # Assert
        assert config.validation.mode is ValidationMode.FORMAT_ONLY
        assert config.validation.century_policy is CenturyPolicy.AGE_HEURISTIC
        assert config.logging.level == "DEBUG"

    def test_log_file_and_column_overrides(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CNP_UTIL_LOG_FILE", str(tmp_path / "env.log"))
        monkeypatch.setenv("CNP_UTIL_CNP_COLUMN", "personal_id")

        config = load_config(tmp_path / "absent.json")

        assert Path(config.logging.log_file) == tmp_path / "env.log"
        assert config.csv.cnp_column == "personal_id"

    @pytest.mark.parametrize(
        "raw,expected", [("true", True), ("1", True), ("YES", True), ("off", False)]
    )
    def test_boolean_overrides(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
    ) -> None:
        monkeypatch.setenv("CNP_UTIL_REDACT_PII", raw)
        monkeypatch.setenv("CNP_UTIL_CHECK_DEMOGRAPHICS", raw)

        config = load_config(tmp_path / "absent.json")

        assert config.logging.redact_pii is expected
        assert config.csv.check_demographics is expected

    def test_invalid_env_value_raises(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CNP_UTIL_LANGUAGE", "de")

        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "absent.json")


class TestConfigHelpers:
    """Test section accessor helpers."""

    def test_helpers_return_sections(self) -> None:
        config = Config()

        assert get_validation_config(config) is config.validation
        assert get_csv_config(config) is config.csv
        assert get_logging_config(config) is config.logging
