"""CNP validation data models.

This module defines the value objects returned by the CNP engine. Every
instance is produced fresh per call; none of them carries identity or
shared state.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Reason a CNP was rejected."""

    NOT_A_VALUE = "not_a_value"
    WRONG_LENGTH = "wrong_length"
    NON_DIGIT = "non_digit"
    CHECKSUM_ERROR = "checksum_error"
    IMPOSSIBLE_DATE = "impossible_date"


class Sex(Enum):
    """Sex / residency classification encoded by the first CNP digit."""

    MALE = "male"
    FEMALE = "female"
    FOREIGN = "foreign"


class ValidationMode(Enum):
    """Which checks decide whether a CNP is accepted.

    CHECKSUM is the system of record: structure plus control digit.
    FORMAT_ONLY accepts any 13 decimal digits.
    """

    CHECKSUM = "checksum"
    FORMAT_ONLY = "format_only"


class CenturyPolicy(Enum):
    """How the birth century is derived from the first CNP digit.

    FIXED_TABLE follows the official digit-to-century assignment.
    AGE_HEURISTIC picks the 1900s or 2000s reading whose implied age is
    plausible (0-100 years), for legacy data that does not respect the table.
    """

    FIXED_TABLE = "fixed_table"
    AGE_HEURISTIC = "age_heuristic"


@dataclass
class ValidationOutcome:
    """Result of structural (and optionally checksum) validation.

    Attributes:
        is_valid: Whether the identifier passed every enabled check
        error_kind: Reason for rejection, None when valid
        error_message: Localized message for display, None when valid
    """

    is_valid: bool
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return cls(is_valid=True)

    @classmethod
    def failure(cls, error_kind: ErrorKind, error_message: str) -> "ValidationOutcome":
        return cls(is_valid=False, error_kind=error_kind, error_message=error_message)

    def to_dict(self) -> dict[str, Any]:
        """Export as a JSON-serializable dictionary."""
        return {
            "is_valid": self.is_valid,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "error_message": self.error_message,
        }


_DECODED_FIELDS = ("birth_date", "sex", "county", "county_code", "century", "description")


@dataclass
class AnalysisResult:
    """Full CNP analysis: validation outcome plus decoded demographics.

    The decoded fields are either all set (valid CNP) or all None (any
    failure). Partial decoding is rejected at construction time.

    Attributes:
        is_valid: Whether the CNP passed validation and decoding
        error_kind: Reason for rejection, None when valid
        error_message: Localized message for display, None when valid
        birth_date: Decoded date of birth
        sex: Decoded sex / foreign classification
        county: Issuing county or Bucharest sector name
        county_code: Two-digit county code as found in the CNP
        century: Century prefix of the birth year (18, 19 or 20)
        description: Human-readable summary, e.g. "Female born in 20th century"
    """

    is_valid: bool
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    birth_date: Optional[date] = None
    sex: Optional[Sex] = None
    county: Optional[str] = None
    county_code: Optional[str] = None
    century: Optional[int] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        present = [getattr(self, name) is not None for name in _DECODED_FIELDS]
        if self.is_valid and not all(present):
            raise ValueError("Valid AnalysisResult requires every decoded field")
        if not self.is_valid and any(present):
            raise ValueError("Invalid AnalysisResult must not carry decoded fields")

    @classmethod
    def from_outcome(cls, outcome: ValidationOutcome) -> "AnalysisResult":
        """Build a failed analysis from a failed validation outcome."""
        return cls(
            is_valid=False,
            error_kind=outcome.error_kind,
            error_message=outcome.error_message,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export as a JSON-serializable dictionary.

        Returns:
            Dictionary with ISO-formatted birth date and enum values as strings
        """
        return {
            "is_valid": self.is_valid,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "error_message": self.error_message,
            "birth_date": self.birth_date.isoformat() if self.birth_date else None,
            "sex": self.sex.value if self.sex else None,
            "county": self.county,
            "county_code": self.county_code,
            "century": self.century,
            "description": self.description,
        }
