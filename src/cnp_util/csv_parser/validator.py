"""Bulk CNP validation for patient-import CSV data.

This module validates the CNP column of a patient DataFrame row by row,
collecting every issue before reporting so users can fix several problems at
once. It also cross-checks optional dob/gender columns against the decoded
CNP and enriches rows with the decoded demographics.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from cnp_util.cnp import analyze_cnp, sanitize_cnp
from cnp_util.csv_parser.parser import DEFAULT_CNP_COLUMN, DOB_COLUMN, GENDER_COLUMN
from cnp_util.logging_audit import get_logger
from cnp_util.models.cnp import AnalysisResult, CenturyPolicy, Sex, ValidationMode


logger = get_logger(__name__)

# Issues shown per section in the text report
REPORT_ISSUE_LIMIT = 20

# CSV gender codes that correspond to a decoded sex
GENDER_CODES = {Sex.MALE: "M", Sex.FEMALE: "F"}


class IssueSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"
    WARNING = "warning"


class IssueCode(Enum):
    """Machine-readable category of a validation issue."""

    INVALID_CNP = "INVALID_CNP"
    DUPLICATE = "DUPLICATE"
    MISSING_CNP = "MISSING_CNP"
    DOB_MISMATCH = "DOB_MISMATCH"
    GENDER_MISMATCH = "GENDER_MISMATCH"


@dataclass
class ValidationIssue:
    """Individual validation issue with context and suggested fix.

    Attributes:
        row_number: 1-indexed row number (including header) for user readability
        column_name: Name of the column with the issue
        severity: ERROR or WARNING level
        code: Issue category
        message: Description of what's wrong
        suggestion: Actionable guidance on how to fix the issue
    """

    row_number: int
    column_name: str
    severity: IssueSeverity
    code: IssueCode
    message: str
    suggestion: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_number": self.row_number,
            "column_name": self.column_name,
            "severity": self.severity.value,
            "code": self.code.value,
            "message": self.message,
            "suggestion": self.suggestion,
        }


@dataclass
class ValidationResult:
    """Batch validation results with statistics and issues.

    Attributes:
        total_rows: Total number of data rows processed
        valid_rows: Number of rows with no errors (warnings OK)
        error_rows: Number of rows with at least one error
        warning_rows: Number of rows with at least one warning
        missing_cnp_count: Rows without a CNP value
        duplicate_cnp_count: Distinct CNPs appearing on more than one row
        all_errors: List of all error-level issues
        all_warnings: List of all warning-level issues
    """

    total_rows: int
    valid_rows: int
    error_rows: int
    warning_rows: int
    missing_cnp_count: int = 0
    duplicate_cnp_count: int = 0
    all_errors: list[ValidationIssue] = field(default_factory=list)
    all_warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if any error-level issues exist."""
        return len(self.all_errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if any warning-level issues exist."""
        return len(self.all_warnings) > 0

    def format_report(self) -> str:
        """Format validation results as human-readable report.

        Returns:
            Multi-line string with validation summary and detailed issues
        """
        lines = []
        lines.append("=" * 60)
        lines.append("CNP VALIDATION REPORT")
        lines.append("=" * 60)
        lines.append("")

        lines.append("SUMMARY:")
        lines.append(f"  Total rows: {self.total_rows}")
        lines.append(f"  Valid rows: {self.valid_rows}")
        lines.append(f"  Rows with errors: {self.error_rows}")
        lines.append(f"  Rows with warnings: {self.warning_rows}")
        lines.append("")

        if self.duplicate_cnp_count or self.missing_cnp_count:
            lines.append("BATCH STATISTICS:")
            if self.duplicate_cnp_count:
                lines.append(f"  Duplicate CNPs: {self.duplicate_cnp_count}")
            if self.missing_cnp_count:
                lines.append(f"  Missing CNPs: {self.missing_cnp_count}")
            lines.append("")

        for title, issues in (("ERRORS", self.all_errors), ("WARNINGS", self.all_warnings)):
            if not issues:
                continue
            lines.append(f"{title} ({len(issues)}):")
            for issue in issues[:REPORT_ISSUE_LIMIT]:
                lines.append(
                    f"  Row {issue.row_number} [{issue.column_name}]: {issue.message}"
                )
                lines.append(f"    → {issue.suggestion}")
            if len(issues) > REPORT_ISSUE_LIMIT:
                lines.append(
                    f"  ... and {len(issues) - REPORT_ISSUE_LIMIT} more {title.lower()}"
                )
            lines.append("")

        lines.append("=" * 60)
        if not self.has_errors and not self.has_warnings:
            lines.append("RESULT: ✓ All validations passed")
        elif not self.has_errors:
            lines.append("RESULT: ✓ Validation passed with warnings")
        else:
            lines.append("RESULT: ✗ Validation failed - please fix errors above")
        lines.append("=" * 60)

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Export validation results as structured dictionary for JSON serialization.

        Returns:
            Dictionary with all validation results
        """
        return {
            "total_rows": self.total_rows,
            "valid_rows": self.valid_rows,
            "error_rows": self.error_rows,
            "warning_rows": self.warning_rows,
            "missing_cnp_count": self.missing_cnp_count,
            "duplicate_cnp_count": self.duplicate_cnp_count,
            "errors": [e.to_dict() for e in self.all_errors],
            "warnings": [w.to_dict() for w in self.all_warnings],
        }


def _is_blank(value: Any) -> bool:
    return pd.isna(value) or str(value).strip() == ""


def validate_cnp_column(
    df: pd.DataFrame,
    cnp_column: str = DEFAULT_CNP_COLUMN,
    mode: ValidationMode = ValidationMode.CHECKSUM,
    century_policy: CenturyPolicy = CenturyPolicy.FIXED_TABLE,
    language: str = "en",
    check_demographics: bool = True,
    today: Optional[date] = None,
) -> ValidationResult:
    """Validate every CNP in a patient DataFrame.

    Row-level checks: invalid CNPs are errors (with the engine's localized
    message), missing CNPs are warnings, and when check_demographics is set
    a dob/gender column that disagrees with the decoded CNP is a warning.
    Batch-level check: the same CNP on several rows is an error on each row.

    Args:
        df: Patient DataFrame, typically from load_patient_csv
        cnp_column: Column holding the CNP
        mode: Validation mode passed to the engine
        century_policy: Century policy passed to the engine
        language: Language of engine messages
        check_demographics: Cross-check dob and gender columns
        today: Reference date for the age heuristic

    Returns:
        ValidationResult containing all errors, warnings, and statistics

    Raises:
        ValueError: If DataFrame is empty or the CNP column is missing
    """
    logger.info("Validation started")

    if df.empty:
        raise ValueError("DataFrame is empty - no data to validate")
    if cnp_column not in df.columns:
        raise ValueError(f"DataFrame missing CNP column: {cnp_column}")

    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    rows_by_cnp: dict[str, list[int]] = {}
    missing_cnp_count = 0

    logger.debug("Validating CNP values row by row")
    for position, (_, row) in enumerate(df.iterrows()):
        row_num = position + 2  # +2 for 1-indexed + header row
        raw_value = row[cnp_column]

        if _is_blank(raw_value):
            missing_cnp_count += 1
            warnings.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=cnp_column,
                    severity=IssueSeverity.WARNING,
                    code=IssueCode.MISSING_CNP,
                    message="CNP not provided",
                    suggestion="Add the patient's 13-digit CNP if available",
                )
            )
            continue

        analysis = analyze_cnp(
            str(raw_value),
            mode=mode,
            century_policy=century_policy,
            today=today,
            language=language,
        )
        if not analysis.is_valid:
            errors.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=cnp_column,
                    severity=IssueSeverity.ERROR,
                    code=IssueCode.INVALID_CNP,
                    message=analysis.error_message,
                    suggestion="Check the CNP against the patient's identity document",
                )
            )
            continue

        rows_by_cnp.setdefault(sanitize_cnp(str(raw_value)), []).append(row_num)

        if check_demographics:
            warnings.extend(_check_demographics(row, row_num, analysis))

    logger.debug("Validating batch-level duplicates")
    duplicate_groups = [rows for rows in rows_by_cnp.values() if len(rows) > 1]
    for rows in duplicate_groups:
        for row_num in rows:
            others = ", ".join(str(r) for r in rows if r != row_num)
            errors.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=cnp_column,
                    severity=IssueSeverity.ERROR,
                    code=IssueCode.DUPLICATE,
                    message=f"Duplicate CNP (also on row {others})",
                    suggestion="Each patient must have a unique CNP; merge or correct the records",
                )
            )
    if duplicate_groups:
        logger.debug(f"Found {len(duplicate_groups)} duplicate CNPs")

    errors.sort(key=lambda issue: issue.row_number)

    error_rows = len({e.row_number for e in errors})
    warning_rows = len({w.row_number for w in warnings})

    result = ValidationResult(
        total_rows=len(df),
        valid_rows=len(df) - error_rows,
        error_rows=error_rows,
        warning_rows=warning_rows,
        missing_cnp_count=missing_cnp_count,
        duplicate_cnp_count=len(duplicate_groups),
        all_errors=errors,
        all_warnings=warnings,
    )

    logger.info(f"Validation errors found: {len(errors)}")
    if warnings:
        logger.info(f"Validation warnings: {len(warnings)}")

    return result


def _check_demographics(
    row: pd.Series, row_num: int, analysis: AnalysisResult
) -> list[ValidationIssue]:
    """Compare optional dob/gender columns with the decoded CNP."""
    issues: list[ValidationIssue] = []

    dob_value = row.get(DOB_COLUMN)
    if not _is_blank(dob_value):
        try:
            parsed_dob = pd.to_datetime(str(dob_value).strip(), format="%Y-%m-%d").date()
        except (ValueError, TypeError):
            # Malformed dates are not this validator's concern
            parsed_dob = None
        if parsed_dob is not None and parsed_dob != analysis.birth_date:
            issues.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=DOB_COLUMN,
                    severity=IssueSeverity.WARNING,
                    code=IssueCode.DOB_MISMATCH,
                    message=(
                        f"Date of birth {parsed_dob.isoformat()} differs from CNP "
                        f"({analysis.birth_date.isoformat()})"
                    ),
                    suggestion="Verify which value is correct",
                )
            )

    gender_value = row.get(GENDER_COLUMN)
    expected = GENDER_CODES.get(analysis.sex)
    if expected and not _is_blank(gender_value):
        gender = str(gender_value).strip().upper()
        if gender in GENDER_CODES.values() and gender != expected:
            issues.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=GENDER_COLUMN,
                    severity=IssueSeverity.WARNING,
                    code=IssueCode.GENDER_MISMATCH,
                    message=f"Gender {gender} differs from CNP ({expected})",
                    suggestion="Verify which value is correct",
                )
            )

    return issues


def enrich_with_cnp_data(
    df: pd.DataFrame,
    cnp_column: str = DEFAULT_CNP_COLUMN,
    mode: ValidationMode = ValidationMode.CHECKSUM,
    century_policy: CenturyPolicy = CenturyPolicy.FIXED_TABLE,
    today: Optional[date] = None,
    language: str = "en",
) -> pd.DataFrame:
    """Return a copy of the DataFrame with decoded CNP columns appended.

    Adds cnp_valid, cnp_birth_date (YYYY-MM-DD), cnp_sex and cnp_county.
    Rows with a missing or invalid CNP get cnp_valid=False and empty
    decoded columns.

    Args:
        df: Patient DataFrame
        cnp_column: Column holding the CNP
        mode: Validation mode passed to the engine
        century_policy: Century policy passed to the engine
        today: Reference date for the age heuristic
        language: Language of the county label for unknown codes

    Returns:
        New DataFrame; the input is not modified

    Raises:
        ValueError: If the CNP column is missing
    """
    if cnp_column not in df.columns:
        raise ValueError(f"DataFrame missing CNP column: {cnp_column}")

    def _analyze(value: Any) -> AnalysisResult:
        if _is_blank(value):
            return analyze_cnp(None)
        return analyze_cnp(
            str(value),
            mode=mode,
            century_policy=century_policy,
            today=today,
            language=language,
        )

    analyses = [_analyze(value) for value in df[cnp_column]]

    enriched = df.copy()
    enriched["cnp_valid"] = [a.is_valid for a in analyses]
    enriched["cnp_birth_date"] = [
        a.birth_date.isoformat() if a.birth_date else None for a in analyses
    ]
    enriched["cnp_sex"] = [a.sex.value if a.sex else None for a in analyses]
    enriched["cnp_county"] = [a.county for a in analyses]

    logger.info(
        f"Enriched {sum(a.is_valid for a in analyses)} of {len(analyses)} rows with CNP data"
    )
    return enriched


def export_invalid_rows(
    df: pd.DataFrame, result: ValidationResult, output_path: Path
) -> None:
    """Export rows with validation errors to separate CSV file.

    Args:
        df: Original DataFrame with all patient data
        result: ValidationResult containing error information
        output_path: Path where error CSV should be written

    Raises:
        ValueError: If no errors exist in ValidationResult
        FileNotFoundError: If output_path parent directory doesn't exist
    """
    logger.info(f"Exporting invalid rows to {output_path}")

    if not result.has_errors:
        raise ValueError("No validation errors to export")

    if not output_path.parent.exists():
        raise FileNotFoundError(
            f"Output directory does not exist: {output_path.parent}"
        )

    error_row_numbers = sorted({e.row_number for e in result.all_errors})

    # Row numbers are 1-indexed and include the header
    error_positions = [r - 2 for r in error_row_numbers]
    error_df = df.iloc[error_positions].copy()

    error_df["error_description"] = [
        "; ".join(
            f"{e.column_name}: {e.message}"
            for e in result.all_errors
            if e.row_number == row_num
        )
        for row_num in error_row_numbers
    ]

    error_df.to_csv(output_path, index=False, encoding="utf-8")
    logger.info(f"Exported {len(error_df)} invalid rows to {output_path}")
