"""Unit tests for CSV validator module.

Tests row-level CNP validation, batch-level duplicate detection, demographic
cross-checks, enrichment and export functionality.
"""

from datetime import date

import pandas as pd
import pytest

from cnp_util.csv_parser.parser import load_patient_csv
from cnp_util.csv_parser.validator import (
    IssueCode,
    IssueSeverity,
    ValidationIssue,
    ValidationResult,
    enrich_with_cnp_data,
    export_invalid_rows,
    validate_cnp_column,
)
from cnp_util.models.cnp import CenturyPolicy, ValidationMode


class TestValidateCnpColumn:
    """Test suite for validate_cnp_column function."""

    def test_all_valid(self):
        """Test validation with consistent data (no errors, no warnings)."""
        # Arrange
        df = pd.DataFrame(
            [
                {"dob": "2008-09-04", "gender": "F", "cnp": "6080904000000"},
                {"dob": "1990-01-01", "gender": "M", "cnp": "1900101000006"},
            ]
        )

        # Act
        result = validate_cnp_column(df)

        # Assert
        assert result.total_rows == 2
        assert result.valid_rows == 2
        assert result.error_rows == 0
        assert not result.has_errors
        assert not result.has_warnings

    def test_invalid_cnp_is_error(self):
        """Test that the engine's message is carried into the issue."""
        # Arrange
        df = pd.DataFrame([{"cnp": "1900101000000"}, {"cnp": "12345"}])

        # Act
        result = validate_cnp_column(df)

        # Assert
        assert [e.row_number for e in result.all_errors] == [2, 3]
        assert all(e.code is IssueCode.INVALID_CNP for e in result.all_errors)
        assert all(e.severity is IssueSeverity.ERROR for e in result.all_errors)
        assert result.all_errors[0].message == "CNP control digit is invalid"
        assert result.all_errors[1].message == "CNP must have exactly 13 digits"

    def test_format_only_mode(self):
        df = pd.DataFrame([{"cnp": "1900101000000"}])

        result = validate_cnp_column(df, mode=ValidationMode.FORMAT_ONLY)

        assert not result.has_errors

    def test_romanian_messages(self):
        df = pd.DataFrame([{"cnp": "123"}])

        result = validate_cnp_column(df, language="ro")

        assert result.all_errors[0].message == "CNP-ul trebuie să aibă exact 13 cifre"

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_missing_cnp_is_warning(self, blank):
        # Arrange
        df = pd.DataFrame([{"cnp": blank}, {"cnp": "1900101000006"}])

        # Act
        result = validate_cnp_column(df)

        # Assert
        assert not result.has_errors
        assert result.missing_cnp_count == 1
        assert result.all_warnings[0].code is IssueCode.MISSING_CNP
        assert result.all_warnings[0].row_number == 2

    def test_duplicates_flagged_on_each_row(self):
        """Test that grouped and plain spellings of one CNP count as duplicates."""
        # Arrange
        df = pd.DataFrame(
            [
                {"cnp": "6080904000000"},
                {"cnp": "1900101000006"},
                {"cnp": "608 09 04 000 00 0"},
            ]
        )

        # Act
        result = validate_cnp_column(df)

        # Assert
        assert result.duplicate_cnp_count == 1
        assert [e.row_number for e in result.all_errors] == [2, 4]
        assert result.all_errors[0].message == "Duplicate CNP (also on row 4)"
        assert result.all_errors[1].message == "Duplicate CNP (also on row 2)"
        assert result.valid_rows == 1

    def test_invalid_cnps_are_not_counted_as_duplicates(self):
        df = pd.DataFrame([{"cnp": "1900101000000"}, {"cnp": "1900101000000"}])

        result = validate_cnp_column(df)

        assert result.duplicate_cnp_count == 0
        assert all(e.code is IssueCode.INVALID_CNP for e in result.all_errors)

    def test_dob_mismatch_warning(self):
        # Arrange
        df = pd.DataFrame([{"dob": "1990-01-02", "cnp": "1900101000006"}])

        # Act
        result = validate_cnp_column(df)

        # Assert
        assert not result.has_errors
        warning = result.all_warnings[0]
        assert warning.code is IssueCode.DOB_MISMATCH
        assert warning.column_name == "dob"
        assert "1990-01-02" in warning.message
        assert "1990-01-01" in warning.message

    def test_malformed_dob_is_ignored(self):
        df = pd.DataFrame([{"dob": "01/01/1990", "cnp": "1900101000006"}])

        result = validate_cnp_column(df)

        assert not result.has_warnings

    def test_gender_mismatch_warning(self):
        df = pd.DataFrame([{"gender": "m", "cnp": "6080904000000"}])

        result = validate_cnp_column(df)

        assert result.all_warnings[0].code is IssueCode.GENDER_MISMATCH
        assert result.all_warnings[0].message == "Gender M differs from CNP (F)"

    def test_foreign_citizen_gender_not_checked(self):
        df = pd.DataFrame([{"gender": "M", "cnp": "9050101400010"}])

        result = validate_cnp_column(df)

        assert not result.has_warnings

    def test_demographic_checks_can_be_disabled(self):
        df = pd.DataFrame([{"dob": "2000-01-01", "gender": "M", "cnp": "6080904000000"}])

        result = validate_cnp_column(df, check_demographics=False)

        assert not result.has_warnings

    def test_age_heuristic_changes_expected_dob(self, make_cnp, reference_date):
        """Test that the century policy flows into the dob cross-check."""
        # Arrange
        df = pd.DataFrame([{"dob": "2008-01-01", "cnp": make_cnp("108010100000")}])

        # Act
        fixed = validate_cnp_column(df, today=reference_date)
        heuristic = validate_cnp_column(
            df, century_policy=CenturyPolicy.AGE_HEURISTIC, today=reference_date
        )

        # Assert
        assert fixed.all_warnings[0].code is IssueCode.DOB_MISMATCH
        assert not heuristic.has_warnings

    def test_custom_column(self):
        df = pd.DataFrame([{"personal_id": "123"}])

        result = validate_cnp_column(df, cnp_column="personal_id")

        assert result.all_errors[0].column_name == "personal_id"

    def test_empty_dataframe_raises(self):
        with pytest.raises(ValueError, match="DataFrame is empty"):
            validate_cnp_column(pd.DataFrame(columns=["cnp"]))

    def test_missing_column_raises(self):
        with pytest.raises(ValueError, match="missing CNP column"):
            validate_cnp_column(pd.DataFrame([{"name": "Ion"}]))

    def test_sample_file(self, sample_patient_csv):
        """Test the mixed fixture file end to end."""
        # Arrange
        df = load_patient_csv(sample_patient_csv)

        # Act
        result = validate_cnp_column(df)

        # Assert
        assert result.total_rows == 5
        assert result.error_rows == 3
        assert result.valid_rows == 2
        assert result.warning_rows == 2
        assert result.missing_cnp_count == 1
        assert result.duplicate_cnp_count == 1
        assert [(e.row_number, e.code) for e in result.all_errors] == [
            (2, IssueCode.DUPLICATE),
            (3, IssueCode.INVALID_CNP),
            (6, IssueCode.DUPLICATE),
        ]
        assert {(w.row_number, w.code) for w in result.all_warnings} == {
            (4, IssueCode.MISSING_CNP),
            (5, IssueCode.GENDER_MISMATCH),
        }


class TestValidationResult:
    """Test suite for ValidationResult reporting."""

    def _issue(self, row: int, severity: IssueSeverity, code: IssueCode) -> ValidationIssue:
        return ValidationIssue(
            row_number=row,
            column_name="cnp",
            severity=severity,
            code=code,
            message="problem",
            suggestion="fix it",
        )

    def test_report_all_passed(self):
        result = ValidationResult(total_rows=1, valid_rows=1, error_rows=0, warning_rows=0)

        report = result.format_report()

        assert "CNP VALIDATION REPORT" in report
        assert "RESULT: ✓ All validations passed" in report

    def test_report_with_warnings_only(self):
        result = ValidationResult(
            total_rows=1,
            valid_rows=1,
            error_rows=0,
            warning_rows=1,
            missing_cnp_count=1,
            all_warnings=[self._issue(2, IssueSeverity.WARNING, IssueCode.MISSING_CNP)],
        )

        report = result.format_report()

        assert "Missing CNPs: 1" in report
        assert "WARNINGS (1):" in report
        assert "RESULT: ✓ Validation passed with warnings" in report

    def test_report_truncates_long_issue_lists(self):
        """Test that only the first 20 issues per section are listed."""
        # Arrange
        errors = [
            self._issue(row, IssueSeverity.ERROR, IssueCode.INVALID_CNP)
            for row in range(2, 27)
        ]
        result = ValidationResult(
            total_rows=25, valid_rows=0, error_rows=25, warning_rows=0, all_errors=errors
        )

        # Act
        report = result.format_report()

        # Assert
        assert "ERRORS (25):" in report
        assert "Row 21 [cnp]: problem" in report
        assert "Row 22 [cnp]" not in report
        assert "... and 5 more errors" in report
        assert "RESULT: ✗ Validation failed" in report

    def test_to_dict(self):
        result = ValidationResult(
            total_rows=1,
            valid_rows=0,
            error_rows=1,
            warning_rows=0,
            duplicate_cnp_count=0,
            all_errors=[self._issue(2, IssueSeverity.ERROR, IssueCode.DUPLICATE)],
        )

        data = result.to_dict()

        assert data["error_rows"] == 1
        assert data["errors"][0] == {
            "row_number": 2,
            "column_name": "cnp",
            "severity": "error",
            "code": "DUPLICATE",
            "message": "problem",
            "suggestion": "fix it",
        }
        assert data["warnings"] == []


class TestEnrichWithCnpData:
    """Test suite for enrich_with_cnp_data function."""

    def test_adds_decoded_columns(self):
        # Arrange
        df = pd.DataFrame(
            [{"cnp": "2850515123454"}, {"cnp": "1900101000000"}, {"cnp": None}]
        )

        # Act
        enriched = enrich_with_cnp_data(df)

        # Assert
        assert list(enriched["cnp_valid"]) == [True, False, False]
        assert enriched.iloc[0]["cnp_birth_date"] == "1985-05-15"
        assert enriched.iloc[0]["cnp_sex"] == "female"
        assert enriched.iloc[0]["cnp_county"] == "Cluj"
        assert pd.isna(enriched.iloc[1]["cnp_birth_date"])
        assert "cnp_valid" not in df.columns

    def test_format_only_mode(self):
        df = pd.DataFrame([{"cnp": "1900101000000"}])

        enriched = enrich_with_cnp_data(df, mode=ValidationMode.FORMAT_ONLY)

        assert enriched.iloc[0]["cnp_birth_date"] == date(1990, 1, 1).isoformat()

    def test_romanian_county_names(self):
        """Test that language selects the unknown-county label."""
        df = pd.DataFrame([{"cnp": "6080904000000"}])

        enriched = enrich_with_cnp_data(df, language="ro")

        assert enriched.iloc[0]["cnp_county"] == "Necunoscut (00)"
        assert enrich_with_cnp_data(df).iloc[0]["cnp_county"] == "Unknown (00)"

    def test_missing_column_raises(self):
        with pytest.raises(ValueError, match="missing CNP column"):
            enrich_with_cnp_data(pd.DataFrame([{"name": "Ion"}]))


class TestExportInvalidRows:
    """Test suite for export_invalid_rows function."""

    def test_export_writes_error_rows(self, sample_patient_csv, tmp_path):
        # Arrange
        df = load_patient_csv(sample_patient_csv)
        result = validate_cnp_column(df)
        output = tmp_path / "errors.csv"

        # Act
        export_invalid_rows(df, result, output)

        # Assert
        exported = pd.read_csv(output, dtype=str)
        assert len(exported) == 3
        assert exported.iloc[1]["error_description"] == "cnp: CNP control digit is invalid"
        assert "Duplicate CNP" in exported.iloc[0]["error_description"]

    def test_export_without_errors_raises(self, tmp_path):
        result = ValidationResult(total_rows=1, valid_rows=1, error_rows=0, warning_rows=0)

        with pytest.raises(ValueError, match="No validation errors"):
            export_invalid_rows(pd.DataFrame([{"cnp": "x"}]), result, tmp_path / "e.csv")

    def test_export_missing_directory_raises(self, sample_patient_csv, tmp_path):
        df = load_patient_csv(sample_patient_csv)
        result = validate_cnp_column(df)

        with pytest.raises(FileNotFoundError, match="Output directory"):
            export_invalid_rows(df, result, tmp_path / "nope" / "errors.csv")
