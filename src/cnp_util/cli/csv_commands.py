"""CSV-related CLI commands for the CNP Utility.

This module provides CLI commands for bulk validation of patient-import CSV
files and for enriching them with decoded CNP data.
"""

import json as json_lib
import logging
import sys
import time
from pathlib import Path
from typing import Optional

import click

from cnp_util.cli.cnp_commands import resolve_validation_settings
from cnp_util.config import Config, CsvConfig, get_csv_config
from cnp_util.csv_parser.parser import load_patient_csv
from cnp_util.csv_parser.validator import (
    enrich_with_cnp_data,
    export_invalid_rows,
    validate_cnp_column,
)
from cnp_util.logging_audit import get_console_handler, log_audit_event
from cnp_util.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _csv_config_from(ctx: click.Context) -> CsvConfig:
    root_obj = ctx.find_root().obj or {}
    return get_csv_config(root_obj.get("config") or Config())


@click.group()
def csv() -> None:
    """CSV file operations and bulk CNP validation commands."""
    pass


@csv.command("validate")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option("--column", default=None, help="CNP column name (default from config)")
@click.option(
    "--format-only",
    is_flag=True,
    help="Only require 13 digits; skip the control digit check",
)
@click.option(
    "--export-errors",
    type=click.Path(path_type=Path),
    help="Export invalid rows to CSV file",
)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.pass_context
def validate_csv_command(
    ctx: click.Context,
    file: Path,
    column: Optional[str],
    format_only: bool,
    export_errors: Optional[Path],
    json_output: bool,
) -> None:
    """Validate the CNP column of a patient CSV file.

    Performs:
    - CNP validation (structure, control digit, birth date)
    - Missing CNP detection (warning)
    - Duplicate CNP detection across rows (error)
    - dob / gender cross-check against the decoded CNP (warning)

    Exits with code 0 for success (warnings are OK), code 1 for validation errors.

    Examples:

        # Basic validation with color-coded output
        cnp-util csv validate patients.csv

        # Validate and export invalid rows to a separate file
        cnp-util csv validate patients.csv --export-errors invalid_rows.csv

        # Output validation results in JSON format for automation
        cnp-util csv validate patients.csv --json
    """
    csv_config = _csv_config_from(ctx)
    mode, policy, language = resolve_validation_settings(ctx, format_only)
    cnp_column = column or csv_config.cnp_column

    # Suppress console logging when JSON output is requested
    console_handler = get_console_handler() if json_output else None
    original_level = None

    if console_handler is not None:
        original_level = console_handler.level
        console_handler.setLevel(logging.CRITICAL + 1)  # Effectively disable

    start = time.monotonic()
    try:
        logger.info(f"Validating CSV file: {file}")
        df = load_patient_csv(file, cnp_column)
        result = validate_cnp_column(
            df,
            cnp_column=cnp_column,
            mode=mode,
            century_policy=policy,
            language=language,
            check_demographics=csv_config.check_demographics,
        )

        log_audit_event(
            "CSV_VALIDATED",
            {
                "status": "failure" if result.has_errors else "success",
                "input_file": str(file),
                "record_count": result.total_rows,
                "duration": time.monotonic() - start,
                "error_count": len(result.all_errors),
                "warning_count": len(result.all_warnings),
            },
        )

        if json_output:
            click.echo(json_lib.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        elif result.has_errors:
            click.secho(result.format_report(), fg="red", err=True)
        elif result.has_warnings:
            click.secho(result.format_report(), fg="yellow")
        else:
            click.secho(result.format_report(), fg="green")

        if result.has_errors:
            if export_errors:
                export_invalid_rows(df, result, export_errors)
                if not json_output:
                    click.echo(f"\nInvalid rows exported to: {export_errors}")
            logger.error("Validation failed with errors")
            sys.exit(1)

        logger.info("Validation complete. Exit code: 0")
        sys.exit(0)

    except ValidationError as e:
        click.secho(f"Validation Error: {e}", fg="red", err=True)
        logger.error(f"Validation error: {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        click.secho(f"File not found: {e}", fg="red", err=True)
        logger.error(f"File not found: {e}")
        sys.exit(1)
    finally:
        if console_handler is not None and original_level is not None:
            console_handler.setLevel(original_level)


@csv.command("enrich")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Path of the enriched CSV to write",
)
@click.option("--column", default=None, help="CNP column name (default from config)")
@click.option(
    "--format-only",
    is_flag=True,
    help="Only require 13 digits; skip the control digit check",
)
@click.pass_context
def enrich_csv_command(
    ctx: click.Context,
    file: Path,
    output: Path,
    column: Optional[str],
    format_only: bool,
) -> None:
    """Append decoded CNP columns to a patient CSV file.

    Writes cnp_valid, cnp_birth_date, cnp_sex and cnp_county next to the
    original columns. Rows with a missing or invalid CNP are kept with
    cnp_valid=False.

    Example:

        cnp-util csv enrich patients.csv --output patients_enriched.csv
    """
    csv_config = _csv_config_from(ctx)
    mode, policy, language = resolve_validation_settings(ctx, format_only)
    cnp_column = column or csv_config.cnp_column

    start = time.monotonic()
    try:
        df = load_patient_csv(file, cnp_column)
        enriched = enrich_with_cnp_data(
            df,
            cnp_column=cnp_column,
            mode=mode,
            century_policy=policy,
            language=language,
        )

        if not output.parent.exists():
            raise FileNotFoundError(f"Output directory does not exist: {output.parent}")
        enriched.to_csv(output, index=False, encoding="utf-8")

        valid_count = int(enriched["cnp_valid"].sum())
        log_audit_event(
            "CSV_ENRICHED",
            {
                "status": "success",
                "input_file": str(file),
                "record_count": len(enriched),
                "duration": time.monotonic() - start,
                "valid_count": valid_count,
                "output_file": str(output),
            },
        )

        click.echo(f"Total patients: {len(enriched)}")
        click.echo(f"  - Decoded CNPs: {valid_count}")
        click.echo(f"  - Missing or invalid CNPs: {len(enriched) - valid_count}")
        click.secho(f"Enriched CSV written to: {output}", fg="green")
        sys.exit(0)

    except ValidationError as e:
        click.secho(f"Validation Error: {e}", fg="red", err=True)
        logger.error(f"Validation error: {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        click.secho(f"File not found: {e}", fg="red", err=True)
        logger.error(f"File not found: {e}")
        sys.exit(1)
