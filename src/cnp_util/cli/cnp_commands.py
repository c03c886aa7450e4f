"""CNP-related CLI commands for the CNP Utility.

This module provides CLI commands to validate, analyze and format a single
CNP given on the command line.
"""

import json as json_lib
import logging
import sys
from typing import Optional

import click

from cnp_util.cnp import analyze_cnp, format_cnp_for_display, sanitize_cnp, validate_cnp
from cnp_util.cnp.messages import SUPPORTED_LANGUAGES
from cnp_util.config import Config, get_validation_config
from cnp_util.models.cnp import CenturyPolicy, ValidationMode

logger = logging.getLogger(__name__)

CENTURY_POLICY_CHOICES = [policy.value for policy in CenturyPolicy]


def resolve_validation_settings(
    ctx: click.Context,
    format_only: bool,
    century_policy: Optional[str] = None,
    language: Optional[str] = None,
) -> tuple[ValidationMode, CenturyPolicy, str]:
    """Combine CLI options with the loaded configuration.

    Precedence: CLI options > configuration (file, environment, defaults).

    Args:
        ctx: Click context; the root context carries the loaded Config
        format_only: --format-only flag
        century_policy: --century-policy option value, if given
        language: --language option value, if given

    Returns:
        Tuple of (validation mode, century policy, language)
    """
    root_obj = ctx.find_root().obj or {}
    config: Config = root_obj.get("config") or Config()

    validation = get_validation_config(config)

    mode = ValidationMode.FORMAT_ONLY if format_only else validation.mode
    policy = CenturyPolicy(century_policy) if century_policy else validation.century_policy
    return mode, policy, language or validation.language


@click.group("cnp")
def cnp_group() -> None:
    """Validate, analyze and format individual CNPs."""
    pass


@cnp_group.command("validate")
@click.argument("value")
@click.option(
    "--format-only",
    is_flag=True,
    help="Only require 13 digits; skip the control digit check",
)
@click.option(
    "--language",
    type=click.Choice(SUPPORTED_LANGUAGES),
    default=None,
    help="Language of the error message (default from config)",
)
@click.option("--json", "json_output", is_flag=True, help="Output result as JSON")
@click.pass_context
def validate_command(
    ctx: click.Context,
    value: str,
    format_only: bool,
    language: Optional[str],
    json_output: bool,
) -> None:
    """Validate a CNP.

    Exits with code 0 when the CNP is valid and code 1 otherwise.

    Examples:

        # Full validation including the control digit
        cnp-util cnp validate 6080904000000

        # Accept any 13 digits
        cnp-util cnp validate 1234567890123 --format-only

        # Machine-readable output
        cnp-util cnp validate "608 09 04 000 00 0" --json
    """
    mode, _, language = resolve_validation_settings(ctx, format_only, language=language)
    outcome = validate_cnp(value, mode=mode, language=language)
    logger.debug(f"Validation finished in {mode.value} mode: valid={outcome.is_valid}")

    if json_output:
        click.echo(json_lib.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))
    elif outcome.is_valid:
        click.secho("✓ CNP is valid", fg="green")
    else:
        click.secho(f"✗ {outcome.error_message}", fg="red", err=True)

    sys.exit(0 if outcome.is_valid else 1)


@cnp_group.command("analyze")
@click.argument("value")
@click.option(
    "--format-only",
    is_flag=True,
    help="Only require 13 digits; skip the control digit check",
)
@click.option(
    "--century-policy",
    type=click.Choice(CENTURY_POLICY_CHOICES),
    default=None,
    help="How to resolve the birth century (default from config)",
)
@click.option(
    "--language",
    type=click.Choice(SUPPORTED_LANGUAGES),
    default=None,
    help="Language of messages (default from config)",
)
@click.option("--json", "json_output", is_flag=True, help="Output result as JSON")
@click.pass_context
def analyze_command(
    ctx: click.Context,
    value: str,
    format_only: bool,
    century_policy: Optional[str],
    language: Optional[str],
    json_output: bool,
) -> None:
    """Decode birth date, sex, county and century from a CNP.

    Exits with code 0 when the CNP could be decoded and code 1 otherwise.

    Examples:

        cnp-util cnp analyze 6080904000000

        # Resolve the century from the implied age instead of the official table
        cnp-util cnp analyze 1080101000004 --century-policy age_heuristic

        cnp-util cnp analyze 6080904000000 --language ro --json
    """
    mode, policy, language = resolve_validation_settings(
        ctx, format_only, century_policy, language
    )
    result = analyze_cnp(value, mode=mode, century_policy=policy, language=language)

    if json_output:
        click.echo(json_lib.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        sys.exit(0 if result.is_valid else 1)

    if not result.is_valid:
        click.secho(f"✗ {result.error_message}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✓ {format_cnp_for_display(sanitize_cnp(value))}", fg="green")
    click.echo(f"  Birth date:  {result.birth_date.isoformat()}")
    click.echo(f"  Sex:         {result.sex.value}")
    click.echo(f"  County:      {result.county} ({result.county_code})")
    click.echo(f"  Century:     {result.century}")
    click.echo(f"  Description: {result.description}")
    sys.exit(0)


@cnp_group.command("format")
@click.argument("value")
def format_command(value: str) -> None:
    """Print a CNP grouped for display.

    Separators in the input are removed first; input that does not carry
    exactly 13 digits is printed as its digits, ungrouped.

    Example:

        cnp-util cnp format 608-090.400-0000
    """
    click.echo(format_cnp_for_display(sanitize_cnp(value)))
