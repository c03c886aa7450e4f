"""Main CLI entry point for the CNP Utility.

This module provides the main Click command group for the cnp-util CLI.
"""

from pathlib import Path
from typing import Optional

import click

from cnp_util import __version__
from cnp_util.cli.cnp_commands import cnp_group
from cnp_util.cli.csv_commands import csv
from cnp_util.config import get_logging_config, load_config
from cnp_util.logging_audit import configure_logging
from cnp_util.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="cnp-util")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.option(
    "--redact-pii",
    is_flag=True,
    help="Redact PII (CNPs, patient names) from logs",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    redact_pii: bool,
) -> None:
    """CNP Utility - validation of Romanian personal numeric codes (CNP).

    Checks the structure and control digit of a CNP and decodes the birth
    date, sex, county and century it encodes.

    Common usage:

        # Validate a single CNP
        cnp-util cnp validate 6080904000000

        # Decode the demographics of a CNP
        cnp-util cnp analyze 6080904000000

        # Validate the CNP column of a patient CSV file
        cnp-util csv validate patients.csv

        # Use custom configuration file
        cnp-util --config custom/config.json cnp analyze 6080904000000

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose
    ctx.obj["redact_pii"] = redact_pii
    ctx.obj["log_file"] = log_file

    # Precedence: CLI flags > config file > defaults
    logging_config = get_logging_config(config_obj)
    log_level = "DEBUG" if verbose else logging_config.level
    log_file_path = log_file if log_file else logging_config.log_file
    redact_pii_setting = redact_pii if redact_pii else logging_config.redact_pii

    configure_logging(
        level=log_level, log_file=log_file_path, redact_pii=redact_pii_setting
    )


cli.add_command(cnp_group)
cli.add_command(csv)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        cnp-util config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")

    click.echo("\nValidation:")
    click.echo(f"  Mode:           {config_obj.validation.mode.value}")
    click.echo(f"  Century policy: {config_obj.validation.century_policy.value}")
    click.echo(f"  Language:       {config_obj.validation.language}")

    click.echo("\nCSV:")
    click.echo(f"  CNP column:         {config_obj.csv.cnp_column}")
    click.echo(f"  Check demographics: {config_obj.csv.check_demographics}")

    click.echo("\nLogging:")
    click.echo(f"  Level:       {config_obj.logging.level}")
    click.echo(f"  Log file:    {config_obj.logging.log_file}")
    click.echo(f"  Redact PII:  {config_obj.logging.redact_pii}")


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"cnp-util version {__version__}")


if __name__ == "__main__":
    cli()
