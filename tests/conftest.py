"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

import logging
from datetime import date
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable

import pytest

from cnp_util.cnp import compute_control_digit


# Known-good CNPs (control digit verified by hand)
VALID_CNPS = {
    "female_2008": "6080904000000",
    "male_1990": "1900101000006",
    "female_cluj_1985": "2850515123454",
    "leap_day_2004": "6040229401234",
    "foreign_citizen_2005": "9050101400010",
    "resident_foreigner_1985": "7850101410015",
    "male_1885": "3850101400010",
}


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def reference_date() -> date:
    """
    Return a fixed "today" for century and age calculations.

    Returns:
        date: 17 October 2026.
    """
    return date(2026, 10, 17)


@pytest.fixture
def make_cnp() -> Callable[[str], str]:
    """
    Return a helper that appends the correct control digit to 12 digits.

    Returns:
        Callable taking the first 12 digits and returning a 13-digit CNP.
    """

    def _make(first_twelve: str) -> str:
        return first_twelve + str(compute_control_digit(first_twelve))

    return _make


@pytest.fixture
def valid_cnps() -> dict[str, str]:
    """Return the known-good CNPs keyed by description."""
    return dict(VALID_CNPS)


@pytest.fixture
def sample_patient_csv(tmp_path: Path) -> Path:
    """
    Create a patient CSV with a mix of valid, invalid, missing and duplicate CNPs.

    Rows (numbered as in the file, header = row 1):
        2: valid, matching dob and gender
        3: wrong control digit
        4: missing CNP
        5: valid, gender disagrees with the CNP
        6: same CNP as row 2

    Args:
        tmp_path: Pytest's temporary directory fixture.

    Returns:
        Path: Path to the CSV file.
    """
    csv_file = tmp_path / "patients.csv"
    csv_file.write_text(
        "first_name,last_name,dob,gender,cnp\n"
        "Maria,Popescu,2008-09-04,F,6080904000000\n"
        "Ion,Ionescu,1990-01-01,M,1900101000000\n"
        "Ana,Georgescu,1992-03-03,F,\n"
        "Elena,Dumitrescu,1985-05-15,M,2850515123454\n"
        "Maria,Popescu,2008-09-04,F,608 09 04 000 00 0\n",
        encoding="utf-8",
    )
    return csv_file


@pytest.fixture
def clean_patient_csv(tmp_path: Path) -> Path:
    """Create a patient CSV where every CNP is valid and consistent."""
    csv_file = tmp_path / "clean_patients.csv"
    csv_file.write_text(
        "first_name,last_name,dob,gender,cnp\n"
        "Maria,Popescu,2008-09-04,F,6080904000000\n"
        "Ion,Ionescu,1990-01-01,M,1900101000006\n",
        encoding="utf-8",
    )
    return csv_file


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach console and file handlers left behind by configure_logging.

    Handlers from an earlier test may point at a stream that no longer
    exists (CliRunner swaps sys.stderr per invocation).
    """
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root_logger.removeHandler(handler)
            handler.close()
