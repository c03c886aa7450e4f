"""CSV loader for patient-import files carrying CNPs.

This module reads a patient CSV and checks the file-level structure needed
for bulk CNP validation. Row-level checks live in validator.py.
"""

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from cnp_util.utils.exceptions import ValidationError


logger = logging.getLogger(__name__)

DEFAULT_CNP_COLUMN = "cnp"

# Optional columns cross-checked against the decoded CNP
DOB_COLUMN = "dob"
GENDER_COLUMN = "gender"


def load_patient_csv(
    file_path: Path, cnp_column: Optional[str] = None
) -> pd.DataFrame:
    """Load patient records from a CSV file.

    Every column is read as text so that CNPs keep their exact digits and
    are never coerced to numbers. Empty cells become NaN.

    Args:
        file_path: Path to a UTF-8 CSV file with a header row
        cnp_column: Name of the column holding the CNP (default "cnp")

    Returns:
        DataFrame with one row per patient record

    Raises:
        FileNotFoundError: If the CSV file does not exist
        ValidationError: If the file cannot be parsed, is empty, or lacks
            the CNP column
    """
    cnp_column = cnp_column or DEFAULT_CNP_COLUMN
    logger.info(f"Loading CSV from {file_path}")

    if not file_path.exists():
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    try:
        df = pd.read_csv(file_path, dtype=str, encoding="utf-8")
    except pd.errors.EmptyDataError as e:
        raise ValidationError(f"CSV file {file_path} is empty") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValidationError(
            f"Failed to read CSV file {file_path}. Ensure file is valid CSV with UTF-8 encoding. Error: {e}"
        ) from e

    if cnp_column not in df.columns:
        raise ValidationError(
            f"Missing required column '{cnp_column}'. "
            f"Columns found: {', '.join(df.columns)}"
        )

    if df.empty:
        raise ValidationError(f"CSV file {file_path} has a header but no data rows")

    logger.info(f"Loaded {len(df)} patient record(s)")
    return df
