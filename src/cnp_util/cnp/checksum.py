"""CNP control digit computation and verification."""

import re

from cnp_util.cnp.messages import DEFAULT_LANGUAGE, get_message
from cnp_util.models.cnp import ErrorKind, ValidationOutcome

CONTROL_COEFFICIENTS = (2, 7, 9, 1, 4, 6, 3, 5, 8, 2, 7, 9)

TWELVE_DIGITS = re.compile(r"[0-9]{12}")


def compute_control_digit(first_twelve: str) -> int:
    """Compute the control digit for the first 12 CNP digits.

    Each digit is multiplied by its coefficient, the products are summed and
    reduced modulo 11. A remainder of 10 maps to 1.

    Args:
        first_twelve: String of at least 12 decimal digits; extra characters
            are ignored

    Returns:
        Control digit in range 0-9

    Raises:
        ValueError: If fewer than 12 digits are supplied or any is not a digit
    """
    if not TWELVE_DIGITS.match(first_twelve):
        raise ValueError(f"Expected 12 decimal digits, got {first_twelve!r}")

    total = sum(
        int(digit) * coefficient
        for digit, coefficient in zip(first_twelve, CONTROL_COEFFICIENTS)
    )
    remainder = total % 11
    return 1 if remainder == 10 else remainder


def validate_checksum(cnp: str, language: str = DEFAULT_LANGUAGE) -> ValidationOutcome:
    """Compare the 13th digit with the computed control digit.

    Args:
        cnp: 13-digit string that already passed structural validation
        language: Language code for the error message

    Returns:
        ValidationOutcome with CHECKSUM_ERROR on mismatch
    """
    if compute_control_digit(cnp) != int(cnp[12]):
        return ValidationOutcome.failure(
            ErrorKind.CHECKSUM_ERROR, get_message("checksum_error", language)
        )
    return ValidationOutcome.success()
