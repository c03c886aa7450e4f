"""Structural validation of CNP input (13 decimal digits)."""

import re
from typing import Any

from cnp_util.cnp.messages import DEFAULT_LANGUAGE, get_message
from cnp_util.cnp.sanitizer import CNP_LENGTH, sanitize_cnp
from cnp_util.models.cnp import ErrorKind, ValidationOutcome

# Characters users commonly type between digit groups
SEPARATOR_PATTERN = re.compile(r"[\s\-./_]")


def validate_structure(value: Any, language: str = DEFAULT_LANGUAGE) -> ValidationOutcome:
    """Check that the input carries exactly 13 decimal digits.

    Length is checked on the fully sanitized string, so any input whose
    digits do not number 13 is reported as WRONG_LENGTH. An input that does
    carry 13 digits but also contains non-separator characters (letters,
    symbols) is reported as NON_DIGIT.

    Args:
        value: Raw input of any type
        language: Language code for the error message

    Returns:
        ValidationOutcome; never raises
    """
    if not isinstance(value, str) or value.strip() == "":
        return ValidationOutcome.failure(
            ErrorKind.NOT_A_VALUE, get_message("not_a_value", language)
        )

    digits = sanitize_cnp(value)
    if len(digits) != CNP_LENGTH:
        return ValidationOutcome.failure(
            ErrorKind.WRONG_LENGTH, get_message("wrong_length", language)
        )

    if SEPARATOR_PATTERN.sub("", value) != digits:
        return ValidationOutcome.failure(
            ErrorKind.NON_DIGIT, get_message("non_digit", language)
        )

    return ValidationOutcome.success()
