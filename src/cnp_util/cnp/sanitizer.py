"""CNP input sanitizing and display formatting."""

import re
from typing import Any

CNP_LENGTH = 13

NON_DIGIT_PATTERN = re.compile(r"[^0-9]")


def sanitize_cnp(value: Any) -> str:
    """Remove every character outside 0-9.

    Total and idempotent: non-string input sanitizes to an empty string.

    Args:
        value: Raw input, typically a form field value

    Returns:
        String of decimal digits (possibly empty)

    Example:
        >>> sanitize_cnp("608-090.400 000 0")
        '6080904000000'
    """
    if not isinstance(value, str):
        return ""
    return NON_DIGIT_PATTERN.sub("", value)


def format_cnp_for_display(value: str) -> str:
    """Group a 13-character CNP for readability.

    The groups are: sex/century digit, year, month, day, county, sequence
    number and control digit. Any input whose length is not 13 is returned
    unchanged.

    Example:
        >>> format_cnp_for_display("1234567890123")
        '1 23 45 67 89 012 3'
    """
    if not isinstance(value, str) or len(value) != CNP_LENGTH:
        return value
    return " ".join(
        (value[0], value[1:3], value[3:5], value[5:7], value[7:9], value[9:12], value[12])
    )
