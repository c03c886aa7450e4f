"""Birth date reconstruction from CNP digits 2-7."""

from datetime import date
from typing import Optional


def decode_birth_date(
    century: int, year_code: int, month_code: int, day_code: int
) -> Optional[date]:
    """Build the birth date and reject calendar-impossible combinations.

    Leap years and month lengths are left to datetime.date, which refuses
    any date that does not exist (31 April, 29 February 2003, month 13...).

    Args:
        century: Century prefix (18, 19 or 20)
        year_code: Two-digit year (0-99)
        month_code: Month as encoded, 1-12
        day_code: Day of month as encoded

    Returns:
        The birth date, or None if it does not exist

    Example:
        >>> decode_birth_date(20, 4, 2, 29)
        datetime.date(2004, 2, 29)
        >>> decode_birth_date(20, 3, 2, 29) is None
        True
    """
    year = century * 100 + year_code
    try:
        return date(year, month_code, day_code)
    except ValueError:
        return None
