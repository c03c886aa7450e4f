"""Birth century resolution from the first CNP digit.

The first digit jointly encodes sex and the century of birth:

    1, 2  born 1900-1999
    3, 4  born 1800-1899
    5, 6  born 2000-2099
    7, 8  resident foreigners, born 1900-1999 and 2000-2099 respectively
    9     foreign citizens (treated as 2000s)

Two named policies are supported, see CenturyPolicy. They can disagree near
the edges of the 100-year plausibility window, so callers choose explicitly.
"""

from datetime import date
from typing import Optional

from cnp_util.models.cnp import CenturyPolicy

FIXED_CENTURIES: dict[int, int] = {
    1: 19,
    2: 19,
    3: 18,
    4: 18,
    5: 20,
    6: 20,
    7: 19,
    8: 20,
    9: 20,
}

RESIDENT_FOREIGNER_DIGITS = frozenset({7, 8})

# Digits whose century the age heuristic may override
HEURISTIC_DIGITS = frozenset({1, 2, 5, 6}) | RESIDENT_FOREIGNER_DIGITS

MIN_PLAUSIBLE_AGE = 0
MAX_PLAUSIBLE_AGE = 100


def plausible_century(year_code: int, today: Optional[date] = None) -> int:
    """Pick the 1900s or 2000s reading whose implied age is plausible.

    The implied age is the difference between the current year and the
    candidate birth year. A reading qualifies when that age lies in
    [0, 100]; when both qualify the smaller age wins; when neither does the
    1900s reading is used.

    Args:
        year_code: Two-digit year from the CNP (0-99)
        today: Reference date, defaults to date.today()

    Returns:
        Century prefix, 19 or 20
    """
    current_year = (today or date.today()).year
    age_in_1900s = current_year - (1900 + year_code)
    age_in_2000s = current_year - (2000 + year_code)

    qualifies_1900s = MIN_PLAUSIBLE_AGE <= age_in_1900s <= MAX_PLAUSIBLE_AGE
    qualifies_2000s = MIN_PLAUSIBLE_AGE <= age_in_2000s <= MAX_PLAUSIBLE_AGE

    if qualifies_1900s and qualifies_2000s:
        return 20 if age_in_2000s < age_in_1900s else 19
    if qualifies_2000s:
        return 20
    return 19


def resolve_century(
    sex_digit: int,
    year_code: int,
    policy: CenturyPolicy = CenturyPolicy.FIXED_TABLE,
    today: Optional[date] = None,
) -> Optional[int]:
    """Resolve the century prefix encoded by the first CNP digit.

    Args:
        sex_digit: First CNP digit (1-9)
        year_code: Two-digit birth year (0-99)
        policy: FIXED_TABLE or AGE_HEURISTIC
        today: Reference date for plausibility checks

    Returns:
        Century prefix (18, 19 or 20), or None for a digit that is never
        issued (0)
    """
    if policy is CenturyPolicy.AGE_HEURISTIC and sex_digit in HEURISTIC_DIGITS:
        return plausible_century(year_code, today)

    return FIXED_CENTURIES.get(sex_digit)
