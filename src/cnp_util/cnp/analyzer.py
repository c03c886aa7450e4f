"""CNP validation and analysis facade.

Runs the pipeline sanitize -> structure -> checksum (CHECKSUM mode only) ->
century -> birth date -> sex, stopping at the first failure. Every input,
including non-strings and hostile strings, yields a well-formed result;
nothing in this module raises for end-user input.
"""

from datetime import date
from typing import Any, Optional

from cnp_util.cnp.century import RESIDENT_FOREIGNER_DIGITS, resolve_century
from cnp_util.cnp.checksum import validate_checksum
from cnp_util.cnp.counties import lookup_county
from cnp_util.cnp.dates import decode_birth_date
from cnp_util.cnp.demographics import classify_sex
from cnp_util.cnp.messages import DEFAULT_LANGUAGE, century_label, get_message
from cnp_util.cnp.sanitizer import sanitize_cnp
from cnp_util.cnp.structure import validate_structure
from cnp_util.logging_audit import get_logger
from cnp_util.models.cnp import (
    AnalysisResult,
    CenturyPolicy,
    ErrorKind,
    Sex,
    ValidationMode,
    ValidationOutcome,
)

logger = get_logger(__name__)


def validate_cnp(
    value: Any,
    mode: ValidationMode = ValidationMode.CHECKSUM,
    language: str = DEFAULT_LANGUAGE,
) -> ValidationOutcome:
    """Validate a CNP without decoding its demographics.

    Args:
        value: Raw input, typically a form field value
        mode: CHECKSUM (default) also verifies the control digit;
              FORMAT_ONLY accepts any 13 decimal digits
        language: Language code for the error message ("en" or "ro")

    Returns:
        ValidationOutcome

    Example:
        >>> validate_cnp("1234567890123", mode=ValidationMode.FORMAT_ONLY).is_valid
        True
        >>> validate_cnp("123456789012").error_message
        'CNP must have exactly 13 digits'
    """
    outcome = validate_structure(value, language)
    if not outcome.is_valid:
        return outcome

    if mode is ValidationMode.CHECKSUM:
        return validate_checksum(sanitize_cnp(value), language)

    return outcome


def analyze_cnp(
    value: Any,
    mode: ValidationMode = ValidationMode.CHECKSUM,
    century_policy: CenturyPolicy = CenturyPolicy.FIXED_TABLE,
    today: Optional[date] = None,
    language: str = DEFAULT_LANGUAGE,
) -> AnalysisResult:
    """Validate a CNP and decode birth date, sex, county and century.

    Args:
        value: Raw input, typically a form field value
        mode: CHECKSUM (default) or FORMAT_ONLY
        century_policy: FIXED_TABLE (default) or AGE_HEURISTIC
        today: Reference date for the age heuristic, defaults to today
        language: Language code for messages ("en" or "ro")

    Returns:
        AnalysisResult with every decoded field set on success, or none of
        them on failure

    Example:
        >>> result = analyze_cnp("6080904000000")
        >>> result.sex, result.birth_date
        (<Sex.FEMALE: 'female'>, datetime.date(2008, 9, 4))
    """
    outcome = validate_cnp(value, mode=mode, language=language)
    if not outcome.is_valid:
        logger.debug(f"CNP rejected: {outcome.error_kind.value}")
        return AnalysisResult.from_outcome(outcome)

    cnp = sanitize_cnp(value)
    sex_digit = int(cnp[0])
    year_code = int(cnp[1:3])
    month_code = int(cnp[3:5])
    day_code = int(cnp[5:7])
    county_code = cnp[7:9]

    century = resolve_century(sex_digit, year_code, century_policy, today)
    birth_date = None
    if century is not None:
        birth_date = decode_birth_date(century, year_code, month_code, day_code)

    if birth_date is None:
        logger.debug("CNP rejected: impossible_date")
        return AnalysisResult(
            is_valid=False,
            error_kind=ErrorKind.IMPOSSIBLE_DATE,
            error_message=get_message("impossible_date", language),
        )

    sex = classify_sex(sex_digit)
    county = lookup_county(county_code) or get_message(
        "unknown_county", language, code=county_code
    )

    return AnalysisResult(
        is_valid=True,
        birth_date=birth_date,
        sex=sex,
        county=county,
        county_code=county_code,
        century=century,
        description=describe(sex_digit, sex, century, language),
    )


def describe(sex_digit: int, sex: Sex, century: int, language: str = DEFAULT_LANGUAGE) -> str:
    """Build the human-readable summary for a decoded CNP."""
    if sex is Sex.FOREIGN:
        return get_message("foreign_citizen", language)

    sex_label = get_message(sex.value, language)
    key = "foreign_resident" if sex_digit in RESIDENT_FOREIGNER_DIGITS else "born_in_century"
    return get_message(key, language, sex=sex_label, century=century_label(century, language))


def extract_birth_date_from_cnp(
    value: Any,
    mode: ValidationMode = ValidationMode.CHECKSUM,
    century_policy: CenturyPolicy = CenturyPolicy.FIXED_TABLE,
    today: Optional[date] = None,
) -> Optional[date]:
    """Return the decoded birth date, or None for any invalid CNP."""
    return analyze_cnp(value, mode=mode, century_policy=century_policy, today=today).birth_date


def extract_sex_from_cnp(
    value: Any, mode: ValidationMode = ValidationMode.CHECKSUM
) -> Optional[Sex]:
    """Return the decoded sex, or None for any invalid CNP."""
    return analyze_cnp(value, mode=mode).sex
