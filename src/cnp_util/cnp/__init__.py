"""CNP engine.

Pure, stateless validation and demographic decoding of Romanian personal
identification numbers (Cod Numeric Personal).
"""

from cnp_util.cnp.analyzer import (
    analyze_cnp,
    describe,
    extract_birth_date_from_cnp,
    extract_sex_from_cnp,
    validate_cnp,
)
from cnp_util.cnp.century import plausible_century, resolve_century
from cnp_util.cnp.checksum import compute_control_digit, validate_checksum
from cnp_util.cnp.counties import COUNTIES, lookup_county
from cnp_util.cnp.dates import decode_birth_date
from cnp_util.cnp.demographics import classify_sex
from cnp_util.cnp.sanitizer import format_cnp_for_display, sanitize_cnp
from cnp_util.cnp.structure import validate_structure

__all__ = [
    # Facade
    "analyze_cnp",
    "validate_cnp",
    "extract_birth_date_from_cnp",
    "extract_sex_from_cnp",
    "describe",
    # Pipeline stages
    "sanitize_cnp",
    "validate_structure",
    "compute_control_digit",
    "validate_checksum",
    "resolve_century",
    "plausible_century",
    "decode_birth_date",
    "classify_sex",
    "lookup_county",
    "format_cnp_for_display",
    "COUNTIES",
]
