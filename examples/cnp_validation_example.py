"""CNP validation examples.

This module demonstrates validating and decoding single CNPs with the
library API, and bulk-validating the CNP column of a patient CSV file.
"""

import logging
from pathlib import Path

from cnp_util.cnp import analyze_cnp, format_cnp_for_display, validate_cnp
from cnp_util.csv_parser.parser import load_patient_csv
from cnp_util.csv_parser.validator import enrich_with_cnp_data, validate_cnp_column
from cnp_util.models import CenturyPolicy, ValidationMode

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def example_1_validate_form_input():
    """Example 1: Validate values as a form would receive them.

    Separators are accepted; the control digit is checked unless
    FORMAT_ONLY is requested.
    """
    print("=" * 80)
    print("EXAMPLE 1: Validating Form Input")
    print("=" * 80)
    print()

    for value in ["6080904000000", "608 09 04 000 00 0", "1234567890123", "12345"]:
        strict = validate_cnp(value)
        lenient = validate_cnp(value, mode=ValidationMode.FORMAT_ONLY)
        print(f"  {value!r:24} checksum: {strict.error_message or 'valid'}")
        print(f"  {'':24} format-only: {lenient.error_message or 'valid'}")
    print()


def example_2_decode_demographics():
    """Example 2: Decode birth date, sex, county and century."""
    print("=" * 80)
    print("EXAMPLE 2: Decoding Demographics")
    print("=" * 80)
    print()

    for value in ["2850515123454", "7850101410015", "9050101400010"]:
        result = analyze_cnp(value)
        print(f"  {format_cnp_for_display(value)}")
        print(f"    Birth date:  {result.birth_date}")
        print(f"    County:      {result.county}")
        print(f"    Description: {result.description}")
        print(f"    Romanian:    {analyze_cnp(value, language='ro').description}")
    print()


def example_3_century_policies():
    """Example 3: Compare the official table with the age heuristic.

    Legacy records sometimes carry first digit 1 for people born after
    2000. The age heuristic reads such records as the plausible century.
    """
    print("=" * 80)
    print("EXAMPLE 3: Century Policies")
    print("=" * 80)
    print()

    value = "1080101000004"
    for policy in CenturyPolicy:
        result = analyze_cnp(value, century_policy=policy)
        print(f"  {policy.value:14} -> {result.birth_date}")
    print()


def example_4_bulk_csv():
    """Example 4: Validate and enrich a patient CSV file."""
    print("=" * 80)
    print("EXAMPLE 4: Bulk CSV Validation")
    print("=" * 80)
    print()

    csv_path = Path("examples/patients_sample.csv")
    df = load_patient_csv(csv_path)

    result = validate_cnp_column(df)
    print(result.format_report())
    print()

    enriched = enrich_with_cnp_data(df)
    print(enriched[["last_name", "cnp_valid", "cnp_birth_date", "cnp_county"]])
    print()


if __name__ == "__main__":
    example_1_validate_form_input()
    example_2_decode_demographics()
    example_3_century_policies()
    example_4_bulk_csv()
