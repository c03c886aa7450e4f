"""Localized status strings for CNP validation.

Messages are short and meant for direct display next to a form field; they
never contain internal detail.
"""

from typing import Any

DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES = ("en", "ro")

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "not_a_value": "CNP must be a non-empty value",
        "wrong_length": "CNP must have exactly 13 digits",
        "non_digit": "CNP must contain only digits",
        "checksum_error": "CNP control digit is invalid",
        "impossible_date": "CNP encodes an impossible birth date",
        "unknown_county": "Unknown ({code})",
        "foreign_citizen": "Foreign citizen",
        "born_in_century": "{sex} born in {century} century",
        "foreign_resident": "{sex} foreign resident born in {century} century",
        "male": "Male",
        "female": "Female",
    },
    "ro": {
        "not_a_value": "CNP-ul trebuie să fie o valoare validă",
        "wrong_length": "CNP-ul trebuie să aibă exact 13 cifre",
        "non_digit": "CNP-ul trebuie să conțină doar cifre",
        "checksum_error": "CNP-ul nu este valid",
        "impossible_date": "CNP-ul conține o dată de naștere imposibilă",
        "unknown_county": "Necunoscut ({code})",
        "foreign_citizen": "Cetățean străin",
        "born_in_century": "{sex} născut în secolul {century}",
        "foreign_resident": "{sex} rezident străin născut în secolul {century}",
        "male": "Masculin",
        "female": "Feminin",
    },
}

_ROMAN_NUMERALS = {19: "XIX", 20: "XX", 21: "XXI"}


def get_message(key: str, language: str = DEFAULT_LANGUAGE, **params: Any) -> str:
    """Look up a localized message.

    Args:
        key: Message key (error kind value or description key)
        language: Language code; unknown languages fall back to English
        **params: Values interpolated into the message template

    Returns:
        Formatted message string

    Raises:
        KeyError: If the message key does not exist
    """
    table = MESSAGES.get(language, MESSAGES[DEFAULT_LANGUAGE])
    template = table[key]
    return template.format(**params) if params else template


def century_label(century: int, language: str = DEFAULT_LANGUAGE) -> str:
    """Render a century prefix (18, 19, 20) as an ordinal century label.

    A birth year 19xx lies in the 20th century, so the label is prefix + 1.

    >>> century_label(19)
    '20th'
    >>> century_label(20, "ro")
    'XXI'
    """
    ordinal = century + 1
    if language == "ro":
        return _ROMAN_NUMERALS.get(ordinal, str(ordinal))
    if ordinal % 10 == 1 and ordinal % 100 != 11:
        suffix = "st"
    elif ordinal % 10 == 2 and ordinal % 100 != 12:
        suffix = "nd"
    elif ordinal % 10 == 3 and ordinal % 100 != 13:
        suffix = "rd"
    else:
        suffix = "th"
    return f"{ordinal}{suffix}"
