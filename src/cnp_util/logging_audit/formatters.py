"""Custom log formatters for the CNP Utility.

This module provides specialized formatters for logging, including PII redaction.
"""

import logging
import re
from typing import List, Tuple


class PIIRedactingFormatter(logging.Formatter):
    """Formatter that redacts Personally Identifiable Information from log messages.

    Applies regex-based pattern matching to identify and redact CNPs (any run
    of exactly 13 digits, optionally grouped by single spaces as produced by
    the display formatter) and patient names.

    Attributes:
        redact_pii: Whether to enable PII redaction
        patterns: List of (regex_pattern, replacement_text) tuples for redaction

    Example:
        >>> formatter = PIIRedactingFormatter(
        ...     fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        ...     redact_pii=True
        ... )
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_pii: bool = False,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_pii = redact_pii

        self.patterns: List[Tuple[re.Pattern[str], str]] = [
            # Display-grouped CNP: 1 23 45 67 89 012 3
            (
                re.compile(r"(?<!\d)\d \d{2} \d{2} \d{2} \d{2} \d{3} \d(?!\d)"),
                "[CNP-REDACTED]",
            ),
            # Plain CNP: 13 consecutive digits
            (re.compile(r"(?<!\d)\d{13}(?!\d)"), "[CNP-REDACTED]"),
            # Matches: name="John Doe", name='Jane Smith', name=Bob Jones
            (re.compile(r'name=["\']?([^"\']+)["\']?'), "name=[NAME-REDACTED]"),
            # Matches: "Patient: Ion Popescu", "Name: Maria Ionescu"
            (
                re.compile(r"(Patient|Name):\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+"),
                r"\1: [NAME-REDACTED]",
            ),
        ]

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with optional PII redaction."""
        original = super().format(record)

        if self.redact_pii:
            for pattern, replacement in self.patterns:
                original = pattern.sub(replacement, original)

        return original
