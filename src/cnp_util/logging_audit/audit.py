"""Audit trail functionality for the CNP Utility.

This module provides structured audit logging for tracking batch validations
and other operations on patient identifiers.
"""

import time
import uuid
from typing import Any, Dict

from .logger import get_logger

logger = get_logger(__name__)

# Key fields rendered first, in this order
AUDIT_FIELD_ORDER = [
    "status",
    "input_file",
    "record_count",
    "duration",
    "error_count",
    "warning_count",
    "error_message",
    "correlation_id",
]


def log_audit_event(event_type: str, details: Dict[str, Any]) -> None:
    """Log an audit trail event.

    Creates a structured audit log entry with standard fields. Audit events
    are logged at INFO level for successful operations and ERROR level for
    failures.

    Args:
        event_type: Type of operation (e.g., "CSV_VALIDATED", "CSV_ENRICHED",
                   "CNP_ANALYZED")
        details: Dictionary with event details. Common fields include:
                - input_file: Path to input file (if applicable)
                - record_count: Number of records processed
                - status: "success" or "failure"
                - duration: Operation duration in seconds
                - error_count / warning_count: Issue counts
                - correlation_id: Optional correlation ID for related events

    Example:
        >>> log_audit_event("CSV_VALIDATED", {
        ...     "input_file": "patients.csv",
        ...     "record_count": 100,
        ...     "status": "success",
        ...     "duration": 0.4
        ... })
    """
    if "timestamp" not in details:
        details["timestamp"] = time.time()

    if "correlation_id" not in details:
        details["correlation_id"] = str(uuid.uuid4())

    message_parts = [f"AUDIT [{event_type}]"]

    for field in AUDIT_FIELD_ORDER:
        if field in details:
            value = details[field]
            if field == "duration" and isinstance(value, (int, float)):
                message_parts.append(f"{field}={value:.2f}s")
            else:
                message_parts.append(f"{field}={value}")

    for key, value in details.items():
        if key not in AUDIT_FIELD_ORDER and key != "timestamp":
            message_parts.append(f"{key}={value}")

    audit_message = " | ".join(message_parts)

    if details.get("status", "unknown") == "failure":
        logger.error(audit_message)
    else:
        logger.info(audit_message)
