"""Models module.

This module provides data models and dataclasses for the application.
"""

from cnp_util.models.cnp import (
    AnalysisResult,
    CenturyPolicy,
    ErrorKind,
    Sex,
    ValidationMode,
    ValidationOutcome,
)

__all__ = [
    "AnalysisResult",
    "CenturyPolicy",
    "ErrorKind",
    "Sex",
    "ValidationMode",
    "ValidationOutcome",
]
