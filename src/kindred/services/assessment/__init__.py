"""
Assessment Services

Standardized screening questionnaires.
"""

from kindred.services.assessment.screening_scorer import (
    ScreeningInstrument,
    ScreeningResult,
    ScreeningScorer,
    ScreeningSeverity,
)

__all__ = [
    "ScreeningInstrument",
    "ScreeningResult",
    "ScreeningScorer",
    "ScreeningSeverity",
]
