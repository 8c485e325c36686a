"""
Trend Enumerations

Direction labels for emotional trends and risk predictions.
"""

from enum import StrEnum


class EmotionalTrend(StrEnum):
    """Direction of recent emotional history."""

    IMPROVING = "improving"
    DETERIORATING = "deteriorating"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


class RiskDirection(StrEnum):
    """Direction of recent risk levels."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    UNKNOWN = "unknown"


class AnalysisSource(StrEnum):
    """Which scorer produced an analysis."""

    ML = "ml"
    """External ML analyzer result passed through."""

    HEURISTIC = "heuristic"
    """Keyword-based affect heuristic."""
