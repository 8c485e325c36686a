"""Domain enums package."""

from kindred.domain.enums.alert_severity import AlertSeverity, InterventionType
from kindred.domain.enums.trend import AnalysisSource, EmotionalTrend, RiskDirection

__all__ = [
    "AlertSeverity",
    "InterventionType",
    "AnalysisSource",
    "EmotionalTrend",
    "RiskDirection",
]
