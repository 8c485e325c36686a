"""
Trend and Metrics Models

Derived on demand from session history; never stored.
"""

from dataclasses import dataclass

from kindred.domain.enums.trend import EmotionalTrend, RiskDirection


@dataclass(frozen=True)
class EmotionalTrendResult:
    """Direction of the recent emotional history."""

    trend: EmotionalTrend
    confidence: float
    valence_slope: float = 0.0
    arousal_slope: float = 0.0


@dataclass(frozen=True)
class RiskPrediction:
    """
    Short-horizon extrapolation of recent risk levels.

    Attributes:
        current_risk: Most recent risk (0-100)
        predicted_risk: Extrapolated risk (0-100)
        confidence: Confidence in the prediction (0.0-1.0)
        trend: Direction of recent risk
        risk_change: predicted_risk - current_risk
    """

    current_risk: float
    predicted_risk: float
    confidence: float
    trend: RiskDirection
    risk_change: float = 0.0


@dataclass
class ModelMetrics:
    """Running analysis counters for one session."""

    total_analyses: int = 0
    ml_analyses: int = 0
    heuristic_analyses: int = 0
    backend_failures: int = 0
    mean_confidence: float = 0.0
    last_confidence: float = 0.0

    def record(self, confidence: float, from_ml: bool) -> None:
        """Fold one completed analysis into the counters."""
        self.total_analyses += 1
        if from_ml:
            self.ml_analyses += 1
        else:
            self.heuristic_analyses += 1
        self.last_confidence = confidence
        # Incremental mean
        self.mean_confidence += (confidence - self.mean_confidence) / self.total_analyses
