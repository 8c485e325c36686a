"""
History and Trend Tracker

Bounded in-memory buffers of emotional states, risk levels and
analyses for one session, with trend and short-horizon risk
prediction derived on demand.

PRIVACY: Buffers hold derived scores only, never user text, and
are discarded with the session.
"""

from collections import deque
from collections.abc import Sequence

from kindred.domain.enums.trend import EmotionalTrend, RiskDirection
from kindred.domain.models.crisis_analysis import CrisisAnalysisResult
from kindred.domain.models.emotional_state import EmotionalState
from kindred.domain.models.trends import EmotionalTrendResult, RiskPrediction


# Fewer samples than this never produce a trend
MIN_TREND_SAMPLES = 3

# Emotional trend looks at this many recent states
EMOTIONAL_TREND_WINDOW = 10

# Slope thresholds for emotional trend classification
VALENCE_SLOPE_THRESHOLD = 0.1
AROUSAL_IMPROVING_MAX = 0.1
AROUSAL_DETERIORATING_MIN = 0.2

# Risk prediction looks at this many recent values
RISK_PREDICTION_WINDOW = 5

# Steps extrapolated ahead
PREDICTION_HORIZON = 24

# Risk slope per step below which the direction is "stable"
RISK_SLOPE_THRESHOLD = 2.0


class HistoryTracker:
    """
    FIFO-bounded session history.

    Each buffer drops its oldest entry first and never exceeds its cap.
    Properties return copies.

    Usage:
        tracker = HistoryTracker(emotional_history_limit=50)
        tracker.append_emotional_state(state)
        trend = tracker.get_emotional_trend()
    """

    def __init__(
        self,
        emotional_history_limit: int = 50,
        risk_trend_window: int = 10,
        max_history_size: int = 100,
    ) -> None:
        """
        Initialize tracker.

        Args:
            emotional_history_limit: Cap on emotional states
            risk_trend_window: Cap on risk levels
            max_history_size: Cap on analyses
        """
        self._emotional_history: deque[EmotionalState] = deque(maxlen=emotional_history_limit)
        self._risk_trend: deque[float] = deque(maxlen=risk_trend_window)
        self._analysis_history: deque[CrisisAnalysisResult] = deque(maxlen=max_history_size)

    def append_emotional_state(self, state: EmotionalState) -> None:
        self._emotional_history.append(state)

    def append_risk_level(self, risk_level: float) -> None:
        self._risk_trend.append(float(risk_level))

    def append_analysis(self, result: CrisisAnalysisResult) -> None:
        self._analysis_history.append(result)

    def clear(self) -> None:
        """Empty all buffers."""
        self._emotional_history.clear()
        self._risk_trend.clear()
        self._analysis_history.clear()

    @property
    def emotional_history(self) -> list[EmotionalState]:
        return list(self._emotional_history)

    @property
    def risk_trend(self) -> list[float]:
        return list(self._risk_trend)

    @property
    def analysis_history(self) -> list[CrisisAnalysisResult]:
        return list(self._analysis_history)

    def get_emotional_trend(self) -> EmotionalTrendResult:
        """Trend of the most recent emotional states."""
        return emotional_trend(list(self._emotional_history)[-EMOTIONAL_TREND_WINDOW:])

    def get_risk_prediction(self) -> RiskPrediction:
        """Extrapolated risk from the most recent risk levels."""
        return predict_risk(list(self._risk_trend))


def emotional_trend(states: Sequence[EmotionalState]) -> EmotionalTrendResult:
    """
    Classify the direction of a window of emotional states.

    Args:
        states: States in insertion order

    Returns:
        EmotionalTrendResult; insufficient_data with zero confidence
        below the minimum sample count
    """
    n = len(states)
    if n < MIN_TREND_SAMPLES:
        return EmotionalTrendResult(trend=EmotionalTrend.INSUFFICIENT_DATA, confidence=0.0)

    first, last = states[0], states[-1]
    valence_slope = (last.valence - first.valence) / n
    arousal_slope = (last.arousal - first.arousal) / n

    if valence_slope > VALENCE_SLOPE_THRESHOLD and arousal_slope < AROUSAL_IMPROVING_MAX:
        trend = EmotionalTrend.IMPROVING
    elif valence_slope < -VALENCE_SLOPE_THRESHOLD or arousal_slope > AROUSAL_DETERIORATING_MIN:
        trend = EmotionalTrend.DETERIORATING
    else:
        trend = EmotionalTrend.STABLE

    return EmotionalTrendResult(
        trend=trend,
        confidence=min(1.0, n / EMOTIONAL_TREND_WINDOW),
        valence_slope=valence_slope,
        arousal_slope=arousal_slope,
    )


def predict_risk(risk_levels: Sequence[float]) -> RiskPrediction:
    """
    Extrapolate risk a fixed horizon ahead.

    Pure function of the window: the last five values decide the
    slope, and confidence scales with sample count and with how
    consistently consecutive changes agree with the slope.

    Args:
        risk_levels: Canonical risk levels in insertion order

    Returns:
        RiskPrediction; unknown with zero prediction below the
        minimum sample count
    """
    if len(risk_levels) < MIN_TREND_SAMPLES:
        current = float(risk_levels[-1]) if risk_levels else 0.0
        return RiskPrediction(
            current_risk=current,
            predicted_risk=0.0,
            confidence=0.0,
            trend=RiskDirection.UNKNOWN,
        )

    window = list(risk_levels)[-RISK_PREDICTION_WINDOW:]
    n = len(window)
    current = window[-1]
    slope = (current - window[0]) / n
    predicted = max(0.0, min(100.0, current + slope * PREDICTION_HORIZON))

    if slope > RISK_SLOPE_THRESHOLD:
        trend = RiskDirection.INCREASING
    elif slope < -RISK_SLOPE_THRESHOLD:
        trend = RiskDirection.DECREASING
    else:
        trend = RiskDirection.STABLE

    confidence = min(1.0, n / RISK_PREDICTION_WINDOW) * _consistency(window, slope)

    return RiskPrediction(
        current_risk=current,
        predicted_risk=predicted,
        confidence=confidence,
        trend=trend,
        risk_change=predicted - current,
    )


def _consistency(window: Sequence[float], slope: float) -> float:
    """Fraction of consecutive deltas agreeing in sign with the slope."""
    if slope == 0:
        return 1.0
    deltas = [b - a for a, b in zip(window, window[1:])]
    if not deltas:
        return 1.0
    agreeing = sum(1 for d in deltas if (d > 0) == (slope > 0) and d != 0)
    return agreeing / len(deltas)
