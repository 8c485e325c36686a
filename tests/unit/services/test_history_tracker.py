"""
Unit Tests for History Tracker

Tests bounded buffers, emotional trend classification and risk
prediction.
"""

import pytest

from kindred.domain.enums.trend import EmotionalTrend, RiskDirection
from kindred.domain.models.emotional_state import EmotionalState
from kindred.services.safety.history_tracker import (
    HistoryTracker,
    emotional_trend,
    predict_risk,
)


def _states(valences: list[float], arousal: float = 0.5) -> list[EmotionalState]:
    return [EmotionalState(valence=v, arousal=arousal) for v in valences]


class TestHistoryBuffers:
    """Tests for FIFO-bounded storage."""

    def test_oldest_entries_dropped_first(self) -> None:
        tracker = HistoryTracker(emotional_history_limit=3, risk_trend_window=2)

        for i in range(5):
            tracker.append_emotional_state(EmotionalState(timestamp=i))
            tracker.append_risk_level(i * 10)

        assert [s.timestamp for s in tracker.emotional_history] == [2, 3, 4]
        assert tracker.risk_trend == [30.0, 40.0]

    def test_properties_return_copies(self) -> None:
        tracker = HistoryTracker()
        tracker.append_risk_level(50)

        tracker.risk_trend.append(99)

        assert tracker.risk_trend == [50.0]

    def test_clear(self) -> None:
        tracker = HistoryTracker()
        tracker.append_emotional_state(EmotionalState())
        tracker.append_risk_level(10)

        tracker.clear()

        assert tracker.emotional_history == []
        assert tracker.risk_trend == []
        assert tracker.analysis_history == []


class TestEmotionalTrend:
    """Tests for emotional trend classification."""

    def test_insufficient_data(self) -> None:
        result = emotional_trend(_states([-0.5, 0.5]))

        assert result.trend == EmotionalTrend.INSUFFICIENT_DATA
        assert result.confidence == 0.0

    def test_improving(self) -> None:
        result = emotional_trend(_states([-0.8, -0.4, 0.0]))

        assert result.trend == EmotionalTrend.IMPROVING
        assert result.confidence == pytest.approx(0.3)
        assert result.valence_slope == pytest.approx(0.8 / 3)

    def test_deteriorating_on_valence(self) -> None:
        result = emotional_trend(_states([0.5, 0.0, -0.5]))

        assert result.trend == EmotionalTrend.DETERIORATING

    def test_deteriorating_on_arousal(self) -> None:
        states = [
            EmotionalState(valence=0.0, arousal=0.0),
            EmotionalState(valence=0.0, arousal=0.5),
            EmotionalState(valence=0.0, arousal=1.0),
        ]

        assert emotional_trend(states).trend == EmotionalTrend.DETERIORATING

    def test_stable(self) -> None:
        assert emotional_trend(_states([-0.2, -0.2, -0.2])).trend == EmotionalTrend.STABLE

    def test_tracker_uses_last_ten_states(self) -> None:
        tracker = HistoryTracker()
        # Falling then flat: the last ten are flat
        for v in [0.9, 0.6, 0.3, 0.0, -0.3] + [-0.5] * 10:
            tracker.append_emotional_state(EmotionalState(valence=v))

        result = tracker.get_emotional_trend()

        assert result.trend == EmotionalTrend.STABLE
        assert result.confidence == 1.0


class TestRiskPrediction:
    """Tests for short-horizon risk extrapolation."""

    def test_insufficient_data(self) -> None:
        result = predict_risk([40.0, 60.0])

        assert result.trend == RiskDirection.UNKNOWN
        assert result.current_risk == 60.0
        assert result.predicted_risk == 0.0
        assert result.confidence == 0.0

    def test_empty(self) -> None:
        result = predict_risk([])

        assert result.current_risk == 0.0
        assert result.trend == RiskDirection.UNKNOWN

    def test_increasing_is_clamped(self) -> None:
        result = predict_risk([10, 20, 30, 40, 50])

        assert result.trend == RiskDirection.INCREASING
        assert result.current_risk == 50
        assert result.predicted_risk == 100.0
        assert result.risk_change == pytest.approx(50.0)
        assert result.confidence == pytest.approx(1.0)

    def test_decreasing(self) -> None:
        result = predict_risk([80, 60, 40])

        assert result.trend == RiskDirection.DECREASING
        assert result.predicted_risk == 0.0
        assert result.confidence == pytest.approx(0.6)

    def test_stable(self) -> None:
        result = predict_risk([50, 50, 50])

        assert result.trend == RiskDirection.STABLE
        assert result.predicted_risk == 50
        assert result.confidence == pytest.approx(0.6)

    def test_only_last_five_values_count(self) -> None:
        result = predict_risk([90, 90, 90, 10, 10, 10, 10, 10])

        assert result.trend == RiskDirection.STABLE
        assert result.predicted_risk == 10

    def test_inconsistent_changes_lower_confidence(self) -> None:
        """Two of three deltas agree with the slope."""
        result = predict_risk([10, 30, 20, 40])

        assert result.trend == RiskDirection.INCREASING
        assert result.confidence == pytest.approx(0.8 * 2 / 3)

    def test_prediction_stays_in_range(self) -> None:
        for levels in ([0, 0, 100], [100, 100, 0], [5, 95, 5, 95, 5]):
            result = predict_risk(levels)
            assert 0.0 <= result.predicted_risk <= 100.0
            assert 0.0 <= result.confidence <= 1.0
