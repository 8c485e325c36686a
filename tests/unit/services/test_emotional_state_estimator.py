"""
Unit Tests for Emotional State Estimator

Tests keyword-based VAD estimation and emotion labelling.
"""

import pytest

from kindred.services.detection.emotional_state_estimator import (
    EmotionalStateEstimator,
    label_for,
)


class TestEmotionalStateEstimator:
    """Test suite for EmotionalStateEstimator."""

    @pytest.fixture
    def estimator(self) -> EmotionalStateEstimator:
        return EmotionalStateEstimator()

    def test_empty_text_is_neutral(self, estimator: EmotionalStateEstimator) -> None:
        """Empty input yields the neutral state with zero confidence."""
        state = estimator.estimate("", now_ms=1000)

        assert state.valence == 0.0
        assert state.arousal == 0.5
        assert state.dominance == 0.5
        assert state.confidence == 0.0
        assert state.primary_emotion == "neutral"
        assert state.timestamp == 1000

    def test_emoji_only_text_is_neutral(self, estimator: EmotionalStateEstimator) -> None:
        state = estimator.estimate("😢😭 💔 !!! 🙏", now_ms=1000)

        assert state.valence == 0.0
        assert state.arousal == 0.5
        assert state.dominance == 0.5
        assert state.confidence == 0.0
        assert state.primary_emotion == "neutral"

    def test_hopeless_text(self, estimator: EmotionalStateEstimator) -> None:
        """Hopelessness maps to negative valence and no sense of control."""
        state = estimator.estimate("I feel completely hopeless and see no way out")

        assert state.valence == -1.0
        assert state.arousal == 0.5
        assert state.dominance == 0.0
        assert state.confidence == pytest.approx(0.2)
        assert state.primary_emotion == "despair"

    def test_positive_text(self, estimator: EmotionalStateEstimator) -> None:
        state = estimator.estimate("I am so happy and grateful today")

        assert state.valence == 1.0
        assert state.arousal == 0.5
        assert state.primary_emotion == "content"

    def test_agitated_helpless_text_is_fear(self, estimator: EmotionalStateEstimator) -> None:
        """High arousal, negative valence and low dominance read as fear."""
        state = estimator.estimate("I'm scared, helpless and panicking")

        assert state.valence == -1.0
        assert state.arousal == 1.0
        assert state.dominance == 0.0
        assert state.confidence == pytest.approx(0.3)
        assert state.primary_emotion == "fear"

    def test_unrecognized_text_is_neutral(self, estimator: EmotionalStateEstimator) -> None:
        state = estimator.estimate("the weather report mentioned clouds")

        assert state.valence == 0.0
        assert state.confidence == 0.0
        assert state.primary_emotion == "neutral"

    def test_punctuation_is_ignored(self, estimator: EmotionalStateEstimator) -> None:
        plain = estimator.estimate("hopeless", now_ms=1)
        shouted = estimator.estimate("HOPELESS!!!", now_ms=1)

        assert plain == shouted

    def test_deterministic(self, estimator: EmotionalStateEstimator) -> None:
        """Same text and timestamp always give the same state."""
        text = "I feel tired and alone but my friends make me feel safe"

        assert estimator.estimate(text, now_ms=42) == estimator.estimate(text, now_ms=42)

    def test_confidence_saturates(self, estimator: EmotionalStateEstimator) -> None:
        state = estimator.estimate("sad " * 12)

        assert state.confidence == 1.0

    def test_values_stay_in_range(self, estimator: EmotionalStateEstimator) -> None:
        texts = [
            "panic panic panic now now urgent",
            "calm calm quiet relaxed peaceful",
            "I can handle this, I am strong and confident",
        ]
        for text in texts:
            state = estimator.estimate(text)
            assert -1.0 <= state.valence <= 1.0
            assert 0.0 <= state.arousal <= 1.0
            assert 0.0 <= state.dominance <= 1.0
            assert 0.0 <= state.confidence <= 1.0


class TestLabelFor:
    """Tests for VAD labelling."""

    @pytest.mark.parametrize(
        "valence,arousal,dominance,expected",
        [
            (0.0, 0.5, 0.5, "neutral"),
            (-0.8, 0.9, 0.1, "fear"),
            (-0.8, 0.9, 0.8, "anger"),
            (-0.8, 0.3, 0.1, "despair"),
            (-0.8, 0.3, 0.6, "sadness"),
            (0.8, 0.9, 0.5, "joy"),
            (0.8, 0.3, 0.5, "content"),
        ],
    )
    def test_labels(self, valence: float, arousal: float, dominance: float, expected: str) -> None:
        assert label_for(valence, arousal, dominance) == expected
