"""
Unit Tests for Transformer Crisis Analyzer

Uses an injected classifier so no model is downloaded.
"""

import pytest

from kindred.services.detection.ml_analyzer import AnalysisContext, CrisisAnalyzerError
from kindred.services.detection.transformer_analyzer import TransformerCrisisAnalyzer


def _classifier(scores: dict[str, float]):
    def classify(text: str):
        return [[{"label": label, "score": score} for label, score in scores.items()]]
    return classify


class TestTransformerCrisisAnalyzer:
    """Test suite for TransformerCrisisAnalyzer."""

    @pytest.mark.asyncio
    async def test_fearful_text_is_high_risk(self) -> None:
        analyzer = TransformerCrisisAnalyzer(classifier=_classifier({"fear": 0.9, "joy": 0.1}))

        result = await analyzer.analyze("text", AnalysisContext(cultural_context="Arabic"))

        assert result.real_time_risk.immediate_risk == pytest.approx(72.0)
        assert result.real_time_risk.intervention_urgency == pytest.approx(7.2)
        assert result.has_crisis_indicators
        assert result.ml_confidence == pytest.approx(0.9)
        assert result.emotional_state.primary_emotion == "fear"
        assert result.emotional_state.valence == pytest.approx(-0.46)
        assert result.risk_factors == ["emotion:fear"]
        assert result.cultural_context == "Arabic"
        assert [i.priority for i in result.real_time_risk.recommended_interventions] == [9, 6, 3]

    @pytest.mark.asyncio
    async def test_joyful_text_has_no_risk(self) -> None:
        analyzer = TransformerCrisisAnalyzer(classifier=_classifier({"joy": 0.95, "neutral": 0.05}))

        result = await analyzer.analyze("text", AnalysisContext())

        assert result.real_time_risk.immediate_risk == 0.0
        assert not result.has_crisis_indicators
        assert result.real_time_risk.recommended_interventions == []
        assert result.risk_factors == []

    @pytest.mark.asyncio
    async def test_classifier_failure_is_wrapped(self) -> None:
        def broken(text: str):
            raise RuntimeError("CUDA out of memory")

        analyzer = TransformerCrisisAnalyzer(classifier=broken)

        with pytest.raises(CrisisAnalyzerError) as exc_info:
            await analyzer.analyze("text", AnalysisContext())

        assert exc_info.value.analyzer == "transformer"
        assert isinstance(exc_info.value.original_error, RuntimeError)

    def test_flat_classifier_output(self) -> None:
        probabilities = TransformerCrisisAnalyzer._to_probabilities(
            [{"label": "SADNESS", "score": 0.7}, {"label": "neutral", "score": 0.3}]
        )

        assert probabilities == {"sadness": 0.7, "neutral": 0.3}

    def test_empty_distribution_is_neutral(self) -> None:
        result = TransformerCrisisAnalyzer(classifier=_classifier({})).build_result({}, AnalysisContext())

        assert result.emotional_state.primary_emotion == "neutral"
        assert result.real_time_risk.immediate_risk == 0.0

    def test_injected_classifier_counts_as_loaded(self) -> None:
        assert TransformerCrisisAnalyzer(classifier=_classifier({})).is_loaded()
        assert not TransformerCrisisAnalyzer().is_loaded()
