"""
Unit Tests for Intervention Recommender

Tests rule-based recommendations and personalization of
analyzer-provided interventions.
"""

import pytest

from kindred.domain.enums.alert_severity import InterventionType
from kindred.domain.models.crisis_analysis import CrisisAnalysisResult
from kindred.domain.models.emotional_state import EmotionalState
from kindred.domain.models.ml_analysis import RecommendedIntervention
from kindred.services.safety.intervention_recommender import InterventionRecommender


def _result(risk_level: float, valence: float = 0.0, arousal: float = 0.5, **kwargs) -> CrisisAnalysisResult:
    return CrisisAnalysisResult(
        risk_level=risk_level,
        confidence=0.8,
        emotional_state=EmotionalState(valence=valence, arousal=arousal),
        **kwargs,
    )


class TestRecommend:
    """Tests for rule evaluation."""

    @pytest.fixture
    def recommender(self) -> InterventionRecommender:
        return InterventionRecommender(country_code="US")

    def test_high_risk_despair(self, recommender: InterventionRecommender) -> None:
        """Crisis line, mood support and professional help, in rule order."""
        recommendations = recommender.recommend(_result(70.0, valence=-1.0))

        assert [r.type for r in recommendations] == [
            InterventionType.IMMEDIATE,
            InterventionType.SUPPORTIVE,
            InterventionType.MONITORING,
        ]
        assert [r.priority for r in recommendations] == [10, 6, 4]

    def test_crisis_line_lists_hotlines(self, recommender: InterventionRecommender) -> None:
        crisis_line = recommender.recommend(_result(90.0))[0]

        assert crisis_line.timeframe == "Immediate"
        assert "988 Suicide & Crisis Lifeline: 988 (24/7)" in crisis_line.resources

    def test_agitation_only(self, recommender: InterventionRecommender) -> None:
        recommendations = recommender.recommend(_result(30.0, arousal=0.9))

        assert len(recommendations) == 1
        assert recommendations[0].type == InterventionType.URGENT
        assert recommendations[0].timeframe == "Within 2 hours"

    def test_calm_low_risk_has_no_recommendations(self, recommender: InterventionRecommender) -> None:
        assert recommender.recommend(_result(10.0)) == []

    def test_no_result(self, recommender: InterventionRecommender) -> None:
        assert recommender.recommend(None) == []

    def test_cultural_considerations_attached(self, recommender: InterventionRecommender) -> None:
        notes = ["Use non-stigmatizing language and emphasize confidentiality"]

        recommendations = recommender.recommend(_result(75.0), notes)

        assert all(r.cultural_considerations == notes for r in recommendations)


class TestPersonalize:
    """Tests for analyzer-provided intervention personalization."""

    def test_sorted_by_priority(self) -> None:
        result = _result(
            60.0,
            cultural_context="Arabic",
            recommended_interventions=[
                RecommendedIntervention(priority=3, description="Journal"),
                RecommendedIntervention(priority=9, description="Call a crisis line"),
                RecommendedIntervention(priority=6, description="Grounding"),
            ],
        )

        personalized = InterventionRecommender.personalize(result)

        assert [p.priority for p in personalized] == [9, 6, 3]
        assert [p.type for p in personalized] == [
            InterventionType.IMMEDIATE,
            InterventionType.URGENT,
            InterventionType.MONITORING,
        ]
        assert "Adapted for Arabic cultural context" in personalized[0].cultural_considerations

    def test_capped_at_five(self) -> None:
        result = _result(
            60.0,
            recommended_interventions=[
                RecommendedIntervention(priority=p, description=f"Step {p}") for p in range(8)
            ],
        )

        personalized = InterventionRecommender.personalize(result)

        assert len(personalized) == 5
        assert personalized[0].priority == 7

    def test_empty_without_risk_data(self) -> None:
        result = _result(
            0.0,
            has_risk_data=False,
            recommended_interventions=[RecommendedIntervention(priority=9, description="Call")],
        )

        assert InterventionRecommender.personalize(result) == []

    def test_empty_without_analysis(self) -> None:
        assert InterventionRecommender.personalize(None) == []
