"""
Intervention Recommender

Rule-based intervention suggestions for an analysis, plus
personalization of analyzer-provided interventions.

SAFETY-CRITICAL: The crisis-line rule must always fire at high
risk. Rules are evaluated in a fixed order and all matching rules
contribute.

ARCHITECTURE: Recommendations suggest support options only. They
never instruct specific medical actions.
"""

from typing import Optional

from kindred.domain.enums.alert_severity import InterventionType
from kindred.domain.models.crisis_alert import InterventionRecommendation
from kindred.domain.models.crisis_analysis import CrisisAnalysisResult
from kindred.services.safety.emergency_resources import EmergencyResourceResolver

# Rule thresholds on the canonical 0-100 scale
CRISIS_LINE_RISK = 70.0
PROFESSIONAL_SUPPORT_RISK = 40.0
NEGATIVE_VALENCE = -0.5
HIGH_AROUSAL = 0.8

# Personalized interventions returned at most
MAX_PERSONALIZED = 5

TIMEFRAMES: dict[InterventionType, str] = {
    InterventionType.IMMEDIATE: "Immediate",
    InterventionType.URGENT: "Within 2 hours",
    InterventionType.SUPPORTIVE: "Within 24 hours",
    InterventionType.MONITORING: "Within week",
    InterventionType.RESOURCES: "Within week",
}


class InterventionRecommender:
    """
    Maps an analysis to intervention recommendations.

    Usage:
        recommender = InterventionRecommender()
        recommendations = recommender.recommend(result)
    """

    def __init__(
        self,
        resolver: Optional[EmergencyResourceResolver] = None,
        country_code: str = "US",
    ) -> None:
        """
        Initialize recommender.

        Args:
            resolver: Source of crisis hotlines
            country_code: Country for hotline resources
        """
        self._resolver = resolver or EmergencyResourceResolver()
        self._country_code = country_code

    def recommend(
        self,
        result: Optional[CrisisAnalysisResult],
        cultural_considerations: Optional[list[str]] = None,
    ) -> list[InterventionRecommendation]:
        """
        Recommend interventions for an analysis.

        Rules, in evaluation order:
        1. Risk >= 70: contact a crisis line (immediate)
        2. Valence < -0.5: short-term mood support (supportive)
        3. Arousal > 0.8: calming technique (urgent)
        4. Risk >= 40: professional support (monitoring)

        Args:
            result: Analysis to recommend for
            cultural_considerations: Delivery notes attached to each recommendation

        Returns:
            Recommendations in rule order, empty when result is None
        """
        if result is None:
            return []

        considerations = list(cultural_considerations or [])
        state = result.emotional_state
        recommendations = []

        if result.risk_level >= CRISIS_LINE_RISK:
            recommendations.append(InterventionRecommendation(
                type=InterventionType.IMMEDIATE,
                priority=10,
                description="Contact a crisis line to talk with a trained counselor now",
                action_items=[
                    "Call or text a crisis line",
                    "Tell someone you trust how you are feeling",
                    "Remove anything you could use to hurt yourself",
                ],
                timeframe=TIMEFRAMES[InterventionType.IMMEDIATE],
                resources=self._resolver.hotline_resources(self._country_code),
                estimated_effectiveness=0.9,
                cultural_considerations=considerations,
            ))

        if state.valence < NEGATIVE_VALENCE:
            recommendations.append(InterventionRecommendation(
                type=InterventionType.SUPPORTIVE,
                priority=6,
                description="Short-term mood support",
                action_items=[
                    "Do one small activity you usually enjoy",
                    "Step outside or move your body for a few minutes",
                    "Write down one thing that went okay today",
                ],
                timeframe=TIMEFRAMES[InterventionType.SUPPORTIVE],
                estimated_effectiveness=0.6,
                cultural_considerations=considerations,
            ))

        if state.arousal > HIGH_AROUSAL:
            recommendations.append(InterventionRecommendation(
                type=InterventionType.URGENT,
                priority=8,
                description="Calming technique to bring your body back down",
                action_items=[
                    "Breathe in for 4 counts, hold for 4, out for 6",
                    "Name 5 things you can see and 4 you can hear",
                    "Hold something cold or splash water on your face",
                ],
                timeframe=TIMEFRAMES[InterventionType.URGENT],
                estimated_effectiveness=0.7,
                cultural_considerations=considerations,
            ))

        if result.risk_level >= PROFESSIONAL_SUPPORT_RISK:
            recommendations.append(InterventionRecommendation(
                type=InterventionType.MONITORING,
                priority=4,
                description="Longer-term support from a mental health professional",
                action_items=[
                    "Book an appointment with a counselor or doctor",
                    "Join a peer support group",
                ],
                timeframe=TIMEFRAMES[InterventionType.MONITORING],
                estimated_effectiveness=0.75,
                cultural_considerations=considerations,
            ))

        return recommendations

    @staticmethod
    def personalize(
        result: Optional[CrisisAnalysisResult],
        cultural_considerations: Optional[list[str]] = None,
    ) -> list[InterventionRecommendation]:
        """
        Convert analyzer-provided interventions into recommendations.

        Args:
            result: Latest analysis
            cultural_considerations: Delivery notes attached to each item

        Returns:
            Up to five recommendations, highest priority first
        """
        if result is None or not result.has_risk_data or not result.recommended_interventions:
            return []

        considerations = list(cultural_considerations or [])
        if result.cultural_context:
            considerations.append(f"Adapted for {result.cultural_context} cultural context")

        personalized = []
        for item in result.recommended_interventions:
            kind = InterventionType.from_priority(item.priority)
            personalized.append(InterventionRecommendation(
                type=kind,
                priority=item.priority,
                description=item.description,
                action_items=[item.description],
                timeframe=TIMEFRAMES[kind],
                estimated_effectiveness=min(1.0, item.priority / 10),
                cultural_considerations=list(considerations),
            ))

        personalized.sort(key=lambda r: r.priority, reverse=True)
        return personalized[:MAX_PERSONALIZED]
