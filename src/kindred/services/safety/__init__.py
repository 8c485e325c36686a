"""
Safety Services

Risk scoring, history, alerting and intervention components.

SAFETY-CRITICAL: Changes here affect when users see crisis
resources. All changes require clinical review.
"""

from kindred.services.safety.crisis_phrases import CrisisPhraseMatcher, CrisisPhraseSignal
from kindred.services.safety.risk_scorer import HeuristicThresholds, RiskScore, RiskScorer
from kindred.services.safety.history_tracker import HistoryTracker
from kindred.services.safety.alert_state_machine import AlertStateMachine, SeverityThresholds
from kindred.services.safety.intervention_recommender import InterventionRecommender
from kindred.services.safety.cultural_adjustment import CulturalAdjuster
from kindred.services.safety.emergency_resources import EmergencyResourceResolver

__all__ = [
    "CrisisPhraseMatcher",
    "CrisisPhraseSignal",
    "HeuristicThresholds",
    "RiskScore",
    "RiskScorer",
    "HistoryTracker",
    "AlertStateMachine",
    "SeverityThresholds",
    "InterventionRecommender",
    "CulturalAdjuster",
    "EmergencyResourceResolver",
]
