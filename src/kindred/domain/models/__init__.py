"""Domain models package."""

from kindred.domain.models.emotional_state import EmotionalState
from kindred.domain.models.ml_analysis import (
    BiasAdjustment,
    MLAnalysisResult,
    MLEmotionalState,
    RealTimeRisk,
    RecommendedIntervention,
)
from kindred.domain.models.crisis_analysis import (
    CrisisAnalysisResult,
    CulturallyAdjustedRisk,
)
from kindred.domain.models.crisis_alert import CrisisAlert, InterventionRecommendation
from kindred.domain.models.trends import EmotionalTrendResult, ModelMetrics, RiskPrediction

__all__ = [
    # Affect
    "EmotionalState",
    # Analyzer payload
    "BiasAdjustment",
    "MLAnalysisResult",
    "MLEmotionalState",
    "RealTimeRisk",
    "RecommendedIntervention",
    # Analysis
    "CrisisAnalysisResult",
    "CulturallyAdjustedRisk",
    # Alerting
    "CrisisAlert",
    "InterventionRecommendation",
    # Trends
    "EmotionalTrendResult",
    "ModelMetrics",
    "RiskPrediction",
]
