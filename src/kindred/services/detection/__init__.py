"""
Detection Services

Affect estimation and analyzer integration.
"""

from kindred.services.detection.emotional_state_estimator import EmotionalStateEstimator
from kindred.services.detection.ml_analyzer import (
    AnalysisContext,
    AnalysisTimeoutError,
    CrisisAnalyzerError,
    CrisisMLAnalyzer,
    InvalidAnalysisPayloadError,
)
from kindred.services.detection.transformer_analyzer import TransformerCrisisAnalyzer

__all__ = [
    "EmotionalStateEstimator",
    "AnalysisContext",
    "AnalysisTimeoutError",
    "CrisisAnalyzerError",
    "CrisisMLAnalyzer",
    "InvalidAnalysisPayloadError",
    "TransformerCrisisAnalyzer",
]
