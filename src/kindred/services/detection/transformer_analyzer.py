"""
Transformer Crisis Analyzer

Local CrisisMLAnalyzer backed by a HuggingFace emotion
classification pipeline. Emotion probabilities are mapped to a
VAD vector and a 0-100 risk estimate.

Requires the optional `ml` extra (transformers, torch). The
pipeline is built on first use, or injected directly.

CLINICAL_REVIEW_REQUIRED: Emotion-to-risk weights and model
selection must be calibrated against clinical benchmarks.
"""

import asyncio
from collections.abc import Callable
from typing import Any, Optional

from kindred.config.logging_config import get_logger
from kindred.domain.models.ml_analysis import (
    MLAnalysisResult,
    MLEmotionalState,
    RealTimeRisk,
    RecommendedIntervention,
)
from kindred.services.detection.ml_analyzer import (
    AnalysisContext,
    CrisisAnalyzerError,
    CrisisMLAnalyzer,
)

logger = get_logger(__name__)

# Classifier callable: text -> [[{"label": str, "score": float}, ...]]
Classifier = Callable[[str], Any]


class TransformerCrisisAnalyzer(CrisisMLAnalyzer):
    """
    Emotion-model crisis analyzer.

    Usage:
        analyzer = TransformerCrisisAnalyzer()
        session = CrisisDetectionSession(settings, analyzer)
    """

    name = "transformer"

    # Contribution of each emotion's probability to risk (0.0-1.0)
    EMOTION_RISK_WEIGHTS: dict[str, float] = {
        "fear": 0.8,
        "sadness": 0.75,
        "anger": 0.5,
        "disgust": 0.4,
        "surprise": 0.2,
        "neutral": 0.0,
        "joy": 0.0,
        "love": 0.0,
    }

    # (valence -1..1, arousal 0..1, dominance -1..1) per emotion
    EMOTION_VAD: dict[str, tuple[float, float, float]] = {
        "fear": (-0.6, 0.85, -0.6),
        "sadness": (-0.7, 0.3, -0.5),
        "anger": (-0.5, 0.8, 0.4),
        "disgust": (-0.6, 0.6, 0.1),
        "surprise": (0.1, 0.8, -0.1),
        "neutral": (0.0, 0.5, 0.0),
        "joy": (0.8, 0.65, 0.4),
        "love": (0.8, 0.55, 0.2),
    }

    def __init__(
        self,
        model_name: str = "j-hartmann/emotion-english-distilroberta-base",
        device: Optional[str] = None,
        classifier: Optional[Classifier] = None,
    ) -> None:
        """
        Initialize the analyzer.

        Args:
            model_name: HuggingFace model identifier
            device: Torch device (cuda/cpu), auto-detected when None
            classifier: Prebuilt classifier, skips model loading
        """
        self._model_name = model_name
        self._device = device
        self._classifier = classifier

    def is_loaded(self) -> bool:
        """Check if the classifier is ready."""
        return self._classifier is not None

    def load(self) -> None:
        """Build the transformers pipeline."""
        if self._classifier is not None:
            return

        # Deferred so the base install does not need torch
        import torch
        from transformers import pipeline

        device = self._device or ("cuda" if torch.cuda.is_available() else "cpu")
        self._classifier = pipeline(
            "text-classification",
            model=self._model_name,
            top_k=None,
            truncation=True,
            device=device,
        )
        logger.info("Emotion model loaded", model=self._model_name, device=device)

    async def analyze(self, text: str, context: AnalysisContext) -> MLAnalysisResult:
        """
        Classify text and map emotions to a crisis analysis.

        Args:
            text: User-authored text
            context: Session context

        Returns:
            MLAnalysisResult

        Raises:
            CrisisAnalyzerError: If the model fails
        """
        try:
            if not self.is_loaded():
                await asyncio.to_thread(self.load)
            raw = await asyncio.to_thread(self._classifier, text)
        except Exception as e:
            raise CrisisAnalyzerError(
                f"Emotion model failed: {e}",
                analyzer=self.name,
                original_error=e,
            ) from e

        probabilities = self._to_probabilities(raw)
        return self.build_result(probabilities, context)

    @staticmethod
    def _to_probabilities(raw: Any) -> dict[str, float]:
        # Pipelines return a list per input when top_k=None
        scores = raw[0] if raw and isinstance(raw[0], list) else raw
        return {item["label"].lower(): float(item["score"]) for item in scores}

    def build_result(
        self,
        probabilities: dict[str, float],
        context: AnalysisContext,
    ) -> MLAnalysisResult:
        """
        Map an emotion distribution to an MLAnalysisResult.

        Args:
            probabilities: Emotion label to probability
            context: Session context

        Returns:
            MLAnalysisResult with a real-time risk block
        """
        total = sum(probabilities.values()) or 1.0

        risk = 0.0
        valence = arousal = dominance = 0.0
        known_mass = 0.0
        for label, score in probabilities.items():
            weight = score / total
            risk += weight * self.EMOTION_RISK_WEIGHTS.get(label, 0.0)
            if label in self.EMOTION_VAD:
                v, a, d = self.EMOTION_VAD[label]
                valence += weight * v
                arousal += weight * a
                dominance += weight * d
                known_mass += weight

        if known_mass > 0:
            valence /= known_mass
            arousal /= known_mass
            dominance /= known_mass
        else:
            valence, arousal, dominance = 0.0, 0.5, 0.0

        immediate_risk = round(min(100.0, max(0.0, risk * 100)), 1)
        urgency = round(immediate_risk / 10, 1)

        primary = max(probabilities, key=probabilities.get) if probabilities else "neutral"
        confidence = probabilities.get(primary, 0.0) / total if probabilities else 0.0

        return MLAnalysisResult(
            has_crisis_indicators=immediate_risk >= 70,
            ml_confidence=round(confidence, 3),
            risk_factors=[f"emotion:{primary}"] if immediate_risk >= 40 else [],
            emotional_state=MLEmotionalState(
                primary_emotion=primary,
                valence=valence,
                arousal=arousal,
                dominance=dominance,
            ),
            real_time_risk=RealTimeRisk(
                immediate_risk=immediate_risk,
                intervention_urgency=urgency,
                recommended_interventions=self._interventions(immediate_risk),
            ),
            cultural_context=context.cultural_context,
        )

    @staticmethod
    def _interventions(immediate_risk: float) -> list[RecommendedIntervention]:
        interventions = []
        if immediate_risk >= 70:
            interventions.append(RecommendedIntervention(
                priority=9,
                description="Reach out to a crisis line or emergency services now",
            ))
        if immediate_risk >= 40:
            interventions.append(RecommendedIntervention(
                priority=6,
                description="Try a grounding exercise and contact someone you trust",
            ))
        if immediate_risk >= 20:
            interventions.append(RecommendedIntervention(
                priority=3,
                description="Consider talking with a mental health professional",
            ))
        return interventions
