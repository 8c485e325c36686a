"""
Risk Scorer

Turns an emotional state, and optionally an analyzer payload, into
a crisis analysis on the canonical 0-100 risk scale.

SAFETY-CRITICAL: Thresholds below decide immediate-action and
escalation flags. All scoring logic requires clinical validation.

ARCHITECTURE: The scorer is a pure function of its inputs. Analyzer
output is passed through unchanged; the heuristic runs only when
no analyzer payload is supplied. Crisis phrases in the raw text
add risk factors and crisis indicators on either path, never risk.
"""

from dataclasses import dataclass, field
from typing import Optional

from kindred.config.logging_config import get_logger
from kindred.domain.enums.trend import AnalysisSource
from kindred.domain.models.crisis_analysis import CrisisAnalysisResult
from kindred.domain.models.emotional_state import EmotionalState
from kindred.domain.models.ml_analysis import MLAnalysisResult
from kindred.services.safety.crisis_phrases import CrisisPhraseMatcher

logger = get_logger(__name__)

# Heuristic formula yields 0-10; canonical scale is 0-100
HEURISTIC_SCALE = 10.0


@dataclass
class HeuristicThresholds:
    """
    Heuristic thresholds on the raw 0-10 scale.

    CLINICAL_VALIDATION_REQUIRED: Values must be reviewed
    before production use.
    """

    valence_weight: float = 5.0
    high_arousal: float = 0.8
    high_arousal_points: float = 3.0
    low_dominance: float = 0.2
    low_dominance_points: float = 2.0
    immediate_action: float = 7.0
    escalation_required: float = 8.0

    # Analyzer urgency (0-10) thresholds when the payload has no explicit flags
    urgency_immediate_action: float = 7.0
    urgency_escalation_required: float = 8.0


@dataclass
class RiskScore:
    """
    Scoring outcome before it is wrapped into an analysis.

    Attributes:
        risk_level: Canonical risk (0-100)
        confidence: Confidence (0.0-1.0)
        risk_factors: Contributing factor names
        immediate_action: Immediate action flag
        escalation_required: Escalation flag
        has_crisis_indicators: Crisis indicators present
        source: Which scorer produced the score
        has_risk_data: False when an analyzer payload had no risk block
    """

    risk_level: float
    confidence: float
    risk_factors: list[str] = field(default_factory=list)
    immediate_action: bool = False
    escalation_required: bool = False
    has_crisis_indicators: bool = False
    source: AnalysisSource = AnalysisSource.HEURISTIC
    has_risk_data: bool = True


class RiskScorer:
    """
    Canonical risk scorer.

    Usage:
        scorer = RiskScorer()
        result = scorer.analyze(state)               # heuristic
        result = scorer.analyze(state, ml_payload)   # analyzer pass-through
        result = scorer.analyze(state, text=text)    # plus crisis phrases
    """

    def __init__(
        self,
        thresholds: Optional[HeuristicThresholds] = None,
        confidence_threshold: float = 0.5,
        phrase_matcher: Optional[CrisisPhraseMatcher] = None,
    ) -> None:
        """
        Initialize scorer.

        Args:
            thresholds: Heuristic thresholds
            confidence_threshold: Results below this are tagged "low_confidence"
            phrase_matcher: Crisis phrase matcher for raw text
        """
        self._thresholds = thresholds or HeuristicThresholds()
        self._confidence_threshold = confidence_threshold
        self._phrase_matcher = phrase_matcher or CrisisPhraseMatcher()

    @property
    def confidence_threshold(self) -> float:
        return self._confidence_threshold

    def score(
        self,
        state: EmotionalState,
        ml_result: Optional[MLAnalysisResult] = None,
        text: Optional[str] = None,
    ) -> RiskScore:
        """
        Score an emotional state.

        Args:
            state: Emotional state of the text
            ml_result: Validated analyzer payload, if any
            text: Raw text checked for crisis phrases

        Returns:
            RiskScore on the canonical scale
        """
        if ml_result is not None:
            score = self._score_ml(ml_result)
        else:
            score = self._score_heuristic(state)

        if text:
            self._apply_phrases(score, text)

        if score.confidence < self._confidence_threshold:
            score.risk_factors.append("low_confidence")
        return score

    def _apply_phrases(self, score: RiskScore, text: str) -> None:
        signals = self._phrase_matcher.match(text)
        for signal in signals:
            if signal.signal_name not in score.risk_factors:
                score.risk_factors.append(signal.signal_name)
        if self._phrase_matcher.indicates_crisis(signals):
            score.has_crisis_indicators = True

    def raw_heuristic(self, state: EmotionalState) -> float:
        """
        Raw heuristic risk on the 0-10 scale.

        Args:
            state: Emotional state

        Returns:
            clamp(0, 10, |valence|*5 + arousal bonus + dominance bonus)
        """
        t = self._thresholds
        raw = abs(state.valence) * t.valence_weight
        if state.arousal > t.high_arousal:
            raw += t.high_arousal_points
        if state.dominance < t.low_dominance:
            raw += t.low_dominance_points
        return max(0.0, min(10.0, raw))

    def _score_heuristic(self, state: EmotionalState) -> RiskScore:
        t = self._thresholds
        raw = self.raw_heuristic(state)

        factors = []
        if state.valence < 0:
            factors.append("negative_valence")
        elif state.valence > 0:
            factors.append("positive_valence_intensity")
        if state.arousal > t.high_arousal:
            factors.append("high_arousal")
        if state.dominance < t.low_dominance:
            factors.append("low_dominance")

        immediate_action = raw >= t.immediate_action
        return RiskScore(
            risk_level=round(raw * HEURISTIC_SCALE, 2),
            confidence=state.confidence,
            risk_factors=factors,
            immediate_action=immediate_action,
            escalation_required=raw >= t.escalation_required,
            has_crisis_indicators=immediate_action,
            source=AnalysisSource.HEURISTIC,
        )

    def _score_ml(self, ml_result: MLAnalysisResult) -> RiskScore:
        t = self._thresholds
        real_time = ml_result.real_time_risk

        if real_time is None:
            logger.warning("Analyzer payload missing real-time risk, treating as no risk data")
            return RiskScore(
                risk_level=0.0,
                confidence=ml_result.effective_confidence,
                risk_factors=list(ml_result.risk_factors),
                immediate_action=bool(ml_result.immediate_action),
                escalation_required=bool(ml_result.escalation_required),
                has_crisis_indicators=ml_result.has_crisis_indicators,
                source=AnalysisSource.ML,
                has_risk_data=False,
            )

        urgency = real_time.intervention_urgency
        immediate_action = (
            ml_result.immediate_action
            if ml_result.immediate_action is not None
            else urgency >= t.urgency_immediate_action
        )
        escalation_required = (
            ml_result.escalation_required
            if ml_result.escalation_required is not None
            else urgency >= t.urgency_escalation_required
        )

        return RiskScore(
            risk_level=real_time.immediate_risk,
            confidence=ml_result.effective_confidence,
            risk_factors=list(ml_result.risk_factors),
            immediate_action=immediate_action,
            escalation_required=escalation_required,
            has_crisis_indicators=ml_result.has_crisis_indicators,
            source=AnalysisSource.ML,
        )

    def analyze(
        self,
        state: EmotionalState,
        ml_result: Optional[MLAnalysisResult] = None,
        text: Optional[str] = None,
    ) -> CrisisAnalysisResult:
        """
        Score and wrap into a full analysis result.

        Args:
            state: Heuristic emotional state of the text
            ml_result: Validated analyzer payload, if any
            text: Raw text checked for crisis phrases

        Returns:
            CrisisAnalysisResult
        """
        score = self.score(state, ml_result, text)

        if ml_result is None:
            return CrisisAnalysisResult(
                risk_level=score.risk_level,
                confidence=score.confidence,
                emotional_state=state,
                risk_factors=score.risk_factors,
                immediate_action=score.immediate_action,
                escalation_required=score.escalation_required,
                has_crisis_indicators=score.has_crisis_indicators,
                source=score.source,
            )

        real_time = ml_result.real_time_risk
        recommended = list(real_time.recommended_interventions) if real_time else []
        return CrisisAnalysisResult(
            risk_level=score.risk_level,
            confidence=score.confidence,
            emotional_state=self._ml_emotional_state(ml_result, state),
            risk_factors=score.risk_factors,
            immediate_action=score.immediate_action,
            escalation_required=score.escalation_required,
            has_crisis_indicators=score.has_crisis_indicators,
            source=score.source,
            has_risk_data=score.has_risk_data,
            intervention_recommendations=[i.description for i in recommended],
            recommended_interventions=recommended,
            bias_adjustments=list(ml_result.bias_adjustments),
            cultural_context=ml_result.cultural_context,
            intervention_urgency=real_time.intervention_urgency if real_time else 0.0,
        )

    @staticmethod
    def _ml_emotional_state(
        ml_result: MLAnalysisResult,
        fallback: EmotionalState,
    ) -> EmotionalState:
        """Analyzer affect, with dominance rescaled from -1..1 to 0..1."""
        reported = ml_result.emotional_state
        if reported is None:
            return fallback
        return EmotionalState(
            valence=reported.valence,
            arousal=reported.arousal,
            dominance=(reported.dominance + 1) / 2,
            timestamp=reported.timestamp if reported.timestamp is not None else fallback.timestamp,
            confidence=ml_result.effective_confidence,
            primary_emotion=reported.primary_emotion,
        )
