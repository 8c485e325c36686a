"""
Crisis Analysis Domain Models

The normalized result of analyzing one piece of text, whichever
scorer produced it.

SAFETY-CRITICAL: risk_level is always on the canonical 0-100
scale. Consumers must never rescale it themselves.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from kindred.domain.enums.trend import AnalysisSource
from kindred.domain.models.emotional_state import EmotionalState
from kindred.domain.models.ml_analysis import BiasAdjustment, RecommendedIntervention


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CulturallyAdjustedRisk:
    """
    Risk after cultural bias correction.

    Informational only: alert severity is classified from the
    unadjusted risk.

    Attributes:
        original_risk: Canonical risk before adjustment
        adjusted_risk: Risk after bias adjustments, reduced only when any applied
        adjustments: Adjustments that were applied
        cultural_confidence: Confidence in the cultural reading (>= 0.6)
        region: Cultural region the profile was taken from
    """

    original_risk: float
    adjusted_risk: float
    adjustments: list[BiasAdjustment] = field(default_factory=list)
    cultural_confidence: float = 0.6
    region: str = "Western"

    def to_dict(self) -> dict:
        return {
            "original_risk": self.original_risk,
            "adjusted_risk": self.adjusted_risk,
            "adjustments": [a.model_dump() for a in self.adjustments],
            "cultural_confidence": self.cultural_confidence,
            "region": self.region,
        }


@dataclass
class CrisisAnalysisResult:
    """
    Normalized crisis analysis for one text.

    Attributes:
        risk_level: Canonical risk (0-100)
        confidence: Confidence in the analysis (0.0-1.0)
        emotional_state: Affect snapshot for the text
        risk_factors: Names of contributing factors
        immediate_action: Immediate action is warranted
        escalation_required: Human escalation is warranted
        has_crisis_indicators: Scorer saw crisis indicators
        source: Which scorer produced the result
        has_risk_data: False when an ML payload carried no risk block
        intervention_recommendations: Free-text suggestions
        recommended_interventions: Analyzer-provided interventions with priorities
        bias_adjustments: Analyzer- or adjuster-supplied bias corrections
        cultural_context: Cultural context label, if any
        cultural_adjustment: Culturally adjusted risk, if computed
        intervention_urgency: Analyzer urgency (0-10), 0 for heuristic results
        analysis_id: Unique identifier for this analysis
        timestamp: When the analysis completed
    """

    risk_level: float
    confidence: float
    emotional_state: EmotionalState
    risk_factors: list[str] = field(default_factory=list)
    immediate_action: bool = False
    escalation_required: bool = False
    has_crisis_indicators: bool = False
    source: AnalysisSource = AnalysisSource.HEURISTIC
    has_risk_data: bool = True
    intervention_recommendations: list[str] = field(default_factory=list)
    recommended_interventions: list[RecommendedIntervention] = field(default_factory=list)
    bias_adjustments: list[BiasAdjustment] = field(default_factory=list)
    cultural_context: Optional[str] = None
    cultural_adjustment: Optional[CulturallyAdjustedRisk] = None
    intervention_urgency: float = 0.0
    analysis_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=_utc_now)

    @property
    def is_culturally_adapted(self) -> bool:
        """Whether any cultural correction applies to this result."""
        if self.bias_adjustments:
            return True
        return self.cultural_adjustment is not None and bool(self.cultural_adjustment.adjustments)

    def to_dict(self) -> dict:
        """Convert to dictionary for audit logging. Contains no user text."""
        return {
            "analysis_id": self.analysis_id,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source.value,
            "risk_level": self.risk_level,
            "confidence": self.confidence,
            "risk_factors": list(self.risk_factors),
            "immediate_action": self.immediate_action,
            "escalation_required": self.escalation_required,
            "has_crisis_indicators": self.has_crisis_indicators,
            "has_risk_data": self.has_risk_data,
            "emotional_state": self.emotional_state.to_dict(),
            "intervention_urgency": self.intervention_urgency,
            "cultural_context": self.cultural_context,
            "cultural_adjustment": (
                self.cultural_adjustment.to_dict() if self.cultural_adjustment else None
            ),
        }
