"""
ML Analysis Payload Models

Pydantic models validating the payload returned by an external
crisis analyzer. Field names follow the analyzer's camelCase wire
format; snake_case names are accepted too.

Unknown keys are ignored so newer analyzer versions stay compatible.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class RecommendedIntervention(_CamelModel):
    """An intervention suggested by the analyzer, priority 0-10."""

    priority: int = Field(default=0, ge=0, le=10)
    description: str = ""


class RealTimeRisk(_CamelModel):
    """
    Analyzer risk block.

    Attributes:
        immediate_risk: Risk on the 0-100 scale
        intervention_urgency: Urgency on the 0-10 scale
        recommended_interventions: Suggested interventions
    """

    immediate_risk: float = Field(default=0.0, ge=0.0, le=100.0)
    intervention_urgency: float = Field(default=0.0, ge=0.0, le=10.0)
    recommended_interventions: list[RecommendedIntervention] = Field(default_factory=list)


class BiasAdjustment(_CamelModel):
    """A cultural or linguistic bias correction applied to a risk score."""

    factor: str
    adjustment: float = 0.0
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class MLEmotionalState(_CamelModel):
    """Analyzer affect estimate. Dominance is reported on -1..1."""

    primary_emotion: str = "neutral"
    valence: float = Field(default=0.0, ge=-1.0, le=1.0)
    arousal: float = Field(default=0.5, ge=0.0, le=1.0)
    dominance: float = Field(default=0.0, ge=-1.0, le=1.0)
    timestamp: Optional[int] = None


class MLAnalysisResult(_CamelModel):
    """
    Full analyzer payload.

    Only real_time_risk carries the canonical risk value. A payload
    without it is accepted but produces zero risk downstream.
    """

    has_crisis_indicators: bool = False
    ml_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    risk_level: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    risk_factors: list[str] = Field(default_factory=list)
    emotional_state: Optional[MLEmotionalState] = None
    real_time_risk: Optional[RealTimeRisk] = None
    bias_adjustments: list[BiasAdjustment] = Field(default_factory=list)
    cultural_context: Optional[str] = None
    immediate_action: Optional[bool] = None
    escalation_required: Optional[bool] = None

    @property
    def effective_confidence(self) -> float:
        """mlConfidence when present, else confidence, else 0."""
        if self.ml_confidence is not None:
            return self.ml_confidence
        if self.confidence is not None:
            return self.confidence
        return 0.0
