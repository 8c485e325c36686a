"""
Alert State Machine

Maps canonical risk to a discrete alert tier, builds the alert the
UI shows, and tracks risk escalation between analyses.

SAFETY-CRITICAL: Tier boundaries decide when emergency mode is
shown. All thresholds require clinical review.

ARCHITECTURE: Alerts are rebuilt from scratch on every analysis.
There is no hysteresis; only the escalation baseline carries over
between calls.
"""

from dataclasses import dataclass, replace
from typing import Optional

from kindred.config.logging_config import get_logger
from kindred.domain.enums.alert_severity import AlertSeverity
from kindred.domain.models.crisis_alert import CrisisAlert
from kindred.domain.models.crisis_analysis import CrisisAnalysisResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class SeverityThresholds:
    """
    Lower bounds of each tier on the 0-100 scale.

    Risk below `low` is NONE. Each bound is inclusive, so the tiers
    partition the scale with no gaps or overlaps.

    CLINICAL_VALIDATION_REQUIRED: Boundaries require review.
    """

    low: float = 20.0
    medium: float = 40.0
    high: float = 60.0
    critical: float = 80.0
    immediate: float = 90.0

    def __post_init__(self) -> None:
        bounds = [self.low, self.medium, self.high, self.critical, self.immediate]
        if not 0.0 <= bounds[0]:
            raise ValueError("Severity thresholds must be non-negative")
        if any(a >= b for a, b in zip(bounds, bounds[1:])):
            raise ValueError("Severity thresholds must be strictly increasing")
        if bounds[-1] > 100.0:
            raise ValueError("Severity thresholds must not exceed 100")


# Headline message per tier
ALERT_MESSAGES: dict[AlertSeverity, str] = {
    AlertSeverity.NONE: "",
    AlertSeverity.LOW: "It sounds like things might be a little hard right now.",
    AlertSeverity.MEDIUM: "It sounds like you're going through a difficult time.",
    AlertSeverity.HIGH: "We're concerned about how you're feeling. Support is available.",
    AlertSeverity.CRITICAL: "You don't have to face this alone. Please reach out for support now.",
    AlertSeverity.IMMEDIATE: "Your safety matters. Please contact emergency services or a crisis line now.",
}

# Suggested user actions per tier
ALERT_ACTIONS: dict[AlertSeverity, list[str]] = {
    AlertSeverity.NONE: [],
    AlertSeverity.LOW: ["Take a short break", "Try a breathing exercise"],
    AlertSeverity.MEDIUM: ["Try a grounding exercise", "Reach out to someone you trust"],
    AlertSeverity.HIGH: ["Talk to a peer supporter", "Contact a mental health professional"],
    AlertSeverity.CRITICAL: ["Call a crisis line", "Stay with someone you trust"],
    AlertSeverity.IMMEDIATE: ["Call emergency services", "Call a crisis line", "Move to a safe place"],
}


class AlertStateMachine:
    """
    Severity classification and escalation tracking.

    Usage:
        machine = AlertStateMachine()
        alert = machine.build_alert(result, resources=["988 Suicide & Crisis Lifeline"])
        if machine.check_escalation(result.risk_level):
            ...
    """

    def __init__(
        self,
        thresholds: Optional[SeverityThresholds] = None,
        escalation_delta: float = 20.0,
    ) -> None:
        """
        Initialize state machine.

        Args:
            thresholds: Tier boundaries
            escalation_delta: Rise in risk that counts as escalation
        """
        self._thresholds = thresholds or SeverityThresholds()
        self._escalation_delta = escalation_delta
        self._previous_risk: Optional[float] = None

    @property
    def thresholds(self) -> SeverityThresholds:
        return self._thresholds

    @property
    def previous_risk(self) -> Optional[float]:
        """Escalation baseline, None until the first check."""
        return self._previous_risk

    def classify(self, risk_level: float) -> AlertSeverity:
        """
        Map canonical risk to an alert tier.

        Args:
            risk_level: Risk on the 0-100 scale

        Returns:
            AlertSeverity, monotonic in risk_level
        """
        t = self._thresholds
        if risk_level >= t.immediate:
            return AlertSeverity.IMMEDIATE
        if risk_level >= t.critical:
            return AlertSeverity.CRITICAL
        if risk_level >= t.high:
            return AlertSeverity.HIGH
        if risk_level >= t.medium:
            return AlertSeverity.MEDIUM
        if risk_level >= t.low:
            return AlertSeverity.LOW
        return AlertSeverity.NONE

    def build_alert(
        self,
        result: CrisisAnalysisResult,
        resources: Optional[list[str]] = None,
        interventions: Optional[list[str]] = None,
    ) -> CrisisAlert:
        """
        Build a fresh alert for an analysis.

        A result without risk data always yields a hidden NONE alert.

        Args:
            result: Analysis to alert on
            resources: Support resources for visible alerts
            interventions: Intervention descriptions, defaults to the result's

        Returns:
            CrisisAlert with show == (severity != NONE)
        """
        if not result.has_risk_data:
            return CrisisAlert(
                emotional_state=result.emotional_state.primary_emotion,
            )

        severity = self.classify(result.risk_level)
        show = severity != AlertSeverity.NONE

        if severity.is_emergency:
            logger.warning(
                "Emergency alert raised",
                severity=severity.label,
                risk_level=result.risk_level,
                analysis_id=result.analysis_id,
            )

        return CrisisAlert(
            show=show,
            severity=severity,
            message=ALERT_MESSAGES[severity],
            actions=list(ALERT_ACTIONS[severity]),
            resources=list(resources or []) if show else [],
            emergency_mode=severity.is_emergency,
            culturally_appropriate=result.is_culturally_adapted,
            risk_level=result.risk_level,
            emotional_state=result.emotional_state.primary_emotion,
            interventions=list(
                interventions if interventions is not None
                else result.intervention_recommendations
            ),
        )

    @staticmethod
    def dismiss(alert: CrisisAlert) -> CrisisAlert:
        """Copy of alert with show cleared and everything else kept."""
        return replace(alert, show=False)

    def check_escalation(self, risk_level: float) -> bool:
        """
        Record a risk level and report whether it escalated.

        Fires when a baseline exists and risk_level exceeds it by more
        than the escalation delta. The baseline becomes risk_level on
        every call.

        Args:
            risk_level: Canonical risk of the latest analysis

        Returns:
            True if this is an escalation
        """
        previous = self._previous_risk
        self._previous_risk = risk_level
        if previous is None:
            return False
        return risk_level > previous + self._escalation_delta

    def reset_escalation(self) -> None:
        """Forget the escalation baseline."""
        self._previous_risk = None
