"""
Crisis Alert and Intervention Models

What the UI shows the user after an analysis.
"""

from dataclasses import dataclass, field

from kindred.domain.enums.alert_severity import AlertSeverity, InterventionType


@dataclass
class CrisisAlert:
    """
    UI-facing crisis alert.

    Invariants:
        severity == NONE iff show is False, except after a dismiss,
        which only clears show.
        emergency_mode implies severity is CRITICAL or IMMEDIATE.

    Attributes:
        show: Whether the alert is visible
        severity: Alert tier
        message: Headline message
        actions: Suggested user actions
        resources: Support resources to display
        emergency_mode: UI should switch to emergency presentation
        culturally_appropriate: Cultural adaptation was applied
        risk_level: Canonical risk the alert was built from
        emotional_state: Primary emotion label
        interventions: Intervention descriptions
    """

    show: bool = False
    severity: AlertSeverity = AlertSeverity.NONE
    message: str = ""
    actions: list[str] = field(default_factory=list)
    resources: list[str] = field(default_factory=list)
    emergency_mode: bool = False
    culturally_appropriate: bool = False
    risk_level: float = 0.0
    emotional_state: str = "neutral"
    interventions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "show": self.show,
            "severity": self.severity.label,
            "message": self.message,
            "actions": list(self.actions),
            "resources": list(self.resources),
            "emergency_mode": self.emergency_mode,
            "culturally_appropriate": self.culturally_appropriate,
            "risk_level": self.risk_level,
            "emotional_state": self.emotional_state,
            "interventions": list(self.interventions),
        }


@dataclass
class InterventionRecommendation:
    """
    A concrete intervention offered to the user.

    Attributes:
        type: Intervention category
        priority: Priority 0-10, higher first
        description: What the intervention is
        action_items: Steps the user can take
        timeframe: When to act
        resources: Supporting resources
        estimated_effectiveness: Expected effectiveness (0.0-1.0)
        cultural_considerations: Notes for culturally adapted delivery
    """

    type: InterventionType
    priority: int
    description: str
    action_items: list[str] = field(default_factory=list)
    timeframe: str = ""
    resources: list[str] = field(default_factory=list)
    estimated_effectiveness: float = 0.5
    cultural_considerations: list[str] = field(default_factory=list)
