"""
Alert Severity and Intervention Type Enumerations

Defines the discrete alert tiers derived from a continuous risk
score and the intervention categories offered to users.

CLINICAL_REVIEW_REQUIRED: Tier definitions and the actions tied
to them should be validated by mental health professionals.
"""

from enum import IntEnum, StrEnum


class AlertSeverity(IntEnum):
    """
    Crisis alert severity.

    Totally ordered: NONE < LOW < MEDIUM < HIGH < CRITICAL < IMMEDIATE.
    The two highest tiers put the UI into emergency mode.
    """

    NONE = 0
    """No alert shown."""

    LOW = 1
    """
    Low-level concern.
    - Gentle check-in appropriate
    """

    MEDIUM = 2
    """
    Moderate crisis indicators.
    - Offer coping resources
    """

    HIGH = 3
    """
    High-risk patterns.
    - Proactively surface support resources
    """

    CRITICAL = 4
    """
    Critical crisis indicators.
    - Emergency mode, crisis line shown
    """

    IMMEDIATE = 5
    """
    Immediate danger.
    - Emergency mode, emergency number shown first

    SAFETY_NOTE: At this tier every surface must show
    crisis resources without requiring user action.
    """

    @property
    def label(self) -> str:
        """Lowercase string form used by UI collaborators."""
        return self.name.lower()

    @property
    def is_emergency(self) -> bool:
        """Whether this tier engages emergency mode."""
        return self >= AlertSeverity.CRITICAL


class InterventionType(StrEnum):
    """
    Intervention categories, ordered from most to least urgent.
    """

    IMMEDIATE = "immediate"
    """Act now: crisis line or emergency services."""

    URGENT = "urgent"
    """Act within hours: calming and grounding."""

    SUPPORTIVE = "supportive"
    """Short-term mood support."""

    MONITORING = "monitoring"
    """Longer-term professional follow-up."""

    RESOURCES = "resources"
    """Informational resources only."""

    @classmethod
    def from_priority(cls, priority: int) -> "InterventionType":
        """
        Map an analyzer priority (0-10) to an intervention type.

        Args:
            priority: Priority reported by the analyzer

        Returns:
            Corresponding intervention type
        """
        if priority >= 8:
            return cls.IMMEDIATE
        if priority >= 6:
            return cls.URGENT
        if priority >= 4:
            return cls.SUPPORTIVE
        if priority >= 2:
            return cls.MONITORING
        return cls.RESOURCES
