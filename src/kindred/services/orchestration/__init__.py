"""
Orchestration Services

Per-conversation detection session, its event bus and debouncing.
"""

from kindred.services.orchestration.crisis_detection_session import (
    CrisisDetectionSession,
    TextInputSource,
)
from kindred.services.orchestration.debounce import DebounceTimer
from kindred.services.orchestration.events import (
    CrisisDetected,
    CrisisEvent,
    CrisisEventBus,
    InterventionRecommended,
    RiskEscalation,
)

__all__ = [
    "CrisisDetectionSession",
    "TextInputSource",
    "DebounceTimer",
    "CrisisDetected",
    "CrisisEvent",
    "CrisisEventBus",
    "InterventionRecommended",
    "RiskEscalation",
]
