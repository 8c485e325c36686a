"""
Emotional State Domain Model

A point in valence/arousal/dominance (VAD) space estimated from a
piece of user text, or reported by an external analyzer.

PRIVACY: Emotional states are derived from personal text. They may
be kept in memory for trend analysis but are never persisted here.
"""

import time
from dataclasses import asdict, dataclass, field


def _now_ms() -> int:
    return int(time.time() * 1000)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class EmotionalState:
    """
    Immutable affect snapshot.

    Attributes:
        valence: Pleasantness (-1.0 negative to 1.0 positive)
        arousal: Activation (0.0 calm to 1.0 agitated)
        dominance: Sense of control (0.0 powerless to 1.0 in control)
        timestamp: Epoch milliseconds when the state was captured
        confidence: Confidence in the estimate (0.0-1.0)
        primary_emotion: Coarse label for display
    """

    valence: float = 0.0
    arousal: float = 0.5
    dominance: float = 0.5
    timestamp: int = field(default_factory=_now_ms)
    confidence: float = 0.0
    primary_emotion: str = "neutral"

    def __post_init__(self) -> None:
        # Frozen, so clamp through object.__setattr__
        object.__setattr__(self, "valence", _clamp(float(self.valence), -1.0, 1.0))
        object.__setattr__(self, "arousal", _clamp(float(self.arousal), 0.0, 1.0))
        object.__setattr__(self, "dominance", _clamp(float(self.dominance), 0.0, 1.0))
        object.__setattr__(self, "confidence", _clamp(float(self.confidence), 0.0, 1.0))

    @classmethod
    def neutral(cls, timestamp: int | None = None) -> "EmotionalState":
        """Neutral state with zero confidence."""
        if timestamp is None:
            return cls()
        return cls(timestamp=timestamp)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging and events."""
        return asdict(self)
