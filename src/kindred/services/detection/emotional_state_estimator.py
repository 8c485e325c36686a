"""
Emotional State Estimator

Keyword heuristic mapping text to a valence/arousal/dominance
(VAD) vector. Used when no ML analyzer is available, and to give
every analysis an affect snapshot.

CLINICAL_REVIEW_REQUIRED: Keyword sets are coarse placeholders
and should be reviewed by mental health professionals.

PRIVACY: Text is processed in memory only and never logged.
"""

import string
import time
from typing import Optional

from kindred.domain.models.emotional_state import EmotionalState


# Punctuation plus common quote/ellipsis characters stripped from token edges
_STRIP_CHARS = string.punctuation + "‘’“”…"

# Recognized-token count at which confidence saturates
CONFIDENCE_SATURATION = 10


class EmotionalStateEstimator:
    """
    Estimates a VAD vector from keyword counts.

    Pure: the same text (and timestamp) always yields the same state.

    Usage:
        estimator = EmotionalStateEstimator()
        state = estimator.estimate("I feel hopeless and exhausted")
    """

    POSITIVE_WORDS: frozenset[str] = frozenset({
        "happy", "good", "great", "better", "calm", "hopeful", "hope",
        "grateful", "thankful", "love", "loved", "safe", "relieved",
        "peaceful", "proud", "glad", "joy", "excited", "okay", "fine",
        "supported", "content", "optimistic", "wonderful",
    })

    NEGATIVE_WORDS: frozenset[str] = frozenset({
        "sad", "bad", "terrible", "awful", "hopeless", "worthless",
        "depressed", "miserable", "lonely", "alone", "empty", "hate",
        "hurt", "pain", "broken", "useless", "angry", "scared",
        "afraid", "anxious", "guilty", "ashamed", "die", "dead",
        "suicide", "suicidal", "crying", "despair", "numb", "tired",
    })

    HIGH_AROUSAL_WORDS: frozenset[str] = frozenset({
        "panic", "panicking", "scared", "terrified", "angry", "furious",
        "anxious", "racing", "shaking", "excited", "frantic", "desperate",
        "overwhelmed", "screaming", "urgent", "now", "can't", "cannot",
        "rage", "restless",
    })

    LOW_AROUSAL_WORDS: frozenset[str] = frozenset({
        "tired", "exhausted", "calm", "numb", "empty", "sleepy", "bored",
        "drained", "slow", "quiet", "relaxed", "peaceful", "weary",
        "lethargic", "flat",
    })

    DOMINANT_WORDS: frozenset[str] = frozenset({
        "control", "strong", "confident", "capable", "can", "will",
        "decide", "manage", "handle", "able", "powerful", "sure",
        "determined", "ready",
    })

    SUBMISSIVE_WORDS: frozenset[str] = frozenset({
        "helpless", "powerless", "trapped", "stuck", "weak", "hopeless",
        "unable", "can't", "cannot", "lost", "overwhelmed", "nothing",
        "no", "never", "worthless", "useless",
    })

    def __init__(self) -> None:
        self._recognized = (
            self.POSITIVE_WORDS
            | self.NEGATIVE_WORDS
            | self.HIGH_AROUSAL_WORDS
            | self.LOW_AROUSAL_WORDS
            | self.DOMINANT_WORDS
            | self.SUBMISSIVE_WORDS
        )

    def estimate(self, text: str, now_ms: Optional[int] = None) -> EmotionalState:
        """
        Estimate the emotional state expressed in text.

        Args:
            text: User-authored text
            now_ms: Timestamp for the state in epoch milliseconds

        Returns:
            EmotionalState; neutral with zero confidence for empty text
        """
        timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
        tokens = self._tokenize(text or "")

        if not tokens:
            return EmotionalState.neutral(timestamp)

        valence = self._axis(tokens, self.POSITIVE_WORDS, self.NEGATIVE_WORDS)
        arousal = self._axis(tokens, self.HIGH_AROUSAL_WORDS, self.LOW_AROUSAL_WORDS)
        dominance = self._axis(tokens, self.DOMINANT_WORDS, self.SUBMISSIVE_WORDS)

        valence_value = valence if valence is not None else 0.0
        arousal_value = (arousal + 1) / 2 if arousal is not None else 0.5
        dominance_value = (dominance + 1) / 2 if dominance is not None else 0.5

        recognized = sum(1 for token in tokens if token in self._recognized)
        confidence = min(1.0, recognized / CONFIDENCE_SATURATION)

        return EmotionalState(
            valence=valence_value,
            arousal=arousal_value,
            dominance=dominance_value,
            timestamp=timestamp,
            confidence=confidence,
            primary_emotion=label_for(valence_value, arousal_value, dominance_value)
            if recognized else "neutral",
        )

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        tokens = []
        for raw in text.lower().split():
            token = raw.strip(_STRIP_CHARS)
            if token:
                tokens.append(token)
        return tokens

    @staticmethod
    def _axis(
        tokens: list[str],
        high: frozenset[str],
        low: frozenset[str],
    ) -> Optional[float]:
        """Signed axis value in [-1, 1], or None when neither set matched."""
        count_high = sum(1 for token in tokens if token in high)
        count_low = sum(1 for token in tokens if token in low)
        total = count_high + count_low
        if total == 0:
            return None
        return (count_high - count_low) / total


def label_for(valence: float, arousal: float, dominance: float) -> str:
    """
    Coarse emotion label for a VAD point.

    Args:
        valence: -1.0 to 1.0
        arousal: 0.0 to 1.0
        dominance: 0.0 to 1.0

    Returns:
        Display label such as "despair" or "content"
    """
    if abs(valence) < 0.2 and abs(arousal - 0.5) < 0.2:
        return "neutral"
    if valence < 0:
        if arousal > 0.6:
            return "fear" if dominance < 0.4 else "anger"
        if dominance < 0.4:
            return "despair"
        return "sadness"
    if arousal > 0.6:
        return "joy"
    return "content"
