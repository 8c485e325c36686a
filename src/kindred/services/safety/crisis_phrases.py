"""
Crisis Phrase Matcher

Direct linguistic check for explicit self-harm and suicide phrases.
Runs on raw text next to the affect heuristic, so an explicit
statement is flagged even when its keywords carry no valence.

SAFETY-CRITICAL: A match sets crisis indicators on the analysis.
It does not change the risk level.

CLINICAL_VALIDATION_REQUIRED: Patterns are phrases/contexts, not
single words, and must be reviewed by clinicians.

PRIVACY: Signals carry pattern names only, never the matched text.
"""

import re
from dataclasses import dataclass

from kindred.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CrisisPhraseSignal:
    """
    One matched crisis pattern.

    Attributes:
        signal_name: Pattern name, reported as a risk factor
        weight: Clinical weight of the pattern (0.0-1.0)
    """

    signal_name: str
    weight: float

    @property
    def is_direct(self) -> bool:
        return self.signal_name in CrisisPhraseMatcher.DIRECT_SIGNALS


class CrisisPhraseMatcher:
    """
    Matches explicit crisis language in raw text.

    A single direct intent or ideation signal is enough for crisis
    indicators. Indirect signals need MIN_SIGNALS_FOR_CONCERN matches.

    Usage:
        matcher = CrisisPhraseMatcher()
        signals = matcher.match(text)
        if matcher.indicates_crisis(signals):
            ...
    """

    PATTERNS: list[tuple[str, re.Pattern, float]] = [
        (
            "direct_self_harm_intent",
            re.compile(
                r"(want|going|plan|planning|ready|about|thinking about|considering)\s+(to\s+)?"
                r"((hurt|harm|kill|end)\s+(myself|my life|it all)|"
                r"commit\s+suicide|take\s+my\s+(own\s+)?life)",
                re.IGNORECASE,
            ),
            0.40,
        ),
        (
            "suicide_ideation",
            re.compile(
                r"(want|wish|rather)\s+(to\s+)?(be\s+)?dead|"
                r"(don't|do not)\s+want\s+to\s+(live|be here|exist)|"
                r"wish\s+i\s+(was|were)\s+(never\s+)?born|"
                r"\b(suicidal|suicide\s+plan)\b",
                re.IGNORECASE,
            ),
            0.35,
        ),
        (
            "method_reference",
            re.compile(
                r"\b(pills|overdose|cutting|jump off|hanging|gun|weapon)\b",
                re.IGNORECASE,
            ),
            0.25,
        ),
        (
            "hopelessness_expression",
            re.compile(
                r"no\s+(way\s+out|hope|point|reason)|"
                r"never\s+get\s+better|"
                r"can't\s+(go\s+on|take\s+(it|this)\s+anymore)|"
                r"give\s+up",
                re.IGNORECASE,
            ),
            0.20,
        ),
        (
            "farewell_language",
            re.compile(
                r"goodbye\s+forever|"
                r"won't\s+be\s+(here|around|a\s+problem)|"
                r"better\s+off\s+without\s+me|"
                r"saying\s+goodbye",
                re.IGNORECASE,
            ),
            0.30,
        ),
        (
            "burden_expression",
            re.compile(
                r"(burden|bother|problem)\s+(to|for)\s+(everyone|you|them|others)|"
                r"everyone.*better.*without\s+me",
                re.IGNORECASE,
            ),
            0.20,
        ),
    ]

    DIRECT_SIGNALS: frozenset[str] = frozenset({
        "direct_self_harm_intent",
        "suicide_ideation",
    })

    MIN_SIGNALS_FOR_CONCERN: int = 2

    def match(self, text: str) -> list[CrisisPhraseSignal]:
        """
        Find crisis patterns in text.

        Args:
            text: Raw user input

        Returns:
            Matched signals in pattern order, empty for blank text
        """
        if not text or not text.strip():
            return []

        signals = [
            CrisisPhraseSignal(signal_name=name, weight=weight)
            for name, pattern, weight in self.PATTERNS
            if pattern.search(text)
        ]
        if signals:
            logger.info(
                "Crisis phrases matched",
                signals=[s.signal_name for s in signals],
                text_length=len(text),
            )
        return signals

    def indicates_crisis(self, signals: list[CrisisPhraseSignal]) -> bool:
        """True for any direct signal, or enough indirect ones."""
        if any(s.is_direct for s in signals):
            return True
        return len(signals) >= self.MIN_SIGNALS_FOR_CONCERN
