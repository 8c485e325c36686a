"""
Screening Scorer

Scores PHQ-9 (depression) and GAD-7 (anxiety) questionnaires into
severity bands with a plain-language recommendation. Band cut-offs
can be shifted for cultures with high mental health stigma.

CLINICAL_VALIDATION_REQUIRED: Screening results are not a
diagnosis. Stigma-adjusted cut-offs require clinical review.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Sequence

from kindred.config.logging_config import get_logger

logger = get_logger(__name__)

ITEM_MIN = 0
ITEM_MAX = 3


class ScreeningInstrument(StrEnum):
    PHQ9 = "phq-9"
    GAD7 = "gad-7"


class ScreeningSeverity(StrEnum):
    MINIMAL = "minimal"
    MILD = "mild"
    MODERATE = "moderate"
    MODERATELY_SEVERE = "moderately-severe"
    SEVERE = "severe"


# Standard upper bounds of each band (inclusive)
PHQ9_BANDS: tuple[tuple[float, ScreeningSeverity], ...] = (
    (4, ScreeningSeverity.MINIMAL),
    (9, ScreeningSeverity.MILD),
    (14, ScreeningSeverity.MODERATE),
    (19, ScreeningSeverity.MODERATELY_SEVERE),
)

GAD7_BANDS: tuple[tuple[float, ScreeningSeverity], ...] = (
    (4, ScreeningSeverity.MINIMAL),
    (9, ScreeningSeverity.MILD),
    (14, ScreeningSeverity.MODERATE),
)

ITEM_COUNTS: dict[ScreeningInstrument, int] = {
    ScreeningInstrument.PHQ9: 9,
    ScreeningInstrument.GAD7: 7,
}

# Band shift per unit of stigma (0-1)
STIGMA_SHIFT: dict[ScreeningInstrument, float] = {
    ScreeningInstrument.PHQ9: 2.0,
    ScreeningInstrument.GAD7: 1.0,
}

_RECOMMENDATIONS: dict[ScreeningSeverity, str] = {
    ScreeningSeverity.MINIMAL: (
        "Your assessment suggests minimal {condition} symptoms. "
        "Continue with self-care practices and maintain healthy lifestyle habits."
    ),
    ScreeningSeverity.MILD: (
        "Your assessment suggests mild {condition} symptoms. "
        "Consider stress management techniques and monitor your symptoms."
    ),
    ScreeningSeverity.MODERATE: (
        "Your assessment suggests moderate {condition} symptoms. "
        "We recommend speaking with a mental health professional."
    ),
    ScreeningSeverity.MODERATELY_SEVERE: (
        "Your assessment suggests moderately severe {condition} symptoms. "
        "Professional support is recommended."
    ),
    ScreeningSeverity.SEVERE: (
        "Your assessment suggests severe {condition} symptoms. "
        "We strongly recommend seeking professional help promptly."
    ),
}


@dataclass(frozen=True)
class ScreeningResult:
    """
    Scored questionnaire.

    Attributes:
        instrument: Questionnaire scored
        total: Sum of item scores
        severity: Severity band
        recommendation: Plain-language next step
        self_harm_item_positive: PHQ-9 item 9 answered above zero
        stigma_adjusted: Band cut-offs were shifted for stigma
    """

    instrument: ScreeningInstrument
    total: int
    severity: ScreeningSeverity
    recommendation: str
    self_harm_item_positive: bool = False
    stigma_adjusted: bool = False


class ScreeningScorer:
    """
    PHQ-9 and GAD-7 scorer.

    Usage:
        scorer = ScreeningScorer()
        result = scorer.score_phq9([1, 2, 0, 1, 3, 0, 1, 2, 0])
    """

    def score_phq9(
        self,
        items: Sequence[int],
        stigma_level: Optional[float] = None,
    ) -> ScreeningResult:
        """Score a PHQ-9 questionnaire (nine items, each 0-3)."""
        return self.score(ScreeningInstrument.PHQ9, items, stigma_level)

    def score_gad7(
        self,
        items: Sequence[int],
        stigma_level: Optional[float] = None,
    ) -> ScreeningResult:
        """Score a GAD-7 questionnaire (seven items, each 0-3)."""
        return self.score(ScreeningInstrument.GAD7, items, stigma_level)

    def score(
        self,
        instrument: ScreeningInstrument,
        items: Sequence[int],
        stigma_level: Optional[float] = None,
    ) -> ScreeningResult:
        """
        Score a questionnaire.

        Args:
            instrument: PHQ-9 or GAD-7
            items: Item responses in questionnaire order
            stigma_level: Cultural stigma (0-1) shifting band cut-offs up

        Returns:
            ScreeningResult

        Raises:
            ValueError: On a wrong item count, an item outside 0-3,
                or a stigma level outside 0-1
        """
        self._validate(instrument, items)
        if stigma_level is not None and not 0.0 <= stigma_level <= 1.0:
            raise ValueError("stigma_level must be between 0 and 1")

        total = sum(items)
        severity = self.classify(instrument, total, stigma_level)
        condition = "depression" if instrument == ScreeningInstrument.PHQ9 else "anxiety"
        self_harm = instrument == ScreeningInstrument.PHQ9 and items[8] > 0

        if self_harm:
            logger.warning("Screening self-harm item positive", instrument=instrument.value)

        return ScreeningResult(
            instrument=instrument,
            total=total,
            severity=severity,
            recommendation=_RECOMMENDATIONS[severity].format(condition=condition),
            self_harm_item_positive=self_harm,
            stigma_adjusted=bool(stigma_level),
        )

    @staticmethod
    def classify(
        instrument: ScreeningInstrument,
        total: float,
        stigma_level: Optional[float] = None,
    ) -> ScreeningSeverity:
        """
        Severity band for a total score.

        Args:
            instrument: PHQ-9 or GAD-7
            total: Total score
            stigma_level: Cultural stigma (0-1), None for standard cut-offs

        Returns:
            ScreeningSeverity
        """
        bands = PHQ9_BANDS if instrument == ScreeningInstrument.PHQ9 else GAD7_BANDS
        shift = (stigma_level or 0.0) * STIGMA_SHIFT[instrument]
        for upper, severity in bands:
            if total <= upper + shift:
                return severity
        return ScreeningSeverity.SEVERE

    @staticmethod
    def _validate(instrument: ScreeningInstrument, items: Sequence[int]) -> None:
        expected = ITEM_COUNTS[instrument]
        if len(items) != expected:
            raise ValueError(
                f"{instrument.value} requires {expected} items, got {len(items)}"
            )
        for index, value in enumerate(items):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Item {index + 1} must be an integer")
            if not ITEM_MIN <= value <= ITEM_MAX:
                raise ValueError(
                    f"Item {index + 1} must be between {ITEM_MIN} and {ITEM_MAX}, got {value}"
                )
