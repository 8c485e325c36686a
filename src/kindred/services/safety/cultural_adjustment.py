"""
Cultural Adjustment

Corrects canonical risk for cultural expression patterns: stigma,
indirect communication, family-centered framing, somatic language
and religious coping.

CLINICAL_REVIEW_REQUIRED: Profiles, phrase lists and adjustment
weights must be reviewed by clinicians with relevant cultural
expertise. Adjusted risk is informational and never changes the
alert tier on its own.

PRIVACY: Text is matched in memory only and never logged.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

from kindred.config.logging_config import get_logger
from kindred.domain.models.crisis_analysis import CulturallyAdjustedRisk
from kindred.domain.models.ml_analysis import BiasAdjustment

logger = get_logger(__name__)

# Overall reduction applied after adjustments; skipped when none apply
CULTURAL_BIAS_REDUCTION_FACTOR = 0.20

# Floor for the reported cultural confidence
MIN_CULTURAL_CONFIDENCE = 0.6

DEFAULT_REGION = "Western"


class StigmaLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CommunicationStyle(StrEnum):
    DIRECT = "direct"
    INDIRECT = "indirect"
    CONTEXTUAL = "contextual"


class FamilyOrientation(StrEnum):
    INDIVIDUAL = "individual"
    FAMILY_CENTERED = "family-centered"
    COMMUNITY_BASED = "community-based"


@dataclass(frozen=True)
class CulturalProfile:
    """
    Expression tendencies of a cultural region.

    Attributes:
        region: Region name
        stigma: Mental health stigma level
        communication: Dominant communication style
        family: Family orientation
        somatic_phrases: Phrases expressing distress through the body
        family_phrases: Phrases implying family involvement
        religious_phrases: Phrases of religious coping
        resources: Culturally appropriate support resources
    """

    region: str
    stigma: StigmaLevel
    communication: CommunicationStyle
    family: FamilyOrientation
    somatic_phrases: tuple[str, ...] = ()
    family_phrases: tuple[str, ...] = ()
    religious_phrases: tuple[str, ...] = ()
    resources: tuple[str, ...] = ()


# English phrases checked for every region
_COMMON_SOMATIC = ("headache", "stomach", "chest hurts", "heart hurts", "can't sleep", "no energy")
_COMMON_FAMILY = ("my family", "my parents", "my mother", "my father", "family would")
_COMMON_RELIGIOUS = ("god", "pray", "prayer", "faith", "allah")

CULTURAL_PROFILES: dict[str, CulturalProfile] = {
    "Western": CulturalProfile(
        region="Western",
        stigma=StigmaLevel.MEDIUM,
        communication=CommunicationStyle.DIRECT,
        family=FamilyOrientation.INDIVIDUAL,
        resources=(
            "Crisis Text Line: Text HOME to 741741",
            "988 Suicide & Crisis Lifeline: 988",
            "Psychology Today therapist finder",
        ),
    ),
    "Hispanic/Latino": CulturalProfile(
        region="Hispanic/Latino",
        stigma=StigmaLevel.HIGH,
        communication=CommunicationStyle.CONTEXTUAL,
        family=FamilyOrientation.FAMILY_CENTERED,
        somatic_phrases=("me siento mal", "dolor en el corazón"),
        family_phrases=("la familia no puede saber",),
        religious_phrases=("dios me ayudará", "en las manos de dios"),
        resources=(
            "Línea Nacional de Prevención del Suicidio: 988",
            "Crisis Text Line: Envía HOLA al 741741",
            "NAMI en Español",
        ),
    ),
    "Arabic": CulturalProfile(
        region="Arabic",
        stigma=StigmaLevel.HIGH,
        communication=CommunicationStyle.INDIRECT,
        family=FamilyOrientation.FAMILY_CENTERED,
        somatic_phrases=("قلبي مكسور", "تعبان نفسياً"),
        family_phrases=("العائلة لا تفهم",),
        religious_phrases=("الله يساعدني", "إن شاء الله"),
        resources=(
            "Muslim mental health resources",
            "Arabic-speaking therapists",
            "Islamic counseling services",
        ),
    ),
    "Chinese": CulturalProfile(
        region="Chinese",
        stigma=StigmaLevel.HIGH,
        communication=CommunicationStyle.INDIRECT,
        family=FamilyOrientation.FAMILY_CENTERED,
        somatic_phrases=("心里不舒服", "压力很大"),
        family_phrases=("家人会担心",),
        resources=(
            "Asian Mental Health Collective",
            "Mandarin/Cantonese speaking crisis counselors",
        ),
    ),
    "Vietnamese": CulturalProfile(
        region="Vietnamese",
        stigma=StigmaLevel.HIGH,
        communication=CommunicationStyle.INDIRECT,
        family=FamilyOrientation.FAMILY_CENTERED,
        somatic_phrases=("đau lòng quá",),
        family_phrases=("gia đình sẽ xấu hổ",),
        resources=(
            "Vietnamese-speaking crisis support",
            "Community-based mental health services",
        ),
    ),
    "Filipino": CulturalProfile(
        region="Filipino",
        stigma=StigmaLevel.HIGH,
        communication=CommunicationStyle.CONTEXTUAL,
        family=FamilyOrientation.COMMUNITY_BASED,
        somatic_phrases=("sakit sa puso",),
        family_phrases=("nakakahiya sa pamilya",),
        religious_phrases=("dios me ayudará",),
        resources=(
            "Filipino-American community mental health",
            "Kapamilya support networks",
        ),
    ),
}

LANGUAGE_REGIONS: dict[str, str] = {
    "en": "Western",
    "es": "Hispanic/Latino",
    "pt": "Hispanic/Latino",
    "ar": "Arabic",
    "zh": "Chinese",
    "vi": "Vietnamese",
    "tl": "Filipino",
}


@dataclass
class CulturalSignals:
    """Which culture-specific expression types appeared in a text."""

    somatic: bool = False
    family: bool = False
    religious: bool = False
    matched: list[str] = field(default_factory=list)


class CulturalAdjuster:
    """
    Applies cultural bias adjustments to canonical risk.

    Usage:
        adjuster = CulturalAdjuster()
        adjusted = adjuster.adjust(70.0, text, cultural_context="Arabic")
    """

    def __init__(self, profiles: Optional[dict[str, CulturalProfile]] = None) -> None:
        self._profiles = profiles or CULTURAL_PROFILES

    def resolve_profile(
        self,
        cultural_context: Optional[str] = None,
        language_code: str = "en",
    ) -> CulturalProfile:
        """
        Profile for an explicit context, else for the language.

        Args:
            cultural_context: Region name, if known
            language_code: Language of the text

        Returns:
            CulturalProfile, Western when nothing matches
        """
        if cultural_context and cultural_context in self._profiles:
            return self._profiles[cultural_context]
        language = (language_code or "en").split("-")[0].lower()
        region = LANGUAGE_REGIONS.get(language, DEFAULT_REGION)
        return self._profiles.get(region, self._profiles[DEFAULT_REGION])

    @staticmethod
    def detect_signals(text: str, profile: CulturalProfile) -> CulturalSignals:
        """Find somatic, family and religious expressions in text."""
        lowered = (text or "").lower()
        signals = CulturalSignals()

        def scan(phrases: tuple[str, ...]) -> bool:
            found = [p for p in phrases if p.lower() in lowered]
            signals.matched.extend(found)
            return bool(found)

        signals.somatic = scan(profile.somatic_phrases + _COMMON_SOMATIC)
        signals.family = scan(profile.family_phrases + _COMMON_FAMILY)
        signals.religious = scan(profile.religious_phrases + _COMMON_RELIGIOUS)
        return signals

    @staticmethod
    def bias_adjustments(
        profile: CulturalProfile,
        signals: CulturalSignals,
    ) -> list[BiasAdjustment]:
        """
        Adjustments that apply to a profile and its detected signals.

        Positive adjustments raise sensitivity; religious coping
        lowers it as a possible resilience factor.
        """
        adjustments = []
        if profile.stigma == StigmaLevel.HIGH:
            adjustments.append(BiasAdjustment(factor="Mental Health Stigma", adjustment=0.25, confidence=0.8))
        if profile.communication == CommunicationStyle.INDIRECT:
            adjustments.append(
                BiasAdjustment(factor="Indirect Communication Style", adjustment=0.20, confidence=0.7)
            )
        if profile.family == FamilyOrientation.FAMILY_CENTERED and signals.family:
            adjustments.append(BiasAdjustment(factor="Family-Centered Culture", adjustment=0.15, confidence=0.9))
        if signals.somatic:
            adjustments.append(BiasAdjustment(factor="Somatic Expression", adjustment=0.18, confidence=0.8))
        if signals.religious:
            adjustments.append(BiasAdjustment(factor="Religious Coping", adjustment=-0.10, confidence=0.6))
        return adjustments

    def adjust(
        self,
        risk_level: float,
        text: str,
        cultural_context: Optional[str] = None,
        language_code: str = "en",
    ) -> CulturallyAdjustedRisk:
        """
        Culturally adjusted risk for one analysis.

        Each adjustment adds adjustment * confidence * 100 (clamped to
        0-100), then the total is reduced by the bias reduction factor
        and rounded. With no adjustments the risk is returned as is.

        Args:
            risk_level: Canonical risk (0-100)
            text: Analyzed text
            cultural_context: Region name, if known
            language_code: Language of the text

        Returns:
            CulturallyAdjustedRisk
        """
        profile = self.resolve_profile(cultural_context, language_code)
        signals = self.detect_signals(text, profile)
        adjustments = self.bias_adjustments(profile, signals)

        adjusted = risk_level
        for adjustment in adjustments:
            adjusted = max(0.0, min(100.0, adjusted + adjustment.adjustment * adjustment.confidence * 100))
        if adjustments:
            adjusted = adjusted * (1 - CULTURAL_BIAS_REDUCTION_FACTOR)
        adjusted = round(adjusted)

        mean_confidence = (
            sum(a.confidence for a in adjustments) / len(adjustments) if adjustments else 0.0
        )

        logger.debug(
            "Cultural adjustment applied",
            region=profile.region,
            adjustment_count=len(adjustments),
            original_risk=risk_level,
            adjusted_risk=adjusted,
        )

        return CulturallyAdjustedRisk(
            original_risk=risk_level,
            adjusted_risk=float(adjusted),
            adjustments=adjustments,
            cultural_confidence=max(MIN_CULTURAL_CONFIDENCE, min(1.0, mean_confidence)),
            region=profile.region,
        )

    def cultural_resources(self, region: str) -> list[str]:
        """Culturally appropriate resources for a region."""
        profile = self._profiles.get(region, self._profiles[DEFAULT_REGION])
        return list(profile.resources)

    def considerations(self, region: str) -> list[str]:
        """Delivery notes for interventions in a region."""
        profile = self._profiles.get(region, self._profiles[DEFAULT_REGION])
        notes = []
        if profile.family == FamilyOrientation.FAMILY_CENTERED:
            notes.append("Consider involving trusted family members if the person wishes")
        elif profile.family == FamilyOrientation.COMMUNITY_BASED:
            notes.append("Community-based support may feel more acceptable")
        if profile.stigma == StigmaLevel.HIGH:
            notes.append("Use non-stigmatizing language and emphasize confidentiality")
        if profile.communication != CommunicationStyle.DIRECT:
            notes.append("Distress may be expressed indirectly or through physical symptoms")
        return notes
