"""
Unit Tests for Cultural Adjustment

Tests profile resolution, signal detection and adjusted risk.
"""

import pytest

from kindred.services.safety.cultural_adjustment import CulturalAdjuster


class TestProfileResolution:
    """Tests for choosing a cultural profile."""

    @pytest.fixture
    def adjuster(self) -> CulturalAdjuster:
        return CulturalAdjuster()

    def test_explicit_context_wins(self, adjuster: CulturalAdjuster) -> None:
        assert adjuster.resolve_profile("Chinese", "es").region == "Chinese"

    def test_language_fallback(self, adjuster: CulturalAdjuster) -> None:
        assert adjuster.resolve_profile(None, "ar-EG").region == "Arabic"
        assert adjuster.resolve_profile("Unknown Region", "es").region == "Hispanic/Latino"

    def test_default_region(self, adjuster: CulturalAdjuster) -> None:
        assert adjuster.resolve_profile(None, "xx").region == "Western"


class TestAdjust:
    """Tests for culturally adjusted risk."""

    @pytest.fixture
    def adjuster(self) -> CulturalAdjuster:
        return CulturalAdjuster()

    def test_no_adjustments_keeps_risk(self, adjuster: CulturalAdjuster) -> None:
        """Bias reduction only offsets adjustments that were applied."""
        adjusted = adjuster.adjust(95.0, "I don't know what to do anymore")

        assert adjusted.region == "Western"
        assert adjusted.adjustments == []
        assert adjusted.original_risk == 95.0
        assert adjusted.adjusted_risk == 95.0
        assert adjusted.cultural_confidence == pytest.approx(0.6)

    def test_high_stigma_indirect_culture(self, adjuster: CulturalAdjuster) -> None:
        """Stigma, indirect style, family framing and somatic language all apply."""
        adjusted = adjuster.adjust(
            50.0,
            "I have a headache all the time and my family would not understand",
            cultural_context="Arabic",
        )

        factors = [a.factor for a in adjusted.adjustments]
        assert factors == [
            "Mental Health Stigma",
            "Indirect Communication Style",
            "Family-Centered Culture",
            "Somatic Expression",
        ]
        assert adjusted.adjusted_risk == 80.0
        assert adjusted.cultural_confidence == pytest.approx(0.8)

    def test_religious_coping_lowers_risk(self, adjuster: CulturalAdjuster) -> None:
        adjusted = adjuster.adjust(50.0, "I pray every night that it gets easier")

        assert [a.factor for a in adjusted.adjustments] == ["Religious Coping"]
        assert adjusted.adjusted_risk == 35.0

    def test_adjusted_risk_is_clamped(self, adjuster: CulturalAdjuster) -> None:
        adjusted = adjuster.adjust(2.0, "I pray a lot")

        assert adjusted.adjusted_risk == 0.0

    def test_profile_phrases_detected(self, adjuster: CulturalAdjuster) -> None:
        adjusted = adjuster.adjust(40.0, "Me siento mal, dios me ayudará", language_code="es")

        factors = {a.factor for a in adjusted.adjustments}
        assert "Somatic Expression" in factors
        assert "Religious Coping" in factors


class TestCulturalGuidance:
    """Tests for resources and delivery notes."""

    @pytest.fixture
    def adjuster(self) -> CulturalAdjuster:
        return CulturalAdjuster()

    def test_considerations_for_family_centered_region(self, adjuster: CulturalAdjuster) -> None:
        notes = adjuster.considerations("Arabic")

        assert len(notes) == 3
        assert any("family" in note for note in notes)

    def test_western_has_no_considerations(self, adjuster: CulturalAdjuster) -> None:
        assert adjuster.considerations("Western") == []

    def test_unknown_region_resources_fall_back(self, adjuster: CulturalAdjuster) -> None:
        assert adjuster.cultural_resources("Atlantis") == adjuster.cultural_resources("Western")
