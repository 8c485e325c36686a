"""
Emergency Resources

Jurisdiction-aware crisis resources attached to alerts and
crisis-line interventions. Built-in entries can be overridden
from a JSON file.

LEGAL_REVIEW_REQUIRED: Every number must be verified for its
jurisdiction before production use.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from kindred.config.logging_config import get_logger
from kindred.domain.enums.alert_severity import AlertSeverity

logger = get_logger(__name__)


@dataclass(frozen=True)
class EmergencyResource:
    """
    A single crisis resource.

    Attributes:
        name: Resource name
        resource_type: hotline, text, website or chat
        contact: Phone number, short code or URL
        available_24_7: Whether always staffed
        languages: Supported language codes
    """

    name: str
    resource_type: str
    contact: str
    available_24_7: bool = True
    languages: tuple[str, ...] = ("en",)

    def display(self) -> str:
        """Single-line display string."""
        suffix = " (24/7)" if self.available_24_7 else ""
        return f"{self.name}: {self.contact}{suffix}"


@dataclass
class JurisdictionResources:
    """Crisis resources for one country."""

    country_code: str
    country_name: str
    emergency_number: str = ""
    resources: list[EmergencyResource] = field(default_factory=list)

    def hotlines(self) -> list[EmergencyResource]:
        return [r for r in self.resources if r.resource_type == "hotline"]


def _hotline(name: str, contact: str, always: bool = True, *languages: str) -> EmergencyResource:
    return EmergencyResource(name, "hotline", contact, always, languages or ("en",))


INTERNATIONAL = JurisdictionResources(
    country_code="INTL",
    country_name="International",
    resources=[
        EmergencyResource(
            "International Association for Suicide Prevention",
            "website",
            "https://www.iasp.info/resources/Crisis_Centres/",
        ),
        EmergencyResource("Befrienders Worldwide", "website", "https://www.befrienders.org/"),
    ],
)

BUILT_IN_RESOURCES: dict[str, JurisdictionResources] = {
    "US": JurisdictionResources("US", "United States", "911", [
        _hotline("988 Suicide & Crisis Lifeline", "988", True, "en", "es"),
        EmergencyResource("Crisis Text Line", "text", "Text HOME to 741741"),
        _hotline("SAMHSA National Helpline", "1-800-662-4357"),
    ]),
    "GB": JurisdictionResources("GB", "United Kingdom", "999", [
        _hotline("Samaritans", "116 123"),
        EmergencyResource("SHOUT", "text", "Text SHOUT to 85258"),
    ]),
    "SA": JurisdictionResources("SA", "Saudi Arabia", "911", [
        _hotline("National Mental Health Line", "920033360", True, "ar", "en"),
    ]),
    "AE": JurisdictionResources("AE", "United Arab Emirates", "999", [
        _hotline("Dubai Health Authority Mental Health", "800342", False, "ar", "en"),
    ]),
    "EG": JurisdictionResources("EG", "Egypt", "123", [
        _hotline("Befrienders Cairo", "+20 2 7621602", False, "ar", "en"),
    ]),
}


class EmergencyResourceResolver:
    """
    Resolves crisis resources by country code.

    Unknown countries fall back to international directories.

    Usage:
        resolver = EmergencyResourceResolver()
        lines = resolver.alert_resources("US", AlertSeverity.IMMEDIATE)
    """

    def __init__(self, config_path: Optional[str | Path] = None) -> None:
        """
        Initialize resolver.

        Args:
            config_path: Optional JSON file overriding built-in countries
        """
        self._resources = dict(BUILT_IN_RESOURCES)
        if config_path is not None and Path(config_path).exists():
            self._load_config(Path(config_path))

    def _load_config(self, config_path: Path) -> None:
        """
        Merge countries from a JSON file.

        Expected shape:
            {"CA": {"country_name": "Canada", "emergency_number": "911",
                    "resources": [{"name": ..., "resource_type": ..., "contact": ...}]}}
        """
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
            for country_code, country_data in data.items():
                resources = [
                    EmergencyResource(
                        name=r["name"],
                        resource_type=r.get("resource_type", "hotline"),
                        contact=r["contact"],
                        available_24_7=r.get("available_24_7", True),
                        languages=tuple(r.get("languages", ["en"])),
                    )
                    for r in country_data.get("resources", [])
                ]
                self._resources[country_code.upper()] = JurisdictionResources(
                    country_code=country_code.upper(),
                    country_name=country_data.get("country_name", country_code),
                    emergency_number=country_data.get("emergency_number", ""),
                    resources=resources,
                )
        except (OSError, ValueError, KeyError, AttributeError) as e:
            logger.error("Failed to load resources config", path=str(config_path), error=str(e))
            return

        logger.info(
            "Loaded emergency resources config",
            path=str(config_path),
            jurisdiction_count=len(data),
        )

    def get_resources(self, country_code: str) -> JurisdictionResources:
        """
        Resources for a country.

        Args:
            country_code: ISO country code

        Returns:
            JurisdictionResources, international fallback when unknown
        """
        resources = self._resources.get((country_code or "").upper())
        if resources is None:
            logger.warning("No resources for jurisdiction, using default", country_code=country_code)
            return INTERNATIONAL
        return resources

    def hotline_resources(self, country_code: str) -> list[str]:
        """Display strings for crisis hotlines, falling back to all resources."""
        jurisdiction = self.get_resources(country_code)
        hotlines = jurisdiction.hotlines() or jurisdiction.resources
        return [r.display() for r in hotlines]

    def alert_resources(self, country_code: str, severity: AlertSeverity) -> list[str]:
        """
        Resources to display on an alert.

        Emergency tiers list the emergency number first; lower tiers
        show at most the top two resources.

        Args:
            country_code: ISO country code
            severity: Alert tier

        Returns:
            Display strings, empty for NONE
        """
        if severity == AlertSeverity.NONE:
            return []

        jurisdiction = self.get_resources(country_code)
        lines = [r.display() for r in jurisdiction.resources]
        if not severity.is_emergency:
            return lines[:2]

        if jurisdiction.emergency_number:
            lines.insert(0, f"Emergency services: {jurisdiction.emergency_number}")
        return lines

    def list_supported_countries(self) -> list[str]:
        return list(self._resources)
