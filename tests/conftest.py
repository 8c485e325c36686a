"""Tests configuration and fixtures."""

import asyncio
from typing import Any, Optional

import pytest

from kindred.config.settings import DetectionSettings
from kindred.domain.models.emotional_state import EmotionalState
from kindred.services.detection.ml_analyzer import AnalysisContext, CrisisMLAnalyzer


class FakeAnalyzer(CrisisMLAnalyzer):
    """Scripted analyzer recording every call."""

    name = "fake"

    def __init__(
        self,
        payload: Any = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.payload = payload
        self.error = error
        self.delay = delay
        self.calls: list[str] = []
        self.contexts: list[AnalysisContext] = []

    async def analyze(self, text: str, context: AnalysisContext) -> Any:
        self.calls.append(text)
        self.contexts.append(context)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload


class FakeTextInput:
    """Minimal on/off event emitter standing in for a text field."""

    def __init__(self) -> None:
        self.handlers: dict[str, list] = {}

    def on(self, event: str, handler) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler) -> None:
        if handler in self.handlers.get(event, []):
            self.handlers[event].remove(handler)

    def emit(self, event: str, value: str) -> None:
        for handler in list(self.handlers.get(event, [])):
            handler(value)


def crisis_payload(
    immediate_risk: float,
    urgency: float = 5.0,
    confidence: float = 0.9,
    **overrides: Any,
) -> dict:
    """Analyzer payload in camelCase wire format."""
    payload = {
        "hasCrisisIndicators": immediate_risk >= 70,
        "mlConfidence": confidence,
        "riskFactors": ["hopelessness"] if immediate_risk >= 40 else [],
        "emotionalState": {
            "primaryEmotion": "despair",
            "valence": -0.8,
            "arousal": 0.4,
            "dominance": -0.6,
        },
        "realTimeRisk": {
            "immediateRisk": immediate_risk,
            "interventionUrgency": urgency,
            "recommendedInterventions": [
                {"priority": 9, "description": "Call a crisis line now"},
                {"priority": 3, "description": "Journal about your day"},
            ],
        },
        "biasAdjustments": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def detection_settings() -> DetectionSettings:
    """Detection settings with a short debounce and timeout."""
    return DetectionSettings(
        debounce_ms=20,
        min_analysis_length=10,
        ml_timeout_seconds=0.2,
        default_country_code="US",
    )


@pytest.fixture
def fake_analyzer() -> FakeAnalyzer:
    return FakeAnalyzer(payload=crisis_payload(95.0, urgency=9.5))


@pytest.fixture
def make_analyzer():
    """Factory for scripted analyzers."""
    return FakeAnalyzer


@pytest.fixture
def make_payload():
    """Factory for analyzer payloads."""
    return crisis_payload


@pytest.fixture
def text_input() -> FakeTextInput:
    return FakeTextInput()


@pytest.fixture
def despair_state() -> EmotionalState:
    return EmotionalState(
        valence=-1.0,
        arousal=0.5,
        dominance=0.0,
        timestamp=1_700_000_000_000,
        confidence=0.2,
        primary_emotion="despair",
    )
