"""
Crisis Event Bus

Typed events emitted by a detection session and a per-session
subscriber registry. Handlers may be plain functions or coroutines.

SAFETY_NOTE: A failing handler is logged and skipped. It never
prevents other handlers from seeing a crisis event.
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TypeVar, Union

from kindred.config.logging_config import get_logger
from kindred.domain.models.crisis_analysis import CrisisAnalysisResult

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CrisisEvent:
    """Base class for session events."""

    session_id: str
    timestamp: datetime = field(default_factory=_utc_now, kw_only=True)


@dataclass(frozen=True)
class CrisisDetected(CrisisEvent):
    """Crisis indicators were found, or risk reached the crisis floor."""

    result: CrisisAnalysisResult


@dataclass(frozen=True)
class RiskEscalation(CrisisEvent):
    """Risk rose by more than the escalation delta since the previous analysis."""

    risk_level: float
    previous_risk_level: float


@dataclass(frozen=True)
class InterventionRecommended(CrisisEvent):
    """Non-empty intervention recommendations are available."""

    recommendations: tuple[str, ...]


E = TypeVar("E", bound=CrisisEvent)
Handler = Callable[[E], Union[None, Awaitable[None]]]


class CrisisEventBus:
    """
    Per-session observer registry.

    Usage:
        bus = CrisisEventBus()
        unsubscribe = bus.subscribe(CrisisDetected, on_crisis)
        ...
        unsubscribe()
    """

    def __init__(self) -> None:
        self._handlers: dict[type[CrisisEvent], list[Handler]] = {}

    def subscribe(self, event_type: type[E], handler: Handler) -> Callable[[], None]:
        """
        Register a handler for one event type.

        Args:
            event_type: Event class to listen for
            handler: Sync or async callable taking the event

        Returns:
            Callable that removes this registration
        """
        self._handlers.setdefault(event_type, []).append(handler)

        def unsubscribe() -> None:
            self.unsubscribe(event_type, handler)

        return unsubscribe

    def unsubscribe(self, event_type: type[CrisisEvent], handler: Handler) -> None:
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def subscriber_count(self, event_type: Optional[type[CrisisEvent]] = None) -> int:
        if event_type is not None:
            return len(self._handlers.get(event_type, []))
        return sum(len(h) for h in self._handlers.values())

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    async def publish(self, event: CrisisEvent) -> None:
        """
        Deliver an event to its subscribers in registration order.

        Args:
            event: Event to deliver
        """
        # Copy so handlers may unsubscribe while being called
        for handler in list(self._handlers.get(type(event), [])):
            try:
                outcome = handler(event)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    event_type=type(event).__name__,
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                    exc_info=True,
                )
