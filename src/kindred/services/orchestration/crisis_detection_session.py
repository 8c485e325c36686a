"""
Crisis Detection Session

Per-conversation orchestrator. Runs estimation, scoring, cultural
adjustment, recommendation and alerting for each text, keeps the
bounded history, and emits typed events to UI collaborators.

ARCHITECTURE: Text → Estimator → Scorer → {History, Alert} →
Recommender → Session state + Events

SAFETY-CRITICAL: Nothing raises past analyze_text. Every failure
degrades to "no new information" and the previous alert stays.

PRIVACY: Raw text is never logged or stored. Only lengths, scores
and identifiers leave this module.
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import replace
from typing import Optional, Protocol
from uuid import uuid4

from kindred.config.logging_config import get_logger, session_log_context
from kindred.config.settings import DetectionSettings, get_settings
from kindred.domain.enums.alert_severity import AlertSeverity
from kindred.domain.enums.trend import AnalysisSource
from kindred.domain.models.crisis_alert import CrisisAlert, InterventionRecommendation
from kindred.domain.models.crisis_analysis import CrisisAnalysisResult
from kindred.domain.models.emotional_state import EmotionalState
from kindred.domain.models.ml_analysis import MLAnalysisResult
from kindred.domain.models.trends import EmotionalTrendResult, ModelMetrics, RiskPrediction
from kindred.infrastructure.metrics.prometheus_metrics import (
    ACTIVE_SESSIONS,
    track_alert,
    track_analysis,
    track_backend_failure,
    track_crisis_event,
    track_escalation,
    track_rejected_input,
)
from kindred.infrastructure.monitoring.sentry_integration import capture_exception_with_context
from kindred.services.detection.emotional_state_estimator import EmotionalStateEstimator
from kindred.services.detection.ml_analyzer import (
    AnalysisContext,
    AnalysisTimeoutError,
    CrisisMLAnalyzer,
    InvalidAnalysisPayloadError,
    coerce_payload,
)
from kindred.services.orchestration.debounce import DebounceTimer
from kindred.services.orchestration.events import (
    CrisisDetected,
    CrisisEvent,
    CrisisEventBus,
    Handler,
    InterventionRecommended,
    RiskEscalation,
)
from kindred.services.safety.alert_state_machine import AlertStateMachine
from kindred.services.safety.cultural_adjustment import CulturalAdjuster
from kindred.services.safety.emergency_resources import EmergencyResourceResolver
from kindred.services.safety.history_tracker import HistoryTracker
from kindred.services.safety.intervention_recommender import InterventionRecommender
from kindred.services.safety.risk_scorer import RiskScorer

logger = get_logger(__name__)

# Text input events fed to the debounced analyzer
MONITORED_EVENTS = ("input", "paste")


class TextInputSource(Protocol):
    """Anything that emits text values on named events."""

    def on(self, event: str, handler: Callable[[str], None]) -> None: ...

    def off(self, event: str, handler: Callable[[str], None]) -> None: ...


class CrisisDetectionSession:
    """
    Crisis detection state for one active conversation.

    Owns the history buffers, the alert and the event bus. Safe to
    call concurrently from one event loop; the most recently
    completed analysis wins.

    Usage:
        async with CrisisDetectionSession(settings.detection, analyzer) as session:
            session.subscribe(CrisisDetected, show_crisis_banner)
            result = await session.analyze_text(message)
            alert = session.crisis_alert
    """

    def __init__(
        self,
        config: Optional[DetectionSettings] = None,
        analyzer: Optional[CrisisMLAnalyzer] = None,
        *,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
        language_code: str = "en",
        cultural_context: Optional[str] = None,
        country_code: Optional[str] = None,
        estimator: Optional[EmotionalStateEstimator] = None,
        scorer: Optional[RiskScorer] = None,
        recommender: Optional[InterventionRecommender] = None,
        alert_machine: Optional[AlertStateMachine] = None,
        cultural_adjuster: Optional[CulturalAdjuster] = None,
        resource_resolver: Optional[EmergencyResourceResolver] = None,
        event_bus: Optional[CrisisEventBus] = None,
    ) -> None:
        """
        Initialize session.

        Args:
            config: Detection settings, defaults to application settings
            analyzer: Optional ML analyzer; the heuristic is used without one
            session_id: Identifier for logs and events
            user_id: Forwarded to the analyzer
            language_code: Language of the conversation
            cultural_context: Cultural region, if known
            country_code: Country for crisis resources
            estimator: Emotional state estimator
            scorer: Risk scorer
            recommender: Intervention recommender
            alert_machine: Alert state machine
            cultural_adjuster: Cultural adjuster
            resource_resolver: Emergency resource resolver
            event_bus: Event bus, a private one by default
        """
        self._config = config or get_settings().detection
        self._analyzer = analyzer
        self.session_id = session_id or str(uuid4())
        self._context = AnalysisContext(
            user_id=user_id,
            language_code=language_code,
            cultural_context=cultural_context,
        )
        self._country_code = country_code or self._config.default_country_code

        self._resolver = resource_resolver or EmergencyResourceResolver()
        self._estimator = estimator or EmotionalStateEstimator()
        self._scorer = scorer or RiskScorer(confidence_threshold=self._config.confidence_threshold)
        self._recommender = recommender or InterventionRecommender(
            resolver=self._resolver,
            country_code=self._country_code,
        )
        self._alert_machine = alert_machine or AlertStateMachine(
            escalation_delta=self._config.escalation_delta,
        )
        self._cultural_adjuster = cultural_adjuster or CulturalAdjuster()
        self._bus = event_bus or CrisisEventBus()

        self._history = HistoryTracker(
            emotional_history_limit=self._config.emotional_history_limit,
            risk_trend_window=self._config.risk_trend_window,
            max_history_size=self._config.max_history_size,
        )
        self._debounce = DebounceTimer(self._config.debounce_ms / 1000)

        self._last_analysis: Optional[CrisisAnalysisResult] = None
        self._alert = CrisisAlert()
        self._suggestions: list[str] = []
        self._recommendations: list[InterventionRecommendation] = []
        self._metrics = ModelMetrics()
        self._analysis_count = 0
        self._in_flight = 0

        self._active = False
        self._disposed = False
        self._detachers: list[Callable[[], None]] = []

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self) -> "CrisisDetectionSession":
        """
        Mark the session active. Idempotent.

        Raises:
            RuntimeError: If the session was disposed
        """
        if self._disposed:
            raise RuntimeError("Cannot start a disposed detection session")
        if not self._active:
            self._active = True
            ACTIVE_SESSIONS.inc()
            logger.info("Detection session started", detection_session_id=self.session_id)
        return self

    def stop(self) -> None:
        """Cancel the pending debounced analysis and mark inactive."""
        self._debounce.cancel()
        if self._active:
            self._active = False
            ACTIVE_SESSIONS.dec()
            logger.info("Detection session stopped", detection_session_id=self.session_id)

    def dispose(self) -> None:
        """
        Tear the session down.

        Stops it, detaches monitored inputs and drops all subscribers.
        Analyses still in flight complete but their results are dropped.
        """
        if self._disposed:
            return
        self.stop()
        for detach in list(self._detachers):
            detach()
        self._detachers.clear()
        self._bus.clear()
        self._disposed = True
        logger.info("Detection session disposed", detection_session_id=self.session_id)

    async def __aenter__(self) -> "CrisisDetectionSession":
        return self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # =========================================================================
    # ANALYSIS
    # =========================================================================

    async def analyze_text(
        self,
        text: str,
        *,
        immediate: bool = False,
        track_history: bool = True,
    ) -> Optional[CrisisAnalysisResult]:
        """
        Analyze one text and update session state.

        Args:
            text: User-authored text
            immediate: Cancel any pending debounced analysis once accepted
            track_history: Append to the history buffers

        Returns:
            CrisisAnalysisResult, or None when the text was rejected,
            analysis is disabled, the analyzer failed without fallback,
            or the session was disposed meanwhile
        """
        with session_log_context(self.session_id):
            if self._disposed:
                logger.warning("Analysis requested on disposed session")
                return None

            if text is None or len(text.strip()) < self._config.min_analysis_length:
                track_rejected_input("too_short")
                logger.debug(
                    "Text below minimum analysis length",
                    text_length=len(text or ""),
                    min_length=self._config.min_analysis_length,
                )
                return None

            use_ml = self._config.enable_ml_analysis and self._analyzer is not None
            if not use_ml and not self._config.allow_heuristic_fallback:
                track_rejected_input("analysis_disabled")
                logger.warning(
                    "ML analysis unavailable and heuristic fallback disabled",
                    ml_enabled=self._config.enable_ml_analysis,
                    analyzer_configured=self._analyzer is not None,
                )
                return None

            if immediate:
                self._debounce.cancel()

            self._in_flight += 1
            started = time.perf_counter()
            try:
                state = self._estimator.estimate(text)

                ml_result: Optional[MLAnalysisResult] = None
                if use_ml:
                    try:
                        ml_result = await self._call_analyzer(text)
                    except Exception as e:
                        self._record_backend_failure(e)
                        if not self._config.allow_heuristic_fallback:
                            return None
                        logger.info("Falling back to heuristic scoring")

                if self._disposed:
                    logger.info("Dropping analysis completed after dispose")
                    return None

                result = self._scorer.analyze(state, ml_result, text)
                considerations = self._apply_cultural_context(result, text)
                recommendations = self._recommender.recommend(result, considerations)
                if not result.intervention_recommendations:
                    result.intervention_recommendations = [r.description for r in recommendations]

                events = self._apply_result(result, recommendations, track_history)

                track_analysis(result.source.value, time.perf_counter() - started)
                logger.info(
                    "Text analyzed",
                    analysis_id=result.analysis_id,
                    source=result.source.value,
                    risk_level=result.risk_level,
                    confidence=round(result.confidence, 3),
                    severity=self._alert.severity.label,
                    text_length=len(text),
                )

                for event in events:
                    await self._bus.publish(event)
                return result
            finally:
                self._in_flight -= 1

    def analyze_text_debounced(self, text: str) -> None:
        """
        Analyze text after the debounce delay of inactivity.

        Each call cancels the pending one, so only the last text of a
        burst is analyzed. Must be called from a running event loop.

        Args:
            text: User-authored text
        """
        if self._disposed:
            return
        self._debounce.schedule(lambda: self.analyze_text(text, track_history=True))

    async def wait_for_pending(self) -> None:
        """Wait for the pending debounced analysis, if any, to finish."""
        await self._debounce.wait_idle()

    async def _call_analyzer(self, text: str) -> MLAnalysisResult:
        analyzer = self._analyzer
        timeout = self._config.ml_timeout_seconds
        try:
            payload = await asyncio.wait_for(analyzer.analyze(text, self._context), timeout)
        except asyncio.TimeoutError as e:
            raise AnalysisTimeoutError(analyzer.name, timeout) from e
        return coerce_payload(payload, analyzer.name)

    def _record_backend_failure(self, error: Exception) -> None:
        if isinstance(error, AnalysisTimeoutError):
            reason = "timeout"
        elif isinstance(error, InvalidAnalysisPayloadError):
            reason = "invalid_payload"
        else:
            reason = "error"

        self._metrics.backend_failures += 1
        track_backend_failure(reason)
        # Error messages may contain user text; log the type only
        logger.error(
            "ML analysis failed",
            reason=reason,
            analyzer=getattr(self._analyzer, "name", "unknown"),
            error_type=type(error).__name__,
        )
        capture_exception_with_context(
            error,
            session_id=self.session_id,
            extra={"reason": reason, "analyzer": getattr(self._analyzer, "name", "unknown")},
        )

    def _apply_cultural_context(self, result: CrisisAnalysisResult, text: str) -> list[str]:
        if not self._config.enable_cultural_context:
            return []

        adjustment = self._cultural_adjuster.adjust(
            result.risk_level,
            text,
            cultural_context=self._context.cultural_context or result.cultural_context,
            language_code=self._context.language_code,
        )
        result.cultural_adjustment = adjustment
        if result.cultural_context is None:
            result.cultural_context = adjustment.region
        return self._cultural_adjuster.considerations(adjustment.region)

    def _apply_result(
        self,
        result: CrisisAnalysisResult,
        recommendations: list[InterventionRecommendation],
        track_history: bool,
    ) -> list[CrisisEvent]:
        """Update state synchronously and return the events to publish."""
        self._last_analysis = result
        self._analysis_count += 1
        self._metrics.record(result.confidence, from_ml=result.source == AnalysisSource.ML)

        if track_history:
            self._history.append_analysis(result)
            if self._config.enable_emotional_tracking:
                self._history.append_emotional_state(result.emotional_state)
            if result.has_risk_data:
                self._history.append_risk_level(result.risk_level)

        self._suggestions = list(result.intervention_recommendations)
        self._recommendations = recommendations

        severity = (
            self._alert_machine.classify(result.risk_level)
            if result.has_risk_data else AlertSeverity.NONE
        )
        self._alert = self._alert_machine.build_alert(
            result,
            resources=self._alert_resources(severity),
            interventions=self._suggestions,
        )
        track_alert(severity.label)

        events: list[CrisisEvent] = []
        if self._is_crisis(result):
            track_crisis_event()
            events.append(CrisisDetected(self.session_id, result=result))

        if result.has_risk_data:
            previous = self._alert_machine.previous_risk
            if self._alert_machine.check_escalation(result.risk_level):
                track_escalation()
                logger.warning(
                    "Risk escalation detected",
                    risk_level=result.risk_level,
                    previous_risk_level=previous,
                )
                events.append(RiskEscalation(
                    self.session_id,
                    risk_level=result.risk_level,
                    previous_risk_level=previous,
                ))

        if self._suggestions:
            events.append(InterventionRecommended(
                self.session_id,
                recommendations=tuple(self._suggestions),
            ))
        return events

    def _is_crisis(self, result: CrisisAnalysisResult) -> bool:
        if result.has_crisis_indicators:
            return True
        return (
            result.has_risk_data
            and result.risk_level >= self._config.crisis_risk_floor
            and result.confidence >= self._config.confidence_threshold
        )

    def _alert_resources(self, severity: AlertSeverity) -> list[str]:
        resources = self._resolver.alert_resources(self._country_code, severity)
        if resources and self._config.enable_cultural_context:
            region = self._cultural_adjuster.resolve_profile(
                self._context.cultural_context,
                self._context.language_code,
            ).region
            for resource in self._cultural_adjuster.cultural_resources(region):
                if resource not in resources:
                    resources.append(resource)
        return resources

    # =========================================================================
    # STATE CONTROL
    # =========================================================================

    def clear_history(self) -> None:
        """
        Empty history, forget the last analysis and reset counters.

        The current alert is left as it is.
        """
        self._history.clear()
        self._last_analysis = None
        self._analysis_count = 0
        self._suggestions = []
        self._recommendations = []
        self._alert_machine.reset_escalation()
        logger.info("Detection history cleared", detection_session_id=self.session_id)

    def dismiss_alert(self) -> None:
        """Hide the current alert, keeping its severity and content."""
        self._alert = self._alert_machine.dismiss(self._alert)

    def monitor_text_input(self, source: TextInputSource) -> Callable[[], None]:
        """
        Feed a text source's input and paste events to the debounced analyzer.

        Args:
            source: Object with on/off event registration

        Returns:
            Callable detaching the listeners; a no-op when auto-analysis is off
        """
        if not self._config.auto_analyze or self._disposed:
            return lambda: None

        def handle(value: str) -> None:
            self.analyze_text_debounced(value)

        for event in MONITORED_EVENTS:
            source.on(event, handle)

        detached = False

        def detach() -> None:
            nonlocal detached
            if detached:
                return
            detached = True
            for event in MONITORED_EVENTS:
                source.off(event, handle)
            if detach in self._detachers:
                self._detachers.remove(detach)

        self._detachers.append(detach)
        return detach

    def subscribe(self, event_type: type[CrisisEvent], handler: Handler) -> Callable[[], None]:
        """Register an event handler; returns an unsubscribe callable."""
        return self._bus.subscribe(event_type, handler)

    # =========================================================================
    # EXPOSED STATE
    # =========================================================================

    @property
    def config(self) -> DetectionSettings:
        return self._config

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def is_analyzing(self) -> bool:
        return self._in_flight > 0

    @property
    def last_analysis(self) -> Optional[CrisisAnalysisResult]:
        return self._last_analysis

    @property
    def crisis_alert(self) -> CrisisAlert:
        return self._alert

    @property
    def emotional_history(self) -> list[EmotionalState]:
        return self._history.emotional_history

    @property
    def risk_trend(self) -> list[float]:
        return self._history.risk_trend

    @property
    def analysis_history(self) -> list[CrisisAnalysisResult]:
        return self._history.analysis_history

    @property
    def intervention_suggestions(self) -> list[str]:
        return list(self._suggestions)

    @property
    def recommendations(self) -> list[InterventionRecommendation]:
        """Rule-based recommendations for the last analysis."""
        return list(self._recommendations)

    @property
    def model_metrics(self) -> ModelMetrics:
        return replace(self._metrics)

    @property
    def analysis_count(self) -> int:
        return self._analysis_count

    @property
    def current_risk_level(self) -> float:
        result = self._last_analysis
        if result is None or not result.has_risk_data:
            return 0.0
        return result.risk_level

    @property
    def current_emotional_state(self) -> str:
        if self._last_analysis is None:
            return "neutral"
        return self._last_analysis.emotional_state.primary_emotion

    @property
    def has_crisis_indicators(self) -> bool:
        return bool(self._last_analysis and self._last_analysis.has_crisis_indicators)

    @property
    def is_emergency(self) -> bool:
        return self._alert.emergency_mode

    @property
    def ml_confidence(self) -> float:
        result = self._last_analysis
        if result is None or result.source != AnalysisSource.ML:
            return 0.0
        return result.confidence

    @property
    def intervention_urgency(self) -> float:
        return self._last_analysis.intervention_urgency if self._last_analysis else 0.0

    def get_emotional_trend(self) -> EmotionalTrendResult:
        return self._history.get_emotional_trend()

    def get_risk_prediction(self) -> RiskPrediction:
        return self._history.get_risk_prediction()

    def get_personalized_interventions(self) -> list[InterventionRecommendation]:
        """Analyzer-provided interventions for the last analysis, best first."""
        considerations: list[str] = []
        result = self._last_analysis
        if result is not None and result.cultural_adjustment is not None:
            considerations = self._cultural_adjuster.considerations(result.cultural_adjustment.region)
        return self._recommender.personalize(result, considerations)
