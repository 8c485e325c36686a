"""Metrics infrastructure package."""

from kindred.infrastructure.metrics.prometheus_metrics import (
    # Analysis metrics
    ANALYSES_TOTAL,
    ANALYSIS_LATENCY,
    INPUTS_REJECTED_TOTAL,
    BACKEND_FAILURES_TOTAL,
    # Alert metrics
    ALERTS_TOTAL,
    ESCALATION_EVENTS_TOTAL,
    CRISIS_EVENTS_TOTAL,
    ACTIVE_SESSIONS,
    # Helpers
    track_analysis,
    track_rejected_input,
    track_backend_failure,
    track_alert,
    track_escalation,
    track_crisis_event,
    render_metrics,
    update_system_info,
)

__all__ = [
    "ANALYSES_TOTAL",
    "ANALYSIS_LATENCY",
    "INPUTS_REJECTED_TOTAL",
    "BACKEND_FAILURES_TOTAL",
    "ALERTS_TOTAL",
    "ESCALATION_EVENTS_TOTAL",
    "CRISIS_EVENTS_TOTAL",
    "ACTIVE_SESSIONS",
    "track_analysis",
    "track_rejected_input",
    "track_backend_failure",
    "track_alert",
    "track_escalation",
    "track_crisis_event",
    "render_metrics",
    "update_system_info",
]
