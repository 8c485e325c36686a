"""
Prometheus Metrics

Metrics for crisis detection observability. The embedding
application exposes render_metrics() on its own scrape endpoint.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)

# =============================================================================
# ANALYSIS METRICS
# =============================================================================

ANALYSES_TOTAL = Counter(
    "kindred_analyses_total",
    "Completed crisis analyses by scorer",
    ["source"],  # ml, heuristic
)

ANALYSIS_LATENCY = Histogram(
    "kindred_analysis_latency_seconds",
    "End-to-end analysis latency",
    ["source"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

INPUTS_REJECTED_TOTAL = Counter(
    "kindred_inputs_rejected_total",
    "Analysis requests rejected before scoring",
    ["reason"],  # too_short, analysis_disabled
)

BACKEND_FAILURES_TOTAL = Counter(
    "kindred_backend_failures_total",
    "ML analyzer failures",
    ["reason"],  # timeout, invalid_payload, error
)

# =============================================================================
# ALERT METRICS
# =============================================================================

ALERTS_TOTAL = Counter(
    "kindred_alerts_total",
    "Alerts built by severity",
    ["severity"],
)

ESCALATION_EVENTS_TOTAL = Counter(
    "kindred_escalation_events_total",
    "Risk escalations between consecutive analyses",
)

CRISIS_EVENTS_TOTAL = Counter(
    "kindred_crisis_events_total",
    "CrisisDetected events emitted",
)

ACTIVE_SESSIONS = Gauge(
    "kindred_active_detection_sessions",
    "Detection sessions currently started",
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "kindred_system",
    "Kindred crisis engine information",
)

SYSTEM_INFO.info({
    "version": "0.1.0",
    "environment": "development",
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_analysis(source: str, duration_seconds: float) -> None:
    """Record a completed analysis and its latency."""
    ANALYSES_TOTAL.labels(source=source).inc()
    ANALYSIS_LATENCY.labels(source=source).observe(duration_seconds)


def track_rejected_input(reason: str) -> None:
    """Record a rejected analysis request."""
    INPUTS_REJECTED_TOTAL.labels(reason=reason).inc()


def track_backend_failure(reason: str) -> None:
    """Record an analyzer failure."""
    BACKEND_FAILURES_TOTAL.labels(reason=reason).inc()


def track_alert(severity: str) -> None:
    """Record a built alert."""
    ALERTS_TOTAL.labels(severity=severity).inc()


def track_escalation() -> None:
    """Record a risk escalation."""
    ESCALATION_EVENTS_TOTAL.inc()


def track_crisis_event() -> None:
    """Record a CrisisDetected event."""
    CRISIS_EVENTS_TOTAL.inc()


def render_metrics() -> tuple[bytes, str]:
    """
    Render all metrics in Prometheus text format.

    Returns:
        (payload, content type) for the embedding app's scrape endpoint
    """
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST


def update_system_info(environment: str, version: str = "0.1.0") -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
