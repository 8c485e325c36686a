"""
Unit Tests for Prometheus Metrics

Tests metric helpers against the default registry.
"""

from prometheus_client import REGISTRY

from kindred.infrastructure.metrics.prometheus_metrics import (
    render_metrics,
    track_analysis,
    track_backend_failure,
    track_escalation,
)


def _sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetricHelpers:
    """Tests for metric helper functions."""

    def test_track_analysis(self) -> None:
        before = _sample("kindred_analyses_total", {"source": "heuristic"})

        track_analysis("heuristic", 0.01)

        assert _sample("kindred_analyses_total", {"source": "heuristic"}) == before + 1

    def test_track_backend_failure(self) -> None:
        before = _sample("kindred_backend_failures_total", {"reason": "timeout"})

        track_backend_failure("timeout")

        assert _sample("kindred_backend_failures_total", {"reason": "timeout"}) == before + 1

    def test_track_escalation(self) -> None:
        before = _sample("kindred_escalation_events_total")

        track_escalation()

        assert _sample("kindred_escalation_events_total") == before + 1

    def test_render(self) -> None:
        payload, content_type = render_metrics()

        assert b"kindred_analyses_total" in payload
        assert content_type.startswith("text/plain")
