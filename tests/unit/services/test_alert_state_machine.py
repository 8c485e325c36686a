"""
Unit Tests for Alert State Machine

Tests tier classification, alert construction and escalation
tracking.
"""

import pytest

from kindred.domain.enums.alert_severity import AlertSeverity
from kindred.domain.models.crisis_analysis import CrisisAnalysisResult
from kindred.domain.models.emotional_state import EmotionalState
from kindred.domain.models.ml_analysis import BiasAdjustment
from kindred.services.safety.alert_state_machine import AlertStateMachine, SeverityThresholds


def _result(risk_level: float, **kwargs) -> CrisisAnalysisResult:
    return CrisisAnalysisResult(
        risk_level=risk_level,
        confidence=0.9,
        emotional_state=EmotionalState(valence=-0.7, primary_emotion="sadness"),
        **kwargs,
    )


class TestClassification:
    """Tests for risk-to-tier mapping."""

    @pytest.fixture
    def machine(self) -> AlertStateMachine:
        return AlertStateMachine()

    @pytest.mark.parametrize(
        "risk,expected",
        [
            (0.0, AlertSeverity.NONE),
            (19.9, AlertSeverity.NONE),
            (20.0, AlertSeverity.LOW),
            (39.9, AlertSeverity.LOW),
            (40.0, AlertSeverity.MEDIUM),
            (60.0, AlertSeverity.HIGH),
            (79.9, AlertSeverity.HIGH),
            (80.0, AlertSeverity.CRITICAL),
            (89.9, AlertSeverity.CRITICAL),
            (90.0, AlertSeverity.IMMEDIATE),
            (100.0, AlertSeverity.IMMEDIATE),
        ],
    )
    def test_tier_boundaries(self, machine: AlertStateMachine, risk: float, expected: AlertSeverity) -> None:
        assert machine.classify(risk) == expected

    def test_monotonic(self, machine: AlertStateMachine) -> None:
        """Higher risk never maps to a lower tier."""
        previous = AlertSeverity.NONE
        for step in range(0, 201):
            severity = machine.classify(step / 2)
            assert severity >= previous
            previous = severity

    def test_custom_thresholds(self) -> None:
        machine = AlertStateMachine(thresholds=SeverityThresholds(10, 20, 30, 40, 50))

        assert machine.classify(45) == AlertSeverity.CRITICAL

    @pytest.mark.parametrize(
        "bounds",
        [
            (20, 40, 40, 80, 90),
            (50, 40, 60, 80, 90),
            (-1, 40, 60, 80, 90),
            (20, 40, 60, 80, 101),
        ],
    )
    def test_invalid_thresholds_rejected(self, bounds: tuple) -> None:
        with pytest.raises(ValueError):
            SeverityThresholds(*bounds)


class TestBuildAlert:
    """Tests for alert construction."""

    @pytest.fixture
    def machine(self) -> AlertStateMachine:
        return AlertStateMachine()

    def test_immediate_alert(self, machine: AlertStateMachine) -> None:
        alert = machine.build_alert(_result(95.0), resources=["Emergency services: 911"])

        assert alert.show
        assert alert.severity == AlertSeverity.IMMEDIATE
        assert alert.emergency_mode
        assert alert.resources == ["Emergency services: 911"]
        assert alert.message
        assert alert.actions
        assert alert.risk_level == 95.0
        assert alert.emotional_state == "sadness"

    def test_high_is_not_emergency(self, machine: AlertStateMachine) -> None:
        alert = machine.build_alert(_result(65.0))

        assert alert.show
        assert alert.severity == AlertSeverity.HIGH
        assert not alert.emergency_mode

    def test_low_risk_hides_alert(self, machine: AlertStateMachine) -> None:
        alert = machine.build_alert(_result(10.0), resources=["should not appear"])

        assert not alert.show
        assert alert.severity == AlertSeverity.NONE
        assert alert.resources == []

    def test_no_risk_data_hides_alert(self, machine: AlertStateMachine) -> None:
        alert = machine.build_alert(_result(0.0, has_risk_data=False))

        assert not alert.show
        assert alert.severity == AlertSeverity.NONE
        assert not alert.emergency_mode

    def test_interventions_default_to_result(self, machine: AlertStateMachine) -> None:
        result = _result(50.0, intervention_recommendations=["Try a grounding exercise"])

        assert machine.build_alert(result).interventions == ["Try a grounding exercise"]

    def test_culturally_appropriate_flag(self, machine: AlertStateMachine) -> None:
        result = _result(50.0, bias_adjustments=[BiasAdjustment(factor="Stigma", adjustment=0.2)])

        assert machine.build_alert(result).culturally_appropriate

    def test_dismiss_keeps_content(self, machine: AlertStateMachine) -> None:
        alert = machine.build_alert(_result(85.0))

        dismissed = machine.dismiss(alert)

        assert not dismissed.show
        assert dismissed.severity == AlertSeverity.CRITICAL
        assert dismissed.message == alert.message
        assert alert.show


class TestEscalation:
    """Tests for escalation tracking."""

    @pytest.fixture
    def machine(self) -> AlertStateMachine:
        return AlertStateMachine(escalation_delta=20.0)

    def test_first_check_never_escalates(self, machine: AlertStateMachine) -> None:
        assert not machine.check_escalation(95.0)
        assert machine.previous_risk == 95.0

    def test_large_rise_escalates(self, machine: AlertStateMachine) -> None:
        machine.check_escalation(30.0)

        assert machine.check_escalation(80.0)

    def test_small_rise_does_not_escalate(self, machine: AlertStateMachine) -> None:
        machine.check_escalation(30.0)

        assert not machine.check_escalation(40.0)

    def test_exact_delta_does_not_escalate(self, machine: AlertStateMachine) -> None:
        machine.check_escalation(30.0)

        assert not machine.check_escalation(50.0)

    def test_baseline_updates_every_call(self, machine: AlertStateMachine) -> None:
        """A slow climb never escalates."""
        fired = [machine.check_escalation(level) for level in (10, 25, 40, 55, 70, 85)]

        assert not any(fired)

    def test_reset_clears_baseline(self, machine: AlertStateMachine) -> None:
        machine.check_escalation(10.0)
        machine.reset_escalation()

        assert machine.previous_risk is None
        assert not machine.check_escalation(90.0)
