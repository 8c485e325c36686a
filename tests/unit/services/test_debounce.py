"""
Unit Tests for Debounce Timer

Tests cancel-and-replace scheduling.
"""

import asyncio

import pytest

from kindred.services.orchestration.debounce import DebounceTimer


class TestDebounceTimer:
    """Test suite for DebounceTimer."""

    @pytest.mark.asyncio
    async def test_only_last_call_fires(self) -> None:
        timer = DebounceTimer(0.02)
        fired = []

        for value in ("A", "B", "C"):
            async def callback(value: str = value) -> None:
                fired.append(value)
            timer.schedule(callback)

        await timer.wait_idle()

        assert fired == ["C"]
        assert not timer.pending

    @pytest.mark.asyncio
    async def test_cancel(self) -> None:
        timer = DebounceTimer(0.05)
        fired = []

        async def callback() -> None:
            fired.append(True)

        timer.schedule(callback)

        assert timer.pending
        assert timer.cancel()
        assert not timer.cancel()

        await asyncio.sleep(0.08)
        assert fired == []

    @pytest.mark.asyncio
    async def test_calls_spaced_beyond_delay_all_fire(self) -> None:
        timer = DebounceTimer(0.01)
        fired = []

        async def callback() -> None:
            fired.append(True)

        timer.schedule(callback)
        await timer.wait_idle()
        timer.schedule(callback)
        await timer.wait_idle()

        assert len(fired) == 2

    @pytest.mark.asyncio
    async def test_failing_callback_is_contained(self) -> None:
        timer = DebounceTimer(0.0)

        async def callback() -> None:
            raise RuntimeError("analysis failed")

        timer.schedule(callback)
        await timer.wait_idle()

        assert not timer.pending

    def test_negative_delay_clamped(self) -> None:
        assert DebounceTimer(-1.0).delay_seconds == 0.0
