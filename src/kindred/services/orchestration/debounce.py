"""
Debounce Timer

Single-slot cancellable timer on asyncio. Each schedule() cancels
the pending callback and replaces it, so only the last call in a
burst runs.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional

from kindred.config.logging_config import get_logger

logger = get_logger(__name__)


class DebounceTimer:
    """
    Cancel-and-replace timer.

    A callback that has started running is no longer pending and is
    not cancelled by a later schedule() or cancel().

    Usage:
        timer = DebounceTimer(delay_seconds=1.0)
        timer.schedule(lambda: session.analyze_text(text))
    """

    def __init__(self, delay_seconds: float) -> None:
        self._delay = max(0.0, delay_seconds)
        self._pending: Optional[asyncio.Task] = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """Whether a callback is waiting to fire."""
        return self._pending is not None

    def schedule(self, callback: Callable[[], Awaitable[object]]) -> None:
        """
        Run callback after the delay, replacing any pending callback.

        Must be called from a running event loop.

        Args:
            callback: Zero-argument coroutine function
        """
        self.cancel()
        task = asyncio.create_task(self._fire(callback))
        self._pending = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def cancel(self) -> bool:
        """
        Cancel the pending callback.

        Returns:
            True if a pending callback was cancelled
        """
        task, self._pending = self._pending, None
        if task is None or task.done():
            return False
        task.cancel()
        return True

    async def wait_idle(self) -> None:
        """Wait until no callback is pending or running."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _fire(self, callback: Callable[[], Awaitable[object]]) -> None:
        await asyncio.sleep(self._delay)

        # From here on the callback is running, not pending
        if self._pending is asyncio.current_task():
            self._pending = None

        try:
            await callback()
        except Exception as e:
            logger.error("Debounced callback failed", error=str(e), exc_info=True)
