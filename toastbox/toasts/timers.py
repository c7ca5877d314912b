"""
Timer seam for auto-dismiss and countdown ticks.

All delays are in milliseconds. ``AsyncioScheduler`` runs on a real event
loop; ``ManualScheduler`` is a simulated clock that only moves on
``advance()``.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Any, Callable, Protocol

from loguru import logger


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def now_ms(self) -> float: ...

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``. Must be used on the loop's thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now_ms(self) -> float:
        return self.loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay_ms) / 1000.0, callback)


class ManualTimer:
    """Handle returned by ``ManualScheduler.call_later``."""

    __slots__ = ("due_ms", "callback", "cancelled", "fired")

    def __init__(self, due_ms: float, callback: Callable[[], Any]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def live(self) -> bool:
        return not (self.cancelled or self.fired)


class ManualScheduler:
    """Simulated clock for deterministic timer tests."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._seq = itertools.count()
        self._heap: list[tuple[float, int, ManualTimer]] = []
        self.fired = 0

    def now_ms(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> ManualTimer:
        timer = ManualTimer(self._now + max(0.0, delay_ms), callback)
        heapq.heappush(self._heap, (timer.due_ms, next(self._seq), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of timers that are neither cancelled nor fired."""
        return sum(1 for _, _, timer in self._heap if timer.live)

    def advance(self, ms: float) -> int:
        """
        Move the clock forward by ``ms`` and fire every timer due by then.

        Timers scheduled by callbacks are fired too if they fall inside the
        window. Returns the number of callbacks fired.
        """
        if ms < 0:
            raise ValueError("Cannot move the clock backwards")
        target = self._now + ms
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            due, _, timer = heapq.heappop(self._heap)
            if not timer.live:
                continue
            self._now = due
            timer.fired = True
            fired += 1
            try:
                timer.callback()
            except Exception:
                logger.exception("Timer callback failed: {}", timer.callback)
        self._now = target
        self.fired += fired
        return fired
