"""Resend throttle for verification codes: Idle -> Counting(n) -> Expired."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from loguru import logger

from toastbox.config import DEFAULT_RESEND_COOLDOWN_S
from toastbox.toasts.timers import AsyncioScheduler, Scheduler, TimerHandle

if TYPE_CHECKING:
    from toastbox.config import ToastConfig

TICK_MS = 1000


class CountdownState(str, Enum):
    IDLE = "idle"
    COUNTING = "counting"
    EXPIRED = "expired"


class ResendCountdown:
    """
    One-shot per-second countdown gating a "resend code" button.

    Unrelated to the toast queue: no ids, no variants, a single timer.
    """

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        cooldown_s: int | None = None,
        on_change: Callable[[CountdownState, int], Any] | None = None,
        config: ToastConfig | None = None,
    ):
        if cooldown_s is None:
            cooldown_s = config.resend_cooldown_s if config else DEFAULT_RESEND_COOLDOWN_S
        if cooldown_s <= 0:
            raise ValueError(f"cooldown_s must be > 0, got {cooldown_s}")
        self.scheduler = scheduler or AsyncioScheduler()
        self.cooldown_s = cooldown_s
        self.on_change = on_change
        self._state = CountdownState.IDLE
        self._remaining = 0
        self._timer: TimerHandle | None = None

    @property
    def state(self) -> CountdownState:
        return self._state

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def can_resend(self) -> bool:
        return self._state != CountdownState.COUNTING

    def label(self) -> str:
        if self._state == CountdownState.COUNTING:
            return f"Resend in {self._remaining}s"
        return "Resend Code"

    def start(self, seconds: int | None = None) -> bool:
        """Begin counting down. Refused while a countdown is running."""
        if self._state == CountdownState.COUNTING:
            logger.debug("Resend countdown already running ({}s left)", self._remaining)
            return False
        seconds = self.cooldown_s if seconds is None else seconds
        if seconds <= 0:
            raise ValueError(f"seconds must be > 0, got {seconds}")
        self._remaining = seconds
        self._set_state(CountdownState.COUNTING)
        if self._state == CountdownState.COUNTING:
            self._schedule()
        return True

    def cancel(self) -> None:
        """Stop the countdown and return to idle."""
        self._release()
        self._remaining = 0
        if self._state != CountdownState.IDLE:
            self._set_state(CountdownState.IDLE)

    def _schedule(self) -> None:
        self._timer = self.scheduler.call_later(TICK_MS, self._tick)

    def _release(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _tick(self) -> None:
        self._timer = None
        if self._state != CountdownState.COUNTING:
            return
        self._remaining -= 1
        if self._remaining <= 0:
            self._remaining = 0
            self._set_state(CountdownState.EXPIRED)
            return
        self._notify()
        if self._state == CountdownState.COUNTING and self._timer is None:
            self._schedule()

    def _set_state(self, state: CountdownState) -> None:
        self._state = state
        logger.debug("Resend countdown -> {} ({}s)", state.value, self._remaining)
        self._notify()

    def _notify(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self._state, self._remaining)
        except Exception:
            logger.exception("Countdown listener failed")
