"""Toast presenter: per-toast auto-dismiss timers and user event plumbing."""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Sequence

from loguru import logger

from toastbox.toasts.store import Snapshot, ToastStore
from toastbox.toasts.timers import AsyncioScheduler, Scheduler, TimerHandle
from toastbox.toasts.types import Notification, ToastState, ToastView

Renderer = Callable[[Sequence[ToastView]], Any]


class ToastPresenter:
    """
    Bridges store snapshots to real-time expiry.

    Each toast is ``active`` (one timer running), ``persistent`` (no timer)
    or ``dismissed`` (untracked). A timer is acquired when a toast first
    appears in a snapshot and released when it leaves, whichever path
    removed it: explicit dismiss, expiry, eviction, ``clear()`` or
    ``close()``.
    """

    def __init__(
        self,
        store: ToastStore,
        scheduler: Scheduler | None = None,
        renderer: Renderer | None = None,
    ):
        self.store = store
        self.scheduler = scheduler or AsyncioScheduler()
        self.renderer = renderer
        self._states: dict[str, ToastState] = {}
        self._timers: dict[str, TimerHandle] = {}
        self._started_ms: dict[str, float] = {}
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self) -> "ToastPresenter":
        """Subscribe to the store and pick up toasts already in it."""
        if self._unsubscribe is not None:
            return self
        self._unsubscribe = self.store.subscribe(self._sync)
        logger.info("Toast presenter attached ({} toast(s) pending)", len(self.store))
        self._sync(self.store.snapshot())
        return self

    def close(self) -> None:
        """Unsubscribe and cancel every live timer."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            logger.info("Toast presenter closed, releasing {} timer(s)", len(self._timers))
        for toast_id in list(self._states):
            self._release(toast_id)

    def __enter__(self) -> "ToastPresenter":
        return self.attach()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Timer discipline
    # ------------------------------------------------------------------

    def _sync(self, snapshot: Snapshot) -> None:
        live = {toast.id for toast in snapshot}
        for toast_id in [tid for tid in self._states if tid not in live]:
            self._release(toast_id)

        for toast in snapshot:
            if toast.id in self._states:
                continue
            try:
                self._track(toast)
            except Exception:
                # left untracked so the next snapshot retries it
                logger.exception("Could not start timer for {}", toast.id)

        if self.renderer is not None:
            try:
                self.renderer(self.views(snapshot))
            except Exception:
                logger.exception("Toast renderer failed")

    def _track(self, toast: Notification) -> None:
        if toast.persistent:
            self._states[toast.id] = ToastState.PERSISTENT
            return
        started = self.scheduler.now_ms()
        handle = self.scheduler.call_later(toast.duration_ms, partial(self._expire, toast.id))
        self._timers[toast.id] = handle
        self._started_ms[toast.id] = started
        self._states[toast.id] = ToastState.ACTIVE
        logger.debug("Timer started for {} ({} ms)", toast.id, toast.duration_ms)

    def _release(self, toast_id: str) -> None:
        handle = self._timers.pop(toast_id, None)
        if handle is not None:
            handle.cancel()
            logger.debug("Timer cancelled for {}", toast_id)
        self._started_ms.pop(toast_id, None)
        self._states.pop(toast_id, None)

    def _expire(self, toast_id: str) -> None:
        if self._timers.pop(toast_id, None) is None:
            return
        logger.debug("Toast expired: {}", toast_id)
        if not self.store.dismiss(toast_id):
            self._release(toast_id)

    # ------------------------------------------------------------------
    # User events
    # ------------------------------------------------------------------

    def dismiss(self, toast_id: str) -> bool:
        """Close button: remove the toast. Safe to call for gone ids."""
        return self.store.dismiss(toast_id)

    def trigger_action(self, toast_id: str) -> bool:
        """
        Run the toast's action callback once. Does not dismiss the toast.

        Returns:
            True if the callback ran without raising.
        """
        toast = self.store.get(toast_id)
        if toast is None or toast.action is None:
            return False
        try:
            toast.action.on_click()
        except Exception:
            logger.exception("Action '{}' failed for {}", toast.action.label, toast_id)
            return False
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def active_timers(self) -> int:
        return len(self._timers)

    def state(self, toast_id: str) -> ToastState:
        return self._states.get(toast_id, ToastState.DISMISSED)

    def remaining_ms(self, toast_id: str) -> float | None:
        """Time left before expiry, None for persistent or untracked toasts."""
        started = self._started_ms.get(toast_id)
        toast = self.store.get(toast_id)
        if started is None or toast is None:
            return None
        elapsed = self.scheduler.now_ms() - started
        return max(0.0, toast.duration_ms - elapsed)

    def views(self, snapshot: Snapshot | None = None) -> list[ToastView]:
        """Render slots in store order."""
        if snapshot is None:
            snapshot = self.store.snapshot()
        views = []
        for toast in snapshot:
            state = self._states.get(toast.id)
            if state is None:
                state = ToastState.PERSISTENT if toast.persistent else ToastState.ACTIVE
            views.append(
                ToastView(
                    notification=toast,
                    profile=self.store.registry.profile(toast.variant),
                    state=state,
                    remaining_ms=self.remaining_ms(toast.id),
                )
            )
        return views
