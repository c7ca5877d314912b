"""
Toast store: the single ordered registry of notifications pending display.

Example usage:

    from toastbox.toasts import ToastStore

    store = ToastStore()
    unsubscribe = store.subscribe(lambda toasts: print([t.title for t in toasts]))
    toast_id = store.enqueue("success", "Saved", "Your changes were saved")
    store.dismiss(toast_id)
    unsubscribe()
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Callable, Iterator, Sequence

from loguru import logger

from toastbox.config import DEFAULT_DURATION_MS, DEFAULT_MAX_VISIBLE
from toastbox.toasts.errors import InvalidDuration, InvalidTitle
from toastbox.toasts.types import Notification, ToastAction, Variant
from toastbox.toasts.variants import VariantRegistry

if TYPE_CHECKING:
    from toastbox.config import ToastConfig

Snapshot = tuple[Notification, ...]
Listener = Callable[[Snapshot], None]


def _validate_title(title: object) -> str:
    if not isinstance(title, str) or not title.strip():
        raise InvalidTitle("Toast title must be a non-empty string", value=title)
    return title.strip()


def _validate_duration(duration_ms: object) -> int:
    # bool is an int subclass but never a meaningful duration
    if isinstance(duration_ms, bool) or not isinstance(duration_ms, int):
        raise InvalidDuration(f"Toast duration must be an integer, got {duration_ms!r}", value=duration_ms)
    if duration_ms < 0:
        raise InvalidDuration(f"Toast duration must be >= 0, got {duration_ms}", value=duration_ms)
    return duration_ms


def _validate_max_visible(max_visible: object) -> int | None:
    """0 and None both mean unbounded."""
    if max_visible is None:
        return None
    if isinstance(max_visible, bool) or not isinstance(max_visible, int) or max_visible < 0:
        raise ValueError(f"max_visible must be a non-negative integer or None, got {max_visible!r}")
    return max_visible or None


class ToastStore:
    """
    Ordered, in-memory registry of active toasts.

    Mutations are synchronous. Every change is delivered to subscribers as a
    full snapshot, in FIFO order. Ids come from a per-store counter and are
    never reused.
    """

    def __init__(
        self,
        default_duration_ms: int = DEFAULT_DURATION_MS,
        max_visible: int | None = DEFAULT_MAX_VISIBLE,
        registry: VariantRegistry | None = None,
    ):
        self.default_duration_ms = _validate_duration(default_duration_ms)
        self.max_visible = _validate_max_visible(max_visible)
        self.registry = registry or VariantRegistry.with_builtins()
        self._toasts: list[Notification] = []
        self._listeners: dict[int, Listener] = {}
        self._listener_ids = itertools.count(1)
        self._seq = itertools.count(1)
        self._version = 0
        self._emitting = False

    @classmethod
    def from_config(cls, config: ToastConfig, registry: VariantRegistry | None = None) -> "ToastStore":
        return cls(
            default_duration_ms=config.default_duration_ms,
            max_visible=config.max_visible,
            registry=registry,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def enqueue(
        self,
        variant: str | Variant,
        title: str,
        message: str | None = None,
        duration_ms: int | None = None,
        action: ToastAction | None = None,
    ) -> str:
        """
        Append a toast and notify subscribers.

        Args:
            variant: Registered variant name or alias (e.g. "success", "destructive").
            title: Short text, required.
            message: Optional longer text, coerced with ``str()``; empty means none.
            duration_ms: Auto-dismiss delay; 0 keeps the toast until dismissed.
                Defaults to ``default_duration_ms``.
            action: Optional button; clicking it does not dismiss.

        Returns:
            The new toast id.

        Raises:
            InvalidVariant, InvalidTitle, InvalidDuration: input rejected,
                store unchanged.
        """
        canonical = self.registry.resolve(variant)
        clean_title = _validate_title(title)
        duration = self.default_duration_ms if duration_ms is None else _validate_duration(duration_ms)

        seq = next(self._seq)
        toast = Notification(
            id=f"toast-{seq}",
            variant=canonical,
            title=clean_title,
            message=None if message is None else str(message) or None,
            duration_ms=duration,
            action=action,
            created_at=seq,
        )
        self._toasts.append(toast)
        logger.debug("Toast enqueued: {} variant={} duration_ms={}", toast.id, canonical, duration)

        if self.max_visible is not None and len(self._toasts) > self.max_visible:
            overflow = len(self._toasts) - self.max_visible
            evicted = self._toasts[:overflow]
            del self._toasts[:overflow]
            logger.debug("Visible limit {} reached, evicted {}", self.max_visible, [t.id for t in evicted])

        self._emit()
        return toast.id

    def dismiss(self, toast_id: str) -> bool:
        """Remove a toast. Unknown or already removed ids are a no-op."""
        for index, toast in enumerate(self._toasts):
            if toast.id == toast_id:
                del self._toasts[index]
                logger.debug("Toast dismissed: {}", toast_id)
                self._emit()
                return True
        return False

    def clear(self) -> int:
        """Remove every toast. Returns how many were removed."""
        removed = len(self._toasts)
        if not removed:
            return 0
        self._toasts.clear()
        logger.info("Cleared {} toast(s)", removed)
        self._emit()
        return removed

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register ``listener`` for snapshots. Returns an idempotent unsubscribe.

        The listener is not called with the current state; read ``snapshot()``
        when attaching.
        """
        token = next(self._listener_ids)
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def _emit(self) -> None:
        """
        Deliver the newest snapshot to every listener.

        A mutation made by a listener restarts delivery with the newer
        snapshot, so no listener sees an older snapshot after a newer one.
        """
        self._version += 1
        if self._emitting:
            return
        self._emitting = True
        try:
            delivered = 0
            while delivered != self._version:
                delivered = self._version
                snapshot = self.snapshot()
                for token, listener in tuple(self._listeners.items()):
                    if self._version != delivered:
                        break
                    if token not in self._listeners:
                        continue
                    try:
                        listener(snapshot)
                    except Exception:
                        logger.exception("Toast listener failed: {}", listener)
        finally:
            self._emitting = False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        """Incremented on every change."""
        return self._version

    def snapshot(self) -> Snapshot:
        return tuple(self._toasts)

    def get(self, toast_id: str) -> Notification | None:
        for toast in self._toasts:
            if toast.id == toast_id:
                return toast
        return None

    def ids(self) -> Sequence[str]:
        return [toast.id for toast in self._toasts]

    def __len__(self) -> int:
        return len(self._toasts)

    def __contains__(self, toast_id: object) -> bool:
        return any(toast.id == toast_id for toast in self._toasts)

    def __iter__(self) -> Iterator[Notification]:
        return iter(self.snapshot())
