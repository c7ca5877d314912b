"""Toast records shared by the store, the presenter and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from toastbox.toasts.variants import PresentationProfile


class Variant(str, Enum):
    """Built-in toast variants. More can be registered at runtime."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    CART_SUCCESS = "cart-success"
    FAVORITE_SUCCESS = "favorite-success"


class ToastState(str, Enum):
    """Presenter-side lifecycle state of a toast."""

    ACTIVE = "active"
    PERSISTENT = "persistent"
    DISMISSED = "dismissed"


@dataclass(frozen=True)
class ToastAction:
    """Button shown on a toast. Clicking it does not dismiss the toast."""

    label: str
    on_click: Callable[[], Any]


@dataclass(frozen=True)
class Notification:
    """
    A toast as held by the store.

    Records are immutable; the store replaces nothing in place and only
    appends or removes whole entries.
    """

    id: str
    variant: str
    title: str
    message: str | None = None
    duration_ms: int = 4000
    action: ToastAction | None = None
    created_at: int = 0  # store sequence number, ordering only

    @property
    def persistent(self) -> bool:
        return self.duration_ms == 0


@dataclass(frozen=True)
class ToastView:
    """One render slot handed to a renderer, in store order."""

    notification: Notification
    profile: PresentationProfile
    state: ToastState
    remaining_ms: float | None = None  # None for persistent toasts
