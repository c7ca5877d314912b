"""Caller-side helpers for raising toasts from forms and action handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from toastbox.toasts.errors import InvalidVariant, ToastValidationError
from toastbox.toasts.types import ToastAction, Variant

if TYPE_CHECKING:
    from toastbox.toasts.store import ToastStore


class Toaster:
    """
    Non-raising front door to a ``ToastStore``.

    Unknown variants fall back to ``fallback_variant``. Any other rejected
    input is logged and reported as ``None`` instead of an id.
    """

    def __init__(self, store: "ToastStore", fallback_variant: str | Variant = Variant.INFO):
        self.store = store
        self.fallback_variant = store.registry.resolve(fallback_variant)

    def show(
        self,
        variant: str | Variant,
        title: str,
        message: str | None = None,
        duration_ms: int | None = None,
        action: ToastAction | None = None,
    ) -> str | None:
        """
        Enqueue a toast.

        Returns:
            The toast id, or None if the title or duration was rejected.
        """
        try:
            return self.store.enqueue(variant, title, message, duration_ms, action)
        except InvalidVariant as e:
            logger.warning("{}; falling back to '{}'", e, self.fallback_variant)
            variant = self.fallback_variant
        except ToastValidationError as e:
            logger.warning("Toast rejected: {}", e)
            return None

        try:
            return self.store.enqueue(variant, title, message, duration_ms, action)
        except ToastValidationError as e:
            logger.warning("Toast rejected: {}", e)
            return None

    def show_success(
        self,
        title: str,
        message: str | None = None,
        duration_ms: int | None = None,
        variant: str | Variant = Variant.SUCCESS,
    ) -> str | None:
        return self.show(variant, title, message, duration_ms)

    def show_error(
        self,
        title: str,
        message: str | None = None,
        duration_ms: int | None = None,
        variant: str | Variant = Variant.ERROR,
    ) -> str | None:
        return self.show(variant, title, message, duration_ms)

    def show_warning(
        self,
        title: str,
        message: str | None = None,
        duration_ms: int | None = None,
        variant: str | Variant = Variant.WARNING,
    ) -> str | None:
        return self.show(variant, title, message, duration_ms)

    def show_info(
        self,
        title: str,
        message: str | None = None,
        duration_ms: int | None = None,
        variant: str | Variant = Variant.INFO,
    ) -> str | None:
        return self.show(variant, title, message, duration_ms)

    def show_exception(
        self,
        error: BaseException | str,
        title: str = "Error",
        duration_ms: int | None = None,
    ) -> str | None:
        """Error toast whose message is the exception text."""
        text = str(error) if isinstance(error, BaseException) else error
        return self.show(Variant.ERROR, title, text or None, duration_ms)

    def dismiss(self, toast_id: str) -> bool:
        return self.store.dismiss(toast_id)

    def clear(self) -> int:
        return self.store.clear()
