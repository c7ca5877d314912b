# toastbox.toasts - transient notification queue and timers

from toastbox.toasts.errors import (
    InvalidDuration,
    InvalidTitle,
    InvalidVariant,
    ToastError,
    ToastValidationError,
)
from toastbox.toasts.presenter import ToastPresenter
from toastbox.toasts.store import ToastStore
from toastbox.toasts.timers import AsyncioScheduler, ManualScheduler
from toastbox.toasts.toaster import Toaster
from toastbox.toasts.types import Notification, ToastAction, ToastState, ToastView, Variant
from toastbox.toasts.variants import PresentationProfile, VariantRegistry

__all__ = [
    "AsyncioScheduler",
    "InvalidDuration",
    "InvalidTitle",
    "InvalidVariant",
    "ManualScheduler",
    "Notification",
    "PresentationProfile",
    "ToastAction",
    "ToastError",
    "ToastPresenter",
    "ToastState",
    "ToastStore",
    "ToastValidationError",
    "ToastView",
    "Toaster",
    "Variant",
    "VariantRegistry",
]
