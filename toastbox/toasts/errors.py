"""Errors raised when a toast cannot be created."""

from __future__ import annotations

from typing import Any


class ToastError(Exception):
    """Base class for toast subsystem errors."""


class ToastValidationError(ToastError, ValueError):
    """Rejected ``enqueue`` input. The store is left unchanged."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class InvalidTitle(ToastValidationError):
    """Title is missing, not a string, or blank after trimming."""


class InvalidDuration(ToastValidationError):
    """Duration is negative or not an integer."""


class InvalidVariant(ToastValidationError):
    """Variant is not registered.

    Recoverable: callers may retry with a default variant (see ``Toaster``).
    """

    @property
    def variant(self) -> Any:
        return self.value
