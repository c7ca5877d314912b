"""Tests for the Toaster caller helpers."""

from __future__ import annotations

import pytest

from toastbox.toasts import InvalidVariant, ToastAction, ToastStore, Toaster


@pytest.fixture
def toaster() -> Toaster:
    return Toaster(ToastStore(max_visible=None))


def test_show_helpers_use_matching_variants(toaster: Toaster) -> None:
    ids = [
        toaster.show_success("ok"),
        toaster.show_error("bad"),
        toaster.show_warning("careful"),
        toaster.show_info("fyi"),
    ]
    variants = [toaster.store.get(toast_id).variant for toast_id in ids]
    assert variants == ["success", "error", "warning", "info"]


def test_variant_override_like_cart_helper(toaster: Toaster) -> None:
    toast_id = toaster.show_success("Added to cart", "Rose bouquet", None, "cart-success")
    toast = toaster.store.get(toast_id)
    assert toast.variant == "cart-success"
    assert toast.message == "Rose bouquet"
    assert toast.duration_ms == 4000


def test_unknown_variant_falls_back(toaster: Toaster) -> None:
    toast_id = toaster.show("bogus", "Still shown", "body", 1000)
    toast = toaster.store.get(toast_id)
    assert toast.variant == "info"
    assert toast.title == "Still shown"
    assert toast.duration_ms == 1000


def test_custom_fallback_variant() -> None:
    toaster = Toaster(ToastStore(), fallback_variant="warning")
    toast_id = toaster.show("nope", "Title")
    assert toaster.store.get(toast_id).variant == "warning"


def test_unknown_fallback_variant_rejected() -> None:
    with pytest.raises(InvalidVariant):
        Toaster(ToastStore(), fallback_variant="nope")


@pytest.mark.parametrize("kwargs", [{"title": ""}, {"title": "x", "duration_ms": -1}])
def test_rejected_input_returns_none(toaster: Toaster, kwargs: dict) -> None:
    assert toaster.show("info", **kwargs) is None
    assert len(toaster.store) == 0


def test_bad_variant_and_bad_title_returns_none(toaster: Toaster) -> None:
    assert toaster.show("bogus", "   ") is None
    assert len(toaster.store) == 0


def test_show_exception_uses_error_text(toaster: Toaster) -> None:
    toast_id = toaster.show_exception(RuntimeError("Cart sync failed"))
    toast = toaster.store.get(toast_id)
    assert toast.variant == "error"
    assert toast.title == "Error"
    assert toast.message == "Cart sync failed"


def test_action_passes_through(toaster: Toaster) -> None:
    action = ToastAction("Retry", lambda: None)
    toast_id = toaster.show("error", "Upload failed", action=action)
    assert toaster.store.get(toast_id).action is action


def test_dismiss_and_clear(toaster: Toaster) -> None:
    first = toaster.show_info("a")
    toaster.show_info("b")
    assert toaster.dismiss(first) is True
    assert toaster.dismiss(first) is False
    assert toaster.clear() == 1
