"""Tests for ToastStore ordering, validation and subscriptions."""

from __future__ import annotations

import pytest

from toastbox.config import ToastConfig
from toastbox.toasts import (
    InvalidDuration,
    InvalidTitle,
    InvalidVariant,
    Notification,
    ToastAction,
    ToastStore,
    ToastValidationError,
    Variant,
)


@pytest.fixture
def store() -> ToastStore:
    return ToastStore(max_visible=None)


def titles(snapshot: tuple[Notification, ...]) -> list[str]:
    return [toast.title for toast in snapshot]


# =============================================================================
# enqueue
# =============================================================================


def test_enqueue_appends_in_fifo_order(store: ToastStore) -> None:
    a = store.enqueue("success", "A")
    b = store.enqueue("error", "B")
    c = store.enqueue(Variant.INFO, "C")

    assert store.ids() == [a, b, c]
    assert titles(store.snapshot()) == ["A", "B", "C"]
    assert len({a, b, c}) == 3


def test_enqueue_fills_record_and_defaults(store: ToastStore) -> None:
    action = ToastAction("Undo", lambda: None)
    toast_id = store.enqueue("cart-success", "  Added  ", "One item", action=action)

    toast = store.get(toast_id)
    assert toast is not None
    assert toast.variant == "cart-success"
    assert toast.title == "Added"
    assert toast.message == "One item"
    assert toast.duration_ms == 4000
    assert toast.action is action
    assert not toast.persistent


def test_zero_duration_is_persistent(store: ToastStore) -> None:
    toast = store.get(store.enqueue("info", "Sticky", duration_ms=0))
    assert toast is not None and toast.persistent


def test_message_is_coerced_to_text(store: ToastStore) -> None:
    numeric = store.get(store.enqueue("info", "Count", 123))  # type: ignore[arg-type]
    empty = store.get(store.enqueue("info", "Blank", ""))
    assert numeric.message == "123"
    assert empty.message is None


def test_aliases_resolve_to_canonical_variant(store: ToastStore) -> None:
    destructive = store.get(store.enqueue("destructive", "Failed"))
    default = store.get(store.enqueue("DEFAULT", "Note"))
    assert destructive.variant == "error"
    assert default.variant == "info"


def test_created_at_increases(store: ToastStore) -> None:
    first = store.get(store.enqueue("info", "1"))
    second = store.get(store.enqueue("info", "2"))
    assert first.created_at < second.created_at


@pytest.mark.parametrize("title", ["", "   ", "\n\t", None, 42])
def test_invalid_title_rejected(store: ToastStore, title: object) -> None:
    with pytest.raises(InvalidTitle):
        store.enqueue("info", title)  # type: ignore[arg-type]
    assert len(store) == 0


@pytest.mark.parametrize("duration", [-1, -4000, 1.5, "100", True])
def test_invalid_duration_rejected(store: ToastStore, duration: object) -> None:
    with pytest.raises(InvalidDuration) as excinfo:
        store.enqueue("info", "Title", duration_ms=duration)  # type: ignore[arg-type]
    assert excinfo.value.value == duration
    assert len(store) == 0


def test_invalid_variant_rejected(store: ToastStore) -> None:
    with pytest.raises(InvalidVariant) as excinfo:
        store.enqueue("bogus", "Title")
    assert excinfo.value.variant == "bogus"
    assert len(store) == 0


def test_validation_errors_share_a_catchable_base(store: ToastStore) -> None:
    for kwargs in ({"variant": "bogus", "title": "x"}, {"variant": "info", "title": ""}):
        with pytest.raises(ToastValidationError):
            store.enqueue(**kwargs)
    with pytest.raises(ValueError):
        store.enqueue("info", "x", duration_ms=-1)


def test_rejected_enqueue_does_not_notify(store: ToastStore) -> None:
    seen: list[tuple[Notification, ...]] = []
    store.subscribe(seen.append)

    with pytest.raises(InvalidTitle):
        store.enqueue("info", "")

    assert seen == []
    assert store.version == 0


# =============================================================================
# dismiss / clear
# =============================================================================


def test_dismiss_removes_only_target(store: ToastStore) -> None:
    a = store.enqueue("info", "A")
    b = store.enqueue("info", "B")
    c = store.enqueue("info", "C")

    assert store.dismiss(b) is True
    assert store.ids() == [a, c]
    assert b not in store


def test_double_dismiss_is_noop(store: ToastStore) -> None:
    seen: list[tuple[Notification, ...]] = []
    toast_id = store.enqueue("info", "A")
    store.subscribe(seen.append)

    assert store.dismiss(toast_id) is True
    assert store.dismiss(toast_id) is False
    assert store.dismiss("toast-does-not-exist") is False
    assert len(seen) == 1


def test_ids_are_never_reused(store: ToastStore) -> None:
    first = store.enqueue("info", "A")
    store.dismiss(first)
    second = store.enqueue("info", "A")
    assert second != first
    assert store.get(first) is None


def test_clear_removes_everything(store: ToastStore) -> None:
    seen: list[tuple[Notification, ...]] = []
    store.enqueue("info", "A")
    store.enqueue("info", "B")
    store.subscribe(seen.append)

    assert store.clear() == 2
    assert len(store) == 0
    assert seen == [()]

    assert store.clear() == 0
    assert len(seen) == 1


def test_fifo_holds_across_mixed_operations(store: ToastStore) -> None:
    expected: list[str] = []
    for i in range(10):
        expected.append(store.enqueue("info", f"T{i}"))
    for toast_id in expected[::3]:
        store.dismiss(toast_id)
    expected = [toast_id for toast_id in expected if toast_id not in expected[::3]]
    expected.append(store.enqueue("success", "tail"))

    assert store.ids() == expected


# =============================================================================
# Visible bound
# =============================================================================


def test_max_visible_evicts_oldest() -> None:
    store = ToastStore(max_visible=3)
    ids = [store.enqueue("info", f"T{i}") for i in range(5)]

    assert store.ids() == ids[2:]


def test_eviction_and_insert_are_one_snapshot() -> None:
    store = ToastStore(max_visible=2)
    store.enqueue("info", "A")
    store.enqueue("info", "B")
    seen: list[tuple[Notification, ...]] = []
    store.subscribe(seen.append)

    store.enqueue("info", "C")

    assert [titles(s) for s in seen] == [["B", "C"]]


def test_zero_max_visible_disables_bound() -> None:
    store = ToastStore(max_visible=0)
    for i in range(20):
        store.enqueue("info", f"T{i}")
    assert len(store) == 20


@pytest.mark.parametrize("max_visible", [-1, 1.5, "3", True])
def test_negative_or_non_int_max_visible_rejected(max_visible: object) -> None:
    with pytest.raises(ValueError):
        ToastStore(max_visible=max_visible)  # type: ignore[arg-type]


def test_from_config() -> None:
    store = ToastStore.from_config(ToastConfig(default_duration_ms=1500, max_visible=2))
    toast = store.get(store.enqueue("info", "A"))
    assert toast.duration_ms == 1500
    assert store.max_visible == 2


def test_negative_default_duration_rejected() -> None:
    with pytest.raises(InvalidDuration):
        ToastStore(default_duration_ms=-1)


# =============================================================================
# subscribe
# =============================================================================


def test_subscribers_receive_full_snapshots(store: ToastStore) -> None:
    seen: list[list[str]] = []
    store.subscribe(lambda snapshot: seen.append(titles(snapshot)))

    a = store.enqueue("info", "A")
    store.enqueue("info", "B")
    store.dismiss(a)

    assert seen == [["A"], ["A", "B"], ["B"]]


def test_unsubscribe_is_independent_and_idempotent(store: ToastStore) -> None:
    first: list[int] = []
    second: list[int] = []

    def listener(snapshot: tuple[Notification, ...]) -> None:
        first.append(len(snapshot))

    unsubscribe_first = store.subscribe(listener)
    store.subscribe(listener)  # same callable, separate registration
    store.subscribe(lambda snapshot: second.append(len(snapshot)))
    assert store.subscriber_count == 3

    unsubscribe_first()
    unsubscribe_first()
    assert store.subscriber_count == 2

    store.enqueue("info", "A")
    assert first == [1]
    assert second == [1]


def test_failing_listener_does_not_block_others(store: ToastStore) -> None:
    seen: list[int] = []

    def broken(_: tuple[Notification, ...]) -> None:
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(lambda snapshot: seen.append(len(snapshot)))

    store.enqueue("info", "A")
    assert seen == [1]


def test_mutation_inside_listener_never_delivers_stale_snapshot(store: ToastStore) -> None:
    versions: list[tuple[int, list[str]]] = []

    def reactor(snapshot: tuple[Notification, ...]) -> None:
        if titles(snapshot) == ["A"]:
            store.enqueue("info", "B")

    def recorder(snapshot: tuple[Notification, ...]) -> None:
        versions.append((store.version, titles(snapshot)))

    store.subscribe(reactor)
    store.subscribe(recorder)

    store.enqueue("info", "A")

    assert versions == [(2, ["A", "B"])]
    assert store.ids() == ["toast-1", "toast-2"]


def test_listener_removed_mid_delivery_is_skipped(store: ToastStore) -> None:
    calls: list[str] = []
    unsubscribers: list = []

    def first(_: tuple[Notification, ...]) -> None:
        calls.append("first")
        unsubscribers[0]()

    def second(_: tuple[Notification, ...]) -> None:
        calls.append("second")

    store.subscribe(first)
    unsubscribers.append(store.subscribe(second))

    store.enqueue("info", "A")
    assert calls == ["first"]
