"""Terminal renderer for toasts, built on rich."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from toastbox.toasts.types import ToastState, ToastView


def _format_remaining(view: ToastView) -> str:
    if view.state == ToastState.PERSISTENT:
        return "∞"
    if view.remaining_ms is None:
        return ""
    return f"{view.remaining_ms / 1000:.1f}s"


class ConsoleRenderer:
    """Prints the current toast stack as a table on every change."""

    def __init__(self, console: Console | None = None, title: str = "Toasts"):
        self.console = console or Console()
        self.title = title
        self.renders = 0

    def build(self, views: Sequence[ToastView]) -> Table:
        table = Table(title=self.title, show_lines=False)
        table.add_column("", width=2)
        table.add_column("ID", style="cyan")
        table.add_column("Variant")
        table.add_column("Title")
        table.add_column("Message")
        table.add_column("Left", justify="right")
        table.add_column("Action")

        for view in views:
            toast = view.notification
            style = view.profile.console_style
            table.add_row(
                view.profile.glyph,
                toast.id,
                Text(toast.variant, style=style),
                Text(toast.title, style=f"bold {style}"),
                Text(toast.message or ""),
                _format_remaining(view),
                Text(f"[{toast.action.label}]") if toast.action else "",
            )
        return table

    def __call__(self, views: Sequence[ToastView]) -> None:
        self.renders += 1
        if not views:
            self.console.print(f"[dim]{self.title}: empty[/dim]")
            return
        self.console.print(self.build(views))
