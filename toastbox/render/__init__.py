"""Renderers for toast view slots."""

from toastbox.render.console import ConsoleRenderer

__all__ = ["ConsoleRenderer"]
