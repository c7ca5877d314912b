"""CLI commands for toastbox."""

import asyncio
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from toastbox import __logo__, __version__

app = typer.Typer(
    name="toastbox",
    help=f"{__logo__} toastbox - transient notification manager",
    no_args_is_help=True,
)

console = Console()


def _configure_logging(logs: bool, level: str) -> None:
    if logs:
        logger.remove()
        logger.add(sys.stderr, level=level)
        logger.enable("toastbox")
    else:
        logger.disable("toastbox")


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} toastbox v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """toastbox - transient notification manager."""
    pass


# ============================================================================
# Demo
# ============================================================================


async def _run_demo(scale: float) -> None:
    from toastbox.config import load_config
    from toastbox.render import ConsoleRenderer
    from toastbox.toasts import AsyncioScheduler, ToastAction, ToastPresenter, ToastStore, Toaster

    def ms(value: int) -> int:
        return max(1, int(value * scale))

    store = ToastStore.from_config(load_config())
    toaster = Toaster(store)
    renderer = ConsoleRenderer(console, title="Storefront toasts")

    with ToastPresenter(store, AsyncioScheduler(), renderer) as presenter:
        toaster.show_success("Logged in", "Welcome back", duration_ms=ms(1500))
        toaster.show_success("Added to cart", "Rose bouquet x1", duration_ms=ms(2500), variant="cart-success")
        reload_id = toaster.show_info(
            "New version available",
            "Reload to update",
            duration_ms=0,
        )
        undo_id = toaster.show(
            "favorite-success",
            "Saved to favorites",
            duration_ms=ms(2000),
            action=ToastAction("Undo", lambda: console.print("[yellow]Undo clicked[/yellow]")),
        )
        toaster.show("bogus", "Unknown variants fall back to info", duration_ms=ms(1000))

        if undo_id:
            presenter.trigger_action(undo_id)

        await asyncio.sleep(ms(3000) / 1000)
        console.print("[dim]Dismissing the persistent toast...[/dim]")
        if reload_id:
            presenter.dismiss(reload_id)

    console.print(f"[green]✓[/green] Demo finished, {renderer.renders} render(s)")


@app.command()
def demo(
    scale: float = typer.Option(1.0, "--scale", "-s", help="Multiply every toast duration"),
    logs: bool = typer.Option(False, "--logs/--no-logs", help="Show toastbox runtime logs"),
):
    """Run a scripted toast session on a real event loop."""
    from toastbox.config import load_config

    if scale <= 0:
        console.print("[red]Error: --scale must be > 0[/red]")
        raise typer.Exit(1)

    _configure_logging(logs, load_config().log_level)
    asyncio.run(_run_demo(scale))


# ============================================================================
# Variants
# ============================================================================


@app.command()
def variants():
    """List registered toast variants and their presentation tokens."""
    from toastbox.toasts import VariantRegistry

    registry = VariantRegistry.with_builtins()

    table = Table(title="Toast Variants")
    table.add_column("", width=2)
    table.add_column("Variant", style="cyan")
    table.add_column("Aliases")
    table.add_column("Icon")
    table.add_column("Colors")

    aliases = registry.aliases()
    for name in registry.names():
        profile = registry.profile(name)
        names = ", ".join(sorted(a for a, target in aliases.items() if target == name))
        table.add_row(
            profile.glyph,
            f"[{profile.console_style}]{name}[/{profile.console_style}]",
            names,
            profile.icon,
            profile.colors,
        )

    console.print(table)


# ============================================================================
# Resend countdown
# ============================================================================


async def _run_countdown(seconds: int) -> None:
    from toastbox.countdown import CountdownState, ResendCountdown
    from toastbox.toasts import AsyncioScheduler

    finished = asyncio.Event()

    def on_change(state: CountdownState, remaining: int) -> None:
        console.print(resend.label())
        if state == CountdownState.EXPIRED:
            finished.set()

    resend = ResendCountdown(AsyncioScheduler(), cooldown_s=seconds, on_change=on_change)
    resend.start()
    await finished.wait()


@app.command()
def countdown(
    seconds: int = typer.Option(None, "--seconds", "-n", help="Countdown length (default from config)"),
    logs: bool = typer.Option(False, "--logs/--no-logs", help="Show toastbox runtime logs"),
):
    """Run the verification-code resend countdown."""
    from toastbox.config import load_config

    config = load_config()
    if seconds is None:
        seconds = config.resend_cooldown_s
    if seconds <= 0:
        console.print("[red]Error: --seconds must be > 0[/red]")
        raise typer.Exit(1)

    _configure_logging(logs, config.log_level)
    asyncio.run(_run_countdown(seconds))


# ============================================================================
# Status
# ============================================================================


@app.command()
def status():
    """Show the effective toastbox configuration."""
    from toastbox.config import load_config

    config = load_config()

    console.print(f"{__logo__} toastbox Status\n")
    console.print(f"Default duration: {config.default_duration_ms} ms")
    if config.max_visible:
        console.print(f"Max visible: {config.max_visible} (oldest evicted)")
    else:
        console.print("Max visible: [dim]unbounded[/dim]")
    console.print(f"Resend cooldown: {config.resend_cooldown_s}s")
    console.print(f"Log level: {config.log_level}")
