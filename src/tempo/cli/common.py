"""Helpers shared by the CLI command modules."""

import sys
from pathlib import Path
from typing import Any, Callable

import click
from rich.console import Console

from tempo.app import AppContext
from tempo.core.config import ConfigManager
from tempo.core.errors import TempoError
from tempo.views.console import ConsoleRenderer

console = Console()
error_console = Console(stderr=True)


def get_config(ctx: click.Context) -> ConfigManager:
    """Configuration loaded by the top-level command group."""
    return ctx.obj["config"]


def get_context(ctx: click.Context) -> AppContext:
    """Build the application context for this invocation."""
    data_dir = ctx.obj.get("data_dir")
    return AppContext.create(Path(data_dir) if data_dir else get_config(ctx).data_dir)


def get_renderer(ctx: click.Context, app: AppContext) -> ConsoleRenderer:
    return ConsoleRenderer(
        app.render,
        console=console,
        error_console=error_console,
        time_format=get_config(ctx).get("display.time_format", "%H:%M"),
    )


def run(ctx: click.Context, action: Callable[[AppContext], Any]) -> None:
    """Run a controller action and print its result.

    Exits with status 1 when the action raises or reports an error.
    """
    app = get_context(ctx)
    try:
        result = action(app)
    except TempoError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if get_renderer(ctx, app).render(result):
        sys.exit(1)
