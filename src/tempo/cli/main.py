"""Main CLI application."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from tempo import __version__
from tempo.cli.common import console, error_console, run
from tempo.cli.config_commands import config
from tempo.cli.project_commands import project
from tempo.controllers import EndController, ReportController, StartController
from tempo.core.config import ConfigManager

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level_name: str) -> None:
    """Send log records at ``level_name`` and above to stderr."""
    level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_tempo_handler", False):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._tempo_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)


def load_config(config_path: Optional[str]) -> ConfigManager:
    """Load configuration, exiting with a message if it is invalid."""
    try:
        return ConfigManager(Path(config_path) if config_path else None)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--data-dir", help="Custom data directory", type=click.Path())
@click.option("--config", "config_path", help="Path to config file", type=click.Path())
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Optional[str],
    config_path: Optional[str],
    verbose: bool,
    no_color: bool,
) -> None:
    """Tempo - Command-line time tracking.

    Define projects, start and end timers with natural-language times,
    and review where your time went.
    """
    ctx.ensure_object(dict)
    config_mgr = load_config(config_path)
    ctx.obj["config"] = config_mgr
    ctx.obj["data_dir"] = data_dir

    setup_logging("DEBUG" if verbose else config_mgr.get("advanced.log_level", "WARNING"))

    if no_color or not config_mgr.get("display.color", True):
        console.no_color = True
        error_console.no_color = True


@cli.command()
@click.option("-a", "--at", help="Start time, e.g. '9:00am' or '15 minutes ago'")
@click.option("-e", "--end", help="End time, closes the record right away")
@click.argument("words", nargs=-1)
@click.pass_context
def start(
    ctx: click.Context, at: Optional[str], end: Optional[str], words: tuple[str, ...]
) -> None:
    """Start a timer against the current project.

    Example:
        tempo start writing documentation
        tempo start --at "9:00am" --end "10:30am" team meeting
    """
    run(ctx, lambda app: StartController(app).start_timer(at=at, end=end, words=words))


@cli.command()
@click.option("-a", "--at", help="End time, e.g. '5pm' or '10 minutes ago'")
@click.argument("words", nargs=-1)
@click.pass_context
def end(ctx: click.Context, at: Optional[str], words: tuple[str, ...]) -> None:
    """End the running timer, optionally replacing its description.

    Example:
        tempo end
        tempo end --at "5:30pm" finished the release notes
    """
    run(ctx, lambda app: EndController(app).end_timer(at=at, words=words))


@cli.command()
@click.pass_context
def report(ctx: click.Context) -> None:
    """Show the time records of the most recent tracked day.

    Example:
        tempo report
    """
    run(ctx, lambda app: ReportController(app).day_report())


cli.add_command(project)
cli.add_command(config)


if __name__ == "__main__":
    cli(obj={})
