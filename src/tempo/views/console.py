"""Render view records to the terminal."""

from collections.abc import Iterable
from typing import Any, Optional, Union

from rich.console import Console  # type: ignore[import-not-found]
from rich.markup import escape  # type: ignore[import-not-found]

from tempo.views.records import (
    MessageView,
    ProjectView,
    RenderContext,
    TimeRecordView,
)

MESSAGE_STYLES = {
    "info": "{message}",
    "warning": "[yellow]{message}[/yellow]",
    "error": "[red]Error:[/red] {message}",
}

Renderable = Union[MessageView, TimeRecordView, ProjectView]


class ConsoleRenderer:
    """Print view records, aligning columns with the run's RenderContext."""

    def __init__(
        self,
        render: RenderContext,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
        time_format: str = "%H:%M",
    ):
        """Initialize renderer.

        Args:
            render: Width trackers filled while the view records were built
            console: Rich console for regular output. Creates default if None.
            error_console: Rich console for errors. Defaults to stderr.
            time_format: strftime format for start and end times
        """
        self.render_context = render
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)
        self.time_format = time_format

    def render(self, result: Union[Renderable, Iterable[Renderable]]) -> bool:
        """Print one view record or a sequence of them.

        Returns:
            True if an error message was printed
        """
        if isinstance(result, (MessageView, TimeRecordView, ProjectView)):
            records: Iterable[Any] = [result]
        else:
            records = result

        failed = False
        for record in records:
            if isinstance(record, MessageView):
                failed = self.message(record) or failed
            elif isinstance(record, TimeRecordView):
                self.time_record(record)
            elif isinstance(record, ProjectView):
                self.project(record)
            else:
                self.console.print(escape(record.format()))
        return failed

    def message(self, record: MessageView) -> bool:
        template = MESSAGE_STYLES.get(record.category, MESSAGE_STYLES["info"])
        text = record.format(lambda m: template.format(message=escape(m.message)))
        if record.is_error:
            self.error_console.print(text)
            return True
        self.console.print(text)
        return False

    def time_record(self, record: TimeRecordView) -> None:
        if record.new_record:
            self.console.print("[green]✓[/green] new time record:")
        self.console.print(record.format(self._format_time_record))

    def project(self, record: ProjectView) -> None:
        self.console.print(record.format(self._format_project))

    def _format_time_record(self, record: TimeRecordView) -> str:
        width = self.render_context.max_project_length
        running = "[bold]*[/bold]" if record.running else " "
        start = record.start_time.strftime(self.time_format)
        end = record.end_time.strftime(self.time_format)
        project = escape(record.project.ljust(width))
        duration = f"[{record.duration.format():>5}]"
        separator = ": " if record.project and record.description else "  "
        return (
            f"[cyan]{start} - {end}[/cyan]{running} "
            f"[magenta]{escape(duration)}[/magenta] "
            f"[blue]{project}[/blue]{separator}{escape(record.description)}"
        ).rstrip()

    def _format_project(self, record: ProjectView) -> str:
        indent = "  " * record.depth
        pad = self.render_context.max_title_length + 2 * (
            self.render_context.max_depth - record.depth
        )
        marker = "[green]*[/green] " if record.current else "  "
        tags = f" [dim]{escape('[' + ', '.join(record.tags) + ']')}[/dim]" if record.tags else ""
        return (
            f"{indent}{marker}[bold]{escape(record.title.ljust(pad))}[/bold] "
            f"[magenta]{record.duration.format():>6}[/magenta]{tags}"
        )
