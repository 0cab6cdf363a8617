"""Display-only view records.

View records are simplified, read-only copies of domain entities carrying
the extra information needed to print them. Each has a ``type`` tag the
renderer can switch on, and a ``format`` method accepting an optional
formatter function; without one, the record's default formatter is used.

Records that print variable-width columns report their widths to a shared
:class:`RenderContext` so that the renderer can pad every row to the widest
value seen during the run.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from tempo.core.models import Entity, EntityKind, Project, TimeRecord

TIME_FORMAT = "%H:%M"


@dataclass
class RenderContext:
    """Running column widths shared by every view record of one run.

    Each tracker only ever grows.
    """

    max_description_length: int = 0
    max_project_length: int = 0
    max_title_length: int = 0
    max_depth: int = 0

    def track_description(self, length: int) -> int:
        self.max_description_length = max(self.max_description_length, length)
        return self.max_description_length

    def track_project(self, length: int) -> int:
        self.max_project_length = max(self.max_project_length, length)
        return self.max_project_length

    def track_title(self, length: int) -> int:
        self.max_title_length = max(self.max_title_length, length)
        return self.max_title_length

    def track_depth(self, depth: int) -> int:
        self.max_depth = max(self.max_depth, depth)
        return self.max_depth


class MessageView:
    """A categorized text notice (``info``, ``warning`` or ``error``)."""

    type = "message"

    def __init__(self, message: str, category: str = "info"):
        self.message = message
        self.category = category

    def __repr__(self) -> str:
        return f"MessageView({self.message!r}, category={self.category!r})"

    @property
    def is_error(self) -> bool:
        return self.category == "error"

    def format(self, formatter: Optional[Callable[["MessageView"], str]] = None) -> str:
        formatter = formatter or (lambda m: m.message)
        return formatter(self)


def format_hours_minutes(seconds: int) -> str:
    """Render seconds as ``H:MM``, truncating leftover seconds."""
    hours = seconds // 3600
    minutes = seconds // 60 - hours * 60
    return f"{hours}:{minutes:02d}"


class Duration:
    """An amount of time in seconds."""

    type = "duration"

    def __init__(self, seconds: int = 0):
        self.seconds = int(seconds)

    def __repr__(self) -> str:
        return f"Duration({self.seconds})"

    def add(self, seconds: int) -> int:
        self.seconds += int(seconds)
        return self.seconds

    def subtract(self, seconds: int) -> int:
        self.seconds -= int(seconds)
        return self.seconds

    def format(self, formatter: Optional[Callable[[int], str]] = None) -> str:
        """Format the duration; the formatter receives the raw seconds."""
        formatter = formatter or format_hours_minutes
        return formatter(self.seconds)


class ModelView:
    """View of any entity: its id and kind."""

    def __init__(self, model: Entity, render: RenderContext):
        self.id = model.id
        self.type: EntityKind = model.kind

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type.value!r}, id={self.id})"

    def default_format(self) -> str:
        return f"{self.type.label} {self.id}"

    def format(self, formatter: Optional[Callable[..., str]] = None) -> str:
        if formatter is None:
            return self.default_format()
        return formatter(self)


class LogView(ModelView):
    """View of a dated entity, identified by day id and id."""

    def __init__(self, model: TimeRecord, render: RenderContext):
        super().__init__(model, render)
        self.start_time = model.start_time
        self.d_id = model.d_id

    def default_format(self) -> str:
        return f"{self.type.label} {self.d_id}-{self.id} {self.start_time.strftime(TIME_FORMAT)}"


class TimeRecordView(LogView):
    """View of a time record with its resolved project title.

    Attributes:
        description: Record description
        duration: Elapsed time, up to ``now`` for a running record
        end_time: End time, or ``now`` for a running record
        project: Resolved project title
        running: Whether the record is still open
        new_record: Whether the record was just created
    """

    def __init__(
        self,
        model: TimeRecord,
        render: RenderContext,
        project_title: str = "",
        now: Optional[datetime] = None,
        new_record: bool = False,
    ):
        super().__init__(model, render)
        now = now or datetime.now()
        self.description = model.description
        self.duration = Duration(model.duration_seconds(now))
        self.end_time = model.end_time or now
        self.project = project_title
        self.running = model.is_running
        self.new_record = new_record
        render.track_description(len(self.description))
        render.track_project(len(self.project))

    def default_format(self) -> str:
        running = "*" if self.running else " "
        if self.project and self.description:
            label = f"{self.project}: {self.description}"
        else:
            label = self.project or self.description
        return (
            f"{self.start_time.strftime(TIME_FORMAT)} - {self.end_time.strftime(TIME_FORMAT)}"
            f"{running} [{self.duration.format()}] {label}"
        ).rstrip()


class CompositeView(ModelView):
    """View of an entity placed in a tree, at a nesting depth."""

    def __init__(self, model: Entity, render: RenderContext, depth: int = 0):
        super().__init__(model, render)
        self.depth = depth
        render.track_depth(depth)

    def default_format(self) -> str:
        return f"{'  ' * self.depth}{self.type.label} {self.id}"


class ProjectView(CompositeView):
    """View of a project with an aggregate duration.

    The duration starts at zero; report code adds the time of each record
    that belongs to the project.
    """

    def __init__(
        self,
        model: Project,
        render: RenderContext,
        depth: int = 0,
        current: bool = False,
    ):
        super().__init__(model, render, depth=depth)
        self.title = model.title
        self.tags = list(model.tags)
        self.duration = Duration()
        self.current = current
        render.track_title(len(self.title))

    def default_format(self) -> str:
        marker = "* " if self.current else "  "
        tags = f" [{', '.join(self.tags)}]" if self.tags else ""
        return f"{'  ' * self.depth}{marker}{self.title}{tags}"
