"""Core data models for time tracking."""

from dataclasses import InitVar, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional

from tempo.core.errors import InvalidArgumentError
from tempo.core.registry import IdRegistry

DEFAULT_PROJECT_TITLE = "new project"


class EntityKind(str, Enum):
    """Type tag carried by every entity and copied into its view records."""

    PROJECT = "project"
    TIME_RECORD = "time_record"

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``Time record``."""
        return self.value.replace("_", " ").capitalize()


class Entity:
    """Base for records with an id drawn from their type's registry.

    Subclasses are dataclasses taking the registry as an init-only field and
    calling :meth:`claim_id` from ``__post_init__``.
    """

    kind: ClassVar[EntityKind]
    id: Optional[int]

    def claim_id(self, registry: IdRegistry) -> None:
        """Assign the next free id or validate the supplied one.

        Raises:
            DuplicateIdError: If ``id`` is already registered
            InvalidArgumentError: If ``id`` is not a non-negative integer
        """
        self.id = registry.claim(self.id)

    def snapshot(self) -> dict[str, Any]:
        """Capture the record's fields as an ordered name to value mapping."""
        return {"id": self.id}


def split_tags(words: Any) -> list[str]:
    """Split each tag string on whitespace and flatten the result.

    Anything other than a non-empty list or tuple yields no tags.
    """
    if not words or not isinstance(words, (list, tuple)):
        return []
    tokens = []
    for word in words:
        tokens.extend(str(word).split())
    return tokens


class ProjectSelection:
    """Holds the single current project of a process run."""

    def __init__(self) -> None:
        self.project: Optional["Project"] = None

    def set(self, project: "Project") -> None:
        """Replace the current project reference.

        Raises:
            InvalidArgumentError: If ``project`` is not a Project
        """
        if not isinstance(project, Project):
            raise InvalidArgumentError(f"current project must be a Project, not {project!r}")
        self.project = project

    def is_current(self, project: "Project") -> bool:
        return self.project is project


@dataclass(eq=False)
class Project(Entity):
    """Project definition for organizing time records.

    Tag strings given at construction are split on whitespace and sorted.
    Passing ``current=True`` makes the project the selection's current one;
    a selection is required for that.

    Attributes:
        id: Project id
        title: Display name, ``"new project"`` when not given
        tags: Sorted list of tag tokens
        selection: Current project holder consulted by :meth:`snapshot`

    Raises:
        DuplicateIdError: If ``id`` is already registered
        InvalidArgumentError: If ``current`` is set without a selection
    """

    kind: ClassVar[EntityKind] = EntityKind.PROJECT

    registry: InitVar[IdRegistry]
    title: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    current: InitVar[bool] = False
    selection: Optional[ProjectSelection] = field(default=None, repr=False)
    id: Optional[int] = None

    def __post_init__(self, registry: IdRegistry, current: bool) -> None:
        self.claim_id(registry)
        self.title = self.title or DEFAULT_PROJECT_TITLE
        words, self.tags = self.tags, []
        self.tag(words)
        if current:
            if self.selection is None:
                raise InvalidArgumentError("a selection is required to make a project current")
            self.selection.set(self)

    @property
    def is_current(self) -> bool:
        return self.selection is not None and self.selection.is_current(self)

    def tag(self, words: Any) -> None:
        """Add whitespace-separated tag tokens and keep the tags sorted."""
        tokens = split_tags(words)
        if not tokens:
            return
        self.tags.extend(tokens)
        self.tags.sort()

    def untag(self, words: Any) -> None:
        """Remove tag tokens; tokens that are not present are ignored."""
        for token in split_tags(words):
            while token in self.tags:
                self.tags.remove(token)
        self.tags.sort()

    def snapshot(self) -> dict[str, Any]:
        record = super().snapshot()
        record["title"] = self.title
        record["tags"] = list(self.tags)
        if self.is_current:
            record["current"] = True
        return record


@dataclass(eq=False)
class TimeRecord(Entity):
    """A timed work session.

    Attributes:
        id: Record id, unique within the records of its day
        start_time: When the session started
        end_time: When the session ended (None while running)
        description: Free-text description
        project: Id of the project the record belongs to (optional)
    """

    kind: ClassVar[EntityKind] = EntityKind.TIME_RECORD

    registry: InitVar[IdRegistry]
    start_time: datetime
    end_time: Optional[datetime] = None
    description: str = ""
    project: Optional[int] = None
    id: Optional[int] = None

    def __post_init__(self, registry: IdRegistry) -> None:
        self.claim_id(registry)
        self.description = self.description or ""

    @property
    def is_running(self) -> bool:
        """Check if this record is still open."""
        return self.end_time is None

    @property
    def d_id(self) -> str:
        """Day identifier (``YYYYMMDD``) of the record's start time."""
        return self.start_time.strftime("%Y%m%d")

    def duration_seconds(self, now: Optional[datetime] = None) -> int:
        """Whole seconds between start and end, or ``now`` while running."""
        end = self.end_time or now or datetime.now()
        return int((end - self.start_time).total_seconds())

    def snapshot(self) -> dict[str, Any]:
        record = super().snapshot()
        record["start_time"] = self.start_time
        record["end_time"] = self.end_time
        record["description"] = self.description
        record["project"] = self.project
        return record
