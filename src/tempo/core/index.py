"""In-memory record collections backed by the storage manager."""

import logging
from collections.abc import Iterator
from datetime import datetime
from typing import Any, Optional

from tempo.core.models import Project, ProjectSelection, TimeRecord
from tempo.core.registry import IdRegistry
from tempo.core.storage import StorageManager

logger = logging.getLogger(__name__)


class ProjectIndex:
    """All known projects plus the current project selection."""

    def __init__(self, storage: StorageManager):
        """Initialize an empty project index.

        Args:
            storage: Storage manager used by :meth:`load` and :meth:`save`
        """
        self.storage = storage
        self.registry = IdRegistry("project")
        self.selection = ProjectSelection()
        self.records: list[Project] = []
        self.loaded = False

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Project]:
        return iter(self.records)

    @property
    def current(self) -> Optional[Project]:
        """Currently selected project, if any."""
        return self.selection.project

    def set_current(self, project: Project) -> None:
        """Make ``project`` the current selection.

        The previously selected instance is left untouched; only the
        reference is replaced.

        Raises:
            InvalidArgumentError: If ``project`` is not a Project
        """
        self.selection.set(project)

    def new(
        self,
        title: Optional[str] = None,
        tags: Optional[list[str]] = None,
        current: bool = False,
        id: Optional[int] = None,
    ) -> Project:
        """Create a project and add it to the index.

        Args:
            title: Project title, ``"new project"`` when empty
            tags: Tag strings, split on whitespace
            current: Make the new project the current selection
            id: Explicit id (when reloading stored projects)

        Returns:
            Created project
        """
        project = Project(
            self.registry,
            title=title,
            tags=tags,
            current=current,
            selection=self.selection,
            id=id,
        )
        self.records.append(project)
        return project

    def titles(self) -> list[str]:
        """Sorted titles of all known projects."""
        return sorted(p.title for p in self.records)

    def get(self, project_id: Optional[int]) -> Optional[Project]:
        """Get project by id."""
        for project in self.records:
            if project.id == project_id:
                return project
        return None

    def find_by_title(self, title: str) -> Optional[Project]:
        """Get project by exact title."""
        for project in self.records:
            if project.title == title:
                return project
        return None

    def title_of(self, project_id: Optional[int]) -> str:
        """Resolve a project id to its title, empty if unknown."""
        project = self.get(project_id)
        return project.title if project else ""

    def load(self) -> list[Project]:
        """Load stored projects once; later calls return the loaded set."""
        if self.loaded:
            return self.records

        for row in self.storage.load_projects():
            self.new(
                title=row["title"],
                tags=[row["tags"]] if row["tags"] else None,
                current=row.get("current") == "True",
                id=int(row["id"]),
            )
        self.loaded = True
        logger.debug(f"Loaded {len(self.records)} projects")
        return self.records

    def save(self) -> None:
        """Rewrite the whole project file."""
        rows = []
        for project in self.records:
            record = project.snapshot()
            rows.append(
                {
                    "id": record["id"],
                    "title": record["title"],
                    "tags": " ".join(record["tags"]),
                    "current": record.get("current", False),
                }
            )
        self.storage.save_projects(rows)
        self.loaded = True
        logger.debug(f"Saved {len(rows)} projects")


class TimeRecordIndex:
    """Time records of the active tracking period.

    The active period is the most recent day that has records on disk.
    Records are stored one file per day and ids are unique within a day, so
    a record is identified by its day id and id together. Creating a record
    on another day loads that day first so that saving never drops records.
    """

    def __init__(self, storage: StorageManager):
        """Initialize an empty time record index.

        Args:
            storage: Storage manager used by :meth:`load_active_period` and :meth:`save`
        """
        self.storage = storage
        self.registries: dict[str, IdRegistry] = {}
        self.records: list[TimeRecord] = []
        self.loaded_days: set[str] = set()
        self.active_day: Optional[str] = None
        self.loaded = False

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TimeRecord]:
        return iter(self.records)

    def registry(self, day: str) -> IdRegistry:
        """Id registry for the records of ``day``."""
        if day not in self.registries:
            self.registries[day] = IdRegistry("time record")
        return self.registries[day]

    def _create(
        self,
        start_time: datetime,
        end_time: Optional[datetime],
        description: str,
        project: Optional[int],
        id: Optional[int],
    ) -> TimeRecord:
        record = TimeRecord(
            self.registry(start_time.strftime("%Y%m%d")),
            start_time=start_time,
            end_time=end_time,
            description=description,
            project=project,
            id=id,
        )
        self.records.append(record)
        return record

    def new(
        self,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        description: str = "",
        project: Optional[int] = None,
        id: Optional[int] = None,
    ) -> TimeRecord:
        """Create a time record and add it to the index.

        Raises:
            DuplicateIdError: If ``id`` is already used on the record's day
        """
        self.load_day(start_time.strftime("%Y%m%d"))
        return self._create(start_time, end_time, description, project, id)

    def load_day(self, day: str) -> list[TimeRecord]:
        """Load the stored records of ``day`` unless already loaded."""
        if day not in self.loaded_days:
            for row in self.storage.load_time_records(day):
                self._create(
                    start_time=datetime.fromisoformat(row["start_time"]),
                    end_time=datetime.fromisoformat(row["end_time"]) if row["end_time"] else None,
                    description=row["description"],
                    project=int(row["project"]) if row["project"] else None,
                    id=int(row["id"]),
                )
            self.loaded_days.add(day)
        return [r for r in self.records if r.d_id == day]

    def load_active_period(self) -> list[TimeRecord]:
        """Load the records of the most recent stored day (once)."""
        if self.loaded:
            return self.records

        self.active_day = self.storage.latest_day()
        if self.active_day:
            self.load_day(self.active_day)
        self.loaded = True
        logger.debug(f"Loaded {len(self.records)} time records for {self.active_day}")
        return self.records

    def current(self) -> Optional[TimeRecord]:
        """Most recently started record that is still running."""
        running = [r for r in self.records if r.is_running]
        if not running:
            return None
        return max(running, key=lambda r: r.start_time)

    def sorted_records(self) -> list[TimeRecord]:
        """Records ordered by start time."""
        return sorted(self.records, key=lambda r: r.start_time)

    def save(self) -> None:
        """Rewrite the file of every loaded day."""
        days: dict[str, list[dict[str, Any]]] = {day: [] for day in self.loaded_days}

        for record in self.sorted_records():
            snapshot = record.snapshot()
            end_time = snapshot["end_time"]
            days.setdefault(record.d_id, []).append(
                {
                    "id": snapshot["id"],
                    "start_time": snapshot["start_time"].isoformat(),
                    "end_time": end_time.isoformat() if end_time else "",
                    "description": snapshot["description"],
                    "project": "" if snapshot["project"] is None else snapshot["project"],
                }
            )

        for day, rows in sorted(days.items()):
            if rows or self.storage.day_file(day).exists():
                self.storage.save_time_records(day, rows)
        self.loaded_days.update(days)
        logger.debug(f"Saved {len(self.records)} time records across {len(days)} day files")
