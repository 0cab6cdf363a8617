"""Per-run application state."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from tempo.core.index import ProjectIndex, TimeRecordIndex
from tempo.core.storage import StorageManager
from tempo.core.timeparse import TimeParser, parse_time
from tempo.views.records import RenderContext


@dataclass
class AppContext:
    """Everything a command needs that lives for one process run.

    Attributes:
        storage: Storage manager for the data directory
        projects: Project collection, owning the project id registry and
            the current project selection
        time_records: Time record collection for the active period
        render: Column widths shared by the view records of this run
        clock: Source of the current time
        parser: Time expression parser
    """

    storage: StorageManager
    projects: ProjectIndex
    time_records: TimeRecordIndex
    render: RenderContext = field(default_factory=RenderContext)
    clock: Callable[[], datetime] = datetime.now
    parser: TimeParser = parse_time

    @classmethod
    def create(
        cls,
        data_dir: Optional[Path] = None,
        clock: Optional[Callable[[], datetime]] = None,
        parser: Optional[TimeParser] = None,
    ) -> "AppContext":
        """Build a context around a storage manager for ``data_dir``."""
        storage = StorageManager(data_dir)
        return cls(
            storage=storage,
            projects=ProjectIndex(storage),
            time_records=TimeRecordIndex(storage),
            clock=clock or datetime.now,
            parser=parser or parse_time,
        )

    def now(self) -> datetime:
        """Current time truncated to whole seconds."""
        return self.clock().replace(microsecond=0)
