"""CSV storage manager with atomic whole-file rewrites."""

import csv
import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ["id", "title", "tags", "current"]
TIME_RECORD_FIELDS = ["id", "start_time", "end_time", "description", "project"]

DAY_FILE_PATTERN = re.compile(r"^(\d{8})\.csv$")


def _lock_file(file_obj: Any, exclusive: bool = True) -> None:
    """Lock a file in a cross-platform way.

    Args:
        file_obj: File object to lock
        exclusive: If True, acquire exclusive lock; if False, acquire shared lock
    """
    if sys.platform == "win32":
        import msvcrt  # type: ignore[import-not-found]

        mode = msvcrt.LK_NBLCK if exclusive else msvcrt.LK_NBRLCK
        msvcrt.locking(file_obj.fileno(), mode, 1)
    else:
        import fcntl  # type: ignore[import-not-found]

        mode = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(file_obj.fileno(), mode)


def _unlock_file(file_obj: Any) -> None:
    """Unlock a file in a cross-platform way."""
    if sys.platform == "win32":
        import msvcrt  # type: ignore[import-not-found]

        msvcrt.locking(file_obj.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        import fcntl  # type: ignore[import-not-found]

        fcntl.flock(file_obj.fileno(), fcntl.LOCK_UN)


class StorageManager:
    """Reads and rewrites Tempo's CSV files.

    Projects live in a single ``projects.csv``. Time records are split into
    one file per day under ``time_records/``, named ``YYYYMMDD.csv`` after the
    start day of the records they hold.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize storage manager.

        Args:
            data_dir: Custom data directory. Defaults to ~/.tempo/data
        """
        if data_dir is None:
            data_dir = Path.home() / ".tempo" / "data"

        self.data_dir = Path(data_dir).expanduser()
        self.projects_file = self.data_dir / "projects.csv"
        self.time_records_dir = self.data_dir / "time_records"

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.time_records_dir.mkdir(parents=True, exist_ok=True)

    def _write_csv_atomic(
        self, file_path: Path, fieldnames: list[str], rows: list[dict[str, Any]]
    ) -> None:
        """Write CSV file atomically using temporary file and rename.

        Args:
            file_path: Target file path
            fieldnames: CSV field names
            rows: List of row dictionaries
        """
        temp_file = file_path.with_suffix(".tmp")

        try:
            with open(temp_file, "w", newline="", encoding="utf-8") as f:
                _lock_file(f, exclusive=True)

                writer = csv.DictWriter(f, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(rows)

                f.flush()
                os.fsync(f.fileno())

                _unlock_file(f)

            temp_file.replace(file_path)
            logger.debug(f"Wrote {len(rows)} rows to {file_path}")

        except Exception:
            if temp_file.exists():
                temp_file.unlink()
            raise

    def _read_csv(self, file_path: Path) -> list[dict[str, Any]]:
        """Read CSV file with locking.

        Args:
            file_path: CSV file to read

        Returns:
            List of row dictionaries, empty if the file does not exist
        """
        if not file_path.exists():
            return []

        with open(file_path, encoding="utf-8") as f:
            _lock_file(f, exclusive=False)

            try:
                reader = csv.DictReader(f)
                rows = list(reader)
            finally:
                _unlock_file(f)

        return rows

    # Project operations

    def load_projects(self) -> list[dict[str, Any]]:
        """Load all project rows."""
        return self._read_csv(self.projects_file)

    def save_projects(self, rows: list[dict[str, Any]]) -> None:
        """Replace the project file with ``rows``."""
        self._write_csv_atomic(self.projects_file, PROJECT_FIELDS, rows)

    # Time record operations

    def day_file(self, day: str) -> Path:
        """Path of the time record file for a ``YYYYMMDD`` day id."""
        return self.time_records_dir / f"{day}.csv"

    def list_days(self) -> list[str]:
        """Day ids that have a time record file, oldest first."""
        days = []
        for path in self.time_records_dir.iterdir():
            match = DAY_FILE_PATTERN.match(path.name)
            if match:
                days.append(match.group(1))
        return sorted(days)

    def latest_day(self) -> Optional[str]:
        """Most recent day id with stored time records."""
        days = self.list_days()
        return days[-1] if days else None

    def load_time_records(self, day: str) -> list[dict[str, Any]]:
        """Load the time record rows stored for ``day``."""
        return self._read_csv(self.day_file(day))

    def save_time_records(self, day: str, rows: list[dict[str, Any]]) -> None:
        """Replace the time record file for ``day`` with ``rows``."""
        self._write_csv_atomic(self.day_file(day), TIME_RECORD_FIELDS, rows)
