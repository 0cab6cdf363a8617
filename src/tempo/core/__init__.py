"""Core functionality for time tracking."""

from tempo.core.index import ProjectIndex, TimeRecordIndex
from tempo.core.models import EntityKind, Project, TimeRecord
from tempo.core.registry import IdRegistry

__all__ = ["EntityKind", "Project", "TimeRecord", "IdRegistry", "ProjectIndex", "TimeRecordIndex"]
