"""Shared controller helpers."""

from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from tempo.app import AppContext
from tempo.core.index import ProjectIndex, TimeRecordIndex
from tempo.core.models import TimeRecord
from tempo.views.records import TimeRecordView


def reassemble(words: Optional[Iterable[str]], *extra: Optional[str]) -> str:
    """Join command words into one single-spaced string.

    Example:
        >>> reassemble(["fix", " the  ", "bug"])
        'fix the bug'
    """
    parts: list[str] = []
    for word in [*(words or []), *extra]:
        if word:
            parts.extend(word.split())
    return " ".join(parts)


class Controller:
    """Base for command handlers operating on one application context."""

    def __init__(self, context: AppContext):
        """Initialize controller.

        Args:
            context: Application state for this run
        """
        self.context = context

    @property
    def projects(self) -> ProjectIndex:
        return self.context.projects

    @property
    def time_records(self) -> TimeRecordIndex:
        return self.context.time_records

    def parse(self, expression: Optional[str]) -> Optional[datetime]:
        """Parse a time expression; a missing expression means now."""
        now = self.context.now()
        if expression is None:
            return now
        return self.context.parser(expression, now)

    def time_record_view(self, record: TimeRecord, new_record: bool = False) -> TimeRecordView:
        return TimeRecordView(
            record,
            self.context.render,
            project_title=self.projects.title_of(record.project),
            now=self.context.now(),
            new_record=new_record,
        )
