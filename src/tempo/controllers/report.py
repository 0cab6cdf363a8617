"""Project management and reporting."""

import logging
from collections.abc import Iterable
from typing import Optional, Union

from tempo.controllers.base import Controller, reassemble
from tempo.core.errors import DuplicateProjectError
from tempo.core.models import DEFAULT_PROJECT_TITLE
from tempo.views.messages import no_items, no_match, project_assistance, switched_item
from tempo.views.records import MessageView, ProjectView, TimeRecordView

logger = logging.getLogger(__name__)


class ReportController(Controller):
    """Add, select, tag and list projects; report on time records."""

    def add_project(self, words: Optional[Iterable[str]]) -> MessageView:
        """Add a project and make it the current one.

        Args:
            words: Title words

        Returns:
            Confirmation that the new project is current

        Raises:
            DuplicateProjectError: If a project with the same title exists
        """
        title = reassemble(words) or DEFAULT_PROJECT_TITLE
        self.projects.load()

        if title in self.projects.titles():
            raise DuplicateProjectError(title)

        project = self.projects.new(title=title, current=True)
        self.projects.save()
        logger.info(f"Added project {project.id}: {project.title}")
        return switched_item("project", project.title)

    def choose_project(self, words: Optional[Iterable[str]]) -> MessageView:
        """Select an existing project by exact title."""
        title = reassemble(words) or DEFAULT_PROJECT_TITLE
        if not self.projects.load():
            return project_assistance()

        project = self.projects.find_by_title(title)
        if project is None:
            return no_match("project", title, error=True)

        self.projects.set_current(project)
        self.projects.save()
        logger.info(f"Switched to project {project.id}: {project.title}")
        return switched_item("project", project.title)

    def tag_project(self, words: Optional[Iterable[str]]) -> Union[ProjectView, MessageView]:
        """Add tags to the current project."""
        return self._retag(words, remove=False)

    def untag_project(self, words: Optional[Iterable[str]]) -> Union[ProjectView, MessageView]:
        """Remove tags from the current project."""
        return self._retag(words, remove=True)

    def _retag(
        self, words: Optional[Iterable[str]], remove: bool
    ) -> Union[ProjectView, MessageView]:
        self.projects.load()
        project = self.projects.current
        if project is None:
            return project_assistance()

        tags = list(words or [])
        if remove:
            project.untag(tags)
        else:
            project.tag(tags)
        self.projects.save()
        logger.info(f"Project {project.id} tags are now {project.tags}")
        return ProjectView(project, self.context.render, current=True)

    def list_projects(self) -> Union[list[ProjectView], MessageView]:
        """Views of every project with its time in the active period."""
        projects = self.projects.load()
        if not projects:
            return project_assistance()

        now = self.context.now()
        totals: dict[Optional[int], int] = {}
        for record in self.time_records.load_active_period():
            totals[record.project] = totals.get(record.project, 0) + record.duration_seconds(now)

        views = []
        for project in sorted(projects, key=lambda p: p.title):
            view = ProjectView(project, self.context.render, current=project.is_current)
            view.duration.add(totals.get(project.id, 0))
            views.append(view)
        return views

    def day_report(self) -> Union[list[TimeRecordView], MessageView]:
        """Views of the active period's time records in start order."""
        self.projects.load()
        records = self.time_records.load_active_period()
        if not records:
            return no_items("time records")
        return [self.time_record_view(r) for r in self.time_records.sorted_records()]
