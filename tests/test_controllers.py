"""Tests for start, end and report controllers."""

from datetime import datetime

import pytest  # type: ignore[import-not-found]

from tempo.app import AppContext
from tempo.controllers import EndController, ReportController, StartController
from tempo.core.errors import DuplicateProjectError, PreconditionError
from tempo.views.records import MessageView, ProjectView, TimeRecordView


@pytest.fixture
def with_project(app: AppContext) -> AppContext:
    """Context with one saved, current project."""
    ReportController(app).add_project(["Docs"])
    return app


class TestStartController:
    """Test StartController."""

    def test_start_timer(self, with_project: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        """Test starting a timer with a description."""
        view = StartController(with_project).start_timer(at="9:00am", words=["writing", "docs"])

        assert isinstance(view, TimeRecordView)
        assert view.new_record is True
        assert view.running is True
        assert view.description == "writing docs"
        assert view.project == "Docs"
        assert view.start_time == datetime(2025, 11, 16, 9, 0)

        records = reload().time_records.load_active_period()
        assert len(records) == 1
        assert records[0].description == "writing docs"

    def test_start_defaults_to_now(self, app: AppContext) -> None:
        """Test that omitting --at starts at the current time."""
        view = StartController(app).start_timer()

        assert isinstance(view, TimeRecordView)
        assert view.start_time == datetime(2025, 11, 16, 18, 0)
        assert view.project == ""

    def test_start_with_end(self, app: AppContext) -> None:
        """Test starting an already closed record."""
        view = StartController(app).start_timer(at="9:00am", end="9:45am", words=["standup"])

        assert isinstance(view, TimeRecordView)
        assert view.running is False
        assert view.duration.format() == "0:45"

    def test_unparsable_start_creates_nothing(self, app: AppContext) -> None:
        """Test that a bad start expression aborts with guidance."""
        result = StartController(app).start_timer(at="qwxz plorg", words=["x"])

        assert isinstance(result, MessageView)
        assert result.message == "no valid timeframe match for 'qwxz plorg'"
        assert len(app.time_records) == 0
        assert app.storage.latest_day() is None

    def test_unparsable_end_creates_nothing(self, app: AppContext) -> None:
        """Test that a bad end expression aborts with guidance."""
        result = StartController(app).start_timer(at="9:00am", end="qwxz plorg")

        assert isinstance(result, MessageView)
        assert "no valid timeframe match" in result.message
        assert len(app.time_records) == 0

    def test_end_before_start_raises(self, app: AppContext) -> None:
        with pytest.raises(PreconditionError):
            StartController(app).start_timer(at="10:00am", end="9:00am")
        assert len(app.time_records) == 0


class TestEndController:
    """Test EndController."""

    def test_end_without_projects_gives_assistance(self, app: AppContext) -> None:
        """Test that ending needs a configured project."""
        result = EndController(app).end_timer()

        assert isinstance(result, MessageView)
        assert "please configure a project first" in result.message

    def test_end_without_records(self, with_project: AppContext) -> None:
        """Test ending with no time records at all."""
        result = EndController(with_project).end_timer(at="10:30am")

        assert isinstance(result, MessageView)
        assert result.message == "no running time records found"
        assert result.is_error
        assert with_project.storage.latest_day() is None

    def test_end_when_all_closed(self, with_project: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        """Test that closed records are left alone."""
        StartController(with_project).start_timer(at="9:00am", end="10:00am", words=["done"])

        result = EndController(reload()).end_timer(at="11:00am")

        assert isinstance(result, MessageView)
        assert result.is_error
        record = reload().time_records.load_active_period()[0]
        assert record.end_time == datetime(2025, 11, 16, 10, 0)

    def test_unparsable_end_time(self, with_project: AppContext) -> None:
        StartController(with_project).start_timer(at="9:00am")

        result = EndController(with_project).end_timer(at="qwxz plorg")

        assert isinstance(result, MessageView)
        assert "no valid timeframe match" in result.message
        assert with_project.time_records.current() is not None

    def test_end_keeps_description(self, with_project: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        """Test that ending without words keeps the description."""
        StartController(with_project).start_timer(at="9:00am", words=["writing"])

        view = EndController(reload()).end_timer(at="10:00am")

        assert isinstance(view, TimeRecordView)
        assert view.description == "writing"

    def test_end_overwrites_description(self, with_project: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        """Test that ending with words replaces the description."""
        StartController(with_project).start_timer(at="9:00am", words=["writing"])

        view = EndController(reload()).end_timer(at="10:00am", words=["wrote", "chapter"])

        assert isinstance(view, TimeRecordView)
        assert view.description == "wrote chapter"
        assert reload().time_records.load_active_period()[0].description == "wrote chapter"

    def test_end_closes_latest_running_record(self, with_project: AppContext) -> None:
        StartController(with_project).start_timer(at="8:00am", words=["first"])
        StartController(with_project).start_timer(at="9:00am", words=["second"])

        view = EndController(with_project).end_timer(at="9:30am")

        assert isinstance(view, TimeRecordView)
        assert view.description == "second"
        first = with_project.time_records.sorted_records()[0]
        assert first.is_running

    def test_end_before_start_raises(self, with_project: AppContext) -> None:
        StartController(with_project).start_timer(at="9:00am")

        with pytest.raises(PreconditionError):
            EndController(with_project).end_timer(at="8:00am")
        assert with_project.time_records.current() is not None

    @pytest.mark.integration
    def test_start_then_end(self, with_project: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        """Test a full start and end cycle across two runs."""
        StartController(with_project).start_timer(at="9:00am", words=["writing"])
        EndController(reload()).end_timer(at="10:30am")

        records = reload().time_records.load_active_period()

        assert len(records) == 1
        record = records[0]
        assert record.start_time == datetime(2025, 11, 16, 9, 0)
        assert record.end_time == datetime(2025, 11, 16, 10, 30)
        assert record.description == "writing"
        assert record.duration_seconds() == 5400


class TestReportController:
    """Test ReportController."""

    def test_add_project(self, app: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        """Test that a new project is saved and made current."""
        result = ReportController(app).add_project(["website", "redesign"])

        assert result.message == "switched to project 'website redesign'"
        fresh = reload()
        fresh.projects.load()
        assert fresh.projects.titles() == ["website redesign"]
        assert fresh.projects.current.title == "website redesign"

    def test_add_project_replaces_current(self, app: AppContext) -> None:
        controller = ReportController(app)
        controller.add_project(["first"])
        first = app.projects.current
        controller.add_project(["second"])

        assert app.projects.current.title == "second"
        assert first.is_current is False
        assert app.projects.titles() == ["first", "second"]

    def test_add_duplicate_project(self, app: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        """Test that an existing title is rejected."""
        ReportController(app).add_project(["Docs"])

        with pytest.raises(DuplicateProjectError, match="project 'Docs' already exists"):
            ReportController(reload()).add_project(["Docs"])

        fresh = reload()
        assert fresh.projects.load()[0].title == "Docs"
        assert len(fresh.projects) == 1

    def test_add_blank_title_twice(self, app: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        """Test that a blank title is checked as the default title."""
        message = ReportController(app).add_project(["  "])
        assert message.message == "switched to project 'new project'"

        with pytest.raises(DuplicateProjectError, match="project 'new project' already exists"):
            ReportController(reload()).add_project([" "])

        assert reload().projects.load()[0].title == "new project"
        assert len(reload().projects.load()) == 1

    def test_choose_project(self, app: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        controller = ReportController(app)
        controller.add_project(["first"])
        controller.add_project(["second"])

        result = ReportController(reload()).choose_project(["first"])

        assert result.message == "switched to project 'first'"
        fresh = reload()
        fresh.projects.load()
        assert fresh.projects.current.title == "first"

    def test_choose_unknown_project(self, with_project: AppContext) -> None:
        result = ReportController(with_project).choose_project(["nope"])

        assert result.is_error
        assert result.message == "no project match for 'nope'"

    def test_choose_without_projects(self, app: AppContext) -> None:
        result = ReportController(app).choose_project(["x"])

        assert "please configure a project first" in result.message

    def test_tag_and_untag(self, with_project: AppContext, reload) -> None:  # type: ignore[no-untyped-def]
        view = ReportController(with_project).tag_project(["client billable", "urgent"])

        assert isinstance(view, ProjectView)
        assert view.tags == ["billable", "client", "urgent"]

        view = ReportController(reload()).untag_project(["urgent"])

        assert isinstance(view, ProjectView)
        assert view.tags == ["billable", "client"]
        fresh = reload()
        assert fresh.projects.load()[0].tags == ["billable", "client"]

    def test_tag_without_current_project(self, app: AppContext) -> None:
        result = ReportController(app).tag_project(["x"])

        assert isinstance(result, MessageView)

    def test_list_projects_with_totals(self, app: AppContext) -> None:
        """Test per-project time over the active period."""
        controller = ReportController(app)
        controller.add_project(["beta"])
        StartController(app).start_timer(at="9:00am", end="10:30am")
        controller.add_project(["alpha"])
        StartController(app).start_timer(at="11:00am", end="11:15am")

        views = controller.list_projects()

        assert isinstance(views, list)
        assert [v.title for v in views] == ["alpha", "beta"]
        assert [v.duration.format() for v in views] == ["0:15", "1:30"]
        assert views[0].current is True
        assert views[1].current is False

    def test_list_projects_without_projects(self, app: AppContext) -> None:
        assert isinstance(ReportController(app).list_projects(), MessageView)

    def test_day_report(self, with_project: AppContext) -> None:
        StartController(with_project).start_timer(at="1:00pm", words=["later"])
        StartController(with_project).start_timer(at="9:00am", end="10:00am", words=["early"])

        views = ReportController(with_project).day_report()

        assert isinstance(views, list)
        assert [v.description for v in views] == ["early", "later"]
        assert all(v.project == "Docs" for v in views)

    def test_day_report_empty(self, app: AppContext) -> None:
        result = ReportController(app).day_report()

        assert isinstance(result, MessageView)
        assert result.message == "no time records found"
        assert not result.is_error
