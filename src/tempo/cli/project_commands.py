"""CLI commands for project management."""

import click  # type: ignore[import-not-found]

from tempo.cli.common import run
from tempo.controllers import ReportController


@click.group()  # type: ignore[misc]
def project() -> None:
    """Manage projects.

    New time records are attached to the current project.
    """
    pass


@project.command("add")  # type: ignore[misc]
@click.argument("words", nargs=-1, required=True)  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def project_add(ctx: click.Context, words: tuple[str, ...]) -> None:
    """Add a project and make it current.

    Example:
        tempo project add website redesign
    """
    run(ctx, lambda app: ReportController(app).add_project(words))


@project.command("choose")  # type: ignore[misc]
@click.argument("words", nargs=-1, required=True)  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def project_choose(ctx: click.Context, words: tuple[str, ...]) -> None:
    """Switch the current project by exact title.

    Example:
        tempo project choose website redesign
    """
    run(ctx, lambda app: ReportController(app).choose_project(words))


@project.command("list")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def project_list(ctx: click.Context) -> None:
    """List projects with their time on the most recent tracked day.

    Example:
        tempo project list
    """
    run(ctx, lambda app: ReportController(app).list_projects())


@project.command("tag")  # type: ignore[misc]
@click.argument("words", nargs=-1, required=True)  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def project_tag(ctx: click.Context, words: tuple[str, ...]) -> None:
    """Tag the current project.

    Example:
        tempo project tag client billable
    """
    run(ctx, lambda app: ReportController(app).tag_project(list(words)))


@project.command("untag")  # type: ignore[misc]
@click.argument("words", nargs=-1, required=True)  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def project_untag(ctx: click.Context, words: tuple[str, ...]) -> None:
    """Remove tags from the current project.

    Example:
        tempo project untag billable
    """
    run(ctx, lambda app: ReportController(app).untag_project(list(words)))
