"""Standard notices returned by the controllers."""

from typing import Optional

from tempo.views.records import MessageView


def no_match(kind: str, value: Optional[str], error: bool = False) -> MessageView:
    """Guidance for input that did not match anything of the expected kind.

    Example:
        >>> no_match("valid timeframe", "tomorrowish").message
        "no valid timeframe match for 'tomorrowish'"
    """
    return MessageView(
        f"no {kind} match for '{value or ''}'",
        category="error" if error else "warning",
    )


def no_items(kind: str, category: str = "info") -> MessageView:
    """Notice that there are no items of ``kind``."""
    return MessageView(f"no {kind} found", category=category)


def switched_item(kind: str, value: str) -> MessageView:
    """Confirmation that the current ``kind`` is now ``value``."""
    return MessageView(f"switched to {kind} '{value}'", category="info")


def project_assistance() -> MessageView:
    """Guidance shown when a command needs a project and none exists."""
    return MessageView(
        "you need to set up a project before running timed tasks, "
        "please configure a project first: tempo project add <title>",
        category="warning",
    )
