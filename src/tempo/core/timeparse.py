"""Natural-language time expression parsing."""

import logging
from datetime import datetime
from typing import Callable, Optional

import dateparser  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

TimeParser = Callable[[Optional[str], datetime], Optional[datetime]]


def parse_time(text: Optional[str], now: datetime) -> Optional[datetime]:
    """Parse a free-form time expression such as ``9:00am`` or ``2 hours ago``.

    A bare number is an hour of the reference day, so ``9`` means 9 o'clock.

    Args:
        text: Expression to parse
        now: Reference time; missing date parts are taken from it

    Returns:
        Parsed naive datetime, or None if the expression is blank or not understood
    """
    if text is None or not text.strip():
        return None

    text = text.strip()
    if text.isascii() and text.isdigit():
        hour = int(text)
        if hour > 23:
            logger.debug(f"No time match for {text!r}")
            return None
        return now.replace(hour=hour, minute=0, second=0, microsecond=0)

    settings = {
        "RELATIVE_BASE": now,
        "RETURN_AS_TIMEZONE_AWARE": False,
    }
    try:
        parsed = dateparser.parse(text, settings=settings)
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Failed to parse time expression {text!r}: {e}")
        return None

    if parsed is None:
        logger.debug(f"No time match for {text!r}")
        return None
    return parsed.replace(microsecond=0)
