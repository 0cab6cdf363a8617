"""Start a new timer."""

import logging
from collections.abc import Iterable
from typing import Optional, Union

from tempo.controllers.base import Controller, reassemble
from tempo.core.errors import PreconditionError
from tempo.views.messages import no_match
from tempo.views.records import MessageView, TimeRecordView

logger = logging.getLogger(__name__)


class StartController(Controller):
    """Create time records."""

    def start_timer(
        self,
        at: Optional[str] = None,
        end: Optional[str] = None,
        words: Optional[Iterable[str]] = None,
    ) -> Union[TimeRecordView, MessageView]:
        """Start a time record against the current project.

        Args:
            at: Start time expression, now if omitted
            end: End time expression; the record is closed right away if given
            words: Description words

        Returns:
            View of the new record, or guidance if a time expression is not understood

        Raises:
            PreconditionError: If the end time is not after the start time
        """
        start_time = self.parse(at)
        if start_time is None:
            return no_match("valid timeframe", at)

        end_time = None
        if end is not None:
            end_time = self.parse(end)
            if end_time is None:
                return no_match("valid timeframe", end)
            if end_time <= start_time:
                raise PreconditionError("end time must be after start time")

        self.projects.load()
        self.time_records.load_active_period()

        current = self.projects.current
        record = self.time_records.new(
            start_time=start_time,
            end_time=end_time,
            description=reassemble(words),
            project=current.id if current else None,
        )
        self.time_records.save()
        logger.info(f"Started time record {record.d_id}-{record.id} at {start_time}")

        return self.time_record_view(record, new_record=True)
