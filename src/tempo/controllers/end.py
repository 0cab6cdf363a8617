"""End the running timer."""

import logging
from collections.abc import Iterable
from typing import Optional, Union

from tempo.controllers.base import Controller, reassemble
from tempo.core.errors import PreconditionError
from tempo.views.messages import no_items, no_match, project_assistance
from tempo.views.records import MessageView, TimeRecordView

logger = logging.getLogger(__name__)


class EndController(Controller):
    """Close time records."""

    def end_timer(
        self,
        at: Optional[str] = None,
        words: Optional[Iterable[str]] = None,
    ) -> Union[TimeRecordView, MessageView]:
        """Close the most recently started running record.

        Args:
            at: End time expression, now if omitted
            words: New description; the existing one is kept when empty

        Returns:
            View of the closed record, or a notice when there is nothing to end

        Raises:
            PreconditionError: If the end time is not after the record's start
        """
        if not self.projects.load():
            return project_assistance()

        end_time = self.parse(at)
        if end_time is None:
            return no_match("valid timeframe", at)

        description = reassemble(words)

        self.time_records.load_active_period()
        record = self.time_records.current()
        if record is None:
            return no_items("running time records", "error")

        if end_time <= record.start_time:
            raise PreconditionError("end time must be after start time")

        record.end_time = end_time
        if description:
            record.description = description
        self.time_records.save()
        logger.info(f"Ended time record {record.d_id}-{record.id} at {end_time}")

        return self.time_record_view(record)
