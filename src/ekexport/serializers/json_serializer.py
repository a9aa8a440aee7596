"""Structured JSON serializer."""

import json
import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, Optional

import pytz
from pydantic import ValidationError

from ..models.calendar import Calendar
from ..models.event import Event
from ..models.reminder import Reminder
from ..utils.exceptions import EncodingFailed
from .base import Serializer
from .json_models import (
    JSONCalendar,
    JSONCalendarList,
    JSONEvent,
    JSONExport,
    JSONReminder,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(pytz.utc)


class JSONSerializer(Serializer):
    """Render events and reminders into a versioned JSON envelope.

    Keys are sorted at every level and absent optional values are written
    as ``null``, so identical input and clock give byte-identical output.
    """

    format_name = "json"
    file_extension = "json"

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        indent: Optional[int] = 2,
    ):
        """
        Initialize JSON serializer.

        Args:
            clock: Returns the export timestamp (defaults to current UTC time)
            indent: Pretty-print indentation, None for compact output
        """
        self.clock = clock or _utc_now
        self.indent = indent

    def serialize(
        self,
        events: Sequence[Event],
        reminders: Sequence[Reminder],
    ) -> str:
        """Serialize events and reminders into a JSON export document."""
        try:
            export = JSONExport.build(
                events=[JSONEvent.from_model(e) for e in events],
                reminders=[JSONReminder.from_model(r) for r in reminders],
                exported_at=self.clock(),
            )
        except (ValueError, ValidationError) as e:
            raise EncodingFailed(f"JSON serialization failed: {e}") from e

        output = self._dump(export.to_dict())
        logger.debug(
            f"Serialized {len(events)} event(s) and {len(reminders)} reminder(s) to JSON"
        )
        return output

    def serialize_calendars(self, calendars: Sequence[Calendar]) -> str:
        """Serialize a calendar listing into a JSON document."""
        try:
            listing = JSONCalendarList.build(
                calendars=[JSONCalendar.from_model(c) for c in calendars],
                listed_at=self.clock(),
            )
        except (ValueError, ValidationError) as e:
            raise EncodingFailed(f"JSON calendar listing failed: {e}") from e

        return self._dump(listing.to_dict())

    def _dump(self, payload: dict[str, Any]) -> str:
        try:
            output = json.dumps(
                payload,
                sort_keys=True,
                indent=self.indent,
                ensure_ascii=False,
            )
            # Reject text that cannot be written as UTF-8 (lone surrogates)
            output.encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingFailed(f"JSON encoding failed: {e}") from e
        return output
