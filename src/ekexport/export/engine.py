"""Export pipeline: fetch from the data store, then serialize."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..models.calendar import Calendar
from ..models.reminder import Reminder
from ..readers.base import AuthorizationScope, CalendarStoreReader
from ..readers.predicates import validate_range
from ..serializers.base import Serializer

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Result of an export operation."""

    content: str
    format_name: str
    file_extension: str
    event_count: int = 0
    reminder_count: int = 0


class ExportEngine:
    """Main export engine."""

    def __init__(self, reader: CalendarStoreReader, serializer: Serializer):
        """
        Initialize export engine.

        Args:
            reader: Data store reader
            serializer: Serializer for the requested format
        """
        self.reader = reader
        self.serializer = serializer

    def list_calendars(self) -> list[Calendar]:
        """Authorize calendar access and return every calendar in the store."""
        self.reader.request_access([AuthorizationScope.EVENTS])
        calendars = self.reader.list_calendars()
        logger.info(f"Found {len(calendars)} calendars")
        return calendars

    def export(
        self,
        calendar_ids: Optional[list[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        include_reminders: bool = False,
        include_completed: bool = False,
    ) -> ExportResult:
        """
        Read events (and optionally reminders) and serialize them.

        The date range is checked before anything is requested from the data
        store. Errors from the reader or serializer propagate unchanged.

        Args:
            calendar_ids: Calendars to export (None or empty for all)
            start_date: Start of the export range
            end_date: End of the export range
            include_reminders: Also export reminders (due within the range)
            include_completed: Keep completed reminders

        Returns:
            ExportResult with the serialized document
        """
        validate_range(start_date, end_date)

        scopes = [AuthorizationScope.EVENTS]
        if include_reminders:
            scopes.append(AuthorizationScope.REMINDERS)
        self.reader.request_access(scopes)

        logger.info(
            f"Exporting {self.serializer.format_name} from "
            f"{start_date.date() if start_date else 'unbounded'} to "
            f"{end_date.date() if end_date else 'unbounded'}"
        )

        events = self.reader.read_events(
            calendar_ids=calendar_ids,
            start_date=start_date,
            end_date=end_date,
        )

        reminders: list[Reminder] = []
        if include_reminders:
            reminders = self.reader.read_reminders(
                calendar_ids=calendar_ids,
                include_completed=include_completed,
                due_start=start_date,
                due_end=end_date,
            )

        content = self.serializer.serialize(events, reminders)
        logger.info(
            f"Export complete: {len(events)} events, {len(reminders)} reminders"
        )
        return ExportResult(
            content=content,
            format_name=self.serializer.format_name,
            file_extension=self.serializer.file_extension,
            event_count=len(events),
            reminder_count=len(reminders),
        )
