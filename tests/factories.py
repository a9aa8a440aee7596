"""Builders and fakes shared by the test suite."""

from datetime import datetime
from typing import Any, Optional

import pytz

from ekexport.models.calendar import Calendar, CalendarType
from ekexport.models.event import Event
from ekexport.models.reminder import Reminder
from ekexport.readers.base import (
    AuthorizationScope,
    AuthorizationStatus,
    CalendarStoreReader,
)
from ekexport.readers.predicates import filter_reminders, validate_range

FROZEN_NOW = datetime(2024, 3, 1, 9, 30, 0, tzinfo=pytz.utc)


def frozen_clock() -> datetime:
    return FROZEN_NOW


def make_event(**overrides: Any) -> Event:
    data: dict[str, Any] = {
        "id": "evt-1",
        "calendar_id": "cal-1",
        "title": "Team Meeting",
        "start": datetime(2024, 2, 13, 14, 0, tzinfo=pytz.utc),
        "end": datetime(2024, 2, 13, 15, 0, tzinfo=pytz.utc),
    }
    data.update(overrides)
    return Event(**data)


def make_reminder(**overrides: Any) -> Reminder:
    data: dict[str, Any] = {
        "id": "rem-1",
        "calendar_id": "list-1",
        "title": "Buy milk",
    }
    data.update(overrides)
    return Reminder(**data)


def make_calendar(**overrides: Any) -> Calendar:
    data: dict[str, Any] = {
        "id": "cal-1",
        "title": "Personal",
        "account": "iCloud",
        "type": CalendarType.ICLOUD,
        "color_hex": "#FF5733",
        "allows_modifications": True,
    }
    data.update(overrides)
    return Calendar(**data)


class FakeReader(CalendarStoreReader):
    """In-memory reader recording the calls made to it."""

    def __init__(
        self,
        calendars: Optional[list[Calendar]] = None,
        events: Optional[list[Event]] = None,
        reminders: Optional[list[Reminder]] = None,
        statuses: Optional[dict[AuthorizationScope, AuthorizationStatus]] = None,
        grant: bool = True,
    ):
        self.calendars = calendars or []
        self.events = events or []
        self.reminders = reminders or []
        self.statuses = statuses or {}
        self.grant = grant
        self.calls: list[tuple] = []

    def authorization_status(self, scope: AuthorizationScope) -> AuthorizationStatus:
        return self.statuses.get(scope, AuthorizationStatus.AUTHORIZED)

    def _prompt_for_access(self, scope: AuthorizationScope) -> bool:
        self.calls.append(("prompt", scope))
        return self.grant

    def list_calendars(self) -> list[Calendar]:
        self.calls.append(("list_calendars",))
        return list(self.calendars)

    def read_events(self, calendar_ids=None, start_date=None, end_date=None):
        validate_range(start_date, end_date)
        self.calls.append(("read_events", calendar_ids, start_date, end_date))
        return [
            e for e in self.events if not calendar_ids or e.calendar_id in calendar_ids
        ]

    def read_reminders(
        self, calendar_ids=None, include_completed=False, due_start=None, due_end=None
    ):
        validate_range(due_start, due_end)
        self.calls.append(("read_reminders", calendar_ids, include_completed))
        selected = [
            r for r in self.reminders if not calendar_ids or r.calendar_id in calendar_ids
        ]
        return filter_reminders(selected, include_completed, due_start, due_end)

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)
