"""Tests for EventKit object mapping (with PyObjC-like stand-ins)."""

from datetime import datetime
from typing import Any, Optional
from unittest.mock import MagicMock

import pytz

from ekexport.models.calendar import CalendarType
from ekexport.models.event import Frequency, RecurrenceRule
from ekexport.readers.eventkit_mappers import (
    map_calendar,
    map_event,
    map_recurrence_rule,
    map_reminder,
    nsdate_to_datetime,
    rgb_to_hex,
)

JAN_1_NOON = 1704110400.0  # 2024-01-01T12:00:00Z


def selectors(**values: Any) -> MagicMock:
    """Object whose zero-argument selectors return the given values."""
    obj = MagicMock()
    for name, value in values.items():
        getattr(obj, name).return_value = value
    return obj


def nsdate(timestamp: float) -> MagicMock:
    return selectors(timeIntervalSince1970=timestamp)


def ek_rule(frequency: int, interval: int = 1, occurrences: Optional[int] = None) -> MagicMock:
    end = selectors(occurrenceCount=occurrences) if occurrences is not None else None
    return selectors(frequency=frequency, interval=interval, recurrenceEnd=end)


def ek_event(**overrides: Any) -> MagicMock:
    values = {
        "eventIdentifier": "EV-1",
        "calendar": selectors(calendarIdentifier="CAL-1"),
        "title": "Dentist",
        "notes": None,
        "location": None,
        "startDate": nsdate(JAN_1_NOON),
        "endDate": nsdate(JAN_1_NOON + 3600),
        "isAllDay": False,
        "timeZone": selectors(name="Europe/Zurich"),
        "recurrenceRules": None,
    }
    values.update(overrides)
    return selectors(**values)


def ek_reminder(**overrides: Any) -> MagicMock:
    values = {
        "calendarItemIdentifier": "REM-1",
        "calendar": selectors(calendarIdentifier="LIST-1"),
        "title": "Call mom",
        "notes": None,
        "isCompleted": False,
        "completionDate": None,
        "priority": 0,
    }
    values.update(overrides)
    return selectors(**values)


class TestConversions:
    def test_nsdate(self):
        assert nsdate_to_datetime(nsdate(JAN_1_NOON)) == datetime(2024, 1, 1, 12, tzinfo=pytz.utc)
        assert nsdate_to_datetime(None) is None

    def test_rgb_to_hex(self):
        assert rgb_to_hex(1.0, 0.341, 0.2) == "#FF5733"
        assert rgb_to_hex(0.0, 0.0, 0.0) == "#000000"
        assert rgb_to_hex(1.2, -0.1, 0.5) == "#FF0080"


class TestMapCalendar:
    def test_maps_fields(self):
        source = selectors(title="iCloud", sourceType=3)
        ek = selectors(
            calendarIdentifier="CAL-1",
            title="Family",
            source=source,
            allowsContentModifications=True,
        )
        cal = map_calendar(ek, "#3366FF")
        assert cal.id == "CAL-1"
        assert cal.account == "iCloud"
        assert cal.type is CalendarType.ICLOUD
        assert cal.color_hex == "#3366FF"
        assert cal.allows_modifications is True

    def test_unknown_source_type(self):
        source = selectors(title="Mystery", sourceType=42)
        ek = selectors(
            calendarIdentifier="X", title="X", source=source, allowsContentModifications=False
        )
        assert map_calendar(ek).type is CalendarType.UNKNOWN

    def test_missing_source(self):
        ek = selectors(
            calendarIdentifier="X", title="X", source=None, allowsContentModifications=False
        )
        cal = map_calendar(ek)
        assert cal.account is None
        assert cal.type is CalendarType.UNKNOWN


class TestMapRecurrenceRule:
    def test_bounded(self):
        assert map_recurrence_rule(ek_rule(0, 2, 5)) == RecurrenceRule(
            frequency=Frequency.DAILY, interval=2, count=5
        )

    def test_unbounded(self):
        assert map_recurrence_rule(ek_rule(3)).count is None

    def test_end_date_rule_has_no_count(self):
        assert map_recurrence_rule(ek_rule(1, 1, 0)).count is None

    def test_unknown_frequency_dropped(self):
        assert map_recurrence_rule(ek_rule(9)) is None


class TestMapEvent:
    def test_maps_fields(self):
        event = map_event(ek_event(notes="Bring card", location="Main St"))
        assert event.id == "EV-1"
        assert event.calendar_id == "CAL-1"
        assert event.title == "Dentist"
        assert event.notes == "Bring card"
        assert event.location == "Main St"
        assert event.start == datetime(2024, 1, 1, 12, tzinfo=pytz.utc)
        assert event.end == datetime(2024, 1, 1, 13, tzinfo=pytz.utc)
        assert event.time_zone_identifier == "Europe/Zurich"
        assert event.recurrence_rules == ()

    def test_missing_title_and_zone(self):
        event = map_event(ek_event(title=None, timeZone=None))
        assert event.title == ""
        assert event.time_zone_identifier is None

    def test_rules_filtered_in_order(self):
        event = map_event(ek_event(recurrenceRules=[ek_rule(2, 1), ek_rule(7), ek_rule(1, 3, 4)]))
        assert [r.frequency for r in event.recurrence_rules] == [
            Frequency.MONTHLY,
            Frequency.WEEKLY,
        ]


class TestMapReminder:
    def test_open_reminder(self):
        reminder = map_reminder(ek_reminder())
        assert reminder.id == "REM-1"
        assert reminder.calendar_id == "LIST-1"
        assert reminder.priority is None
        assert reminder.completed_date is None
        assert reminder.due_date is None

    def test_completed_reminder(self):
        due = datetime(2024, 1, 2, tzinfo=pytz.utc)
        reminder = map_reminder(
            ek_reminder(isCompleted=True, completionDate=nsdate(JAN_1_NOON), priority=5),
            due_date=due,
        )
        assert reminder.is_completed
        assert reminder.completed_date == datetime(2024, 1, 1, 12, tzinfo=pytz.utc)
        assert reminder.due_date == due
        assert reminder.priority == 5

    def test_completion_date_ignored_when_not_completed(self):
        reminder = map_reminder(ek_reminder(completionDate=nsdate(JAN_1_NOON)))
        assert reminder.completed_date is None
