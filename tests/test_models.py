"""Tests for the domain models."""

from datetime import datetime

import pytest
import pytz
from pydantic import ValidationError

from ekexport.models.calendar import Calendar, CalendarType
from ekexport.models.event import Frequency, RecurrenceRule
from factories import make_calendar, make_event, make_reminder


class TestReminder:
    def test_zero_priority_is_unspecified(self):
        assert make_reminder(priority=0).priority is None

    def test_priority_kept_in_range(self):
        assert make_reminder(priority=1).priority == 1
        assert make_reminder(priority=9).priority == 9

    @pytest.mark.parametrize("priority", [-1, 10])
    def test_priority_out_of_range_rejected(self, priority):
        with pytest.raises(ValidationError):
            make_reminder(priority=priority)

    def test_completion_derived_from_completed_date(self):
        assert make_reminder().is_completed is False
        done = make_reminder(completed_date=datetime(2024, 1, 2, tzinfo=pytz.utc))
        assert done.is_completed is True

    def test_is_frozen(self):
        reminder = make_reminder()
        with pytest.raises(ValidationError):
            reminder.title = "changed"


class TestRecurrenceRule:
    def test_defaults(self):
        rule = RecurrenceRule(frequency=Frequency.WEEKLY)
        assert rule.interval == 1
        assert rule.count is None

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            RecurrenceRule(frequency=Frequency.DAILY, interval=0)

    def test_unknown_frequency_rejected(self):
        with pytest.raises(ValidationError):
            RecurrenceRule(frequency="hourly")

    def test_ics_value(self):
        assert Frequency.MONTHLY.ics_value == "MONTHLY"


class TestEvent:
    def test_rules_keep_order_and_become_tuple(self):
        rules = [
            RecurrenceRule(frequency=Frequency.DAILY),
            RecurrenceRule(frequency=Frequency.YEARLY, count=3),
        ]
        event = make_event(recurrence_rules=rules)
        assert event.recurrence_rules == tuple(rules)

    def test_value_equality_and_hash(self):
        assert make_event() == make_event()
        assert len({make_event(), make_event()}) == 1

    def test_start_after_end_is_allowed(self):
        event = make_event(
            start=datetime(2024, 1, 2, tzinfo=pytz.utc),
            end=datetime(2024, 1, 1, tzinfo=pytz.utc),
        )
        assert event.start > event.end

    def test_start_is_required(self):
        with pytest.raises(ValidationError):
            make_event(start=None)


class TestCalendar:
    def test_invalid_color_rejected(self):
        with pytest.raises(ValidationError):
            make_calendar(color_hex="red")

    def test_color_optional(self):
        assert make_calendar(color_hex=None).color_hex is None

    def test_type_from_label(self):
        cal = Calendar(id="c", title="Birthdays", type="Birthdays")
        assert cal.type is CalendarType.BIRTHDAYS
        assert cal.permissions_label == "Read Only"
