"""Mapping of EventKit (PyObjC) objects onto the domain model.

Only plain accessor calls are made here so the functions can be fed any
object exposing the same selectors. Conversions that need AppKit or
Foundation classes (colors, date components) are resolved by the reader and
passed in.
"""

import logging
from datetime import datetime
from typing import Any, Optional

import pytz

from ..models.calendar import Calendar, CalendarType
from ..models.event import Event, Frequency, RecurrenceRule
from ..models.reminder import Reminder

logger = logging.getLogger(__name__)

# EKSourceType
SOURCE_TYPES = {
    0: CalendarType.LOCAL,
    1: CalendarType.EXCHANGE,
    2: CalendarType.CALDAV,
    3: CalendarType.ICLOUD,
    4: CalendarType.SUBSCRIBED,
    5: CalendarType.BIRTHDAYS,
}

# EKRecurrenceFrequency
FREQUENCIES = {
    0: Frequency.DAILY,
    1: Frequency.WEEKLY,
    2: Frequency.MONTHLY,
    3: Frequency.YEARLY,
}


def nsdate_to_datetime(value: Any) -> Optional[datetime]:
    """Convert an NSDate into an aware UTC datetime."""
    if value is None:
        return None
    return datetime.fromtimestamp(value.timeIntervalSince1970(), tz=pytz.utc)


def rgb_to_hex(red: float, green: float, blue: float) -> str:
    """Format 0..1 color components as #RRGGBB."""
    return "#{:02X}{:02X}{:02X}".format(
        *(max(0, min(255, round(c * 255.0))) for c in (red, green, blue))
    )


def map_calendar(ek_calendar: Any, color_hex: Optional[str] = None) -> Calendar:
    """Map an EKCalendar."""
    source = ek_calendar.source()
    return Calendar(
        id=str(ek_calendar.calendarIdentifier()),
        title=str(ek_calendar.title() or ""),
        account=str(source.title()) if source is not None and source.title() else None,
        type=(
            SOURCE_TYPES.get(int(source.sourceType()), CalendarType.UNKNOWN)
            if source is not None
            else CalendarType.UNKNOWN
        ),
        color_hex=color_hex,
        allows_modifications=bool(ek_calendar.allowsContentModifications()),
    )


def map_recurrence_rule(ek_rule: Any) -> Optional[RecurrenceRule]:
    """
    Map an EKRecurrenceRule.

    Returns:
        RecurrenceRule, or None when the frequency is not recognized
    """
    frequency = FREQUENCIES.get(int(ek_rule.frequency()))
    if frequency is None:
        logger.debug(f"Dropping recurrence rule with frequency {ek_rule.frequency()}")
        return None

    count = None
    recurrence_end = ek_rule.recurrenceEnd()
    if recurrence_end is not None:
        # 0 means the rule ends on a date rather than after N occurrences
        count = int(recurrence_end.occurrenceCount()) or None

    return RecurrenceRule(
        frequency=frequency,
        interval=max(1, int(ek_rule.interval())),
        count=count,
    )


def map_event(ek_event: Any) -> Event:
    """Map an EKEvent."""
    rules = []
    for ek_rule in ek_event.recurrenceRules() or []:
        rule = map_recurrence_rule(ek_rule)
        if rule is not None:
            rules.append(rule)

    time_zone = ek_event.timeZone()
    return Event(
        id=str(ek_event.eventIdentifier()),
        calendar_id=str(ek_event.calendar().calendarIdentifier()),
        title=str(ek_event.title() or ""),
        notes=str(ek_event.notes()) if ek_event.notes() is not None else None,
        location=str(ek_event.location()) if ek_event.location() is not None else None,
        start=nsdate_to_datetime(ek_event.startDate()),
        end=nsdate_to_datetime(ek_event.endDate()),
        is_all_day=bool(ek_event.isAllDay()),
        time_zone_identifier=str(time_zone.name()) if time_zone is not None else None,
        recurrence_rules=tuple(rules),
    )


def map_reminder(ek_reminder: Any, due_date: Optional[datetime] = None) -> Reminder:
    """
    Map an EKReminder.

    Args:
        ek_reminder: EventKit reminder
        due_date: Due date already resolved from the reminder's date components
    """
    completed_date = None
    if ek_reminder.isCompleted():
        completed_date = nsdate_to_datetime(ek_reminder.completionDate())

    return Reminder(
        id=str(ek_reminder.calendarItemIdentifier()),
        calendar_id=str(ek_reminder.calendar().calendarIdentifier()),
        title=str(ek_reminder.title() or ""),
        notes=str(ek_reminder.notes()) if ek_reminder.notes() is not None else None,
        due_date=due_date,
        completed_date=completed_date,
        priority=int(ek_reminder.priority()),
    )
