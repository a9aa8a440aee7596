"""JSON payload models.

These mirror the domain models but fix the exported schema (camelCase keys,
ISO-8601 strings, explicit nulls) independently of the domain types.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models.calendar import Calendar
from ..models.event import Event, RecurrenceRule
from ..models.reminder import Reminder
from ..utils.date_utils import to_iso8601

EXPORTED_BY = "ekexport"


class JSONPayload(BaseModel):
    """Base for payload models, dumped with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class JSONRecurrenceRule(JSONPayload):
    frequency: str
    interval: int
    count: Optional[int]

    @classmethod
    def from_model(cls, rule: RecurrenceRule) -> "JSONRecurrenceRule":
        return cls(
            frequency=rule.frequency.value,
            interval=rule.interval,
            count=rule.count,
        )


class JSONEvent(JSONPayload):
    id: str
    calendar_id: str
    title: str
    notes: Optional[str]
    location: Optional[str]
    start_date: str
    end_date: str
    is_all_day: bool
    time_zone: Optional[str]
    recurrence_rules: list[JSONRecurrenceRule]

    @classmethod
    def from_model(cls, event: Event) -> "JSONEvent":
        tz_id = event.time_zone_identifier
        return cls(
            id=event.id,
            calendar_id=event.calendar_id,
            title=event.title,
            notes=event.notes,
            location=event.location,
            start_date=to_iso8601(event.start, tz_id),
            end_date=to_iso8601(event.end, tz_id),
            is_all_day=event.is_all_day,
            time_zone=tz_id,
            recurrence_rules=[
                JSONRecurrenceRule.from_model(rule) for rule in event.recurrence_rules
            ],
        )


class JSONReminder(JSONPayload):
    id: str
    calendar_id: str
    title: str
    notes: Optional[str]
    due_date: Optional[str]
    completed_date: Optional[str]
    priority: Optional[int]
    is_completed: bool

    @classmethod
    def from_model(cls, reminder: Reminder) -> "JSONReminder":
        completed = reminder.completed_date
        return cls(
            id=reminder.id,
            calendar_id=reminder.calendar_id,
            title=reminder.title,
            notes=reminder.notes,
            due_date=to_iso8601(reminder.due_date) if reminder.due_date else None,
            completed_date=to_iso8601(completed) if completed else None,
            priority=reminder.priority or None,
            is_completed=completed is not None,
        )


class JSONCalendar(JSONPayload):
    id: str
    title: str
    account: Optional[str]
    type: str
    color_hex: Optional[str]
    allows_modifications: bool

    @classmethod
    def from_model(cls, calendar: Calendar) -> "JSONCalendar":
        return cls(
            id=calendar.id,
            title=calendar.title,
            account=calendar.account,
            type=calendar.type.value,
            color_hex=calendar.color_hex,
            allows_modifications=calendar.allows_modifications,
        )


class ExportMetadata(JSONPayload):
    timestamp: str
    event_count: int
    reminder_count: int
    exported_by: str = EXPORTED_BY


class JSONExport(JSONPayload):
    export_info: ExportMetadata
    events: list[JSONEvent]
    reminders: list[JSONReminder]

    @classmethod
    def build(
        cls,
        events: list[JSONEvent],
        reminders: list[JSONReminder],
        exported_at: datetime,
    ) -> "JSONExport":
        return cls(
            export_info=ExportMetadata(
                timestamp=to_iso8601(exported_at),
                event_count=len(events),
                reminder_count=len(reminders),
            ),
            events=events,
            reminders=reminders,
        )


class ListMetadata(JSONPayload):
    timestamp: str
    calendar_count: int
    listed_by: str = EXPORTED_BY


class JSONCalendarList(JSONPayload):
    list_info: ListMetadata
    calendars: list[JSONCalendar]

    @classmethod
    def build(
        cls,
        calendars: list[JSONCalendar],
        listed_at: datetime,
    ) -> "JSONCalendarList":
        return cls(
            list_info=ListMetadata(
                timestamp=to_iso8601(listed_at),
                calendar_count=len(calendars),
            ),
            calendars=calendars,
        )
