"""Query predicates shared by data store readers."""

from datetime import datetime
from typing import Optional

from ..models.reminder import Reminder
from ..utils.date_utils import ensure_utc
from ..utils.exceptions import InvalidDateRange


def validate_range(start: Optional[datetime], end: Optional[datetime]) -> None:
    """
    Check that a (possibly open) range is ordered.

    Raises:
        InvalidDateRange: If both bounds are set and start is after end
    """
    if start is not None and end is not None and ensure_utc(start) > ensure_utc(end):
        raise InvalidDateRange()


def reminder_matches(
    reminder: Reminder,
    include_completed: bool,
    due_start: Optional[datetime] = None,
    due_end: Optional[datetime] = None,
) -> bool:
    """
    Decide whether a fetched reminder belongs in the export.

    Reminders without a due date are never excluded by the due window.
    """
    if not include_completed and reminder.is_completed:
        return False
    if reminder.due_date is None:
        return True
    due = ensure_utc(reminder.due_date)
    if due_start is not None and due < ensure_utc(due_start):
        return False
    if due_end is not None and due > ensure_utc(due_end):
        return False
    return True


def filter_reminders(
    reminders: list[Reminder],
    include_completed: bool,
    due_start: Optional[datetime] = None,
    due_end: Optional[datetime] = None,
) -> list[Reminder]:
    """Keep the reminders matching the completion and due-date filters."""
    return [
        r
        for r in reminders
        if reminder_matches(r, include_completed, due_start, due_end)
    ]
