"""Normalized calendar event data model."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Frequency(str, Enum):
    """Recurrence frequency."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def ics_value(self) -> str:
        return self.value.upper()


class RecurrenceRule(BaseModel):
    """Event recurrence pattern."""

    frequency: Frequency
    interval: int = Field(default=1, ge=1)
    count: Optional[int] = Field(default=None, ge=1)  # None means unbounded

    model_config = {"frozen": True}


class Event(BaseModel):
    """Normalized calendar event model.

    ``start`` and ``end`` may be naive or timezone-aware. Naive values are
    civil times in ``time_zone_identifier`` when one is set, UTC otherwise.
    No ordering between ``start`` and ``end`` is enforced here.
    """

    # Identifiers
    id: str
    calendar_id: str

    # Basic properties
    title: str = ""
    notes: Optional[str] = None
    location: Optional[str] = None

    # Time properties
    start: datetime
    end: datetime
    is_all_day: bool = False
    time_zone_identifier: Optional[str] = None

    # Recurrence
    recurrence_rules: tuple[RecurrenceRule, ...] = ()

    model_config = {"frozen": True}
