"""Calendar metadata model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CalendarType(str, Enum):
    """Kind of account a calendar is stored in."""

    LOCAL = "Local"
    EXCHANGE = "Exchange"
    CALDAV = "CalDAV"
    ICLOUD = "iCloud"
    SUBSCRIBED = "Subscribed"
    BIRTHDAYS = "Birthdays"
    UNKNOWN = "Unknown"


class Calendar(BaseModel):
    """Calendar metadata."""

    id: str
    title: str
    account: Optional[str] = None
    type: CalendarType = CalendarType.UNKNOWN
    color_hex: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    allows_modifications: bool = False

    model_config = {"frozen": True}

    @property
    def permissions_label(self) -> str:
        return "Read/Write" if self.allows_modifications else "Read Only"
