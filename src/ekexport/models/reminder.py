"""Reminder data model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class Reminder(BaseModel):
    """Reminder (task) read from the data store.

    Completion is expressed only through ``completed_date``; there is no
    separately stored flag.
    """

    id: str
    calendar_id: str
    title: str = ""
    notes: Optional[str] = None
    due_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    priority: Optional[int] = None  # 1 (high) .. 9 (low)

    model_config = {"frozen": True}

    @field_validator("priority")
    @classmethod
    def _normalize_priority(cls, value: Optional[int]) -> Optional[int]:
        # The data store uses 0 for "no priority"
        if value is None or value == 0:
            return None
        if not 1 <= value <= 9:
            raise ValueError(f"priority must be between 1 and 9, got {value}")
        return value

    @property
    def is_completed(self) -> bool:
        return self.completed_date is not None
