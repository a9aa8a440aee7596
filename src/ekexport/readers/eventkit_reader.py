"""macOS EventKit reader using PyObjC."""

import logging
import threading
from datetime import datetime
from typing import Any, Optional

from ..models.calendar import Calendar
from ..models.event import Event
from ..models.reminder import Reminder
from ..utils.exceptions import (
    AuthorizationNotDetermined,
    CalendarReadError,
    UnsupportedOperation,
)
from .base import AuthorizationScope, AuthorizationStatus, CalendarStoreReader
from .eventkit_mappers import (
    map_calendar,
    map_event,
    map_reminder,
    nsdate_to_datetime,
    rgb_to_hex,
)
from .predicates import filter_reminders, validate_range

try:
    from AppKit import NSColorSpace
    from EventKit import EKEventStore
    from Foundation import NSCalendar, NSDate

    EVENTKIT_AVAILABLE = True
except ImportError:
    EVENTKIT_AVAILABLE = False

logger = logging.getLogger(__name__)

# EKEntityType
ENTITY_TYPES = {
    AuthorizationScope.EVENTS: 0,
    AuthorizationScope.REMINDERS: 1,
}

# EKAuthorizationStatus (3 is "authorized" before macOS 14 and "full access" after)
AUTHORIZATION_STATUSES = {
    0: AuthorizationStatus.NOT_DETERMINED,
    1: AuthorizationStatus.RESTRICTED,
    2: AuthorizationStatus.DENIED,
    3: AuthorizationStatus.AUTHORIZED,
    4: AuthorizationStatus.DENIED,  # write-only access cannot export
}


class EventKitReader(CalendarStoreReader):
    """Read calendars, events and reminders from the macOS EventKit store."""

    def __init__(self, timeout: float = 30.0):
        """
        Initialize EventKit reader.

        Args:
            timeout: Seconds to wait for EventKit completion callbacks

        Raises:
            UnsupportedOperation: If EventKit is not available
        """
        if not EVENTKIT_AVAILABLE:
            raise UnsupportedOperation("EventKit is not available in this environment")
        self.timeout = timeout
        self._store: Optional[Any] = None

    @property
    def store(self) -> Any:
        """Lazy-load the event store."""
        if self._store is None:
            self._store = EKEventStore.alloc().init()
        return self._store

    def authorization_status(self, scope: AuthorizationScope) -> AuthorizationStatus:
        raw = int(EKEventStore.authorizationStatusForEntityType_(ENTITY_TYPES[scope]))
        return AUTHORIZATION_STATUSES.get(raw, AuthorizationStatus.RESTRICTED)

    def _prompt_for_access(self, scope: AuthorizationScope) -> bool:
        done = threading.Event()
        outcome: dict[str, Any] = {"granted": False, "error": None}

        def completion(granted, error):
            outcome["granted"] = bool(granted)
            outcome["error"] = error
            done.set()

        # macOS 14 replaced the generic request with per-entity full access
        if scope is AuthorizationScope.EVENTS and hasattr(
            self.store, "requestFullAccessToEventsWithCompletion_"
        ):
            self.store.requestFullAccessToEventsWithCompletion_(completion)
        elif scope is AuthorizationScope.REMINDERS and hasattr(
            self.store, "requestFullAccessToRemindersWithCompletion_"
        ):
            self.store.requestFullAccessToRemindersWithCompletion_(completion)
        else:
            self.store.requestAccessToEntityType_completion_(
                ENTITY_TYPES[scope], completion
            )

        if not done.wait(self.timeout):
            logger.warning(
                f"No answer to the {scope.label} access prompt after {self.timeout}s"
            )
            raise AuthorizationNotDetermined(scope)
        if outcome["error"] is not None:
            raise CalendarReadError(
                f"Access request for {scope.label} failed: {outcome['error']}"
            )
        return outcome["granted"]

    def list_calendars(self) -> list[Calendar]:
        """List all event calendars."""
        try:
            ek_calendars = self.store.calendarsForEntityType_(
                ENTITY_TYPES[AuthorizationScope.EVENTS]
            )
            result = [map_calendar(c, self._color_hex(c)) for c in ek_calendars]
        except Exception as e:
            raise CalendarReadError(f"Failed to list calendars: {e}") from e

        logger.info(f"Found {len(result)} calendars")
        return result

    def read_events(
        self,
        calendar_ids: Optional[list[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Event]:
        """Read events from the selected calendars."""
        validate_range(start_date, end_date)
        try:
            calendars = self._select_calendars(AuthorizationScope.EVENTS, calendar_ids)
            predicate = self.store.predicateForEventsWithStartDate_endDate_calendars_(
                self._to_nsdate(start_date) if start_date else NSDate.distantPast(),
                self._to_nsdate(end_date) if end_date else NSDate.distantFuture(),
                calendars,
            )
            matches = self.store.eventsMatchingPredicate_(predicate) or []
            result = [map_event(e) for e in matches]
        except Exception as e:
            raise CalendarReadError(f"Failed to read events: {e}") from e

        logger.info(f"Read {len(result)} events")
        return result

    def read_reminders(
        self,
        calendar_ids: Optional[list[str]] = None,
        include_completed: bool = False,
        due_start: Optional[datetime] = None,
        due_end: Optional[datetime] = None,
    ) -> list[Reminder]:
        """Read reminders from the selected lists."""
        validate_range(due_start, due_end)

        done = threading.Event()
        fetched: list[Any] = []

        def completion(reminders):
            fetched.extend(reminders or [])
            done.set()

        try:
            calendars = self._select_calendars(AuthorizationScope.REMINDERS, calendar_ids)
            predicate = self.store.predicateForRemindersInCalendars_(calendars)
            self.store.fetchRemindersMatchingPredicate_completion_(predicate, completion)
        except Exception as e:
            raise CalendarReadError(f"Failed to query reminders: {e}") from e

        self._wait(done, "reminder fetch")

        try:
            reminders = [map_reminder(r, self._due_date(r)) for r in fetched]
        except Exception as e:
            raise CalendarReadError(f"Failed to read reminders: {e}") from e

        result = filter_reminders(reminders, include_completed, due_start, due_end)
        logger.info(f"Read {len(result)} reminders ({len(reminders)} fetched)")
        return result

    def _select_calendars(
        self, scope: AuthorizationScope, calendar_ids: Optional[list[str]]
    ) -> Optional[list[Any]]:
        """Resolve calendar ids to EKCalendar objects (None means all)."""
        if not calendar_ids:
            return None
        wanted = set(calendar_ids)
        selected = [
            c
            for c in self.store.calendarsForEntityType_(ENTITY_TYPES[scope])
            if str(c.calendarIdentifier()) in wanted
        ]
        missing = wanted - {str(c.calendarIdentifier()) for c in selected}
        if missing:
            logger.warning(f"Unknown calendar id(s) ignored: {', '.join(sorted(missing))}")
        return selected

    def _wait(self, done: threading.Event, what: str) -> None:
        if not done.wait(self.timeout):
            raise CalendarReadError(f"Timed out after {self.timeout}s waiting for {what}")

    @staticmethod
    def _to_nsdate(value: datetime) -> Any:
        return NSDate.dateWithTimeIntervalSince1970_(value.timestamp())

    @staticmethod
    def _color_hex(ek_calendar: Any) -> Optional[str]:
        color = ek_calendar.color()
        if color is None:
            return None
        rgb = color.colorUsingColorSpace_(NSColorSpace.sRGBColorSpace())
        if rgb is None:
            return None
        return rgb_to_hex(rgb.redComponent(), rgb.greenComponent(), rgb.blueComponent())

    @staticmethod
    def _due_date(ek_reminder: Any) -> Optional[datetime]:
        components = ek_reminder.dueDateComponents()
        if components is None:
            return None
        return nsdate_to_datetime(NSCalendar.currentCalendar().dateFromComponents_(components))
