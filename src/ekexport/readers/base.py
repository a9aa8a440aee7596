"""Abstract base class for calendar data store readers."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Optional

from ..models.calendar import Calendar
from ..models.event import Event
from ..models.reminder import Reminder
from ..utils.exceptions import AuthorizationDenied, AuthorizationRestricted

logger = logging.getLogger(__name__)


class AuthorizationScope(str, Enum):
    """Kind of data a reader needs access to."""

    EVENTS = "events"
    REMINDERS = "reminders"

    @property
    def label(self) -> str:
        return "Calendars" if self is AuthorizationScope.EVENTS else "Reminders"

    @property
    def settings_label(self) -> str:
        # Name of the privacy pane in System Settings
        return self.label


class AuthorizationStatus(str, Enum):
    """Access state of one scope."""

    NOT_DETERMINED = "not_determined"
    AUTHORIZED = "authorized"
    DENIED = "denied"
    RESTRICTED = "restricted"


class CalendarStoreReader(ABC):
    """Abstract base class for calendar data store readers."""

    @abstractmethod
    def authorization_status(self, scope: AuthorizationScope) -> AuthorizationStatus:
        """
        Get the current access state for a scope without prompting.

        Args:
            scope: Events or reminders

        Returns:
            AuthorizationStatus
        """

    @abstractmethod
    def _prompt_for_access(self, scope: AuthorizationScope) -> bool:
        """
        Ask the platform to grant access for a scope.

        Returns:
            True if access was granted

        Raises:
            CalendarReadError: If the request itself fails
        """

    def request_access(self, scopes: Iterable[AuthorizationScope]) -> None:
        """
        Make sure every scope is authorized before querying.

        Scopes that were never requested are prompted for once. Denied and
        restricted scopes fail immediately; nothing is retried.

        Raises:
            AuthorizationDenied: If access is (or gets) refused
            AuthorizationRestricted: If access is blocked by policy
        """
        for scope in scopes:
            status = self.authorization_status(scope)
            logger.debug(f"Authorization status for {scope.label}: {status.value}")
            if status is AuthorizationStatus.AUTHORIZED:
                continue
            if status is AuthorizationStatus.DENIED:
                raise AuthorizationDenied(scope)
            if status is AuthorizationStatus.RESTRICTED:
                raise AuthorizationRestricted(scope)

            logger.info(f"Requesting access to {scope.label}")
            if not self._prompt_for_access(scope):
                raise AuthorizationDenied(scope)

    @abstractmethod
    def list_calendars(self) -> list[Calendar]:
        """
        List all event calendars.

        Returns:
            List of Calendar objects

        Raises:
            CalendarReadError: If listing calendars fails
        """

    @abstractmethod
    def read_events(
        self,
        calendar_ids: Optional[list[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Event]:
        """
        Read events overlapping a date range.

        Args:
            calendar_ids: Calendars to read (None or empty for all)
            start_date: Start of the range (unbounded if None)
            end_date: End of the range (unbounded if None)

        Returns:
            List of normalized Event objects

        Raises:
            InvalidDateRange: If start_date is after end_date
            CalendarReadError: If reading events fails
        """

    @abstractmethod
    def read_reminders(
        self,
        calendar_ids: Optional[list[str]] = None,
        include_completed: bool = False,
        due_start: Optional[datetime] = None,
        due_end: Optional[datetime] = None,
    ) -> list[Reminder]:
        """
        Read reminders.

        Args:
            calendar_ids: Reminder lists to read (None or empty for all)
            include_completed: Whether completed reminders are returned
            due_start: Drop reminders due before this instant
            due_end: Drop reminders due after this instant

        Returns:
            List of normalized Reminder objects

        Raises:
            InvalidDateRange: If due_start is after due_end
            CalendarReadError: If reading reminders fails
        """
