"""Date and time utilities for ekexport."""

from datetime import datetime
from typing import Optional

import pytz


def get_timezone(time_zone_id: str) -> pytz.BaseTzInfo:
    """
    Resolve an IANA timezone identifier.

    Args:
        time_zone_id: Identifier such as "Europe/Zurich"

    Returns:
        pytz timezone

    Raises:
        ValueError: If the identifier is unknown
    """
    try:
        return pytz.timezone(time_zone_id)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone identifier: {time_zone_id!r}") from e


def ensure_utc(dt: datetime, time_zone_id: Optional[str] = None) -> datetime:
    """
    Ensure datetime is in UTC.

    Args:
        dt: Datetime to convert
        time_zone_id: Zone a naive datetime is expressed in (UTC if omitted)

    Returns:
        UTC datetime

    Raises:
        ValueError: If the zone is unknown or the instant has no UTC equivalent
    """
    zone = pytz.utc
    if dt.tzinfo is None and time_zone_id:
        zone = get_timezone(time_zone_id)
    try:
        if dt.tzinfo is None:
            dt = zone.localize(dt)
        return dt.astimezone(pytz.utc)
    except OverflowError as e:
        raise ValueError(f"{dt} is out of range in UTC") from e


def _format_date(d: datetime) -> str:
    # strftime does not pad years below 1000 on every platform
    return f"{d.year:04d}{d.month:02d}{d.day:02d}"


def to_ics_datetime(
    instant: Optional[datetime],
    time_zone_id: Optional[str] = None,
    is_all_day: bool = False,
) -> str:
    """
    Format an instant as an iCalendar DATE or DATE-TIME value.

    All-day values are bare dates (YYYYMMDD). Timed values are always UTC
    (YYYYMMDDTHHMMSSZ); the timezone identifier only tells how to read a
    naive instant and is not carried into the output.

    Args:
        instant: Event start or end
        time_zone_id: Optional IANA identifier of the event
        is_all_day: Whether the event has no time-of-day component

    Returns:
        Formatted value

    Raises:
        ValueError: If the instant is missing or out of range, or the identifier is unknown
    """
    if instant is None:
        raise ValueError("A start and end are required to build an ICS timestamp")

    if is_all_day:
        civil = instant
        if instant.tzinfo is not None and time_zone_id:
            zone = get_timezone(time_zone_id)
            try:
                civil = instant.astimezone(zone)
            except OverflowError as e:
                raise ValueError(f"{instant} is out of range in {time_zone_id}") from e
        return _format_date(civil)

    utc = ensure_utc(instant, time_zone_id)
    return f"{_format_date(utc)}T{utc.hour:02d}{utc.minute:02d}{utc.second:02d}Z"


def to_iso8601(instant: Optional[datetime], time_zone_id: Optional[str] = None) -> str:
    """Format an instant as ISO-8601 in UTC with a trailing ``Z``."""
    if instant is None:
        raise ValueError("An instant is required to build an ISO-8601 timestamp")
    utc = ensure_utc(instant, time_zone_id)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}Z"
    )


def parse_iso_date(
    value: str,
    tz_name: str = "UTC",
    end_of_day: bool = False,
) -> datetime:
    """
    Parse a YYYY-MM-DD command line date.

    Args:
        value: Date text
        tz_name: Zone the day is interpreted in
        end_of_day: Return 23:59:59 instead of midnight (inclusive range end)

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the text is not a valid date or the zone is unknown
    """
    day = datetime.strptime(value, "%Y-%m-%d")
    if end_of_day:
        day = day.replace(hour=23, minute=59, second=59)
    return get_timezone(tz_name).localize(day)
