"""iCalendar (RFC 5545) serializer."""

import logging
from collections.abc import Iterator, Sequence

from ..models.event import Event, RecurrenceRule
from ..models.reminder import Reminder
from ..utils.date_utils import to_ics_datetime
from ..utils.exceptions import EncodingFailed
from .base import Serializer

logger = logging.getLogger(__name__)

PRODUCT_ID = "-//ekexport//EN"
MAX_LINE_OCTETS = 75

LINE_ENDINGS = {
    "lf": "\n",
    "crlf": "\r\n",
}


def escape_text(text: str) -> str:
    """
    Escape a TEXT property value (RFC 5545 section 3.3.11).

    Backslashes are escaped first so the escapes added afterwards are not
    doubled. Any CR/CRLF is treated as a newline.
    """
    text = text.replace("\\", "\\\\")
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\n", "\\n")
    text = text.replace(",", "\\,")
    text = text.replace(";", "\\;")
    return text


def _fold_units(line: str) -> Iterator[str]:
    """Split a content line into pieces a fold may never cut through."""
    i = 0
    while i < len(line):
        if line[i] == "\\" and i + 1 < len(line):
            yield line[i : i + 2]
            i += 2
        else:
            yield line[i]
            i += 1


def fold_line(line: str) -> list[str]:
    """
    Fold a content line into physical lines of at most 75 octets.

    Continuation lines start with a single space, which counts towards
    their length.
    """
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return [line]

    physical: list[str] = []
    current = ""
    size = 0
    for unit in _fold_units(line):
        width = len(unit.encode("utf-8"))
        if size + width > MAX_LINE_OCTETS:
            physical.append(current)
            current, size = " ", 1
        current += unit
        size += width
    physical.append(current)
    return physical


def format_rrule(rule: RecurrenceRule) -> str:
    """Flatten a recurrence rule into an RRULE value."""
    value = f"FREQ={rule.frequency.ics_value};INTERVAL={rule.interval}"
    if rule.count is not None:
        value += f";COUNT={rule.count}"
    return value


class ICSSerializer(Serializer):
    """Render events as a VCALENDAR document with one VEVENT per event.

    Reminders are accepted for interface compatibility but not exported;
    VTODO output is not implemented.
    """

    format_name = "ics"
    file_extension = "ics"

    def __init__(self, line_ending: str = "\n"):
        """
        Initialize ICS serializer.

        Args:
            line_ending: Physical line terminator, LF or CRLF
        """
        if line_ending not in LINE_ENDINGS.values():
            raise ValueError(f"Unsupported line ending: {line_ending!r}")
        self.line_ending = line_ending

    def serialize(
        self,
        events: Sequence[Event],
        reminders: Sequence[Reminder],
    ) -> str:
        """Serialize events into an iCalendar document."""
        if reminders:
            logger.debug(f"Omitting {len(reminders)} reminder(s) from ICS output")

        try:
            lines = ["BEGIN:VCALENDAR", "VERSION:2.0", f"PRODID:{PRODUCT_ID}"]
            for event in events:
                lines.extend(self._event_lines(event))
            lines.append("END:VCALENDAR")

            output = "".join(
                f"{physical}{self.line_ending}"
                for line in lines
                for physical in fold_line(line)
            )
        except ValueError as e:
            # UnicodeEncodeError is a ValueError too
            raise EncodingFailed(f"ICS serialization failed: {e}") from e

        logger.debug(f"Serialized {len(events)} event(s) to ICS")
        return output

    def _event_lines(self, event: Event) -> list[str]:
        """Build the unfolded content lines of one VEVENT."""
        tz_id = event.time_zone_identifier
        lines = [
            "BEGIN:VEVENT",
            f"UID:{event.id}",
            f"DTSTART:{to_ics_datetime(event.start, tz_id, event.is_all_day)}",
            f"DTEND:{to_ics_datetime(event.end, tz_id, event.is_all_day)}",
            f"SUMMARY:{escape_text(event.title)}",
        ]
        if event.notes:
            lines.append(f"DESCRIPTION:{escape_text(event.notes)}")
        if event.location:
            lines.append(f"LOCATION:{escape_text(event.location)}")
        for rule in event.recurrence_rules:
            lines.append(f"RRULE:{format_rrule(rule)}")
        lines.append("END:VEVENT")
        return lines
