"""CLI entry point for ekexport."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import DEFAULT_PROFILE_PATH, ProfileConfig, config
from .export.engine import ExportEngine
from .export.output import write_output
from .models.calendar import Calendar
from .readers.base import CalendarStoreReader
from .readers.eventkit_reader import EventKitReader
from .serializers.base import Serializer
from .serializers.ics_serializer import LINE_ENDINGS
from .serializers.json_serializer import JSONSerializer
from .serializers.registry import SERIALIZERS, get_serializer
from .utils.date_utils import parse_iso_date
from .utils.exceptions import AuthorizationError, ConfigurationError, EkExportError
from .utils.logging import setup_logging


def _create_reader() -> CalendarStoreReader:
    """Create the data store reader for this platform."""
    return EventKitReader(timeout=config.access_timeout)


def _create_serializer(fmt: str) -> Serializer:
    """Create the serializer for a format, applying configured options."""
    if fmt.lower() == "ics":
        line_ending = LINE_ENDINGS.get(config.ics_line_ending.lower())
        if line_ending is None:
            raise ConfigurationError(
                f"Invalid EKEXPORT_ICS_LINE_ENDING '{config.ics_line_ending}'. "
                f"Must be one of: {sorted(LINE_ENDINGS)}"
            )
        return get_serializer(fmt, line_ending=line_ending)
    return get_serializer(fmt)


def _parse_calendar_ids(values: Optional[list[str]]) -> list[str]:
    """Accept both repeated and comma-separated calendar ids."""
    ids: list[str] = []
    for value in values or []:
        ids.extend(part.strip() for part in value.split(",") if part.strip())
    return ids


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ekexport",
        description="ekexport - Export macOS calendar events and reminders to ICS or JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    export = subparsers.add_parser(
        "export",
        help="Export calendar events and reminders",
    )
    export.add_argument(
        "--calendars",
        nargs="*",
        help="Calendar identifiers to export, space or comma separated (default: all). "
        "Use list-calendars to find IDs.",
    )
    export.add_argument(
        "--start-date",
        type=str,
        default=None,
        help="Start of the export range, inclusive (YYYY-MM-DD)",
    )
    export.add_argument(
        "--end-date",
        type=str,
        default=None,
        help="End of the export range, inclusive (YYYY-MM-DD)",
    )
    export.add_argument(
        "--include-reminders",
        action="store_true",
        help="Export reminders in addition to calendar events",
    )
    export.add_argument(
        "--include-completed",
        action="store_true",
        help="Keep completed reminders (with --include-reminders)",
    )
    export.add_argument(
        "--format",
        choices=sorted(SERIALIZERS),
        default=None,
        help="Output format (default: EKEXPORT_FORMAT or ics)",
    )
    destination = export.add_mutually_exclusive_group()
    destination.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="File to write (default: stdout)",
    )
    destination.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory to create and write export.<format> into",
    )
    export.add_argument(
        "--profile",
        type=str,
        default=None,
        help="Named profile from the profile file",
    )
    export.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_PROFILE_PATH,
        help=f"Profile file (default: {DEFAULT_PROFILE_PATH})",
    )

    list_calendars = subparsers.add_parser(
        "list-calendars",
        help="List available calendars and their identifiers",
    )
    list_calendars.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show color and modification permissions",
    )
    list_calendars.add_argument(
        "--json",
        action="store_true",
        help="Print the listing as JSON",
    )
    return parser


def _print_calendar_table(calendars: list[Calendar], verbose: bool) -> None:
    header = f"{'ID':<15}{'Title':<21}{'Account':<16}{'Type':<11}{'Permissions':<13}"
    if verbose:
        header += f"{'Color':<10}"
    print(header.rstrip())
    print("-" * len(header))
    for cal in calendars:
        row = (
            f"{cal.id:<15}{cal.title:<21}{cal.account or '':<16}"
            f"{cal.type.value:<11}{cal.permissions_label:<13}"
        )
        if verbose:
            row += cal.color_hex or ""
        print(row.rstrip())


def _run_list_calendars(args: argparse.Namespace, logger) -> int:
    serializer = JSONSerializer()
    calendars = ExportEngine(_create_reader(), serializer).list_calendars()

    if args.json:
        write_output(serializer.serialize_calendars(calendars), "json")
        return 0

    _print_calendar_table(calendars, args.verbose)
    print(file=sys.stderr)
    print("Use these IDs with the --calendars option in the export command.", file=sys.stderr)
    return 0


def _run_export(args: argparse.Namespace, logger) -> int:
    calendar_ids = _parse_calendar_ids(args.calendars)
    fmt = args.format
    include_reminders = args.include_reminders
    include_completed = args.include_completed
    output_dir = args.output_dir

    if args.profile:
        profile = ProfileConfig(args.config).get(args.profile)
        logger.info(f"Using profile '{profile.name}'")
        calendar_ids = calendar_ids or profile.calendars
        fmt = fmt or profile.format
        include_reminders = include_reminders or profile.include_reminders
        include_completed = include_completed or profile.include_completed
        if output_dir is None and args.output is None:
            output_dir = profile.output_dir

    fmt = fmt or config.default_format

    try:
        start = parse_iso_date(args.start_date, config.timezone) if args.start_date else None
        end = (
            parse_iso_date(args.end_date, config.timezone, end_of_day=True)
            if args.end_date
            else None
        )
    except ValueError as e:
        logger.error(f"Invalid date. Use YYYY-MM-DD (e.g., 2024-01-31). Error: {e}")
        return 1

    logger.debug(
        f"Export arguments: calendars={calendar_ids or 'all'}, start={start}, end={end}, "
        f"reminders={include_reminders}, completed={include_completed}, format={fmt}"
    )

    serializer = _create_serializer(fmt)
    engine = ExportEngine(_create_reader(), serializer)
    result = engine.export(
        calendar_ids=calendar_ids or None,
        start_date=start,
        end_date=end,
        include_reminders=include_reminders,
        include_completed=include_completed,
    )

    path = write_output(
        result.content,
        result.file_extension,
        output=args.output,
        output_dir=output_dir,
    )
    if path is not None:
        logger.info(
            f"Exported {result.event_count} event(s) and "
            f"{result.reminder_count} reminder(s) to {path}"
        )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.debug else config.log_level
    logger = setup_logging(level=log_level, log_file=config.log_file)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "list-calendars":
            return _run_list_calendars(args, logger)
        return _run_export(args, logger)

    except AuthorizationError as e:
        logger.error(str(e))
        return 1
    except EkExportError as e:
        logger.error(f"Export error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
