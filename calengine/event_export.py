"""
Calendar export to CSV and iCalendar.

The CSV layout follows the Google Calendar import format. Both formatters
are pure functions of the event list, so exporting an unchanged store twice
produces identical output.
"""

import csv
import io
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable, Optional, Union

from icalendar import Calendar as ICalCalendar, Event as ICalEvent

from .datetime_utils import format_us_date, format_12h_time
from .debug import debug_print
from .event import Event


def _debug_print(msg: str) -> None:
    debug_print("EXPORT", msg)


CSV_HEADER = [
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "All Day Event",
    "Description",
    "Location",
    "Private",
]

ICAL_PRODID = '-//cmdcal//cmdcal//EN'


def _bool_text(value: bool) -> str:
    return "True" if value else "False"


def event_to_row(event: Event) -> list[str]:
    """Convert one event to a CSV row; all-day rows leave both times blank."""
    all_day = event.is_all_day
    return [
        event.subject,
        format_us_date(event.start.date()),
        "" if all_day else format_12h_time(event.start),
        format_us_date(event.end.date()),
        "" if all_day else format_12h_time(event.end),
        _bool_text(all_day),
        event.description or "",
        event.location or "",
        _bool_text(not event.is_public),
    ]


def format_csv(events: Iterable[Event]) -> str:
    """
    Render events as CSV text.

    Fields holding a comma, quote or line break are wrapped in quotes with
    embedded quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for event in events:
        writer.writerow(event_to_row(event))
    return buffer.getvalue()


def event_to_ical(event: Event) -> ICalEvent:
    """Build an icalendar VEVENT for one event."""
    vevent = ICalEvent()
    vevent.add('uid', event.id)
    vevent.add('summary', event.subject)
    vevent.add('dtstamp', event.created)

    if event.is_all_day:
        # DATE values; DTEND is exclusive and may be left out for a one-day event
        vevent.add('dtstart', event.start.date())
        if event.end.date() < date.max:
            vevent.add('dtend', event.end.date() + timedelta(days=1))
    else:
        vevent.add('dtstart', event.start)
        vevent.add('dtend', event.end)

    if event.description:
        vevent.add('description', event.description)
    if event.location:
        vevent.add('location', event.location)
    vevent.add('class', 'PUBLIC' if event.is_public else 'PRIVATE')
    return vevent


def format_ical(events: Iterable[Event]) -> str:
    """Render events as a VCALENDAR document."""
    vcal = ICalCalendar()
    vcal.add('prodid', ICAL_PRODID)
    vcal.add('version', '2.0')
    for event in events:
        vcal.add_component(event_to_ical(event))
    return vcal.to_ical().decode('utf-8')


def resolve_export_path(filename: Union[str, Path], base_dir: Optional[Path] = None) -> Path:
    """Expand ~ and resolve a relative file name against base_dir."""
    path = Path(filename).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir).expanduser() / path
    return path.absolute()


def export_calendar(
    filename: Union[str, Path],
    events: Iterable[Event],
    base_dir: Optional[Path] = None,
) -> Path:
    """
    Write events to a file and return its absolute path.

    A .ics suffix selects iCalendar output; anything else is CSV.

    Raises:
        OSError: if the file cannot be written.
    """
    path = resolve_export_path(filename, base_dir)
    events = list(events)

    if path.suffix.lower() == '.ics':
        content = format_ical(events)
    else:
        content = format_csv(events)

    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)

    _debug_print(f"Exported {len(events)} events to {path}")
    return path
