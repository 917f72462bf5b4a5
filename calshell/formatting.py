"""
Display formatting for command results.
"""

from datetime import date
from typing import Iterable

from calengine.datetime_utils import format_date, format_time
from calengine.event import Event


BULLET = "•"


def format_event_line(event: Event, show_dates: bool = False) -> str:
    """
    Format one event as a bullet line.

    Args:
        event: The event to describe.
        show_dates: Include the start date (range listings). A timed event
            that ends on another day always shows its end date.
    """
    parts = [f"{BULLET} {event.subject}"]

    if event.is_all_day:
        if show_dates:
            parts.append(f" (All day on {format_date(event.start.date())})")
        else:
            parts.append(" (All day)")
    else:
        parts.append(" - ")
        if show_dates:
            parts.append(format_date(event.start.date()) + " ")
        parts.append(format_time(event.start))
        parts.append(" to ")
        if event.spans_multiple_days():
            parts.append(format_date(event.end.date()) + " ")
        parts.append(format_time(event.end))

    if event.location:
        parts.append(f" at {event.location}")

    return "".join(parts)


def format_event_list(events: Iterable[Event], show_dates: bool = False) -> str:
    return "\n".join(format_event_line(e, show_dates) for e in events)


def format_day_listing(day: date, events: list[Event]) -> str:
    if not events:
        return f"No events on {format_date(day)}"
    return f"Events on {format_date(day)}:\n{format_event_list(events)}"


def format_range_listing(first: date, last: date, events: list[Event]) -> str:
    if not events:
        return f"No events from {format_date(first)} to {format_date(last)}"
    header = f"Events from {format_date(first)} to {format_date(last)}:"
    return f"{header}\n{format_event_list(events, show_dates=True)}"
