"""
cmdcal Engine Module

This module provides the core calendar model and storage:
- Event model (event.py)
- Recurring series and occurrence generation (recurrence.py)
- Editable property table (event_properties.py)
- Calendar store with conflict detection and queries (calendar_store.py)
- Interval index (interval_tree.py)
- CSV / iCalendar export (event_export.py)
- Configuration parsing (config.py)
"""

from .config import Config
from .errors import CalendarError, ValidationError, ParseError
from .event import Event
from .recurrence import RecurringSeries, parse_weekdays, format_weekdays
from .event_properties import EventProperty, resolve_property
from .calendar_store import CalendarStore
from .event_export import format_csv, format_ical, export_calendar

__all__ = [
    'Config',
    'CalendarError',
    'ValidationError',
    'ParseError',
    'Event',
    'RecurringSeries',
    'parse_weekdays',
    'format_weekdays',
    'EventProperty',
    'resolve_property',
    'CalendarStore',
    'format_csv',
    'format_ical',
    'export_calendar',
]
