"""
Command dispatcher.

Routes each parsed command to exactly one CalendarStore operation and
renders the outcome as a single line of text. Failure texts start with
"Error" (the command could not be carried out) or "Failed" (it was carried
out but declined or did not apply). No exception escapes process_command.
"""

import sys
import traceback
from typing import Optional

from calengine.calendar_store import CalendarStore
from calengine.config import Config
from calengine.datetime_utils import format_date, format_datetime
from calengine.debug import debug_print, is_debug_enabled
from calengine.errors import CalendarError
from calengine.event import Event
from calengine.event_export import export_calendar
from calengine.event_properties import resolve_property
from calengine.recurrence import RecurringSeries

from .command_parser import (
    parse_command,
    Command,
    CreateEvent,
    CreateSeries,
    EditEvents,
    EditScope,
    PrintEvents,
    ShowStatus,
    ExportCalendar,
    Exit,
)
from .formatting import format_day_listing, format_range_listing


ERROR_PREFIX = "Error"
FAILED_PREFIX = "Failed"
EXIT_MESSAGE = "Exiting application."


def _debug_print(msg: str) -> None:
    debug_print("DISPATCH", msg)


def is_error(result: str) -> bool:
    """True for hard failures: bad command text, invalid values, I/O trouble."""
    return result.startswith(ERROR_PREFIX)


def is_failure(result: str) -> bool:
    """True for any failure, hard or soft."""
    return result.startswith(ERROR_PREFIX) or result.startswith(FAILED_PREFIX)


class CommandDispatcher:
    """
    Executes command lines against one CalendarStore.

    The dispatcher owns no calendar state of its own; the store is handed in
    and may be inspected by the caller between commands.
    """

    def __init__(self, store: CalendarStore, config: Optional[Config] = None):
        self.store = store
        self.config = config or Config()

        self._handlers = {
            CreateEvent: self._create_event,
            CreateSeries: self._create_series,
            EditEvents: self._edit_events,
            PrintEvents: self._print_events,
            ShowStatus: self._show_status,
            ExportCalendar: self._export_calendar,
            Exit: lambda command: EXIT_MESSAGE,
        }

    def process_command(self, text: Optional[str]) -> str:
        """
        Parse and execute one command line.

        Returns:
            The result text. Never raises.
        """
        try:
            command = parse_command(text)
            return self.execute(command)
        except CalendarError as e:
            _debug_print(f"{text!r}: {type(e).__name__}: {e}")
            return f"{ERROR_PREFIX}: {e}"
        except Exception as e:
            if is_debug_enabled():
                traceback.print_exc(file=sys.stderr)
            return f"{ERROR_PREFIX}: unexpected failure: {e}"

    def execute(self, command: Command) -> str:
        """Run an already parsed command. Validation errors propagate."""
        handler = self._handlers[type(command)]
        return handler(command)

    def _auto_decline(self, requested: bool) -> bool:
        return requested or self.config.general.auto_decline

    # ==================== Create ====================

    def _create_event(self, command: CreateEvent) -> str:
        event = Event(
            command.subject,
            command.start,
            command.end,
            description=command.description,
            location=command.location,
            is_public=command.is_public,
        )
        kind = "All-day event" if command.is_all_day else "Event"

        if self.store.add_event(event, self._auto_decline(command.auto_decline)):
            return f"{kind} '{command.subject}' created successfully."
        return f"{FAILED_PREFIX} to create {kind.lower()} due to conflicts."

    def _create_series(self, command: CreateSeries) -> str:
        options = dict(
            occurrences=command.occurrences,
            until=command.until,
            description=command.description,
            location=command.location,
            is_public=command.is_public,
        )
        if command.is_all_day:
            series = RecurringSeries.all_day(command.subject, command.start.date(), command.weekdays, **options)
            kind = "All-day recurring event"
        else:
            series = RecurringSeries.timed(command.subject, command.start, command.end, command.weekdays, **options)
            kind = "Recurring event"

        if not self.store.add_recurring_series(series, self._auto_decline(command.auto_decline)):
            return f"{FAILED_PREFIX} to create {kind.lower()} due to conflicts."

        if series.is_count_based:
            return f"{kind} '{command.subject}' created successfully with {series.occurrences} occurrences."
        return f"{kind} '{command.subject}' created successfully, repeating until {format_date(series.until)}."

    # ==================== Edit ====================

    def _edit_events(self, command: EditEvents) -> str:
        if resolve_property(command.prop) is None:
            return f"{FAILED_PREFIX} to edit event. Unknown property '{command.prop}'."

        if command.scope is EditScope.SINGLE:
            # Lookup is by subject and start; the end time only restates the event
            if self.store.edit_single(command.subject, command.start, command.prop, command.value):
                return f"Successfully edited event '{command.subject}'."
            return f"{FAILED_PREFIX} to edit event. Event not found or invalid property."

        if command.scope is EditScope.FROM_DATE:
            count = self.store.edit_series_from_date(command.subject, command.start, command.prop, command.value)
            if count > 0:
                return f"Successfully edited {count} events in the series."
            return "No matching events found to edit."

        count = self.store.edit_all_with_subject(command.subject, command.prop, command.value)
        if count > 0:
            return f"Successfully edited {count} events."
        return f"No events found with the subject '{command.subject}'."

    # ==================== Queries ====================

    def _print_events(self, command: PrintEvents) -> str:
        if command.is_range:
            events = self.store.events_in_range(command.first, command.last)
            return format_range_listing(command.first, command.last, events)
        events = self.store.events_on_date(command.first)
        return format_day_listing(command.first, events)

    def _show_status(self, command: ShowStatus) -> str:
        status = "Busy" if self.store.is_busy(command.moment) else "Available"
        return f"Status on {format_datetime(command.moment)}: {status}"

    # ==================== Export ====================

    def _export_calendar(self, command: ExportCalendar) -> str:
        try:
            path = export_calendar(
                command.filename,
                self.store.get_all_events(),
                base_dir=self.config.export.directory,
            )
        except OSError as e:
            _debug_print(f"export to {command.filename!r} failed: {e}")
            return f"{FAILED_PREFIX} to export calendar: {e}"
        return f"Calendar exported successfully to: {path}"
