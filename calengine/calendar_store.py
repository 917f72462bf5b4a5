"""
Calendar store owning every event and recurring series.

Keeps an insertion-ordered list of concrete events (including every
materialized occurrence of every series) and a separate list of series
templates. Conflict, date and busy lookups go through an interval index
that is rebuilt lazily after edits move events in time.

Declines and not-found lookups are normal return values, never exceptions.
"""

from datetime import datetime, date
from typing import Iterable, Optional

from .datetime_utils import start_of_day, end_of_day
from .debug import debug_print
from .errors import ValidationError
from .event import Event
from .event_properties import apply_property, TIME_PROPERTIES
from .interval_tree import IntervalTree
from .recurrence import RecurringSeries


def _debug_print(msg: str) -> None:
    debug_print("STORE", msg)


class CalendarStore:
    """
    Single owned aggregate of a user's calendar.

    Events are created only through add_event / add_recurring_series and
    changed only through the edit operations. There is no delete.
    """

    def __init__(self):
        self._events: list[Event] = []
        self._series: list[RecurringSeries] = []
        self._event_by_id: dict[str, Event] = {}
        self._series_by_id: dict[str, RecurringSeries] = {}
        # Insertion position of each event, used to order index results
        self._position: dict[str, int] = {}

        self._index: IntervalTree[datetime] = IntervalTree()
        self._index_dirty = False

    # ==================== Interval Index ====================

    def _index_event(self, event: Event) -> None:
        self._index.insert(event.start, event.end, event)

    def _ensure_index(self) -> IntervalTree[datetime]:
        if self._index_dirty:
            self._index.clear()
            for event in self._events:
                self._index_event(event)
            self._index_dirty = False
            _debug_print(f"Rebuilt interval index ({len(self._events)} events)")
        return self._index

    def _in_insertion_order(self, events: Iterable[Event]) -> list[Event]:
        return sorted(events, key=lambda e: self._position[e.id])

    def _lookup(self, start: datetime, end: datetime) -> list[Event]:
        index = self._ensure_index()
        return self._in_insertion_order(node.data for node in index.iter_intersecting(start, end))

    # ==================== Insertion ====================

    def has_conflict(self, event: Event) -> bool:
        """Check an event against every stored event using the inclusive overlap rule."""
        if event is None:
            return False
        index = self._ensure_index()
        return index.any_intersecting(event.start, event.end)

    def _insert(self, event: Event) -> None:
        self._position[event.id] = len(self._events)
        self._events.append(event)
        self._event_by_id[event.id] = event
        if not self._index_dirty:
            self._index_event(event)

    def add_event(self, event: Event, auto_decline: bool = False) -> bool:
        """
        Add a single event.

        With auto_decline the event is refused (False, nothing stored) when it
        conflicts with any stored event. Without it, conflicts are allowed.
        """
        if event is None:
            raise ValidationError("Event cannot be empty")

        if auto_decline and self.has_conflict(event):
            _debug_print(f"add_event: declined {event.subject!r} at {event.start} (conflict)")
            return False

        self._insert(event)
        _debug_print(f"add_event: {event.subject!r} at {event.start}")
        return True

    def add_recurring_series(self, series: RecurringSeries, auto_decline: bool = False) -> bool:
        """
        Add a series and every one of its occurrences.

        Occurrences are generated first. With auto_decline, any single
        conflicting occurrence declines the whole series and nothing is
        stored. A series with zero occurrences is stored and counts as success.
        """
        if series is None:
            raise ValidationError("Recurring series cannot be empty")

        occurrences = series.get_all_occurrences()

        if auto_decline:
            for occurrence in occurrences:
                if self.has_conflict(occurrence):
                    _debug_print(
                        f"add_recurring_series: declined {series.subject!r}, "
                        f"occurrence at {occurrence.start} conflicts"
                    )
                    return False

        self._series.append(series)
        self._series_by_id[series.series_id] = series
        for occurrence in occurrences:
            self._insert(occurrence)

        _debug_print(f"add_recurring_series: {series.subject!r} with {len(occurrences)} occurrences")
        return True

    # ==================== Lookup ====================

    def find_event(self, subject: str, start: datetime) -> Optional[Event]:
        """First stored event with this subject and start, or None."""
        for event in self._events:
            if event.matches(subject, start):
                return event
        return None

    def get_event(self, event_id: str) -> Optional[Event]:
        return self._event_by_id.get(event_id)

    def get_series(self, series_id: str) -> Optional[RecurringSeries]:
        return self._series_by_id.get(series_id)

    def get_all_events(self) -> list[Event]:
        """All events in insertion order (a copy of the list)."""
        return list(self._events)

    def get_all_series(self) -> list[RecurringSeries]:
        return list(self._series)

    def get_event_count(self) -> int:
        return len(self._events)

    # ==================== Editing ====================

    def _update_property(self, event: Event, prop: str, value: Optional[str]) -> bool:
        """Apply one property edit; False instead of raising on any failure."""
        try:
            changed = apply_property(event, prop, value)
        except KeyError:
            _debug_print(f"edit: unknown property {prop!r}")
            return False
        except ValidationError as e:
            _debug_print(f"edit: {event.subject!r} {prop}={value!r} rejected: {e}")
            return False

        if changed in TIME_PROPERTIES:
            self._index_dirty = True
        return True

    def edit_single(self, subject: str, start: datetime, prop: str, value: Optional[str]) -> bool:
        """Edit one property of the event found by (subject, start)."""
        event = self.find_event(subject, start)
        if event is None:
            _debug_print(f"edit_single: no event {subject!r} at {start}")
            return False
        return self._update_property(event, prop, value)

    def edit_series_from_date(self, subject: str, start: datetime, prop: str, value: Optional[str]) -> int:
        """
        Edit every event with this subject starting at or after start.

        Matching is by subject and time only, not by series membership, so
        single events sharing the subject are edited too.

        Returns:
            Number of events actually changed.
        """
        matching = [e for e in self._events if e.subject == subject and e.start >= start]
        count = sum(1 for event in matching if self._update_property(event, prop, value))
        _debug_print(f"edit_series_from_date: {subject!r} from {start}: {count}/{len(matching)} edited")
        return count

    def edit_all_with_subject(self, subject: str, prop: str, value: Optional[str]) -> int:
        """Edit every event with this subject. Returns the number changed."""
        matching = [e for e in self._events if e.subject == subject]
        count = sum(1 for event in matching if self._update_property(event, prop, value))
        _debug_print(f"edit_all_with_subject: {subject!r}: {count}/{len(matching)} edited")
        return count

    # ==================== Queries ====================

    def events_on_date(self, day: date) -> list[Event]:
        """Events whose [start date, end date] span includes the day."""
        return self._lookup(start_of_day(day), end_of_day(day))

    def events_in_range(self, first: date, last: date) -> list[Event]:
        """Events with end date >= first and start date <= last."""
        return self._lookup(start_of_day(first), end_of_day(last))

    def is_busy(self, moment: datetime) -> bool:
        """True if any event's closed interval contains the moment."""
        index = self._ensure_index()
        return next(index.iter_covering(moment), None) is not None
