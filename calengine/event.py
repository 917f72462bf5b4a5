"""
Calendar event model.

An Event has a fixed identity and mutable fields. Every mutation of the
time range re-checks that the end does not precede the start; invalid
edits fail rather than being clamped.
"""

import uuid
from datetime import datetime, date
from typing import Optional

import pytz

from .datetime_utils import all_day_end, start_of_day
from .errors import ValidationError


class Event:
    """
    A single concrete calendar entry.

    Lookup equality is defined by (subject, start): two distinct events may
    share a subject but are told apart by their start time. Storage identity
    is the opaque ``id``. Events are unhashable, since the lookup key
    can change through edits; key collections by ``id`` instead.
    """

    def __init__(
        self,
        subject: str,
        start: datetime,
        end: Optional[datetime] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
        series_id: Optional[str] = None,
    ):
        _check_subject(subject)
        if start is None:
            raise ValidationError("Start date/time cannot be empty")

        self.id: str = uuid.uuid4().hex
        self._subject = subject
        self._start = start
        if end is None:
            self._end = all_day_end(start.date())
            self._all_day = True
        else:
            if end < start:
                raise ValidationError("End date/time cannot be before start date/time")
            self._end = end
            self._all_day = False

        self.description = description
        self.location = location
        self.is_public = is_public

        # Set on occurrences materialized from a RecurringSeries
        self.series_id = series_id
        # Used as DTSTAMP on iCalendar export
        self.created: datetime = datetime.now(pytz.UTC)

    @classmethod
    def all_day(
        cls,
        subject: str,
        day: date,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
        series_id: Optional[str] = None,
    ) -> 'Event':
        """Create an all-day event spanning 00:00 to 23:59:59 of one day."""
        return cls(
            subject,
            start_of_day(day),
            None,
            description=description,
            location=location,
            is_public=is_public,
            series_id=series_id,
        )

    # ==================== Validated Properties ====================

    @property
    def subject(self) -> str:
        return self._subject

    @subject.setter
    def subject(self, value: str):
        _check_subject(value)
        self._subject = value

    @property
    def start(self) -> datetime:
        return self._start

    @start.setter
    def start(self, value: datetime):
        if value is None:
            raise ValidationError("Start date/time cannot be empty")
        if value > self._end:
            raise ValidationError("Start date/time cannot be after end date/time")
        self._start = value

    @property
    def end(self) -> datetime:
        return self._end

    @end.setter
    def end(self, value: Optional[datetime]):
        """Set the end; None converts the event to all-day."""
        if value is None:
            self._end = all_day_end(self._start.date())
            self._all_day = True
            return
        if value < self._start:
            raise ValidationError("End date/time cannot be before start date/time")
        self._end = value
        self._all_day = False

    @property
    def is_all_day(self) -> bool:
        return self._all_day

    @property
    def lookup_key(self) -> tuple[str, datetime]:
        return (self._subject, self._start)

    # ==================== Time Queries ====================

    def conflicts_with(self, other: Optional['Event']) -> bool:
        """
        Check whether two events overlap.

        Intervals are closed at both ends, so an event ending at 11:00
        conflicts with one starting at 11:00.
        """
        if other is None:
            return False
        return self._end >= other.start and other.end >= self._start

    def occurs_on(self, day: date) -> bool:
        """True if the day falls within [start date, end date]."""
        return self._start.date() <= day <= self._end.date()

    def occurs_between(self, first: date, last: date) -> bool:
        return self._end.date() >= first and self._start.date() <= last

    def contains(self, moment: datetime) -> bool:
        return self._start <= moment <= self._end

    def spans_multiple_days(self) -> bool:
        return self._start.date() != self._end.date()

    def matches(self, subject: str, start: datetime) -> bool:
        return self._subject == subject and self._start == start

    # ==================== Dunder ====================

    def __eq__(self, other):
        if isinstance(other, Event):
            return self.lookup_key == other.lookup_key
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return (
            f"Event(subject={self._subject!r}, start={self._start}, end={self._end}, "
            f"all_day={self._all_day}, location={self.location!r})"
        )


def _check_subject(subject: Optional[str]) -> None:
    if subject is None or not subject.strip():
        raise ValidationError("Event subject cannot be empty")
