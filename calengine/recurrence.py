"""
Recurring event series.

A RecurringSeries is a template Event plus a repetition rule: a set of
weekdays and exactly one termination mode (occurrence count or inclusive
end date). Occurrences are generated by walking forward one day at a time
from the template's start date and are fully independent copies.
"""

import uuid
from datetime import datetime, date, timedelta
from typing import Iterable, Iterator, Optional

from .datetime_utils import format_date
from .debug import debug_print
from .errors import ValidationError
from .event import Event


def _debug_print(msg: str) -> None:
    debug_print("SERIES", msg)


# Weekday letters; R is Thursday so that T can mean Tuesday
WEEKDAY_LETTERS = {
    'M': 0,  # Monday
    'T': 1,  # Tuesday
    'W': 2,  # Wednesday
    'R': 3,  # Thursday
    'F': 4,  # Friday
    'S': 5,  # Saturday
    'U': 6,  # Sunday
}

_LETTER_FOR_WEEKDAY = {day: letter for letter, day in WEEKDAY_LETTERS.items()}


def parse_weekdays(letters: str) -> frozenset[int]:
    """
    Convert weekday letters (e.g. "MWF") to a set of weekday numbers.

    Numbers follow date.weekday(): 0 is Monday, 6 is Sunday.

    Raises:
        ValidationError: if the string is empty or holds an unknown letter.
    """
    if not letters:
        raise ValidationError("Weekdays cannot be empty")

    days = set()
    for letter in letters.upper():
        if letter not in WEEKDAY_LETTERS:
            raise ValidationError(f"Invalid weekday character: {letter}")
        days.add(WEEKDAY_LETTERS[letter])
    return frozenset(days)


def format_weekdays(days: Iterable[int]) -> str:
    """Convert weekday numbers back to letters in Monday-first order."""
    return "".join(_LETTER_FOR_WEEKDAY[d] for d in sorted(set(days)))


class RecurringSeries:
    """
    A template event repeated on a set of weekdays.

    Attributes:
        template: the Event whose fields every occurrence copies
        repeat_days: weekday numbers (0=Monday) the series falls on
        occurrences: number of occurrences, or None in end-date mode
        until: inclusive last date, or None in count mode
        series_id: identifier of the series itself
    """

    def __init__(
        self,
        template: Event,
        repeat_days: Iterable[int],
        occurrences: Optional[int] = None,
        until: Optional[date] = None,
    ):
        if template is None:
            raise ValidationError("Recurring series needs a template event")

        days = frozenset(repeat_days or ())
        if not days:
            raise ValidationError("Repeat days cannot be empty")
        if any(d not in _LETTER_FOR_WEEKDAY for d in days):
            raise ValidationError(f"Invalid weekday numbers: {sorted(days)}")

        if occurrences is not None and until is not None:
            raise ValidationError("Use either an occurrence count or an end date, not both")
        if occurrences is None and until is None:
            raise ValidationError("Recurring series needs an occurrence count or an end date")
        if occurrences is not None and occurrences <= 0:
            raise ValidationError("Occurrences must be positive")

        if template.start.date() != template.end.date():
            raise ValidationError("Recurring events must start and end on the same day")

        self.template = template
        self.repeat_days = days
        self.occurrences = occurrences
        self.until = until
        self.series_id: str = uuid.uuid4().hex

    @classmethod
    def timed(
        cls,
        subject: str,
        start: datetime,
        end: datetime,
        repeat_days: Iterable[int],
        occurrences: Optional[int] = None,
        until: Optional[date] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
    ) -> 'RecurringSeries':
        """Create a series whose occurrences run from start to end time-of-day."""
        if end is None:
            raise ValidationError("End date/time cannot be empty for a timed series")
        template = Event(subject, start, end, description, location, is_public)
        return cls(template, repeat_days, occurrences=occurrences, until=until)

    @classmethod
    def all_day(
        cls,
        subject: str,
        day: date,
        repeat_days: Iterable[int],
        occurrences: Optional[int] = None,
        until: Optional[date] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
    ) -> 'RecurringSeries':
        """Create a series of all-day occurrences."""
        template = Event.all_day(subject, day, description, location, is_public)
        return cls(template, repeat_days, occurrences=occurrences, until=until)

    # ==================== Properties ====================

    @property
    def subject(self) -> str:
        return self.template.subject

    @property
    def is_count_based(self) -> bool:
        return self.occurrences is not None

    @property
    def is_all_day(self) -> bool:
        return self.template.is_all_day

    @property
    def weekday_letters(self) -> str:
        return format_weekdays(self.repeat_days)

    # ==================== Occurrence Generation ====================

    def iter_occurrences(self) -> Iterator[Event]:
        """
        Yield occurrences in date order.

        The walk starts on the template's start date, which is itself the
        first occurrence when its weekday is in the repeat set. It stops once
        the count is reached, or once the candidate date passes the end date.
        """
        current = self.template.start.date()
        count = 0
        one_day = timedelta(days=1)

        while True:
            if self.occurrences is not None and count >= self.occurrences:
                return
            if self.until is not None and current > self.until:
                return
            if current.weekday() in self.repeat_days:
                yield self._make_occurrence(current)
                count += 1
            if current == date.max:
                return
            current += one_day

    def get_all_occurrences(self) -> list[Event]:
        """Materialize every occurrence as an independent Event."""
        occurrences = list(self.iter_occurrences())
        _debug_print(f"{self.subject!r} [{self.weekday_letters}]: {len(occurrences)} occurrences")
        return occurrences

    def _make_occurrence(self, day: date) -> Event:
        template = self.template
        if template.is_all_day:
            return Event.all_day(
                template.subject,
                day,
                description=template.description,
                location=template.location,
                is_public=template.is_public,
                series_id=self.series_id,
            )
        return Event(
            template.subject,
            datetime.combine(day, template.start.time()),
            datetime.combine(day, template.end.time()),
            description=template.description,
            location=template.location,
            is_public=template.is_public,
            series_id=self.series_id,
        )

    def describe_termination(self) -> str:
        if self.occurrences is not None:
            return f"for {self.occurrences} times"
        return f"until {format_date(self.until)}"

    def __repr__(self):
        return (
            f"RecurringSeries(subject={self.subject!r}, days={self.weekday_letters!r}, "
            f"{self.describe_termination()})"
        )
