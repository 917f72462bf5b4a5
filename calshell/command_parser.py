"""
Command language parser.

Turns one line of command text into an immutable operation descriptor.
Command shapes are tried in a fixed order and the first full match wins.
The parser only reads text; it never touches a CalendarStore.

Names and text values are either double-quoted (and may then contain
spaces) or bare words without whitespace.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, Optional, Union

from calengine.datetime_utils import parse_date, parse_datetime, start_of_day
from calengine.debug import debug_print
from calengine.errors import ParseError, ValidationError
from calengine.recurrence import parse_weekdays


def _debug_print(msg: str) -> None:
    debug_print("PARSER", msg)


# ==================== Operation Descriptors ====================

@dataclass(frozen=True)
class CreateEvent:
    """Create one event; end is None for an all-day event on start's date."""
    subject: str
    start: datetime
    end: Optional[datetime] = None
    auto_decline: bool = False
    description: Optional[str] = None
    location: Optional[str] = None
    is_public: bool = True

    @property
    def is_all_day(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class CreateSeries:
    """Create a recurring series; exactly one of occurrences / until is set."""
    subject: str
    start: datetime
    end: Optional[datetime]
    weekdays: frozenset
    occurrences: Optional[int] = None
    until: Optional[date] = None
    auto_decline: bool = False
    description: Optional[str] = None
    location: Optional[str] = None
    is_public: bool = True

    @property
    def is_all_day(self) -> bool:
        return self.end is None


class EditScope(Enum):
    SINGLE = "single"
    FROM_DATE = "from_date"
    ALL = "all"


@dataclass(frozen=True)
class EditEvents:
    scope: EditScope
    prop: str
    subject: str
    value: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class PrintEvents:
    """Print events on one date (last is None) or over an inclusive range."""
    first: date
    last: Optional[date] = None

    @property
    def is_range(self) -> bool:
        return self.last is not None


@dataclass(frozen=True)
class ShowStatus:
    moment: datetime


@dataclass(frozen=True)
class ExportCalendar:
    filename: str


@dataclass(frozen=True)
class Exit:
    pass


Command = Union[CreateEvent, CreateSeries, EditEvents, PrintEvents, ShowStatus, ExportCalendar, Exit]


# ==================== Pattern Pieces ====================

_DATE = r'\d{4}-\d{2}-\d{2}'
_DATETIME = r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}'
_TEXT = r'"[^"]*"|[^\s"]\S*'

_PREFIX = r'create\s+event(?P<auto>\s+--autoDecline)?\s+(?P<name>' + _TEXT + r')'
_REPEATS = (
    r'\s+repeats\s+(?P<days>[MTWRFSU]+)\s+'
    r'(?:for\s+(?P<count>\d+)\s+times?|until\s+(?P<until>' + _DATE + r'))'
)
_OPTIONS = (
    r'(?:\s+desc\s+(?P<desc>' + _TEXT + r'))?'
    r'(?:\s+at\s+(?P<loc>' + _TEXT + r'))?'
    r'(?P<private>\s+private)?'
)


def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern + r'\Z')


def _unquote(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


def _to_date(text: str) -> date:
    try:
        return parse_date(text)
    except ValidationError as e:
        raise ParseError(str(e)) from e


def _to_datetime(text: str) -> datetime:
    try:
        return parse_datetime(text)
    except ValidationError as e:
        raise ParseError(str(e)) from e


def _options(m: re.Match) -> dict:
    return {
        'auto_decline': m.group('auto') is not None,
        'description': _unquote(m.group('desc')),
        'location': _unquote(m.group('loc')),
        'is_public': m.group('private') is None,
    }


def _subject(m: re.Match) -> str:
    subject = _unquote(m.group('name'))
    if not subject.strip():
        raise ParseError("Event name cannot be empty")
    return subject


# ==================== Builders ====================

def _build_series(m: re.Match, start: datetime, end: Optional[datetime]) -> CreateSeries:
    try:
        weekdays = parse_weekdays(m.group('days'))
    except ValidationError as e:
        raise ParseError(str(e)) from e
    count = m.group('count')
    until = m.group('until')
    return CreateSeries(
        subject=_subject(m),
        start=start,
        end=end,
        weekdays=weekdays,
        occurrences=int(count) if count is not None else None,
        until=_to_date(until) if until is not None else None,
        **_options(m),
    )


def _build_timed(m: re.Match) -> Command:
    start = _to_datetime(m.group('start'))
    end = _to_datetime(m.group('end'))
    if m.group('days') is not None:
        return _build_series(m, start, end)
    return CreateEvent(subject=_subject(m), start=start, end=end, **_options(m))


def _build_all_day(m: re.Match) -> Command:
    start = start_of_day(_to_date(m.group('day')))
    if m.group('days') is not None:
        return _build_series(m, start, None)
    return CreateEvent(subject=_subject(m), start=start, end=None, **_options(m))


def _build_edit_single(m: re.Match) -> EditEvents:
    return EditEvents(
        scope=EditScope.SINGLE,
        prop=m.group('prop'),
        subject=_subject(m),
        value=_unquote(m.group('value')),
        start=_to_datetime(m.group('start')),
        end=_to_datetime(m.group('end')),
    )


def _build_edit_from(m: re.Match) -> EditEvents:
    return EditEvents(
        scope=EditScope.FROM_DATE,
        prop=m.group('prop'),
        subject=_subject(m),
        value=_unquote(m.group('value')),
        start=_to_datetime(m.group('start')),
    )


def _build_edit_all(m: re.Match) -> EditEvents:
    return EditEvents(
        scope=EditScope.ALL,
        prop=m.group('prop'),
        subject=_subject(m),
        value=_unquote(m.group('value')),
    )


def _build_print_on(m: re.Match) -> PrintEvents:
    return PrintEvents(first=_to_date(m.group('day')))


def _build_print_range(m: re.Match) -> PrintEvents:
    return PrintEvents(first=_to_date(m.group('first')), last=_to_date(m.group('last')))


def _build_status(m: re.Match) -> ShowStatus:
    return ShowStatus(moment=_to_datetime(m.group('moment')))


def _build_export(m: re.Match) -> ExportCalendar:
    filename = _unquote(m.group('file').strip())
    if not filename:
        raise ParseError("Export file name cannot be empty")
    return ExportCalendar(filename=filename)


# Order matters: the first pattern that matches the whole line wins
_MATCHERS: list[tuple[re.Pattern, Callable[[re.Match], Command]]] = [
    (_compile(r'(?i:exit)'), lambda m: Exit()),
    (_compile(
        _PREFIX + r'\s+from\s+(?P<start>' + _DATETIME + r')\s+to\s+(?P<end>' + _DATETIME + r')'
        + r'(?:' + _REPEATS + r')?' + _OPTIONS
    ), _build_timed),
    (_compile(
        _PREFIX + r'\s+on\s+(?P<day>' + _DATE + r')' + r'(?:' + _REPEATS + r')?' + _OPTIONS
    ), _build_all_day),
    (_compile(
        r'edit\s+event\s+(?P<prop>\S+)\s+(?P<name>' + _TEXT + r')'
        r'\s+from\s+(?P<start>' + _DATETIME + r')\s+to\s+(?P<end>' + _DATETIME + r')'
        r'\s+with\s+(?P<value>' + _TEXT + r')'
    ), _build_edit_single),
    (_compile(
        r'edit\s+events\s+(?P<prop>\S+)\s+(?P<name>' + _TEXT + r')'
        r'\s+from\s+(?P<start>' + _DATETIME + r')\s+with\s+(?P<value>' + _TEXT + r')'
    ), _build_edit_from),
    (_compile(
        r'edit\s+events\s+(?P<prop>\S+)\s+(?P<name>' + _TEXT + r')\s+with\s+(?P<value>' + _TEXT + r')'
    ), _build_edit_all),
    (_compile(r'print\s+events\s+on\s+(?P<day>' + _DATE + r')'), _build_print_on),
    (_compile(
        r'print\s+events\s+from\s+(?P<first>' + _DATE + r')\s+to\s+(?P<last>' + _DATE + r')'
    ), _build_print_range),
    (_compile(r'show\s+status\s+on\s+(?P<moment>' + _DATETIME + r')'), _build_status),
    (_compile(r'export\s+cal\s+(?P<file>.+)'), _build_export),
]


def parse_command(text: Optional[str]) -> Command:
    """
    Parse one command line.

    Args:
        text: The raw command line. Surrounding whitespace is ignored.

    Returns:
        The operation descriptor for the first matching command shape.

    Raises:
        ParseError: if the text is empty, matches no command shape, or holds
            a date or time that does not exist.
    """
    if text is None or not text.strip():
        raise ParseError("Command cannot be empty")

    line = text.strip()
    for pattern, build in _MATCHERS:
        m = pattern.match(line)
        if m is not None:
            command = build(m)
            _debug_print(f"{line!r} -> {command}")
            return command

    raise ParseError(f"Unrecognized or unsupported command: {line}")
