"""
Exception types for cmdcal.

Conflict declines are not exceptions: store operations report them as
plain boolean or count results.
"""


class CalendarError(Exception):
    """Base class for calendar failures."""


class ValidationError(CalendarError, ValueError):
    """An event or series would end up in an invalid state."""


class ParseError(CalendarError):
    """Command text does not match any known command shape."""
