"""
Date and time utilities for cmdcal.

Provides the parse and format helpers shared by the store, the command
parser and the exporters. All times are naive local wall-clock values.
"""

from datetime import datetime, date, time

from .errors import ValidationError


DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DATETIME_FORMAT = "%Y-%m-%dT%H:%M"

# All-day events end one second before midnight
END_OF_DAY = time(23, 59, 59)


def parse_date(text: str) -> date:
    """
    Parse a date in YYYY-MM-DD form.

    Raises:
        ValidationError: if the text is not a valid date.
    """
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date format: {text}. Expected format: YYYY-MM-DD")


def parse_time(text: str) -> time:
    """
    Parse a time of day in HH:MM or HH:MM:SS form.

    Raises:
        ValidationError: if the text is not a valid time.
    """
    for fmt in (TIME_FORMAT, "%H:%M:%S"):
        try:
            return datetime.strptime(text, fmt).time()
        except (TypeError, ValueError):
            continue
    raise ValidationError(f"Invalid time format: {text}. Expected format: HH:MM")


def parse_datetime(text: str) -> datetime:
    """
    Parse a date-time in YYYY-MM-DDThh:mm form.

    Raises:
        ValidationError: if the text is not a valid date-time.
    """
    try:
        return datetime.strptime(text, DATETIME_FORMAT)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date time format: {text}. Expected format: YYYY-MM-DDThh:mm")


def parse_moment(text: str, keep_date: date) -> datetime:
    """
    Parse either a full date-time or a time of day.

    A value containing 'T' is read as a full date-time; anything else is a
    time of day placed on keep_date.
    """
    if "T" in text:
        return parse_datetime(text)
    return datetime.combine(keep_date, parse_time(text))


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last representable instant of a day, used for inclusive date bounds."""
    return datetime.combine(day, time.max)


def all_day_end(day: date) -> datetime:
    """Synthesized end of an all-day event on the given day."""
    return datetime.combine(day, END_OF_DAY)


def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def format_time(moment: datetime) -> str:
    return moment.strftime(TIME_FORMAT)


def format_datetime(moment: datetime) -> str:
    return moment.strftime(DATETIME_FORMAT)


def format_us_date(day: date) -> str:
    """Format a date as MM/dd/yyyy."""
    return f"{day.month:02d}/{day.day:02d}/{day.year:04d}"


def format_12h_time(moment: datetime) -> str:
    """
    Format a time as hh:mm AM/PM.

    Built by hand so the AM/PM marker does not depend on the process locale.
    """
    hour = moment.hour % 12 or 12
    marker = "AM" if moment.hour < 12 else "PM"
    return f"{hour:02d}:{moment.minute:02d} {marker}"
