"""
Editable event properties.

Maps textual property names (with their aliases) to EventProperty members,
and each member to a setter that parses the textual value and applies it
to an Event. Setters raise ValidationError on values they cannot apply.
"""

from enum import Enum
from typing import Callable, Optional

from .datetime_utils import parse_moment
from .errors import ValidationError
from .event import Event


class EventProperty(Enum):
    SUBJECT = "subject"
    DESCRIPTION = "description"
    LOCATION = "location"
    START = "start"
    END = "end"
    VISIBILITY = "visibility"


PROPERTY_ALIASES: dict[str, EventProperty] = {
    "subject": EventProperty.SUBJECT,
    "name": EventProperty.SUBJECT,
    "description": EventProperty.DESCRIPTION,
    "location": EventProperty.LOCATION,
    "start": EventProperty.START,
    "starttime": EventProperty.START,
    "startdatetime": EventProperty.START,
    "end": EventProperty.END,
    "endtime": EventProperty.END,
    "enddatetime": EventProperty.END,
    "visibility": EventProperty.VISIBILITY,
    "ispublic": EventProperty.VISIBILITY,
    "public": EventProperty.VISIBILITY,
    "private": EventProperty.VISIBILITY,
}


def resolve_property(name: Optional[str]) -> Optional[EventProperty]:
    """Look up a property by name or alias, ignoring case. None if unknown."""
    if not name:
        return None
    return PROPERTY_ALIASES.get(name.strip().lower())


def _set_subject(event: Event, value: str, alias: str) -> None:
    event.subject = value


def _set_description(event: Event, value: Optional[str], alias: str) -> None:
    event.description = value


def _set_location(event: Event, value: Optional[str], alias: str) -> None:
    event.location = value


def _set_start(event: Event, value: str, alias: str) -> None:
    event.start = parse_moment(value, event.start.date())


def _set_end(event: Event, value: str, alias: str) -> None:
    event.end = parse_moment(value, event.end.date())


def _set_visibility(event: Event, value: Optional[str], alias: str) -> None:
    token = (value or "").strip().lower()
    # "true" means public except through the "private" alias
    event.is_public = token == "public" or (token == "true" and alias != "private")


PROPERTY_SETTERS: dict[EventProperty, Callable[[Event, Optional[str], str], None]] = {
    EventProperty.SUBJECT: _set_subject,
    EventProperty.DESCRIPTION: _set_description,
    EventProperty.LOCATION: _set_location,
    EventProperty.START: _set_start,
    EventProperty.END: _set_end,
    EventProperty.VISIBILITY: _set_visibility,
}

# Properties whose change moves the event in time
TIME_PROPERTIES = frozenset({EventProperty.START, EventProperty.END})


def apply_property(event: Event, name: str, value: Optional[str]) -> EventProperty:
    """
    Apply a textual value to the named property of an event.

    Returns:
        The EventProperty that was changed.

    Raises:
        KeyError: if the property name is unknown.
        ValidationError: if the value cannot be parsed or breaks an invariant.
    """
    prop = resolve_property(name)
    if prop is None:
        raise KeyError(name)
    if prop in TIME_PROPERTIES and value is None:
        # Start and end need a parsable value
        raise ValidationError(f"A value is required for {prop.value}")
    PROPERTY_SETTERS[prop](event, value, name.strip().lower())
    return prop
