from datetime import datetime

import pytest

from calengine.errors import ValidationError
from calengine.event import Event
from calengine.event_properties import EventProperty, apply_property, resolve_property


@pytest.mark.parametrize("name, expected", [
    ("subject", EventProperty.SUBJECT),
    ("name", EventProperty.SUBJECT),
    ("description", EventProperty.DESCRIPTION),
    ("location", EventProperty.LOCATION),
    ("start", EventProperty.START),
    ("startTime", EventProperty.START),
    ("startDateTime", EventProperty.START),
    ("end", EventProperty.END),
    ("endtime", EventProperty.END),
    ("ENDDATETIME", EventProperty.END),
    ("visibility", EventProperty.VISIBILITY),
    ("isPublic", EventProperty.VISIBILITY),
    ("public", EventProperty.VISIBILITY),
    ("private", EventProperty.VISIBILITY),
])
def test_aliases(name, expected):
    assert resolve_property(name) is expected


@pytest.mark.parametrize("name", ["colour", "", None, "subjects"])
def test_unknown_names(name):
    assert resolve_property(name) is None


def test_apply_returns_changed_property(meeting):
    assert apply_property(meeting, "location", "Room 7") is EventProperty.LOCATION
    assert meeting.location == "Room 7"


def test_apply_unknown_raises_key_error(meeting):
    with pytest.raises(KeyError):
        apply_property(meeting, "colour", "red")


def test_time_property_requires_value(meeting):
    with pytest.raises(ValidationError):
        apply_property(meeting, "end", None)
    assert not meeting.is_all_day


def test_description_can_be_cleared(meeting):
    meeting.description = "Agenda"
    apply_property(meeting, "description", None)
    assert meeting.description is None


def test_start_time_keeps_event_date():
    event = Event("Trip", datetime(2023, 5, 14, 18, 0), datetime(2023, 5, 16, 9, 0))
    apply_property(event, "starttime", "17:30")
    assert event.start == datetime(2023, 5, 14, 17, 30)
    apply_property(event, "endtime", "10:00")
    assert event.end == datetime(2023, 5, 16, 10, 0)
