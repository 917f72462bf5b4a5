from datetime import datetime, date

import pytest

from calengine.errors import ParseError
from calshell.command_parser import (
    parse_command,
    CreateEvent,
    CreateSeries,
    EditEvents,
    EditScope,
    PrintEvents,
    ShowStatus,
    ExportCalendar,
    Exit,
)


class TestCreate:
    def test_timed_event(self):
        cmd = parse_command("create event Standup from 2023-05-15T10:00 to 2023-05-15T10:15")
        assert cmd == CreateEvent(
            subject="Standup",
            start=datetime(2023, 5, 15, 10, 0),
            end=datetime(2023, 5, 15, 10, 15),
        )
        assert not cmd.is_all_day

    def test_quoted_name_and_auto_decline(self):
        cmd = parse_command(
            'create event --autoDecline "Team Meeting" from 2023-05-15T10:00 to 2023-05-15T11:00'
        )
        assert cmd.subject == "Team Meeting"
        assert cmd.auto_decline

    def test_all_day_event(self):
        cmd = parse_command("create event Holiday on 2023-05-20")
        assert isinstance(cmd, CreateEvent)
        assert cmd.is_all_day
        assert cmd.start == datetime(2023, 5, 20, 0, 0)

    def test_trailing_options(self):
        cmd = parse_command(
            'create event Review from 2023-05-15T14:00 to 2023-05-15T15:00 '
            'desc "Quarterly review, part 2" at "Room B" private'
        )
        assert cmd.description == "Quarterly review, part 2"
        assert cmd.location == "Room B"
        assert not cmd.is_public

    def test_bare_option_values(self):
        cmd = parse_command("create event Lunch on 2023-05-15 at Cafeteria")
        assert cmd.location == "Cafeteria"
        assert cmd.description is None
        assert cmd.is_public

    def test_options_out_of_order_rejected(self):
        with pytest.raises(ParseError):
            parse_command("create event Lunch on 2023-05-15 at Cafeteria desc Food")

    def test_recurring_count(self):
        cmd = parse_command(
            "create event Weekly from 2023-05-01T10:00 to 2023-05-01T11:00 repeats MWF for 4 times"
        )
        assert isinstance(cmd, CreateSeries)
        assert cmd.weekdays == frozenset({0, 2, 4})
        assert cmd.occurrences == 4
        assert cmd.until is None

    def test_recurring_until_with_options(self):
        cmd = parse_command(
            'create event --autoDecline Gym on 2023-05-01 repeats SU until 2023-06-30 at "Main Gym" private'
        )
        assert isinstance(cmd, CreateSeries)
        assert cmd.is_all_day
        assert cmd.weekdays == frozenset({5, 6})
        assert cmd.until == date(2023, 6, 30)
        assert cmd.location == "Main Gym"
        assert cmd.auto_decline
        assert not cmd.is_public

    def test_singular_time_accepted(self):
        cmd = parse_command("create event A on 2023-05-01 repeats M for 1 time")
        assert cmd.occurrences == 1

    def test_t_means_tuesday_and_r_thursday(self):
        tue = parse_command("create event A on 2023-05-01 repeats T for 1 times")
        thu = parse_command("create event A on 2023-05-01 repeats R for 1 times")
        assert tue.weekdays == frozenset({1})
        assert thu.weekdays == frozenset({3})

    def test_unknown_weekday_letter_rejected(self):
        with pytest.raises(ParseError):
            parse_command("create event A on 2023-05-01 repeats MX for 2 times")

    def test_unquoted_name_with_spaces_rejected(self):
        with pytest.raises(ParseError):
            parse_command("create event Team Meeting from 2023-05-15T10:00 to 2023-05-15T11:00")

    @pytest.mark.parametrize("text", [
        "create event A on 2023-13-01",
        "create event A from 2023-05-15T25:00 to 2023-05-15T26:00",
        "create event A on 2023-05-01 repeats M until 2023-02-30",
    ])
    def test_impossible_dates_rejected(self, text):
        with pytest.raises(ParseError):
            parse_command(text)


class TestEdit:
    def test_single(self):
        cmd = parse_command(
            'edit event location "Team Meeting" from 2023-05-15T10:00 to 2023-05-15T11:00 with "Room B"'
        )
        assert cmd == EditEvents(
            scope=EditScope.SINGLE,
            prop="location",
            subject="Team Meeting",
            value="Room B",
            start=datetime(2023, 5, 15, 10, 0),
            end=datetime(2023, 5, 15, 11, 0),
        )

    def test_from_date(self):
        cmd = parse_command("edit events description Weekly from 2023-05-05T10:00 with Moved")
        assert cmd.scope is EditScope.FROM_DATE
        assert cmd.start == datetime(2023, 5, 5, 10, 0)
        assert cmd.value == "Moved"

    def test_all(self):
        cmd = parse_command('edit events location Weekly with "Room B"')
        assert cmd.scope is EditScope.ALL
        assert cmd.subject == "Weekly"
        assert cmd.start is None

    def test_property_name_is_not_checked_by_parser(self):
        cmd = parse_command("edit events colour Weekly with red")
        assert cmd.prop == "colour"


class TestOtherCommands:
    def test_print_on_date(self):
        assert parse_command("print events on 2023-05-15") == PrintEvents(first=date(2023, 5, 15))

    def test_print_range(self):
        cmd = parse_command("print events from 2023-05-01 to 2023-05-31")
        assert cmd.is_range
        assert cmd.last == date(2023, 5, 31)

    def test_show_status(self):
        cmd = parse_command("show status on 2023-05-15T10:15")
        assert cmd == ShowStatus(moment=datetime(2023, 5, 15, 10, 15))

    def test_export(self):
        assert parse_command("export cal my calendar.csv") == ExportCalendar(filename="my calendar.csv")
        assert parse_command('export cal "out.ics"') == ExportCalendar(filename="out.ics")

    @pytest.mark.parametrize("text", ["exit", "EXIT", "  Exit  "])
    def test_exit(self, text):
        assert parse_command(text) == Exit()

    def test_surrounding_whitespace_ignored(self):
        assert isinstance(parse_command("   print events on 2023-05-15  "), PrintEvents)


class TestMalformed:
    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty(self, text):
        with pytest.raises(ParseError, match="empty"):
            parse_command(text)

    @pytest.mark.parametrize("text", [
        "delete event X",
        "print events on 15-05-2023",
        "show status on 2023-05-15",
        "create event",
        "exit now",
    ])
    def test_unrecognized_names_the_text(self, text):
        with pytest.raises(ParseError, match="Unrecognized"):
            parse_command(text)
