"""
Tests for the availability resolver.
"""

import pytest

from meetingfinder.domain.availability import AvailabilityResolver
from meetingfinder.domain.models import WHOLE_DAY, Event, MeetingRequest, TimeRange

PERSON_A = "person-a@example.com"
PERSON_B = "person-b@example.com"
PERSON_C = "person-c@example.com"

TIME_0800AM = 8 * 60
TIME_0830AM = 8 * 60 + 30
TIME_0900AM = 9 * 60
TIME_0930AM = 9 * 60 + 30
TIME_1000AM = 10 * 60
TIME_1100AM = 11 * 60
END_OF_DAY_EXCLUSIVE = 1440


@pytest.fixture
def resolver():
    return AvailabilityResolver()


def _event(name, start, end, *attendees):
    return Event(name, TimeRange(start, end), attendees)


class TestQuery:
    """Tests for AvailabilityResolver.query."""

    def test_no_attendees_returns_whole_day(self, resolver):
        """Without attendees the whole day is available, events are ignored."""
        events = [_event("Event 1", 0, 1440, PERSON_A)]
        request = MeetingRequest(duration=60)

        assert resolver.query(events, request) == [WHOLE_DAY]
        assert resolver.query([], request) == [TimeRange(0, 1440)]

    def test_no_events_returns_whole_day(self, resolver):
        """With an empty calendar the attendee is free all day."""
        request = MeetingRequest(duration=60, attendees={PERSON_A})

        assert resolver.query([], request) == [WHOLE_DAY]

    def test_duration_longer_than_day_yields_nothing(self, resolver):
        """An unsatisfiable duration gives an empty result, not an error."""
        request = MeetingRequest(duration=1441, attendees={PERSON_A})

        assert resolver.query([], request) == []

    def test_single_blocking_event(self, resolver):
        """One event splits the day into two windows."""
        events = [_event("Event 1", 600, 660, "A")]
        request = MeetingRequest(duration=30, attendees={"A"})

        assert resolver.query(events, request) == [
            TimeRange(0, 600),
            TimeRange(660, END_OF_DAY_EXCLUSIVE),
        ]

    def test_every_attendee_is_considered(self, resolver):
        """Events of every mandatory attendee block the meeting."""
        events = [
            _event("Event 1", TIME_0800AM, TIME_0830AM, PERSON_A),
            _event("Event 2", TIME_0900AM, TIME_0930AM, PERSON_B),
        ]
        request = MeetingRequest(duration=30, attendees={PERSON_A, PERSON_B})

        assert resolver.query(events, request) == [
            TimeRange(0, TIME_0800AM),
            TimeRange(TIME_0830AM, TIME_0900AM),
            TimeRange(TIME_0930AM, END_OF_DAY_EXCLUSIVE),
        ]

    def test_overlapping_events_are_merged(self, resolver):
        """Overlapping events form one busy block."""
        events = [
            _event("Event 1", 600, 700, "A"),
            _event("Event 2", 650, 750, "A"),
        ]
        request = MeetingRequest(duration=30, attendees={"A"})

        result = resolver.query(events, request)

        assert result == [TimeRange(0, 600), TimeRange(750, END_OF_DAY_EXCLUSIVE)]
        assert not any(r.overlaps(TimeRange(600, 750)) for r in result)

    def test_nested_events(self, resolver):
        """An event inside another does not create a window."""
        events = [
            _event("Event 1", TIME_0830AM, TIME_1000AM, PERSON_A),
            _event("Event 2", TIME_0900AM, TIME_0930AM, PERSON_B),
        ]
        request = MeetingRequest(duration=30, attendees={PERSON_A, PERSON_B})

        assert resolver.query(events, request) == [
            TimeRange(0, TIME_0830AM),
            TimeRange(TIME_1000AM, END_OF_DAY_EXCLUSIVE),
        ]

    def test_double_booked_person(self, resolver):
        """Overlapping events of the same person merge."""
        events = [
            _event("Event 1", TIME_0830AM, TIME_0930AM, PERSON_A),
            _event("Event 2", TIME_0830AM, TIME_0900AM, PERSON_A),
        ]
        request = MeetingRequest(duration=30, attendees={PERSON_A})

        assert resolver.query(events, request) == [
            TimeRange(0, TIME_0830AM),
            TimeRange(TIME_0930AM, END_OF_DAY_EXCLUSIVE),
        ]

    def test_event_until_midnight(self, resolver):
        """An event ending at midnight leaves no window after it."""
        events = [_event("Late", 1380, 1440, PERSON_A)]
        request = MeetingRequest(duration=30, attendees={PERSON_A})

        assert resolver.query(events, request) == [TimeRange(0, 1380)]

    def test_event_from_midnight(self, resolver):
        """An event starting at minute zero leaves no window before it."""
        events = [_event("Early", 0, 60, PERSON_A)]
        request = MeetingRequest(duration=30, attendees={PERSON_A})

        assert resolver.query(events, request) == [TimeRange(60, END_OF_DAY_EXCLUSIVE)]

    def test_gap_of_exactly_duration_is_included(self, resolver):
        """A gap equal to the duration fits the meeting."""
        events = [
            _event("Event 1", 0, TIME_0830AM, PERSON_A),
            _event("Event 2", TIME_0900AM, 1440, PERSON_A),
        ]

        just_enough = MeetingRequest(duration=30, attendees={PERSON_A})
        too_long = MeetingRequest(duration=31, attendees={PERSON_A})

        assert resolver.query(events, just_enough) == [TimeRange(TIME_0830AM, TIME_0900AM)]
        assert resolver.query(events, too_long) == []

    def test_ignores_people_not_attending(self, resolver):
        """Events of people outside the request do not block."""
        events = [_event("Event 1", TIME_0800AM, TIME_0830AM, PERSON_A)]
        request = MeetingRequest(duration=30, attendees={PERSON_B})

        assert resolver.query(events, request) == [WHOLE_DAY]

    def test_input_is_not_modified(self, resolver):
        """The caller's event list is left as it was."""
        events = [
            _event("Event 2", 650, 750, "A"),
            _event("Event 1", 600, 700, "A"),
        ]
        snapshot = list(events)

        resolver.query(events, MeetingRequest(duration=30, attendees={"A"}))

        assert events == snapshot

    def test_query_is_idempotent(self, resolver):
        """Repeated queries produce identical results."""
        events = [
            _event("Event 1", 600, 700, "A", "B"),
            _event("Event 2", 800, 900, "B"),
        ]
        request = MeetingRequest(duration=45, attendees={"A"}, optional_attendees={"B"})

        assert resolver.query(events, request) == resolver.query(events, request)

    def test_output_is_sorted_and_disjoint(self, resolver):
        """Windows are strictly ordered and never overlap."""
        events = [
            _event("E1", 900, 960, "A"),
            _event("E2", 100, 200, "B"),
            _event("E3", 150, 400, "A"),
            _event("E4", 1200, 1210, "B"),
            _event("E5", 500, 500, "A"),
        ]
        request = MeetingRequest(duration=10, attendees={"A", "B"})

        result = resolver.query(events, request)

        assert result
        for current, following in zip(result, result[1:]):
            assert current.start < following.start
            assert not current.overlaps(following)
        assert all(r.duration >= 10 for r in result)


class TestOptionalAttendees:
    """Tests for the optional attendee reconciliation."""

    def test_optional_attendee_busy_all_day_falls_back(self, resolver):
        """An optional attendee with no free time does not shrink the result."""
        events = [
            _event("Event 1", TIME_0800AM, TIME_0830AM, PERSON_A),
            _event("Event 2", TIME_0900AM, TIME_0930AM, PERSON_B),
            _event("Event 3", 0, 1440, PERSON_C),
        ]
        request = MeetingRequest(
            duration=30,
            attendees={PERSON_A, PERSON_B},
            optional_attendees={PERSON_C},
        )

        assert resolver.query(events, request) == [
            TimeRange(0, TIME_0800AM),
            TimeRange(TIME_0830AM, TIME_0900AM),
            TimeRange(TIME_0930AM, END_OF_DAY_EXCLUSIVE),
        ]

    def test_optional_windows_not_nested_fall_back(self, resolver):
        """Optional windows straddling a mandatory event are discarded."""
        events = [
            _event("Event 1", 600, 660, PERSON_A),
            _event("Event 2", 0, 300, PERSON_B),
            _event("Event 3", 1200, 1440, PERSON_B),
        ]
        request = MeetingRequest(
            duration=30,
            attendees={PERSON_A},
            optional_attendees={PERSON_B},
        )

        assert resolver.query(events, request) == [
            TimeRange(0, 600),
            TimeRange(660, END_OF_DAY_EXCLUSIVE),
        ]

    def test_nested_optional_windows_are_preferred(self, resolver):
        """Optional windows inside mandatory windows replace them."""
        events = [
            _event("Event 1", 600, 660, PERSON_A),
            _event("Event 2", 0, 100, PERSON_B),
            _event("Event 3", 500, 700, PERSON_B),
            _event("Event 4", 800, 1440, PERSON_B),
        ]
        request = MeetingRequest(
            duration=30,
            attendees={PERSON_A},
            optional_attendees={PERSON_B},
        )

        assert resolver.query(events, request) == [
            TimeRange(100, 500),
            TimeRange(700, 800),
        ]

    def test_only_nested_optional_windows_are_kept(self, resolver):
        """A mix of nested and straddling optional windows keeps the nested ones."""
        events = [
            _event("Event 1", 600, 660, PERSON_A),
            _event("Event 2", 0, 100, PERSON_B),
            _event("Event 3", 300, 400, PERSON_B),
        ]
        request = MeetingRequest(
            duration=30,
            attendees={PERSON_A},
            optional_attendees={PERSON_B},
        )

        # Optional windows: [100, 300) nested, [400, 1440) straddles 600-660
        assert resolver.query(events, request) == [TimeRange(100, 300)]

    def test_optional_window_starting_at_shared_mandatory_edge(self, resolver):
        """A zero-length mandatory event splits the day; the later window still holds optional ones."""
        events = [
            _event("Marker", 600, 600, PERSON_A),
            _event("Morning", 0, 600, PERSON_B),
        ]
        request = MeetingRequest(
            duration=30,
            attendees={PERSON_A},
            optional_attendees={PERSON_B},
        )

        assert resolver.query(events, request) == [TimeRange(600, END_OF_DAY_EXCLUSIVE)]

    def test_only_optional_attendees(self, resolver):
        """Without mandatory attendees the optional windows are returned."""
        events = [
            _event("Event 1", TIME_0800AM, TIME_0830AM, PERSON_A),
            _event("Event 2", TIME_0900AM, TIME_0930AM, PERSON_B),
        ]
        request = MeetingRequest(duration=30, optional_attendees={PERSON_A, PERSON_B})

        assert resolver.query(events, request) == [
            TimeRange(0, TIME_0800AM),
            TimeRange(TIME_0830AM, TIME_0900AM),
            TimeRange(TIME_0930AM, END_OF_DAY_EXCLUSIVE),
        ]

    def test_only_optional_attendees_without_room(self, resolver):
        """Optional-only requests with no free time yield nothing."""
        events = [
            _event("Event 1", 0, TIME_0830AM, PERSON_A),
            _event("Event 2", TIME_0900AM, 1440, PERSON_B),
        ]
        request = MeetingRequest(duration=60, optional_attendees={PERSON_A, PERSON_B})

        assert resolver.query(events, request) == []

    def test_no_mandatory_room_returns_optional_windows(self, resolver):
        """When mandatory attendees have no room the optional windows are used."""
        events = [
            _event("Event 1", 0, 1440, PERSON_A),
            _event("Event 2", 600, 660, PERSON_B),
        ]
        request = MeetingRequest(
            duration=30,
            attendees={PERSON_A},
            optional_attendees={PERSON_B},
        )

        assert resolver.query(events, request) == [
            TimeRange(0, 600),
            TimeRange(660, END_OF_DAY_EXCLUSIVE),
        ]


class TestStages:
    """Tests for the individual resolver stages."""

    def test_available_ranges_filters_and_merges(self, resolver):
        """Only the attendee's events are merged into busy blocks."""
        events = [
            _event("START", 0, 0, "A", "B"),
            _event("E1", 100, 200, "A"),
            _event("E2", 150, 300, "B"),
            _event("E3", 200, 250, "A"),
            _event("END", 1440, 1440, "A", "B"),
        ]

        assert resolver.available_ranges({"A"}, events, 50) == [
            TimeRange(0, 100),
            TimeRange(250, 1440),
        ]

    def test_nested_ranges_with_touching_containers(self):
        """The cursor moves past a container that ends where the candidate starts."""
        containers = [TimeRange(0, 600), TimeRange(600, 1440)]
        candidates = [TimeRange(600, 900)]

        assert AvailabilityResolver._nested_ranges(candidates, containers) == [TimeRange(600, 900)]

    def test_nested_ranges_sweep(self):
        """The sweep keeps candidates inside a container."""
        containers = [TimeRange(0, 100), TimeRange(200, 300), TimeRange(400, 500)]
        candidates = [
            TimeRange(10, 90),
            TimeRange(90, 210),
            TimeRange(220, 300),
            TimeRange(450, 510),
        ]

        assert AvailabilityResolver._nested_ranges(candidates, containers) == [
            TimeRange(10, 90),
            TimeRange(220, 300),
        ]
