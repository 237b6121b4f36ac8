"""
Domain models for minute-of-day ranges, calendar events and meeting requests.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Tuple

from .exceptions import InvalidMeetingRequestError, InvalidTimeRangeError

MINUTES_PER_HOUR = 60

START_OF_DAY = 0
END_OF_DAY = 23 * MINUTES_PER_HOUR + 59


def time_in_minutes(hours: int, minutes: int) -> int:
    """Convert a clock time to minutes since midnight."""
    if not 0 <= hours <= 24:
        raise ValueError(f"Hours must be between 0 and 24, got {hours}")
    if not 0 <= minutes < MINUTES_PER_HOUR:
        raise ValueError(f"Minutes must be between 0 and 59, got {minutes}")
    if hours == 24 and minutes != 0:
        raise ValueError(f"Only 24:00 is valid in hour 24, got 24:{minutes:02d}")
    return hours * MINUTES_PER_HOUR + minutes


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable half-open range of minutes ``[start, end)``.

    Invariant: 0 <= start <= end. A zero-length range marks a day boundary.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise InvalidTimeRangeError(f"Start minute must not be negative, got {self.start}")
        if self.end < self.start:
            raise InvalidTimeRangeError(
                f"End minute {self.end} must not be before start minute {self.start}"
            )

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool = False) -> "TimeRange":
        """Create a range from its boundaries; ``inclusive`` keeps the end minute."""
        return cls(start=start, end=end + 1 if inclusive else end)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        """Create a range starting at ``start`` and lasting ``duration`` minutes."""
        return cls(start=start, end=start + duration)

    @property
    def duration(self) -> int:
        """Length of the range in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range shares at least one minute with another."""
        return self.start < other.end and other.start < self.end

    def touches(self, other: "TimeRange") -> bool:
        """Check if one range ends exactly where the other starts."""
        return self.end == other.start or other.end == self.start

    def contains(self, other: "TimeRange") -> bool:
        """Check if another range is nested inside this one."""
        return self.start <= other.start and other.end <= self.end

    def contains_point(self, minute: int) -> bool:
        """Check if a minute falls inside the range."""
        return self.start <= minute < self.end

    def format_clock(self) -> str:
        """Format as ``HH:MM - HH:MM``."""
        return f"{_format_minute(self.start)} - {_format_minute(self.end)}"

    def __str__(self) -> str:
        return f"Range: [{self.start}, {self.end})"


WHOLE_DAY = TimeRange.from_start_end(START_OF_DAY, END_OF_DAY, inclusive=True)


def _format_minute(minute: int) -> str:
    hours, minutes = divmod(minute, MINUTES_PER_HOUR)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class Event:
    """
    A named time range occupying a set of attendees.

    Attendees are opaque identifiers compared by string equality.
    """
    name: str
    when: TimeRange
    attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "attendees", frozenset(self.attendees))

    def involves_any(self, attendees: Iterable[str]) -> bool:
        """Check if at least one of the given attendees is part of this event."""
        return not self.attendees.isdisjoint(attendees)


@dataclass(frozen=True)
class MeetingRequest:
    """
    A request for a meeting of ``duration`` minutes.

    ``attendees`` must be free; ``optional_attendees`` should ideally be free.
    The two sets are expected to be disjoint.
    """
    duration: int
    attendees: FrozenSet[str] = field(default_factory=frozenset)
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.duration < 0:
            raise InvalidMeetingRequestError(
                f"Meeting duration must not be negative, got {self.duration}"
            )
        object.__setattr__(self, "attendees", frozenset(self.attendees))
        object.__setattr__(self, "optional_attendees", frozenset(self.optional_attendees))

    @property
    def all_attendees(self) -> FrozenSet[str]:
        """Mandatory and optional attendees combined."""
        return self.attendees | self.optional_attendees

    def with_optional_attendee(self, attendee: str) -> "MeetingRequest":
        """Return a copy of this request with one more optional attendee."""
        return MeetingRequest(
            duration=self.duration,
            attendees=self.attendees,
            optional_attendees=self.optional_attendees | {attendee},
        )


def order_by_start(time_range: TimeRange) -> int:
    """Sort key ordering ranges by start minute."""
    return time_range.start


def order_by_end(time_range: TimeRange) -> int:
    """Sort key ordering ranges by end minute."""
    return time_range.end


def event_order_key(event: Event) -> Tuple[int, int]:
    """Composite sort key: start ascending, ties broken on end ascending."""
    return order_by_start(event.when), order_by_end(event.when)


def compare_events(first: Event, second: Event) -> int:
    """Return -1, 0 or 1 depending on how two events order by ``event_order_key``."""
    first_key = event_order_key(first)
    second_key = event_order_key(second)
    return (first_key > second_key) - (first_key < second_key)
