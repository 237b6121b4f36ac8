"""
Conversion of calendar JSON payloads into domain events.

Accepted document shapes: a list of events, or ``{"events": [...]}``.
Each event carries ``name``, ``start``, ``end`` and ``attendees``;
times are minutes-of-day, ``HH:mm`` strings or ISO-8601 datetimes.
"""

import logging
from typing import Any, List

import pendulum
from pendulum import DateTime

from ..domain.exceptions import CalendarDataError, InvalidTimeRangeError
from ..domain.models import END_OF_DAY, START_OF_DAY, Event, TimeRange, time_in_minutes

logger = logging.getLogger(__name__)

MIDNIGHT_END = "24:00"
KNOWN_FIELDS = {"name", "start", "end", "attendees"}


def parse_minute(value: Any) -> int:
    """
    Convert a time value to minutes since midnight.

    Raises:
        ValueError: If the value cannot be interpreted as a time of day
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a time value: {value!r}")

    if isinstance(value, int):
        if not START_OF_DAY <= value <= END_OF_DAY + 1:
            raise ValueError(
                f"Minute {value} is outside the day (0 to {END_OF_DAY + 1})"
            )
        return value

    if not isinstance(value, str):
        raise ValueError(f"Not a time value: {value!r}")

    text = value.strip()
    if text == MIDNIGHT_END:
        return END_OF_DAY + 1

    if "T" in text:
        parsed = pendulum.parse(text)
    else:
        parsed = pendulum.from_format(text, "HH:mm")

    if not isinstance(parsed, DateTime):
        raise ValueError(f"Not a time value: {value!r}")

    return time_in_minutes(parsed.hour, parsed.minute)


def parse_event(raw: Any, index: int) -> Event:
    """
    Build an ``Event`` from one JSON object.

    Raises:
        CalendarDataError: If a field is missing or invalid
    """
    if not isinstance(raw, dict):
        raise CalendarDataError(f"Event #{index} must be an object, got {type(raw).__name__}")

    unknown = set(raw) - KNOWN_FIELDS
    if unknown:
        logger.warning("Event #%d: ignoring unknown fields %s", index, sorted(unknown))

    try:
        start = parse_minute(raw["start"])
        end = parse_minute(raw["end"])
    except KeyError as exc:
        raise CalendarDataError(f"Event #{index} is missing field {exc}") from exc
    except ValueError as exc:
        raise CalendarDataError(f"Event #{index} has an invalid time: {exc}") from exc

    attendees = raw.get("attendees", [])
    if not isinstance(attendees, list):
        raise CalendarDataError(f"Event #{index}: attendees must be a list of strings")

    try:
        when = TimeRange.from_start_end(start, end)
    except InvalidTimeRangeError as exc:
        raise CalendarDataError(f"Event #{index}: {exc}") from exc

    return Event(
        name=str(raw.get("name") or f"Event {index}"),
        when=when,
        attendees=[str(attendee) for attendee in attendees],
    )


def parse_calendar(payload: Any) -> List[Event]:
    """
    Convert a decoded calendar document into events.

    Raises:
        CalendarDataError: If the document or one of its events is malformed
    """
    if isinstance(payload, dict):
        if "events" not in payload:
            raise CalendarDataError("Calendar object must contain an 'events' list")
        payload = payload["events"]

    if not isinstance(payload, list):
        raise CalendarDataError("Calendar must be a list of events")

    return [parse_event(raw, index) for index, raw in enumerate(payload, 1)]
