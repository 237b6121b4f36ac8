"""
Core business logic for resolving meeting availability within a single day.

Pure domain logic: no API calls, no file access, no shared state. All
stages return new lists and leave their inputs untouched.
"""

import logging
from typing import AbstractSet, Iterable, List, Sequence

from .models import (
    END_OF_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeRange,
    event_order_key,
)

logger = logging.getLogger(__name__)

START_OF_DAY_EVENT = "START_OF_DAY"
END_OF_DAY_EVENT = "END_OF_DAY"
MERGED_EVENT = "MERGED_EVENT"


class AvailabilityResolver:
    """
    Finds the windows of a day in which a meeting can take place.

    Algorithm:
    1. Anchor the day with zero-length sentinel events for every attendee
    2. Sort events by start, then end
    3. For the mandatory attendees: filter, merge busy blocks, extract gaps
    4. Repeat for the optional attendees
    5. Prefer optional windows nested inside mandatory ones, otherwise
       fall back to the mandatory windows

    The resolver holds no state; a single instance can be shared freely.
    """

    def query(self, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """
        Compute every window long enough for the requested meeting.

        Args:
            events: Unordered events of the day. Each event's range must
                satisfy start <= end (enforced by ``TimeRange``).
            request: The meeting request

        Returns:
            Ranges sorted by start, non-overlapping, each at least
            ``request.duration`` minutes long. Never raises for empty
            inputs; an unsatisfiable request yields an empty list.
        """
        mandatory = request.attendees
        optional = request.optional_attendees

        if not mandatory and not optional:
            return [WHOLE_DAY]

        all_attendees = mandatory | optional
        sentinels = [
            Event(START_OF_DAY_EVENT, TimeRange.from_start_duration(START_OF_DAY, 0), all_attendees),
            Event(END_OF_DAY_EVENT, TimeRange.from_start_duration(END_OF_DAY + 1, 0), all_attendees),
        ]
        sorted_events = sorted([*events, *sentinels], key=event_order_key)

        available = self.available_ranges(mandatory, sorted_events, request.duration)

        if not optional:
            return available

        available_with_optional = self.available_ranges(
            optional, sorted_events, request.duration
        )

        if not available:
            return available_with_optional

        nested = self._nested_ranges(available_with_optional, available)
        logger.debug(
            "Optional windows nested in mandatory windows: %d of %d",
            len(nested),
            len(available_with_optional),
        )

        return nested if nested else available

    def available_ranges(
        self,
        attendees: AbstractSet[str],
        sorted_events: Sequence[Event],
        duration: int,
    ) -> List[TimeRange]:
        """
        Free windows of at least ``duration`` minutes for a set of attendees.

        ``sorted_events`` must already be ordered by ``event_order_key`` and
        bracketed by the day sentinels.
        """
        relevant = self._filter_events(attendees, sorted_events)
        busy_blocks = self._merge_busy_blocks(attendees, relevant)
        gaps = self._extract_gaps(busy_blocks, duration)

        logger.debug(
            "Attendees %s: %d relevant events, %d busy blocks, %d windows",
            sorted(attendees),
            len(relevant),
            len(busy_blocks),
            len(gaps),
        )
        return gaps

    @staticmethod
    def _filter_events(
        attendees: AbstractSet[str],
        events: Sequence[Event],
    ) -> List[Event]:
        """Keep only events that occupy at least one of the attendees."""
        return [event for event in events if event.involves_any(attendees)]

    @staticmethod
    def _merge_busy_blocks(
        attendees: AbstractSet[str],
        events: Sequence[Event],
    ) -> List[Event]:
        """
        Merge overlapping or touching events into busy blocks.

        Example: [09:00-10:00, 09:30-11:00, 11:00-12:00] -> [09:00-12:00]
        """
        merged: List[Event] = []

        for event in events:
            if merged and merged[-1].when.end >= event.when.start:
                last = merged[-1]
                merged[-1] = Event(
                    MERGED_EVENT,
                    TimeRange.from_start_end(
                        last.when.start,
                        max(last.when.end, event.when.end),
                    ),
                    attendees,
                )
            else:
                merged.append(event)

        return merged

    @staticmethod
    def _extract_gaps(busy_blocks: Sequence[Event], duration: int) -> List[TimeRange]:
        """Free ranges between consecutive busy blocks that fit ``duration``."""
        gaps: List[TimeRange] = []

        for event_to_check, next_event in zip(busy_blocks, busy_blocks[1:]):
            gap = next_event.when.start - event_to_check.when.end
            if gap >= duration:
                gaps.append(TimeRange.from_start_duration(event_to_check.when.end, gap))

        return gaps

    @staticmethod
    def _nested_ranges(
        candidates: Sequence[TimeRange],
        containers: Sequence[TimeRange],
    ) -> List[TimeRange]:
        """
        Keep the candidates that lie entirely within one of the containers.

        Both sequences are sorted and non-overlapping, so a container ending
        before the current candidate ends cannot hold any later candidate
        either; the container cursor only ever moves forward.
        """
        nested: List[TimeRange] = []
        cursor = 0

        for candidate in candidates:
            while cursor < len(containers) and containers[cursor].end < candidate.end:
                cursor += 1

            if cursor == len(containers):
                break

            if containers[cursor].contains(candidate):
                nested.append(candidate)

        return nested
