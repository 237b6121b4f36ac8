"""
Application service for finding meeting windows.

The service loads events through an event source adapter and delegates the
availability calculation to the domain-level ``AvailabilityResolver``. This
keeps the CLI thin and lets tests swap the calendar for a simple stub.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol

from ..domain.availability import AvailabilityResolver
from ..domain.models import Event, MeetingRequest, TimeRange, event_order_key

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the calendar source behaviour needed by the service."""

    def get_events(self) -> List[Event]:
        """Return the events of the day."""


class MeetingFinderService:
    """
    Orchestrates event retrieval and availability resolution.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        resolver: Optional[AvailabilityResolver] = None,
    ) -> None:
        self._event_source = event_source
        self._resolver = resolver or AvailabilityResolver()

    def find_meeting_times(
        self,
        *,
        duration: int,
        attendees: Iterable[str],
        optional_attendees: Iterable[str] = (),
    ) -> List[TimeRange]:
        """
        Load the calendar and compute the windows for a meeting.

        Raises:
            InvalidMeetingRequestError: If ``duration`` is negative
        """
        request = MeetingRequest(
            duration=duration,
            attendees=attendees,
            optional_attendees=optional_attendees,
        )
        events = self.fetch_events()

        logger.info(
            "Resolving %d-minute meeting for %d mandatory and %d optional attendees",
            request.duration,
            len(request.attendees),
            len(request.optional_attendees),
        )
        return self._resolver.query(events, request)

    def fetch_events(self) -> List[Event]:
        """Fetch the day's events ordered by start, then end."""
        return sorted(self._event_source.get_events(), key=event_order_key)

    def events_for(self, attendee: str) -> List[Event]:
        """List the events occupying one attendee, ordered like ``fetch_events``."""
        return [
            event
            for event in self.fetch_events()
            if attendee in event.attendees
        ]
