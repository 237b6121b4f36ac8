"""
Event source fetching a day calendar over HTTP.
"""

import logging
from typing import List

import requests

from ..domain.exceptions import CalendarDataError
from ..domain.models import Event
from .calendar_parser import parse_calendar

logger = logging.getLogger(__name__)


class HttpEventSource:
    """
    Fetches the calendar JSON document from a URL.

    The endpoint must answer ``GET`` with the same document shape as the
    JSON calendar file.
    """

    def __init__(self, url: str, timeout: float = 10.0):
        """
        Initialize the HTTP source.

        Args:
            url: Endpoint serving the calendar document
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}

    def get_events(self) -> List[Event]:
        """
        Fetch and parse the calendar.

        Raises:
            CalendarDataError: If the request fails or the payload is malformed
        """
        try:
            response = requests.get(self.url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise CalendarDataError(f"Could not reach {self.url}: {exc}") from exc

        if response.status_code != 200:
            raise CalendarDataError(
                f"Calendar request failed: {response.status_code} - {response.text}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise CalendarDataError(f"Calendar response from {self.url} is not JSON") from exc

        events = parse_calendar(payload)
        logger.info("Fetched %d events from %s", len(events), self.url)
        return events
