"""
Event source reading a day calendar from a local JSON file.
"""

import json
import logging
from pathlib import Path
from typing import List

from ..domain.exceptions import CalendarDataError
from ..domain.models import Event
from .calendar_parser import parse_calendar

logger = logging.getLogger(__name__)


class JsonEventSource:
    """
    Loads events from a JSON calendar file.

    The file is read on every call so edits are picked up between queries.
    """

    def __init__(self, path: Path):
        """
        Initialize the source.

        Args:
            path: Location of the calendar JSON file
        """
        self.path = Path(path)

    def get_events(self) -> List[Event]:
        """
        Load all events from the calendar file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            CalendarDataError: If the file is not valid calendar JSON
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Calendar file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise CalendarDataError(f"Invalid JSON in {self.path}: {exc}") from exc

        events = parse_calendar(payload)
        logger.info("Loaded %d events from %s", len(events), self.path)
        return events
