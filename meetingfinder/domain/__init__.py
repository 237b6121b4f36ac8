"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import AvailabilityResolver
from .models import WHOLE_DAY, Event, MeetingRequest, TimeRange

__all__ = ["AvailabilityResolver", "Event", "MeetingRequest", "TimeRange", "WHOLE_DAY"]
