"""
Domain-specific exception hierarchy for the meeting finder application.
"""


class MeetingFinderError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeRangeError(MeetingFinderError, ValueError):
    """Raised when a time range violates 0 <= start <= end."""


class InvalidMeetingRequestError(MeetingFinderError, ValueError):
    """Raised when a meeting request cannot be constructed."""


class CalendarDataError(MeetingFinderError):
    """Raised when calendar data cannot be fetched or parsed."""


class ConfigError(MeetingFinderError):
    """Raised when the configuration file is unreadable or malformed."""
