"""
Adapters layer - Calendar event sources.
"""

from .http_event_source import HttpEventSource
from .json_event_source import JsonEventSource

__all__ = ["HttpEventSource", "JsonEventSource"]
