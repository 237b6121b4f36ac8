"""
meetingfinder - Find meeting windows in a day's calendar.
"""

__version__ = "0.1.0"
