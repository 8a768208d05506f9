"""
Adapters layer - External integrations (Google Calendar free/busy API).
"""

from .google_calendar_client import GoogleCalendarClient
from .mock_calendar_client import MockCalendarClient

__all__ = ["GoogleCalendarClient", "MockCalendarClient"]
