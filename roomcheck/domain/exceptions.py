"""
Domain-specific exception hierarchy for the room availability checker.
"""


class RoomcheckError(Exception):
    """Base class for all application-level errors."""


class CalendarAPIError(RoomcheckError):
    """Raised when free/busy data cannot be fetched or parsed."""


class BookingValidationError(RoomcheckError):
    """Raised when a booking request fails one of its validation rules."""


class UnknownRoomError(RoomcheckError):
    """Raised when a room identifier does not match any configured room."""


class RoomUnavailableError(RoomcheckError):
    """Raised when the requested window does not fit into a free gap."""
