"""
Domain models for busy intervals, free gaps and booking windows.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pendulum import DateTime


@dataclass(frozen=True)
class TimeInterval:
    """
    One busy period reported by a free/busy source.

    Invariant: start must not be after end. Zero-length intervals are
    allowed and mark an instantaneous busy point.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Start time {self.start} must not be after end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class FreeGap:
    """
    A stretch of the query horizon not covered by any busy interval.

    Invariant: start must be before end. Empty gaps are never built.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def contains(self, window: "CandidateWindow") -> bool:
        """Check if the window lies entirely inside this gap, bounds included."""
        return window.start >= self.start and window.end <= self.end

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class CandidateWindow:
    """
    The window a user wants to reserve.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


class AvailabilityResult(Enum):
    """Outcome of an availability check."""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"

    @property
    def is_available(self) -> bool:
        return self is AvailabilityResult.AVAILABLE


@dataclass
class FreeBusyResponse:
    """
    Parsed free/busy answer for one query.

    ``time_min`` and ``time_max`` are the horizon the source reports back;
    ``calendars`` keeps every readable calendar's busy list in response order
    and ``errors`` the reasons reported for calendars that could not be read.
    """
    time_min: DateTime
    time_max: DateTime
    calendars: Dict[str, List[TimeInterval]] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)

    def is_readable(self, calendar_id: str) -> bool:
        """Check if the source returned busy data for the calendar."""
        return calendar_id in self.calendars and calendar_id not in self.errors

    def busy_for(self, calendar_id: str) -> Optional[List[TimeInterval]]:
        """
        Return busy intervals for one calendar.

        Returns None when the calendar is absent or reported errors, so an
        unreadable calendar is never mistaken for an empty one.
        """
        if not self.is_readable(calendar_id):
            return None
        return list(self.calendars[calendar_id])
