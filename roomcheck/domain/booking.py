"""
Booking request model and the checks run before asking for availability.
"""

from dataclasses import dataclass

from pendulum import DateTime

from .exceptions import BookingValidationError
from .models import CandidateWindow

MIN_SUMMARY_LENGTH = 5
DEFAULT_EVENT_MINUTES = 30
MIN_EVENT_MINUTES = 15


@dataclass
class BookingRequest:
    """
    A room reservation the user wants to make.

    ``start`` and ``end`` are not validated on construction; call
    ``validate`` before turning the request into a window.
    """
    summary: str
    calendar_id: str
    start: DateTime
    end: DateTime
    all_day: bool = False

    @classmethod
    def starting_at(
        cls,
        summary: str,
        calendar_id: str,
        start: DateTime,
        duration_minutes: int = DEFAULT_EVENT_MINUTES
    ) -> "BookingRequest":
        """Create a request lasting ``duration_minutes`` from ``start``."""
        return cls(
            summary=summary,
            calendar_id=calendar_id,
            start=start,
            end=start.add(minutes=duration_minutes),
        )

    @classmethod
    def all_day_for(cls, summary: str, calendar_id: str, day: DateTime) -> "BookingRequest":
        """
        Create an all-day request.

        The window runs from midnight to one second before the next midnight.
        """
        return cls(
            summary=summary,
            calendar_id=calendar_id,
            start=day.start_of("day"),
            end=day.end_of("day").set(microsecond=0),
            all_day=True,
        )

    def validate(self, now: DateTime, min_event_minutes: int = MIN_EVENT_MINUTES) -> None:
        """
        Run the booking rules in order and raise on the first failure.

        Raises:
            BookingValidationError: With a user-facing message
        """
        if len(self.summary) < MIN_SUMMARY_LENGTH:
            raise BookingValidationError(
                f"Summary should have at least {MIN_SUMMARY_LENGTH} characters"
            )

        midnight = now.in_timezone(self.start.timezone).start_of("day")
        if self.start < midnight:
            raise BookingValidationError("Cannot pick date earlier than today's midnight")

        if not self.all_day:
            duration_seconds = (self.end - self.start).total_seconds()
            if duration_seconds < min_event_minutes * 60:
                raise BookingValidationError(
                    f"Cannot create event shorter than {min_event_minutes} minutes"
                )

        # Compared at minute granularity
        start_minute = self.start.set(second=0, microsecond=0)
        end_minute = self.end.set(second=0, microsecond=0)
        if end_minute <= start_minute:
            reason = "date earlier than" if end_minute < start_minute else "same date as"
            raise BookingValidationError(
                f"Cannot pick {reason} {self.start.format('DD.MM.YYYY HH:mm')}"
            )

        if not self.calendar_id:
            raise BookingValidationError("Please choose room")

    def to_window(self) -> CandidateWindow:
        """Return the window to check against free gaps."""
        return CandidateWindow(start=self.start, end=self.end)
