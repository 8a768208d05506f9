"""
Tests for booking request validation.
"""

import pendulum
import pytest

from roomcheck.domain.booking import BookingRequest
from roomcheck.domain.exceptions import BookingValidationError

TZ = "Europe/Warsaw"
ROOM = "aquarium@resource.calendar.google.com"
NOW = pendulum.parse("2024-11-25 08:00", tz=TZ)


def _request(start: str, end: str, summary: str = "Sprint planning", calendar_id: str = ROOM):
    return BookingRequest(
        summary=summary,
        calendar_id=calendar_id,
        start=pendulum.parse(start, tz=TZ),
        end=pendulum.parse(end, tz=TZ),
    )


class TestBookingRequestValidation:
    """Tests for BookingRequest.validate."""

    def test_valid_request_passes(self):
        request = _request("2024-11-25 10:00", "2024-11-25 10:30")

        request.validate(NOW)

    def test_short_summary(self):
        request = _request("2024-11-25 10:00", "2024-11-25 10:30", summary="Sync")

        with pytest.raises(BookingValidationError, match="at least 5 characters"):
            request.validate(NOW)

    def test_start_before_todays_midnight(self):
        request = _request("2024-11-24 23:30", "2024-11-25 10:30")

        with pytest.raises(BookingValidationError, match="earlier than today's midnight"):
            request.validate(NOW)

    def test_start_earlier_today_is_allowed(self):
        """Only the day matters, not the current hour."""
        request = _request("2024-11-25 07:00", "2024-11-25 07:30")

        request.validate(NOW)

    def test_too_short_event(self):
        request = _request("2024-11-25 10:00", "2024-11-25 10:10")

        with pytest.raises(BookingValidationError, match="shorter than 15 minutes"):
            request.validate(NOW)

    def test_custom_minimum_duration(self):
        request = _request("2024-11-25 10:00", "2024-11-25 10:30")

        with pytest.raises(BookingValidationError, match="shorter than 45 minutes"):
            request.validate(NOW, min_event_minutes=45)

    def test_end_in_same_minute_as_start(self):
        request = _request("2024-11-25 10:00:00", "2024-11-25 10:00:30")

        with pytest.raises(BookingValidationError, match="Cannot pick same date as 25.11.2024 10:00"):
            request.validate(NOW, min_event_minutes=0)

    def test_end_before_start(self):
        request = _request("2024-11-25 10:00", "2024-11-25 09:00")

        with pytest.raises(BookingValidationError, match="Cannot pick date earlier than"):
            request.validate(NOW, min_event_minutes=0)

    def test_missing_room(self):
        request = _request("2024-11-25 10:00", "2024-11-25 10:30", calendar_id="")

        with pytest.raises(BookingValidationError, match="Please choose room"):
            request.validate(NOW)

    def test_summary_is_checked_first(self):
        """The first failing rule wins."""
        request = _request("2024-11-24 10:00", "2024-11-24 10:05", summary="", calendar_id="")

        with pytest.raises(BookingValidationError, match="Summary"):
            request.validate(NOW)


class TestBookingRequestFactories:
    """Tests for the BookingRequest constructors."""

    def test_starting_at_uses_default_duration(self):
        start = pendulum.parse("2024-11-25 10:00", tz=TZ)

        request = BookingRequest.starting_at("Sprint planning", ROOM, start)

        assert request.end == pendulum.parse("2024-11-25 10:30", tz=TZ)
        assert not request.all_day

    def test_all_day_spans_whole_day(self):
        day = pendulum.parse("2024-11-25 14:20", tz=TZ)

        request = BookingRequest.all_day_for("Offsite day", ROOM, day)

        assert request.all_day
        assert request.start == pendulum.parse("2024-11-25 00:00", tz=TZ)
        assert request.end == pendulum.parse("2024-11-25 23:59:59", tz=TZ)
        request.validate(NOW)

    def test_to_window(self):
        request = _request("2024-11-25 10:00", "2024-11-25 10:30")

        window = request.to_window()

        assert window.start == request.start
        assert window.end == request.end
