"""
Tests for domain models.
"""

import pendulum
import pytest

from roomcheck.domain.models import (
    CandidateWindow,
    FreeBusyResponse,
    FreeGap,
    TimeInterval,
)


class TestTimeInterval:
    """Tests for TimeInterval model."""

    def test_create_valid_interval(self):
        """Test creating a valid busy interval."""
        start = pendulum.parse("2024-11-25 09:00", tz="Europe/Warsaw")
        end = pendulum.parse("2024-11-25 17:00", tz="Europe/Warsaw")

        interval = TimeInterval(start=start, end=end)

        assert interval.start == start
        assert interval.end == end
        assert interval.duration_minutes() == 480

    def test_zero_length_interval_is_allowed(self):
        """Instantaneous busy markers are valid."""
        moment = pendulum.parse("2024-11-25 12:00", tz="Europe/Warsaw")

        interval = TimeInterval(start=moment, end=moment)

        assert interval.duration_minutes() == 0

    def test_reversed_interval_raises_error(self):
        start = pendulum.parse("2024-11-25 17:00", tz="Europe/Warsaw")
        end = pendulum.parse("2024-11-25 09:00", tz="Europe/Warsaw")

        with pytest.raises(ValueError, match="must not be after end time"):
            TimeInterval(start=start, end=end)


class TestFreeGap:
    """Tests for FreeGap model."""

    def test_empty_gap_raises_error(self):
        """Gaps must have a positive duration."""
        moment = pendulum.parse("2024-11-25 12:00", tz="Europe/Warsaw")

        with pytest.raises(ValueError, match="must be before end time"):
            FreeGap(start=moment, end=moment)

    def test_contains(self):
        gap = FreeGap(
            start=pendulum.parse("2024-11-25 09:00", tz="Europe/Warsaw"),
            end=pendulum.parse("2024-11-25 12:00", tz="Europe/Warsaw")
        )
        inside = CandidateWindow(
            start=pendulum.parse("2024-11-25 11:00", tz="Europe/Warsaw"),
            end=pendulum.parse("2024-11-25 12:00", tz="Europe/Warsaw")
        )
        overlapping = CandidateWindow(
            start=pendulum.parse("2024-11-25 11:00", tz="Europe/Warsaw"),
            end=pendulum.parse("2024-11-25 12:01", tz="Europe/Warsaw")
        )

        assert gap.contains(inside)
        assert not gap.contains(overlapping)

    def test_contains_compares_instants_across_timezones(self):
        """The same instant in another timezone is still inside."""
        gap = FreeGap(
            start=pendulum.parse("2024-11-25 09:00", tz="Europe/Warsaw"),
            end=pendulum.parse("2024-11-25 12:00", tz="Europe/Warsaw")
        )
        window = CandidateWindow(
            start=pendulum.parse("2024-11-25 08:00", tz="UTC"),
            end=pendulum.parse("2024-11-25 09:00", tz="UTC")
        )

        assert gap.contains(window)


class TestCandidateWindow:
    """Tests for CandidateWindow model."""

    def test_window_end_before_start_raises_error(self):
        with pytest.raises(ValueError):
            CandidateWindow(
                start=pendulum.parse("2024-11-25 10:00", tz="Europe/Warsaw"),
                end=pendulum.parse("2024-11-25 09:00", tz="Europe/Warsaw")
            )

    def test_str(self):
        window = CandidateWindow(
            start=pendulum.parse("2024-11-25 10:00", tz="Europe/Warsaw"),
            end=pendulum.parse("2024-11-25 10:30", tz="Europe/Warsaw")
        )

        assert str(window) == "25.11.2024 10:00 - 10:30"


class TestFreeBusyResponse:
    """Tests for FreeBusyResponse model."""

    def test_busy_for_unknown_calendar_is_none(self):
        """An absent calendar is not the same as an empty one."""
        response = FreeBusyResponse(
            time_min=pendulum.parse("2024-11-25 00:00", tz="Europe/Warsaw"),
            time_max=pendulum.parse("2024-11-25 23:59", tz="Europe/Warsaw"),
            calendars={"room": []},
        )

        assert response.busy_for("missing@resource.calendar.google.com") is None
        assert response.busy_for("room") == []

    def test_busy_for_errored_calendar_is_none(self):
        response = FreeBusyResponse(
            time_min=pendulum.parse("2024-11-25 00:00", tz="Europe/Warsaw"),
            time_max=pendulum.parse("2024-11-25 23:59", tz="Europe/Warsaw"),
            calendars={"room": []},
            errors={"room": ["notFound"]},
        )

        assert not response.is_readable("room")
        assert response.busy_for("room") is None

    def test_busy_for_returns_copy(self):
        interval = TimeInterval(
            start=pendulum.parse("2024-11-25 10:00", tz="Europe/Warsaw"),
            end=pendulum.parse("2024-11-25 11:00", tz="Europe/Warsaw")
        )
        response = FreeBusyResponse(
            time_min=pendulum.parse("2024-11-25 00:00", tz="Europe/Warsaw"),
            time_max=pendulum.parse("2024-11-25 23:59", tz="Europe/Warsaw"),
            calendars={"room": [interval]},
        )

        busy = response.busy_for("room")
        busy.clear()

        assert response.busy_for("room") == [interval]
