"""
Core business logic for deciding whether a booking window is free.

Pure domain logic: no API calls, no I/O, no shared state. The engine can be
called concurrently from any number of callers.
"""

from typing import List, Sequence

from pendulum import DateTime

from .models import AvailabilityResult, CandidateWindow, FreeGap, TimeInterval


class AvailabilityEngine:
    """
    Computes free gaps between busy intervals and checks window containment.

    Algorithm:
    1. Walk the busy intervals in the order given
    2. Each boundary pair (horizon start, first busy start), (previous busy
       end, next busy start), (last busy end, horizon end) is a gap candidate
    3. Keep candidates with a strictly positive duration
    4. A window is free when it nests inside a single gap

    Busy intervals are not merged. Callers are expected to pass them sorted
    by start time; with ``sort_busy=True`` the engine sorts them itself.
    """

    def __init__(self, sort_busy: bool = False):
        self.sort_busy = sort_busy

    def compute_free_gaps(
        self,
        horizon_start: DateTime,
        horizon_end: DateTime,
        busy_intervals: Sequence[TimeInterval]
    ) -> List[FreeGap]:
        """
        Compute the free gaps of a horizon given its busy intervals.

        Args:
            horizon_start: Start of the queried range
            horizon_end: End of the queried range
            busy_intervals: Busy periods for one calendar, possibly empty

        Returns:
            List of FreeGap objects in iteration order

        Example:
        Horizon: 09:00 - 18:00
        Busy: [12:00-13:00]
        Result: [09:00-12:00, 13:00-18:00]
        """
        assert horizon_start <= horizon_end, "horizon must not end before it starts"

        busy = list(busy_intervals)
        if self.sort_busy:
            busy.sort(key=lambda interval: interval.start)

        if not busy:
            if horizon_start < horizon_end:
                return [FreeGap(start=horizon_start, end=horizon_end)]
            return []

        gaps: List[FreeGap] = []
        count = len(busy)

        for index in range(count + 1):
            if index == 0:
                gap_start = horizon_start
                gap_end = busy[0].start
            elif index == count:
                gap_start = busy[count - 1].end
                gap_end = horizon_end
            else:
                gap_start = busy[index - 1].end
                gap_end = busy[index].start

            if gap_end > gap_start:
                gaps.append(FreeGap(start=gap_start, end=gap_end))

        return gaps

    @staticmethod
    def is_window_free(window: CandidateWindow, gaps: Sequence[FreeGap]) -> bool:
        """Check if the window fits entirely inside one of the gaps."""
        return any(gap.contains(window) for gap in gaps)

    def check_availability(
        self,
        horizon_start: DateTime,
        horizon_end: DateTime,
        busy_intervals: Sequence[TimeInterval],
        window: CandidateWindow
    ) -> AvailabilityResult:
        """
        Compute the gaps for the horizon and check the window against them.

        Returns AVAILABLE when the window fits a gap, UNAVAILABLE otherwise.
        """
        assert window.start < window.end, "window must start before it ends"

        gaps = self.compute_free_gaps(horizon_start, horizon_end, busy_intervals)

        if self.is_window_free(window, gaps):
            return AvailabilityResult.AVAILABLE
        return AvailabilityResult.UNAVAILABLE
