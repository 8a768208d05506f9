"""
Application services for checking whether a room can be booked.

The service fetches busy intervals for one room through a free/busy client
adapter and delegates the gap computation and containment check to the
domain-level ``AvailabilityEngine``. The client is typed as a protocol so the
Google adapter, the mock adapter or a test stub can be plugged in.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

from pendulum import DateTime

from ..config import RoomDirectory
from ..domain.availability import AvailabilityEngine
from ..domain.booking import MIN_EVENT_MINUTES, BookingRequest
from ..domain.exceptions import RoomUnavailableError
from ..domain.models import AvailabilityResult, FreeBusyResponse, FreeGap, TimeInterval

logger = logging.getLogger(__name__)

ROOM_BUSY_MESSAGE = "The room is busy in provided time range"


class FreeBusyClientProtocol(Protocol):
    """Protocol describing the free/busy client behaviour needed by the service."""

    async def get_free_busy(
        self,
        calendar_ids: List[str],
        time_min: DateTime,
        time_max: DateTime,
        timezone: str,
    ) -> FreeBusyResponse:
        """Return busy intervals per calendar plus the evaluated horizon."""


class RoomBookingService:
    """
    Orchestrates request validation, busy-time retrieval and the availability check.
    """

    def __init__(
        self,
        calendar_client: FreeBusyClientProtocol,
        directory: RoomDirectory,
        engine: AvailabilityEngine,
        min_event_minutes: int = MIN_EVENT_MINUTES,
    ) -> None:
        self._calendar_client = calendar_client
        self._directory = directory
        self._engine = engine
        self._min_event_minutes = min_event_minutes

    @property
    def directory(self) -> RoomDirectory:
        return self._directory

    @staticmethod
    def query_horizon(request: BookingRequest) -> Tuple[DateTime, DateTime]:
        """Return the range to query: the whole day(s) the request touches."""
        return request.start.start_of("day"), request.end.end_of("day")

    async def fetch_busy_intervals(
        self,
        *,
        calendar_id: str,
        time_min: DateTime,
        time_max: DateTime,
        timezone: str,
    ) -> Tuple[FreeBusyResponse, Optional[List[TimeInterval]]]:
        """
        Fetch the free/busy answer and the busy list of a single calendar.

        The busy list is None when the source could not read the calendar.
        """
        response = await self._calendar_client.get_free_busy(
            calendar_ids=[calendar_id],
            time_min=time_min,
            time_max=time_max,
            timezone=timezone,
        )
        busy = response.busy_for(calendar_id)

        if busy is None:
            reasons = response.errors.get(calendar_id, ["notReturned"])
            logger.warning("No busy data for calendar %s: %s", calendar_id, ", ".join(reasons))
            return response, None

        logger.debug(
            "Calendar %s has %d busy interval(s) between %s and %s",
            calendar_id,
            len(busy),
            response.time_min,
            response.time_max,
        )
        return response, busy

    async def free_gaps(
        self,
        *,
        calendar_id: str,
        day: DateTime,
        timezone: str,
    ) -> List[FreeGap]:
        """Compute the free gaps of one calendar over a whole day."""
        response, busy = await self.fetch_busy_intervals(
            calendar_id=calendar_id,
            time_min=day.start_of("day"),
            time_max=day.end_of("day"),
            timezone=timezone,
        )
        if busy is None:
            return []
        return self._engine.compute_free_gaps(response.time_min, response.time_max, busy)

    async def check_request(
        self,
        request: BookingRequest,
        *,
        timezone: str,
        now: DateTime,
    ) -> AvailabilityResult:
        """
        Validate the request and check it against the room's busy intervals.

        A calendar the source could not read counts as busy.

        Raises:
            BookingValidationError: If the request breaks a booking rule
            CalendarAPIError: If free/busy data cannot be fetched
        """
        request.validate(now, min_event_minutes=self._min_event_minutes)

        time_min, time_max = self.query_horizon(request)
        response, busy = await self.fetch_busy_intervals(
            calendar_id=request.calendar_id,
            time_min=time_min,
            time_max=time_max,
            timezone=timezone,
        )

        if busy is None:
            result = AvailabilityResult.UNAVAILABLE
        else:
            result = self._engine.check_availability(
                response.time_min,
                response.time_max,
                busy,
                request.to_window(),
            )

        room_name = self._directory.name_matching_id(request.calendar_id) or request.calendar_id
        logger.info("Room %s is %s for %s", room_name, result.value, request.to_window())
        return result

    async def ensure_available(
        self,
        request: BookingRequest,
        *,
        timezone: str,
        now: DateTime,
    ) -> None:
        """
        Like ``check_request`` but raise when the room is busy.

        Raises:
            RoomUnavailableError: If the window does not fit a free gap
        """
        result = await self.check_request(request, timezone=timezone, now=now)
        if not result.is_available:
            raise RoomUnavailableError(ROOM_BUSY_MESSAGE)
