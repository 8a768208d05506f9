"""
Google Calendar API client for fetching free/busy data.
"""

import asyncio
import logging
from typing import Any, Dict, List

import pendulum
import requests
from pendulum import DateTime

from ..config import GOOGLE_CALENDAR_API_URL
from ..domain.exceptions import CalendarAPIError
from ..domain.models import FreeBusyResponse, TimeInterval

logger = logging.getLogger(__name__)


class GoogleCalendarClient:
    """
    Client for Google Calendar free/busy queries.

    Uses the /freeBusy endpoint, which reports busy periods per calendar
    together with the horizon it actually evaluated.
    """

    def __init__(self, access_token: str, api_url: str = GOOGLE_CALENDAR_API_URL):
        """
        Initialize the Calendar API client.

        Args:
            access_token: OAuth bearer token with calendar read access
            api_url: Base URL of the Calendar API
        """
        self.api_url = api_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json"
        }

    async def get_free_busy(
        self,
        calendar_ids: List[str],
        time_min: DateTime,
        time_max: DateTime,
        timezone: str
    ) -> FreeBusyResponse:
        """
        Get busy intervals for the given calendars.

        The HTTP call runs in a worker thread so the event loop stays free.

        Raises:
            CalendarAPIError: If the API call fails or the payload is malformed
        """
        data = await asyncio.to_thread(
            self._post_free_busy, calendar_ids, time_min, time_max, timezone
        )
        return self._parse_free_busy_response(data, timezone)

    def _post_free_busy(
        self,
        calendar_ids: List[str],
        time_min: DateTime,
        time_max: DateTime,
        timezone: str
    ) -> Dict[str, Any]:
        url = f"{self.api_url}/freeBusy"

        payload = {
            "timeMin": time_min.to_iso8601_string(),
            "timeMax": time_max.to_iso8601_string(),
            "timeZone": timezone,
            "items": [{"id": calendar_id} for calendar_id in calendar_ids]
        }

        logger.debug("Querying free/busy for %s from %s to %s", calendar_ids, time_min, time_max)

        try:
            response = requests.post(
                url,
                headers=self.headers,
                json=payload,
                timeout=30
            )
            response.raise_for_status()
            data = response.json() if response.content else None

        except requests.exceptions.RequestException as e:
            raise CalendarAPIError(f"Failed to fetch free/busy data: {e}") from e
        except ValueError as e:
            raise CalendarAPIError(f"Free/busy response is not valid JSON: {e}") from e

        if not data:
            raise CalendarAPIError("Server responded with empty response")

        return data

    def _parse_free_busy_response(
        self,
        response_data: Dict[str, Any],
        timezone: str
    ) -> FreeBusyResponse:
        """
        Parse the freeBusy API response into our domain model.

        Response format:
        {
            "timeMin": "2024-11-25T00:00:00.000Z",
            "timeMax": "2024-11-25T23:59:59.000Z",
            "calendars": {
                "room@resource.calendar.google.com": {
                    "busy": [{"start": "...", "end": "..."}],
                    "errors": [{"domain": "global", "reason": "notFound"}]
                }
            }
        }
        """
        try:
            time_min = self._parse_datetime(response_data["timeMin"], timezone)
            time_max = self._parse_datetime(response_data["timeMax"], timezone)
        except (KeyError, TypeError, ValueError) as e:
            raise CalendarAPIError(f"Free/busy response has no valid horizon: {e}") from e

        calendars: Dict[str, List[TimeInterval]] = {}
        errors: Dict[str, List[str]] = {}

        try:
            calendar_items = list(response_data.get("calendars", {}).items())
        except AttributeError as e:
            raise CalendarAPIError(f"Free/busy response has malformed calendars: {e}") from e

        for calendar_id, calendar_data in calendar_items:
            try:
                reasons = [error.get("reason", "unknown") for error in calendar_data.get("errors", [])]
                busy_items = calendar_data.get("busy")
            except (AttributeError, TypeError) as e:
                raise CalendarAPIError(f"Malformed free/busy data for {calendar_id}: {e}") from e

            if reasons:
                logger.warning("Calendar %s reported errors: %s", calendar_id, ", ".join(reasons))
                errors[calendar_id] = reasons
                continue

            if busy_items is None:
                logger.warning("Calendar %s has no busy list", calendar_id)
                errors[calendar_id] = ["missingBusy"]
                continue

            if not isinstance(busy_items, list):
                raise CalendarAPIError(f"Busy data for {calendar_id} is not a list")

            busy_ranges: List[TimeInterval] = []

            for item in busy_items:
                try:
                    start = self._parse_datetime(item["start"], timezone)
                    end = self._parse_datetime(item["end"], timezone)
                    busy_ranges.append(TimeInterval(start=start, end=end))

                except (AttributeError, KeyError, TypeError, ValueError) as e:
                    raise CalendarAPIError(
                        f"Could not parse busy entry for {calendar_id}: {e}"
                    ) from e

            calendars[calendar_id] = busy_ranges

        return FreeBusyResponse(
            time_min=time_min,
            time_max=time_max,
            calendars=calendars,
            errors=errors,
        )

    def _parse_datetime(self, datetime_str: str, timezone: str) -> DateTime:
        """
        Parse an RFC 3339 string to a pendulum DateTime in the given timezone.
        """
        if not isinstance(datetime_str, str):
            raise ValueError(f"Expected a datetime string, got {datetime_str!r}")

        dt = pendulum.parse(datetime_str)

        if isinstance(dt, DateTime):
            return dt.in_timezone(timezone)

        raise ValueError(f"Could not parse datetime: {datetime_str}")
