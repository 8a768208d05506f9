"""
Mock free/busy client for running without Google credentials.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List

import pendulum
from pendulum import DateTime

from ..domain.models import FreeBusyResponse, TimeInterval

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_freebusy_data.json"


class MockCalendarClient:
    """
    Mock client that answers free/busy queries from a JSON file.

    Each entry carries ``calendarId``, ``start`` and ``end``. Entries are
    returned in file order, the same way the real endpoint does not promise
    any particular ordering.
    """

    def __init__(self, data_file: Path | None = None):
        self.data_file = data_file or DEFAULT_DATA_FILE
        self.busy_entries = self._load_busy_entries()

    def _load_busy_entries(self) -> List[dict]:
        """Load mock busy entries from the JSON file."""
        if not self.data_file.exists():
            logger.warning("Mock data file %s not found, using empty calendars", self.data_file)
            return []

        with open(self.data_file, "r", encoding="utf-8") as f:
            return json.load(f)

    async def get_free_busy(
        self,
        calendar_ids: List[str],
        time_min: DateTime,
        time_max: DateTime,
        timezone: str
    ) -> FreeBusyResponse:
        """
        Return busy intervals overlapping the requested horizon.

        The reported horizon is the requested one.
        """
        calendars: Dict[str, List[TimeInterval]] = {}

        for calendar_id in calendar_ids:
            busy: List[TimeInterval] = []

            for entry in self.busy_entries:
                if entry.get("calendarId") != calendar_id:
                    continue

                try:
                    start = pendulum.parse(entry["start"], tz=timezone)
                    end = pendulum.parse(entry["end"], tz=timezone)

                    if start < time_max and end > time_min:
                        busy.append(TimeInterval(start=start, end=end))

                except (KeyError, ValueError) as e:
                    logger.warning("Skipping invalid mock entry %s: %s", entry, e)
                    continue

            calendars[calendar_id] = busy

        return FreeBusyResponse(time_min=time_min, time_max=time_max, calendars=calendars)
