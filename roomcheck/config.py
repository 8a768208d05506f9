"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.booking import DEFAULT_EVENT_MINUTES, MIN_EVENT_MINUTES
from .domain.exceptions import UnknownRoomError

GOOGLE_CALENDAR_API_URL = "https://www.googleapis.com/calendar/v3"


class DefaultsConfig(BaseModel):
    """Default settings for new bookings."""
    duration_minutes: int = DEFAULT_EVENT_MINUTES
    min_event_minutes: int = MIN_EVENT_MINUTES

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure booking duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value

    @field_validator("min_event_minutes")
    @classmethod
    def validate_min_event(cls, value: int) -> int:
        """Ensure the minimum event duration is not negative."""
        if value < 0:
            raise ValueError("min_event_minutes must not be negative")
        return value


class AvailabilityConfig(BaseModel):
    """Settings for the availability engine."""
    sort_busy_intervals: bool = False


class Room(BaseModel):
    """Meeting room configuration."""
    name: str  # Used as alias
    calendar_id: str

    def display_name(self) -> str:
        """Get display name."""
        return self.name


class RoomDirectory:
    """
    Read-only lookup of configured rooms.

    Built once from configuration and handed to whoever needs room lookups.
    """

    def __init__(self, rooms: List[Room]):
        self._rooms = tuple(rooms)

    def rooms(self) -> List[Room]:
        """Return all rooms in configuration order."""
        return list(self._rooms)

    def find_by_name(self, name: str) -> Room | None:
        """Find a room by its name (alias)."""
        for room in self._rooms:
            if room.name.lower() == name.lower():
                return room
        return None

    def find_by_calendar_id(self, calendar_id: str) -> Room | None:
        """Find a room by its calendar id."""
        for room in self._rooms:
            if room.calendar_id.lower() == calendar_id.lower():
                return room
        return None

    def name_matching_id(self, calendar_id: str) -> str | None:
        """Return the room name for a calendar id, or None if unknown."""
        room = self.find_by_calendar_id(calendar_id)
        return room.name if room else None

    def resolve(self, identifier: str) -> Room:
        """
        Resolve a room identifier (name or calendar id) to a room.

        Raises:
            UnknownRoomError: If the identifier matches no room
        """
        room = self.find_by_name(identifier) or self.find_by_calendar_id(identifier)
        if room:
            return room

        raise UnknownRoomError(
            f"Unknown room identifier: '{identifier}'. "
            f"Use a configured room name or calendar id."
        )


class AppConfig(BaseModel):
    """Application configuration."""
    api_url: str = GOOGLE_CALENDAR_API_URL
    access_token: str = ""
    timezone: str = "Europe/Warsaw"
    log_level: str = "WARNING"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    availability: AvailabilityConfig = Field(default_factory=AvailabilityConfig)
    rooms: List[Room] = Field(default_factory=list)

    @field_validator("rooms")
    @classmethod
    def validate_rooms(cls, value: List[Room]) -> List[Room]:
        """Ensure room names and calendar ids are unique."""
        seen_names: set[str] = set()
        seen_ids: set[str] = set()
        for room in value:
            name_key = room.name.lower()
            id_key = room.calendar_id.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate room name detected: {room.name}")
            if id_key in seen_ids:
                raise ValueError(f"Duplicate room calendar_id detected: {room.calendar_id}")
            seen_names.add(name_key)
            seen_ids.add(id_key)
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise the log level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def room_directory(self) -> RoomDirectory:
        """Build the read-only room lookup for this configuration."""
        return RoomDirectory(self.rooms)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
