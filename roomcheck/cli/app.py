"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.google_calendar_client import GoogleCalendarClient
from ..adapters.mock_calendar_client import MockCalendarClient
from ..config import AppConfig, get_default_config_path
from ..domain.availability import AvailabilityEngine
from ..domain.booking import BookingRequest
from ..domain.exceptions import RoomcheckError
from ..services.room_booking import ROOM_BUSY_MESSAGE, RoomBookingService

app = typer.Typer(
    name="roomcheck",
    help="Check meeting room availability using Google Calendar free/busy data",
    add_completion=False
)

console = Console()

DATE_FORMAT = "YYYY-MM-DD"
DATETIME_FORMAT = "YYYY-MM-DD HH:mm"

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use mock free/busy data instead of the Calendar API.")]
MockDataOption = Annotated[Optional[Path], typer.Option("--mock-data", help="JSON file with mock busy entries.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def _setup_logging(level: str) -> None:
    package_logger = logging.getLogger("roomcheck")
    package_logger.handlers.clear()
    package_logger.addHandler(RichHandler(console=console, show_path=False, log_time_format="[%X]"))
    package_logger.setLevel(level)


def _load_config(config_file: Optional[Path], verbose: bool = False) -> AppConfig:
    config = AppConfig.load_from_yaml(config_file or get_default_config_path())
    _setup_logging("DEBUG" if verbose else config.log_level)
    return config


def _parse_datetime(value: str, tz: str) -> DateTime:
    """Parse 'YYYY-MM-DD HH:mm' or a bare 'YYYY-MM-DD' (midnight)."""
    for fmt in (DATETIME_FORMAT, DATE_FORMAT):
        try:
            return pendulum.from_format(value, fmt, tz=tz)
        except ValueError:
            continue
    raise ValueError(f"Could not parse '{value}', expected {DATETIME_FORMAT} or {DATE_FORMAT}")


def _build_service(
    config: AppConfig,
    mock: bool,
    mock_data: Optional[Path]
) -> RoomBookingService:
    if mock:
        console.print("[yellow]⚠  Mock mode: using test data[/yellow]")
        client = MockCalendarClient(data_file=mock_data)
    else:
        if not config.access_token:
            raise RoomcheckError("No access_token configured. Add one to config.yaml or use --mock.")
        client = GoogleCalendarClient(access_token=config.access_token, api_url=config.api_url)

    return RoomBookingService(
        calendar_client=client,
        directory=config.room_directory(),
        engine=AvailabilityEngine(sort_busy=config.availability.sort_busy_intervals),
        min_event_minutes=config.defaults.min_event_minutes,
    )


@app.command()
def check(
    room: Annotated[str, typer.Argument(help="Room name or calendar id")],
    start: Annotated[str, typer.Option("--start", "-s", help="Start (YYYY-MM-DD HH:mm)")],
    end: Annotated[Optional[str], typer.Option("--end", "-e", help="End (YYYY-MM-DD HH:mm)")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Booking duration in minutes")] = None,
    all_day: Annotated[bool, typer.Option("--all-day", help="Book the whole day of --start.")] = False,
    summary: Annotated[str, typer.Option("--summary", help="Event summary (min. 5 characters)")] = "Room booking",
    config_file: ConfigOption = None,
    mock: MockOption = False,
    mock_data: MockDataOption = None,
    verbose: VerboseOption = False,
):
    """
    Check whether a room is free for the requested time range.

    Examples:

        roomcheck check aquarium --start "2024-11-25 10:00" --duration 30
        roomcheck check aquarium --start "2024-11-25 10:00" --end "2024-11-25 11:30"
        roomcheck check aquarium --start 2024-11-25 --all-day --mock
    """
    try:
        config = _load_config(config_file, verbose)
        tz = config.timezone
        service = _build_service(config, mock, mock_data)
        selected = service.directory.resolve(room)

        start_dt = _parse_datetime(start, tz)
        if all_day:
            request = BookingRequest.all_day_for(summary, selected.calendar_id, start_dt)
        elif end:
            request = BookingRequest(
                summary=summary,
                calendar_id=selected.calendar_id,
                start=start_dt,
                end=_parse_datetime(end, tz),
            )
        else:
            request = BookingRequest.starting_at(
                summary,
                selected.calendar_id,
                start_dt,
                duration if duration is not None else config.defaults.duration_minutes,
            )

        console.print(f"[bold cyan]Room:[/bold cyan] {selected.display_name()} ({selected.calendar_id})")
        console.print(
            f"[bold cyan]Time:[/bold cyan] {request.start.format(DATETIME_FORMAT)} - "
            f"{request.end.format(DATETIME_FORMAT)}"
        )

        result = asyncio.run(
            service.check_request(request, timezone=tz, now=pendulum.now(tz))
        )

    except (RoomcheckError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not result.is_available:
        console.print(f"[bold red]✗ {ROOM_BUSY_MESSAGE}[/bold red]")
        raise typer.Exit(1)

    console.print("[bold green]✓ The room is available[/bold green]")


@app.command()
def gaps(
    room: Annotated[str, typer.Argument(help="Room name or calendar id")],
    date: Annotated[Optional[str], typer.Option("--date", help="Day to inspect (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    mock_data: MockDataOption = None,
    verbose: VerboseOption = False,
):
    """
    Show the free gaps of a room for one day.
    """
    try:
        config = _load_config(config_file, verbose)
        tz = config.timezone
        service = _build_service(config, mock, mock_data)
        selected = service.directory.resolve(room)

        day = pendulum.from_format(date, DATE_FORMAT, tz=tz) if date else pendulum.now(tz)

        free_gaps = asyncio.run(
            service.free_gaps(calendar_id=selected.calendar_id, day=day, timezone=tz)
        )

    except (RoomcheckError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not free_gaps:
        console.print(f"[yellow]⚠ {selected.display_name()} has no free time on {day.format(DATE_FORMAT)}.[/yellow]")
        return

    table = Table(
        title=f"Free gaps: {selected.display_name()} ({day.format(DATE_FORMAT)})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("From", style="bold yellow")
    table.add_column("To", style="bold yellow")
    table.add_column("Minutes", justify="right", style="dim")

    for gap in free_gaps:
        table.add_row(
            gap.start.format("HH:mm"),
            gap.end.format("HH:mm"),
            str(gap.duration_minutes())
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def list_rooms(
    config_file: ConfigOption = None,
):
    """
    List all configured rooms.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    rooms = config.room_directory().rooms()
    if not rooms:
        console.print("[yellow]No rooms defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured rooms",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name (Alias)", style="bold yellow")
    table.add_column("Calendar ID", style="dim")

    for room in rooms:
        table.add_row(room.name, room.calendar_id)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]roomcheck[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
