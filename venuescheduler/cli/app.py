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
from rich.markup import escape
from rich.table import Table

from ..adapters.json_booking_store import JsonBookingStore
from ..config import AppConfig, get_default_config_path
from ..domain.booking_window import get_booking_window, is_within_business_hours
from ..domain.conflict_checker import ConflictChecker
from ..domain.exceptions import ConfigurationError, SchedulingError
from ..services.booking_scheduler import BookingSchedulerService

app = typer.Typer(
    name="venuescheduler",
    help="Check booking conflicts and find open slots for a venue",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
DurationOption = Annotated[
    Optional[int],
    typer.Option("--duration", "-d", help="Booking duration in minutes")
]


def _load_config(config_file: Optional[Path], verbose: bool = False) -> AppConfig:
    """Load the config file, falling back to defaults when none exists."""
    config_path = config_file or get_default_config_path()

    if config_file is None and not config_path.exists():
        config = AppConfig()
    else:
        config = AppConfig.load_from_yaml(config_path)

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, config.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return config


def _build_service(config: AppConfig) -> BookingSchedulerService:
    store = JsonBookingStore(config.bookings_file, timezone=config.timezone)
    defaults = config.scheduling
    return BookingSchedulerService(
        booking_source=store,
        checker=ConflictChecker(defaults.buffer_policy()),
        business_hours=defaults.business_hours(),
        suggestion_count=defaults.suggestion_count,
        default_slot_duration=defaults.slot_duration_minutes,
    )


def _parse_moment(date_str: str, time_str: str, tz: str) -> DateTime:
    """Combine YYYY-MM-DD and HH:MM into a timestamp, exiting on bad input."""
    try:
        return pendulum.from_format(f"{date_str} {time_str}", "YYYY-MM-DD HH:mm", tz=tz)
    except ValueError as e:
        console.print(f"[red]Could not parse date/time '{date_str} {time_str}': {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _check_resource(config: AppConfig, resource: str) -> str:
    if not config.is_known_resource(resource):
        raise ConfigurationError(
            f"Unknown resource '{resource}'. Configured: {', '.join(config.resources)}"
        )
    return resource.upper()


@app.command()
def check(
    resource: Annotated[str, typer.Argument(help="Resource (venue area), e.g. IGRAONICA")],
    date: Annotated[str, typer.Argument(help="Booking date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Booking time (HH:MM)")],
    duration: DurationOption = None,
    exclude: Annotated[Optional[str], typer.Option("--exclude", help="Booking ID being edited")] = None,
    config_file: ConfigOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    Check whether a booking time conflicts with existing bookings.

    Exits with status 1 when there is a conflict.

    Examples:

        venuescheduler check IGRAONICA 2025-12-06 09:30

        venuescheduler check IGRAONICA 2025-12-06 11:00 --exclude b1
    """
    try:
        config = _load_config(config_file, verbose)
        resource = _check_resource(config, resource)
        start = _parse_moment(date, time, config.timezone)
        service = _build_service(config)
        minutes = config.scheduling.slot_duration_minutes if duration is None else duration

        result = asyncio.run(
            service.check_booking(
                resource=resource,
                start_time=start,
                duration_minutes=minutes,
                exclude_booking_id=exclude,
            )
        )
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    hours = config.scheduling
    if not is_within_business_hours(start, hours.start_hour, hours.end_hour):
        console.print(
            f"[yellow]⚠ {start.format('HH:mm')} is outside business hours "
            f"({hours.start_hour}:00 - {hours.end_hour}:00)[/yellow]"
        )

    if not result.has_conflict:
        console.print(f"[bold green]✓ {start.format('DD.MM.YYYY HH:mm')} is available.[/bold green]")
        return

    console.print(f"[bold red]✗ {result.conflict_type.value}:[/bold red] {result.message}")
    if result.suggested_times:
        console.print("\nSuggested alternatives:")
        for suggestion in result.suggested_times:
            console.print(f"  {suggestion.format('DD.MM.YYYY HH:mm')}")
    else:
        console.print("[yellow]No alternative times found.[/yellow]")
    raise typer.Exit(1)


@app.command()
def slots(
    resource: Annotated[str, typer.Argument(help="Resource (venue area), e.g. IGRAONICA")],
    date: Annotated[str, typer.Argument(help="Day to scan (YYYY-MM-DD)")],
    duration: DurationOption = None,
    config_file: ConfigOption = None,
):
    """
    List every open slot for a resource on a day.
    """
    try:
        config = _load_config(config_file)
        resource = _check_resource(config, resource)
        day = _parse_moment(date, "00:00", config.timezone)
        service = _build_service(config)
        open_slots = asyncio.run(
            service.available_slots(resource=resource, day=day, slot_duration_minutes=duration)
        )
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if not open_slots:
        console.print(f"[yellow]⚠ No open slots for {resource} on {day.format('DD.MM.YYYY')}.[/yellow]")
        return

    minutes = config.scheduling.slot_duration_minutes if duration is None else duration
    table = Table(
        title=f"Open slots - {resource} {day.format('DD.MM.YYYY')}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Start", style="bold yellow")
    table.add_column("End", style="dim")

    for slot in open_slots:
        table.add_row(slot.format("HH:mm"), slot.add(minutes=minutes).format("HH:mm"))

    console.print()
    console.print(table)
    console.print()


@app.command()
def window(
    date: Annotated[str, typer.Argument(help="Booking date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Booking time (HH:MM)")],
    duration: DurationOption = None,
    config_file: ConfigOption = None,
):
    """
    Show a booking's full footprint including the buffer on both sides.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    start = _parse_moment(date, time, config.timezone)
    minutes = config.scheduling.slot_duration_minutes if duration is None else duration
    booking_window = get_booking_window(start, minutes, config.scheduling.buffer_policy())

    console.print(f"Booking: {booking_window.booking_start.format('HH:mm')} - {booking_window.booking_end.format('HH:mm')}")
    console.print(f"Window:  {booking_window.window_start.format('HH:mm')} - {booking_window.window_end.format('HH:mm')}")
    console.print(f"Total:   {booking_window.total_duration} min")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]venuescheduler[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
