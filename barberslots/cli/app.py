"""
Main CLI application using Typer.
"""

import logging
import sys
import time as time_module
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..adapters.clock import SystemClock
from ..adapters.memory_book import InMemoryAppointmentBook
from ..config import AppConfig, load_config
from ..domain.exceptions import BookingError
from ..domain.models import BookingRequest, ServiceType, parse_day, parse_time_of_day
from ..services.booking import BookingService

app = typer.Typer(
    name="barberslots",
    help="Check free slots and booking rules for the barbershop",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
DataOption = Annotated[
    Optional[Path],
    typer.Option("--data", help="JSON file with existing appointments"),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def setup_logging(verbose: bool) -> None:
    """Configures logging to stderr with local time."""
    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s]: %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    formatter.converter = time_module.localtime
    handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[handler], force=True)


def _build_service(config: AppConfig, data_file: Optional[Path]) -> BookingService:
    """Wire the booking service to an in-memory book and the system clock."""
    data_path = data_file or config.data_file
    if data_path is not None:
        book = InMemoryAppointmentBook.load_from_json(data_path)
    else:
        book = InMemoryAppointmentBook()

    return BookingService(
        appointment_book=book,
        clock=SystemClock(config.timezone),
        business_hours=config.to_business_hours(),
        booking_horizon_months=config.booking_horizon_months,
        cancellation_notice_hours=config.cancellation_notice_hours,
    )


def _open_service(config_file: Optional[Path], data_file: Optional[Path], verbose: bool) -> BookingService:
    setup_logging(verbose)
    try:
        config = load_config(config_file)
        return _build_service(config, data_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _parse_inputs(day: str, service: str):
    try:
        return parse_day(day), ServiceType.parse(service)
    except ValueError:
        console.print(f"[bold red]Error:[/bold red] Invalid date '{day}', expected YYYY-MM-DD")
        raise typer.Exit(1)
    except BookingError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        raise typer.Exit(1)


@app.command()
def slots(
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    service: Annotated[str, typer.Argument(help="HAIR, BEARD or HAIR_AND_BEARD")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    verbose: VerboseOption = False,
):
    """
    List available start times for a date and service.

    Examples:

        barberslots slots 2024-06-10 HAIR
        barberslots slots 2024-06-10 hair_and_beard --data appointments.json
    """
    service_obj = _open_service(config_file, data_file, verbose)
    target_day, service_type = _parse_inputs(day, service)

    available = service_obj.available_slots(target_day, service_type)

    if not available:
        console.print(f"[yellow]No free slots for {service_type.value} on {target_day.isoformat()}.[/yellow]")
        return

    table = Table(
        title=f"{service_type.value} on {target_day.isoformat()}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Start", style="bold yellow")
    table.add_column("Duration", style="dim")

    for slot in available:
        table.add_row(slot.strftime("%H:%M"), f"{service_type.duration_minutes} min")

    console.print(table)


@app.command()
def book(
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    start: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    service: Annotated[str, typer.Argument(help="HAIR, BEARD or HAIR_AND_BEARD")],
    user: Annotated[str, typer.Option("--user", "-u", help="Who is booking")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    verbose: VerboseOption = False,
):
    """
    Check a booking against the existing appointments and the shop rules.
    """
    service_obj = _open_service(config_file, data_file, verbose)
    target_day, service_type = _parse_inputs(day, service)

    try:
        start_time = parse_time_of_day(start)
    except ValueError:
        console.print(f"[bold red]Error:[/bold red] Invalid time '{start}', expected HH:MM")
        raise typer.Exit(1)

    request = BookingRequest(
        date=target_day, time=start_time, service_type=service_type, requester_id=user
    )

    try:
        appointment = service_obj.book(request)
    except BookingError as e:
        console.print(f"[bold red]Rejected ({e.reason.value}):[/bold red] {e.message}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Booked:[/green] {appointment.format_display()}")


@app.command()
def cancel(
    appointment_id: Annotated[int, typer.Argument(help="Appointment id")],
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="Cancel as this owner")] = None,
    admin: Annotated[bool, typer.Option("--admin", help="Cancel as shop admin")] = False,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    verbose: VerboseOption = False,
):
    """
    Check whether an appointment may be cancelled.
    """
    if admin == (user is not None):
        console.print("[red]Error: pass exactly one of --user or --admin.[/red]")
        raise typer.Exit(1)

    service_obj = _open_service(config_file, data_file, verbose)

    try:
        if admin:
            appointment = service_obj.cancel_by_admin(appointment_id)
        else:
            appointment = service_obj.cancel_by_user(appointment_id, user)
    except BookingError as e:
        console.print(f"[bold red]Rejected ({e.reason.value}):[/bold red] {e.message}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Canceled:[/green] {appointment.format_display()}")


@app.command()
def appointments(
    day: Annotated[Optional[str], typer.Option("--date", "-d", help="Date (YYYY-MM-DD)")] = None,
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="Owner")] = None,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
    verbose: VerboseOption = False,
):
    """
    List appointments for a date or for a user.
    """
    if (day is None) == (user is None):
        console.print("[red]Error: pass exactly one of --date or --user.[/red]")
        raise typer.Exit(1)

    service_obj = _open_service(config_file, data_file, verbose)

    if user is not None:
        found = service_obj.appointments_for_user(user)
        title = f"Appointments of {user}"
    else:
        try:
            target_day = parse_day(day)
        except ValueError:
            console.print(f"[bold red]Error:[/bold red] Invalid date '{day}', expected YYYY-MM-DD")
            raise typer.Exit(1)
        found = service_obj.appointments_for_date(target_day)
        title = f"Appointments on {target_day.isoformat()}"

    if not found:
        console.print("[yellow]No appointments found.[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Start", style="bold yellow")
    table.add_column("Service")
    table.add_column("Owner")

    for appointment in found:
        table.add_row(
            str(appointment.id),
            appointment.date.isoformat(),
            appointment.time.strftime("%H:%M"),
            appointment.service_type.value,
            appointment.owner_id,
        )

    console.print(table)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]barberslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
