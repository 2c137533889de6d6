"""
Main CLI application using Typer.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.database import create_engine, create_session_factory, init_db
from ..adapters.timeslot_repository import TimeSlotRepository
from ..config import AppConfig, load_config
from ..domain.exceptions import TimeSlotError
from ..domain.models import SlotFilter, SlotType, TimeSlot
from ..services.booking_service import TimeSlotService
from ..services.seeding import seed_database

app = typer.Typer(
    name="slotbooking",
    help="Manage and book weekly, flexible and day-only time slots",
    add_completion=False
)

console = Console()

T = TypeVar("T")

def _config_option():
    return typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _configure_logging(config.log_level)
    return config


@asynccontextmanager
async def _open_service(config: AppConfig):
    engine = create_engine(config.database_url, echo=config.echo_sql)
    try:
        await init_db(engine)
        repository = TimeSlotRepository(create_session_factory(engine))
        yield TimeSlotService(repository), repository
    finally:
        await engine.dispose()


def _run(
    config: AppConfig,
    action: Callable[[TimeSlotService, TimeSlotRepository], Awaitable[T]],
) -> T:
    """Open the configured store, run ``action`` and map domain errors to exit code 1."""

    async def runner() -> T:
        async with _open_service(config) as (service, repository):
            return await action(service, repository)

    try:
        return asyncio.run(runner())
    except TimeSlotError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _print_slots(slots, title: str) -> None:
    if not slots:
        console.print("[yellow]No time slots found.[/yellow]")
        return

    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Type")
    table.add_column("When")
    table.add_column("Status")

    for slot in slots:
        status = "[red]booked[/red]" if slot.is_booked else "[green]available[/green]"
        table.add_row(str(slot.id), slot.type.value, slot.format_display(), status)

    console.print()
    console.print(table)
    console.print()


def _print_slot(slot: TimeSlot, headline: str) -> None:
    state = "booked" if slot.is_booked else "available"
    console.print(f"[green]✓ {headline}[/green] #{slot.id}: {slot.format_display()} ({state})")


@app.command("init-db")
def init_db_command(config_file: Optional[Path] = _config_option()):
    """
    Create the time slot table if it does not exist.
    """
    async def action(service, repository):
        return await repository.count()

    count = _run(_load_config(config_file), action)
    console.print(f"[green]✓ Database ready[/green] ({count} slots)")


@app.command()
def seed(
    config_file: Optional[Path] = _config_option(),
    keep: bool = typer.Option(
        False,
        "--keep",
        help="Keep existing slots instead of clearing the table first"
    )
):
    """
    Fill the database with demonstration slots.

    Examples:
        slotbooking seed
        slotbooking seed --keep
    """
    config = _load_config(config_file)

    async def action(service, repository):
        return await seed_database(service, repository, config=config.seed, clear=not keep)

    summary = _run(config, action)

    if summary.removed:
        console.print(f"Removed {summary.removed} existing slot(s)")
    console.print(f"[green]✓ Created {summary.weekly} weekly slots[/green]")
    console.print(f"[green]✓ Created {summary.flexible} flexible slots[/green]")
    console.print(f"[green]✓ Created {summary.day_only} day-only slots[/green]")


@app.command("list")
def list_slots(
    config_file: Optional[Path] = _config_option(),
    slot_type: Optional[SlotType] = typer.Option(
        None,
        "--type", "-t",
        case_sensitive=False,
        help="Only slots of this type"
    ),
    available: bool = typer.Option(False, "--available", help="Only available slots"),
    booked: bool = typer.Option(False, "--booked", help="Only booked slots"),
    day: Optional[int] = typer.Option(
        None,
        "--day", "-d",
        help="Only weekly slots on this day (0 = Sunday, 6 = Saturday)"
    ),
    date: Optional[str] = typer.Option(None, "--date", help="Only slots on this date (YYYY-MM-DD)")
):
    """
    List time slots ordered by date and start time.

    Examples:
        slotbooking list
        slotbooking list --available --type weekly
        slotbooking list --date 2024-01-15
    """
    if available and booked:
        console.print("[bold red]Error:[/bold red] --available and --booked are mutually exclusive")
        raise typer.Exit(1)

    slot_filter = SlotFilter(type=slot_type, day_of_week=day, date=date)

    async def action(service, repository):
        if available:
            return await service.list_available(slot_filter)
        if booked:
            return await service.list_booked(slot_filter)
        return await service.list_all(slot_filter)

    slots = _run(_load_config(config_file), action)

    title = "Available slots" if available else "Booked slots" if booked else "Time slots"
    _print_slots(slots, title)


@app.command()
def show(
    slot_id: int = typer.Argument(..., help="Slot ID"),
    config_file: Optional[Path] = _config_option()
):
    """
    Show a single time slot.
    """
    async def action(service, repository):
        return await service.get_by_id(slot_id)

    slot = _run(_load_config(config_file), action)
    _print_slots([slot], f"Slot #{slot.id}")


@app.command()
def add_weekly(
    day: int = typer.Argument(..., help="Day of week (0 = Sunday, 6 = Saturday)"),
    start: str = typer.Argument(..., help="Start time (HH:MM)"),
    end: str = typer.Argument(..., help="End time (HH:MM)"),
    config_file: Optional[Path] = _config_option()
):
    """
    Create a weekly recurring slot.
    """
    async def action(service, repository):
        return await service.create_weekly(day, start, end)

    _print_slot(_run(_load_config(config_file), action), "Created weekly slot")


@app.command()
def add_flexible(
    date: str = typer.Argument(..., help="Date (YYYY-MM-DD)"),
    start: str = typer.Argument(..., help="Start time (HH:MM)"),
    end: str = typer.Argument(..., help="End time (HH:MM)"),
    config_file: Optional[Path] = _config_option()
):
    """
    Create a one-off slot on a date.
    """
    async def action(service, repository):
        return await service.create_flexible(date, start, end)

    _print_slot(_run(_load_config(config_file), action), "Created flexible slot")


@app.command()
def add_day(
    date: str = typer.Argument(..., help="Date (YYYY-MM-DD)"),
    config_file: Optional[Path] = _config_option()
):
    """
    Create a whole-day slot.
    """
    async def action(service, repository):
        return await service.create_day_only(date)

    _print_slot(_run(_load_config(config_file), action), "Created day-only slot")


@app.command()
def book(
    slot_id: int = typer.Argument(..., help="Slot ID"),
    config_file: Optional[Path] = _config_option()
):
    """
    Book an available slot.
    """
    async def action(service, repository):
        return await service.book(slot_id)

    result = _run(_load_config(config_file), action)
    _print_slot(result.slot, result.message)


@app.command()
def cancel(
    slot_id: int = typer.Argument(..., help="Slot ID"),
    config_file: Optional[Path] = _config_option()
):
    """
    Cancel the booking of a slot.
    """
    async def action(service, repository):
        return await service.cancel(slot_id)

    result = _run(_load_config(config_file), action)
    _print_slot(result.slot, result.message)


@app.command()
def delete(
    slot_id: int = typer.Argument(..., help="Slot ID"),
    config_file: Optional[Path] = _config_option()
):
    """
    Delete a slot permanently, booked or not.
    """
    async def action(service, repository):
        await service.delete(slot_id)

    _run(_load_config(config_file), action)
    console.print(f"[green]✓ Deleted slot #{slot_id}[/green]")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotbooking[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
