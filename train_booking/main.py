"""
Main entry point for the train booking demo.

Commands:
- list: every train with its departure time, destination and seats remaining
- seats: the seat map of one train
- book: interactive loop to pick a train, a seat type and a seat

Booking falls back gracefully: an already booked seat prompts for another,
a sold-out seat type offers a seat of the other type, and a full train
offers the trains that still have seats.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from train_booking.exceptions import (
    ParseError,
    SeatAlreadyBookedError,
    SeatNotFoundError,
    SessionError,
    TrainFullError,
    TrainNotFoundError,
)
from train_booking.models.enums import RecordPolicy, SeatKind
from train_booking.models.seat import SeatModel
from train_booking.services.catalog import TrainCatalog
from train_booking.services.loader import load_catalog
from train_booking.services.train import Train
from train_booking.utils.config import configure_logging, get_config

# Initialize typer app and rich consoles
app = typer.Typer(help="Train Seat Booking - pick a train, pick a seat")
console = Console()
log_console = Console(stderr=True)

logger = logging.getLogger(__name__)

FILE_OPTION_HELP = "Departure records file (defaults to TRAIN_DATA_FILE)"


def print_section(title: str):
    """Print a formatted section header."""
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", box=box.DOUBLE))


def resolve_catalog(file: Optional[Path], strict: bool = False) -> TrainCatalog:
    """Load the catalog, reporting skipped records and strict-mode failures."""
    config = get_config()
    path = file or Path(config.train_data_file)
    policy = RecordPolicy.STRICT if strict else config.record_policy
    logger.info(f"Loading departures from {path} (policy: {policy.value})")

    try:
        catalog = load_catalog(path, policy)
    except ParseError as e:
        console.print(f"[red]❌ Invalid record in {path}: {e}[/red]")
        raise typer.Exit(1)

    for skipped in catalog.skipped:
        console.print(f"[yellow]⚠[/yellow]  Skipped line {skipped.line_number}: {skipped.reason}")

    return catalog


def create_train_table(catalog: TrainCatalog) -> Table:
    """Build the train selection table."""
    table = Table(title="🚆 Select a train route", box=box.ROUNDED)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Departure Time", style="white", justify="center")
    table.add_column("Destination", style="yellow")
    table.add_column("Seats Remaining", style="green", justify="right")

    for summary in catalog.summaries():
        remaining = "[red]Full[/red]" if summary.is_full else f"{summary.seats_remaining:,}"
        table.add_row(
            str(summary.position),
            f"{summary.departure_time:%H:%M}",
            summary.destination,
            remaining
        )

    return table


def format_seat(seat: SeatModel) -> str:
    if seat.available:
        return f"[green]{seat.seat_id}[/green]"
    return f"[red]{seat.seat_id} ✗[/red]"


def create_seat_map(train: Train) -> Table:
    """
    Build the seat map of a train.

    Each row reads ``window | window seat | aisle seat | aisle | window``.
    """
    title = f"Booking Train: {train.label}"
    table = Table(title=title, box=box.SIMPLE, min_width=max(40, len(title) + 4))
    table.add_column("", style="blue")
    table.add_column("Window", justify="center")
    table.add_column("Aisle", justify="center")
    table.add_column("", style="dim")
    table.add_column("", style="blue")

    for row in train.inventory.rows():
        cells = [format_seat(seat) for seat in row]
        while len(cells) < 2:
            cells.append("")
        table.add_row("▌", cells[0], cells[1], "┆", "▐")

    return table


def print_seats_remaining(total: int):
    console.print(
        Panel(f"[bold]Seats Remaining:[/bold] {total:,}", box=box.ROUNDED, expand=False)
    )


def offer_other_trains(catalog: TrainCatalog, train: Train):
    """Point the user at trains that can still take a booking."""
    alternatives = catalog.trains_with_free_seats(exclude=train)

    if not alternatives:
        console.print("[red]All trains are fully booked.[/red]")
        return

    trains = catalog.list_trains()
    console.print("[cyan]These trains still have seats:[/cyan]")
    for other in alternatives:
        position = trains.index(other) + 1
        console.print(f"  {position}. {other.label} ({other.seats_remaining():,} seats)")


def choose_seat(train: Train, kind: SeatKind) -> Optional[str]:
    """
    Pick a seat id of the requested kind.

    When that kind is sold out, offer the first available seat of the other
    kind. Returns None if the user declines the offer.
    """
    seat = train.inventory.first_available_of_kind(kind)

    if seat is not None:
        return Prompt.ask("Seat to book", default=seat.seat_id, console=console)

    fallback = train.inventory.first_available_of_kind(kind.opposite) or train.inventory.first_available()
    console.print(f"[yellow]⚠[/yellow]  No {kind.value} seats left on this train.")
    if Confirm.ask(
        f"Book {fallback.kind.value} seat {fallback.seat_id} instead?",
        default=True,
        console=console
    ):
        return fallback.seat_id
    return None


def book_seats(train: Train):
    """Seat-selection loop for one open booking session."""
    console.print(create_seat_map(train))

    while not train.is_full():
        choice = Prompt.ask(
            "Seat type: [bold]w[/bold]indow, [bold]a[/bold]isle or [bold]d[/bold]one",
            choices=["w", "a", "d"],
            default="d",
            console=console
        )
        if choice == "d":
            return

        kind = SeatKind.WINDOW if choice == "w" else SeatKind.AISLE
        seat_id = choose_seat(train, kind)
        if seat_id is None:
            continue

        try:
            seat = train.book_seat(seat_id)
        except SeatAlreadyBookedError as e:
            console.print(f"[red]❌ {e}[/red]")
            suggestion = train.inventory.first_available_of_kind(kind) or train.inventory.first_available()
            if suggestion is not None:
                console.print(f"[dim]  Seat {suggestion.seat_id} is still free.[/dim]")
            continue
        except SeatNotFoundError as e:
            console.print(f"[red]❌ {e}[/red]")
            continue

        console.print(
            f"[green]✓[/green] Booked seat {seat.seat_id} on {train.label} "
            f"({train.seats_remaining():,} seats remaining)"
        )
        console.print(create_seat_map(train))

    console.print("[yellow]This train is now fully booked.[/yellow]")


def select_train(catalog: TrainCatalog) -> Optional[Train]:
    """Ask for a train number; None means quit."""
    while True:
        choice = Prompt.ask(
            "Select a train number ([bold]q[/bold] to quit)",
            default="q",
            console=console
        ).strip()

        if choice.lower() == "q":
            return None

        try:
            return catalog.get(int(choice) - 1)
        except ValueError:
            console.print(f"[red]❌ '{choice}' is not a train number[/red]")
        except TrainNotFoundError as e:
            console.print(f"[red]❌ {e}[/red]")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
):
    """Train seat booking demo."""
    try:
        config = get_config()
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if verbose:
        config = config.model_copy(update={"booking_debug": True})

    configure_logging(config, RichHandler(console=log_console, show_path=False))


@app.command("list")
def list_trains(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_OPTION_HELP),
    strict: bool = typer.Option(False, "--strict", help="Fail on the first malformed record")
):
    """List all trains with destination, departure time and seats remaining."""
    catalog = resolve_catalog(file, strict)

    if catalog.is_empty:
        console.print("[yellow]No trains available.[/yellow]")
        return

    console.print(create_train_table(catalog))
    print_seats_remaining(catalog.total_seats_remaining())


@app.command()
def seats(
    number: int = typer.Argument(..., help="Train number as shown by 'list'"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_OPTION_HELP)
):
    """Show the seat map of one train."""
    catalog = resolve_catalog(file)

    try:
        train = catalog.get(number - 1)
    except TrainNotFoundError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    console.print(create_seat_map(train))
    print_seats_remaining(train.seats_remaining())


@app.command()
def book(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_OPTION_HELP),
    strict: bool = typer.Option(False, "--strict", help="Fail on the first malformed record")
):
    """Interactively book window or aisle seats."""
    catalog = resolve_catalog(file, strict)
    catalog.subscribe(
        lambda total: console.print(f"[dim]Seats remaining across all trains: {total:,}[/dim]")
    )

    while True:
        print_section("Select a train route")

        if catalog.is_empty:
            console.print("[yellow]No trains available.[/yellow]")
            return

        console.print(create_train_table(catalog))
        print_seats_remaining(catalog.total_seats_remaining())

        train = select_train(catalog)
        if train is None:
            console.print("[dim]Goodbye[/dim]")
            return

        try:
            with train.booking_session():
                print_section(f"Now select seat(s): {train.label}")
                book_seats(train)
        except TrainFullError as e:
            console.print(f"[red]❌ {e}[/red]")
            offer_other_trains(catalog, train)
        except SessionError as e:
            console.print(f"[red]❌ {e}[/red]")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n\n[yellow]Booking interrupted by user[/yellow]")
        raise typer.Exit(0)
