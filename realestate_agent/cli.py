"""Command-line interface for the real estate agent."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from realestate_agent.catalog import Catalog
from realestate_agent.config import settings
from realestate_agent.logging_config import setup_logging
from realestate_agent.models import PanelListing
from realestate_agent.parser import SAMPLE_DATA
from realestate_agent.storage import write_lines

app = typer.Typer(
    name="reagent",
    help="Real estate catalog valuation and reporting",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(
        settings.log_level,
        "--log-level",
        help="Log level: DEBUG, INFO, WARNING, ERROR",
    ),
    log_file: Optional[str] = typer.Option(
        settings.log_file,
        "--log-file",
        help="Append log records to this file (empty string disables)",
    ),
):
    """Configure logging before running a command."""
    setup_logging(level=log_level, log_file=log_file or "")


def _show_report(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.command()
def report(
    input_file: str = typer.Argument(
        settings.input_file,
        help="Listing file; sample data is used if it is missing",
    ),
    output: str = typer.Option(
        settings.output_file,
        "--output", "-o",
        help="Report output file",
    ),
):
    """Load listings and produce the statistical report."""
    catalog = Catalog()
    catalog.load(input_file)

    catalog.produce_report(output, display=_show_report)

    if catalog.last_saved_to is not None:
        console.print(f"[green]✓ Report saved to {catalog.last_saved_to}[/green]")
    else:
        console.print(f"[red]Could not write report to {output}[/red]")


@app.command()
def show(
    input_file: str = typer.Argument(
        settings.input_file,
        help="Listing file; sample data is used if it is missing",
    ),
):
    """Show the catalog as a table, cheapest first."""
    catalog = Catalog()
    catalog.load(input_file)

    if not catalog:
        console.print("[yellow]No properties available.[/yellow]")
        return

    table = Table(title="Real Estate Catalog")
    table.add_column("Kind", style="cyan")
    table.add_column("City")
    table.add_column("Genre")
    table.add_column("Price/sqm", justify="right")
    table.add_column("Sqm", justify="right")
    table.add_column("Rooms", justify="right")
    table.add_column("Floor", justify="right")
    table.add_column("Insulated")
    table.add_column("Total price", style="green", justify="right")

    for listing in catalog:
        is_panel = isinstance(listing, PanelListing)
        table.add_row(
            "PANEL" if is_panel else "REALESTATE",
            listing.city or "",
            listing.genre.value,
            f"{listing.price_per_unit:,.2f}",
            str(listing.area),
            f"{listing.rooms:g}",
            str(listing.floor) if is_panel else "",
            ("yes" if listing.insulated else "no") if is_panel else "",
            f"{listing.total_price:,}",
        )

    console.print(table)
    console.print(f"[bold]{len(catalog)}[/bold] properties")


@app.command()
def sample(
    filepath: str = typer.Argument(
        settings.input_file,
        help="Where to write the sample listing file",
    ),
    force: bool = typer.Option(
        False,
        "--force", "-f",
        help="Overwrite an existing file",
    ),
):
    """Write the built-in sample listings to a file."""
    path = Path(filepath)
    if path.exists() and not force:
        console.print(f"[red]{path} already exists, use --force to overwrite[/red]")
        raise typer.Exit(1)

    try:
        count = write_lines(path, list(SAMPLE_DATA))
    except OSError as e:
        console.print(f"[red]Could not write {path}: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Wrote {count} sample listings to {path}[/green]")


if __name__ == "__main__":
    app()
