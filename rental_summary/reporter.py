from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from rental_summary.domain.models import RefreshResult, SummaryRecord


def build_summary_table(records: List[SummaryRecord], title: str = "Top Rented Titles") -> Table:
    """
    Render summary records as a rich table, one section per category.
    """
    table = Table(
        title=title,
        box=box.ROUNDED,
        caption="Ranked by rental count (descending), ties by title",
    )
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Rank", justify="right", style="magenta")
    table.add_column("Title", style="bold")
    table.add_column("Rentals", justify="right", style="green")
    table.add_column("New Rate", justify="right", style="yellow")

    previous: Optional[str] = None
    for record in records:
        if previous is not None and record.category_name != previous:
            table.add_section()
        table.add_row(
            record.category_name if record.category_name != previous else "",
            str(record.rank),
            record.movie_title,
            f"{record.rental_count:,}",
            f"{record.new_rental_rate:.2f}",
        )
        previous = record.category_name
    return table


def print_summary(
    records: List[SummaryRecord],
    result: Optional[RefreshResult] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Print the summary table, preceded by refresh statistics when given.
    """
    console = console or Console()

    if result is not None:
        console.print(
            f"[bold]Refreshed[/bold] {result.detail_count:,} details, "
            f"{result.summary_count:,} summary rows across {len(result.categories)} categories "
            f"in {result.duration_seconds:.2f}s"
        )
        if result.rejected:
            console.print(f"[yellow]{len(result.rejected):,} source rows rejected[/yellow]")

    if not records:
        console.print("[yellow]No summary rows to display.[/yellow]")
        return

    console.print(build_summary_table(records))


__all__ = ["build_summary_table", "print_summary"]
