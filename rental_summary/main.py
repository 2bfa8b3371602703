from __future__ import annotations

import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer

from rental_summary.config import get_settings
from rental_summary.domain.errors import RentalSummaryError
from rental_summary.orchestrator import RentalReport
from rental_summary.reporter import print_summary
from rental_summary.sources import CsvSourceAccessor, PostgresSourceAccessor
from rental_summary.utils.logging import configure_logging

app = typer.Typer(help="Rental summary CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} "
        f"schema={settings.db_schema} | top_n={settings.summary_top_n} "
        f"log_level={settings.log_level}"
    )


@app.command()
def refresh(
    csv_path: Optional[Path] = typer.Option(
        None,
        "--csv",
        help="Read joined source rows from this CSV instead of Postgres.",
    ),
    category: Optional[str] = typer.Option(
        None,
        "--category",
        "-c",
        help="Only show the summary for this category.",
    ),
    top_n: Optional[int] = typer.Option(
        None,
        "--top-n",
        "-n",
        help="Ranks kept per category (default from settings).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the summary as JSON instead of a table.",
    ),
) -> None:
    """
    Rebuild the detail and summary sets from the source and print the summary.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    source = CsvSourceAccessor(csv_path) if csv_path else PostgresSourceAccessor()
    try:
        report = RentalReport(source=source, top_n=top_n)
        result = report.refresh()
    except RentalSummaryError as exc:
        typer.echo(f"Refresh failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    records = report.list_summary(category=category)
    if as_json:
        payload = {
            "refresh": {
                **asdict(result),
                "rejected": [r.model_dump() for r in result.rejected],
            },
            "summary": [r.model_dump(mode="json") for r in records],
        }
        typer.echo(json.dumps(payload, indent=2, default=str))
    else:
        print_summary(records, result=result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
