"""Console helpers shared by picsplit CLI commands."""

from __future__ import annotations

import math

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from picsplit.balancing.summary import SummaryTable

console = Console()


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}")


def _format_value(value: float | int | str) -> str:
    if isinstance(value, float):
        return "NA" if math.isnan(value) else f"{value:.2f}"
    return str(value)


def summary_table(summary: SummaryTable, title: str = "List Summary") -> Table:
    """Render per-list statistics as a rich table (2 decimal places).

    Parameters
    ----------
    summary : SummaryTable
        Statistics to render.
    title : str
        Table title.

    Returns
    -------
    Table
        One row per list, mean and SD columns per covariate.
    """
    table = Table(title=title)
    table.add_column("List", style="cyan")
    table.add_column("N", justify="right", style="yellow")
    for column in summary.columns():
        table.add_column(column, justify="right", style="green")

    for row in summary.rows(precision=2):
        table.add_row(*(_format_value(value) for value in row.values()))
    return table
