from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from cosmos_exporter.snapshot import Snapshot


def _format_labels(labels: dict) -> str:
    return ", ".join(f"{key}={value}" for key, value in labels.items())


def print_snapshot(snapshot: Snapshot, console: Console | None = None) -> None:
    """
    Render a snapshot as a rich table, one row per series.

    Constant labels are shown once in the caption instead of on every row.
    """
    console = console or Console()

    if not len(snapshot):
        console.print("[yellow]No series collected.[/yellow]")
        return

    const_labels = snapshot.const_labels
    caption = f"Constant labels: {_format_labels(const_labels)}" if const_labels else None

    table = Table(
        title=f"Cosmos Validators Snapshot\n[dim]{len(snapshot)} series[/dim]",
        box=box.ROUNDED,
        caption=caption,
    )
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Labels", style="magenta")
    table.add_column("Value", justify="right", style="bold green")

    for item in snapshot:
        table.add_row(item.name, _format_labels(item.label_dict), f"{item.value:,.6g}")

    console.print(table)
