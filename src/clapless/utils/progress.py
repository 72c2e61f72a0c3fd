"""Console progress reporting using Rich."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from clapless.sync.padding import format_offset_seconds

if TYPE_CHECKING:
    from clapless.models.offsets import FileOffset

console = Console(stderr=True)


def _stamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def log(message: str, *, style: str = "bold") -> None:
    """Log a timestamped message."""
    console.print(f"[dim]\\[{_stamp()}][/dim] {message}", style=style, highlight=False)


def log_step(step: str, message: str) -> None:
    """Log a line belonging to a named processing step."""
    console.print(
        f"[dim]\\[{_stamp()}][/dim] [bold cyan]{step}[/bold cyan] {message}",
        highlight=False,
    )


def log_success(message: str) -> None:
    log(f"[green]✓[/green] {message}", style="")


def log_warning(message: str) -> None:
    log(f"[yellow]⚠[/yellow] {message}", style="")


def log_error(message: str) -> None:
    log(f"[red]✗[/red] {message}", style="")


def show_offsets_table(file_offsets: list[FileOffset]) -> None:
    """Print the per-file summary once a run has finished."""
    table = Table(title="Synchronization", show_lines=False)
    table.add_column("File", style="bold")
    table.add_column("Coarse", justify="right")
    table.add_column("Fine", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Padding", justify="right")

    for fo in file_offsets:
        result = fo.finetune_result
        if result is None or result.skipped:
            fine = "[dim]skipped[/dim]"
        else:
            fine = f"{fo.fine_adjustment_samples:+d} smp"
        padding = "[green]earliest[/green]" if fo.is_earliest else f"{fo.padding_seconds:.3f}s"
        table.add_row(
            Path(fo.path).name,
            format_offset_seconds(fo.offset_seconds),
            fine,
            f"{fo.confidence:.2f}",
            padding,
        )

    console.print(table)
