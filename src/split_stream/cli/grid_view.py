"""Render a session's streams as a grid in the terminal.

The table has exactly ``layout().columns`` columns and streams fill it
row by row in display order, mirroring what the browser grid shows.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from split_stream.cli.console import console
from split_stream.core.models import LayoutDescriptor, Stream
from split_stream.exceptions import EnvironmentError


def _import_rich_table() -> type[Any]:
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def stream_label(position: int, stream: Stream) -> str:
    """One-line label used in selectors: ``"2. Title (abc123) ▶ muted"``."""
    state = "▶" if stream.is_playing else "⏸"
    muted = " muted" if stream.is_muted else ""
    return f"{position}. {stream.title} ({stream.video_id}) {state}{muted}"


def _cell(position: int, stream: Stream) -> str:
    state = "[green]playing[/green]" if stream.is_playing else "[dim]paused[/dim]"
    muted = "  [yellow]muted[/yellow]" if stream.is_muted else ""
    return f"[bold]{position}. {stream.title}[/bold]\n{stream.video_id}\n{state}{muted}"


def chunk_rows(streams: Sequence[Stream], columns: int) -> list[list[tuple[int, Stream]]]:
    """Split *streams* into rows of *columns*, keeping 1-based positions."""
    numbered = list(enumerate(streams, start=1))
    return [numbered[i:i + columns] for i in range(0, len(numbered), columns)]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_grid(
    streams: Sequence[Stream],
    layout: LayoutDescriptor,
    *,
    capacity: int,
) -> None:
    """Print the grid, or the empty-state message when there are no streams."""
    console.print(f"\n{len(streams)} / {capacity} screens active")
    if layout.is_empty:
        console.print("[dim]No streams yet. Add a YouTube URL to get started.[/dim]\n")
        return

    table_class = _import_rich_table()
    table = table_class(
        title=f"Grid ({layout.css_classes()})",
        show_header=False,
        show_lines=True,
        border_style="dim",
    )
    for _ in range(layout.columns):
        table.add_column(ratio=1)

    for row in chunk_rows(streams, layout.columns):
        cells = [_cell(position, stream) for position, stream in row]
        cells.extend("" for _ in range(layout.columns - len(cells)))
        table.add_row(*cells)

    console.print(table)
    console.print()
