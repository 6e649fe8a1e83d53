"""Console output for the CLI layer.

Rich is imported lazily so that ``--help`` and ``--version`` keep
working without it; every helper degrades to plain stderr text.
"""

from __future__ import annotations

import sys
from typing import Any

from split_stream.exceptions import EnvironmentError, SplitStreamError


def _load_rich_console_class() -> type[Any]:
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console bound to stderr."""
    return _load_rich_console_class()(stderr=True)


class _ConsoleProxy:
    """``print``-compatible proxy: Rich when available, plain stderr otherwise."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def report_error(exc: SplitStreamError, *, label: str = "Error") -> None:
    """Show a domain error with its hint, if any."""
    console.print(f"[bold red]{label}:[/bold red] {exc}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {exc.hint}")


def show_copied_link(url: str) -> None:
    """Clipboard fallback for terminals: display the link to copy by hand."""
    console.print(f"[bold green]Link copied![/bold green] {url}")
