"""CLI application entry point and command routing for split-stream.

This module is the **sole error boundary** for the application.  It
catches :class:`~split_stream.exceptions.SplitStreamError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Commands
--------
* ``split-stream grid URL [URL ...]`` — compose a session from URLs,
  print the grid, end the session.
* ``split-stream session`` — interactive session.
* ``split-stream --version``
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from split_stream.cli import exit_codes
from split_stream.cli.console import console, report_error, show_copied_link
from split_stream.config import Settings, get_settings
from split_stream.core.protocols import RecordSink, TitleProvider
from split_stream.core.session import Session
from split_stream.core.tiers import Tier, capacity_for, profile_for_tier
from split_stream.exceptions import SplitStreamError
from split_stream.version import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_session_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tier",
        choices=[tier.value for tier in Tier],
        default=None,
        help="Subscription tier deciding the screen limit (default: from settings).",
    )
    parser.add_argument(
        "--actor",
        default=None,
        help="Signed-in actor id. Analytics are only recorded when set.",
    )
    parser.add_argument(
        "--events",
        type=Path,
        default=None,
        help="Append analytics records to this JSON Lines file.",
    )
    parser.add_argument(
        "--fetch-titles",
        action="store_true",
        default=None,
        help="Resolve real video titles through yt-dlp.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="split-stream",
        description="Watch several YouTube videos side by side.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command")

    grid = subparsers.add_parser("grid", help="Compose a grid from URLs and print it.")
    grid.add_argument("urls", nargs="+", help="YouTube URLs to add, in display order.")
    _add_session_options(grid)

    session = subparsers.add_parser("session", help="Run an interactive session.")
    _add_session_options(session)

    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _title_provider(args: argparse.Namespace, settings: Settings) -> TitleProvider | None:
    enabled = args.fetch_titles if args.fetch_titles is not None else settings.fetch_titles
    if not enabled:
        return None
    from split_stream.infra.ytdlp_title_provider import YtDlpTitleProvider

    return YtDlpTitleProvider()


@contextmanager
def _open_session(args: argparse.Namespace, settings: Settings) -> Iterator[Session]:
    """Wire infra collaborators into a :class:`Session` and close both on exit."""
    from split_stream.infra.background_sink import BackgroundSink
    from split_stream.infra.jsonl_sink import JsonlSink
    from split_stream.infra.memory import MemoryFavoritesStore, MemorySink, StaticIdentity
    from split_stream.infra.share import CallbackClipboard, UnsupportedShare

    tier = Tier(args.tier) if args.tier is not None else settings.tier
    actor = args.actor if args.actor is not None else settings.actor_id
    events_path: Path | None = args.events if args.events is not None else settings.events_path

    inner: RecordSink = JsonlSink(events_path) if events_path is not None else MemorySink()
    capacity = capacity_for(profile_for_tier(tier))
    logger.debug("Opening %s session with capacity %d", tier.value, capacity)

    with BackgroundSink(inner) as sink:
        session = Session(
            capacity,
            identity=StaticIdentity(actor),
            sink=sink,
            favorites=MemoryFavoritesStore(),
            share=UnsupportedShare(),
            clipboard=CallbackClipboard(show_copied_link),
            share_url=settings.share_url,
        )
        with session:
            yield session


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_grid(args: argparse.Namespace, settings: Settings) -> int:
    """Add each URL, report rejections, print the grid."""
    from split_stream.cli.grid_view import render_grid
    from split_stream.cli.interactive import resolve_title

    titles = _title_provider(args, settings)
    with _open_session(args, settings) as session:
        for url in args.urls:
            try:
                stream = session.add_stream(url)
            except SplitStreamError as exc:
                report_error(exc, label="Skipped")
                continue
            if titles is not None:
                resolve_title(session, stream.id, titles)

        render_grid(
            session.collection.streams,
            session.layout(),
            capacity=session.collection.capacity,
        )
        added = session.collection.size()

    return exit_codes.SUCCESS if added > 0 else exit_codes.GENERAL_ERROR


def _handle_session(args: argparse.Namespace, settings: Settings) -> int:
    from split_stream.cli.interactive import run_interactive

    titles = _title_provider(args, settings)
    with _open_session(args, settings) as session:
        run_interactive(session, titles=titles)
    console.print("[bold]Session ended.[/bold]")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the split-stream CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None``, ``sys.argv[1:]`` is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = get_settings()
    _configure_logging(settings.log_level, args.verbose)

    if args.command == "grid":
        return _handle_grid(args, settings)
    return _handle_session(args, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except SplitStreamError as exc:
        report_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
