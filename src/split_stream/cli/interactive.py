"""Interactive session loop driven by questionary prompts.

Each iteration asks for one action, runs it against the
:class:`~split_stream.core.session.Session`, and reports domain errors
without leaving the loop.  The loop ends when the user picks *End
session* or cancels a prompt; the caller closes the session.
"""

from __future__ import annotations

from typing import Any

from split_stream.cli.console import console, report_error
from split_stream.cli.grid_view import render_grid, stream_label
from split_stream.core.models import ShareOutcome
from split_stream.core.protocols import TitleProvider
from split_stream.core.session import Session
from split_stream.exceptions import EnvironmentError, SplitStreamError

ADD = "Add video"
REMOVE = "Remove video"
TOGGLE_PLAY = "Play / pause"
TOGGLE_MUTE = "Mute / unmute"
FAVORITE = "Add to favorites"
SHARE = "Share session"
SHOW = "Show grid"
END = "End session"

_NEEDS_STREAM: frozenset[str] = frozenset({REMOVE, TOGGLE_PLAY, TOGGLE_MUTE, FAVORITE})


def _import_questionary() -> Any:
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def available_actions(session: Session) -> list[str]:
    """Actions that make sense for the current composition."""
    actions: list[str] = []
    if not session.collection.is_full():
        actions.append(ADD)
    if session.collection.size() > 0:
        actions.extend([REMOVE, TOGGLE_PLAY, TOGGLE_MUTE, FAVORITE, SHARE])
    actions.extend([SHOW, END])
    return actions


def _pick_stream(questionary: Any, session: Session, prompt: str) -> str | None:
    choices = [
        questionary.Choice(title=stream_label(position, stream), value=stream.id)
        for position, stream in enumerate(session.collection, start=1)
    ]
    selected: str | None = questionary.select(prompt, choices=choices).ask()
    return selected


def resolve_title(
    session: Session,
    stream_id: str,
    titles: TitleProvider,
) -> None:
    """Replace a stream's placeholder title; failures only warn."""
    stream = session.collection.get(stream_id)
    try:
        title = titles.fetch_title(stream.video_id)
    except SplitStreamError as exc:
        report_error(exc, label="Warning")
        return
    if title:
        session.collection.replace_metadata(stream_id, title=title)


def run_action(
    action: str,
    session: Session,
    *,
    stream_id: str | None = None,
    url: str | None = None,
    titles: TitleProvider | None = None,
) -> None:
    """Execute one menu action.  Domain errors propagate to the caller."""
    if action == ADD and url is not None:
        stream = session.add_stream(url)
        if titles is not None:
            resolve_title(session, stream.id, titles)
        console.print(f"[green]Video added![/green] {stream.video_id}")
    elif action == REMOVE and stream_id is not None:
        removed = session.remove_stream(stream_id)
        console.print(f"Removed {removed.video_id}")
    elif action == TOGGLE_PLAY and stream_id is not None:
        session.toggle_play(stream_id)
    elif action == TOGGLE_MUTE and stream_id is not None:
        session.toggle_mute(stream_id)
    elif action == FAVORITE and stream_id is not None:
        session.favorite(stream_id)
        console.print("[green]Added to favorites![/green]")
    elif action == SHARE:
        if session.share() is ShareOutcome.SHARED:
            console.print("[green]Session shared.[/green]")


def run_interactive(session: Session, *, titles: TitleProvider | None = None) -> None:
    """Prompt for actions until the user ends the session."""
    questionary = _import_questionary()

    while True:
        render_grid(
            session.collection.streams,
            session.layout(),
            capacity=session.collection.capacity,
        )
        action: str | None = questionary.select(
            "What next?",
            choices=available_actions(session),
        ).ask()  # None on Ctrl+C / Esc
        if action is None or action == END:
            return
        if action == SHOW:
            continue

        stream_id: str | None = None
        url: str | None = None
        if action == ADD:
            url = questionary.text("YouTube URL:").ask()
            if not url:
                continue
        elif action in _NEEDS_STREAM:
            stream_id = _pick_stream(questionary, session, f"{action}:")
            if stream_id is None:
                continue

        try:
            run_action(action, session, stream_id=stream_id, url=url, titles=titles)
        except SplitStreamError as exc:
            report_error(exc)
