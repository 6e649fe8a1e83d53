"""Domain models for split-stream.

Records are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access and a few derived properties.  They carry
zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


THUMBNAIL_URL_TEMPLATE: str = "https://img.youtube.com/vi/{video_id}/mqdefault.jpg"
EMBED_URL_TEMPLATE: str = (
    "https://www.youtube.com/embed/{video_id}?autoplay={autoplay}&mute={mute}&rel=0"
)


# ---------------------------------------------------------------------------
# Event vocabulary
# ---------------------------------------------------------------------------

class EventType(str, enum.Enum):
    """Analytics event types, valued by their wire names."""

    SESSION_START = "session_start"
    VIDEO_ADDED = "video_added"
    VIDEO_REMOVED = "video_removed"
    VIDEO_FAVORITED = "video_favorited"
    SESSION_SHARED = "session_shared"
    SESSION_END = "session_end"


# ---------------------------------------------------------------------------
# Stream
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Stream:
    """One active video in the grid."""

    id: str
    """Opaque handle assigned at creation (``stream_<hex>``)."""

    source_url: str
    """The URL exactly as the user entered it."""

    video_id: str
    """YouTube video ID extracted from :attr:`source_url`."""

    title: str
    """Display title; a placeholder until metadata is resolved."""

    thumbnail_url: str
    """Preview image URL."""

    is_playing: bool = False
    is_muted: bool = False

    @property
    def embed_url(self) -> str:
        """URL consumed by the embeddable player for this stream."""
        return EMBED_URL_TEMPLATE.format(
            video_id=self.video_id,
            autoplay=int(self.is_playing),
            mute=int(self.is_muted),
        )


def default_thumbnail_url(video_id: str) -> str:
    """Return the standard medium-quality thumbnail URL for *video_id*."""
    return THUMBNAIL_URL_TEMPLATE.format(video_id=video_id)


# ---------------------------------------------------------------------------
# Collection notifications
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MutationEvent:
    """Emitted by :class:`StreamCollection` after an accepted add/remove."""

    event_type: EventType
    video_id: str
    screen_count: int
    """Collection size *after* the mutation."""


# ---------------------------------------------------------------------------
# Analytics records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AnalyticsEvent:
    """An immutable lifecycle record forwarded once to the sink."""

    event_type: EventType
    payload: Mapping[str, Any]
    session_id: str
    emitted_at: datetime
    actor_id: str | None = None


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Final record describing a finished session."""

    session_id: str
    video_ids: tuple[str, ...]
    screen_count: int
    duration_seconds: int
    ended_at: datetime
    actor_id: str | None = None
    started_at: datetime | None = None


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LayoutDescriptor:
    """Grid presentation derived from the number of streams.

    ``columns`` is ``0`` for the empty state.  ``breakpoints`` lists the
    responsive column count per viewport breakpoint, narrowest first.
    """

    columns: int
    rows: int
    breakpoints: tuple[tuple[str, int], ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return self.columns == 0

    def css_classes(self) -> str:
        """Render the breakpoints as grid utility classes.

        ``(("base", 1), ("md", 2))`` becomes ``"grid-cols-1 md:grid-cols-2"``.
        """
        parts: list[str] = []
        for name, cols in self.breakpoints:
            prefix = "" if name == "base" else f"{name}:"
            parts.append(f"{prefix}grid-cols-{cols}")
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Collaborator results
# ---------------------------------------------------------------------------

class SaveResult(enum.Enum):
    """Outcome of a favorites-store save."""

    SAVED = "saved"
    ALREADY_EXISTS = "already_exists"


class ShareResult(enum.Enum):
    """Outcome of a native share attempt."""

    SHARED = "shared"
    UNSUPPORTED = "unsupported"


class ShareOutcome(enum.Enum):
    """What actually happened when the user shared a session."""

    SHARED = "shared"
    COPIED = "copied"
