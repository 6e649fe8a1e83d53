"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, Union

from split_stream.core.models import (
    AnalyticsEvent,
    SaveResult,
    SessionSummary,
    ShareResult,
)

Record = Union[AnalyticsEvent, SessionSummary]


class IdentityProvider(Protocol):
    """Answers who, if anyone, is signed in."""

    def current_actor(self) -> str | None:
        """Return the signed-in actor id, or ``None`` when anonymous."""
        ...  # pragma: no cover


class RecordSink(Protocol):
    """Contract for analytics/persistence sinks.

    Calls are fire-and-forget from the core's perspective.  A sink may
    signal failure by returning ``False`` or by raising
    :class:`~split_stream.exceptions.SinkFailureError`; either way the
    caller logs and carries on.
    """

    def append(self, record: Record) -> bool:
        """Persist *record*.  Return ``True`` on success."""
        ...  # pragma: no cover


class FavoritesStore(Protocol):
    """Per-actor favorites storage with a ``(actor, video)`` uniqueness rule."""

    def save(
        self,
        actor_id: str,
        video_id: str,
        title: str,
        thumbnail: str,
    ) -> SaveResult:
        """Save a favorite.

        Returns :attr:`SaveResult.ALREADY_EXISTS` when the pair is
        already stored.  Any other failure is raised.
        """
        ...  # pragma: no cover


class ShareCapability(Protocol):
    """Platform share sheet (or lack of one)."""

    def native_share(self, payload: Mapping[str, Any]) -> ShareResult:
        """Offer *payload* to the platform share facility.

        *payload* contains ``title``, ``text`` and ``url``.  May raise
        when the user dismisses the share sheet or the platform errors.
        """
        ...  # pragma: no cover


class Clipboard(Protocol):
    """Copy-to-clipboard fallback used when native sharing fails."""

    def copy(self, text: str) -> None:
        ...  # pragma: no cover


class TitleProvider(Protocol):
    """Resolves a human-readable title for a video id."""

    def fetch_title(self, video_id: str) -> str | None:
        """Return the title, or ``None`` when the backend has none.

        Raises
        ------
        MetadataLookupError
            When the backend fails to resolve the video.
        """
        ...  # pragma: no cover
