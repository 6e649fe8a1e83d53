"""In-process collaborators: identity, record sink, favorites store.

Useful as the default CLI wiring when no persistent target is
configured, and as real (non-mock) collaborators in tests.
"""

from __future__ import annotations

import threading

from split_stream.core.models import AnalyticsEvent, SaveResult, SessionSummary
from split_stream.core.protocols import Record


class StaticIdentity:
    """:class:`~split_stream.core.protocols.IdentityProvider` with a fixed actor.

    ``StaticIdentity(None)`` models an anonymous viewer.  The actor can
    be changed with :meth:`sign_in` / :meth:`sign_out`.
    """

    def __init__(self, actor_id: str | None = None) -> None:
        self._actor_id: str | None = actor_id

    def current_actor(self) -> str | None:
        return self._actor_id

    def sign_in(self, actor_id: str) -> None:
        self._actor_id = actor_id

    def sign_out(self) -> None:
        self._actor_id = None


class MemorySink:
    """Thread-safe list-backed :class:`~split_stream.core.protocols.RecordSink`."""

    def __init__(self) -> None:
        self._records: list[Record] = []
        self._lock = threading.Lock()

    def append(self, record: Record) -> bool:
        with self._lock:
            self._records.append(record)
        return True

    @property
    def records(self) -> list[Record]:
        with self._lock:
            return list(self._records)

    @property
    def events(self) -> list[AnalyticsEvent]:
        return [r for r in self.records if isinstance(r, AnalyticsEvent)]

    @property
    def summaries(self) -> list[SessionSummary]:
        return [r for r in self.records if isinstance(r, SessionSummary)]


class MemoryFavoritesStore:
    """Favorites keyed by ``(actor_id, video_id)``."""

    def __init__(self) -> None:
        self._rows: dict[tuple[str, str], tuple[str, str]] = {}

    def save(
        self,
        actor_id: str,
        video_id: str,
        title: str,
        thumbnail: str,
    ) -> SaveResult:
        key = (actor_id, video_id)
        if key in self._rows:
            return SaveResult.ALREADY_EXISTS
        self._rows[key] = (title, thumbnail)
        return SaveResult.SAVED

    def video_ids_for(self, actor_id: str) -> list[str]:
        return [video_id for (actor, video_id) in self._rows if actor == actor_id]
