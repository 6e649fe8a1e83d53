"""Translate session lifecycle into analytics records.

The recorder turns collection mutations and session start/share/end
into an ordered, fire-and-forget stream of
:class:`~split_stream.core.models.AnalyticsEvent` records (plus one
:class:`~split_stream.core.models.SessionSummary`) sent to a
:class:`~split_stream.core.protocols.RecordSink`.

Rules
-----
* The signed-in actor is passed into every operation; the recorder
  never reads ambient identity state.
* Nothing is recorded for an anonymous actor.  The one exception is
  :meth:`SessionRecorder.on_favorite`, which rejects the call with
  :class:`~split_stream.exceptions.AuthRequiredError`.
* Sink failures are logged and never propagated.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from split_stream.core.models import (
    AnalyticsEvent,
    EventType,
    MutationEvent,
    SessionSummary,
    Stream,
)
from split_stream.core.protocols import Record, RecordSink
from split_stream.core.stream_collection import StreamCollection
from split_stream.exceptions import AuthRequiredError

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _to_datetime(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def _freeze(value: Any) -> Any:
    """Return a read-only copy: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


class SessionRecorder:
    """Emit analytics for one session.

    Parameters
    ----------
    session_id:
        Identifier stamped on every record.
    sink:
        Destination for records.  Wrap it in
        :class:`~split_stream.infra.background_sink.BackgroundSink` to
        keep callers from waiting on delivery.
    clock:
        Returns the current time in epoch seconds.  Injected for tests.
    """

    def __init__(
        self,
        session_id: str,
        sink: RecordSink,
        *,
        clock: Clock = time.time,
    ) -> None:
        self._session_id: str = session_id
        self._sink: RecordSink = sink
        self._clock: Clock = clock

    @property
    def session_id(self) -> str:
        return self._session_id

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on_session_start(
        self,
        collection: StreamCollection,
        actor: str | None,
    ) -> AnalyticsEvent | None:
        """Record ``session_start`` when the collection is non-empty."""
        if collection.size() == 0:
            return None
        return self._track(
            EventType.SESSION_START,
            {
                "screen_count": collection.size(),
                "video_ids": tuple(collection.video_ids()),
            },
            actor,
        )

    def on_mutation(
        self,
        event: MutationEvent,
        actor: str | None,
    ) -> AnalyticsEvent | None:
        """Forward a ``video_added`` / ``video_removed`` notification."""
        return self._track(
            event.event_type,
            {
                "video_id": event.video_id,
                "screen_count": event.screen_count,
            },
            actor,
        )

    def on_favorite(self, stream: Stream, actor: str | None) -> AnalyticsEvent | None:
        """Record ``video_favorited``.

        Raises
        ------
        AuthRequiredError
            If *actor* is ``None``.  Nothing is emitted.
        """
        if actor is None:
            raise AuthRequiredError(
                "Sign in required.",
                hint="Please sign in to save favorites.",
            )
        return self._track(
            EventType.VIDEO_FAVORITED,
            {"video_id": stream.video_id},
            actor,
        )

    def on_share(
        self,
        collection: StreamCollection,
        actor: str | None,
    ) -> AnalyticsEvent | None:
        """Record ``session_shared`` with the current video list."""
        return self._track(
            EventType.SESSION_SHARED,
            {
                "videos": tuple(
                    {"id": stream.video_id, "title": stream.title}
                    for stream in collection
                ),
                "timestamp": int(self._clock() * 1000),
            },
            actor,
        )

    def on_session_end(
        self,
        collection: StreamCollection,
        started_at: float,
        actor: str | None,
    ) -> SessionSummary | None:
        """Record the session summary followed by ``session_end``.

        ``duration_seconds`` is ``floor(now - started_at)``.  Both records
        are skipped when *actor* is ``None``.
        """
        if actor is None:
            logger.debug("Session %s ended anonymously; not recorded", self._session_id)
            return None

        now = self._clock()
        duration = max(0, math.floor(now - started_at))
        summary = SessionSummary(
            session_id=self._session_id,
            video_ids=tuple(collection.video_ids()),
            screen_count=collection.size(),
            duration_seconds=duration,
            ended_at=_to_datetime(now),
            actor_id=actor,
            started_at=_to_datetime(started_at),
        )
        self._send(summary)
        self._track(
            EventType.SESSION_END,
            {
                "duration_seconds": duration,
                "screen_count": collection.size(),
            },
            actor,
        )
        return summary

    # ------------------------------------------------------------------
    # Emission (best-effort)
    # ------------------------------------------------------------------

    def _track(
        self,
        event_type: EventType,
        payload: Mapping[str, Any],
        actor: str | None,
    ) -> AnalyticsEvent | None:
        if actor is None:
            return None
        event = AnalyticsEvent(
            event_type=event_type,
            payload=_freeze(payload),
            session_id=self._session_id,
            emitted_at=_to_datetime(self._clock()),
            actor_id=actor,
        )
        self._send(event)
        return event

    def _send(self, record: Record) -> None:
        try:
            accepted = self._sink.append(record)
        except Exception:
            logger.warning(
                "Analytics sink failed for session %s",
                self._session_id,
                exc_info=True,
            )
            return
        if not accepted:
            logger.warning(
                "Analytics sink rejected %s for session %s",
                type(record).__name__,
                self._session_id,
            )
