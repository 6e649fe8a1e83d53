"""One viewing session: a stream collection plus its analytics.

:class:`Session` owns its :class:`StreamCollection` exclusively, wires
collection notifications into a :class:`SessionRecorder`, and reads the
identity collaborator so the recorder receives the actor explicitly.

Lifecycle
---------
1. Created with a fixed capacity; ``started_at`` is ``None``.
2. The first accepted add sets ``started_at`` and records
   ``session_start`` (before the ``video_added`` forward).
3. :meth:`Session.close` records the summary and ``session_end`` (only
   if the session ever started), then empties the collection.  Any
   further command raises :class:`SessionClosedError`.
"""

from __future__ import annotations

import logging
import time
import uuid
from types import TracebackType

from split_stream.core.models import (
    LayoutDescriptor,
    MutationEvent,
    SaveResult,
    SessionSummary,
    ShareOutcome,
    ShareResult,
    Stream,
)
from split_stream.core.protocols import (
    Clipboard,
    FavoritesStore,
    IdentityProvider,
    RecordSink,
    ShareCapability,
)
from split_stream.core.session_recorder import Clock, SessionRecorder
from split_stream.core.stream_collection import StreamCollection
from split_stream.exceptions import (
    AlreadyExistsError,
    AuthRequiredError,
    FavoriteSaveError,
    SessionClosedError,
    SplitStreamError,
)

logger = logging.getLogger(__name__)

DEFAULT_SHARE_URL: str = "https://split-stream.app/"
SHARE_TITLE: str = "Split-Stream Session"


def new_session_id() -> str:
    return f"session_{uuid.uuid4().hex}"


class Session:
    """Façade over one :class:`StreamCollection` and its recorder.

    Parameters
    ----------
    capacity:
        Maximum simultaneous streams (see :mod:`split_stream.core.tiers`).
    identity:
        Answers who is signed in; consulted on every recorded action.
    sink:
        Destination for analytics records.
    favorites, share, clipboard:
        Optional collaborators; the operations that need them raise
        :class:`SplitStreamError` when they are missing.
    clock:
        Epoch-seconds clock, injected for tests.
    share_url:
        The link shared (or copied) for this session.
    """

    def __init__(
        self,
        capacity: int,
        *,
        identity: IdentityProvider,
        sink: RecordSink,
        favorites: FavoritesStore | None = None,
        share: ShareCapability | None = None,
        clipboard: Clipboard | None = None,
        clock: Clock = time.time,
        share_url: str = DEFAULT_SHARE_URL,
        session_id: str | None = None,
    ) -> None:
        self._identity = identity
        self._favorites = favorites
        self._share = share
        self._clipboard = clipboard
        self._clock = clock
        self._share_url = share_url

        self._collection = StreamCollection(capacity)
        self._recorder = SessionRecorder(
            session_id or new_session_id(),
            sink,
            clock=clock,
        )
        self._started_at: float | None = None
        self._closed: bool = False
        self._collection.subscribe(self._on_mutation)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self._recorder.session_id

    @property
    def started_at(self) -> float | None:
        return self._started_at

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def collection(self) -> StreamCollection:
        return self._collection

    def layout(self) -> LayoutDescriptor:
        return self._collection.layout()

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def add_stream(self, url: str) -> Stream:
        self._ensure_open()
        return self._collection.add_stream(url)

    def remove_stream(self, stream_id: str) -> Stream:
        self._ensure_open()
        return self._collection.remove_stream(stream_id)

    def toggle_play(self, stream_id: str) -> Stream:
        self._ensure_open()
        return self._collection.toggle_play(stream_id)

    def toggle_mute(self, stream_id: str) -> Stream:
        self._ensure_open()
        return self._collection.toggle_mute(stream_id)

    def _on_mutation(self, event: MutationEvent) -> None:
        actor = self._recording_actor()
        if self._started_at is None and self._collection.size() > 0:
            self._started_at = self._clock()
            self._recorder.on_session_start(self._collection, actor)
        self._recorder.on_mutation(event, actor)

    # ------------------------------------------------------------------
    # Favorites / sharing
    # ------------------------------------------------------------------

    def favorite(self, stream_id: str) -> Stream:
        """Save one stream to the signed-in actor's favorites.

        Raises
        ------
        AuthRequiredError
            If nobody is signed in.
        AlreadyExistsError
            If the video is already a favorite.
        FavoriteSaveError
            If the store fails for any other reason.
        """
        self._ensure_open()
        stream = self._collection.get(stream_id)
        actor = self._identity.current_actor()
        if actor is None:
            raise AuthRequiredError(
                "Sign in required.",
                hint="Please sign in to save favorites.",
            )
        if self._favorites is None:
            raise FavoriteSaveError("No favorites store is configured.")

        try:
            result = self._favorites.save(
                actor,
                stream.video_id,
                stream.title,
                stream.thumbnail_url,
            )
        except SplitStreamError:
            raise
        except Exception as exc:
            raise FavoriteSaveError(f"Failed to add to favorites: {exc}") from exc

        if result is SaveResult.ALREADY_EXISTS:
            raise AlreadyExistsError(
                "Already in favorites.",
                hint="This video is already in your favorites.",
            )

        self._recorder.on_favorite(stream, actor)
        return stream

    def share(self) -> ShareOutcome:
        """Share the session link, falling back to the clipboard.

        ``session_shared`` is recorded exactly once, before any share
        attempt, whichever way the share resolves.
        """
        self._ensure_open()
        self._recorder.on_share(self._collection, self._recording_actor())

        payload = {
            "title": SHARE_TITLE,
            "text": (
                f"Check out my Split-Stream session with "
                f"{self._collection.size()} videos!"
            ),
            "url": self._share_url,
        }
        if self._share is not None:
            try:
                if self._share.native_share(payload) is ShareResult.SHARED:
                    return ShareOutcome.SHARED
            except Exception:
                logger.debug("Native share failed; falling back to clipboard", exc_info=True)

        if self._clipboard is None:
            raise SplitStreamError(
                "Sharing is not available.",
                hint="Copy the session link manually.",
            )
        self._clipboard.copy(self._share_url)
        return ShareOutcome.COPIED

    # ------------------------------------------------------------------
    # End of session
    # ------------------------------------------------------------------

    def close(self) -> SessionSummary | None:
        """End the session.  Safe to call more than once."""
        if self._closed:
            return None
        self._closed = True

        summary: SessionSummary | None = None
        if self._started_at is not None:
            summary = self._recorder.on_session_end(
                self._collection,
                self._started_at,
                self._recording_actor(),
            )
        self._collection.clear()
        return summary

    def __enter__(self) -> Session:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _recording_actor(self) -> str | None:
        """Actor for analytics only; an identity failure records as anonymous."""
        try:
            return self._identity.current_actor()
        except Exception:
            logger.warning(
                "Identity lookup failed for session %s; recording skipped",
                self.session_id,
                exc_info=True,
            )
            return None

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("This session has ended.")
