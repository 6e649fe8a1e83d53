"""The bounded, order-preserving container of streams for one session.

Guarantees
----------
* ``size() <= capacity`` at all times.
* No two streams share a ``video_id``.
* Insertion order is display order.
* Listeners are notified synchronously after every accepted add or
  remove; rejected commands notify nothing and change nothing.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Callable, Iterator

from split_stream.core.layout import layout_for
from split_stream.core.models import (
    EventType,
    LayoutDescriptor,
    MutationEvent,
    Stream,
    default_thumbnail_url,
)
from split_stream.core.url_parser import extract_video_id
from split_stream.exceptions import (
    CapacityExceededError,
    DuplicateVideoError,
    InvalidSourceError,
    StreamNotFoundError,
)

logger = logging.getLogger(__name__)

MutationListener = Callable[[MutationEvent], None]


def _new_stream_id() -> str:
    return f"stream_{uuid.uuid4().hex}"


class StreamCollection:
    """Ordered set of active :class:`Stream` objects under a fixed capacity.

    Parameters
    ----------
    capacity:
        Maximum number of simultaneous streams.  Must be ``>= 1``.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity: int = capacity
        self._streams: list[Stream] = []
        self._listeners: list[MutationListener] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def streams(self) -> tuple[Stream, ...]:
        """Snapshot of the current streams in display order."""
        return tuple(self._streams)

    def size(self) -> int:
        return len(self._streams)

    def __len__(self) -> int:
        return len(self._streams)

    def __iter__(self) -> Iterator[Stream]:
        return iter(tuple(self._streams))

    def is_full(self) -> bool:
        return len(self._streams) >= self._capacity

    def video_ids(self) -> list[str]:
        return [stream.video_id for stream in self._streams]

    def get(self, stream_id: str) -> Stream:
        """Return the stream with handle *stream_id*.

        Raises
        ------
        StreamNotFoundError
            If no such stream exists.
        """
        return self._streams[self._index_of(stream_id)]

    def layout(self) -> LayoutDescriptor:
        """Return the grid layout for the current size."""
        return layout_for(len(self._streams))

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: MutationListener) -> Callable[[], None]:
        """Register *listener* for add/remove notifications.

        Returns a callable that unregisters it.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, event: MutationEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_stream(self, url: str) -> Stream:
        """Parse *url* and append a new stream.

        Raises
        ------
        CapacityExceededError
            If the collection is already full.
        InvalidSourceError
            If *url* matches no recognised YouTube URL shape.
        DuplicateVideoError
            If a stream with the same video id is already present.
        """
        if self.is_full():
            raise CapacityExceededError(
                "Maximum screens reached.",
                hint=f"You can only have {self._capacity} screens active at once.",
            )

        video_id = extract_video_id(url)
        if video_id is None:
            raise InvalidSourceError(
                f"Invalid YouTube URL: {url}",
                hint="Please enter a valid YouTube video URL.",
            )

        if any(stream.video_id == video_id for stream in self._streams):
            raise DuplicateVideoError(
                "Video already added.",
                hint="This video is already in your stream.",
            )

        stream = Stream(
            id=_new_stream_id(),
            source_url=url,
            video_id=video_id,
            title=f"YouTube Video {len(self._streams) + 1}",
            thumbnail_url=default_thumbnail_url(video_id),
        )
        self._streams.append(stream)
        logger.debug("Added stream %s (video %s)", stream.id, video_id)

        self._notify(
            MutationEvent(
                event_type=EventType.VIDEO_ADDED,
                video_id=video_id,
                screen_count=len(self._streams),
            )
        )
        return stream

    def remove_stream(self, stream_id: str) -> Stream:
        """Remove and return the stream with handle *stream_id*.

        Raises
        ------
        StreamNotFoundError
            If no such stream exists.
        """
        stream = self._streams.pop(self._index_of(stream_id))
        logger.debug("Removed stream %s (video %s)", stream.id, stream.video_id)

        self._notify(
            MutationEvent(
                event_type=EventType.VIDEO_REMOVED,
                video_id=stream.video_id,
                screen_count=len(self._streams),
            )
        )
        return stream

    def toggle_play(self, stream_id: str) -> Stream:
        """Flip ``is_playing`` for one stream.  No notification."""
        index = self._index_of(stream_id)
        current = self._streams[index]
        updated = dataclasses.replace(current, is_playing=not current.is_playing)
        self._streams[index] = updated
        return updated

    def toggle_mute(self, stream_id: str) -> Stream:
        """Flip ``is_muted`` for one stream.  No notification."""
        index = self._index_of(stream_id)
        current = self._streams[index]
        updated = dataclasses.replace(current, is_muted=not current.is_muted)
        self._streams[index] = updated
        return updated

    def replace_metadata(
        self,
        stream_id: str,
        *,
        title: str | None = None,
        thumbnail_url: str | None = None,
    ) -> Stream:
        """Replace display metadata for one stream.  No notification."""
        index = self._index_of(stream_id)
        current = self._streams[index]
        updated = dataclasses.replace(
            current,
            title=title if title is not None else current.title,
            thumbnail_url=(
                thumbnail_url if thumbnail_url is not None else current.thumbnail_url
            ),
        )
        self._streams[index] = updated
        return updated

    def clear(self) -> None:
        """Drop every stream without notifying listeners."""
        self._streams.clear()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _index_of(self, stream_id: str) -> int:
        for index, stream in enumerate(self._streams):
            if stream.id == stream_id:
                return index
        raise StreamNotFoundError(f"No stream with id {stream_id!r}.")
