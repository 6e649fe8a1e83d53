"""Tests for the Session façade (core/session.py).

Uses real in-memory collaborators; share and clipboard are mocks so
their call order can be asserted.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from split_stream.core.models import (
    AnalyticsEvent,
    EventType,
    SaveResult,
    SessionSummary,
    ShareOutcome,
    ShareResult,
)
from split_stream.core.session import Session
from split_stream.exceptions import (
    AlreadyExistsError,
    AuthRequiredError,
    FavoriteSaveError,
    InvalidSourceError,
    SessionClosedError,
    SinkFailureError,
)
from split_stream.infra.memory import MemoryFavoritesStore, MemorySink, StaticIdentity

from tests.conftest import T0, FakeClock


def _types(sink: MemorySink) -> list[EventType]:
    return [e.event_type for e in sink.events]


# ---------------------------------------------------------------------------
# Start and mutations
# ---------------------------------------------------------------------------

class TestSessionStart:
    def test_not_started_until_first_add(self, session: Session, sink: MemorySink) -> None:
        assert session.started_at is None
        assert sink.records == []

    def test_first_add_starts_session(
        self, session: Session, sink: MemorySink, clock: FakeClock,
    ) -> None:
        clock.advance(5)
        session.add_stream("https://youtu.be/a1")
        assert session.started_at == T0 + 5
        assert _types(sink) == [EventType.SESSION_START, EventType.VIDEO_ADDED]
        assert all(e.session_id == "session_test" for e in sink.events)

    def test_session_start_emitted_once(self, session: Session, sink: MemorySink) -> None:
        a = session.add_stream("https://youtu.be/a1")
        session.add_stream("https://youtu.be/b2")
        session.remove_stream(a.id)
        assert _types(sink) == [
            EventType.SESSION_START,
            EventType.VIDEO_ADDED,
            EventType.VIDEO_ADDED,
            EventType.VIDEO_REMOVED,
        ]

    def test_rejected_add_emits_nothing(self, session: Session, sink: MemorySink) -> None:
        with pytest.raises(InvalidSourceError):
            session.add_stream("not a url")
        assert sink.records == []
        assert session.started_at is None

    def test_toggles_emit_nothing(self, session: Session, sink: MemorySink) -> None:
        stream = session.add_stream("https://youtu.be/a1")
        before = len(sink.records)
        session.toggle_play(stream.id)
        session.toggle_mute(stream.id)
        assert len(sink.records) == before

    def test_anonymous_session_records_nothing(self, clock: FakeClock) -> None:
        sink = MemorySink()
        session = Session(2, identity=StaticIdentity(None), sink=sink, clock=clock)
        session.add_stream("https://youtu.be/a1")
        session.close()
        assert sink.records == []

    def test_session_ids_are_unique(self, sink: MemorySink) -> None:
        identity = StaticIdentity("u")
        a = Session(1, identity=identity, sink=sink)
        b = Session(1, identity=identity, sink=sink)
        assert a.session_id != b.session_id
        assert a.session_id.startswith("session_")


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------

class TestFavorite:
    def test_saves_and_records(
        self, session: Session, sink: MemorySink, favorites: MemoryFavoritesStore,
    ) -> None:
        stream = session.add_stream("https://youtu.be/a1")
        session.favorite(stream.id)
        assert favorites.video_ids_for("user-1") == ["a1"]
        assert _types(sink)[-1] is EventType.VIDEO_FAVORITED

    def test_requires_sign_in(
        self,
        session: Session,
        sink: MemorySink,
        identity: StaticIdentity,
        favorites: MemoryFavoritesStore,
    ) -> None:
        stream = session.add_stream("https://youtu.be/a1")
        identity.sign_out()
        before = len(sink.records)
        with pytest.raises(AuthRequiredError):
            session.favorite(stream.id)
        assert favorites.video_ids_for("user-1") == []
        assert len(sink.records) == before

    def test_already_exists_is_distinct(self, session: Session, sink: MemorySink) -> None:
        stream = session.add_stream("https://youtu.be/a1")
        session.favorite(stream.id)
        with pytest.raises(AlreadyExistsError):
            session.favorite(stream.id)
        assert _types(sink).count(EventType.VIDEO_FAVORITED) == 1

    def test_store_failure_wrapped(self, clock: FakeClock, sink: MemorySink) -> None:
        store = MagicMock()
        store.save.side_effect = RuntimeError("db down")
        session = Session(2, identity=StaticIdentity("u"), sink=sink, favorites=store)
        stream = session.add_stream("https://youtu.be/a1")
        with pytest.raises(FavoriteSaveError, match="db down"):
            session.favorite(stream.id)

    def test_store_receives_metadata(self, sink: MemorySink) -> None:
        store = MagicMock()
        store.save.return_value = SaveResult.SAVED
        session = Session(2, identity=StaticIdentity("u"), sink=sink, favorites=store)
        stream = session.add_stream("https://youtu.be/a1")
        session.favorite(stream.id)
        store.save.assert_called_once_with(
            "u", "a1", "YouTube Video 1", stream.thumbnail_url,
        )


# ---------------------------------------------------------------------------
# Share
# ---------------------------------------------------------------------------

class TestShare:
    def _session(self, sink: MemorySink, share: MagicMock, clipboard: MagicMock) -> Session:
        session = Session(
            2,
            identity=StaticIdentity("u"),
            sink=sink,
            share=share,
            clipboard=clipboard,
            share_url="https://example.test/s",
        )
        session.add_stream("https://youtu.be/a1")
        return session

    def test_native_share(self, sink: MemorySink) -> None:
        share, clipboard = MagicMock(), MagicMock()
        share.native_share.return_value = ShareResult.SHARED
        session = self._session(sink, share, clipboard)

        assert session.share() is ShareOutcome.SHARED
        clipboard.copy.assert_not_called()
        payload = share.native_share.call_args.args[0]
        assert payload["url"] == "https://example.test/s"
        assert "1 videos" in payload["text"]
        assert _types(sink).count(EventType.SESSION_SHARED) == 1

    def test_unsupported_falls_back(self, sink: MemorySink) -> None:
        share, clipboard = MagicMock(), MagicMock()
        share.native_share.return_value = ShareResult.UNSUPPORTED
        session = self._session(sink, share, clipboard)

        assert session.share() is ShareOutcome.COPIED
        clipboard.copy.assert_called_once_with("https://example.test/s")
        assert _types(sink).count(EventType.SESSION_SHARED) == 1

    def test_share_failure_falls_back(self, sink: MemorySink) -> None:
        share, clipboard = MagicMock(), MagicMock()
        share.native_share.side_effect = RuntimeError("dismissed")
        session = self._session(sink, share, clipboard)

        assert session.share() is ShareOutcome.COPIED
        assert _types(sink).count(EventType.SESSION_SHARED) == 1

    def test_event_recorded_before_share_attempt(self, sink: MemorySink) -> None:
        seen: list[int] = []
        share, clipboard = MagicMock(), MagicMock()

        def _native_share(payload: object) -> ShareResult:
            seen.append(_types(sink).count(EventType.SESSION_SHARED))
            return ShareResult.UNSUPPORTED

        share.native_share.side_effect = _native_share
        session = self._session(sink, share, clipboard)
        session.share()
        assert seen == [1]


# ---------------------------------------------------------------------------
# Close
# ---------------------------------------------------------------------------

class TestClose:
    def test_records_summary_and_end(
        self, session: Session, sink: MemorySink, clock: FakeClock,
    ) -> None:
        session.add_stream("https://youtu.be/a1")
        clock.advance(125)
        summary = session.close()

        assert summary is not None
        assert summary.duration_seconds == 125
        assert summary.video_ids == ("a1",)
        assert isinstance(sink.records[-2], SessionSummary)
        last = sink.records[-1]
        assert isinstance(last, AnalyticsEvent)
        assert last.event_type is EventType.SESSION_END

    def test_close_empties_collection(self, session: Session) -> None:
        session.add_stream("https://youtu.be/a1")
        session.close()
        assert session.closed
        assert session.collection.size() == 0

    def test_close_is_idempotent(self, session: Session, sink: MemorySink) -> None:
        session.add_stream("https://youtu.be/a1")
        session.close()
        count = len(sink.records)
        assert session.close() is None
        assert len(sink.records) == count

    def test_never_started_records_nothing(self, session: Session, sink: MemorySink) -> None:
        assert session.close() is None
        assert sink.records == []

    def test_commands_after_close_rejected(self, session: Session) -> None:
        session.close()
        with pytest.raises(SessionClosedError):
            session.add_stream("https://youtu.be/a1")

    def test_context_manager_closes(self, sink: MemorySink, clock: FakeClock) -> None:
        with Session(2, identity=StaticIdentity("u"), sink=sink, clock=clock) as session:
            session.add_stream("https://youtu.be/a1")
            clock.advance(3)
        assert session.closed
        assert sink.summaries[0].duration_seconds == 3


# ---------------------------------------------------------------------------
# Analytics failures never affect composition
# ---------------------------------------------------------------------------

class TestSinkFailures:
    @staticmethod
    def _session(sink: MagicMock, clock: FakeClock) -> Session:
        return Session(2, identity=StaticIdentity("user-1"), sink=sink, clock=clock)

    def test_raising_sink(self, clock: FakeClock) -> None:
        sink = MagicMock()
        sink.append.side_effect = SinkFailureError("disk full")
        session = self._session(sink, clock)

        a = session.add_stream("https://youtu.be/a1")
        session.add_stream("https://youtu.be/b2")
        assert session.collection.size() == 2
        session.remove_stream(a.id)
        assert session.collection.video_ids() == ["b2"]
        session.add_stream("https://youtu.be/a1")
        assert session.collection.video_ids() == ["b2", "a1"]

        clock.advance(30)
        summary = session.close()
        assert summary is not None
        assert summary.duration_seconds == 30
        assert summary.video_ids == ("b2", "a1")
        assert sink.append.call_count > 0

    def test_rejecting_sink(self, clock: FakeClock) -> None:
        sink = MagicMock()
        sink.append.return_value = False
        session = self._session(sink, clock)

        stream = session.add_stream("https://youtu.be/a1")
        session.remove_stream(stream.id)
        assert session.collection.size() == 0
        session.add_stream("https://youtu.be/b2")
        assert session.close() is not None

    def test_unexpected_sink_error(self, clock: FakeClock) -> None:
        sink = MagicMock()
        sink.append.side_effect = RuntimeError("boom")
        session = self._session(sink, clock)
        session.add_stream("https://youtu.be/a1")
        assert session.collection.size() == 1


class TestIdentityFailures:
    @staticmethod
    def _session(sink: MemorySink, clock: FakeClock) -> tuple[Session, MagicMock]:
        identity = MagicMock()
        identity.current_actor.side_effect = RuntimeError("auth backend down")
        session = Session(2, identity=identity, sink=sink, clock=clock)
        return session, identity

    def test_add_and_remove_still_apply(
        self, sink: MemorySink, clock: FakeClock, caplog: pytest.LogCaptureFixture,
    ) -> None:
        session, _ = self._session(sink, clock)
        with caplog.at_level(logging.WARNING):
            stream = session.add_stream("https://youtu.be/a1")
        assert session.collection.video_ids() == ["a1"]
        assert session.started_at == T0
        assert sink.records == []
        assert "Identity lookup failed" in caplog.text

        session.remove_stream(stream.id)
        assert session.collection.size() == 0

    def test_close_still_ends_session(self, sink: MemorySink, clock: FakeClock) -> None:
        session, _ = self._session(sink, clock)
        session.add_stream("https://youtu.be/a1")
        assert session.close() is None
        assert session.closed
        assert session.collection.size() == 0

    def test_recording_resumes_when_identity_recovers(
        self, sink: MemorySink, clock: FakeClock,
    ) -> None:
        session, identity = self._session(sink, clock)
        session.add_stream("https://youtu.be/a1")
        identity.current_actor.side_effect = None
        identity.current_actor.return_value = "user-1"
        session.add_stream("https://youtu.be/b2")
        assert _types(sink) == [EventType.VIDEO_ADDED]
