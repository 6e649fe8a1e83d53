"""Tests for domain models (core/models.py).

Records are frozen dataclasses; these tests verify immutability,
equality semantics and derived properties.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from split_stream.core.models import (
    AnalyticsEvent,
    EventType,
    LayoutDescriptor,
    SessionSummary,
    Stream,
    default_thumbnail_url,
)


def _make_stream(**overrides: object) -> Stream:
    defaults: dict[str, object] = {
        "id": "stream_1",
        "source_url": "https://youtu.be/abc123",
        "video_id": "abc123",
        "title": "YouTube Video 1",
        "thumbnail_url": default_thumbnail_url("abc123"),
    }
    defaults.update(overrides)
    return Stream(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Stream
# ---------------------------------------------------------------------------

class TestStream:
    def test_defaults(self) -> None:
        s = _make_stream()
        assert s.is_playing is False
        assert s.is_muted is False

    def test_frozen(self) -> None:
        s = _make_stream()
        with pytest.raises(AttributeError):
            s.title = "Changed"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert _make_stream() == _make_stream()
        assert _make_stream(id="a") != _make_stream(id="b")

    def test_embed_url_idle(self) -> None:
        assert _make_stream().embed_url == (
            "https://www.youtube.com/embed/abc123?autoplay=0&mute=0&rel=0"
        )

    def test_embed_url_reflects_state(self) -> None:
        s = _make_stream(is_playing=True, is_muted=True)
        assert "autoplay=1&mute=1" in s.embed_url

    def test_thumbnail(self) -> None:
        assert default_thumbnail_url("xyz") == "https://img.youtube.com/vi/xyz/mqdefault.jpg"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class TestRecords:
    def test_event_type_wire_names(self) -> None:
        assert [e.value for e in EventType] == [
            "session_start",
            "video_added",
            "video_removed",
            "video_favorited",
            "session_shared",
            "session_end",
        ]

    def test_event_frozen(self) -> None:
        event = AnalyticsEvent(
            event_type=EventType.VIDEO_ADDED,
            payload={"video_id": "a"},
            session_id="s",
            emitted_at=datetime.now(timezone.utc),
        )
        with pytest.raises(AttributeError):
            event.session_id = "other"  # type: ignore[misc]
        assert event.actor_id is None

    def test_summary_fields(self) -> None:
        ended = datetime(2024, 1, 1, tzinfo=timezone.utc)
        summary = SessionSummary(
            session_id="s",
            video_ids=("a", "b"),
            screen_count=2,
            duration_seconds=30,
            ended_at=ended,
        )
        assert summary.video_ids == ("a", "b")
        assert summary.started_at is None


# ---------------------------------------------------------------------------
# LayoutDescriptor
# ---------------------------------------------------------------------------

class TestLayoutDescriptor:
    def test_empty(self) -> None:
        layout = LayoutDescriptor(columns=0, rows=0)
        assert layout.is_empty
        assert layout.css_classes() == ""

    def test_css_classes(self) -> None:
        layout = LayoutDescriptor(
            columns=3, rows=1, breakpoints=(("base", 1), ("md", 2), ("lg", 3)),
        )
        assert layout.css_classes() == "grid-cols-1 md:grid-cols-2 lg:grid-cols-3"
