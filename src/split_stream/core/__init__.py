"""Core / domain layer — stream composition and session analytics.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from split_stream.core.layout import layout_for
from split_stream.core.models import (
    AnalyticsEvent,
    EventType,
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
    TitleProvider,
)
from split_stream.core.session import Session
from split_stream.core.session_recorder import SessionRecorder
from split_stream.core.stream_collection import StreamCollection
from split_stream.core.tiers import SubscriptionProfile, Tier, capacity_for
from split_stream.core.url_parser import extract_video_id

__all__: list[str] = [
    "AnalyticsEvent",
    "Clipboard",
    "EventType",
    "FavoritesStore",
    "IdentityProvider",
    "LayoutDescriptor",
    "MutationEvent",
    "RecordSink",
    "SaveResult",
    "Session",
    "SessionRecorder",
    "SessionSummary",
    "ShareCapability",
    "ShareOutcome",
    "ShareResult",
    "Stream",
    "StreamCollection",
    "SubscriptionProfile",
    "Tier",
    "TitleProvider",
    "capacity_for",
    "extract_video_id",
    "layout_for",
]
