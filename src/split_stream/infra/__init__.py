"""Infrastructure layer — concrete collaborators for the core.

This layer holds the record sinks, favorites store, identity and share
adapters, and the yt-dlp title lookup.  Every raw third-party or I/O
exception is caught here and re-raised as a
:class:`~split_stream.exceptions.SplitStreamError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from split_stream.infra.background_sink import BackgroundSink
from split_stream.infra.jsonl_sink import JsonlSink, read_records, record_to_dict
from split_stream.infra.memory import MemoryFavoritesStore, MemorySink, StaticIdentity
from split_stream.infra.share import CallbackClipboard, UnsupportedShare
from split_stream.infra.ytdlp_title_provider import YtDlpTitleProvider

__all__: list[str] = [
    "BackgroundSink",
    "CallbackClipboard",
    "JsonlSink",
    "MemoryFavoritesStore",
    "MemorySink",
    "StaticIdentity",
    "UnsupportedShare",
    "YtDlpTitleProvider",
    "read_records",
    "record_to_dict",
]
