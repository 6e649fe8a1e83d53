"""Pure video-identifier extraction from user-supplied URLs.

Every function in this module is a **pure** transformation with no I/O,
no side effects, fully deterministic.

Recognised shapes, tried in order (first match wins):

1. **Watch page** — ``youtube.com/watch?v=<id>``
2. **Short link** — ``youtu.be/<id>``
3. **Embed** — ``youtube.com/embed/<id>``

The captured identifier runs up to the next ``&``, ``?``, ``#``,
newline, or end of string.  Its shape is not validated further.
"""

from __future__ import annotations

import re
from collections.abc import Callable

VideoIdParser = Callable[[str], str | None]

_WATCH_RE = re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=([^&\n?#]+)")
_SHORT_RE = re.compile(r"(?:https?://)?(?:www\.)?youtu\.be/([^&\n?#]+)")
_EMBED_RE = re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/embed/([^&\n?#]+)")


def _search(pattern: re.Pattern[str], url: str) -> str | None:
    match = pattern.search(url)
    if match is None:
        return None
    return match.group(1)


def parse_watch_url(url: str) -> str | None:
    """Return the ``v`` query value of a full-domain watch URL."""
    return _search(_WATCH_RE, url)


def parse_short_url(url: str) -> str | None:
    """Return the first path segment of a ``youtu.be`` short link."""
    return _search(_SHORT_RE, url)


def parse_embed_url(url: str) -> str | None:
    """Return the segment following ``/embed/``."""
    return _search(_EMBED_RE, url)


PARSERS: tuple[VideoIdParser, ...] = (
    parse_watch_url,
    parse_short_url,
    parse_embed_url,
)
"""Parser order is significant and must not be changed."""


def extract_video_id(url: str) -> str | None:
    """Run *url* through :data:`PARSERS` and return the first capture.

    Returns ``None`` when no recognised shape matches.
    """
    for parser in PARSERS:
        video_id = parser(url)
        if video_id:
            return video_id
    return None
