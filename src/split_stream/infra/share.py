"""Share-capability adapters for environments without a share sheet."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from split_stream.core.models import ShareResult


class UnsupportedShare:
    """A platform with no native share facility.

    Always answers :attr:`ShareResult.UNSUPPORTED`, which sends callers
    down the clipboard fallback.
    """

    def native_share(self, payload: Mapping[str, Any]) -> ShareResult:
        return ShareResult.UNSUPPORTED


class CallbackClipboard:
    """:class:`~split_stream.core.protocols.Clipboard` that hands text to a callable.

    The CLI passes a function that renders the link so the user can copy
    it from the terminal.
    """

    def __init__(self, on_copy: Callable[[str], None]) -> None:
        self._on_copy = on_copy
        self.last_copied: str | None = None

    def copy(self, text: str) -> None:
        self.last_copied = text
        self._on_copy(text)
