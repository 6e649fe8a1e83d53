"""yt-dlp backed implementation of :class:`~split_stream.core.protocols.TitleProvider`.

This module is the **only** place in the codebase that imports ``yt_dlp``.
All yt-dlp exceptions are caught here and re-raised as
:class:`~split_stream.exceptions.MetadataLookupError`; nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

from typing import Any

from split_stream.exceptions import EnvironmentError, MetadataLookupError

WATCH_URL_TEMPLATE: str = "https://www.youtube.com/watch?v={video_id}"


class YtDlpTitleProvider:
    """Resolve video titles through the yt-dlp Python API.

    Usage::

        provider = YtDlpTitleProvider()
        title = provider.fetch_title("dQw4w9WgXcQ")
    """

    # Substrings in yt-dlp error messages that indicate the video itself
    # is unavailable rather than a transient failure.
    _UNAVAILABLE_SIGNALS: tuple[str, ...] = (
        "unavailable",
        "private video",
        "removed",
        "not available",
    )

    @staticmethod
    def _build_opts() -> dict[str, Any]:
        """Return yt-dlp options for a metadata-only lookup."""
        return {
            "quiet": True,
            "no_warnings": True,
            "no_color": True,
            "skip_download": True,
        }

    def fetch_title(self, video_id: str) -> str | None:
        """Return the title of *video_id*, or ``None`` if yt-dlp has none.

        Raises
        ------
        EnvironmentError
            When yt-dlp is not installed.
        MetadataLookupError
            For every extraction failure.
        """
        try:
            import yt_dlp
            import yt_dlp.utils
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "yt-dlp is not installed. Install with: pip install yt-dlp",
            ) from exc

        url = WATCH_URL_TEMPLATE.format(video_id=video_id)
        try:
            with yt_dlp.YoutubeDL(self._build_opts()) as ydl:
                info: Any = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as exc:
            self._raise_mapped(exc)
        except Exception as exc:
            raise MetadataLookupError(
                f"Unexpected yt-dlp error: {exc}",
            ) from exc

        if not isinstance(info, dict):
            return None

        title = info.get("title")
        return str(title) if title else None

    @classmethod
    def _raise_mapped(cls, exc: Exception) -> None:
        """Translate a yt-dlp ``DownloadError``.  Always raises."""
        msg_lower = str(exc).lower()
        if any(signal in msg_lower for signal in cls._UNAVAILABLE_SIGNALS):
            raise MetadataLookupError(
                str(exc),
                hint="The video may be private, removed, or geo-restricted.",
            ) from exc
        raise MetadataLookupError(str(exc)) from exc
