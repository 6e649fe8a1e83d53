"""Append-only JSON Lines record sink.

Each record becomes one line holding a JSON object with a ``kind``
field (``"event"`` or ``"summary"``).  Enums are written by
value and datetimes as ISO-8601 strings.

``OSError`` is re-raised as
:class:`~split_stream.exceptions.SinkFailureError`; nothing raw escapes.
"""

from __future__ import annotations

import dataclasses
import enum
import json
import threading
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from split_stream.core.models import AnalyticsEvent, SessionSummary
from split_stream.core.protocols import Record
from split_stream.exceptions import SinkFailureError


def _json_default(value: object) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def record_to_dict(record: Record) -> dict[str, Any]:
    """Convert a record to a JSON-ready dict tagged with its ``kind``."""
    if isinstance(record, AnalyticsEvent):
        kind = "event"
    elif isinstance(record, SessionSummary):
        kind = "summary"
    else:
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    data: dict[str, Any] = {"kind": kind}
    for f in dataclasses.fields(record):
        value = getattr(record, f.name)
        data[f.name] = dict(value) if f.name == "payload" else value
    return data


class JsonlSink:
    """Write records to *path*, one JSON object per line.

    Parent directories are created on first write.
    """

    def __init__(self, path: Path) -> None:
        self._path: Path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def append(self, record: Record) -> bool:
        line = json.dumps(record_to_dict(record), default=_json_default, sort_keys=True)
        try:
            with self._lock:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with self._path.open("a", encoding="utf-8") as fh:
                    fh.write(line + "\n")
        except OSError as exc:
            raise SinkFailureError(
                f"Could not write analytics record to {self._path}: {exc}",
            ) from exc
        return True


def read_records(path: Path) -> list[dict[str, Any]]:
    """Load every record previously written by :class:`JsonlSink`.

    Blank lines are skipped.  Returns an empty list when *path* does not
    exist.
    """
    if not path.exists():
        return []
    with path.open(encoding="utf-8") as fh:
        return [json.loads(line) for line in fh if line.strip()]
