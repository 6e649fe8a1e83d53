"""Non-blocking wrapper that delivers records on a worker thread.

Design
------
* A single-worker :class:`~concurrent.futures.ThreadPoolExecutor` keeps
  records in submission order.
* :meth:`BackgroundSink.append` returns as soon as the record is queued;
  the caller never waits on the inner sink.
* Failures inside the worker (a ``False`` return or any exception) are
  logged and counted, never raised.
* Records still queued when the process exits are abandoned.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType

from split_stream.core.protocols import Record, RecordSink

logger = logging.getLogger(__name__)


class BackgroundSink:
    """Fire-and-forget :class:`~split_stream.core.protocols.RecordSink`.

    Usage::

        with BackgroundSink(JsonlSink(path)) as sink:
            session = Session(4, identity=identity, sink=sink)
            ...
    """

    def __init__(self, inner: RecordSink) -> None:
        self._inner: RecordSink = inner
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="split-stream-sink",
        )
        self._failures: int = 0
        self._lock = threading.Lock()
        self._closed: bool = False

    @property
    def failures(self) -> int:
        """Number of records the inner sink failed to accept."""
        with self._lock:
            return self._failures

    def append(self, record: Record) -> bool:
        """Queue *record* for delivery.  Returns ``False`` once closed."""
        if self._closed:
            logger.warning("Dropping %s: background sink is closed", type(record).__name__)
            return False
        future = self._executor.submit(self._inner.append, record)
        future.add_done_callback(self._on_done)
        return True

    def _on_done(self, future: Future[bool]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.warning("Analytics delivery failed: %s", exc, exc_info=exc)
            self._record_failure()
        elif not future.result():
            logger.warning("Analytics sink rejected a record")
            self._record_failure()

    def _record_failure(self) -> None:
        with self._lock:
            self._failures += 1

    def close(self, *, wait: bool = True) -> None:
        """Stop accepting records.

        With ``wait=True`` (default) queued records are delivered first;
        with ``wait=False`` they are abandoned.
        """
        self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def __enter__(self) -> BackgroundSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
