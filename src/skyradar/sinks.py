"""Output channels from the controller to the presentation layer.

Both channels are written by the scanning loop and never block it:

* :class:`SnapshotChannel` keeps only the latest snapshot (replace-latest
  buffer of size one). A consumer that falls behind skips intermediate
  snapshots rather than delaying the loop.
* :class:`LogChannel` keeps a capped FIFO of diagnostic events; when full,
  the oldest event is dropped.

Consumers either ``await channel.get()`` or register a push listener with
``subscribe``. Listeners run inline on the event loop and must be quick.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from typing import Generic, TypeVar

from skyradar.models.log import LogEvent
from skyradar.models.snapshot import Snapshot

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Listeners(Generic[T]):
    def __init__(self) -> None:
        self._callbacks: list[Callable[[T], None]] = []

    def add(self, callback: Callable[[T], None]) -> Callable[[], None]:
        self._callbacks.append(callback)

        def _unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _unsubscribe

    def notify(self, item: T) -> None:
        for callback in list(self._callbacks):
            try:
                callback(item)
            except Exception:
                _logger.exception("Listener %r raised; ignoring", callback)


class SnapshotChannel:
    """Latest-wins snapshot buffer."""

    def __init__(self) -> None:
        self._latest: Snapshot | None = None
        self._version = 0
        self._seen_version = 0
        self._changed = asyncio.Event()
        self._listeners: _Listeners[Snapshot] = _Listeners()

    @property
    def latest(self) -> Snapshot | None:
        return self._latest

    def publish(self, snapshot: Snapshot) -> None:
        self._latest = snapshot
        self._version += 1
        self._changed.set()
        self._listeners.notify(snapshot)

    async def get(self) -> Snapshot:
        """Wait for a snapshot newer than the last one returned by ``get``."""
        while self._version == self._seen_version:
            self._changed.clear()
            await self._changed.wait()
        self._seen_version = self._version
        assert self._latest is not None  # noqa: S101
        return self._latest

    def subscribe(self, callback: Callable[[Snapshot], None]) -> Callable[[], None]:
        """Register *callback* for every published snapshot; returns an unsubscribe callable."""
        return self._listeners.add(callback)


class LogChannel:
    """Capped FIFO of diagnostic events."""

    def __init__(self, capacity: int = 500) -> None:
        self._history: deque[LogEvent] = deque(maxlen=capacity)
        self._pending: deque[LogEvent] = deque(maxlen=capacity)
        self._changed = asyncio.Event()
        self._listeners: _Listeners[LogEvent] = _Listeners()

    @property
    def capacity(self) -> int:
        return self._history.maxlen or 0

    def publish(self, event: LogEvent) -> None:
        self._history.append(event)
        self._pending.append(event)
        self._changed.set()
        self._listeners.notify(event)

    def history(self) -> list[LogEvent]:
        """Retained events, oldest first."""
        return list(self._history)

    async def get(self) -> LogEvent:
        """Pop the oldest event not yet returned, waiting if there is none."""
        while not self._pending:
            self._changed.clear()
            await self._changed.wait()
        return self._pending.popleft()

    def subscribe(self, callback: Callable[[LogEvent], None]) -> Callable[[], None]:
        return self._listeners.add(callback)
