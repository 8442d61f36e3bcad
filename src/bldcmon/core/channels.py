"""
One-way FIFO channels that carry commands and telemetry between threads.

Both ends only ever poll: producers never block on a full queue (channels are
unbounded) and consumers drain whatever is queued without waiting for more.
Closing is done by the consumer; afterwards producers get
:class:`ChannelClosed` from :meth:`Channel.send` or ``False`` from
:meth:`Channel.try_send`.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChannelClosed(RuntimeError):
    """Raised when sending into a channel whose consumer has gone away."""

    def __init__(self, name: str) -> None:
        super().__init__(f"channel {name!r} is closed")
        self.name = name


class Channel(Generic[T]):
    """Unbounded multi-producer, single-consumer FIFO queue."""

    def __init__(self, name: str = "channel") -> None:
        self.name = name
        self._queue: queue.SimpleQueue[T] = queue.SimpleQueue()
        self._closed = threading.Event()
        # makes the closed check and the put in send() atomic with close()
        self._lock = threading.Lock()

    # ---------------------------------------------------------------- producer
    def send(self, item: T) -> None:
        """Queue ``item`` without blocking; raises :class:`ChannelClosed`."""
        with self._lock:
            if self._closed.is_set():
                raise ChannelClosed(self.name)
            self._queue.put(item)

    def try_send(self, item: T) -> bool:
        """Fire-and-forget send. Returns ``False`` when the channel is closed."""
        try:
            self.send(item)
        except ChannelClosed:
            return False
        return True

    # ---------------------------------------------------------------- consumer
    def receive_nowait(self) -> T:
        """Return the oldest queued item or raise :class:`queue.Empty`."""
        return self._queue.get_nowait()

    def drain(self, limit: Optional[int] = None) -> List[T]:
        """
        Return every item queued right now, oldest first.

        Never waits: an empty channel yields an empty list. ``limit`` caps how
        many items are taken in one call; the rest stay queued.
        """
        drained: List[T] = []
        try:
            while limit is None or len(drained) < limit:
                drained.append(self._queue.get_nowait())
        except queue.Empty:
            pass
        return drained

    def close(self) -> None:
        """Mark the consumer as gone and discard anything still queued."""
        with self._lock:
            if self._closed.is_set():
                return
            self._closed.set()
        dropped = len(self.drain())
        if dropped:
            logger.debug("Channel %s closed with %d pending item(s) dropped", self.name, dropped)

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def __len__(self) -> int:
        # approximate under concurrent use
        return self._queue.qsize()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Channel {self.name!r} {state} depth={len(self)}>"
