"""Non-blocking event channel between input threads and the render loop.

Many producers (pynput callbacks, macro tasks) may ``send`` concurrently;
exactly one consumer drains with ``try_recv``, which never blocks.
Once ``close`` is called every later ``send`` raises ChannelClosed.
"""
from __future__ import annotations

import queue
import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """The consumer has gone away; nothing will ever read this message."""


class EventChannel(Generic[T]):
    def __init__(self) -> None:
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._closed = threading.Event()

    def send(self, item: T) -> None:
        if self._closed.is_set():
            raise ChannelClosed("event channel is closed")
        self._queue.put(item)

    def try_recv(self) -> Optional[T]:
        """Return the oldest pending item, or None when the channel is empty."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def close(self) -> None:
        self._closed.set()
