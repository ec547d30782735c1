"""Fan-out of messages to listener queues, grouped into named rooms."""

from __future__ import annotations

import queue
import threading
from typing import Any

CLOSED = object()
"""Put on a listener queue when no more messages will arrive on it."""


class Broadcaster:
    """Delivers every submitted message to each registered listener queue."""

    def __init__(self) -> None:
        self._listeners: list[queue.Queue] = []
        self._lock = threading.Lock()
        self.closed = False

    def register(self, listener: queue.Queue) -> None:
        with self._lock:
            if self.closed:
                raise RuntimeError("broadcaster is closed")
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unregister(self, listener: queue.Queue) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def submit(self, message: Any) -> None:
        with self._lock:
            if self.closed:
                raise RuntimeError("broadcaster is closed")
            for listener in self._listeners:
                listener.put(message)

    def close(self) -> None:
        """Refuse further messages and tell every listener the stream has ended."""
        with self._lock:
            if self.closed:
                return
            self.closed = True
            listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener.put(CLOSED)


class RoomRegistry:
    """Broadcasters keyed by room id, created on first use."""

    def __init__(self) -> None:
        self._rooms: dict[str, Broadcaster] = {}
        self._lock = threading.Lock()

    def room(self, roomid: str) -> Broadcaster:
        with self._lock:
            return self._rooms.setdefault(roomid, Broadcaster())

    def open_listener(self, roomid: str) -> queue.Queue:
        listener: queue.Queue = queue.Queue()
        self.room(roomid).register(listener)
        return listener

    def close_listener(self, roomid: str, listener: queue.Queue) -> None:
        self.room(roomid).unregister(listener)
        listener.put(CLOSED)

    def delete(self, roomid: str) -> None:
        with self._lock:
            broadcaster = self._rooms.pop(roomid, None)
        if broadcaster is not None:
            broadcaster.close()