from __future__ import annotations

import queue
import threading
from typing import Iterator, Optional

from ..core.constants import DEFAULT_EVENT_QUEUE_SIZE
from ..core.enums import ChangeType


class Subscription:
    """One listener's bounded queue of change events."""

    def __init__(self, notifier: "ChangeNotifier", maxsize: int):
        self._notifier = notifier
        self._queue: "queue.Queue[ChangeType]" = queue.Queue(maxsize=maxsize)

    def offer(self, change: ChangeType) -> None:
        # Slow listener: drop its oldest event rather than block the publisher.
        while True:
            try:
                self._queue.put_nowait(change)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    pass

    def get(self, timeout: Optional[float] = None) -> Optional[ChangeType]:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> list[ChangeType]:
        items: list[ChangeType] = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except queue.Empty:
                return items

    def close(self) -> None:
        self._notifier.unsubscribe(self)


class ChangeNotifier:
    """Publish "collection X changed" events to every subscriber.

    Services publish after a mutation has been committed; listeners (the SSE
    endpoint, tests) refresh their views from the store.
    """

    def __init__(self, *, queue_size: int = DEFAULT_EVENT_QUEUE_SIZE):
        self._queue_size = int(queue_size)
        self._lock = threading.Lock()
        self._subscribers: list[Subscription] = []

    def subscribe(self) -> Subscription:
        sub = Subscription(self, self._queue_size)
        with self._lock:
            self._subscribers.append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscribers:
                self._subscribers.remove(sub)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, *changes: ChangeType) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for change in changes:
            for sub in subscribers:
                sub.offer(change)

    def stream(self, sub: Subscription, *, heartbeat_seconds: float = 15.0) -> Iterator[Optional[ChangeType]]:
        """Yield events forever; ``None`` marks an idle heartbeat."""
        while True:
            yield sub.get(timeout=heartbeat_seconds)
