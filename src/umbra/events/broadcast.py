"""Fan-out of state-changed messages to connected live-reload listeners."""

from __future__ import annotations

import json
import logging
import queue
import threading
from typing import Any

logger = logging.getLogger(__name__)


class Subscription:
    """One listener's bounded mailbox.

    When the mailbox is full the oldest message is dropped; listeners only
    need the latest "something changed" signal.
    """

    def __init__(self, broadcaster: Broadcaster, maxsize: int = 16) -> None:
        self._broadcaster = broadcaster
        self._queue: queue.Queue[str] = queue.Queue(maxsize=maxsize)

    def deliver(self, message: str) -> None:
        while True:
            try:
                self._queue.put_nowait(message)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    pass

    def get(self, timeout: float | None = None) -> str | None:
        """Wait for the next message; ``None`` on timeout."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._broadcaster.unsubscribe(self)


class Broadcaster:
    """Publish messages to every currently registered subscription."""

    def __init__(self, maxsize: int = 16) -> None:
        self._lock = threading.Lock()
        self._subscriptions: list[Subscription] = []
        self._maxsize = maxsize

    def subscribe(self) -> Subscription:
        sub = Subscription(self, maxsize=self._maxsize)
        with self._lock:
            self._subscriptions.append(sub)
        logger.info("Live-reload client connected")
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscriptions:
                self._subscriptions.remove(sub)
                logger.info("Live-reload client disconnected")

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, payload: dict[str, Any]) -> int:
        """Deliver *payload* as JSON to all listeners; return how many got it."""
        message = json.dumps(payload)
        with self._lock:
            targets = list(self._subscriptions)
        for sub in targets:
            sub.deliver(message)
        return len(targets)
