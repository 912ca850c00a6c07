"""Simple synchronous event bus for save lifecycle events."""

import threading
from typing import Any, Callable


class EventBus:
    """Synchronous publish-subscribe event bus.

    Listeners can subscribe to specific event types or receive all events.
    Events are dispatched synchronously in registration order, over a
    snapshot of the listeners taken when ``emit`` is called.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: dict[type, list[Callable]] = {}
        self._global_listeners: list[Callable] = []

    def subscribe(self, event_type: type, callback: Callable) -> None:
        """Register a callback for a specific event type."""
        with self._lock:
            self._listeners.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Callable) -> None:
        """Register a callback that receives every event."""
        with self._lock:
            self._global_listeners.append(callback)

    def unsubscribe(self, callback: Callable) -> None:
        """Remove *callback* wherever it is registered."""
        with self._lock:
            if callback in self._global_listeners:
                self._global_listeners.remove(callback)
            for callbacks in self._listeners.values():
                if callback in callbacks:
                    callbacks.remove(callback)

    def emit(self, event: Any) -> None:
        """Dispatch an event to all matching listeners."""
        with self._lock:
            global_listeners = list(self._global_listeners)
            typed = list(self._listeners.get(type(event), []))
        for cb in global_listeners:
            cb(event)
        for cb in typed:
            cb(event)
