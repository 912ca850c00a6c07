"""Coalesce bursts of color edits into a single save."""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from umbra.colormap import ColorEdit, ColorMap, merge_edits
from umbra.errors import UmbraError

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], Any]


class DebouncedWriter:
    """Queue edits and flush them together after a quiet period.

    Each ``queue`` call restarts the timer. When it fires, every queued edit
    is merged onto the last flushed snapshot (later edits win) and
    ``on_flush`` receives that one combined color map.

    ``timer_factory`` must return an object with ``start()`` and ``cancel()``,
    like ``threading.Timer``.
    """

    def __init__(
        self,
        on_flush: Callable[[ColorMap], Any],
        base: ColorMap | None = None,
        delay: float = 2.0,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self._on_flush = on_flush
        self._base: ColorMap = dict(base or {})
        self._delay = delay
        self._timer_factory = timer_factory or self._default_timer
        self._lock = threading.RLock()
        self._flush_lock = threading.Lock()
        self._edits: list[ColorEdit] = []
        self._timer: Any = None

    @staticmethod
    def _default_timer(delay: float, fn: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, fn)
        timer.daemon = True
        return timer

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._edits)

    def current(self) -> ColorMap:
        """The flushed snapshot with pending edits applied."""
        with self._lock:
            return merge_edits(self._base, self._edits)

    def rebase(self, color_map: ColorMap) -> None:
        """Replace the snapshot that pending edits are merged onto.

        Called when the color map is saved by some other path, so the next
        flush does not write back a stale copy.
        """
        with self._lock:
            self._base = dict(color_map)

    def queue(self, edit: ColorEdit) -> None:
        with self._lock:
            self._edits.append(edit)
            self._restart_timer()

    def _restart_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._timer_factory(self._delay, self._fire)
        self._timer.start()

    def cancel(self) -> None:
        """Stop the pending timer; queued edits are kept."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> ColorMap | None:
        """Merge queued edits and hand the snapshot to ``on_flush`` now.

        Returns the flushed snapshot, or ``None`` if nothing was queued.
        """
        with self._flush_lock:
            with self._lock:
                if self._timer is not None:
                    self._timer.cancel()
                    self._timer = None
                if not self._edits:
                    return None
                snapshot = merge_edits(self._base, self._edits)
                self._base = snapshot
                self._edits = []
            logger.debug("Flushing color map for %d stylesheet(s)", len(snapshot))
            self._on_flush(snapshot)
            return snapshot

    def _fire(self) -> None:
        try:
            self.flush()
        except UmbraError:
            logger.exception("Debounced save failed")
