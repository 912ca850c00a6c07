"""Save pipeline: persist the color map, reconcile stylesheets, notify listeners."""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from umbra.colormap import ColorMap, selector_map, validate_color_map
from umbra.errors import NotFoundError, ParseError, PersistenceError
from umbra.events.bus import EventBus
from umbra.events.types import ColorsSaved, StylesheetFailed, StylesheetReconciled
from umbra.store.files import ColorMapStore, StylesheetStore
from umbra.stylesheet.reconcile import reconcile_with_changes

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    NOT_FOUND = "not-found"
    PARSE_ERROR = "parse-error"
    IO_ERROR = "io-error"


@dataclass(frozen=True)
class FileFailure:
    kind: FailureKind
    message: str


@dataclass
class SaveReport:
    """Per-stylesheet outcome of one save or apply."""

    updated_files: list[str] = field(default_factory=list)
    failures: dict[str, FileFailure] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "updatedFiles": list(self.updated_files),
            "failures": {
                name: {"kind": f.kind.value, "message": f.message}
                for name, f in self.failures.items()
            },
        }


class DarkModeService:
    """Owns the persisted color map and keeps stylesheets in sync with it.

    Calls touching the same stylesheet are serialized with a per-file lock
    so concurrent saves cannot interleave their read-modify-write.
    """

    def __init__(
        self,
        color_store: ColorMapStore,
        stylesheet_store: StylesheetStore,
        bus: EventBus | None = None,
        stylesheets: Iterable[str] = (),
    ) -> None:
        self._color_store = color_store
        self._stylesheet_store = stylesheet_store
        self._bus = bus or EventBus()
        self._stylesheets = tuple(stylesheets)
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def color_store(self) -> ColorMapStore:
        return self._color_store

    @property
    def stylesheet_store(self) -> StylesheetStore:
        return self._stylesheet_store

    def load_colors(self) -> ColorMap:
        """Current persisted color map; ``{}`` when none is configured."""
        return validate_color_map(self._color_store.load_or_empty())

    def save(self, payload: object) -> SaveReport:
        """Validate, persist and apply a full color map.

        Raises ``ValidationError`` before anything is written, and
        ``PersistenceError`` if the color map itself cannot be stored.
        Stylesheet failures are reported per file in the returned report.
        """
        color_map = validate_color_map(payload)
        self._color_store.save(color_map)
        return self.apply(color_map)

    def apply(self, color_map: ColorMap | None = None) -> SaveReport:
        """Reconcile every affected stylesheet and broadcast the outcome."""
        if color_map is None:
            color_map = validate_color_map(self._color_store.load())

        report = SaveReport()
        for name in self._affected(color_map):
            failure = self._reconcile_file(name, selector_map(color_map, name))
            if failure is None:
                report.updated_files.append(name)
            else:
                report.failures[name] = failure

        self._bus.emit(
            ColorsSaved(
                updated_files=tuple(report.updated_files),
                failed_files=tuple(report.failures),
            )
        )
        return report

    def _affected(self, color_map: ColorMap) -> list[str]:
        names = list(color_map)
        names.extend(n for n in self._stylesheets if n not in color_map)
        return names

    def _lock_for(self, name: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(name, threading.Lock())

    def _reconcile_file(self, name: str, desired: dict[str, dict[str, str]]) -> FileFailure | None:
        with self._lock_for(name):
            try:
                original = self._stylesheet_store.read(name)
                result = reconcile_with_changes(original, desired)
                for change in result.changes:
                    logger.debug("%s: %s", name, change.describe())
                if result.text != original:
                    self._stylesheet_store.write(name, result.text)
            except NotFoundError as exc:
                return self._fail(name, FailureKind.NOT_FOUND, exc)
            except ParseError as exc:
                return self._fail(name, FailureKind.PARSE_ERROR, exc)
            except (PersistenceError, OSError) as exc:
                return self._fail(name, FailureKind.IO_ERROR, exc)

        logger.info("Updated dark mode styles in %s", name)
        self._bus.emit(StylesheetReconciled(stylesheet=name, changes=len(result.changes)))
        return None

    def _fail(self, name: str, kind: FailureKind, exc: Exception) -> FileFailure:
        logger.warning("Skipping %s (%s): %s", name, kind.value, exc)
        self._bus.emit(StylesheetFailed(stylesheet=name, kind=kind.value, error=str(exc)))
        return FileFailure(kind=kind, message=str(exc))
