"""File-backed stores for the color map, attribute catalog and stylesheets."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from umbra.errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Load and save a single JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> dict[str, Any]:
        """Read the file. Raises ``NotFoundError`` if it does not exist."""
        if not self.exists():
            raise NotFoundError(str(self._path))
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{self._path} is not valid JSON: {exc}", cause=exc) from exc
        if not isinstance(data, dict):
            raise ValidationError(f"{self._path} must contain a JSON object")
        return data

    def load_or_empty(self) -> dict[str, Any]:
        """Read the file, treating a missing file as an empty object."""
        try:
            return self.load()
        except NotFoundError:
            return {}

    def save(self, data: dict[str, Any]) -> None:
        """Write *data* as indented JSON, creating parent directories."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(str(self._path), cause=exc) from exc
        logger.info("%s has been updated successfully.", self._path.name)


class ColorMapStore(JsonFileStore):
    """The persisted color map (``dark-mode-colors.json``)."""


class CatalogStore(JsonFileStore):
    """The attribute catalog (``color-properties.json``)."""


class StylesheetStore:
    """Stylesheets living in one directory, addressed by file name."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def resolve(self, name: str) -> Path:
        """Map a color-map key to a path inside the stylesheet directory."""
        root = self._directory.resolve()
        path = (root / name).resolve()
        if path == root or root not in path.parents:
            raise NotFoundError(name, f"Stylesheet {name!r} is outside {root}")
        return path

    def exists(self, name: str) -> bool:
        try:
            return self.resolve(name).is_file()
        except NotFoundError:
            return False

    def read(self, name: str) -> str:
        path = self.resolve(name)
        if not path.is_file():
            raise NotFoundError(str(path), f"CSS file not found: {path}")
        # newline="" keeps \r\n and \r as written
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()

    def write(self, name: str, text: str) -> None:
        path = self.resolve(name)
        try:
            with open(path, "w", encoding="utf-8", newline="") as fh:
                fh.write(text)
        except OSError as exc:
            raise PersistenceError(str(path), cause=exc) from exc
