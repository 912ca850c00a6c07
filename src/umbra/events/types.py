"""Event types emitted when the color map changes."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ColorsSaved:
    updated_files: tuple[str, ...] = ()
    failed_files: tuple[str, ...] = ()


@dataclass(frozen=True)
class StylesheetReconciled:
    stylesheet: str
    changes: int = 0


@dataclass(frozen=True)
class StylesheetFailed:
    stylesheet: str
    kind: str
    error: str = field(default="")
