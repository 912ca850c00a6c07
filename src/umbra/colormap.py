"""ColorMap types and pure helpers for validating and editing them."""
from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from umbra.errors import ValidationError

# selector -> property -> color value
SelectorMap = dict[str, dict[str, str]]
# stylesheet -> selector -> property -> color value
ColorMap = dict[str, SelectorMap]

INVALID_FORMAT = "Invalid data format."


@dataclass(frozen=True)
class ColorEdit:
    """A single override change; a ``None`` value removes the override."""

    stylesheet: str
    selector: str
    prop: str
    value: str | None = None

    @property
    def is_removal(self) -> bool:
        return self.value is None


def validate_color_map(payload: object) -> ColorMap:
    """Check that *payload* is a three-level mapping of strings.

    Returns a fresh ``ColorMap`` copy. Raises ``ValidationError`` naming the
    first offending path otherwise.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(INVALID_FORMAT)

    result: ColorMap = {}
    for stylesheet, selectors in payload.items():
        if not isinstance(stylesheet, str) or not stylesheet:
            raise ValidationError(f"{INVALID_FORMAT} Stylesheet names must be non-empty strings.")
        if not isinstance(selectors, Mapping):
            raise ValidationError(f"{INVALID_FORMAT} Expected an object at {stylesheet!r}.")
        entry: SelectorMap = {}
        for selector, props in selectors.items():
            if not isinstance(props, Mapping):
                raise ValidationError(
                    f"{INVALID_FORMAT} Expected an object at {stylesheet!r} > {selector!r}."
                )
            decls: dict[str, str] = {}
            for prop, value in props.items():
                if not isinstance(value, str):
                    raise ValidationError(
                        f"{INVALID_FORMAT} Color at {stylesheet!r} > {selector!r} > "
                        f"{prop!r} must be a string."
                    )
                decls[prop] = value
            entry[selector] = decls
        result[stylesheet] = entry
    return result


def selector_map(color_map: Mapping[str, SelectorMap], stylesheet: str) -> SelectorMap:
    """Return the entry for *stylesheet*, or an empty map."""
    return dict(color_map.get(stylesheet) or {})


def apply_edit(color_map: ColorMap, edit: ColorEdit) -> ColorMap:
    """Return a copy of *color_map* with *edit* applied.

    Removing the last property of a selector drops the selector too; the
    stylesheet key is kept even when it ends up empty.
    """
    updated = copy.deepcopy(color_map)
    if edit.is_removal:
        selectors = updated.get(edit.stylesheet)
        if selectors is None:
            return updated
        props = selectors.get(edit.selector)
        if props is not None:
            props.pop(edit.prop, None)
            if not props:
                del selectors[edit.selector]
        return updated

    selectors = updated.setdefault(edit.stylesheet, {})
    selectors.setdefault(edit.selector, {})[edit.prop] = edit.value
    return updated


def merge_edits(base: ColorMap, edits: Iterable[ColorEdit]) -> ColorMap:
    """Fold *edits* onto *base* in order; later edits win."""
    merged = copy.deepcopy(base)
    for edit in edits:
        merged = apply_edit(merged, edit)
    return merged


def flatten(color_map: Mapping[str, SelectorMap]) -> list[tuple[str, str, str, str]]:
    """List ``(stylesheet, selector, property, value)`` in map order."""
    rows: list[tuple[str, str, str, str]] = []
    for stylesheet, selectors in color_map.items():
        for selector, props in selectors.items():
            for prop, value in props.items():
                rows.append((stylesheet, selector, prop, value))
    return rows
