"""Editor session: attribute selection, color picks and the recent palette."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from umbra.colormap import ColorEdit, ColorMap, flatten
from umbra.debounce import DebouncedWriter
from umbra.errors import ValidationError

SEPARATOR = "||"

DEFAULT_SWATCHES: tuple[str, ...] = (
    "#000000",
    "#ffffff",
    "#ff0000",
    "#00ff00",
    "#0000ff",
    "#ffff00",
    "#ff00ff",
    "#00ffff",
)

DEFAULT_PICKER_COLOR = "#000000"


@dataclass(frozen=True)
class Attribute:
    """One ``stylesheet > selector > property`` target."""

    stylesheet: str
    selector: str
    prop: str

    @property
    def value(self) -> str:
        return SEPARATOR.join((self.stylesheet, self.selector, self.prop))

    @property
    def label(self) -> str:
        return f"{self.stylesheet} > {self.selector} > {self.prop}"


def parse_attribute(value: str) -> Attribute:
    """Parse ``file||selector||property`` into an ``Attribute``."""
    parts = value.split(SEPARATOR)
    if len(parts) != 3 or not all(parts):
        raise ValidationError(f"Malformed attribute: {value!r}")
    return Attribute(*parts)


def attribute_options(catalog: Mapping[str, Mapping[str, list[str]]]) -> list[dict[str, str]]:
    """Flatten the attribute catalog into ``{"value", "label"}`` options."""
    options: list[dict[str, str]] = []
    for stylesheet, selectors in catalog.items():
        for selector, props in selectors.items():
            for prop in props:
                attr = Attribute(stylesheet, selector, prop)
                options.append({"value": attr.value, "label": attr.label})
    return options


class RecentColors:
    """Most-recently-used colors, newest first."""

    def __init__(self, limit: int = 8) -> None:
        self._limit = limit
        self._colors: list[str] = []

    def push(self, color: str) -> None:
        if color in self._colors:
            self._colors.remove(color)
        self._colors.insert(0, color)
        del self._colors[self._limit:]

    def __iter__(self):
        return iter(list(self._colors))

    def __len__(self) -> int:
        return len(self._colors)

    def swatches(self) -> list[str]:
        """Default swatches followed by recent colors that are not defaults."""
        return list(DEFAULT_SWATCHES) + [c for c in self._colors if c not in DEFAULT_SWATCHES]


class EditSession:
    """The state behind one editing screen.

    Color changes go through a ``DebouncedWriter`` so a burst of picks on
    the same attribute results in one save.
    """

    def __init__(
        self,
        writer: DebouncedWriter,
        catalog: Mapping[str, Mapping[str, list[str]]] | None = None,
    ) -> None:
        self._writer = writer
        self._catalog = catalog or {}
        self.recent = RecentColors()
        self.selected: Attribute | None = None

    @property
    def colors(self) -> ColorMap:
        return self._writer.current()

    def options(self) -> list[dict[str, str]]:
        return attribute_options(self._catalog)

    def select(self, attribute: str | Attribute) -> Attribute:
        if isinstance(attribute, str):
            attribute = parse_attribute(attribute)
        self.selected = attribute
        return attribute

    def color_of(self, attribute: str | Attribute, default: str = DEFAULT_PICKER_COLOR) -> str:
        if isinstance(attribute, str):
            attribute = parse_attribute(attribute)
        props = self.colors.get(attribute.stylesheet, {}).get(attribute.selector, {})
        return props.get(attribute.prop, default)

    def set_color(self, color: str) -> None:
        """Apply *color* to the selected attribute."""
        if self.selected is None:
            raise ValidationError("No attribute selected")
        attr = self.selected
        self._writer.queue(ColorEdit(attr.stylesheet, attr.selector, attr.prop, color))
        self.recent.push(color)

    def remove(self, attribute: str | Attribute) -> None:
        if isinstance(attribute, str):
            attribute = parse_attribute(attribute)
        self._writer.queue(ColorEdit(attribute.stylesheet, attribute.selector, attribute.prop))

    def entries(self) -> list[tuple[Attribute, str]]:
        """Every configured override, in map order."""
        return [
            (Attribute(stylesheet, selector, prop), value)
            for stylesheet, selector, prop, value in flatten(self.colors)
        ]
