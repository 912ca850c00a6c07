"""Extract the attribute catalog: color-carrying properties per selector."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

import tinycss2

from umbra.errors import NotFoundError, ParseError
from umbra.stylesheet.reconcile import StylesheetDocument, is_dark_mode_rule

if TYPE_CHECKING:
    from umbra.store.files import StylesheetStore

logger = logging.getLogger(__name__)

DEFAULT_COLOR_PROPERTIES: tuple[str, ...] = (
    "color",
    "background-color",
    "border-color",
    "fill",
    "stroke",
)

# stylesheet -> selector -> ordered property names
AttributeCatalog = dict[str, dict[str, list[str]]]


def _walk_rules(nodes: Iterable[Any]) -> Iterable[Any]:
    """Yield every style rule, descending into at-rule bodies."""
    for node in nodes:
        if node.type == "qualified-rule":
            yield node
        elif node.type == "at-rule" and node.content is not None and not is_dark_mode_rule(node):
            yield from _walk_rules(tinycss2.parse_blocks_contents(node.content))


def extract_color_properties(
    stylesheet_text: str,
    properties: Sequence[str] = DEFAULT_COLOR_PROPERTIES,
) -> dict[str, list[str]]:
    """Map each selector to the color properties it declares.

    Properties keep the order in which they first appear. Rules inside the
    dark-mode block are skipped.
    """
    wanted = set(properties)
    found: dict[str, list[str]] = {}
    doc = StylesheetDocument(stylesheet_text)
    for rule in _walk_rules(doc.nodes):
        selector = tinycss2.serialize(rule.prelude).strip()
        for decl in tinycss2.parse_blocks_contents(rule.content, skip_comments=True):
            if decl.type != "declaration" or decl.name not in wanted:
                continue
            props = found.setdefault(selector, [])
            if decl.name not in props:
                props.append(decl.name)
    return found


def build_catalog(
    store: StylesheetStore,
    stylesheets: Iterable[str],
    properties: Sequence[str] = DEFAULT_COLOR_PROPERTIES,
) -> AttributeCatalog:
    """Build the catalog for *stylesheets*, skipping files that are missing."""
    catalog: AttributeCatalog = {}
    for name in stylesheets:
        try:
            text = store.read(name)
        except NotFoundError as exc:
            logger.error("CSS file not found: %s", exc.path)
            continue
        try:
            entries = extract_color_properties(text, properties)
        except ParseError as exc:
            logger.error("Cannot parse %s: %s", name, exc)
            continue
        if entries:
            catalog[name] = entries
    return catalog
