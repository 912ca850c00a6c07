"""Rewrite a stylesheet's dark-mode block so it matches a selector map.

Example:
    >>> reconcile("a { color: red; }", {"a": {"color": "#eee"}})
    'a { color: red; }\\n\\n@media (prefers-color-scheme: dark) {\\n  a {\\n    color: #eee;\\n  }\\n}\\n'

Everything outside the block is copied from the input unchanged; the block
itself is re-emitted in a canonical layout using the file's own line ending.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

import tinycss2

from umbra.errors import ParseError
from umbra.stylesheet.model import (
    DARK_MODE_CONDITION,
    Change,
    ChangeKind,
    DarkModeBlock,
    Declaration,
    RawNode,
    ReconcileResult,
    StyleRule,
)

__all__ = [
    "StylesheetDocument",
    "find_dark_mode_block",
    "is_dark_mode_rule",
    "parse_dark_mode_block",
    "reconcile",
    "reconcile_with_changes",
]

DesiredMap = Mapping[str, Mapping[str, str]]

# Line breaks as the CSS tokenizer counts them.
_LINE_BREAK = re.compile(r"\r\n|\r|\n|\f")

# Appended before parsing; anything still open at end of input swallows it.
_END_MARKER = "@umbra-end-of-input;"


class StylesheetDocument:
    """Parsed top-level nodes plus a way back to source offsets.

    ``text`` is the input exactly as given. The parser reports positions
    as line and column after newline normalization; ``offset`` maps them
    back onto ``text``, which is possible because every normalization
    happens at a line break or keeps the length of the line.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._line_starts = [0] + [m.end() for m in _LINE_BREAK.finditer(text)]
        nodes = tinycss2.parse_stylesheet(text + _END_MARKER)
        _raise_on_error(nodes)
        last = nodes[-1] if nodes else None
        if last is None or last.type != "at-rule" or last.lower_at_keyword != _END_MARKER[1:-1]:
            _raise_unclosed(last)
        self.nodes: list[Any] = nodes[:-1]

    def offset(self, index: int) -> int:
        """Source offset of node *index*, or the end of text past the last node."""
        if index >= len(self.nodes):
            return len(self.text)
        node = self.nodes[index]
        return self._line_starts[node.source_line - 1] + node.source_column - 1

    def span(self, index: int) -> tuple[int, int]:
        """Return ``(start, end)`` of node *index* in the source text."""
        start = self.offset(index)
        if index + 1 >= len(self.nodes):
            return start, len(self.text)
        limit = self.offset(index + 1)
        # Skipped top-level ``<!--``/``-->`` tokens may sit between nodes.
        close = self.text.rfind("}", start, limit)
        return start, (close + 1 if close != -1 else limit)

    def newline(self) -> str:
        """The first line ending used in the text, ``\\n`` if there is none."""
        match = _LINE_BREAK.search(self.text)
        return match.group() if match and match.group() != "\f" else "\n"

    def find_dark_mode(self) -> int | None:
        """Index of the last top-level dark-mode at-rule, if any."""
        found = None
        for index, node in enumerate(self.nodes):
            if is_dark_mode_rule(node):
                found = index
        return found


def _raise_on_error(nodes: Sequence[Any]) -> None:
    for node in nodes:
        if node.type == "error":
            raise ParseError(node.message, node.source_line, node.source_column)
        if node.type in ("qualified-rule", "at-rule"):
            for token in node.prelude:
                if token.type == "error":
                    raise ParseError(token.message, token.source_line, token.source_column)
            if node.content is not None:
                _raise_on_error(tinycss2.parse_blocks_contents(node.content))


def _raise_unclosed(node: Any) -> None:
    if node is None:
        raise ParseError("Unexpected end of input")
    if node.type == "comment":
        message = "Unclosed comment"
    elif node.type == "at-rule" and node.content is None:
        message = f"Missing semicolon after @{node.at_keyword}"
    else:
        message = "Unclosed block"
    raise ParseError(message, node.source_line, node.source_column)


def is_dark_mode_rule(node: Any) -> bool:
    return (
        node.type == "at-rule"
        and node.at_keyword == "media"
        and node.content is not None
        and tinycss2.serialize(node.prelude).strip() == DARK_MODE_CONDITION
    )


def _parse_rule(node: Any) -> StyleRule:
    rule = StyleRule(selector=tinycss2.serialize(node.prelude).strip())
    for child in tinycss2.parse_blocks_contents(node.content):
        if child.type in ("whitespace", "comment"):
            continue
        if child.type == "error":
            raise ParseError(child.message, child.source_line, child.source_column)
        if child.type == "declaration":
            value = tinycss2.serialize(child.value).strip()
            if child.important:
                value += " !important"
            rule.declarations.append(Declaration(prop=child.name, value=value))
        else:
            rule.nested.append(RawNode(tinycss2.serialize([child]).strip()))
    return rule


def parse_dark_mode_block(content: Sequence[Any]) -> DarkModeBlock:
    """Build a ``DarkModeBlock`` from the component values of the at-rule body."""
    block = DarkModeBlock()
    for node in tinycss2.parse_blocks_contents(content):
        if node.type == "whitespace":
            continue
        if node.type == "error":
            raise ParseError(node.message, node.source_line, node.source_column)
        if node.type == "comment":
            block.items.append(RawNode(f"/*{node.value}*/"))
        elif node.type == "qualified-rule":
            block.items.append(_parse_rule(node))
        else:
            block.items.append(RawNode(tinycss2.serialize([node]).strip()))
    return block


def find_dark_mode_block(stylesheet_text: str) -> DarkModeBlock | None:
    """Parse *stylesheet_text* and return its dark-mode block, if present."""
    doc = StylesheetDocument(stylesheet_text)
    index = doc.find_dark_mode()
    if index is None:
        return None
    return parse_dark_mode_block(doc.nodes[index].content)


def _prune(block: DarkModeBlock, desired: DesiredMap, changes: list[Change]) -> None:
    items: list[StyleRule | RawNode] = []
    for item in block.items:
        if isinstance(item, StyleRule):
            for nested in item.nested:
                changes.append(Change(ChangeKind.REMOVED_NESTED, item.selector, value=nested.text))
            item.nested = []
            wanted = desired.get(item.selector) or {}
            kept: list[Declaration] = []
            for decl in item.declarations:
                if decl.prop in wanted:
                    kept.append(decl)
                else:
                    changes.append(
                        Change(ChangeKind.REMOVED_DECLARATION, item.selector, decl.prop, decl.value)
                    )
            item.declarations = kept
            if item.is_empty:
                changes.append(Change(ChangeKind.REMOVED_RULE, item.selector))
                continue
        elif not item.is_comment:
            changes.append(Change(ChangeKind.REMOVED_NESTED, value=item.text))
            continue
        items.append(item)
    block.items = items


def _apply(block: DarkModeBlock, desired: DesiredMap, changes: list[Change]) -> None:
    for selector, props in desired.items():
        for prop, value in props.items():
            rule = block.rule_for(selector)
            if rule is None:
                block.items.append(
                    StyleRule(selector=selector, declarations=[Declaration(prop, value)])
                )
                changes.append(Change(ChangeKind.ADDED_RULE, selector, prop, value))
                continue

            existing = rule.find(prop)
            if not existing:
                rule.declarations.append(Declaration(prop, value))
                changes.append(Change(ChangeKind.ADDED_DECLARATION, selector, prop, value))
            for decl in existing:
                if decl.value != value:
                    decl.value = value
                    changes.append(Change(ChangeKind.UPDATED_DECLARATION, selector, prop, value))


def _append_block(text: str, rendered: str, newline: str) -> str:
    if text and not text.endswith(("\n", "\r", "\f")):
        text += newline
    if text.strip():
        text += newline
    return f"{text}{rendered}{newline}"


def reconcile_with_changes(stylesheet_text: str, desired: DesiredMap) -> ReconcileResult:
    """Reconcile the dark-mode block and report each mutation made.

    Raises ``ParseError`` if the stylesheet is not valid CSS.
    """
    doc = StylesheetDocument(stylesheet_text)
    index = doc.find_dark_mode()
    block = (
        parse_dark_mode_block(doc.nodes[index].content) if index is not None else DarkModeBlock()
    )

    changes: list[Change] = []
    _prune(block, desired, changes)
    _apply(block, desired, changes)
    newline = doc.newline()

    if index is None:
        if not block.rules:
            return ReconcileResult(stylesheet_text, tuple(changes))
        rendered = block.render().replace("\n", newline)
        return ReconcileResult(_append_block(doc.text, rendered, newline), tuple(changes))

    start, end = doc.span(index)
    if block.rules:
        text = doc.text[:start] + block.render().replace("\n", newline) + doc.text[end:]
        return ReconcileResult(text, tuple(changes))

    changes.append(Change(ChangeKind.REMOVED_BLOCK))
    if index > 0 and doc.nodes[index - 1].type == "whitespace":
        start = doc.offset(index - 1)
    elif index + 1 < len(doc.nodes) and doc.nodes[index + 1].type == "whitespace":
        end = doc.offset(index + 2)
    return ReconcileResult(doc.text[:start] + doc.text[end:], tuple(changes))


def reconcile(stylesheet_text: str, desired: DesiredMap) -> str:
    """Return *stylesheet_text* with its dark-mode block matching *desired* exactly."""
    return reconcile_with_changes(stylesheet_text, desired).text
