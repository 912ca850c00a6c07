"""Dark-mode block model: Declaration, StyleRule, RawNode and DarkModeBlock."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DARK_MODE_CONDITION = "(prefers-color-scheme: dark)"

INDENT = "  "


@dataclass
class Declaration:
    """A single ``property: value`` pair inside a style rule."""

    prop: str
    value: str

    def render(self, depth: int) -> str:
        return f"{INDENT * depth}{self.prop}: {self.value};"


@dataclass
class RawNode:
    """A node kept verbatim (comment, nested at-rule, stray declaration)."""

    text: str

    @property
    def is_comment(self) -> bool:
        return self.text.startswith("/*")

    def render(self, depth: int) -> str:
        return f"{INDENT * depth}{self.text}"


@dataclass
class StyleRule:
    """A selector with its ordered declarations.

    ``nested`` holds verbatim nested rules (CSS nesting). The selector map
    cannot describe them, so reconciliation drops them.
    """

    selector: str
    declarations: list[Declaration] = field(default_factory=list)
    nested: list[RawNode] = field(default_factory=list)

    def find(self, prop: str) -> list[Declaration]:
        """Return every declaration of *prop* in source order."""
        return [d for d in self.declarations if d.prop == prop]

    @property
    def is_empty(self) -> bool:
        return not self.declarations

    def as_dict(self) -> dict[str, str]:
        """Map property to value; the last occurrence wins, as in CSS."""
        return {d.prop: d.value for d in self.declarations}

    def render(self, depth: int) -> str:
        lines = [f"{INDENT * depth}{self.selector} {{"]
        lines.extend(d.render(depth + 1) for d in self.declarations)
        lines.extend(n.render(depth + 1) for n in self.nested)
        lines.append(f"{INDENT * depth}}}")
        return "\n".join(lines)


@dataclass
class DarkModeBlock:
    """The ``@media (prefers-color-scheme: dark)`` rule group."""

    items: list[StyleRule | RawNode] = field(default_factory=list)

    @property
    def rules(self) -> list[StyleRule]:
        return [item for item in self.items if isinstance(item, StyleRule)]

    def rule_for(self, selector: str) -> StyleRule | None:
        """Return the first rule whose selector equals *selector* exactly."""
        for rule in self.rules:
            if rule.selector == selector:
                return rule
        return None

    def as_dict(self) -> dict[str, dict[str, str]]:
        """Selector map view of the block, merging duplicate selectors."""
        result: dict[str, dict[str, str]] = {}
        for rule in self.rules:
            result.setdefault(rule.selector, {}).update(rule.as_dict())
        return result

    def render(self) -> str:
        lines = [f"@media {DARK_MODE_CONDITION} {{"]
        lines.extend(item.render(1) for item in self.items)
        lines.append("}")
        return "\n".join(lines)


class ChangeKind(str, Enum):
    REMOVED_DECLARATION = "removed-declaration"
    REMOVED_RULE = "removed-rule"
    UPDATED_DECLARATION = "updated-declaration"
    ADDED_DECLARATION = "added-declaration"
    ADDED_RULE = "added-rule"
    REMOVED_NESTED = "removed-nested"
    REMOVED_BLOCK = "removed-block"


@dataclass(frozen=True)
class Change:
    """One mutation applied to the dark-mode block during reconciliation."""

    kind: ChangeKind
    selector: str = ""
    prop: str = ""
    value: str = ""

    def describe(self) -> str:
        if self.kind is ChangeKind.REMOVED_BLOCK:
            return f"Removed empty @media {DARK_MODE_CONDITION} block"
        if self.kind is ChangeKind.REMOVED_RULE:
            return f"Removed empty selector: {self.selector}"
        if self.kind is ChangeKind.REMOVED_NESTED:
            return f"Removed nested content in {self.selector or 'block'}: {self.value}"
        label = self.kind.value.replace("-", " ").capitalize()
        return f"{label}: {self.selector} {{ {self.prop}: {self.value}; }}"


@dataclass(frozen=True)
class ReconcileResult:
    """Updated stylesheet text plus the changes that produced it."""

    text: str
    changes: tuple[Change, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.changes)
