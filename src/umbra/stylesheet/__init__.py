from umbra.stylesheet.catalog import (
    DEFAULT_COLOR_PROPERTIES,
    AttributeCatalog,
    build_catalog,
    extract_color_properties,
)
from umbra.stylesheet.model import (
    DARK_MODE_CONDITION,
    Change,
    ChangeKind,
    DarkModeBlock,
    Declaration,
    ReconcileResult,
    StyleRule,
)
from umbra.stylesheet.reconcile import (
    find_dark_mode_block,
    parse_dark_mode_block,
    reconcile,
    reconcile_with_changes,
)

__all__ = [
    "AttributeCatalog",
    "Change",
    "ChangeKind",
    "DARK_MODE_CONDITION",
    "DEFAULT_COLOR_PROPERTIES",
    "DarkModeBlock",
    "Declaration",
    "ReconcileResult",
    "StyleRule",
    "build_catalog",
    "extract_color_properties",
    "find_dark_mode_block",
    "parse_dark_mode_block",
    "reconcile",
    "reconcile_with_changes",
]
