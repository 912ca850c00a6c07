"""Umbra: dark-mode color editor for existing stylesheets."""
from __future__ import annotations

from umbra.config import UmbraConfig
from umbra.service import DarkModeService, SaveReport
from umbra.stylesheet import reconcile, reconcile_with_changes

__all__ = [
    "DarkModeService",
    "SaveReport",
    "UmbraConfig",
    "reconcile",
    "reconcile_with_changes",
]
