from __future__ import annotations

from dataclasses import dataclass

from umbra.stylesheet.catalog import DEFAULT_COLOR_PROPERTIES

DEFAULT_STYLESHEETS: tuple[str, ...] = (
    "manual-racket.css",
    "scribble.css",
    "manual-style.css",
    "racket.css",
)


@dataclass(frozen=True)
class UmbraConfig:
    stylesheet_dir: str = "public/stylesheets"
    colors_path: str = "public/dark-mode-colors.json"
    catalog_path: str = "public/color-properties.json"
    stylesheets: tuple[str, ...] = DEFAULT_STYLESHEETS
    color_properties: tuple[str, ...] = DEFAULT_COLOR_PROPERTIES
    host: str = "127.0.0.1"
    port: int = 5000
    debounce_seconds: float = 2.0  # quiet period before edits are saved
    heartbeat_seconds: float = 15.0  # keepalive interval on the event stream
