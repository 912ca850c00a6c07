from __future__ import annotations

import logging

from flask import Flask

from umbra.config import UmbraConfig
from umbra.debounce import DebouncedWriter
from umbra.editor import EditSession
from umbra.errors import ValidationError
from umbra.events.broadcast import Broadcaster
from umbra.events.types import ColorsSaved
from umbra.service import DarkModeService
from umbra.store.files import CatalogStore, ColorMapStore, StylesheetStore

logger = logging.getLogger(__name__)


def build_service(config: UmbraConfig) -> DarkModeService:
    """Wire the stores described by *config* into a service."""
    return DarkModeService(
        color_store=ColorMapStore(config.colors_path),
        stylesheet_store=StylesheetStore(config.stylesheet_dir),
        stylesheets=config.stylesheets,
    )


def _saved_colors(service: DarkModeService) -> dict:
    try:
        return service.load_colors()
    except ValidationError as exc:
        logger.warning("Ignoring unreadable color map: %s", exc)
        return {}


def create_app(
    service: DarkModeService | None = None,
    config: UmbraConfig | None = None,
    broadcaster: Broadcaster | None = None,
    timer_factory=None,
) -> Flask:
    """Create and configure the Flask app."""
    config = config or UmbraConfig()
    app = Flask(__name__)
    app.config["UMBRA"] = config

    if service is None:
        service = build_service(config)
    if broadcaster is None:
        broadcaster = Broadcaster()

    def notify(event: ColorsSaved) -> None:
        broadcaster.publish({"type": "update", "updatedFiles": list(event.updated_files)})

    service.bus.subscribe(ColorsSaved, notify)

    catalog_store = CatalogStore(config.catalog_path)
    writer = DebouncedWriter(
        on_flush=service.save,
        base=_saved_colors(service),
        delay=config.debounce_seconds,
        timer_factory=timer_factory,
    )

    def rebase(event: ColorsSaved) -> None:
        writer.rebase(_saved_colors(service))

    service.bus.subscribe(ColorsSaved, rebase)

    # Store services on app for access in routes
    app.extensions["service"] = service
    app.extensions["broadcaster"] = broadcaster
    app.extensions["catalog_store"] = catalog_store
    app.extensions["writer"] = writer
    app.extensions["session"] = EditSession(writer, catalog_store.load_or_empty())

    # Register blueprints
    from umbra.web.routes.api import api_bp
    from umbra.web.routes.events import events_bp
    from umbra.web.routes.session import session_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(session_bp, url_prefix="/api/session")
    app.register_blueprint(events_bp, url_prefix="/api")

    return app
