from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from umbra.editor import attribute_options
from umbra.errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.after_request
def add_cors_headers(response):
    """Allow cross-origin requests to the API."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


@api_bp.route("/save-colors", methods=["OPTIONS"])
def save_colors_preflight():
    """Handle CORS preflight for saving colors."""
    return "", 204


@api_bp.route("/save-colors", methods=["POST"])
def save_colors():
    """Persist a full color map and rewrite the affected stylesheets."""
    payload = request.get_json(silent=True)
    service = current_app.extensions["service"]
    try:
        report = service.save(payload)
    except ValidationError as exc:
        logger.error("Invalid colorsData format: %s", exc)
        return jsonify({"message": "Invalid data format."}), 400
    except PersistenceError as exc:
        logger.error("Error writing color map: %s", exc)
        return jsonify({"message": "Failed to save colors."}), 500

    body = {"message": "Colors saved successfully."}
    body.update(report.to_dict())
    return jsonify(body), 200


@api_bp.route("/colors")
def get_colors():
    """Return the persisted color map, or an empty object."""
    service = current_app.extensions["service"]
    try:
        return jsonify(service.load_colors())
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 500


@api_bp.route("/color-properties")
def get_color_properties():
    """Return the attribute catalog."""
    catalog_store = current_app.extensions["catalog_store"]
    try:
        return jsonify(catalog_store.load())
    except NotFoundError:
        return jsonify({"error": "not found"}), 404


@api_bp.route("/options")
def get_options():
    """Return the catalog flattened into select options."""
    catalog_store = current_app.extensions["catalog_store"]
    return jsonify(attribute_options(catalog_store.load_or_empty()))


@api_bp.route("/stylesheets/<path:name>")
def get_stylesheet(name: str):
    """Serve the current text of a stylesheet for the preview."""
    store = current_app.extensions["service"].stylesheet_store
    try:
        text = store.read(name)
    except NotFoundError:
        return jsonify({"error": "not found"}), 404
    return Response(text, mimetype="text/css")
