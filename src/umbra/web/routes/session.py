from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from umbra.errors import UmbraError, ValidationError

session_bp = Blueprint("session", __name__)


def _session_state(session) -> dict:
    return {
        "colors": session.colors,
        "selected": session.selected.value if session.selected else None,
        "swatches": session.recent.swatches(),
        "pending": current_app.extensions["writer"].pending,
    }


@session_bp.route("/")
def get_session():
    """Current editor state, including edits not yet saved."""
    return jsonify(_session_state(current_app.extensions["session"]))


@session_bp.route("/color", methods=["POST"])
def set_color():
    """Queue a color for an attribute; the save happens after a quiet period."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get("attribute"), str) or not isinstance(data.get("color"), str):
        return jsonify({"error": "attribute and color required"}), 400
    session = current_app.extensions["session"]
    try:
        session.select(data["attribute"])
        session.set_color(data["color"])
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(_session_state(session)), 202


@session_bp.route("/color", methods=["DELETE"])
def remove_color():
    """Queue removal of an attribute's override."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get("attribute"), str):
        return jsonify({"error": "attribute required"}), 400
    session = current_app.extensions["session"]
    try:
        session.remove(data["attribute"])
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(_session_state(session)), 202


@session_bp.route("/flush", methods=["POST"])
def flush():
    """Save queued edits immediately."""
    writer = current_app.extensions["writer"]
    try:
        snapshot = writer.flush()
    except UmbraError as exc:
        return jsonify({"error": str(exc)}), 500
    return jsonify({"flushed": snapshot is not None})
