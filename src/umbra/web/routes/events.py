from __future__ import annotations

from collections.abc import Iterator

from flask import Blueprint, Response, current_app, stream_with_context

from umbra.events.broadcast import Subscription

events_bp = Blueprint("events", __name__)


def event_stream(subscription: Subscription, heartbeat: float) -> Iterator[str]:
    """Yield SSE frames for *subscription* until the client goes away."""
    try:
        yield ": connected\n\n"
        while True:
            message = subscription.get(timeout=heartbeat)
            if message is None:
                yield ": keepalive\n\n"
            else:
                yield f"data: {message}\n\n"
    finally:
        subscription.close()


@events_bp.route("/events")
def events():
    """Server-Sent Events stream announcing every save."""
    broadcaster = current_app.extensions["broadcaster"]
    heartbeat = current_app.config["UMBRA"].heartbeat_seconds
    stream = event_stream(broadcaster.subscribe(), heartbeat)
    return Response(
        stream_with_context(stream),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
