"""Tests for the live-reload event stream."""

import json

from umbra.events import Broadcaster
from umbra.web.routes.events import event_stream


class TestEventStream:
    def test_frames(self):
        broadcaster = Broadcaster()
        sub = broadcaster.subscribe()
        stream = event_stream(sub, heartbeat=0)

        assert next(stream) == ": connected\n\n"
        assert next(stream) == ": keepalive\n\n"
        broadcaster.publish({"type": "update"})
        assert next(stream) == 'data: {"type": "update"}\n\n'

        stream.close()
        assert broadcaster.listener_count == 0

    def test_save_is_broadcast(self, config, timers, client, app):
        broadcaster = app.extensions["broadcaster"]
        sub = broadcaster.subscribe()
        client.post("/api/save-colors", json={"main.css": {"body": {"color": "#eee"}}})
        message = json.loads(sub.get(timeout=0))
        assert message == {"type": "update", "updatedFiles": ["main.css", "extra.css"]}
