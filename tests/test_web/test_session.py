"""Tests for the editor session endpoints."""

import json


class TestSession:
    def test_initial_state(self, client):
        data = client.get("/api/session/").get_json()
        assert data["colors"] == {}
        assert data["selected"] is None
        assert data["pending"] == 0
        assert data["swatches"][0] == "#000000"

    def test_set_color_is_debounced(self, client, timers, config):
        body = {"attribute": "main.css||body||color", "color": "#abcdef"}
        resp = client.post("/api/session/color", json=body)
        assert resp.status_code == 202
        data = resp.get_json()
        assert data["selected"] == "main.css||body||color"
        assert data["pending"] == 1
        assert data["colors"] == {"main.css": {"body": {"color": "#abcdef"}}}
        assert "#abcdef" in data["swatches"]

        resp = client.post("/api/session/color", json=dict(body, color="#123456"))
        assert resp.get_json()["pending"] == 2

        timers.last.fire()
        with open(config.colors_path, encoding="utf-8") as fh:
            assert json.load(fh) == {"main.css": {"body": {"color": "#123456"}}}

    def test_set_color_rejects_malformed_attribute(self, client):
        resp = client.post("/api/session/color", json={"attribute": "main.css", "color": "#fff"})
        assert resp.status_code == 400

    def test_set_color_requires_fields(self, client):
        assert client.post("/api/session/color", json={"color": "#fff"}).status_code == 400

    def test_remove_and_flush(self, client, config):
        client.post("/api/session/color", json={"attribute": "main.css||body||color", "color": "#fff"})
        assert client.post("/api/session/flush").get_json() == {"flushed": True}

        resp = client.delete("/api/session/color", json={"attribute": "main.css||body||color"})
        assert resp.status_code == 202
        assert resp.get_json()["colors"] == {"main.css": {}}
        assert client.post("/api/session/flush").get_json() == {"flushed": True}
        with open(config.colors_path, encoding="utf-8") as fh:
            assert json.load(fh) == {"main.css": {}}

    def test_flush_with_nothing_pending(self, client):
        assert client.post("/api/session/flush").get_json() == {"flushed": False}


class TestSavePaths:
    def test_session_flush_keeps_posted_colors(self, client, config):
        resp = client.post("/api/save-colors", json={"main.css": {"body": {"color": "#111111"}}})
        assert resp.status_code == 200

        body = {"attribute": "main.css||.title||color", "color": "#222222"}
        client.post("/api/session/color", json=body)
        assert client.post("/api/session/flush").get_json() == {"flushed": True}

        with open(config.colors_path, encoding="utf-8") as fh:
            assert json.load(fh) == {
                "main.css": {"body": {"color": "#111111"}, ".title": {"color": "#222222"}}
            }

    def test_session_view_reflects_posted_colors(self, client):
        client.post("/api/save-colors", json={"extra.css": {"a": {"color": "#333333"}}})
        assert client.get("/api/session/").get_json()["colors"] == {
            "extra.css": {"a": {"color": "#333333"}}
        }
