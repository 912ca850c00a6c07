"""Tests for color map validation and edits."""

import pytest

from umbra.colormap import (
    ColorEdit,
    apply_edit,
    flatten,
    merge_edits,
    selector_map,
    validate_color_map,
)
from umbra.errors import ValidationError


class TestValidateColorMap:
    def test_accepts_nested_strings(self):
        payload = {"main.css": {".a": {"color": "#fff"}}, "empty.css": {}}
        assert validate_color_map(payload) == payload

    def test_returns_a_copy(self):
        payload = {"main.css": {".a": {"color": "#fff"}}}
        result = validate_color_map(payload)
        result["main.css"][".a"]["color"] = "#000"
        assert payload["main.css"][".a"]["color"] == "#fff"

    @pytest.mark.parametrize("payload", [None, [], "colors", 42])
    def test_rejects_non_objects(self, payload):
        with pytest.raises(ValidationError, match="Invalid data format"):
            validate_color_map(payload)

    @pytest.mark.parametrize(
        "payload",
        [
            {"main.css": ["a"]},
            {"main.css": {".a": "red"}},
            {"main.css": {".a": {"color": 1}}},
            {"": {}},
        ],
    )
    def test_rejects_malformed_levels(self, payload):
        with pytest.raises(ValidationError):
            validate_color_map(payload)


class TestEdits:
    def test_set_creates_levels(self):
        result = apply_edit({}, ColorEdit("main.css", ".a", "color", "#fff"))
        assert result == {"main.css": {".a": {"color": "#fff"}}}

    def test_set_does_not_mutate_input(self):
        base = {"main.css": {".a": {"color": "#fff"}}}
        apply_edit(base, ColorEdit("main.css", ".a", "color", "#000"))
        assert base["main.css"][".a"]["color"] == "#fff"

    def test_remove_last_property_drops_selector_but_keeps_sheet(self):
        base = {"main.css": {".a": {"color": "#fff"}}}
        result = apply_edit(base, ColorEdit("main.css", ".a", "color"))
        assert result == {"main.css": {}}

    def test_remove_unknown_is_noop(self):
        base = {"main.css": {".a": {"color": "#fff"}}}
        assert apply_edit(base, ColorEdit("other.css", ".a", "color")) == base
        assert apply_edit(base, ColorEdit("main.css", ".b", "color")) == base

    def test_merge_last_value_wins(self):
        edits = [
            ColorEdit("main.css", ".a", "color", "#111"),
            ColorEdit("main.css", ".a", "fill", "#222"),
            ColorEdit("main.css", ".a", "color", "#333"),
        ]
        assert merge_edits({}, edits) == {"main.css": {".a": {"color": "#333", "fill": "#222"}}}


class TestHelpers:
    def test_selector_map(self):
        color_map = {"main.css": {".a": {"color": "#fff"}}}
        assert selector_map(color_map, "main.css") == {".a": {"color": "#fff"}}
        assert selector_map(color_map, "other.css") == {}

    def test_flatten(self):
        color_map = {"a.css": {"x": {"color": "1", "fill": "2"}}, "b.css": {"y": {"stroke": "3"}}}
        assert flatten(color_map) == [
            ("a.css", "x", "color", "1"),
            ("a.css", "x", "fill", "2"),
            ("b.css", "y", "stroke", "3"),
        ]
