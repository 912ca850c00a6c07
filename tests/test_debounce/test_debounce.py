"""Tests for the debounced color-map writer."""

import logging

from umbra.colormap import ColorEdit
from umbra.debounce import DebouncedWriter
from umbra.errors import PersistenceError


def make_writer(timers, base=None, on_flush=None):
    flushed = []
    writer = DebouncedWriter(
        on_flush=on_flush or flushed.append,
        base=base,
        delay=2.0,
        timer_factory=timers,
    )
    return writer, flushed


class TestQueue:
    def test_burst_results_in_single_flush(self, timers):
        writer, flushed = make_writer(timers)
        for color in ("#111", "#222", "#333"):
            writer.queue(ColorEdit("a.css", ".a", "color", color))

        assert len(timers.timers) == 3
        assert all(t.cancelled for t in timers.timers[:-1])
        assert timers.last.started and not timers.last.cancelled
        assert timers.last.delay == 2.0

        timers.last.fire()
        assert flushed == [{"a.css": {".a": {"color": "#333"}}}]
        assert writer.pending == 0

    def test_edits_to_different_attributes_merge(self, timers):
        writer, flushed = make_writer(timers, base={"a.css": {".a": {"fill": "#000"}}})
        writer.queue(ColorEdit("a.css", ".a", "color", "#fff"))
        writer.queue(ColorEdit("b.css", ".b", "stroke", "#123"))
        timers.last.fire()
        assert flushed == [
            {
                "a.css": {".a": {"fill": "#000", "color": "#fff"}},
                "b.css": {".b": {"stroke": "#123"}},
            }
        ]

    def test_removal_edit(self, timers):
        writer, flushed = make_writer(timers, base={"a.css": {".a": {"color": "#fff"}}})
        writer.queue(ColorEdit("a.css", ".a", "color"))
        writer.flush()
        assert flushed == [{"a.css": {}}]

    def test_current_includes_pending_edits(self, timers):
        writer, flushed = make_writer(timers, base={"a.css": {".a": {"color": "#000"}}})
        writer.queue(ColorEdit("a.css", ".a", "color", "#fff"))
        assert writer.current() == {"a.css": {".a": {"color": "#fff"}}}
        assert flushed == []

    def test_later_flushes_build_on_previous_snapshot(self, timers):
        writer, flushed = make_writer(timers)
        writer.queue(ColorEdit("a.css", ".a", "color", "#fff"))
        writer.flush()
        writer.queue(ColorEdit("a.css", ".b", "color", "#000"))
        writer.flush()
        assert flushed[-1] == {"a.css": {".a": {"color": "#fff"}, ".b": {"color": "#000"}}}


class TestFlush:
    def test_flush_with_nothing_queued(self, timers):
        writer, flushed = make_writer(timers)
        assert writer.flush() is None
        assert flushed == []

    def test_flush_cancels_timer(self, timers):
        writer, flushed = make_writer(timers)
        writer.queue(ColorEdit("a.css", ".a", "color", "#fff"))
        snapshot = writer.flush()
        assert snapshot == {"a.css": {".a": {"color": "#fff"}}}
        assert timers.last.cancelled

    def test_cancel_keeps_edits(self, timers):
        writer, flushed = make_writer(timers)
        writer.queue(ColorEdit("a.css", ".a", "color", "#fff"))
        writer.cancel()
        assert timers.last.cancelled
        assert writer.pending == 1
        assert flushed == []

    def test_timer_failure_is_logged(self, timers, caplog):
        def failing(snapshot):
            raise PersistenceError("colors.json", cause=OSError("disk full"))

        writer, _ = make_writer(timers, on_flush=failing)
        writer.queue(ColorEdit("a.css", ".a", "color", "#fff"))
        with caplog.at_level(logging.ERROR, logger="umbra.debounce"):
            timers.last.fire()
        assert "Debounced save failed" in caplog.text


class TestRebase:
    def test_pending_edits_merge_onto_new_base(self, timers):
        writer, flushed = make_writer(timers, base={"a.css": {".a": {"color": "#000"}}})
        writer.queue(ColorEdit("a.css", ".b", "color", "#fff"))
        writer.rebase({"a.css": {".c": {"fill": "#111"}}})
        assert writer.pending == 1
        timers.last.fire()
        assert flushed == [{"a.css": {".c": {"fill": "#111"}, ".b": {"color": "#fff"}}}]

    def test_rebase_copies_the_map(self, timers):
        writer, _ = make_writer(timers)
        saved = {"a.css": {}}
        writer.rebase(saved)
        saved["b.css"] = {}
        assert writer.current() == {"a.css": {}}
