from __future__ import annotations

import pytest


class FakeTimer:
    """Stands in for ``threading.Timer``; fires only when told to."""

    def __init__(self, delay: float, fn) -> None:
        self.delay = delay
        self.fn = fn
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.fn()


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, fn) -> FakeTimer:
        timer = FakeTimer(delay, fn)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def css_dir(tmp_path):
    """A stylesheet directory holding two small sheets."""
    directory = tmp_path / "css"
    directory.mkdir()
    (directory / "main.css").write_text(
        "body { color: black; background-color: white; }\n"
        ".title { color: #333; }\n",
        encoding="utf-8",
    )
    (directory / "extra.css").write_text(
        "a { color: blue; }\n"
        "\n"
        "@media (prefers-color-scheme: dark) {\n"
        "  a {\n"
        "    color: cyan;\n"
        "  }\n"
        "}\n",
        encoding="utf-8",
    )
    return directory
