from __future__ import annotations

import json

import pytest

from umbra.config import UmbraConfig
from umbra.web.app import create_app


@pytest.fixture
def config(tmp_path, css_dir):
    return UmbraConfig(
        stylesheet_dir=str(css_dir),
        colors_path=str(tmp_path / "colors.json"),
        catalog_path=str(tmp_path / "catalog.json"),
        stylesheets=("main.css", "extra.css"),
    )


@pytest.fixture
def catalog_file(config):
    data = {"main.css": {"body": ["color", "background-color"]}}
    with open(config.catalog_path, "w", encoding="utf-8") as fh:
        json.dump(data, fh)
    return data


@pytest.fixture
def app(config, timers):
    app = create_app(config=config, timer_factory=timers)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
