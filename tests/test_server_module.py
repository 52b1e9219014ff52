import logging

import pytest

from roomgen.server import _configure_logging, create_app


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        yield
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)


def test_configure_logging_writes_instance_file(tmp_path, monkeypatch, restore_root_logging):
    app = create_app()
    # Redirect instance path to a temp directory to exercise logging setup
    monkeypatch.setattr(app, "instance_path", str(tmp_path / "instance"))
    # Run logging config twice to ensure idempotence (handler replace path)
    _configure_logging(app)
    log_path = _configure_logging(app)
    assert len(logging.getLogger().handlers) == 2
    logging.getLogger("roomgen.test").info("hello")
    for h in logging.getLogger().handlers:
        h.flush()
    log_file = tmp_path / "instance" / "roomgen.log"
    assert str(log_file) == log_path
    assert "hello" in log_file.read_text()


def test_create_app_config_override():
    app = create_app({"ROOMGEN_MAX_CELLS": 10})
    resp = app.test_client().get("/api/layout/maze?width=5&height=5")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "width"


def test_max_cells_from_env(monkeypatch):
    monkeypatch.setenv("ROOMGEN_MAX_CELLS", "20")
    app = create_app()
    assert app.config["ROOMGEN_MAX_CELLS"] == 20
