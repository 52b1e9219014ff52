import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from roomgen.routes.layout_api import clear_layout_cache  # noqa: E402
from roomgen.server import create_app  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True, "ROOMGEN_MAX_CELLS": 250_000})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _fresh_layout_cache():
    clear_layout_cache()
    try:
        yield
    finally:
        clear_layout_cache()
