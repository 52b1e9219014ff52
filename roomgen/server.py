"""
project: roomgen
module: server.py

Flask application factory and server bootstrap for the layout preview API.

The app keeps no persistent state; the instance/ folder only holds the
rotating log file written by ``_configure_logging``.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify

from roomgen.routes.layout_api import DEFAULT_MAX_CELLS, bp_layout


def create_app(config=None):
    """Build the Flask app with the layout blueprint registered.

    ``config`` (optional mapping) is applied after environment defaults so tests
    can override individual keys.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        ROOMGEN_MAX_CELLS=int(os.getenv("ROOMGEN_MAX_CELLS", str(DEFAULT_MAX_CELLS))),
    )
    if config:
        app.config.update(config)
    app.register_blueprint(bp_layout)

    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok"})

    return app


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (integration / runtime only)
    """Run the development server.

    When debug=True, Flask's debugger and reloader provide verbose tracebacks.
    Also configures application logging to a rotating file and console.
    """
    app = create_app()
    _configure_logging(app)
    try:
        print(f"[INFO] Starting layout preview server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(app):
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/roomgen.log. Retains a few backups to avoid growth.
    """
    log_dir = app.instance_path
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "roomgen.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
