"""
project: Dungeon Mapper
module: server.py
License: MIT

Server bootstrap for the map analysis API.

Builds the Flask app, configures stdlib logging for Flask/werkzeug (rotating
file in the instance folder plus console) and runs the development server.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask

from dgmapper import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_server(host="127.0.0.1", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the app, configure logging and serve until interrupted."""
    app = create_app()
    _configure_logging(app)
    print(f"[INFO] Starting map API on {host}:{port}")
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")


def _configure_logging(app: Flask) -> str:
    """Configure logging to both console and ``instance/dgmapper.log``.

    Safe to call repeatedly: existing root handlers are replaced, not stacked.
    Returns the log file path.
    """
    log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "dgmapper.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
