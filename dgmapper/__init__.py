"""
project: Dungeon Mapper
module: __init__.py
License: MIT

Flask application factory for the map analysis API.

The map core lives in ``dgmapper.dungeon`` and has no web dependencies; this
module only wires it to Flask. Configuration is sourced from environment
variables (optionally loaded from a ``.env`` file) with defaults suited to
local development. A local ``instance/`` directory holds the server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from dgmapper.dungeon import MapConfig, MapError

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-integer %s=%r", name, raw)
        return default


def map_config_from_env() -> MapConfig:
    """Build the grid configuration from ``DGMAPPER_*`` environment variables."""
    return MapConfig(
        width=_env_int("DGMAPPER_GRID_WIDTH", 8),
        height=_env_int("DGMAPPER_GRID_HEIGHT", 8),
        strict=_env_flag("DGMAPPER_STRICT_VALIDATION", "1"),
        room_count=_env_int("DGMAPPER_SAMPLE_ROOMS", 24),
    )


def create_app(overrides: dict | None = None) -> Flask:
    """Return a configured Flask app with the map API registered.

    ``overrides`` is applied last, after environment configuration (tests use
    it to flip ``TESTING`` or swap the map config).
    """
    # Load .env if present so settings can be supplied without exporting
    # shell variables during development.
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve requests; only the file log needs it.
        logging.getLogger(__name__).warning("Could not create instance path %s", app.instance_path)

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        DGMAPPER_MAP_CONFIG=map_config_from_env(),
    )
    app.json.sort_keys = False
    if overrides:
        app.config.update(overrides)

    from dgmapper.routes.map_api import bp_map

    app.register_blueprint(bp_map)

    @app.errorhandler(MapError)
    def map_error(e: MapError):
        return jsonify(e.to_dict()), 400

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app


__all__ = ["create_app", "map_config_from_env"]
