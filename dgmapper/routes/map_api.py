"""
project: Dungeon Mapper
module: map_api.py
License: MIT

Map analysis and trimming API routes.

The API is stateless: every request carries the map in its canonical text
form (see ``dgmapper.dungeon.codec``) and mutating endpoints answer with the
updated text so the client can keep trimming. ``MapError`` subclasses raised
by the core are turned into 400 responses by the app-level error handler.
"""

from dataclasses import replace

from flask import Blueprint, current_app, jsonify, request

from dgmapper.dungeon import Map, MapConfig, decode_map, generate_map, parse_chess_string
from dgmapper.logging_utils import get_logger
from dgmapper.routes.validation import (
    MAP_PAYLOAD,
    MAP_POINT_PAYLOAD,
    MAP_POINTS_PAYLOAD,
    SAMPLE_QUERY,
    validate,
)

bp_map = Blueprint("map_api", __name__)
log = get_logger("dgmapper.api")


def _map_config() -> MapConfig:
    return current_app.config.get("DGMAPPER_MAP_CONFIG") or MapConfig()


def _load_map(text: str) -> Map:
    return decode_map(text, validate=_map_config().strict)


def _result(dmap: Map):
    return jsonify({"map": str(dmap), "summary": dmap.summary()})


def _payload(schema):
    """Validate the JSON body; returns (data, None) or (None, error_response)."""
    ok, data = validate(request.get_json(silent=True), schema)
    if not ok:
        return None, (jsonify(data), 400)
    return data, None


@bp_map.route("/api/map/analyze", methods=["POST"])
def analyze():
    """Classify rooms and compute metrics for a map.

    Body: { "map": "<canonical map text>" }
    Response: summary dict (rooms, dead ends, crit rooms, diameter, ...).
    """
    data, err = _payload(MAP_PAYLOAD)
    if err:
        return err
    dmap = _load_map(data["map"])
    summary = dmap.summary()
    log.info(event="analyze", rooms=summary["rooms"], diameter=summary["diameter"])
    return jsonify(summary)


@bp_map.route("/api/map/pretty", methods=["POST"])
def pretty():
    data, err = _payload(MAP_PAYLOAD)
    if err:
        return err
    dmap = _load_map(data["map"])
    return jsonify({"rows": dmap.to_pretty_string().split("\n")})


@bp_map.route("/api/map/prune", methods=["POST"])
def prune():
    """Remove one or more dead ends, in order.

    Body: { "map": str, "point": "c3" } or { "map": str, "points": ["c3", "d3"] }
    Response: { "map": <updated text>, "summary": {...} }
    """
    body = request.get_json(silent=True)
    schema = MAP_POINTS_PAYLOAD if isinstance(body, dict) and "points" in body else MAP_POINT_PAYLOAD
    data, err = _payload(schema)
    if err:
        return err
    dmap = _load_map(data["map"])
    points = data["points"] if "points" in data else [data["point"]]
    for raw in points:
        dmap.remove_dead_end(parse_chess_string(raw.strip()))
    log.info(event="prune", removed=len(points), rooms=dmap.room_count)
    return _result(dmap)


@bp_map.route("/api/map/rebase", methods=["POST"])
def rebase():
    data, err = _payload(MAP_POINT_PAYLOAD)
    if err:
        return err
    dmap = _load_map(data["map"])
    dmap.rebase(parse_chess_string(data["point"]))
    log.info(event="rebase", base=data["point"])
    return _result(dmap)


@bp_map.route("/api/map/backtrack", methods=["POST"])
def backtrack():
    """Move a critical endpoint one room toward the base."""
    data, err = _payload(MAP_POINT_PAYLOAD)
    if err:
        return err
    dmap = _load_map(data["map"])
    dmap.backtrack_crit_endpoint(parse_chess_string(data["point"]))
    return _result(dmap)


@bp_map.route("/api/map/sample")
def sample():
    """Generate a random completed map.

    Query: ?seed=<int>&rooms=<int> (both optional)
    """
    query = {}
    for key in ("seed", "rooms"):
        raw = request.args.get(key)
        if raw is None or raw == "":
            continue
        try:
            query[key] = int(raw)
        except ValueError:
            return jsonify({"field": key, "error": "expected int", "code": "type"}), 400
    ok, data = validate(query, SAMPLE_QUERY)
    if not ok:
        return jsonify(data), 400
    cfg = _map_config()
    cfg = replace(cfg, seed=data.get("seed"), room_count=data.get("rooms", cfg.room_count))
    dmap = generate_map(cfg)
    log.info(event="sample", seed=cfg.seed, rooms=dmap.room_count)
    return _result(dmap)
