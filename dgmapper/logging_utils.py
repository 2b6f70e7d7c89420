"""Minimal structured logging helper.

Emits one line per event made of ``key=value`` pairs (or a JSON object) with a
timestamp, level and logger name, so map operations and API calls can be
grepped or parsed without configuring the stdlib logging tree.

Usage:
    from dgmapper.logging_utils import get_logger
    log = get_logger("dgmapper.api")
    log.info(event="analyze", rooms=24)

Environment:
    DGMAPPER_LOG_LEVEL  debug | info | warn | error (default info)
    DGMAPPER_LOG_JSON   1/true/yes/on to emit JSON lines

Both are read on every call so tests and the CLI can change them at runtime.
Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("DGMAPPER_LOG_LEVEL", "info").lower(), 20)


def json_mode() -> bool:
    return os.getenv("DGMAPPER_LOG_JSON", "0") in _TRUTHY


def _format(level: str, **fields) -> str:
    if json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, bool):
            parts.append(f"{k}={'true' if v else 'false'}")
        elif isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "dgmapper"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < current_level():
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("dgmapper")
