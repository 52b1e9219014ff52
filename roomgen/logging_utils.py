"""Structured event logging for roomgen.

Every generator, the preview API and the CLI report through named loggers
(``roomgen.dungeon``, ``roomgen.maze``, ``roomgen.api``, ``roomgen``) as one
line per event, so a layout run can be followed with grep alone:

    level=warn ts=1700000000 event=loops_short requested=50 added=0 attempts=500 logger=roomgen.maze

Events emitted:
    layout_generated   debug  size, floor count and runtime of a finished grid
    layout_empty       warn   a grid came back without any floor
    loops_short        warn   maze loop injection ran out of attempts
    regions_discarded  debug  cave cells dropped outside the largest region
    invalid_parameter  info   API request rejected with a 400
    listen             info   preview server starting

Non-numeric values are str()'d with spaces replaced by underscores.
Reserved keys: level, ts, logger.

Environment (read on every call, so tests can flip them with monkeypatch):
    ROOMGEN_LOG_LEVEL  debug|info|warn|error (default: info)
    ROOMGEN_LOG_JSON   emit one JSON object per line when truthy
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
TRUTHY = ("1", "true", "TRUE", "yes", "on")


def _current_level() -> int:
    return LEVELS.get(os.getenv("ROOMGEN_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("ROOMGEN_LOG_JSON", "0") in TRUTHY


def _format(level: str, **fields) -> str:
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "roomgen"

    def is_enabled(self, lvl: str) -> bool:
        return LEVELS[lvl] >= _current_level()

    def _log(self, lvl: str, **fields):
        if not self.is_enabled(lvl):
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

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


log = get_logger("roomgen")
