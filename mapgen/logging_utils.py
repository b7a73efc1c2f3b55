"""Minimal structured logging helper.

Provides a lightweight wrapper around print() to emit key=value pairs with a
timestamp and level. Avoids pulling in the stdlib logging complexity for the
generator while enabling easier log parsing.

Usage:
    from mapgen.logging_utils import get_logger
    log = get_logger("mapgen.service")
    log.info(event="server_start", port=5000)

Loggers are plain objects; anything exposing debug/info/warn/error(**fields)
can be handed to the generator instead (tests pass a capturing sink).

All non-str key/value values are str()'d. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Optional, TextIO

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _env_level() -> int:
    return LEVELS.get(os.getenv("MAPGEN_LOG_LEVEL", "info").lower(), 20)


def _env_json_mode() -> bool:
    return os.getenv("MAPGEN_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, json_mode: bool, **fields) -> str:
    if json_mode:
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


class StructuredLogger:
    def __init__(self, name: Optional[str] = None, level: Optional[str] = None, json_mode: Optional[bool] = None,
                 stream: Optional[TextIO] = None):
        self.name = name or "mapgen"
        self.threshold = LEVELS[level] if level else _env_level()
        self.json_mode = _env_json_mode() if json_mode is None else json_mode
        # fixed stream for every level (CLI keeps stdout clean for JSON output)
        self.stream = stream

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < self.threshold:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        stream = self.stream or (sys.stdout if lvl != "error" else sys.stderr)
        print(_format(lvl, self.json_mode, **fields), file=stream)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


class RecordingLogger:
    """Event sink that keeps every record in memory instead of printing."""

    def __init__(self):
        self.records = []

    def _record(self, level: str, fields):
        self.records.append(dict(fields, level=level))

    def debug(self, **fields):
        self._record("debug", fields)

    def info(self, **fields):
        self._record("info", fields)

    def warn(self, **fields):
        self._record("warn", fields)

    def error(self, **fields):
        self._record("error", fields)

    def events(self, level: Optional[str] = None):
        return [r.get("event") for r in self.records if level is None or r["level"] == level]


_LOGGER_CACHE = {}


def get_logger(name: str) -> StructuredLogger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = StructuredLogger(name)
    return _LOGGER_CACHE[name]


log = get_logger("mapgen")
