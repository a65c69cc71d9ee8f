"""Structured event lines for the codec, the HTTP service and the CLI.

Every event is a single line on stdout (stderr for ``error``), written either
as ``key=value`` pairs or, with JSON mode on, as a compact JSON object. Each
line leads with ``level`` and ``ts`` and carries the emitting ``logger`` name.
Fields whose value is None are left out. Reserved keys: level, ts.

Usage:
    from levelcodec.logging_utils import get_logger
    log = get_logger("levelcodec.api")
    log.info(event="levels_saved", owner="alice", bytes=512)

Events emitted by this package:
    levelcodec.codec  debug  level_encoded, level_decoded   width height chunks
                      debug  level_normalized               width_in height_in width height
    levelcodec.api    info   levels_encoded, levels_decoded, levels_saved
                      warn   levels_rejected, codec_rejected (code, path, error)
    levelcodec        info   startup
                      warn   convert_failed                 mode code error

Environment (read once at import):
    LEVELCODEC_LOG_LEVEL  debug | info | warn | error (default info)
    LEVELCODEC_LOG_JSON   1/true/yes/on for JSON lines
"""

from __future__ import annotations

import json
import os
import sys
import time
from functools import partialmethod

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("LEVELCODEC_LOG_LEVEL", "info").lower(), LEVELS["info"])
JSON_MODE = os.getenv("LEVELCODEC_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _kv(key: str, value) -> str:
    if isinstance(value, (int, float)):
        return f"{key}={value}"
    # keep one token per field so lines split cleanly on spaces
    return f"{key}={str(value).replace(' ', '_')}"


def format_event(level: str, fields: dict) -> str:
    stamp = int(time.time())
    present = {k: v for k, v in fields.items() if v is not None and k not in ("level", "ts")}
    if JSON_MODE:
        return json.dumps({"level": level, "ts": stamp, **present}, separators=(",", ":"), default=str)
    return " ".join([f"level={level}", f"ts={stamp}"] + [_kv(k, v) for k, v in present.items()])


class EventLogger:
    """Named emitter; the threshold and output mode are module-wide."""

    def __init__(self, name: str):
        self.name = name

    def emit(self, level: str, **fields):
        if LEVELS[level] < CURRENT_LEVEL:
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if level == "error" else sys.stdout
        print(format_event(level, fields), file=stream)

    debug = partialmethod(emit, "debug")
    info = partialmethod(emit, "info")
    warn = partialmethod(emit, "warn")
    error = partialmethod(emit, "error")


_loggers: dict[str, EventLogger] = {}


def get_logger(name: str) -> EventLogger:
    return _loggers.setdefault(name, EventLogger(name))


log = get_logger("levelcodec")
