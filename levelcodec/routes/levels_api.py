"""
project: levelcodec
module: levels_api.py
License: MIT

Per-owner level storage.

The stored payload is opaque: POST keeps the request body verbatim and GET
hands it back unchanged. Only the `/expanded` view runs the decode boundary,
so a client can save any payload shape but must use a readable one to get
dense levels back.

  GET  /api/levels/<owner>           stored JSON, or { "levels": [] }
  POST /api/levels/<owner>           store body; { "ok": true }
  GET  /api/levels/<owner>/expanded  { "levels": [[row, ...], ...] }, 413 past LEVELCODEC_MAX_LEVEL_CELLS
"""

import json

from flask import Blueprint, Response, current_app, jsonify, request

from levelcodec.codec import levels_from_any
from levelcodec.logging_utils import get_logger
from levelcodec.models import LevelsBlob

bp_levels = Blueprint("levels_api", __name__)

log = get_logger("levelcodec.api")

MAX_OWNER_LEN = 120


def _bad_owner(owner: str):
    if not owner.strip() or len(owner) > MAX_OWNER_LEN:
        return jsonify({"ok": False, "error": "invalid owner key"}), 400
    return None


@bp_levels.route("/api/levels/<owner>", methods=["GET"])
def get_levels(owner):
    bad = _bad_owner(owner)
    if bad:
        return bad
    raw = LevelsBlob.get(owner)
    if raw is None:
        return jsonify({"levels": []})
    return Response(raw, mimetype="application/json")


@bp_levels.route("/api/levels/<owner>", methods=["POST"])
def save_levels(owner):
    bad = _bad_owner(owner)
    if bad:
        return bad
    raw = request.get_data(as_text=True)
    try:
        json.loads(raw or "")
    except ValueError as e:
        log.warn(event="levels_rejected", owner=owner, error=str(e))
        return jsonify({"ok": False, "error": f"invalid JSON: {e}"}), 400
    LevelsBlob.put(owner, raw)
    log.info(event="levels_saved", owner=owner, bytes=len(raw))
    return jsonify({"ok": True})


@bp_levels.route("/api/levels/<owner>/expanded", methods=["GET"])
def get_expanded_levels(owner):
    bad = _bad_owner(owner)
    if bad:
        return bad
    raw = LevelsBlob.get(owner)
    if raw is None:
        return jsonify({"levels": []})
    levels = levels_from_any(json.loads(raw), max_cells=current_app.config.get("LEVELCODEC_MAX_LEVEL_CELLS"))
    return jsonify({"levels": levels})
