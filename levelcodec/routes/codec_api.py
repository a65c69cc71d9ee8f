"""
project: levelcodec
module: codec_api.py
License: MIT

Stateless JSON wrappers around the level codec.

Endpoints:
  POST /api/codec/encode     { "levels": [[row, ...], ...], "normalize": bool } -> chunked levels file
  POST /api/codec/decode     any stored levels payload -> { "levels": [[row, ...], ...] }
  POST /api/codec/normalize  { "level": [row, ...] } -> { "level": [...], "width": w, "height": h }

Codec rejections are turned into JSON errors by the app-level handler for
LevelCodecError (400 malformed, 413 over LEVELCODEC_MAX_LEVEL_CELLS, 422
unsupported format).
"""

from flask import Blueprint, current_app, jsonify, request

from levelcodec.codec import build_levels_file, level_dimensions, levels_from_any, normalize
from levelcodec.logging_utils import get_logger

bp_codec = Blueprint("codec_api", __name__)

log = get_logger("levelcodec.api")


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return None, (jsonify({"error": "request body must be JSON", "code": "malformed"}), 400)
    return data, None


@bp_codec.route("/api/codec/encode", methods=["POST"])
def encode_levels():
    data, err = _json_body()
    if err:
        return err
    levels = data.get("levels") if isinstance(data, dict) else None
    if not isinstance(levels, list):
        return jsonify({"error": "levels must be a list of dense levels", "code": "malformed"}), 400
    normalize_first = data.get("normalize", current_app.config.get("LEVELCODEC_NORMALIZE_ON_ENCODE", False))
    # JSON booleans only: the string "false" is truthy
    if not isinstance(normalize_first, bool):
        return jsonify({"error": "normalize must be true or false", "code": "malformed"}), 400
    out = build_levels_file(levels, normalize_first=normalize_first)
    log.info(event="levels_encoded", levels=len(levels), normalized=normalize_first)
    return jsonify(out)


@bp_codec.route("/api/codec/decode", methods=["POST"])
def decode_levels():
    data, err = _json_body()
    if err:
        return err
    levels = levels_from_any(data, max_cells=current_app.config.get("LEVELCODEC_MAX_LEVEL_CELLS"))
    log.info(event="levels_decoded", levels=len(levels))
    return jsonify({"levels": levels})


@bp_codec.route("/api/codec/normalize", methods=["POST"])
def normalize_level():
    data, err = _json_body()
    if err:
        return err
    level = data.get("level") if isinstance(data, dict) else None
    if level is None:
        return jsonify({"error": "missing required field: level", "code": "malformed"}), 400
    out = normalize(level)
    width, height = level_dimensions(out)
    return jsonify({"level": out, "width": width, "height": height})
