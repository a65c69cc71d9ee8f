"""
project: levelcodec
module: webapp.py
License: MIT

Flask application factory and core extensions setup.

This module wires together the Flask app and SQLAlchemy for the level
storage service. Configuration is sourced from environment variables with
reasonable defaults for development. A local `instance/` directory is used
for SQLite and the rotating log file.
"""

import logging
import os
import uuid
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy

# Load .env if present so `SECRET_KEY`, `DATABASE_URL`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts still work with an explicit DATABASE_URL
    pass

secret_key = os.getenv("SECRET_KEY", "dev-secret-change-me")
database_url = os.getenv("DATABASE_URL")

# During pytest runs, isolate to a separate test database
if not database_url:
    is_pytest = bool(os.getenv("PYTEST_CURRENT_TEST"))
    db_filename = "levels_test.db" if is_pytest else "levels.db"
    db_path = Path(app.instance_path) / db_filename
    # Use POSIX path for SQLAlchemy URI compatibility across OS
    database_url = f"sqlite:///{db_path.as_posix()}"


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


app.config.update(
    SECRET_KEY=secret_key,
    SQLALCHEMY_DATABASE_URI=database_url,
    SQLALCHEMY_TRACK_MODIFICATIONS=False,
    # Upper bound on stored/posted level payloads (bytes)
    MAX_CONTENT_LENGTH=int(os.getenv("LEVELCODEC_MAX_PAYLOAD_BYTES", str(2 * 1024 * 1024))),
    # Default for the `normalize` flag of /api/codec/encode
    LEVELCODEC_NORMALIZE_ON_ENCODE=_env_flag("LEVELCODEC_NORMALIZE_ON_ENCODE"),
    # Upper bound on width*height summed over the levels of one decoded payload
    LEVELCODEC_MAX_LEVEL_CELLS=int(os.getenv("LEVELCODEC_MAX_LEVEL_CELLS", str(4_000_000))),
)

engine_opts = {}
if database_url.startswith("sqlite:///"):
    engine_opts["connect_args"] = {
        "timeout": 10,  # busy timeout (seconds) for sqlite
        "check_same_thread": False,
    }
db = SQLAlchemy(app, session_options={"expire_on_commit": False}, engine_options=engine_opts)


# Register HTTP blueprints (import after app/db created)
from levelcodec.routes.codec_api import bp_codec  # noqa: E402
from levelcodec.routes.levels_api import bp_levels  # noqa: E402

app.register_blueprint(bp_codec)
app.register_blueprint(bp_levels)

# Route map debug output (development aid). Suppress by either:
#   1. Setting env var LEVELCODEC_SUPPRESS_ROUTE_MAP=1
#   2. Setting app.config['SUPPRESS_ROUTE_MAP']=True
if not (_env_flag("LEVELCODEC_SUPPRESS_ROUTE_MAP") or app.config.get("SUPPRESS_ROUTE_MAP")):
    print("Registered routes:")
    print(app.url_map)


def create_app():
    """Return the Flask app instance with its tables created.

    `create_all` is idempotent, so calling this from tests, the CLI and the
    server entrypoint alike is safe.
    """
    from levelcodec.models import LevelsBlob  # noqa: F401 ensure model metadata is loaded

    with app.app_context():
        db.create_all()
    return app


from levelcodec.codec import LevelCodecError, LevelTooLargeError, UnsupportedFormatError  # noqa: E402
from levelcodec.logging_utils import get_logger  # noqa: E402


@app.errorhandler(LevelCodecError)
def codec_error(e):
    if isinstance(e, UnsupportedFormatError):
        status = 422
    elif isinstance(e, LevelTooLargeError):
        status = 413
    else:
        status = 400
    get_logger("levelcodec.api").warn(event="codec_rejected", code=e.code, path=request.path, error=e.message)
    return jsonify(e.to_dict()), status


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
