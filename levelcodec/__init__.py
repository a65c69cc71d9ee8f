"""
project: levelcodec
module: __init__.py
License: MIT

Chunked tile-level codec and a small Flask storage service around it.

`levelcodec.codec` is the pure codec and can be imported on its own. The
Flask app, database and blueprints are built when `levelcodec.webapp` is
first imported.
"""
