"""Load/save boundary: recognise stored level payloads and expand them.

Two payload families are read:

* chunked - ``{"format": "chunks20x18", "chunkWidth": 20, "chunkHeight": 18,
  "levels": [...]}``, expanded through :func:`decode_many`.
* legacy - a bare list of dense levels (``[[row, row, ...], ...]``) or an
  untagged object ``{"levels": [[row, ...], ...]}``, passed through after
  row coercion.

Any other shape, or a ``format`` tag other than ``chunks20x18``, raises
:class:`UnsupportedFormatError` instead of guessing.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from .chunks import decode, decode_many, encode_many
from .constants import FORMAT_TAG
from .errors import UnsupportedFormatError
from .grid import coerce_rows
from .normalize import normalize
from .types import ChunkedLevel, DenseInput, DenseLevel

CHUNKED = "chunked"
LEGACY = "legacy"


def _is_dense_list(levels: Any) -> bool:
    return isinstance(levels, list) and (len(levels) == 0 or isinstance(levels[0], list))


def detect_format(payload: Any) -> str:
    """Return ``"chunked"`` or ``"legacy"`` for a stored levels payload."""
    if isinstance(payload, list):
        if _is_dense_list(payload):
            return LEGACY
        raise UnsupportedFormatError("unrecognized levels payload: list entries must be levels")
    if isinstance(payload, dict):
        if "format" in payload:
            if payload["format"] != FORMAT_TAG:
                raise UnsupportedFormatError(f"unsupported format: {payload['format']!r}")
            if not isinstance(payload.get("levels"), list):
                raise UnsupportedFormatError(f"{FORMAT_TAG} payload has no levels list")
            return CHUNKED
        if _is_dense_list(payload.get("levels")):
            return LEGACY
    raise UnsupportedFormatError("unrecognized levels payload")


def levels_from_any(payload: Any, max_cells: Optional[int] = None) -> List[DenseLevel]:
    """Expand a stored payload of either family into dense levels.

    ``max_cells`` only applies to chunked payloads. Legacy levels are already
    dense, so their size is bounded by the payload itself.
    """
    kind = detect_format(payload)
    if kind == CHUNKED:
        return decode_many(payload, max_cells=max_cells)
    levels = payload if isinstance(payload, list) else payload["levels"]
    return [coerce_rows(level) for level in levels]


def level_from_any(data: Any, max_cells: Optional[int] = None) -> DenseLevel:
    """Expand a single embedded level (the ``data`` field of a shared level).

    Accepts a chunked level object (optionally tagged with ``format``) or a
    legacy dense level.
    """
    if isinstance(data, dict) and "chunks" in data:
        tag = data.get("format", FORMAT_TAG)
        if tag != FORMAT_TAG:
            raise UnsupportedFormatError(f"unsupported format: {tag!r}")
        return decode(ChunkedLevel.from_dict(data), max_cells=max_cells)
    if isinstance(data, list):
        return coerce_rows(data)
    raise UnsupportedFormatError("unrecognized level payload")


def build_levels_file(levels: Iterable[DenseInput], normalize_first: bool = False) -> dict:
    """Save path: optional normalization, chunk encoding, wire dict."""
    if normalize_first:
        levels = [normalize(level) for level in levels]
    return encode_many(levels).to_dict()


__all__ = ["CHUNKED", "LEGACY", "detect_format", "levels_from_any", "level_from_any", "build_levels_file"]
