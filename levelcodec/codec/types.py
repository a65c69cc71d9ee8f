"""Value types for the chunked level representation.

Wire shape (see ``to_dict``)::

    {"format": "chunks20x18", "chunkWidth": 20, "chunkHeight": 18,
     "levels": [{"width": W, "height": H,
                 "chunks": [{"cx": 0, "cy": 0, "rows": ["...", ...]}, ...]}]}

Instances are immutable and hashable: list arguments are stored as tuples.
The ``from_dict`` parsers only check JSON types. Geometry (chunk coordinates
beyond the declared size, rows longer than a chunk) is left for the decoder
to clip.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple, Union

from .constants import CHUNK_H, CHUNK_W, FORMAT_TAG
from .errors import MalformedLevelError, UnsupportedFormatError

# One string per row; editor buffers may hand over lists of characters instead.
DenseLevel = List[str]
DenseInput = Sequence[Union[str, Sequence[str]]]


def _require_int(data: Dict[str, Any], key: str, where: str) -> int:
    value = data.get(key)
    # bool is an int subclass but never a valid coordinate
    if not isinstance(value, int) or isinstance(value, bool):
        raise MalformedLevelError(f"{where}.{key} must be an integer")
    return value


def _require_list(data: Dict[str, Any], key: str, where: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise MalformedLevelError(f"{where}.{key} must be a list")
    return value


@dataclass(frozen=True)
class Chunk:
    """A 20x18 window of a level, addressed by chunk-grid coordinates.

    Rows past ``len(rows)`` and characters past a row's length read as empty.
    """

    cx: int
    cy: int
    rows: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(self.rows))

    def to_dict(self):
        return {"cx": self.cx, "cy": self.cy, "rows": list(self.rows)}

    @classmethod
    def from_dict(cls, data: Any) -> "Chunk":
        if not isinstance(data, dict):
            raise MalformedLevelError("chunk must be an object")
        rows = _require_list(data, "rows", "chunk")
        for row in rows:
            if not isinstance(row, str):
                raise MalformedLevelError("chunk.rows entries must be strings")
        return cls(cx=_require_int(data, "cx", "chunk"), cy=_require_int(data, "cy", "chunk"), rows=tuple(rows))


@dataclass(frozen=True)
class ChunkedLevel:
    """Declared dense size plus the non-empty chunks covering it."""

    width: int
    height: int
    chunks: Tuple[Chunk, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "chunks", tuple(self.chunks))

    def to_dict(self):
        return {
            "width": self.width,
            "height": self.height,
            "chunks": [c.to_dict() for c in self.chunks],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ChunkedLevel":
        if not isinstance(data, dict):
            raise MalformedLevelError("level must be an object")
        width = _require_int(data, "width", "level")
        height = _require_int(data, "height", "level")
        if width < 0 or height < 0:
            raise MalformedLevelError("level.width and level.height must not be negative")
        chunks = tuple(Chunk.from_dict(c) for c in _require_list(data, "chunks", "level"))
        return cls(width=width, height=height, chunks=chunks)


@dataclass(frozen=True)
class ChunkedLevelsFile:
    levels: Tuple[ChunkedLevel, ...] = ()
    format: str = FORMAT_TAG
    chunk_width: int = CHUNK_W
    chunk_height: int = CHUNK_H

    def __post_init__(self):
        object.__setattr__(self, "levels", tuple(self.levels))

    def to_dict(self):
        return {
            "format": self.format,
            "chunkWidth": self.chunk_width,
            "chunkHeight": self.chunk_height,
            "levels": [lvl.to_dict() for lvl in self.levels],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ChunkedLevelsFile":
        if not isinstance(data, dict):
            raise MalformedLevelError("levels file must be an object")
        tag = data.get("format")
        if tag != FORMAT_TAG:
            raise UnsupportedFormatError(f"unsupported format: {tag!r}")
        chunk_w = data.get("chunkWidth", CHUNK_W)
        chunk_h = data.get("chunkHeight", CHUNK_H)
        if chunk_w != CHUNK_W or chunk_h != CHUNK_H:
            raise UnsupportedFormatError(f"unsupported chunk size: {chunk_w}x{chunk_h} (only {CHUNK_W}x{CHUNK_H} is read)")
        levels = tuple(ChunkedLevel.from_dict(lvl) for lvl in _require_list(data, "levels", "file"))
        return cls(levels=levels)


__all__ = ["Chunk", "ChunkedLevel", "ChunkedLevelsFile", "DenseLevel", "DenseInput"]
