"""Public level codec interface.

Normalizer, chunk encoder/decoder and the stored-payload boundary.
"""

from .chunks import check_cell_budget, decode, decode_many, encode, encode_many
from .constants import CHUNK_H, CHUNK_W, EMPTY_TILE, FORMAT_TAG
from .errors import LevelCodecError, LevelTooLargeError, MalformedLevelError, UnsupportedFormatError
from .formats import build_levels_file, detect_format, level_from_any, levels_from_any
from .grid import is_empty_row, level_dimensions
from .normalize import normalize
from .types import Chunk, ChunkedLevel, ChunkedLevelsFile  # noqa: F401

__all__ = [
    "CHUNK_H",
    "CHUNK_W",
    "EMPTY_TILE",
    "FORMAT_TAG",
    "Chunk",
    "ChunkedLevel",
    "ChunkedLevelsFile",
    "LevelCodecError",
    "MalformedLevelError",
    "UnsupportedFormatError",
    "LevelTooLargeError",
    "normalize",
    "encode",
    "encode_many",
    "decode",
    "decode_many",
    "check_cell_budget",
    "detect_format",
    "levels_from_any",
    "level_from_any",
    "build_levels_file",
    "is_empty_row",
    "level_dimensions",
]
