"""Chunk encoder and decoder for dense tile levels.

Encoding walks the level in 20x18 windows (row-major, ``cy`` outer), pads
the right and bottom edge windows with empty tiles, drops windows with no
content and trims trailing all-empty rows from the ones it keeps. The
declared ``width``/``height`` travel with the chunks, which is what lets the
decoder restore trailing emptiness exactly.

Decoding starts from an all-empty grid of the declared size and copies every
non-empty character of every chunk into place. Anything falling outside the
declared bounds, or outside a chunk's own 20x18 window, is skipped rather
than rejected, so payloads from newer or older producers still load. An
empty tile never overwrites, so for overlapping chunks a later non-empty
tile beats an earlier one at the same cell.

The declared size is trusted, so a few bytes of wire data can ask for a huge
grid. Callers that decode untrusted payloads pass ``max_cells``; the total
``width * height`` of the levels is checked before anything is allocated.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Union

from levelcodec.logging_utils import get_logger

from .constants import CHUNK_H, CHUNK_W, EMPTY_TILE
from .errors import LevelTooLargeError
from .grid import coerce_rows, empty_level, is_empty_row, level_dimensions, require_rectangular
from .types import Chunk, ChunkedLevel, ChunkedLevelsFile, DenseInput, DenseLevel

log = get_logger("levelcodec.codec")


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def encode(level: DenseInput) -> ChunkedLevel:
    """Return the sparse chunked form of a rectangular dense level.

    Raises:
        MalformedLevelError: rows differ in length or are not tile strings.
    """
    rows = coerce_rows(level)
    require_rectangular(rows)
    width, height = level_dimensions(rows)

    chunks: List[Chunk] = []
    for cy in range(_ceil_div(height, CHUNK_H)):
        y0 = cy * CHUNK_H
        band = rows[y0 : y0 + CHUNK_H]
        for cx in range(_ceil_div(width, CHUNK_W)):
            x0 = cx * CHUNK_W
            part = [row[x0 : x0 + CHUNK_W].ljust(CHUNK_W, EMPTY_TILE) for row in band]
            last = len(part) - 1
            while last >= 0 and is_empty_row(part[last]):
                last -= 1
            if last < 0:
                continue
            chunks.append(Chunk(cx=cx, cy=cy, rows=tuple(part[: last + 1])))

    log.debug(event="level_encoded", width=width, height=height, chunks=len(chunks))
    return ChunkedLevel(width=width, height=height, chunks=tuple(chunks))


def encode_many(levels: Iterable[DenseInput]) -> ChunkedLevelsFile:
    return ChunkedLevelsFile(levels=tuple(encode(level) for level in levels))


def _as_chunked_level(chunked: Union[ChunkedLevel, dict]) -> ChunkedLevel:
    if isinstance(chunked, ChunkedLevel):
        return chunked
    return ChunkedLevel.from_dict(chunked)


def check_cell_budget(levels: Iterable[ChunkedLevel], max_cells: Optional[int]) -> None:
    """Raise :class:`LevelTooLargeError` if the levels declare more than ``max_cells`` tiles in total."""
    if max_cells is None:
        return
    total = sum(level.width * level.height for level in levels)
    if total > max_cells:
        raise LevelTooLargeError(f"levels declare {total} cells, limit is {max_cells}")


def decode(chunked: Union[ChunkedLevel, dict], max_cells: Optional[int] = None) -> DenseLevel:
    """Rebuild the dense level described by ``chunked``.

    Accepts a :class:`ChunkedLevel` or its wire dict. Always returns exactly
    ``height`` rows of ``width`` tiles.

    Raises:
        LevelTooLargeError: ``width * height`` exceeds ``max_cells``.
    """
    level = _as_chunked_level(chunked)
    check_cell_budget([level], max_cells)
    width, height = level.width, level.height
    grid = empty_level(width, height)

    for chunk in level.chunks:
        y0 = chunk.cy * CHUNK_H
        x0 = chunk.cx * CHUNK_W
        for y, src in enumerate(chunk.rows[:CHUNK_H]):
            dst_y = y0 + y
            if dst_y >= height:
                break
            if dst_y < 0:
                continue
            dst_row = grid[dst_y]
            for x, ch in enumerate(src[:CHUNK_W]):
                dst_x = x0 + x
                if dst_x >= width:
                    break
                if dst_x < 0 or ch == EMPTY_TILE:
                    continue
                dst_row[dst_x] = ch

    log.debug(event="level_decoded", width=width, height=height, chunks=len(level.chunks))
    return ["".join(row) for row in grid]


def decode_many(file: Union[ChunkedLevelsFile, Any], max_cells: Optional[int] = None) -> List[DenseLevel]:
    """Expand every level of a levels file (object or wire dict).

    ``max_cells`` bounds the summed size of all levels in the file.

    Raises:
        UnsupportedFormatError: wire dict with a foreign format tag or chunk size.
        LevelTooLargeError: the levels together exceed ``max_cells``.
    """
    if not isinstance(file, ChunkedLevelsFile):
        file = ChunkedLevelsFile.from_dict(file)
    check_cell_budget(file.levels, max_cells)
    return [decode(level) for level in file.levels]


__all__ = ["encode", "encode_many", "decode", "decode_many", "check_cell_budget"]
