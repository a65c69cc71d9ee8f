"""Row helpers shared by the normalizer, encoder and decode boundary."""
from __future__ import annotations

from typing import List, Tuple

from .constants import EMPTY_TILE
from .errors import MalformedLevelError
from .types import DenseInput, DenseLevel


def is_empty_row(row: str) -> bool:
    """True when every tile in ``row`` is empty (a zero-length row counts)."""
    return not row.strip(EMPTY_TILE)


def coerce_rows(level: DenseInput) -> DenseLevel:
    """Return ``level`` as a fresh list of row strings.

    Rows may be strings or sequences of single-character strings. Anything
    else raises :class:`MalformedLevelError`; the input is never modified.
    """
    if isinstance(level, str) or not isinstance(level, (list, tuple)):
        raise MalformedLevelError("level must be a list of rows")
    rows: DenseLevel = []
    for y, row in enumerate(level):
        if isinstance(row, str):
            rows.append(row)
            continue
        if not isinstance(row, (list, tuple)):
            raise MalformedLevelError(f"row {y} must be a string or a list of tiles")
        for x, tile in enumerate(row):
            if not isinstance(tile, str) or len(tile) != 1:
                raise MalformedLevelError(f"tile ({x},{y}) must be a single character")
        rows.append("".join(row))
    return rows


def require_rectangular(rows: DenseLevel) -> None:
    if not rows:
        return
    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MalformedLevelError(f"level is not rectangular: row {y} has length {len(row)}, expected {width}")


def level_dimensions(rows: DenseLevel) -> Tuple[int, int]:
    """Return ``(width, height)``; an empty level is 0x0."""
    return (len(rows[0]) if rows else 0), len(rows)


def empty_level(width: int, height: int) -> List[List[str]]:
    return [[EMPTY_TILE] * width for _ in range(height)]


__all__ = ["is_empty_row", "coerce_rows", "require_rectangular", "level_dimensions", "empty_level"]
