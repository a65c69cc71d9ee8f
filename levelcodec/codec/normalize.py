"""Shrink a dense level to the bounding box of its content.

Every all-empty row is dropped, then every column that is empty in all of
the remaining rows. Interior empty rows and columns go too, not just the
border ones. A level with no content at all collapses to ``["0"]`` so callers
always get a non-degenerate rectangle.
"""
from __future__ import annotations

from levelcodec.logging_utils import get_logger

from .constants import EMPTY_TILE
from .grid import coerce_rows, is_empty_row, require_rectangular
from .types import DenseInput, DenseLevel

log = get_logger("levelcodec.codec")


def normalize(level: DenseInput) -> DenseLevel:
    rows = coerce_rows(level)
    require_rectangular(rows)
    kept = [row for row in rows if not is_empty_row(row)]
    if not kept:
        log.debug(event="level_normalized", width_in=len(rows[0]) if rows else 0, height_in=len(rows), width=1, height=1)
        return [EMPTY_TILE]
    columns = [x for x in range(len(kept[0])) if any(row[x] != EMPTY_TILE for row in kept)]
    out = ["".join(row[x] for x in columns) for row in kept]
    log.debug(
        event="level_normalized",
        width_in=len(rows[0]),
        height_in=len(rows),
        width=len(columns),
        height=len(out),
    )
    return out


__all__ = ["normalize"]
