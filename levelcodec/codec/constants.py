"""Fixed values shared by the level codec.

Chunk dimensions are carried in every levels file but only 20x18 is
supported; a file declaring any other size is rejected on read.
"""

EMPTY_TILE = "0"

CHUNK_W = 20
CHUNK_H = 18

FORMAT_TAG = "chunks20x18"

__all__ = ["EMPTY_TILE", "CHUNK_W", "CHUNK_H", "FORMAT_TAG"]
