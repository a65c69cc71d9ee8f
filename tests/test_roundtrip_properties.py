"""Seeded property checks over many level shapes and densities.

Every generated level must survive encode -> (JSON) -> decode unchanged, and
every encoded level must satisfy the sparse-form invariants.
"""

import json
import random

import pytest

from levelcodec.codec import (
    CHUNK_H,
    CHUNK_W,
    ChunkedLevelsFile,
    decode,
    decode_many,
    encode,
    encode_many,
    is_empty_row,
    normalize,
)
from tests.level_test_utils import SHAPES, blank_level, random_level

DENSITIES = (0.0, 0.002, 0.05, 0.5, 1.0)


def _levels(seed: int):
    rng = random.Random(seed)
    for width, height in SHAPES:
        for density in DENSITIES:
            yield random_level(rng, width, height, density)


@pytest.mark.parametrize("seed", [1, 7, 1234, 99991])
def test_decode_inverts_encode(seed):
    for level in _levels(seed):
        assert decode(encode(level)) == level


def test_degenerate_levels_round_trip():
    for level in ([], ["0"], ["", "", ""], blank_level(37, 19), normalize(["000"])):
        assert decode(encode(level)) == level


@pytest.mark.parametrize("seed", [3, 42])
def test_round_trip_through_json(seed):
    levels = list(_levels(seed))
    wire = json.loads(json.dumps(encode_many(levels).to_dict()))
    assert decode_many(wire) == levels
    assert decode_many(ChunkedLevelsFile.from_dict(wire)) == levels


@pytest.mark.parametrize("seed", [5, 2024])
def test_encoded_form_invariants(seed):
    for level in _levels(seed):
        chunked = encode(level)
        cols = -(-chunked.width // CHUNK_W)
        rows = -(-chunked.height // CHUNK_H)
        coords = [(c.cx, c.cy) for c in chunked.chunks]
        assert coords == sorted(coords, key=lambda p: (p[1], p[0]))
        assert len(set(coords)) == len(coords)
        for chunk in chunked.chunks:
            assert 0 <= chunk.cx < cols and 0 <= chunk.cy < rows
            assert 1 <= len(chunk.rows) <= CHUNK_H
            assert all(len(r) == CHUNK_W for r in chunk.rows)
            assert not is_empty_row(chunk.rows[-1])


def test_chunk_count_matches_windows_with_content():
    rng = random.Random(77)
    level = random_level(rng, 64, 50, 0.01)
    expected = set()
    for y, row in enumerate(level):
        for x, tile in enumerate(row):
            if tile != "0":
                expected.add((x // CHUNK_W, y // CHUNK_H))
    assert {(c.cx, c.cy) for c in encode(level).chunks} == expected


@pytest.mark.parametrize("seed", [11, 12])
def test_normalized_levels_round_trip(seed):
    for level in _levels(seed):
        norm = normalize(level)
        assert decode(encode(norm)) == norm
