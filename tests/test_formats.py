"""Stored-payload detection and the load/save boundary helpers."""

import pytest

from levelcodec.codec import (
    FORMAT_TAG,
    LevelTooLargeError,
    MalformedLevelError,
    UnsupportedFormatError,
    build_levels_file,
    detect_format,
    encode_many,
    level_from_any,
    levels_from_any,
)

LEGACY = [["111", "0P1"], ["222", "0S2"]]


@pytest.mark.parametrize(
    "payload,kind",
    [
        ([], "legacy"),
        (LEGACY, "legacy"),
        ({"levels": LEGACY}, "legacy"),
        ({"levels": []}, "legacy"),
        ({"format": FORMAT_TAG, "chunkWidth": 20, "chunkHeight": 18, "levels": []}, "chunked"),
    ],
)
def test_detect_format(payload, kind):
    assert detect_format(payload) == kind


@pytest.mark.parametrize(
    "payload",
    [
        {"format": "rle-v2", "levels": []},
        {"format": FORMAT_TAG, "levels": "nope"},
        {"name": "no levels here"},
        ["111", "0P1"],
        "chunks20x18",
        42,
        None,
    ],
)
def test_unrecognized_payloads_are_refused(payload):
    with pytest.raises(UnsupportedFormatError) as exc:
        levels_from_any(payload)
    assert exc.value.code == "unsupported_format"


def test_legacy_payload_passes_through():
    assert levels_from_any(LEGACY) == LEGACY
    assert levels_from_any({"levels": LEGACY}) == LEGACY


def test_legacy_character_lists_are_joined():
    assert levels_from_any([[["1", "0"], ["0", "1"]]]) == [["10", "01"]]


def test_chunked_payload_is_expanded():
    wire = encode_many(LEGACY).to_dict()
    assert levels_from_any(wire) == LEGACY


def test_single_level_from_chunked_data():
    data = {"format": FORMAT_TAG, "width": 3, "height": 2, "chunks": [{"cx": 0, "cy": 0, "rows": ["", "0P"]}]}
    assert level_from_any(data) == ["000", "0P0"]
    del data["format"]
    assert level_from_any(data) == ["000", "0P0"]


def test_single_level_from_dense_data():
    assert level_from_any(["01", "10"]) == ["01", "10"]
    assert level_from_any([["0", "1"]]) == ["01"]


@pytest.mark.parametrize("data", [{"format": "other", "chunks": []}, {"rows": []}, "010", 7])
def test_single_level_refuses_unknown_shapes(data):
    with pytest.raises(UnsupportedFormatError):
        level_from_any(data)


def test_single_level_with_bad_dimensions_is_malformed():
    with pytest.raises(MalformedLevelError):
        level_from_any({"width": "3", "height": 1, "chunks": []})


def test_build_levels_file_optionally_normalizes():
    levels = [["000", "010", "000"]]
    raw = build_levels_file(levels)
    assert raw["levels"][0]["width"] == 3 and raw["levels"][0]["height"] == 3
    norm = build_levels_file(levels, normalize_first=True)
    assert norm["format"] == FORMAT_TAG
    assert norm["levels"][0] == {"width": 1, "height": 1, "chunks": [{"cx": 0, "cy": 0, "rows": ["1" + "0" * 19]}]}


def test_cell_limit_applies_to_chunked_payloads_only():
    chunked = {"format": FORMAT_TAG, "levels": [{"width": 100, "height": 100, "chunks": []}]}
    with pytest.raises(LevelTooLargeError):
        levels_from_any(chunked, max_cells=99)
    with pytest.raises(LevelTooLargeError):
        level_from_any(chunked["levels"][0], max_cells=99)
    # Legacy levels are already materialized
    assert levels_from_any([["0" * 100]], max_cells=1) == [["0" * 100]]
