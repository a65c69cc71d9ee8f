"""HTTP wrappers around the codec."""

import pytest

from levelcodec.codec import FORMAT_TAG
from tests.level_test_utils import blank_level, place


def test_encode_endpoint_returns_levels_file(client):
    level = place(blank_level(25, 20), 22, 19, "P")
    r = client.post("/api/codec/encode", json={"levels": [level]})
    assert r.status_code == 200
    data = r.get_json()
    assert data["format"] == FORMAT_TAG
    assert data["levels"][0]["width"] == 25
    assert data["levels"][0]["chunks"] == [{"cx": 1, "cy": 1, "rows": ["0" * 20, "00P" + "0" * 17]}]


def test_encode_endpoint_normalize_flag(client):
    r = client.post("/api/codec/encode", json={"levels": [["000", "010", "000"]], "normalize": True})
    assert r.get_json()["levels"][0]["width"] == 1


def test_encode_endpoint_normalize_default_from_config(client, test_app):
    test_app.config["LEVELCODEC_NORMALIZE_ON_ENCODE"] = True
    try:
        r = client.post("/api/codec/encode", json={"levels": [["00", "01"]]})
        assert r.get_json()["levels"][0]["height"] == 1
    finally:
        test_app.config["LEVELCODEC_NORMALIZE_ON_ENCODE"] = False


def test_encode_endpoint_rejects_ragged_level(client):
    r = client.post("/api/codec/encode", json={"levels": [["00", "0"]]})
    assert r.status_code == 400
    assert r.get_json()["code"] == "malformed"


def test_encode_endpoint_requires_levels_list(client):
    r = client.post("/api/codec/encode", json={"levels": "000"})
    assert r.status_code == 400


def test_non_json_body_is_rejected(client):
    r = client.post("/api/codec/decode", data="not json", content_type="text/plain")
    assert r.status_code == 400
    assert r.get_json()["code"] == "malformed"


def test_decode_endpoint_round_trip(client):
    levels = [["1000", "0000", "0002"]]
    encoded = client.post("/api/codec/encode", json={"levels": levels}).get_json()
    r = client.post("/api/codec/decode", json=encoded)
    assert r.status_code == 200
    assert r.get_json() == {"levels": levels}


def test_decode_endpoint_accepts_legacy(client):
    r = client.post("/api/codec/decode", json=[["01"]])
    assert r.get_json() == {"levels": [["01"]]}


def test_decode_endpoint_unknown_format(client):
    r = client.post("/api/codec/decode", json={"format": "rle-v2", "levels": []})
    assert r.status_code == 422
    assert r.get_json()["code"] == "unsupported_format"


def test_normalize_endpoint(client):
    r = client.post("/api/codec/normalize", json={"level": ["0000", "0S00", "00T0"]})
    assert r.status_code == 200
    assert r.get_json() == {"level": ["S0", "0T"], "width": 2, "height": 2}


def test_normalize_endpoint_missing_level(client):
    r = client.post("/api/codec/normalize", json={})
    assert r.status_code == 400


@pytest.mark.parametrize("flag", ["false", "0", 0, 1, None, [True]])
def test_encode_endpoint_normalize_must_be_boolean(client, flag):
    r = client.post("/api/codec/encode", json={"levels": [["000", "010"]], "normalize": flag})
    assert r.status_code == 400
    assert r.get_json()["code"] == "malformed"


def test_encode_endpoint_normalize_false_keeps_borders(client, test_app):
    test_app.config["LEVELCODEC_NORMALIZE_ON_ENCODE"] = True
    try:
        r = client.post("/api/codec/encode", json={"levels": [["000", "010"]], "normalize": False})
        assert r.status_code == 200
        assert r.get_json()["levels"][0]["width"] == 3
    finally:
        test_app.config["LEVELCODEC_NORMALIZE_ON_ENCODE"] = False


def test_decode_endpoint_rejects_oversized_declared_level(client):
    body = {"format": FORMAT_TAG, "levels": [{"width": 6000, "height": 6000, "chunks": []}]}
    r = client.post("/api/codec/decode", json=body)
    assert r.status_code == 413
    assert r.get_json()["code"] == "too_large"


def test_decode_endpoint_cell_limit_is_summed_over_levels(client, test_app):
    level = {"width": 10, "height": 10, "chunks": []}
    saved = test_app.config["LEVELCODEC_MAX_LEVEL_CELLS"]
    test_app.config["LEVELCODEC_MAX_LEVEL_CELLS"] = 250
    try:
        ok = client.post("/api/codec/decode", json={"format": FORMAT_TAG, "levels": [level, level]})
        assert ok.status_code == 200
        assert len(ok.get_json()["levels"]) == 2
        r = client.post("/api/codec/decode", json={"format": FORMAT_TAG, "levels": [level, level, level]})
        assert r.status_code == 413
    finally:
        test_app.config["LEVELCODEC_MAX_LEVEL_CELLS"] = saved
