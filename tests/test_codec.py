import gzip
import json

import msgpack
import pytest
import zstandard

from opengemini.codec import (
    HTTP_CONTENT_TYPE_JSON,
    HTTP_CONTENT_TYPE_MSGPACK,
    HTTP_ENCODING_GZIP,
    HTTP_ENCODING_SNAPPY,
    HTTP_ENCODING_ZSTD,
    decompress_body,
    deserialize_body,
    snappy_decode,
)
from opengemini.errors import OpenGeminiError

SAMPLE = {"results": [{"statement_id": 0, "series": [{"name": "weather", "values": [[1, 2.5]]}]}]}


def test_snappy_literal_only():
    assert snappy_decode(b"\x05\x10hello") == b"hello"


def test_snappy_empty_block():
    assert snappy_decode(b"\x00") == b""


def test_snappy_copy1_overlapping():
    data = b"\x09" + b"\x08abc" + bytes([(2 << 2) | 1, 3])
    assert snappy_decode(data) == b"abcabcabc"


def test_snappy_copy2():
    data = b"\x08" + b"\x0cabcd" + bytes([(4 - 1) << 2 | 2, 4, 0])
    assert snappy_decode(data) == b"abcdabcd"


def test_snappy_offset_beyond_output_is_corrupt():
    data = b"\x09" + b"\x08abc" + bytes([(2 << 2) | 1, 9])
    with pytest.raises(OpenGeminiError, match="corrupt"):
        snappy_decode(data)


def test_snappy_length_mismatch_is_corrupt():
    with pytest.raises(OpenGeminiError):
        snappy_decode(b"\x06\x10hello")


def test_decompress_gzip_round_trip():
    payload = json.dumps(SAMPLE).encode()
    assert decompress_body(HTTP_ENCODING_GZIP, gzip.compress(payload)) == payload


def test_decompress_zstd_round_trip():
    payload = msgpack.packb(SAMPLE)
    compressed = zstandard.ZstdCompressor().compress(payload)
    assert decompress_body(HTTP_ENCODING_ZSTD, compressed) == payload


def test_decompress_snappy():
    assert decompress_body(HTTP_ENCODING_SNAPPY, b"\x05\x10hello") == b"hello"


def test_decompress_unknown_encoding_passes_through():
    assert decompress_body("", b"raw bytes") == b"raw bytes"


def test_decompress_bad_gzip():
    with pytest.raises(OpenGeminiError, match="failed to decompress gzip body"):
        decompress_body(HTTP_ENCODING_GZIP, b"not gzip data")


def test_decompress_bad_zstd():
    with pytest.raises(OpenGeminiError, match="failed to decompress zstd body"):
        decompress_body(HTTP_ENCODING_ZSTD, b"not zstd data")


def test_decompress_bad_snappy():
    with pytest.raises(OpenGeminiError, match="failed to decompress snappy body"):
        decompress_body(HTTP_ENCODING_SNAPPY, b"\x06\x10hello")


def test_deserialize_json_round_trip():
    assert deserialize_body(HTTP_CONTENT_TYPE_JSON, json.dumps(SAMPLE).encode()) == SAMPLE


def test_deserialize_msgpack_round_trip():
    assert deserialize_body(HTTP_CONTENT_TYPE_MSGPACK, msgpack.packb(SAMPLE)) == SAMPLE


def test_deserialize_unsupported_content_type():
    with pytest.raises(OpenGeminiError, match="unsupported content type: text/plain"):
        deserialize_body("text/plain", b"{}")


def test_deserialize_bad_json():
    with pytest.raises(OpenGeminiError, match="unmarshal json body failed"):
        deserialize_body(HTTP_CONTENT_TYPE_JSON, b"{not json")


def test_deserialize_bad_msgpack():
    with pytest.raises(OpenGeminiError, match="unmarshal msgpack body failed"):
        deserialize_body(HTTP_CONTENT_TYPE_MSGPACK, b"\xc1")


def test_full_pipeline_gzip_json():
    body = gzip.compress(json.dumps(SAMPLE).encode())
    decoded = deserialize_body(HTTP_CONTENT_TYPE_JSON, decompress_body(HTTP_ENCODING_GZIP, body))
    assert decoded["results"][0]["series"][0]["name"] == "weather"