"""Decompression and decoding of query response bodies."""

import gzip
import json
import zlib

import msgpack
import zstandard

from opengemini.errors import OpenGeminiError

HTTP_CONTENT_TYPE_MSGPACK = "application/x-msgpack"
HTTP_CONTENT_TYPE_JSON = "application/json"
HTTP_ENCODING_GZIP = "gzip"
HTTP_ENCODING_ZSTD = "zstd"
HTTP_ENCODING_SNAPPY = "snappy"

_MAX_BLOCK_LENGTH = 0xFFFFFFFF


class _CorruptInput(OpenGeminiError):
    default_message = "snappy: corrupt input"


def _read_uvarint(data):
    value = 0
    shift = 0
    for index, byte in enumerate(data):
        if index >= 10:
            break
        value |= (byte & 0x7F) << shift
        if byte < 0x80:
            return value, index + 1
        shift += 7
    raise _CorruptInput()


def snappy_decode(data):
    """Decode a snappy block (not the framed stream format)."""
    data = bytes(data)
    expected, pos = _read_uvarint(data)
    if expected > _MAX_BLOCK_LENGTH:
        raise OpenGeminiError("snappy: decoded block is too large")
    out = bytearray()
    size = len(data)
    while pos < size:
        tag = data[pos]
        kind = tag & 0x03
        if kind == 0:
            length = tag >> 2
            if length < 60:
                pos += 1
            else:
                extra = length - 59
                if pos + 1 + extra > size:
                    raise _CorruptInput()
                length = int.from_bytes(data[pos + 1:pos + 1 + extra], "little")
                pos += 1 + extra
            length += 1
            if pos + length > size or len(out) + length > expected:
                raise _CorruptInput()
            out += data[pos:pos + length]
            pos += length
            continue
        if kind == 1:
            if pos + 2 > size:
                raise _CorruptInput()
            length = 4 + ((tag >> 2) & 0x07)
            offset = ((tag & 0xE0) << 3) | data[pos + 1]
            pos += 2
        elif kind == 2:
            if pos + 3 > size:
                raise _CorruptInput()
            length = 1 + (tag >> 2)
            offset = int.from_bytes(data[pos + 1:pos + 3], "little")
            pos += 3
        else:
            if pos + 5 > size:
                raise _CorruptInput()
            length = 1 + (tag >> 2)
            offset = int.from_bytes(data[pos + 1:pos + 5], "little")
            pos += 5
        if offset <= 0 or offset > len(out) or len(out) + length > expected:
            raise _CorruptInput()
        start = len(out) - offset
        pattern = bytes(out[start:start + min(offset, length)])
        repeats = -(-length // len(pattern))
        out += (pattern * repeats)[:length]
    if len(out) != expected:
        raise _CorruptInput()
    return bytes(out)


def _gunzip(body):
    try:
        return gzip.decompress(body)
    except (OSError, EOFError, zlib.error) as exc:
        raise OpenGeminiError(f"failed to decompress gzip body: {exc}") from exc


def _unzstd(body):
    try:
        return zstandard.ZstdDecompressor().decompressobj().decompress(body)
    except zstandard.ZstdError as exc:
        raise OpenGeminiError(f"failed to decompress zstd body: {exc}") from exc


def _unsnappy(body):
    try:
        return snappy_decode(body)
    except OpenGeminiError as exc:
        raise OpenGeminiError(f"failed to decompress snappy body: {exc}") from exc


_DECOMPRESSORS = {
    HTTP_ENCODING_ZSTD: _unzstd,
    HTTP_ENCODING_GZIP: _gunzip,
    HTTP_ENCODING_SNAPPY: _unsnappy,
}


def decompress_body(encoding, body):
    """Undo the content encoding of a body; unknown encodings pass it through."""
    decompress = _DECOMPRESSORS.get(encoding)
    return bytes(body) if decompress is None else decompress(bytes(body))


def deserialize_body(content_type, body):
    """Decode a JSON or msgpack body into Python objects."""
    if content_type == HTTP_CONTENT_TYPE_MSGPACK:
        try:
            return msgpack.unpackb(body, raw=False)
        except (ValueError, msgpack.UnpackException) as exc:
            raise OpenGeminiError(f"unmarshal msgpack body failed, error: {exc}") from exc
    if content_type == HTTP_CONTENT_TYPE_JSON:
        try:
            return json.loads(body)
        except (ValueError, UnicodeDecodeError) as exc:
            raise OpenGeminiError(f"unmarshal json body failed, error: {exc}") from exc
    raise OpenGeminiError(f"unsupported content type: {content_type}")