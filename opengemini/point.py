"""Points, timestamp precisions and the line protocol encoder."""

import io
import math
import time
from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import Any, Optional

from opengemini.errors import UnsupportedFieldValueTypeError

_MAX_UINT64 = 2**64 - 1
_NS_PER_MINUTE = 60 * 10**9
_NS_PER_HOUR = 3600 * 10**9


class Precision(IntEnum):
    """Timestamp precision of points and query results."""

    NANOSECOND = 0
    MICROSECOND = 1
    MILLISECOND = 2
    SECOND = 3
    MINUTE = 4
    HOUR = 5
    RFC3339 = 6

    def epoch(self):
        """Return the epoch name the server understands for this precision."""
        return _EPOCHS[self]

    def now_unix(self):
        """Return the current time expressed in this precision."""
        ns = time.time_ns()
        if self is Precision.MICROSECOND:
            return ns // 1_000
        if self is Precision.MILLISECOND:
            return ns // 1_000_000
        if self is Precision.SECOND:
            return ns // 1_000_000_000
        if self is Precision.MINUTE:
            return _round_to(ns, _NS_PER_MINUTE)
        if self is Precision.HOUR:
            return _round_to(ns, _NS_PER_HOUR)
        return ns


_EPOCHS = {
    Precision.NANOSECOND: "ns",
    Precision.MICROSECOND: "u",
    Precision.MILLISECOND: "ms",
    Precision.SECOND: "s",
    Precision.MINUTE: "m",
    Precision.HOUR: "h",
    Precision.RFC3339: "rfc3339",
}
_FROM_EPOCH = {epoch: precision for precision, epoch in _EPOCHS.items()}


def _round_to(value, unit):
    """Round to the nearest multiple of unit, halfway values away from zero."""
    return (value + unit // 2) // unit * unit


def to_precision(epoch):
    """Return the precision for an epoch name; unknown names mean nanoseconds."""
    return _FROM_EPOCH.get(epoch, Precision.NANOSECOND)


class Unsigned(int):
    """An unsigned 64-bit integer field value, written with a 'u' suffix."""

    def __new__(cls, value=0):
        number = int.__new__(cls, value)
        if not 0 <= number <= _MAX_UINT64:
            raise ValueError(f"unsigned value out of range: {int(number)}")
        return number

    def __repr__(self):
        return f"Unsigned({int(self)})"


@dataclass
class Point:
    """A single line protocol point.

    A zero timestamp is left out of the encoded line.
    """

    measurement: str = ""
    precision: Precision = Precision.NANOSECOND
    timestamp: int = 0
    tags: dict = field(default_factory=dict)
    fields: dict = field(default_factory=dict)

    def add_tag(self, key, value):
        self.tags[key] = value

    def add_field(self, key, value):
        self.fields[key] = value


def _escape(text, chars):
    return "".join("\\" + c if c in chars else c for c in text)


def _format_float(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _format_field_value(value: Any) -> str:
    if isinstance(value, bool):
        return "T" if value else "F"
    if isinstance(value, Unsigned):
        return f"{int(value)}u"
    if isinstance(value, int):
        return f"{value}i"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return '"' + _escape(value, '"\\') + '"'
    raise UnsupportedFieldValueTypeError()


def _format_line(point: Point) -> Optional[str]:
    if not point.measurement or not point.fields:
        return None
    parts = [_escape(point.measurement, ", ")]
    for key, value in point.tags.items():
        parts.append("," + _escape(key, ", =") + "=" + _escape(value, ", ="))
    fields = ",".join(
        _escape(key, ", =") + "=" + _format_field_value(value)
        for key, value in point.fields.items()
    )
    parts.append(" " + fields)
    if point.timestamp != 0:
        parts.append(f" {point.timestamp}")
    return "".join(parts)


def encode_point(point):
    """Return the line protocol text of one point, or '' if it has nothing to write."""
    return _format_line(point) or ""


class LineProtocolEncoder:
    """Writes points as line protocol to a text stream."""

    def __init__(self, stream):
        self.stream = stream

    def encode(self, point):
        """Write one point without a trailing newline."""
        line = _format_line(point)
        if line:
            self.stream.write(line)

    def batch_encode(self, points):
        """Write each point followed by a newline, skipping None entries."""
        for point in points:
            if point is None:
                continue
            self.encode(point)
            self.stream.write("\n")

    @classmethod
    def _to_string(cls, points):
        buffer = io.StringIO()
        cls(buffer).batch_encode(points)
        return buffer.getvalue()