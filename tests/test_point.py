import io
import time

import pytest

from opengemini.errors import UnsupportedFieldValueTypeError
from opengemini.point import (
    LineProtocolEncoder,
    Point,
    Precision,
    Unsigned,
    encode_point,
    to_precision,
)


def assemble_point(measurement, tag_key, tag_value, field_key, field_value):
    point = Point(measurement=measurement)
    point.add_tag(tag_key, tag_value)
    point.add_field(field_key, field_value)
    return point


def encode(point):
    buffer = io.StringIO()
    LineProtocolEncoder(buffer).encode(point)
    return buffer.getvalue()


@pytest.mark.parametrize(
    "args, expected",
    [
        (("test", "T0", "0", "a", 1), "test,T0=0 a=1i"),
        (("test,", "T0", "0", "a", 1), "test\\,,T0=0 a=1i"),
        (("test ", "T0", "0", "a", 1), "test\\ ,T0=0 a=1i"),
        (("test", "T0,", "0", "a", 1), "test,T0\\,=0 a=1i"),
        (("test", "T0=", "0", "a", 1), "test,T0\\==0 a=1i"),
        (("test", "T0 ", "0", "a", 1), "test,T0\\ =0 a=1i"),
        (("test", "T0", "0,", "a", 1), "test,T0=0\\, a=1i"),
        (("test", "T0", "0=", "a", 1), "test,T0=0\\= a=1i"),
        (("test", "T0", "0 ", "a", 1), "test,T0=0\\  a=1i"),
        (("test", "T0", "0", "a,", 1), "test,T0=0 a\\,=1i"),
        (("test", "T0", "0", "a=", 1), "test,T0=0 a\\==1i"),
        (("test", "T0", "0", "a ", 1), "test,T0=0 a\\ =1i"),
        (("test", "T0", "0", "a", '1"'), 'test,T0=0 a="1\\""'),
        (("test", "T0", "0", "a", "1\\"), 'test,T0=0 a="1\\\\"'),
        (("test", "T0", "0", "a", "1\\\\"), 'test,T0=0 a="1\\\\\\\\"'),
        (("test", "T0", "0", "a", "1\\\\\\"), 'test,T0=0 a="1\\\\\\\\\\\\"'),
    ],
)
def test_point_to_string(args, expected):
    assert encode(assemble_point(*args)) == expected


def test_point_encode_progression():
    point = Point()
    assert encode(point) == ""
    point.measurement = "measurement"
    assert encode(point) == ""
    point.add_field("filed1", "string field")
    assert encode(point) == 'measurement filed1="string field"'
    point.add_tag("tag", "tag1")
    assert encode(point) == 'measurement,tag=tag1 filed1="string field"'
    point.timestamp = 1701433938132363612
    assert encode(point) == 'measurement,tag=tag1 filed1="string field" 1701433938132363612'


def test_encode_point_matches_encoder():
    point = assemble_point("test", "T0", "0", "a", 1)
    assert encode_point(point) == encode(point)
    assert encode_point(Point()) == ""


def test_bool_and_unsigned_values():
    point = Point(measurement="m", fields={"t": True, "f": False, "u": Unsigned(7)})
    assert encode_point(point) == "m t=T,f=F,u=7u"


@pytest.mark.parametrize(
    "value, expected",
    [(1.5, "1.5"), (2.0, "2"), (1e-7, "0.0000001"), (1e21, "1000000000000000000000")],
)
def test_float_values_use_plain_notation(value, expected):
    assert encode_point(Point(measurement="m", fields={"v": value})) == f"m v={expected}"


def test_unsupported_field_value_raises():
    point = Point(measurement="m", fields={"v": [1, 2]})
    with pytest.raises(UnsupportedFieldValueTypeError):
        encode_point(point)


def test_unsigned_rejects_negative():
    with pytest.raises(ValueError):
        Unsigned(-1)


def test_batch_encode_skips_none_and_ends_lines():
    buffer = io.StringIO()
    points = [
        assemble_point("a", "k", "v", "f", 1),
        None,
        assemble_point("b", "k", "v", "f", 2),
    ]
    LineProtocolEncoder(buffer).batch_encode(points)
    assert buffer.getvalue() == "a,k=v f=1i\nb,k=v f=2i\n"


@pytest.mark.parametrize("precision", list(Precision))
def test_epoch_round_trip(precision):
    assert to_precision(precision.epoch()) is precision


def test_epoch_names():
    assert Precision.MICROSECOND.epoch() == "u"
    assert Precision.RFC3339.epoch() == "rfc3339"


def test_unknown_epoch_defaults_to_nanosecond():
    assert to_precision("bogus") is Precision.NANOSECOND


def test_now_unix_scales():
    before = time.time_ns()
    seconds = Precision.SECOND.now_unix()
    millis = Precision.MILLISECOND.now_unix()
    after = time.time_ns()
    assert before // 10**9 <= seconds <= after // 10**9
    assert before // 10**6 <= millis <= after // 10**6


def test_now_unix_rounds_minutes_and_hours():
    minute = Precision.MINUTE.now_unix()
    hour = Precision.HOUR.now_unix()
    assert minute % (60 * 10**9) == 0
    assert hour % (3600 * 10**9) == 0
    assert abs(minute - time.time_ns()) <= 60 * 10**9