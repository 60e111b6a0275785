# opengemini

Building blocks for working with an openGemini time-series database from Python:

- **Line protocol**: `Point`, `Precision`, `to_precision`, `Unsigned`, `LineProtocolEncoder` and `encode_point` in `opengemini.point`.
- **Query building**: `QueryBuilder` and `Query` in `opengemini.query_builder`. The expressions, conditions, operators and functions they use live in `opengemini.query_ast`.
- **Measurement statements**: `MeasurementBuilder`, `ShowTagKeysBuilder`, `ShowTagValuesBuilder` and `ShowSeriesBuilder` in `opengemini.measurement_builder`.
- **Statements with parameters**: `StatementType`, `Statement`, `ExecuteResult`, `validate_statement`, `replace_params` and `convert_param_value` in `opengemini.execute`.
- **Response decoding**: `decompress_body`, `deserialize_body` and `snappy_decode` in `opengemini.codec`.
- **Errors**: `opengemini.errors`.

## Installation

```
pip install opengemini
```

## Writing points

```python
from opengemini.point import Point, encode_point

point = Point(measurement="weather")
point.add_tag("location", "beijing")
point.add_field("temperature", 25.5)
print(encode_point(point))
# weather,location=beijing temperature=25.5
```

Escaping works as follows:

- The measurement escapes commas and spaces.
- Tag keys, tag values and field keys escape commas, spaces and `=`.
- String field values are put in double quotes, and their quotes and backslashes are escaped.

Field values are written by type:

- Integers get an `i` suffix.
- A value wrapped in `Unsigned` gets a `u` suffix. `Unsigned` only accepts values from 0 to 2**64 - 1.
- Floats are written in plain decimal notation.
- Booleans are written as `T` or `F`.
- Any other type raises `UnsupportedFieldValueTypeError`.

A point with no measurement or no fields encodes to an empty string. A timestamp of `0` is left out of the line.

`LineProtocolEncoder(stream)` writes to any text stream. `encode(point)` writes one line with no trailing newline. `batch_encode(points)` writes every point followed by a newline and skips `None` entries.

`Precision` converts between precisions and the epoch names the server uses:

- `Precision.MILLISECOND.epoch()` returns `"ms"`.
- `to_precision("ms")` returns `Precision.MILLISECOND`. An unknown name gives `Precision.NANOSECOND`.
- `now_unix()` returns the current time in that precision.

## Building queries

```python
from opengemini.query_ast import (
    ComparisonCondition, ComparisonOperator, FieldExpression,
    Function, FunctionExpression,
)
from opengemini.query_builder import QueryBuilder

query = (
    QueryBuilder()
    .select(FunctionExpression(Function.MEAN, FieldExpression("water_level")))
    .from_("h2o_feet")
    .where(ComparisonCondition("water_level", ComparisonOperator.GREATER_THAN, 8))
    .group_by(FieldExpression("location"))
    .build()
)
print(query.command)
# SELECT MEAN("water_level") FROM "h2o_feet" WHERE "water_level" > 8 GROUP BY "location"
```

The builder also has these methods:

- `order_by("DESC")` adds `ORDER BY time DESC`.
- `limit(n)` and `offset(n)` add their clauses only when `n` is greater than zero.
- `timezone("America/Chicago")` adds `TZ('America/Chicago')`.

Other expression and condition types are available:

- `ConstantExpression`
- `AsExpression`
- `ArithmeticExpression`
- `CompositeCondition`, which joins conditions with `LogicalOperator.AND` or `LogicalOperator.OR`

`Query` holds these fields:

- `database`
- `command`
- `retention_policy`
- `precision`
- `params`

## Measurement statements

```python
from opengemini.measurement_builder import FieldType, MeasurementBuilder

command = (
    MeasurementBuilder()
    .database("db0")
    .measurement("cpu")
    .create()
    .tags(["host"])
    .field_map({"usage": FieldType.FLOAT64})
    .build()
)
# CREATE MEASUREMENT cpu (host TAG,usage FLOAT64 FIELD)
```

A create statement can take these options, which are added in a `WITH` clause:

- `shard_keys`
- `shard_type` (`ShardType`)
- `full_text_index` together with `index_list`
- `engine_type` (`EngineType.COLUMN_STORE`)
- `primary_key`
- `sort_keys`

`show().filter(ComparisonOperator.MATCH, "/prefix.*/")` builds `SHOW MEASUREMENTS WITH MEASUREMENT =~ /prefix.*/`.

The other builders work the same way:

- `ShowTagKeysBuilder` builds `SHOW TAG KEYS`.
- `ShowTagValuesBuilder` builds `SHOW TAG VALUES` and needs at least one key in `with_keys`.
- `ShowSeriesBuilder` builds `SHOW SERIES`.

## Parameterised statements

```python
from opengemini.execute import replace_params

replace_params("SELECT * FROM $table", {"table": "weather"})
# 'SELECT * FROM weather'
```

`convert_param_value` formats each value:

- Strings go in as they are.
- Integers get an `i` suffix and `Unsigned` values get a `u` suffix.
- Booleans become `true` or `false`.
- Anything else is passed through `str`.

Both of the following raise `OpenGeminiError`:

- A value of `None` for a placeholder that is used.
- A `$` left in the command after substitution.

`validate_statement` checks that a `Statement` has a database and a command.

## Decoding responses

`decompress_body(encoding, body)` undoes `gzip`, `zstd` or `snappy` (block format) encoding and passes other encodings through unchanged. `deserialize_body(content_type, body)` decodes `application/json` or `application/x-msgpack` into Python objects. Any other content type raises `OpenGeminiError`.

## What this package does not do

This package does not open connections or send HTTP requests to a server. It produces command text and line protocol and decodes response bodies; sending them is up to the caller. It also does not work out a `StatementType` from a command's text. The caller chooses the type and decides how the statement is routed.

## Errors

Every error the package raises derives from `opengemini.errors.OpenGeminiError`.