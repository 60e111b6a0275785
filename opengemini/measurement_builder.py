"""Builders for measurement, tag key, tag value and series statements."""

from dataclasses import dataclass
from enum import Enum

from opengemini.errors import (
    EmptyDatabaseNameError,
    EmptyTagKeyError,
    EmptyTagOrFieldError,
    OpenGeminiError,
    check_database_name,
)
from opengemini.query_ast import ComparisonCondition


class ShardType(str, Enum):
    HASH = "HASH"
    RANGE = "RANGE"


class FieldType(str, Enum):
    INT64 = "INT64"
    FLOAT64 = "FLOAT64"
    STRING = "STRING"
    BOOL = "BOOL"


class EngineType(str, Enum):
    COLUMN_STORE = "columnstore"


class MeasurementCommand(str, Enum):
    CREATE = "CREATE"
    SHOW = "SHOW"


def _text(value):
    return value.value if isinstance(value, Enum) else str(value)


@dataclass
class MeasurementBase:
    """Where a measurement lives: database, retention policy and name."""

    database: str = ""
    retention_policy: str = ""
    measurement: str = ""


def _limit_offset(limit, offset):
    parts = []
    if limit > 0:
        parts.append(f" LIMIT {limit}")
    if offset > 0:
        parts.append(f" OFFSET {offset}")
    return parts


class MeasurementBuilder:
    """Builds CREATE MEASUREMENT and SHOW MEASUREMENTS statements."""

    def __init__(self):
        self.base = MeasurementBase()
        self.command = None
        self._filter = None
        self._tags = []
        self._fields = []
        self._shard_type = None
        self._shard_keys = []
        self._index_type = ""
        self._index_list = []
        self._engine_type = None
        self._primary_key = []
        self._sort_keys = []

    def database(self, database):
        self.base.database = database
        return self

    def measurement(self, measurement):
        self.base.measurement = measurement
        return self

    def retention_policy(self, rp):
        self.base.retention_policy = rp
        return self

    def show(self):
        """Switch to a SHOW MEASUREMENTS statement."""
        self.command = MeasurementCommand.SHOW
        return self

    def create(self):
        """Switch to a CREATE MEASUREMENT statement."""
        self.command = MeasurementCommand.CREATE
        return self

    def tags(self, tag_list):
        self._tags.extend(f"{tag} TAG" for tag in tag_list)
        return self

    def field_map(self, fields):
        self._fields.extend(
            f"{key} {_text(value)} FIELD" for key, value in fields.items()
        )
        return self

    def shard_keys(self, shard_keys):
        self._shard_keys = list(shard_keys)
        return self

    def shard_type(self, shard_type):
        self._shard_type = shard_type
        return self

    def full_text_index(self):
        self._index_type = "text"
        return self

    def index_list(self, index_list):
        self._index_list = list(index_list)
        return self

    def engine_type(self, engine_type):
        self._engine_type = engine_type
        return self

    def primary_key(self, primary_key):
        self._primary_key = list(primary_key)
        return self

    def sort_keys(self, sort_keys):
        self._sort_keys = list(sort_keys)
        return self

    def filter(self, operator, regex):
        """Filter shown measurements by name with the given operator."""
        self._filter = ComparisonCondition("MEASUREMENT", operator, regex)
        return self

    def build(self):
        """Return the statement text."""
        check_database_name(self.base.database)
        if self.command is MeasurementCommand.CREATE:
            return self._build_create()
        if self.command is MeasurementCommand.SHOW:
            return self._build_show()
        shown = "" if self.command is None else _text(self.command)
        raise OpenGeminiError(f"invalid command: {shown}")

    def _build_create(self):
        if not self._tags and not self._fields:
            raise EmptyTagOrFieldError()
        if self._index_type and not self._index_list:
            raise OpenGeminiError("empty index list")
        columns = ",".join(self._tags + self._fields)
        parts = [f"CREATE MEASUREMENT {self.base.measurement} ({columns})"]
        options = []
        if self._index_type:
            options.append(" INDEXTYPE " + self._index_type)
            options.append(" INDEXLIST " + ",".join(self._index_list))
        if self._engine_type:
            options.append(" ENGINETYPE = " + _text(self._engine_type))
        if self._shard_keys:
            options.append(" SHARDKEY " + ",".join(self._shard_keys))
        if self._shard_type:
            options.append(" TYPE " + _text(self._shard_type))
        if self._primary_key:
            options.append(" PRIMARYKEY " + ",".join(self._primary_key))
        if self._sort_keys:
            options.append(" SORTKEY " + ",".join(self._sort_keys))
        if options:
            parts.append(" WITH ")
            parts.extend(options)
        return "".join(parts)

    def _build_show(self):
        text = "SHOW MEASUREMENTS"
        if self._filter is not None:
            text += (
                " WITH MEASUREMENT "
                + _text(self._filter.operator)
                + " "
                + str(self._filter.value)
            )
        return text


class ShowTagKeysBuilder:
    """Builds SHOW TAG KEYS statements."""

    def __init__(self):
        self.base = MeasurementBase()
        self._limit = 0
        self._offset = 0

    def database(self, database):
        self.base.database = database
        return self

    def measurement(self, measurement):
        self.base.measurement = measurement
        return self

    def retention_policy(self, rp):
        self.base.retention_policy = rp
        return self

    def limit(self, limit):
        self._limit = limit
        return self

    def offset(self, offset):
        self._offset = offset
        return self

    def build(self):
        """Return the statement text."""
        if not self.base.database:
            raise EmptyDatabaseNameError()
        parts = ["SHOW TAG KEYS"]
        if self.base.measurement:
            parts.append(f" FROM {self.base.measurement}")
        parts.extend(_limit_offset(self._limit, self._offset))
        return "".join(parts)


class ShowTagValuesBuilder:
    """Builds SHOW TAG VALUES statements."""

    def __init__(self):
        self.base = MeasurementBase()
        self._limit = 0
        self._offset = 0
        self._orders = []
        self._with_keys = ()
        self._where = None

    def database(self, database):
        self.base.database = database
        return self

    def measurement(self, measurement):
        self.base.measurement = measurement
        return self

    def retention_policy(self, rp):
        self.base.retention_policy = rp
        return self

    def limit(self, limit):
        self._limit = limit
        return self

    def offset(self, offset):
        self._offset = offset
        return self

    def order_by(self, field, order):
        self._orders.append(f"{field} {_text(order)}")
        return self

    def with_keys(self, *args):
        """Select one key, a /regex/ of keys, or several keys."""
        self._with_keys = args
        return self

    def where(self, key, operator, value):
        self._where = ComparisonCondition(key, operator, value)
        return self

    def build(self):
        """Return the statement text."""
        if not self._with_keys:
            raise EmptyTagKeyError()
        parts = ["SHOW TAG VALUES"]
        if self.base.measurement:
            parts.append(" FROM " + self.base.measurement)
        if len(self._with_keys) == 1:
            key = self._with_keys[0]
            if key.startswith("/") and key.endswith("/"):
                parts.append(" WITH KEY =~ " + key)
            else:
                parts.append(' WITH KEY = "' + key + '"')
        else:
            quoted = ",".join(f'"{key}"' for key in self._with_keys)
            parts.append(" WITH KEY IN (" + quoted + ")")
        if self._where is not None:
            parts.append(" WHERE " + self._where.build())
        if self._orders:
            parts.append(" ORDER BY " + ",".join(self._orders))
        parts.extend(_limit_offset(self._limit, self._offset))
        return "".join(parts)


class ShowSeriesBuilder:
    """Builds SHOW SERIES statements."""

    def __init__(self):
        self.base = MeasurementBase()
        self._limit = 0
        self._offset = 0
        self._where = None

    def database(self, database):
        self.base.database = database
        return self

    def measurement(self, measurement):
        self.base.measurement = measurement
        return self

    def retention_policy(self, rp):
        self.base.retention_policy = rp
        return self

    def limit(self, limit):
        self._limit = limit
        return self

    def offset(self, offset):
        self._offset = offset
        return self

    def where(self, key, operator, value):
        """Filter by a tag condition; field comparisons are not valid here."""
        self._where = ComparisonCondition(key, operator, value)
        return self

    def build(self):
        """Return the statement text."""
        if not self.base.database:
            raise EmptyDatabaseNameError()
        parts = ["SHOW SERIES"]
        if self.base.measurement:
            parts.append(" FROM " + self.base.measurement)
        if self._where is not None:
            parts.append(" WHERE " + self._where.build())
        parts.extend(_limit_offset(self._limit, self._offset))
        return "".join(parts)