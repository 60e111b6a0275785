"""The query description sent to the server and a fluent builder for it."""

from dataclasses import dataclass, field
from enum import Enum

from opengemini.point import Precision


@dataclass
class Query:
    """A command to run against a database.

    ``params`` holds values bound server-side to ``$name`` placeholders
    in the command.
    """

    database: str = ""
    command: str = ""
    retention_policy: str = ""
    precision: Precision = Precision.NANOSECOND
    params: dict = field(default_factory=dict)


def _text(value):
    return value.value if isinstance(value, Enum) else str(value)


class QueryBuilder:
    """Builds a SELECT query step by step."""

    def __init__(self):
        self._select = ()
        self._from = ()
        self._where = None
        self._group_by = ()
        self._order = ""
        self._limit = 0
        self._offset = 0
        self._timezone = None

    def select(self, *args):
        self._select = args
        return self

    def from_(self, *args):
        self._from = args
        return self

    def where(self, condition):
        self._where = condition
        return self

    def group_by(self, *args):
        self._group_by = args
        return self

    def order_by(self, order):
        """Order by time; ``order`` is ``"ASC"`` or ``"DESC"``."""
        self._order = order
        return self

    def limit(self, limit):
        self._limit = limit
        return self

    def offset(self, offset):
        self._offset = offset
        return self

    def timezone(self, zone):
        """Set the time zone, given as a zone name or a tzinfo with that name."""
        self._timezone = zone
        return self

    def build(self):
        """Return a Query holding the assembled command."""
        if self._select:
            parts = ["SELECT " + ", ".join(expr.build() for expr in self._select)]
        else:
            parts = ["SELECT *"]
        if self._from:
            parts.append(" FROM " + ", ".join(f'"{table}"' for table in self._from))
        if self._where is not None:
            parts.append(" WHERE " + self._where.build())
        if self._group_by:
            parts.append(" GROUP BY " + ", ".join(expr.build() for expr in self._group_by))
        if self._order:
            parts.append(" ORDER BY time " + _text(self._order))
        if self._limit > 0:
            parts.append(f" LIMIT {self._limit}")
        if self._offset > 0:
            parts.append(f" OFFSET {self._offset}")
        if self._timezone is not None:
            parts.append(f" TZ('{self._timezone}')")
        return Query(command="".join(parts))