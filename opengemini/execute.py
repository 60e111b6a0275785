"""Statements with bound parameters and the results of executing them."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional

from opengemini.errors import OpenGeminiError
from opengemini.point import Unsigned
from opengemini.query_ast import _format_float


class StatementType(IntEnum):
    """Category of a statement, which decides how it is routed."""

    UNKNOWN = 0
    QUERY = 1
    COMMAND = 2
    INSERT = 3

    def __str__(self):
        return _STATEMENT_NAMES.get(self, "Unknown")

    def is_query_like(self):
        """True for statements sent as queries (SELECT, SHOW, CREATE, DROP...)."""
        return self in (StatementType.QUERY, StatementType.COMMAND)

    def is_write_like(self):
        """True for statements sent as writes (INSERT)."""
        return self is StatementType.INSERT


_STATEMENT_NAMES = {
    StatementType.QUERY: "Query",
    StatementType.COMMAND: "Command",
    StatementType.INSERT: "Insert",
    StatementType.UNKNOWN: "Unknown",
}


@dataclass
class Statement:
    """A statement to execute, with ``$name`` placeholders filled from ``params``."""

    database: str = ""
    command: str = ""
    params: dict = field(default_factory=dict)
    retention_policy: str = ""


@dataclass
class ExecuteResult:
    """Outcome of executing a statement.

    ``query_result`` is set for query and command statements,
    ``affected_rows`` for insert statements.
    """

    query_result: Optional[Any] = None
    affected_rows: int = 0
    statement_type: StatementType = StatementType.UNKNOWN
    error: Optional[Exception] = None


def validate_statement(statement):
    """Raise OpenGeminiError if the database or the command is missing."""
    if not statement.database:
        raise OpenGeminiError("database name is required")
    if not statement.command:
        raise OpenGeminiError("command is required")


def convert_param_value(value):
    """Return the text that replaces a placeholder for the given value."""
    if value is None:
        raise OpenGeminiError("nil value not allowed")
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Unsigned):
        return f"{int(value)}u"
    if isinstance(value, int):
        return f"{value}i"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def replace_params(command, params):
    """Substitute ``$name`` placeholders in command with the given parameters.

    Raises OpenGeminiError if a used parameter cannot be converted or if
    any placeholder is left unresolved.
    """
    result = command
    for key, value in params.items():
        placeholder = "$" + key
        if placeholder not in result:
            continue
        try:
            replacement = convert_param_value(value)
        except OpenGeminiError as exc:
            raise OpenGeminiError(f"invalid parameter '{key}': {exc}") from exc
        result = result.replace(placeholder, replacement)
    if "$" in result:
        raise OpenGeminiError("unresolved parameters found in command")
    return result