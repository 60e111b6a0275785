"""Operators, functions, expressions and conditions for building queries."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any


class ComparisonOperator(str, Enum):
    EQUALS = "="
    NOT_EQUALS = "<>"
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_THAN_OR_EQUALS = ">="
    LESS_THAN_OR_EQUALS = "<="
    MATCH = "=~"
    NOT_MATCH = "!~"


class LogicalOperator(str, Enum):
    AND = "AND"
    OR = "OR"


class ArithmeticOperator(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class Function(str, Enum):
    MEAN = "MEAN"
    COUNT = "COUNT"
    SUM = "SUM"
    MIN = "MIN"
    MAX = "MAX"
    TIME = "TIME"
    TOP = "TOP"
    LAST = "LAST"


def _text(value):
    """Return the textual form of an enum member or plain string."""
    return value.value if isinstance(value, Enum) else str(value)


def _format_float(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(value)).normalize()
    exponent = number.adjusted()
    if -4 <= exponent < 6 or number.is_zero():
        return format(number, "f")
    sign, digits, _ = number.as_tuple()
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(map(str, digits[1:]))
    return f"{'-' if sign else ''}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent):02d}"


def _format_value(value):
    """Format a value the way the query language expects a bare literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, Enum):
        return _text(value)
    return str(value)


class Expression(ABC):
    """Something that renders to a fragment of a query."""

    @abstractmethod
    def build(self):
        """Return the query text of this expression."""


@dataclass
class ConstantExpression(Expression):
    value: Any

    def build(self):
        return _format_value(self.value)


@dataclass
class FieldExpression(Expression):
    field: str

    def build(self):
        return f'"{self.field}"'


@dataclass(init=False)
class FunctionExpression(Expression):
    function: Function
    arguments: tuple

    def __init__(self, function, *args):
        self.function = function
        self.arguments = args

    def build(self):
        args = ", ".join(arg.build() for arg in self.arguments)
        return f"{_text(self.function)}({args})"


@dataclass
class AsExpression(Expression):
    alias: str
    origin_expr: Expression

    def build(self):
        return f'{self.origin_expr.build()} AS "{self.alias}"'


@dataclass(init=False)
class ArithmeticExpression(Expression):
    operator: ArithmeticOperator
    operands: tuple

    def __init__(self, operator, *args):
        self.operator = operator
        self.operands = args

    def build(self):
        joiner = f" {_text(self.operator)} "
        return "(" + joiner.join(operand.build() for operand in self.operands) + ")"


class Condition(ABC):
    """A boolean condition used in WHERE clauses."""

    @abstractmethod
    def build(self):
        """Return the query text of this condition."""


@dataclass
class ComparisonCondition(Condition):
    column: str
    operator: ComparisonOperator
    value: Any

    def build(self):
        op = _text(self.operator)
        if isinstance(self.value, str):
            return f"\"{self.column}\" {op} '{_text(self.value)}'"
        return f'"{self.column}" {op} {_format_value(self.value)}'


@dataclass(init=False)
class CompositeCondition(Condition):
    logical_operator: LogicalOperator
    conditions: tuple

    def __init__(self, logical_operator, *args):
        self.logical_operator = logical_operator
        self.conditions = args

    def build(self):
        joiner = f" {_text(self.logical_operator)} "
        return "(" + joiner.join(c.build() for c in self.conditions) + ")"