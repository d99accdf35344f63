"""
Predicate matching and value ordering for the in-memory store.

Equality operators compare the text form of both sides, the way a
PostgREST filter string would carry them. Ordering operators parse the
operand as a number and compare it with the stored value, which must
already be numeric.
"""

import json
import operator
import re
from typing import Any, Callable, Dict, Mapping, Union

from .exceptions import QueryTypeError
from .models import FilterClause, FilterOperator, ValueKind


# Plain decimal literal: optional sign, digits, optional fraction and exponent
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Ordering operators: (stored value, numeric operand) -> passes
ORDERING_OPS: Dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.GT: operator.gt,
    FilterOperator.LT: operator.lt,
    FilterOperator.GTE: operator.ge,
    FilterOperator.LTE: operator.le,
}


def to_filter_text(value: Any) -> str:
    """
    Render a value the way it appears in a filter literal.

    Booleans and null use their lowercase JSON spelling and nested values
    are rendered as JSON, so ``True`` and ``"true"`` compare equal.
    """
    kind = ValueKind.of(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def parse_number(text: str) -> Union[int, float]:
    """
    Parse a filter operand as a number.

    Raises:
        ValueError: If the text is not a plain decimal literal. Underscore
            separators, surrounding whitespace, nan and infinity are rejected.
    """
    if NUMBER_PATTERN.fullmatch(text) is None:
        raise ValueError(f"Not a numeric literal: {text!r}")
    if re.fullmatch(r"[+-]?\d+", text):
        return int(text)
    return float(text)


def evaluate_clause(row: Mapping[str, Any], column: str, clause: FilterClause) -> bool:
    """
    Evaluate one filter clause against a row.

    Args:
        row: Row to test
        column: Column the clause applies to
        clause: Operator and operand

    Returns:
        True if the row's value passes the clause

    Raises:
        QueryTypeError: For an ordering operator when the operand is not a
            number or the stored value is missing or not numeric
    """
    stored = row.get(column)

    if clause.operator is FilterOperator.EQ:
        return to_filter_text(stored) == to_filter_text(clause.value)
    if clause.operator is FilterOperator.NEQ:
        return to_filter_text(stored) != to_filter_text(clause.value)

    operand_text = to_filter_text(clause.value)
    try:
        operand = parse_number(operand_text)
    except ValueError:
        raise QueryTypeError(
            f"Operand '{operand_text}' for '{clause.operator.value}' on column '{column}' is not a number",
            column=column,
            operator=clause.operator.value,
            value=clause.value,
        ) from None

    if not ValueKind.of(stored).is_numeric():
        raise QueryTypeError(
            f"Column '{column}' holds {ValueKind.of(stored).value} value {stored!r}, "
            f"which cannot be compared with '{clause.operator.value}'",
            column=column,
            operator=clause.operator.value,
            value=stored,
        )

    return ORDERING_OPS[clause.operator](stored, operand)


def matches_filters(row: Mapping[str, Any], filters: Mapping[str, FilterClause]) -> bool:
    """
    Check a row against every filter clause.

    Clauses are AND-combined and evaluation stops at the first failure.
    An empty filter set matches every row.
    """
    for column, clause in filters.items():
        if not evaluate_clause(row, column, clause):
            return False
    return True


def compare_values(left: Any, right: Any, column: str) -> int:
    """
    Three-way comparison of two stored values for sorting.

    Values of the same orderable kind use their natural order. Null sorts
    after every other value. Other mixes raise.

    Returns:
        Negative, zero or positive like a classic ``cmp``

    Raises:
        QueryTypeError: If the values have no common order
    """
    left_kind = ValueKind.of(left)
    right_kind = ValueKind.of(right)

    if left_kind is ValueKind.NULL or right_kind is ValueKind.NULL:
        return (left_kind is ValueKind.NULL) - (right_kind is ValueKind.NULL)

    if left_kind is not right_kind or not left_kind.supports_ordering():
        raise QueryTypeError(
            f"Cannot order column '{column}': {left_kind.value} value {left!r} "
            f"is not comparable with {right_kind.value} value {right!r}",
            column=column,
        )

    return (left > right) - (left < right)
