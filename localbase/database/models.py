"""
Data model for the in-memory store.

Rows are plain dictionaries. Their values are classified by ``ValueKind`` so
that filter and sort logic can dispatch over a closed set of kinds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Union


RowValue = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]
Row = Dict[str, RowValue]


class ValueKind(Enum):
    """Runtime kinds a row value can take."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    NESTED = "nested"

    @classmethod
    def of(cls, value: Any) -> "ValueKind":
        """
        Classify a value.

        ``bool`` is checked before numbers since it subclasses ``int``.
        Anything that is not a scalar is treated as nested.
        """
        if value is None:
            return cls.NULL
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        return cls.NESTED

    def is_numeric(self) -> bool:
        return self is ValueKind.NUMBER

    def supports_ordering(self) -> bool:
        """Kinds whose values have a natural order among themselves."""
        return self in (ValueKind.STRING, ValueKind.NUMBER, ValueKind.BOOLEAN)


class FilterOperator(str, Enum):
    """Comparison operators accepted by the query builder."""
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"

    def is_ordering(self) -> bool:
        """True for operators that compare numerically."""
        return self in (FilterOperator.GT, FilterOperator.LT, FilterOperator.GTE, FilterOperator.LTE)


@dataclass(frozen=True)
class FilterClause:
    """A single column predicate: operator plus operand."""
    operator: FilterOperator
    value: Any


@dataclass(frozen=True)
class OrderClause:
    """One key of a multi-column sort."""
    column: str
    ascending: bool = False
