"""
Chainable query builder over an in-memory table.

Filter, order and pagination methods mutate the builder and return it, so
calls can be chained. A terminal verb (select, insert, update, delete)
evaluates the accumulated state against the table and returns rows
synchronously.

Example:
    >>> from localbase import MockDatabase
    >>> db = MockDatabase({})
    >>> db.from_('users').insert({'id': 1, 'name': 'John', 'age': 30})
    [{'id': 1, 'name': 'John', 'age': 30}]
    >>> db.from_('users').eq('id', 1).update({'name': 'John Doe'})
    [{'id': 1, 'name': 'John Doe', 'age': 30}]
    >>> db.from_('users').gte('age', 30).order('name').select()
    [{'id': 1, 'name': 'John Doe', 'age': 30}]
"""

import logging
from functools import cmp_to_key
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Sequence, Union

from .filters import compare_values, matches_filters
from .models import FilterClause, FilterOperator, OrderClause, Row

logger = logging.getLogger(__name__)


class QueryBuilder:
    """
    Query builder bound to one table of a store.

    The builder holds a reference to the store's table mapping, so writes
    are visible to every later builder on the same store. Filters, order
    clauses and pagination stay local to the builder.

    Thread Safety:
        Not thread-safe. Concurrent writers must synchronize externally.
    """

    def __init__(self, database: MutableMapping[str, List[Row]], table: str):
        self._database = database
        self._table = table
        self._filters: Dict[str, FilterClause] = {}
        self._order_clauses: List[OrderClause] = []
        self._limit_value: Optional[int] = None
        self._offset_value: Optional[int] = None

    @property
    def table_name(self) -> str:
        return self._table

    def _add_filter(self, column: str, op: FilterOperator, value: Any) -> "QueryBuilder":
        # One clause per column; the latest call wins
        self._filters[column] = FilterClause(operator=op, value=value)
        return self

    def eq(self, column: str, value: Any) -> "QueryBuilder":
        """Filter rows where ``column`` equals ``value``."""
        return self._add_filter(column, FilterOperator.EQ, value)

    def neq(self, column: str, value: Any) -> "QueryBuilder":
        """Filter rows where ``column`` does not equal ``value``."""
        return self._add_filter(column, FilterOperator.NEQ, value)

    def gt(self, column: str, value: Any) -> "QueryBuilder":
        """Filter rows where ``column`` is greater than ``value``."""
        return self._add_filter(column, FilterOperator.GT, value)

    def lt(self, column: str, value: Any) -> "QueryBuilder":
        """Filter rows where ``column`` is less than ``value``."""
        return self._add_filter(column, FilterOperator.LT, value)

    def gte(self, column: str, value: Any) -> "QueryBuilder":
        """Filter rows where ``column`` is greater than or equal to ``value``."""
        return self._add_filter(column, FilterOperator.GTE, value)

    def lte(self, column: str, value: Any) -> "QueryBuilder":
        """Filter rows where ``column`` is less than or equal to ``value``."""
        return self._add_filter(column, FilterOperator.LTE, value)

    def limit(self, limit: int) -> "QueryBuilder":
        """Limit the number of rows returned by select."""
        self._limit_value = limit
        return self

    def offset(self, offset: int) -> "QueryBuilder":
        """Set the number of leading rows select skips."""
        self._offset_value = offset
        return self

    def order(self, column: str, ascending: bool = False) -> "QueryBuilder":
        """
        Order select results by ``column``.

        Descending unless ``ascending=True``. Repeated calls add keys with
        left-to-right precedence.
        """
        self._order_clauses.append(OrderClause(column=column, ascending=ascending))
        return self

    def _rows(self) -> Optional[List[Row]]:
        return self._database.get(self._table)

    def _compare_rows(self, a: Row, b: Row) -> int:
        for clause in self._order_clauses:
            comparison = compare_values(a.get(clause.column), b.get(clause.column), clause.column)
            if comparison != 0:
                return comparison if clause.ascending else -comparison
        return 0

    def select(self) -> List[Row]:
        """
        Select rows matching the filters.

        Matches keep table order unless order clauses are set, in which
        case a stable multi-key sort is applied. Offset and limit are then
        applied in that order.

        Returns:
            Matching rows; empty if the table doesn't exist

        Raises:
            QueryTypeError: If an ordering filter or sort key meets values
                that cannot be compared
        """
        rows = self._rows()
        if rows is None:
            logger.debug(f"select on missing table '{self._table}'")
            return []

        result = [row for row in rows if matches_filters(row, self._filters)]

        if self._order_clauses:
            # list.sort is stable, so full ties keep table order
            result.sort(key=cmp_to_key(self._compare_rows))

        if self._offset_value is not None:
            result = result[max(self._offset_value, 0):]

        if self._limit_value is not None:
            result = result[:max(self._limit_value, 0)]

        logger.debug(f"select on '{self._table}' returned {len(result)} of {len(rows)} rows")
        return result

    def insert(self, data: Union[Row, Sequence[Row]]) -> List[Row]:
        """
        Insert one row or a list of rows at the end of the table.

        The table is created if it doesn't exist. Chained filters are not
        consulted.

        Args:
            data: A single row mapping or a sequence of rows

        Returns:
            The inserted row objects, in insertion order

        Raises:
            TypeError: If any item is not a mapping; nothing is inserted
        """
        items: List[Row] = [data] if isinstance(data, Mapping) else list(data)

        for position, item in enumerate(items):
            if not isinstance(item, Mapping):
                raise TypeError(
                    f"Row {position} for table '{self._table}' must be a mapping, got {type(item).__name__}"
                )

        self._database.setdefault(self._table, []).extend(items)

        logger.debug(f"insert into '{self._table}': {len(items)} rows")
        return items

    def update(self, data: Mapping[str, Any]) -> List[Row]:
        """
        Merge ``data`` into every row matching the filters.

        Each matching row is replaced in place by a merged copy; columns
        not named in ``data`` are left untouched. With no filters every row
        is updated.

        Returns:
            The merged rows, in table order; empty if the table doesn't exist

        Raises:
            QueryTypeError: If a filter meets values that cannot be
                compared; the table is left unchanged
        """
        rows = self._rows()
        if rows is None:
            logger.debug(f"update on missing table '{self._table}'")
            return []

        # Match every row before replacing any, so a failing filter changes nothing
        matched = [index for index, row in enumerate(rows) if matches_filters(row, self._filters)]

        updated_rows: List[Row] = []
        for index in matched:
            updated_row = dict(rows[index])
            updated_row.update(data)
            rows[index] = updated_row
            updated_rows.append(updated_row)

        logger.debug(f"update on '{self._table}' changed {len(updated_rows)} rows")
        return updated_rows

    def delete(self) -> List[Row]:
        """
        Remove every row matching the filters.

        Remaining rows keep their relative order. With no filters the
        table is emptied.

        Returns:
            The removed rows, in their original order
        """
        rows = self._rows()
        if rows is None:
            logger.debug(f"delete on missing table '{self._table}'")
            return []

        deleted_rows: List[Row] = []
        kept_rows: List[Row] = []
        for row in rows:
            if matches_filters(row, self._filters):
                deleted_rows.append(row)
            else:
                kept_rows.append(row)

        # Mutate in place so other holders of the list see the removal
        rows[:] = kept_rows

        logger.debug(f"delete on '{self._table}' removed {len(deleted_rows)} rows")
        return deleted_rows

    def __repr__(self) -> str:
        return (
            f"QueryBuilder(table={self._table!r}, filters={self._filters!r}, "
            f"order={self._order_clauses!r}, limit={self._limit_value!r}, "
            f"offset={self._offset_value!r})"
        )
