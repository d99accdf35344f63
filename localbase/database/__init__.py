"""
In-memory tabular store.

Provides a Supabase-like chainable query builder (filters, ordering,
pagination, select/insert/update/delete) over plain Python dictionaries.
"""

from localbase.database.exceptions import LocalBaseError, QueryTypeError, SeedDataError
from localbase.database.models import (
    FilterClause,
    FilterOperator,
    OrderClause,
    Row,
    RowValue,
    ValueKind,
)
from localbase.database.query_builder import QueryBuilder
from localbase.database.store import MockDatabase, load_seed_file

__all__ = [
    "MockDatabase",
    "QueryBuilder",
    "load_seed_file",
    "FilterClause",
    "FilterOperator",
    "OrderClause",
    "Row",
    "RowValue",
    "ValueKind",
    "LocalBaseError",
    "QueryTypeError",
    "SeedDataError",
]
