"""
LocalBase: In-Memory Tabular Data Client

A Supabase-like query builder over an in-process table store, for exercising
CRUD logic in tests without a network or a real database.
"""

__version__ = "0.1.0"

from .database import MockDatabase, QueryBuilder, QueryTypeError

__all__ = ["MockDatabase", "QueryBuilder", "QueryTypeError", "__version__"]
