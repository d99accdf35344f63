"""
In-memory store handle.

``MockDatabase`` wraps a caller-owned mapping of table name to row list and
hands out query builders bound to individual tables.
"""

import logging
from typing import Any, Dict, List, MutableMapping, Optional

from localbase.core.config_manager import LocalBaseConfig, load_structured_file
from localbase.core.logging_config import setup_logging_from_config

from .exceptions import SeedDataError
from .models import Row
from .query_builder import QueryBuilder

logger = logging.getLogger(__name__)


def load_seed_file(file_path: str) -> Dict[str, List[Row]]:
    """
    Load initial table contents from a YAML or JSON file.

    The document must be a mapping of table name to a list of row
    mappings. An empty file yields no tables.

    Args:
        file_path: Path to the seed file

    Returns:
        Mapping of table name to rows

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file suffix is not supported
        SeedDataError: If the document has the wrong shape
    """
    document = load_structured_file(file_path)
    if document is None:
        return {}

    if not isinstance(document, dict):
        raise SeedDataError(
            f"Seed data must map table names to row lists, got {type(document).__name__}",
            source=file_path,
        )

    tables: Dict[str, List[Row]] = {}
    for table_name, rows in document.items():
        if not isinstance(rows, list):
            raise SeedDataError(
                f"Rows for table '{table_name}' must be a list, got {type(rows).__name__}",
                source=file_path,
            )
        for position, row in enumerate(rows):
            if not isinstance(row, dict):
                raise SeedDataError(
                    f"Row {position} of table '{table_name}' must be a mapping, got {type(row).__name__}",
                    source=file_path,
                )
        tables[str(table_name)] = rows

    return tables


class MockDatabase:
    """
    Supabase-client-like handle over an in-memory database.

    The handle keeps a reference to the mapping it is given, not a copy:
    rows written through any builder are visible to the caller's mapping
    and to every later builder.

    Unlike a remote client, terminal verbs are chained after the filter
    methods and return rows directly instead of a pending response.
    """

    def __init__(self, database: Optional[MutableMapping[str, List[Row]]] = None):
        self._database: MutableMapping[str, List[Row]] = database if database is not None else {}

    @classmethod
    def from_seed_file(cls, file_path: str) -> "MockDatabase":
        """Build a store populated from a YAML or JSON seed file."""
        tables = load_seed_file(file_path)
        logger.info(
            f"Seeded {len(tables)} tables with {sum(len(rows) for rows in tables.values())} rows from {file_path}"
        )
        return cls(tables)

    @classmethod
    def from_config(cls, config: LocalBaseConfig, configure_logging: bool = True) -> "MockDatabase":
        """
        Build a store from configuration.

        The ``logging`` section is applied first unless ``configure_logging``
        is False. Seed rows are then loaded when ``database.seed_file`` is
        set, and each table in ``database.tables`` is created empty unless
        seeded.
        """
        if configure_logging:
            setup_logging_from_config(config.logging)

        if config.database.seed_file:
            db = cls.from_seed_file(config.database.seed_file)
        else:
            db = cls()

        for table_name in config.database.tables:
            if table_name not in db.database:
                db.database[table_name] = []
                logger.debug(f"Created empty table '{table_name}'")

        return db

    @property
    def database(self) -> MutableMapping[str, List[Row]]:
        return self._database

    def from_(self, table: str) -> QueryBuilder:
        """
        Create a query builder for the specified table.

        The table does not need to exist yet.
        """
        return QueryBuilder(self._database, table)

    def table(self, table: str) -> QueryBuilder:
        """Alias of ``from_``."""
        return self.from_(table)

    def table_names(self) -> List[str]:
        return list(self._database.keys())

    def __repr__(self) -> str:
        summary: Dict[str, Any] = {name: len(rows) for name, rows in self._database.items()}
        return f"MockDatabase(tables={summary!r})"
