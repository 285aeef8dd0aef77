"""Schema accumulator: the arena of tables addressed by name."""

from __future__ import annotations

import logging

from tablegraph.exceptions import TableNotFoundError
from tablegraph.schema.models import MainTable
from tablegraph.schema.sequencer import sequence_tables

logger = logging.getLogger(__name__)


class Schema:
    """Tables of one derivation run.

    Tables are created lazily the first time an entity kind is referenced.
    The creation order is computed on demand and cached until another
    table is registered.
    """

    def __init__(self) -> None:
        self._tables: dict[str, MainTable] = {}
        self._sorted: list[MainTable] | None = None

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    @property
    def tables(self) -> list[MainTable]:
        """Tables in registration order."""
        return list(self._tables.values())

    def table_names(self) -> list[str]:
        """Registered table names, sorted."""
        return sorted(self._tables)

    def register(self, entity: str) -> MainTable:
        """Get the table for an entity kind, creating it on first reference."""
        table = self._tables.get(entity)
        if table is None:
            table = MainTable(name=entity, entity=entity)
            self._tables[entity] = table
            self._sorted = None
            logger.info(f"Registered table {entity}")
        return table

    def get_table(self, name: str) -> MainTable:
        """Get a registered table.

        Raises:
            TableNotFoundError: If no table has that name
        """
        try:
            return self._tables[name]
        except KeyError:
            raise TableNotFoundError(name, self.table_names()) from None

    def unclassified(self) -> list[MainTable]:
        """Tables not classified yet, by name."""
        tables = (self._tables[name] for name in self.table_names())
        return [table for table in tables if not table.classified]

    def sorted_tables(self) -> list[MainTable]:
        """Tables in creation order (referenced tables first).

        Raises:
            CircularRelationshipError: If foreign keys form a cycle
        """
        if self._sorted is None:
            self._sorted = sequence_tables(self._tables.values())
        return list(self._sorted)
