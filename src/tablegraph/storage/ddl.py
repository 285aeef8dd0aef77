"""DDL emission for derived schemas.

Builds SQLAlchemy table definitions for every emitted table in creation
order, then either compiles them to CREATE statements for a dialect or
creates them on a live database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    Column,
    ForeignKeyConstraint,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    UniqueConstraint,
)
from sqlalchemy import Table as SATable
from sqlalchemy.schema import CreateIndex, CreateTable

from tablegraph.storage.column_types import get_dialect

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from tablegraph.schema.engine import DerivedSchema
    from tablegraph.schema.models import Table

logger = logging.getLogger(__name__)


class DDLEmitter:
    """Renders a derived schema as DDL.

    Tables keep the derived creation order: every table referenced by a
    foreign key is defined before the table holding the key.
    """

    def __init__(self, schema: DerivedSchema) -> None:
        """Initialize the emitter.

        Args:
            schema: Derived schema to emit
        """
        self._schema = schema
        self._metadata: MetaData | None = None
        self._tables: list[SATable] = []

    @property
    def metadata(self) -> MetaData:
        """SQLAlchemy metadata holding every emitted table."""
        if self._metadata is None:
            self._metadata = self._build()
        return self._metadata

    def sa_tables(self) -> list[SATable]:
        """SQLAlchemy tables in creation order."""
        if self._metadata is None:
            self._metadata = self._build()
        return list(self._tables)

    def _build(self) -> MetaData:
        metadata = MetaData()
        self._tables = [
            self._build_table(table, metadata) for table in self._schema.iter_tables()
        ]
        return metadata

    def _build_table(self, table: Table, metadata: MetaData) -> SATable:
        """Build the SQLAlchemy definition of one table."""
        columns: list[Column[Any]] = [
            Column(
                field.name,
                field.type,
                nullable=field.nullable,
                autoincrement=field.auto_increment,
            )
            for field in table.fields
        ]

        constraints: list[Any] = []
        if table.primary_keys:
            constraints.append(PrimaryKeyConstraint(*table.primary_keys))
        for group, names in table.unique_keys.items():
            constraints.append(UniqueConstraint(*names, name=f"uq_{table.name}_{group}"))
        for foreign in table.foreign_keys:
            constraints.append(
                ForeignKeyConstraint(
                    list(foreign.source_columns),
                    [f"{foreign.ref_table}.{ref}" for ref in foreign.ref_columns],
                    onupdate=foreign.on_update.value,
                    ondelete=foreign.on_delete.value,
                )
            )

        indexes = [
            Index(f"ix_{table.name}_{group}", *names)
            for group, names in table.composite_keys.items()
        ]

        return SATable(table.name, metadata, *columns, *constraints, *indexes)

    def statements(self, dialect_name: str = "mysql") -> list[str]:
        """Compile CREATE TABLE / CREATE INDEX statements in creation order.

        Args:
            dialect_name: SQLAlchemy dialect name

        Returns:
            One statement per entry, terminated with ';'

        Raises:
            UnsupportedDialectError: If the dialect is not supported
        """
        dialect = get_dialect(dialect_name)
        result = []
        for sa_table in self.sa_tables():
            result.append(f"{str(CreateTable(sa_table).compile(dialect=dialect)).strip()};")
            for index in sorted(sa_table.indexes, key=lambda i: str(i.name)):
                result.append(f"{str(CreateIndex(index).compile(dialect=dialect)).strip()};")
        return result

    def render(self, dialect_name: str = "mysql", eol: str = "\n") -> str:
        """Render the whole schema as a DDL script."""
        return f"{eol}{eol}".join(self.statements(dialect_name)) + eol

    def create_tables(self, engine: Engine, checkfirst: bool = False) -> list[str]:
        """Create every table on a database, in creation order.

        Args:
            engine: SQLAlchemy engine
            checkfirst: Skip tables that already exist

        Returns:
            Names of the tables, in creation order
        """
        created = []
        with engine.begin() as conn:
            for sa_table in self.sa_tables():
                sa_table.create(conn, checkfirst=checkfirst)
                created.append(sa_table.name)
                logger.info(f"Created table {sa_table.name}")
        return created
