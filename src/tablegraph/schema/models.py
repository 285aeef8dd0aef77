"""In-memory entity graph: tables, fields, edges and foreign keys.

Tables reference each other by name only. Peers may not be registered yet
when an edge is recorded, so every cross reference is resolved through the
owning Schema once classification has reached its fixed point.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from sqlalchemy.types import TypeEngine

from tablegraph.core.types import (
    ColumnInfo,
    EdgeInfo,
    EdgeType,
    ForeignKeyInfo,
    ReferenceOption,
    TableInfo,
)
from tablegraph.exceptions import DuplicateColumnError, EdgeNotFoundError, FieldNotFoundError
from tablegraph.storage.column_types import type_name

# Separator for synthesized names such as "<table>_<field>"; reserved in field names
NAME_SEPARATOR = "_"

# Name of the edge synthesized towards a known parent
PARENT_EDGE_NAME = "_parent_"

# Edge types that place no column on their source table
EMBEDDING_EDGE_TYPES = frozenset({EdgeType.ONE_MULTI, EdgeType.ONE_ONE})


def compound_name(owner: str, name: str) -> str:
    """Build a synthesized name such as "Post_id"."""
    return f"{owner}{NAME_SEPARATOR}{name}"


@dataclass
class Field:
    """A column of a table."""

    name: str
    type: TypeEngine[Any]
    nullable: bool = False
    auto_increment: bool = False

    @property
    def type_name(self) -> str:
        """Column type as rendered for MySQL."""
        return type_name(self.type)

    def copy_as(self, name: str, nullable: bool | None = None) -> Field:
        """Copy this column definition under a new name, without auto-increment."""
        return replace(
            self,
            name=name,
            auto_increment=False,
            nullable=self.nullable if nullable is None else nullable,
        )

    def to_info(self) -> ColumnInfo:
        """Convert to output model."""
        return ColumnInfo(
            name=self.name,
            type=self.type_name,
            nullable=self.nullable,
            auto_increment=self.auto_increment,
        )


@dataclass
class ForeignKey:
    """Foreign key from a table's columns to another table's columns."""

    ref_table: str
    source_columns: list[str] = field(default_factory=list)
    ref_columns: list[str] = field(default_factory=list)
    on_update: ReferenceOption = ReferenceOption.RESTRICT
    on_delete: ReferenceOption = ReferenceOption.RESTRICT

    def add_column(self, source: str, ref: str) -> None:
        """Pair a source column with the referenced column."""
        self.source_columns.append(source)
        self.ref_columns.append(ref)

    def set_policy(self, option: ReferenceOption) -> None:
        """Use the same action on update and on delete."""
        self.on_update = option
        self.on_delete = option

    def to_info(self) -> ForeignKeyInfo:
        """Convert to output model."""
        return ForeignKeyInfo(
            source_columns=list(self.source_columns),
            ref_table=self.ref_table,
            ref_columns=list(self.ref_columns),
            on_update=self.on_update.value,
            on_delete=self.on_delete.value,
        )


@dataclass
class Edge:
    """Directed relationship from a table to a peer table.

    `type` is None only for an explicit parent edge that has not been
    resolved against the peer's embedding yet.
    """

    name: str
    peer: str
    type: EdgeType | None = None

    @property
    def places_column(self) -> bool:
        """Whether this edge puts key columns (or a bridge) on its source side."""
        return self.type not in EMBEDDING_EDGE_TYPES

    def to_info(self) -> EdgeInfo:
        """Convert to output model."""
        return EdgeInfo(
            name=self.name,
            peer=self.peer,
            type=self.type.value if self.type else "unresolved",
        )


@dataclass
class Table:
    """A storage unit: columns and keys."""

    name: str
    fields: list[Field] = field(default_factory=list)
    primary_keys: list[str] = field(default_factory=list)
    unique_keys: dict[str, list[str]] = field(default_factory=dict)
    composite_keys: dict[str, list[str]] = field(default_factory=dict)
    foreign_keys: list[ForeignKey] = field(default_factory=list)

    def has_field(self, name: str) -> bool:
        """Check if a column exists."""
        return any(f.name == name for f in self.fields)

    def get_field(self, name: str) -> Field:
        """Get a column by name.

        Raises:
            FieldNotFoundError: If the column does not exist
        """
        for f in self.fields:
            if f.name == name:
                return f
        raise FieldNotFoundError(name, self.name, [f.name for f in self.fields])

    def add_field(self, new_field: Field) -> None:
        """Append a column.

        Raises:
            DuplicateColumnError: If a column with that name already exists
        """
        if self.has_field(new_field.name):
            raise DuplicateColumnError(new_field.name, self.name)
        self.fields.append(new_field)

    def add_unique_key(self, group: str, columns: list[str]) -> None:
        """Add columns to a named unique key."""
        self.unique_keys.setdefault(group, []).extend(columns)

    def add_composite_key(self, group: str, columns: list[str]) -> None:
        """Add columns to a named secondary key."""
        self.composite_keys.setdefault(group, []).extend(columns)

    def to_info(self, aux_of: str | None = None) -> TableInfo:
        """Convert to output model."""
        return TableInfo(
            name=self.name,
            columns=[f.to_info() for f in self.fields],
            primary_keys=list(self.primary_keys),
            unique_keys={k: list(v) for k, v in self.unique_keys.items()},
            composite_keys={k: list(v) for k, v in self.composite_keys.items()},
            foreign_keys=[fk.to_info() for fk in self.foreign_keys],
            aux_of=aux_of,
        )


@dataclass
class MainTable(Table):
    """Table derived from an entity kind."""

    entity: str = ""
    aux_tables: list[Table] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    known_parent: str | None = None
    classified: bool = False

    def find_edge(self, name: str) -> Edge | None:
        """Find an edge by name."""
        for edge in self.edges:
            if edge.name == name:
                return edge
        return None

    def get_edge(self, name: str) -> Edge:
        """Get an edge by name.

        Raises:
            EdgeNotFoundError: If the edge does not exist
        """
        edge = self.find_edge(name)
        if edge is None:
            raise EdgeNotFoundError(name, self.name, [e.name for e in self.edges])
        return edge

    def find_edge_by_peer(self, peer: str) -> Edge | None:
        """Find the first edge to a peer table."""
        for edge in self.edges:
            if edge.peer == peer:
                return edge
        return None

    def find_embedding_edge(self, peer: str) -> Edge | None:
        """Find the first edge that embeds a peer table by value."""
        for edge in self.edges:
            if edge.peer == peer and edge.type in EMBEDDING_EDGE_TYPES:
                return edge
        return None

    def depends_on(self, other: MainTable) -> bool:
        """Whether this table holds a foreign key (or bridge) towards another table."""
        if self.known_parent == other.name:
            return True
        return any(edge.peer == other.name and edge.places_column for edge in self.edges)

    def to_info(self, aux_of: str | None = None) -> TableInfo:
        """Convert to output model, including edges."""
        info = super().to_info(aux_of)
        info.edges = [e.to_info() for e in self.edges]
        info.known_parent = self.known_parent
        return info
