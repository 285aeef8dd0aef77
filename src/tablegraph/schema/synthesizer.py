"""Foreign key and bridge table synthesis.

Runs over tables in creation order, after classification, so that every
peer whose key columns get copied has already received its own synthesized
columns.
"""

from __future__ import annotations

import logging

from tablegraph.core.types import EdgeType, ReferenceOption
from tablegraph.exceptions import (
    DuplicateTableError,
    MissingPrimaryKeyError,
    ReciprocalEdgeError,
    SchemaInvariantError,
)
from tablegraph.schema.graph import Schema
from tablegraph.schema.models import (
    PARENT_EDGE_NAME,
    Edge,
    ForeignKey,
    MainTable,
    Table,
    compound_name,
)

logger = logging.getLogger(__name__)

# Parent edge type -> embedding edge the peer must hold back to the table
_PARENT_RECIPROCALS = {
    EdgeType.MULTI_ONE_PARENT: (EdgeType.ONE_MULTI, "in a list by value"),
    EdgeType.ONE_ONE_PARENT: (EdgeType.ONE_ONE, "as a single value"),
}


class ForeignKeySynthesizer:
    """Materializes edges as key columns, foreign keys and bridge tables."""

    def __init__(self, schema: Schema) -> None:
        """Initialize the synthesizer.

        Args:
            schema: Fully classified schema
        """
        self._schema = schema

    def synthesize_all(self) -> list[MainTable]:
        """Synthesize every table in creation order.

        Returns:
            Tables in creation order

        Raises:
            CircularRelationshipError: If no creation order exists
            ReciprocalEdgeError: If a parent edge is not matched by the peer
            MissingPrimaryKeyError: If a referenced table has no primary key
        """
        tables = self._schema.sorted_tables()
        for table in tables:
            self.synthesize(table)
        return tables

    def synthesize(self, table: MainTable) -> None:
        """Synthesize the columns, foreign keys and bridge tables of one table."""
        self._add_implicit_parent_edge(table)
        # Parent keys first: bridges and self references may copy them
        edges = sorted(table.edges, key=lambda e: e.type not in _PARENT_RECIPROCALS)
        for edge in edges:
            peer = self._schema.get_table(edge.peer)
            if edge.type == EdgeType.MULTI_MULTI:
                self._synthesize_bridge(table, edge, peer)
            elif edge.type in _PARENT_RECIPROCALS:
                self._check_reciprocal(table, edge, peer)
                self._copy_peer_keys(table, edge, peer, ReferenceOption.CASCADE)
            elif edge.type == EdgeType.MULTI_ONE:
                self._copy_peer_keys(table, edge, peer, None)
            elif edge.type in (EdgeType.ONE_MULTI, EdgeType.ONE_ONE):
                # Realized by the peer's parent edge
                continue
            else:
                raise SchemaInvariantError(
                    f"Edge '{table.name}.{edge.name}' was never resolved.",
                    {"table_name": table.name, "edge_name": edge.name},
                )

    def _add_implicit_parent_edge(self, table: MainTable) -> None:
        if table.known_parent is None or table.find_edge_by_peer(table.known_parent):
            return
        parent = self._schema.get_table(table.known_parent)
        back = parent.find_embedding_edge(table.name)
        if back is None:
            raise SchemaInvariantError(
                f"'{parent.name}' is the known parent of '{table.name}' but does not embed it.",
                {"table_name": table.name, "parent_name": parent.name},
            )
        if back.type == EdgeType.ONE_MULTI:
            edge_type = EdgeType.MULTI_ONE_PARENT
        else:
            edge_type = EdgeType.ONE_ONE_PARENT
        table.edges.append(Edge(name=PARENT_EDGE_NAME, peer=parent.name, type=edge_type))
        logger.debug(f"Inferred {edge_type} edge from {table.name} to {parent.name}")

    def _check_reciprocal(self, table: MainTable, edge: Edge, peer: MainTable) -> None:
        reciprocal = _PARENT_RECIPROCALS.get(edge.type) if edge.type is not None else None
        if reciprocal is None:
            raise SchemaInvariantError(
                f"Edge '{table.name}.{edge.name}' is not a parent edge.",
                {"table_name": table.name, "edge_name": edge.name},
            )
        expected_type, description = reciprocal
        back = peer.find_embedding_edge(table.name)
        if back is None or back.type != expected_type:
            raise ReciprocalEdgeError(table.name, edge.name, peer.name, description)

    def _copy_peer_keys(
        self,
        table: MainTable,
        edge: Edge,
        peer: MainTable,
        policy: ReferenceOption | None,
    ) -> None:
        """Copy the peer's primary key columns into the table and reference them.

        With no explicit policy the foreign key uses SET NULL when the copied
        columns are nullable and RESTRICT otherwise.
        """
        if not peer.primary_keys:
            raise MissingPrimaryKeyError(peer.name, table.name, edge.name)

        foreign = ForeignKey(ref_table=peer.name)
        copied = []
        for key in peer.primary_keys:
            column = peer.get_field(key).copy_as(compound_name(peer.name, key))
            table.add_field(column)
            foreign.add_column(column.name, key)
            copied.append(column)
            logger.info(f"Copied {peer.name} primary key {key} into {table.name} as {column.name}")

        if policy is None:
            nullable = all(column.nullable for column in copied)
            policy = ReferenceOption.SET_NULL if nullable else ReferenceOption.RESTRICT
        foreign.set_policy(policy)
        table.foreign_keys.append(foreign)

    def _synthesize_bridge(self, table: MainTable, edge: Edge, peer: MainTable) -> None:
        """Create the bridge table of a many-to-many edge.

        The bridge's primary key is the table's keys followed by the peer's
        keys. Rows follow the peer's lifecycle (CASCADE); the owner side keeps
        the default RESTRICT.
        """
        if not table.primary_keys:
            raise MissingPrimaryKeyError(table.name, table.name, edge.name)
        if not peer.primary_keys:
            raise MissingPrimaryKeyError(peer.name, table.name, edge.name)

        name = compound_name(table.name, edge.name)
        if name in self._schema or any(aux.name == name for aux in table.aux_tables):
            raise DuplicateTableError(name)

        bridge = Table(name=name)
        sides = ((table, ReferenceOption.RESTRICT), (peer, ReferenceOption.CASCADE))
        for owner, policy in sides:
            foreign = ForeignKey(ref_table=owner.name)
            for key in owner.primary_keys:
                source = owner.get_field(key)
                column = source.copy_as(compound_name(owner.name, key), nullable=False)
                bridge.add_field(column)
                bridge.primary_keys.append(column.name)
                foreign.add_column(column.name, key)
            foreign.set_policy(policy)
            bridge.foreign_keys.append(foreign)

        table.aux_tables.append(bridge)
        logger.info(f"Created bridge table {name} between {table.name} and {peer.name}")
