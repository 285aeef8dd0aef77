"""Field and edge classification.

Every declared field of an entity becomes exactly one of: a plain column, a
relationship edge to another entity, or an embedding that makes this entity
the peer's known parent. Classifying an edge may register a new peer table,
so classification runs until no unclassified table remains.
"""

from __future__ import annotations

import logging

from tablegraph.core.types import EdgeType, FieldSpec
from tablegraph.exceptions import (
    ColumnTypeError,
    DuplicateParentError,
    InvalidFieldNameError,
    InvalidFieldTypeError,
    InvalidKeyRoleError,
    InvalidParentFieldError,
    ReciprocalEdgeError,
    SchemaInvariantError,
    UnsupportedFieldError,
)
from tablegraph.introspection import EntityIntrospector, FieldShape
from tablegraph.schema.graph import Schema
from tablegraph.schema.models import NAME_SEPARATOR, Edge, Field, MainTable, compound_name

logger = logging.getLogger(__name__)


class FieldClassifier:
    """Classifies entity fields into columns and edges.

    Explicit parent edges are recorded during classification but typed only
    after the fixed point, once the peer's embedding edge is known no matter
    in which order the two entities were visited.
    """

    def __init__(self, schema: Schema, introspector: EntityIntrospector) -> None:
        """Initialize the classifier.

        Args:
            schema: Schema being derived
            introspector: Source of entity definitions
        """
        self._schema = schema
        self._introspector = introspector
        self._pending_parents: dict[str, list[tuple[FieldSpec, Edge]]] = {}

    def classify_all(self) -> int:
        """Classify tables until a pass discovers no new table, then resolve parents.

        Returns:
            Number of passes run
        """
        passes = 0
        while pending := self._schema.unclassified():
            passes += 1
            logger.debug(f"Classification pass {passes}: {', '.join(t.name for t in pending)}")
            for table in pending:
                self.classify(table)
        self.resolve_parents()
        return passes

    def classify(self, table: MainTable) -> None:
        """Classify every declared field of a table, in declaration order."""
        if table.classified:
            return
        table.classified = True

        entity = self._introspector.describe(table.entity)
        seen: set[str] = set()
        for field in entity.fields:
            self._check_name(table, field, seen)
            self._visit(table, field, self._introspector.shape(field))

    def resolve_parents(self) -> None:
        """Type explicit parent edges from the peer's embedding edge.

        Raises:
            ReciprocalEdgeError: If the peer does not embed the declaring table
        """
        resolved: set[str] = set()
        for name in sorted(self._pending_parents):
            self._resolve_table_parents(name, resolved)

    def _resolve_table_parents(self, name: str, resolved: set[str]) -> None:
        # Peers first: their primary keys may include their own parent's keys
        if name in resolved:
            return
        resolved.add(name)
        table = self._schema.get_table(name)
        for field, edge in self._pending_parents.get(name, []):
            self._resolve_table_parents(edge.peer, resolved)
            peer = self._schema.get_table(edge.peer)
            back = peer.find_embedding_edge(table.name)
            if back is None:
                raise ReciprocalEdgeError(table.name, edge.name, peer.name, "by value")
            if back.type == EdgeType.ONE_MULTI:
                edge.type = EdgeType.MULTI_ONE_PARENT
            else:
                edge.type = EdgeType.ONE_ONE_PARENT
            keys = [compound_name(peer.name, key) for key in peer.primary_keys]
            self._splice_parent_keys(table, field, keys)
            logger.debug(f"Resolved {table.name}.{edge.name} as {edge.type}")

    def _check_name(self, table: MainTable, field: FieldSpec, seen: set[str]) -> None:
        if NAME_SEPARATOR in field.name:
            raise InvalidFieldNameError(
                field.name,
                table.entity,
                f"'{NAME_SEPARATOR}' is reserved for generated columns",
            )
        if field.name in seen:
            raise InvalidFieldNameError(field.name, table.entity, "declared more than once")
        seen.add(field.name)

    def _visit(self, table: MainTable, field: FieldSpec, shape: FieldShape) -> None:
        if not shape.complex and shape.primitive is None:
            raise InvalidFieldTypeError(
                field.name, table.entity, shape.kind, "neither a primitive kind nor an entity"
            )
        if shape.reference and not shape.complex:
            raise InvalidFieldTypeError(
                field.name, table.entity, shape.kind, "references must point to an entity"
            )

        if field.parent:
            self._visit_parent(table, field, shape)
        elif shape.reference and shape.many:
            self._add_edge(table, field, shape, EdgeType.MULTI_MULTI)
        elif shape.reference:
            self._add_edge(table, field, shape, EdgeType.MULTI_ONE)
        elif shape.complex:
            self._visit_embedded(table, field, shape)
        elif shape.many:
            raise UnsupportedFieldError(
                field.name,
                table.entity,
                "lists of primitive values have no table mapping; "
                "declare an entity for the values instead",
            )
        else:
            self._visit_column(table, field, shape)

    def _visit_parent(self, table: MainTable, field: FieldSpec, shape: FieldShape) -> None:
        if not shape.reference or shape.many or not shape.complex:
            raise InvalidParentFieldError(field.name, table.entity)
        edge = Edge(name=field.name, peer=shape.kind)
        table.edges.append(edge)
        self._schema.register(shape.kind)
        self._pending_parents.setdefault(table.name, []).append((field, edge))
        # Holds the field's place in its key group until the peer keys are known
        self._apply_key_role(table, field, [field.name])

    def _add_edge(
        self, table: MainTable, field: FieldSpec, shape: FieldShape, edge_type: EdgeType
    ) -> None:
        table.edges.append(Edge(name=field.name, peer=shape.kind, type=edge_type))
        self._schema.register(shape.kind)
        logger.debug(f"Classified {table.name}.{field.name} as {edge_type} to {shape.kind}")

    def _visit_embedded(self, table: MainTable, field: FieldSpec, shape: FieldShape) -> None:
        child = self._schema.register(shape.kind)
        if child.known_parent is not None:
            raise DuplicateParentError(child.name, child.known_parent, table.name)
        child.known_parent = table.name
        edge_type = EdgeType.ONE_MULTI if shape.many else EdgeType.ONE_ONE
        table.edges.append(Edge(name=field.name, peer=child.name, type=edge_type))
        logger.debug(f"Classified {table.name}.{field.name} as {edge_type} to {child.name}")

    def _visit_column(self, table: MainTable, field: FieldSpec, shape: FieldShape) -> None:
        kind = shape.primitive
        if kind is None:
            raise SchemaInvariantError(
                f"Field '{table.entity}.{field.name}' has no primitive kind to map.",
                {"entity_name": table.entity, "field_name": field.name},
            )

        if field.auto_increment:
            if not field.primary_key:
                raise InvalidKeyRoleError(
                    field.name, table.entity, "auto-increment requires primary key"
                )
            if any(f.auto_increment for f in table.fields):
                raise InvalidKeyRoleError(
                    field.name, table.entity, "only one auto-increment column is allowed"
                )

        try:
            column_type = self._introspector.column_type(kind, field)
        except ColumnTypeError as e:
            raise ColumnTypeError(e.reason, table.entity, field.name) from e

        table.add_field(
            Field(
                name=field.name,
                type=column_type,
                nullable=field.nullable,
                auto_increment=field.auto_increment,
            )
        )
        self._apply_key_role(table, field, [field.name])

    def _key_group(self, table: MainTable, field: FieldSpec) -> list[str] | None:
        if field.primary_key:
            return table.primary_keys
        if field.unique is not None:
            return table.unique_keys.setdefault(field.unique, [])
        if field.composite is not None:
            return table.composite_keys.setdefault(field.composite, [])
        return None

    def _apply_key_role(self, table: MainTable, field: FieldSpec, columns: list[str]) -> None:
        group = self._key_group(table, field)
        if group is not None:
            group.extend(columns)

    def _splice_parent_keys(self, table: MainTable, field: FieldSpec, keys: list[str]) -> None:
        """Replace a parent field's placeholder in its key group with the peer keys."""
        group = self._key_group(table, field)
        if group is None:
            return
        if field.name not in group:
            raise SchemaInvariantError(
                f"Parent field '{table.entity}.{field.name}' lost its key position.",
                {"entity_name": table.entity, "field_name": field.name},
            )
        index = group.index(field.name)
        group[index : index + 1] = keys
