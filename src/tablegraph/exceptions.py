"""Custom exceptions for tablegraph.

Errors fall in two families:
- SchemaValidationError: the entity definitions are inconsistent. Derivation
  aborts and the message says which entity, field or peer to fix.
- SchemaInvariantError: a lookup that the pipeline itself should have
  guaranteed failed. These are defects in tablegraph, not in the input.

Every error carries a JSON-serializable context for machine consumption.
"""

from __future__ import annotations

from typing import Any


class TableGraphError(Exception):
    """Base exception for all tablegraph errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class SchemaValidationError(TableGraphError):
    """The entity graph cannot be turned into a consistent schema."""

    pass


class SchemaInvariantError(TableGraphError):
    """Internal invariant violated while deriving a schema."""

    pass


# === Input validation ===


class InvalidSeedError(SchemaValidationError):
    """A seed does not name a complex entity."""

    def __init__(self, seed: str, available_entities: list[str] | None = None) -> None:
        available = available_entities or []
        if available:
            message = (
                f"Seed '{seed}' is not a declared entity. "
                f"Available entities: {', '.join(available)}"
            )
        else:
            message = f"Seed '{seed}' is not a declared entity. No entities are declared."
        super().__init__(message, {"seed": seed, "available_entities": available})
        self.seed = seed
        self.available_entities = available


class UnknownEntityError(SchemaValidationError):
    """Entity kind is not declared."""

    def __init__(self, entity_name: str, available_entities: list[str] | None = None) -> None:
        available = available_entities or []
        if available:
            message = (
                f"Entity '{entity_name}' is not declared. "
                f"Available entities: {', '.join(available)}"
            )
        else:
            message = f"Entity '{entity_name}' is not declared. No entities are declared."
        super().__init__(message, {"entity_name": entity_name, "available_entities": available})
        self.entity_name = entity_name
        self.available_entities = available


class DuplicateEntityError(SchemaValidationError):
    """Two entity definitions share a name."""

    def __init__(self, entity_name: str) -> None:
        message = f"Entity '{entity_name}' is declared more than once."
        super().__init__(message, {"entity_name": entity_name})
        self.entity_name = entity_name


class InvalidFieldNameError(SchemaValidationError):
    """Field name is reserved or repeated."""

    def __init__(self, field_name: str, entity_name: str, reason: str) -> None:
        message = f"Invalid field name '{entity_name}.{field_name}': {reason}"
        super().__init__(
            message, {"field_name": field_name, "entity_name": entity_name, "reason": reason}
        )
        self.field_name = field_name
        self.entity_name = entity_name
        self.reason = reason


class InvalidFieldTypeError(SchemaValidationError):
    """Field type is unknown or has an impossible shape."""

    def __init__(self, field_name: str, entity_name: str, field_type: str, reason: str) -> None:
        message = f"Invalid type '{field_type}' for '{entity_name}.{field_name}': {reason}"
        super().__init__(
            message,
            {
                "field_name": field_name,
                "entity_name": entity_name,
                "field_type": field_type,
                "reason": reason,
            },
        )
        self.field_name = field_name
        self.entity_name = entity_name
        self.field_type = field_type
        self.reason = reason


class InvalidParentFieldError(SchemaValidationError):
    """A parent field is not a single reference to an entity."""

    def __init__(self, field_name: str, entity_name: str) -> None:
        message = (
            f"Parent field '{entity_name}.{field_name}' must be a single reference "
            "to another entity (reference=true, many=false)."
        )
        super().__init__(message, {"field_name": field_name, "entity_name": entity_name})
        self.field_name = field_name
        self.entity_name = entity_name


class InvalidKeyRoleError(SchemaValidationError):
    """Key role tags are inconsistent."""

    def __init__(self, field_name: str, entity_name: str, reason: str) -> None:
        message = f"Invalid key role on '{entity_name}.{field_name}': {reason}"
        super().__init__(
            message, {"field_name": field_name, "entity_name": entity_name, "reason": reason}
        )
        self.field_name = field_name
        self.entity_name = entity_name
        self.reason = reason


class UnsupportedFieldError(SchemaValidationError):
    """Field shape has no relational mapping."""

    def __init__(self, field_name: str, entity_name: str, reason: str) -> None:
        message = f"Unsupported field '{entity_name}.{field_name}': {reason}"
        super().__init__(
            message, {"field_name": field_name, "entity_name": entity_name, "reason": reason}
        )
        self.field_name = field_name
        self.entity_name = entity_name
        self.reason = reason


class ColumnTypeError(SchemaValidationError):
    """Column type tags are inconsistent for a primitive field."""

    def __init__(
        self, reason: str, entity_name: str | None = None, field_name: str | None = None
    ) -> None:
        if entity_name and field_name:
            message = f"{reason} in {entity_name}.{field_name}"
        else:
            message = reason
        super().__init__(
            message, {"reason": reason, "entity_name": entity_name, "field_name": field_name}
        )
        self.reason = reason
        self.entity_name = entity_name
        self.field_name = field_name


class DuplicateParentError(SchemaValidationError):
    """Two entities embed the same entity by value."""

    def __init__(self, child_name: str, first_parent: str, second_parent: str) -> None:
        message = (
            f"Only one entity may embed '{child_name}' by value; both '{first_parent}' "
            f"and '{second_parent}' do. Use a reference for one of them."
        )
        super().__init__(
            message,
            {
                "child_name": child_name,
                "first_parent": first_parent,
                "second_parent": second_parent,
            },
        )
        self.child_name = child_name
        self.first_parent = first_parent
        self.second_parent = second_parent


class ReciprocalEdgeError(SchemaValidationError):
    """A parent edge is not matched by an embedding on the peer."""

    def __init__(self, entity_name: str, edge_name: str, peer_name: str, expected: str) -> None:
        message = (
            f"'{peer_name}' does not contain '{entity_name}' {expected}, "
            f"but '{entity_name}.{edge_name}' declares it as parent."
        )
        super().__init__(
            message,
            {
                "entity_name": entity_name,
                "edge_name": edge_name,
                "peer_name": peer_name,
                "expected": expected,
            },
        )
        self.entity_name = entity_name
        self.edge_name = edge_name
        self.peer_name = peer_name
        self.expected = expected


class MissingPrimaryKeyError(SchemaValidationError):
    """A referenced table has no primary key."""

    def __init__(self, table_name: str, entity_name: str, edge_name: str) -> None:
        message = (
            f"Cannot reference '{table_name}' from '{entity_name}.{edge_name}' "
            f"because '{table_name}' has no primary key."
        )
        super().__init__(
            message,
            {"table_name": table_name, "entity_name": entity_name, "edge_name": edge_name},
        )
        self.table_name = table_name
        self.entity_name = entity_name
        self.edge_name = edge_name


class DuplicateColumnError(SchemaValidationError):
    """A synthesized column collides with an existing one."""

    def __init__(self, column_name: str, table_name: str) -> None:
        message = (
            f"Column '{column_name}' already exists on '{table_name}'. "
            "Two relationships to the same peer produce the same key columns."
        )
        super().__init__(message, {"column_name": column_name, "table_name": table_name})
        self.column_name = column_name
        self.table_name = table_name


class DuplicateTableError(SchemaValidationError):
    """A bridge table name collides with another table."""

    def __init__(self, table_name: str) -> None:
        message = f"Table '{table_name}' is generated more than once."
        super().__init__(message, {"table_name": table_name})
        self.table_name = table_name


class CircularRelationshipError(SchemaValidationError):
    """Foreign keys form a cycle, so no creation order exists."""

    def __init__(self, entity_path: list[str]) -> None:
        path_str = " -> ".join(entity_path)
        message = f"Reference cycle detected: {path_str}. Tables cannot be created in any order."
        super().__init__(message, {"entity_path": entity_path})
        self.entity_path = entity_path


class UnsupportedDialectError(SchemaValidationError):
    """DDL dialect is not supported."""

    VALID_DIALECTS = ["mysql", "mariadb", "postgresql", "sqlite"]

    def __init__(self, dialect: str) -> None:
        message = (
            f"Unsupported dialect '{dialect}'. Valid dialects: {', '.join(self.VALID_DIALECTS)}"
        )
        super().__init__(message, {"dialect": dialect, "valid_dialects": self.VALID_DIALECTS})
        self.dialect = dialect


# === Internal invariants ===


class TableNotFoundError(SchemaInvariantError):
    """Table was expected to be registered."""

    def __init__(self, table_name: str, available_tables: list[str] | None = None) -> None:
        available = available_tables or []
        message = f"Table '{table_name}' does not exist."
        if available:
            message += f" Registered tables: {', '.join(available)}"
        super().__init__(message, {"table_name": table_name, "available_tables": available})
        self.table_name = table_name
        self.available_tables = available


class FieldNotFoundError(SchemaInvariantError):
    """Field was expected to exist on a table."""

    def __init__(
        self, field_name: str, table_name: str, available_fields: list[str] | None = None
    ) -> None:
        available = available_fields or []
        if available:
            message = (
                f"Field '{field_name}' not found in '{table_name}'. "
                f"Available fields: {', '.join(available)}"
            )
        else:
            message = f"Field '{field_name}' not found in '{table_name}'. No fields defined."
        super().__init__(
            message,
            {"field_name": field_name, "table_name": table_name, "available_fields": available},
        )
        self.field_name = field_name
        self.table_name = table_name
        self.available_fields = available


class EdgeNotFoundError(SchemaInvariantError):
    """Edge was expected to exist on a table."""

    def __init__(
        self, edge_name: str, table_name: str, available_edges: list[str] | None = None
    ) -> None:
        available = available_edges or []
        if available:
            message = (
                f"Edge '{edge_name}' not found on '{table_name}'. "
                f"Available edges: {', '.join(available)}"
            )
        else:
            message = f"Edge '{edge_name}' not found on '{table_name}'. No edges defined."
        super().__init__(
            message,
            {"edge_name": edge_name, "table_name": table_name, "available_edges": available},
        )
        self.edge_name = edge_name
        self.table_name = table_name
        self.available_edges = available
