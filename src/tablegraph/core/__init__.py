"""Core components for tablegraph."""

from tablegraph.core.types import (
    ColumnInfo,
    EdgeInfo,
    EdgeType,
    EntitySpec,
    FieldSpec,
    ForeignKeyInfo,
    ModelSpec,
    PrimitiveKind,
    ReferenceOption,
    SchemaInfo,
    TableInfo,
    TextSize,
)

__all__ = [
    "PrimitiveKind",
    "TextSize",
    "EdgeType",
    "ReferenceOption",
    "FieldSpec",
    "EntitySpec",
    "ModelSpec",
    "ColumnInfo",
    "ForeignKeyInfo",
    "EdgeInfo",
    "TableInfo",
    "SchemaInfo",
]
