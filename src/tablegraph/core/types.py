"""Core types and specifications for tablegraph.

Input specs describe entities the way a models file declares them; output
models are JSON-serializable snapshots of a derived schema.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class PrimitiveKind(StrEnum):
    """Scalar kinds that map to a single column."""

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    TIMESTAMP = "timestamp"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid primitive kind values."""
        return [k.value for k in cls]


class TextSize(StrEnum):
    """Sizes for unbounded string columns."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LONG = "long"


class EdgeType(StrEnum):
    """Multiplicity and ownership of a relationship, seen from its source."""

    MULTI_MULTI = "multi_multi"  # e.g., Post -> Tags (bridge table)
    MULTI_ONE = "multi_one"  # e.g., Post -> Author (nullable-aware FK)
    MULTI_ONE_PARENT = "multi_one_parent"  # e.g., Comment -> Post that embeds it in a list
    ONE_MULTI = "one_multi"  # e.g., Post -> Comments (embedded list)
    ONE_ONE = "one_one"  # e.g., User -> Profile (embedded value)
    ONE_ONE_PARENT = "one_one_parent"  # e.g., Profile -> User that embeds it

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid edge type values."""
        return [t.value for t in cls]


class ReferenceOption(StrEnum):
    """Referential actions on update and delete."""

    RESTRICT = "RESTRICT"  # Block while referenced
    CASCADE = "CASCADE"  # Follow the referenced row
    SET_NULL = "SET NULL"  # Clear the reference

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid reference option values."""
        return [o.value for o in cls]


class FieldSpec(BaseModel):
    """Specification for a declared entity field.

    `type` names either a primitive kind or another entity. `many` makes the
    field a sequence and `reference` makes it point at the entity instead of
    embedding it by value.
    """

    name: str = Field(..., description="Field name (no underscores)")
    type: str = Field(..., description="Primitive kind or entity name")
    many: bool = Field(default=False, description="Field holds a sequence")
    reference: bool = Field(default=False, description="Field refers to the entity by reference")
    parent: bool = Field(default=False, description="Reference to the entity embedding this one")
    primary_key: bool = Field(default=False, description="Member of the primary key")
    unique: str | None = Field(default=None, description="Unique key group name")
    composite: str | None = Field(default=None, description="Secondary key group name")
    nullable: bool = Field(default=False, description="Column accepts NULL")
    auto_increment: bool = Field(default=False, description="Auto-increment primary key")
    fixed: bool = Field(default=False, description="Fixed-width string column")
    width: int | None = Field(default=None, description="String column width")
    text: TextSize | None = Field(default=None, description="Unbounded string column size")
    description: str | None = Field(default=None, description="Human-readable field description")


class EntitySpec(BaseModel):
    """Specification for an entity kind."""

    name: str = Field(..., description="Entity name, used as the table name")
    fields: list[FieldSpec] = Field(default_factory=list, description="Ordered field definitions")
    description: str | None = Field(default=None, description="Human-readable entity description")


class ModelSpec(BaseModel):
    """A models file: entity definitions plus the seeds to derive from."""

    entities: list[EntitySpec] = Field(default_factory=list)
    seeds: list[str] = Field(
        default_factory=list, description="Root entities (all entities when empty)"
    )


class ColumnInfo(BaseModel):
    """A column of a derived table (output format)."""

    name: str
    type: str
    nullable: bool
    auto_increment: bool


class ForeignKeyInfo(BaseModel):
    """A foreign key of a derived table (output format)."""

    source_columns: list[str]
    ref_table: str
    ref_columns: list[str]
    on_update: str
    on_delete: str


class EdgeInfo(BaseModel):
    """A classified relationship (output format)."""

    name: str
    peer: str
    type: str


class TableInfo(BaseModel):
    """A derived table (output format)."""

    name: str
    columns: list[ColumnInfo]
    primary_keys: list[str]
    unique_keys: dict[str, list[str]] = Field(default_factory=dict)
    composite_keys: dict[str, list[str]] = Field(default_factory=dict)
    foreign_keys: list[ForeignKeyInfo] = Field(default_factory=list)
    edges: list[EdgeInfo] = Field(default_factory=list)
    known_parent: str | None = None
    aux_of: str | None = None


class SchemaInfo(BaseModel):
    """Full derived schema in creation order (output format)."""

    tables: list[TableInfo]
    order: list[str]
    total_tables: int
