"""tablegraph - Ordered relational schemas from entity definitions.

Entities describe their fields as primitives, embedded entities (by value)
or references to other entities. tablegraph classifies every relationship,
synthesizes the foreign keys and bridge tables it implies, and orders the
tables so that each one is created after every table it references.

Example:
    from tablegraph import DDLEmitter, EntitySpec, FieldSpec, derive_schema

    entities = [
        EntitySpec(
            name="Customer",
            fields=[
                FieldSpec(name="id", type="uint64", primary_key=True, auto_increment=True),
                FieldSpec(name="email", type="string", width=255, unique="email"),
                FieldSpec(name="addresses", type="Address", many=True),
            ],
        ),
        EntitySpec(
            name="Address",
            fields=[
                FieldSpec(name="owner", type="Customer", reference=True, parent=True),
                FieldSpec(name="line", type="string", width=128, primary_key=True),
            ],
        ),
    ]

    schema = derive_schema(entities, seeds=["Customer"])
    print(schema.table_names())  # ['Customer', 'Address']

    # CREATE TABLE statements in creation order
    print(DDLEmitter(schema).render("mysql"))
"""

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
from tablegraph.exceptions import (
    CircularRelationshipError,
    ColumnTypeError,
    DuplicateColumnError,
    DuplicateEntityError,
    DuplicateParentError,
    DuplicateTableError,
    InvalidFieldNameError,
    InvalidFieldTypeError,
    InvalidKeyRoleError,
    InvalidParentFieldError,
    InvalidSeedError,
    MissingPrimaryKeyError,
    ReciprocalEdgeError,
    SchemaInvariantError,
    SchemaValidationError,
    TableGraphError,
    UnknownEntityError,
    UnsupportedDialectError,
    UnsupportedFieldError,
)
from tablegraph.introspection import EntityIntrospector
from tablegraph.schema import DerivedSchema, SchemaEngine, derive_from_model, derive_schema
from tablegraph.storage import DDLEmitter

__version__ = "0.1.0"

__all__ = [
    # Engine
    "SchemaEngine",
    "DerivedSchema",
    "EntityIntrospector",
    "DDLEmitter",
    "derive_schema",
    "derive_from_model",
    # Types
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
    # Exceptions
    "TableGraphError",
    "SchemaValidationError",
    "SchemaInvariantError",
    "InvalidSeedError",
    "UnknownEntityError",
    "DuplicateEntityError",
    "InvalidFieldNameError",
    "InvalidFieldTypeError",
    "InvalidParentFieldError",
    "InvalidKeyRoleError",
    "UnsupportedFieldError",
    "ColumnTypeError",
    "DuplicateParentError",
    "ReciprocalEdgeError",
    "MissingPrimaryKeyError",
    "DuplicateColumnError",
    "DuplicateTableError",
    "CircularRelationshipError",
    "UnsupportedDialectError",
]
