"""Mapping from primitive field kinds to SQLAlchemy column types.

Types are portable SQLAlchemy types with MySQL/MariaDB variants, so the
same derived schema can be rendered for MySQL (the primary target, with
signed/unsigned integers and sized text columns) and created on SQLite or
PostgreSQL.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import (
    CHAR,
    TIMESTAMP,
    BigInteger,
    Boolean,
    Double,
    Float,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.dialects import mysql, registry
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeEngine

from tablegraph.core.types import FieldSpec, PrimitiveKind, TextSize
from tablegraph.exceptions import ColumnTypeError, UnsupportedDialectError

MYSQL_DIALECTS = ("mysql", "mariadb")

INTEGER_KINDS = frozenset(
    {
        PrimitiveKind.INT8,
        PrimitiveKind.INT16,
        PrimitiveKind.INT32,
        PrimitiveKind.INT64,
        PrimitiveKind.UINT8,
        PrimitiveKind.UINT16,
        PrimitiveKind.UINT32,
        PrimitiveKind.UINT64,
    }
)

# Mapping from integer kinds to (portable type, MySQL type, unsigned)
_INTEGER_TYPE_MAP: dict[PrimitiveKind, tuple[Any, Any, bool]] = {
    PrimitiveKind.INT8: (SmallInteger, mysql.TINYINT, False),
    PrimitiveKind.INT16: (SmallInteger, mysql.SMALLINT, False),
    PrimitiveKind.INT32: (Integer, mysql.INTEGER, False),
    PrimitiveKind.INT64: (BigInteger, mysql.BIGINT, False),
    PrimitiveKind.UINT8: (SmallInteger, mysql.TINYINT, True),
    PrimitiveKind.UINT16: (Integer, mysql.SMALLINT, True),
    PrimitiveKind.UINT32: (BigInteger, mysql.INTEGER, True),
    PrimitiveKind.UINT64: (BigInteger, mysql.BIGINT, True),
}

_TEXT_TYPE_MAP = {
    TextSize.TINY: lambda: Text().with_variant(mysql.TINYTEXT(), *MYSQL_DIALECTS),
    TextSize.SMALL: lambda: Text(),
    TextSize.MEDIUM: lambda: Text().with_variant(mysql.MEDIUMTEXT(), *MYSQL_DIALECTS),
    TextSize.LONG: lambda: Text().with_variant(mysql.LONGTEXT(), *MYSQL_DIALECTS),
}


def is_integer_kind(kind: PrimitiveKind) -> bool:
    """Check whether a primitive kind maps to an integer column."""
    return kind in INTEGER_KINDS


def to_column_type(kind: PrimitiveKind, field: FieldSpec) -> TypeEngine[Any]:
    """Map a primitive kind and its field tags to a column type.

    Args:
        kind: Primitive kind of the field
        field: Field spec carrying the type tags (fixed, width, text)

    Returns:
        SQLAlchemy column type

    Raises:
        ColumnTypeError: If the tags are inconsistent for the kind
    """
    if field.auto_increment and not is_integer_kind(kind):
        raise ColumnTypeError(f"auto-increment requires an integer kind, not {kind}")

    if kind in _INTEGER_TYPE_MAP:
        portable, mysql_type, unsigned = _INTEGER_TYPE_MAP[kind]
        return portable().with_variant(mysql_type(unsigned=unsigned), *MYSQL_DIALECTS)

    if kind == PrimitiveKind.BOOL:
        return Boolean()
    if kind == PrimitiveKind.FLOAT32:
        return Float()
    if kind == PrimitiveKind.FLOAT64:
        return Double()
    if kind == PrimitiveKind.TIMESTAMP:
        return TIMESTAMP()
    if kind == PrimitiveKind.STRING:
        return _string_type(field)

    raise ColumnTypeError(f"unknown primitive kind {kind}")


def _string_type(field: FieldSpec) -> TypeEngine[Any]:
    """Resolve a string column from the width/text/fixed tags."""
    if field.width is not None:
        if field.width <= 0:
            raise ColumnTypeError(f"string width must be positive, got {field.width}")
        if field.text is not None:
            raise ColumnTypeError("string columns cannot declare both width and text")
        return CHAR(field.width) if field.fixed else String(field.width)

    if field.text is not None:
        if field.fixed:
            raise ColumnTypeError("text columns cannot be fixed")
        return _TEXT_TYPE_MAP[field.text]()

    raise ColumnTypeError("string columns must declare either width or text")


def get_dialect(dialect_name: str) -> Dialect:
    """Instantiate a SQLAlchemy dialect for DDL compilation.

    Raises:
        UnsupportedDialectError: If the dialect is not supported
    """
    if dialect_name not in UnsupportedDialectError.VALID_DIALECTS:
        raise UnsupportedDialectError(dialect_name)
    return registry.load(dialect_name)()


def type_name(column_type: TypeEngine[Any], dialect_name: str = "mysql") -> str:
    """Render a column type as the dialect's DDL type string."""
    return column_type.compile(dialect=get_dialect(dialect_name))
