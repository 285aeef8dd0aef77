"""Entity introspection over declared entity specs.

The classifier never inspects live objects. It asks the introspector for an
entity's ordered fields and for the structural shape of each field.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.types import TypeEngine

from tablegraph.core.types import EntitySpec, FieldSpec, PrimitiveKind
from tablegraph.exceptions import DuplicateEntityError, UnknownEntityError
from tablegraph.storage.column_types import to_column_type


@dataclass(frozen=True)
class FieldShape:
    """Structural type of a field.

    `kind` is the entity name when `complex` is set, otherwise a primitive
    kind value (or an unknown name, which the classifier rejects).
    """

    kind: str
    complex: bool
    many: bool
    reference: bool

    @property
    def primitive(self) -> PrimitiveKind | None:
        """Primitive kind, if the shape names one."""
        if self.complex or self.kind not in PrimitiveKind.values():
            return None
        return PrimitiveKind(self.kind)


class EntityIntrospector:
    """Looks up entity definitions and field shapes by name."""

    def __init__(self, entities: Iterable[EntitySpec]) -> None:
        """Initialize the introspector.

        Args:
            entities: Declared entity specs

        Raises:
            DuplicateEntityError: If two specs share a name
        """
        self._entities: dict[str, EntitySpec] = {}
        for entity in entities:
            if entity.name in self._entities:
                raise DuplicateEntityError(entity.name)
            self._entities[entity.name] = entity

    def entity_names(self) -> list[str]:
        """Declared entity names, sorted."""
        return sorted(self._entities)

    def is_complex(self, kind: str) -> bool:
        """Whether a kind names a declared entity."""
        return kind in self._entities

    def describe(self, kind: str) -> EntitySpec:
        """Get the definition of an entity kind.

        Raises:
            UnknownEntityError: If the kind is not declared
        """
        entity = self._entities.get(kind)
        if entity is None:
            raise UnknownEntityError(kind, self.entity_names())
        return entity

    def shape(self, field: FieldSpec) -> FieldShape:
        """Get the structural shape of a field."""
        return FieldShape(
            kind=field.type,
            complex=self.is_complex(field.type),
            many=field.many,
            reference=field.reference,
        )

    def column_type(self, kind: PrimitiveKind, field: FieldSpec) -> TypeEngine[Any]:
        """Map a primitive field to its column type."""
        return to_column_type(kind, field)
