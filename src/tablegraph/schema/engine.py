"""Schema engine: derives an ordered relational schema from entity specs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from tablegraph.core.types import EntitySpec, ModelSpec, SchemaInfo
from tablegraph.exceptions import InvalidSeedError, TableNotFoundError
from tablegraph.introspection import EntityIntrospector
from tablegraph.schema.classifier import FieldClassifier
from tablegraph.schema.graph import Schema
from tablegraph.schema.models import MainTable, Table
from tablegraph.schema.synthesizer import ForeignKeySynthesizer

logger = logging.getLogger(__name__)


class DerivedSchema:
    """Result of a derivation: main tables in creation order.

    Treat as a read-only snapshot; emitters and the CLI consume it.
    """

    def __init__(self, tables: list[MainTable]) -> None:
        self._tables = tables

    def __len__(self) -> int:
        return len(self._tables)

    @property
    def tables(self) -> list[MainTable]:
        """Main tables in creation order."""
        return list(self._tables)

    def iter_tables(self) -> Iterator[Table]:
        """Main tables in creation order, each followed by its bridge tables."""
        for table in self._tables:
            yield table
            yield from table.aux_tables

    def table_names(self) -> list[str]:
        """Names of all emitted tables in creation order."""
        return [t.name for t in self.iter_tables()]

    def get_table(self, name: str) -> Table:
        """Get an emitted table (main or bridge) by name.

        Raises:
            TableNotFoundError: If no table has that name
        """
        for table in self.iter_tables():
            if table.name == name:
                return table
        raise TableNotFoundError(name, self.table_names())

    def describe(self) -> SchemaInfo:
        """Get the full schema as a JSON-serializable model."""
        infos = []
        for table in self._tables:
            infos.append(table.to_info())
            infos.extend(aux.to_info(aux_of=table.name) for aux in table.aux_tables)
        return SchemaInfo(
            tables=infos,
            order=[info.name for info in infos],
            total_tables=len(infos),
        )


class SchemaEngine:
    """Runs the derivation pipeline.

    Stages: register seeds, classify to a fixed point, resolve parent edges,
    order tables, synthesize foreign keys and bridge tables. Each call to
    derive() works on a fresh Schema.
    """

    def __init__(self, introspector: EntityIntrospector) -> None:
        """Initialize the engine.

        Args:
            introspector: Source of entity definitions
        """
        self._introspector = introspector

    @classmethod
    def from_entities(cls, entities: Iterable[EntitySpec]) -> SchemaEngine:
        """Create an engine over a list of entity specs."""
        return cls(EntityIntrospector(entities))

    def derive(self, seeds: Iterable[str] | None = None) -> DerivedSchema:
        """Derive the ordered schema reachable from the seed entities.

        Args:
            seeds: Root entity names (all declared entities if empty or None)

        Returns:
            Derived schema in creation order

        Raises:
            SchemaValidationError: If the entity graph is inconsistent
        """
        seed_names = list(seeds or []) or self._introspector.entity_names()
        for seed in seed_names:
            if not self._introspector.is_complex(seed):
                raise InvalidSeedError(seed, self._introspector.entity_names())

        schema = Schema()
        for seed in seed_names:
            schema.register(seed)

        passes = FieldClassifier(schema, self._introspector).classify_all()
        logger.info(f"Classified {len(schema)} tables in {passes} passes")

        tables = ForeignKeySynthesizer(schema).synthesize_all()
        return DerivedSchema(tables)


def derive_schema(
    entities: Iterable[EntitySpec], seeds: Iterable[str] | None = None
) -> DerivedSchema:
    """Derive the ordered schema for entity specs (convenience wrapper)."""
    return SchemaEngine.from_entities(entities).derive(seeds)


def derive_from_model(model: ModelSpec, seeds: Iterable[str] | None = None) -> DerivedSchema:
    """Derive the schema for a models file, with optional seed override."""
    return derive_schema(model.entities, list(seeds or []) or model.seeds)
