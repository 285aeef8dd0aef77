"""Schema derivation for tablegraph."""

from tablegraph.schema.classifier import FieldClassifier
from tablegraph.schema.engine import DerivedSchema, SchemaEngine, derive_from_model, derive_schema
from tablegraph.schema.graph import Schema
from tablegraph.schema.models import Edge, Field, ForeignKey, MainTable, Table
from tablegraph.schema.sequencer import sequence_tables
from tablegraph.schema.synthesizer import ForeignKeySynthesizer

__all__ = [
    "SchemaEngine",
    "DerivedSchema",
    "derive_schema",
    "derive_from_model",
    "Schema",
    "FieldClassifier",
    "ForeignKeySynthesizer",
    "sequence_tables",
    "Table",
    "MainTable",
    "Field",
    "Edge",
    "ForeignKey",
]
