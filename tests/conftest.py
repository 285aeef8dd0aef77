"""Shared test fixtures for tablegraph."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tablegraph.core.types import EntitySpec, FieldSpec

EntityFactory = Callable[..., EntitySpec]


def _entity(name: str, *fields: dict[str, Any]) -> EntitySpec:
    return EntitySpec(name=name, fields=[FieldSpec(**f) for f in fields])


@pytest.fixture
def make_entity() -> EntityFactory:
    """Build an EntitySpec from a name and field dicts."""
    return _entity


@pytest.fixture
def shop_entities() -> list[EntitySpec]:
    """A small shop: customers embed addresses, reference products, and get purchases.

    Expected creation order: Product, Customer (+ Customer_favorites),
    Address, Purchase.
    """
    return [
        _entity(
            "Customer",
            {"name": "id", "type": "uint64", "primary_key": True, "auto_increment": True},
            {"name": "email", "type": "string", "width": 255, "unique": "email"},
            {"name": "addresses", "type": "Address", "many": True},
            {"name": "favorites", "type": "Product", "many": True, "reference": True},
        ),
        _entity(
            "Address",
            {
                "name": "owner",
                "type": "Customer",
                "reference": True,
                "parent": True,
                "primary_key": True,
            },
            {"name": "position", "type": "uint16", "primary_key": True},
            {"name": "street", "type": "string", "width": 128},
            {"name": "city", "type": "string", "width": 64, "composite": "place"},
        ),
        _entity(
            "Product",
            {"name": "sku", "type": "string", "width": 32, "fixed": True, "primary_key": True},
            {"name": "title", "type": "string", "text": "medium"},
            {"name": "price", "type": "float64"},
        ),
        _entity(
            "Purchase",
            {"name": "id", "type": "uint64", "primary_key": True, "auto_increment": True},
            {"name": "customer", "type": "Customer", "reference": True},
            {"name": "placed", "type": "timestamp"},
        ),
    ]


@pytest.fixture
def models_file(tmp_path: Path, shop_entities: list[EntitySpec]) -> str:
    """Write the shop entities to a JSON models file."""
    path = tmp_path / "models.json"
    data = {
        "entities": [e.model_dump(mode="json", exclude_none=True) for e in shop_entities],
        "seeds": [],
    }
    path.write_text(json.dumps(data))
    return str(path)
