"""Tests for DDL emission."""

import re

import pytest
from sqlalchemy import create_engine, inspect

from tablegraph.exceptions import UnsupportedDialectError
from tablegraph.schema.engine import derive_schema
from tablegraph.storage.ddl import DDLEmitter

CREATE_TABLE = re.compile(r"^CREATE TABLE [`\"]?(\w+)")
CREATE_INDEX = re.compile(r"^CREATE INDEX [`\"]?(\w+)")


@pytest.fixture
def emitter(shop_entities) -> DDLEmitter:
    """DDL emitter over the shop schema."""
    return DDLEmitter(derive_schema(shop_entities))


def _statement_for(statements: list[str], table: str) -> str:
    for statement in statements:
        match = CREATE_TABLE.match(statement)
        if match and match.group(1) == table:
            return statement
    raise AssertionError(f"no CREATE TABLE for {table}")


class TestStatements:
    """CREATE statements for MySQL."""

    def test_creation_order(self, emitter):
        """Tables are created referenced-first, indexes right after their table."""
        statements = emitter.statements("mysql")
        created = []
        for statement in statements:
            match = CREATE_TABLE.match(statement) or CREATE_INDEX.match(statement)
            created.append(match.group(1))
        assert created == [
            "Product",
            "Customer",
            "Customer_favorites",
            "Address",
            "ix_Address_place",
            "Purchase",
        ]
        assert all(s.endswith(";") for s in statements)

    def test_columns_and_keys(self, emitter):
        """Columns carry MySQL types, NOT NULL and AUTO_INCREMENT."""
        customer = _statement_for(emitter.statements("mysql"), "Customer")
        assert "BIGINT UNSIGNED NOT NULL AUTO_INCREMENT" in customer
        assert "VARCHAR(255) NOT NULL" in customer
        assert "PRIMARY KEY (id)" in customer
        assert "uq_Customer_email" in customer
        assert "UNIQUE (email)" in customer

    def test_foreign_key_actions(self, emitter):
        """Foreign keys carry their referential actions."""
        statements = emitter.statements("mysql")
        address = _statement_for(statements, "Address")
        assert "REFERENCES `Customer` (id)" in address
        assert "ON DELETE CASCADE" in address
        assert "ON UPDATE CASCADE" in address

        purchase = _statement_for(statements, "Purchase")
        assert "ON DELETE RESTRICT" in purchase
        assert purchase.count("AUTO_INCREMENT") == 1

    def test_copied_columns_keep_type(self, emitter):
        """Bridge columns keep the type of the keys they copy."""
        bridge = _statement_for(emitter.statements("mysql"), "Customer_favorites")
        assert "`Customer_id` BIGINT UNSIGNED NOT NULL" in bridge
        assert "`Product_sku` CHAR(32) NOT NULL" in bridge
        assert "MEDIUMTEXT" in _statement_for(emitter.statements("mysql"), "Product")

    def test_render(self, emitter):
        """The script separates statements with a blank line."""
        script = emitter.render("mysql")
        assert script.startswith("CREATE TABLE `Product`")
        assert script.endswith(";\n")
        assert script.count(";\n\nCREATE") == len(emitter.statements("mysql")) - 1

    def test_other_dialect(self, emitter):
        """Portable types are used outside MySQL."""
        product = _statement_for(emitter.statements("sqlite"), "Product")
        assert "MEDIUMTEXT" not in product
        assert "TEXT NOT NULL" in product

    def test_unsupported_dialect(self, emitter):
        """Unknown dialects are rejected."""
        with pytest.raises(UnsupportedDialectError):
            emitter.statements("oracle")


class TestCreateTables:
    """Creating tables on a live database."""

    def test_create_on_sqlite(self, emitter):
        """All tables and constraints are created in order."""
        engine = create_engine("sqlite:///:memory:")
        created = emitter.create_tables(engine)
        assert created == ["Product", "Customer", "Customer_favorites", "Address", "Purchase"]

        inspector = inspect(engine)
        assert sorted(inspector.get_table_names()) == sorted(created)

        (address_fk,) = inspector.get_foreign_keys("Address")
        assert address_fk["referred_table"] == "Customer"
        assert address_fk["constrained_columns"] == ["Customer_id"]

        bridge_fks = inspector.get_foreign_keys("Customer_favorites")
        assert {fk["referred_table"] for fk in bridge_fks} == {"Customer", "Product"}

        assert "ix_Address_place" in {ix["name"] for ix in inspector.get_indexes("Address")}
        assert inspector.get_pk_constraint("Address")["constrained_columns"] == [
            "Customer_id",
            "position",
        ]
        engine.dispose()

    def test_checkfirst(self, emitter):
        """checkfirst skips existing tables."""
        engine = create_engine("sqlite:///:memory:")
        emitter.create_tables(engine)
        assert len(emitter.create_tables(engine, checkfirst=True)) == 5
        engine.dispose()

    def test_metadata(self, emitter):
        """Metadata holds every emitted table."""
        assert set(emitter.metadata.tables) == {
            "Product",
            "Customer",
            "Customer_favorites",
            "Address",
            "Purchase",
        }
