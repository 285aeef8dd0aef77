"""Tests for the entity graph model."""

import pytest
from sqlalchemy import BigInteger, String

from tablegraph.core.types import EdgeType, ReferenceOption
from tablegraph.exceptions import (
    DuplicateColumnError,
    EdgeNotFoundError,
    FieldNotFoundError,
    TableNotFoundError,
)
from tablegraph.schema.graph import Schema
from tablegraph.schema.models import Edge, Field, ForeignKey, MainTable, Table, compound_name


class TestField:
    """Tests for Field."""

    def test_copy_as_strips_auto_increment(self):
        """Copied key columns never auto-increment."""
        field = Field(name="id", type=BigInteger(), auto_increment=True)
        copy = field.copy_as("Post_id")
        assert copy.name == "Post_id"
        assert copy.auto_increment is False
        assert field.auto_increment is True

    def test_copy_as_nullable_override(self):
        """Nullability is kept unless overridden."""
        field = Field(name="ref", type=String(8), nullable=True)
        assert field.copy_as("a").nullable is True
        assert field.copy_as("b", nullable=False).nullable is False

    def test_type_name(self):
        """Type renders as MySQL DDL."""
        assert Field(name="title", type=String(40)).type_name == "VARCHAR(40)"


class TestTable:
    """Tests for Table."""

    def test_add_field_duplicate(self):
        """Column names are unique within a table."""
        table = Table(name="Post")
        table.add_field(Field(name="id", type=BigInteger()))
        with pytest.raises(DuplicateColumnError, match="already exists"):
            table.add_field(Field(name="id", type=BigInteger()))

    def test_get_field_missing(self):
        """Missing columns are an invariant violation."""
        table = Table(name="Post", fields=[Field(name="id", type=BigInteger())])
        with pytest.raises(FieldNotFoundError) as exc_info:
            table.get_field("title")
        assert exc_info.value.available_fields == ["id"]

    def test_key_groups_accumulate(self):
        """Fields sharing a group name share one key."""
        table = Table(name="Post")
        table.add_unique_key("slug", ["site"])
        table.add_unique_key("slug", ["path"])
        table.add_composite_key("recent", ["created"])
        assert table.unique_keys == {"slug": ["site", "path"]}
        assert table.composite_keys == {"recent": ["created"]}

    def test_foreign_key_policy(self):
        """One policy covers update and delete."""
        foreign = ForeignKey(ref_table="Post")
        foreign.add_column("Post_id", "id")
        foreign.set_policy(ReferenceOption.CASCADE)
        info = foreign.to_info()
        assert info.source_columns == ["Post_id"]
        assert info.ref_columns == ["id"]
        assert info.on_update == "CASCADE"
        assert info.on_delete == "CASCADE"


class TestMainTable:
    """Tests for MainTable."""

    def test_edge_lookup(self):
        """Edges are found by name or by peer."""
        table = MainTable(
            name="Post",
            entity="Post",
            edges=[
                Edge(name="author", peer="User", type=EdgeType.MULTI_ONE),
                Edge(name="comments", peer="Comment", type=EdgeType.ONE_MULTI),
            ],
        )
        assert table.get_edge("comments").peer == "Comment"
        assert table.find_edge_by_peer("User").name == "author"
        assert table.find_edge("missing") is None
        with pytest.raises(EdgeNotFoundError):
            table.get_edge("missing")

    def test_embedding_edge_skips_pointers(self):
        """A pointer to a peer does not shadow the embedding of it."""
        table = MainTable(
            name="Post",
            entity="Post",
            edges=[
                Edge(name="pinned", peer="Comment", type=EdgeType.MULTI_ONE),
                Edge(name="comments", peer="Comment", type=EdgeType.ONE_MULTI),
            ],
        )
        assert table.find_edge_by_peer("Comment").name == "pinned"
        assert table.find_embedding_edge("Comment").name == "comments"

    def test_depends_on(self):
        """Embedding edges place no column, so they add no dependency."""
        post = MainTable(
            name="Post",
            entity="Post",
            edges=[
                Edge(name="author", peer="User", type=EdgeType.MULTI_ONE),
                Edge(name="comments", peer="Comment", type=EdgeType.ONE_MULTI),
            ],
        )
        user = MainTable(name="User", entity="User")
        comment = MainTable(name="Comment", entity="Comment", known_parent="Post")
        assert post.depends_on(user)
        assert not post.depends_on(comment)
        assert comment.depends_on(post)

    def test_compound_name(self):
        """Synthesized names join owner and name."""
        assert compound_name("Post", "id") == "Post_id"


class TestSchema:
    """Tests for the Schema accumulator."""

    def test_register_is_idempotent(self):
        """Registering twice returns the same table."""
        schema = Schema()
        first = schema.register("Post")
        assert schema.register("Post") is first
        assert len(schema) == 1
        assert "Post" in schema

    def test_get_table_missing(self):
        """Unknown names are an invariant violation."""
        schema = Schema()
        schema.register("Post")
        with pytest.raises(TableNotFoundError) as exc_info:
            schema.get_table("Ghost")
        assert exc_info.value.available_tables == ["Post"]

    def test_unclassified_in_name_order(self):
        """Unclassified tables are listed by name."""
        schema = Schema()
        schema.register("Zebra")
        schema.register("Apple").classified = True
        schema.register("Mango")
        assert [t.name for t in schema.unclassified()] == ["Mango", "Zebra"]

    def test_sorted_cache_invalidated_on_register(self):
        """Registering a table recomputes the order."""
        schema = Schema()
        schema.register("B")
        assert [t.name for t in schema.sorted_tables()] == ["B"]
        schema.register("A")
        assert [t.name for t in schema.sorted_tables()] == ["A", "B"]
