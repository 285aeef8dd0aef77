"""Tests for the error taxonomy."""

from tablegraph.exceptions import (
    CircularRelationshipError,
    ColumnTypeError,
    FieldNotFoundError,
    InvalidSeedError,
    MissingPrimaryKeyError,
    ReciprocalEdgeError,
    SchemaInvariantError,
    SchemaValidationError,
    TableGraphError,
    TableNotFoundError,
    UnsupportedDialectError,
)


class TestHierarchy:
    """Validation errors and invariant violations are separate families."""

    def test_validation_errors(self):
        """Input errors derive from SchemaValidationError."""
        error = InvalidSeedError("Nope", ["Post"])
        assert isinstance(error, SchemaValidationError)
        assert isinstance(error, TableGraphError)
        assert not isinstance(error, SchemaInvariantError)

    def test_invariant_errors(self):
        """Lookup failures derive from SchemaInvariantError."""
        error = TableNotFoundError("Ghost", ["Post"])
        assert isinstance(error, SchemaInvariantError)
        assert not isinstance(error, SchemaValidationError)


class TestMessages:
    """Error messages carry enough context to fix the input."""

    def test_invalid_seed_lists_entities(self):
        """Available entities are listed."""
        error = InvalidSeedError("Nope", ["Comment", "Post"])
        assert "Nope" in str(error)
        assert "Comment, Post" in str(error)

    def test_reciprocal_edge(self):
        """Names entity, edge and peer."""
        error = ReciprocalEdgeError("Comment", "post", "Post", "by value")
        assert str(error) == (
            "'Post' does not contain 'Comment' by value, "
            "but 'Comment.post' declares it as parent."
        )

    def test_missing_primary_key(self):
        """Names the table lacking keys."""
        error = MissingPrimaryKeyError("Tag", "Post", "tags")
        assert "'Tag' has no primary key" in str(error)
        assert error.edge_name == "tags"

    def test_cycle_path(self):
        """The cycle is rendered as a path."""
        error = CircularRelationshipError(["A", "B", "C", "A"])
        assert "A -> B -> C -> A" in str(error)
        assert error.entity_path == ["A", "B", "C", "A"]

    def test_column_type_with_context(self):
        """Entity and field are appended when known."""
        assert str(ColumnTypeError("bad width")) == "bad width"
        error = ColumnTypeError("bad width", "Post", "title")
        assert str(error) == "bad width in Post.title"
        assert error.reason == "bad width"

    def test_field_not_found_without_fields(self):
        """Message mentions missing fields."""
        error = FieldNotFoundError("id", "Post")
        assert "No fields defined" in str(error)


class TestToDict:
    """Errors serialize for JSON output."""

    def test_to_dict(self):
        """to_dict exposes class name, message and context."""
        data = UnsupportedDialectError("oracle").to_dict()
        assert data["error"] == "UnsupportedDialectError"
        assert "oracle" in data["message"]
        assert data["context"]["dialect"] == "oracle"
        assert "sqlite" in data["context"]["valid_dialects"]

    def test_base_error_default_context(self):
        """Context defaults to an empty dict."""
        error = TableGraphError("boom")
        assert error.to_dict() == {"error": "TableGraphError", "message": "boom", "context": {}}
