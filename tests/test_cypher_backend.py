"""
Tests for the Cypher text backend.

Verifies rendering of literals, names, operators with precedence,
patterns and clause items.
"""

import pytest

from cypherdsl.backends.cypher import (
    escape_name,
    render_expression,
    render_literal,
    render_pattern,
    render_projection,
    render_set_item,
    render_sort_item,
)
from cypherdsl.expressions import (
    BinaryExpression,
    BinaryOperator,
    Direction,
    Expression,
    FunctionCall,
    Identifier,
    Literal,
    NodePattern,
    Parameter,
    PathPattern,
    ProjectionItem,
    PropertyReference,
    RelationshipPattern,
    SetItem,
    SortItem,
    UnaryExpression,
    UnaryOperator,
)


def _eq(name: str, value) -> BinaryExpression:
    return BinaryExpression(BinaryOperator.EQUALS, Identifier(name), Literal(value))


class TestNamesAndLiterals:
    """Test escaping of names and literal values."""

    def test_plain_name(self):
        assert escape_name("person_1") == "person_1"

    def test_name_needing_backticks(self):
        assert escape_name("first name") == "`first name`"
        assert escape_name("1st") == "`1st`"

    def test_backtick_in_name_doubled(self):
        assert escape_name("a`b") == "`a``b`"

    def test_string_literal_escaped(self):
        assert render_literal("it's") == "'it\\'s'"
        assert render_literal("a\\b") == "'a\\\\b'"

    def test_boolean_and_null(self):
        assert render_literal(True) == "true"
        assert render_literal(False) == "false"
        assert render_literal(None) == "null"

    def test_numbers(self):
        assert render_literal(42) == "42"
        assert render_literal(-8) == "-8"
        assert render_literal(2.5) == "2.5"

    def test_list_literal(self):
        assert render_literal((1, "a", None)) == "[1, 'a', null]"

    def test_unsupported_literal(self):
        with pytest.raises(TypeError):
            render_literal(object())


class TestExpressions:
    """Test expression rendering and precedence."""

    def test_parameter(self):
        assert render_expression(Parameter("name")) == "$name"

    def test_property(self):
        assert render_expression(PropertyReference(Identifier("n"), "age")) == "n.age"

    def test_comparison(self):
        assert render_expression(_eq("a", 1)) == "a = 1"

    def test_and_chain_is_flat(self):
        expr = BinaryExpression(
            BinaryOperator.AND,
            BinaryExpression(BinaryOperator.AND, _eq("a", 1), _eq("b", 2)),
            _eq("c", 3),
        )
        assert render_expression(expr) == "a = 1 AND b = 2 AND c = 3"

    def test_or_inside_and_is_parenthesized(self):
        expr = BinaryExpression(
            BinaryOperator.AND,
            BinaryExpression(BinaryOperator.OR, _eq("a", 1), _eq("b", 2)),
            _eq("c", 3),
        )
        assert render_expression(expr) == "(a = 1 OR b = 2) AND c = 3"

    def test_and_inside_or_is_not_parenthesized(self):
        expr = BinaryExpression(
            BinaryOperator.OR,
            BinaryExpression(BinaryOperator.AND, _eq("a", 1), _eq("b", 2)),
            _eq("c", 3),
        )
        assert render_expression(expr) == "a = 1 AND b = 2 OR c = 3"

    def test_nested_comparison_is_parenthesized(self):
        expr = BinaryExpression(BinaryOperator.EQUALS, _eq("a", 1), Literal(True))
        assert render_expression(expr) == "(a = 1) = true"

    def test_not(self):
        assert render_expression(UnaryExpression(UnaryOperator.NOT, _eq("a", 1))) == "NOT a = 1"

    def test_not_of_and(self):
        inner = BinaryExpression(BinaryOperator.AND, _eq("a", 1), _eq("b", 2))
        assert render_expression(UnaryExpression(UnaryOperator.NOT, inner)) == "NOT (a = 1 AND b = 2)"

    def test_is_null(self):
        expr = UnaryExpression(UnaryOperator.IS_NULL, PropertyReference(Identifier("n"), "email"))
        assert render_expression(expr) == "n.email IS NULL"

    def test_string_predicate(self):
        expr = BinaryExpression(
            BinaryOperator.STARTS_WITH, PropertyReference(Identifier("n"), "name"), Literal("A")
        )
        assert render_expression(expr) == "n.name STARTS WITH 'A'"

    def test_function_call(self):
        call = FunctionCall("count", (Identifier("f"),), distinct=True)
        assert render_expression(call) == "count(DISTINCT f)"

    def test_unknown_expression(self):
        class Unknown(Expression):
            pass

        with pytest.raises(TypeError):
            render_expression(Unknown())


class TestPatterns:
    """Test node, relationship and path rendering."""

    def test_empty_node(self):
        assert render_pattern(NodePattern()) == "()"

    def test_node_with_labels_and_properties(self):
        n = NodePattern("n", ("Person", "Admin"), (("name", Literal("Alice")), ("age", Literal(30))))
        assert render_pattern(n) == "(n:Person:Admin {name: 'Alice', age: 30})"

    def test_anonymous_node_with_properties(self):
        n = NodePattern(properties=(("id", Parameter("id")),))
        assert render_pattern(n) == "({id: $id})"

    def test_relationship_directions(self):
        assert render_expression(RelationshipPattern(types=("KNOWS",))) == "-[:KNOWS]->"
        assert render_expression(RelationshipPattern("r", direction=Direction.INCOMING)) == "<-[r]-"
        assert render_expression(RelationshipPattern(direction=Direction.BOTH)) == "--"

    def test_relationship_alternative_types(self):
        rel = RelationshipPattern(types=("KNOWS", "LIKES"))
        assert render_expression(rel) == "-[:KNOWS|LIKES]->"

    def test_named_path(self):
        p = PathPattern(
            start=NodePattern("a", ("Person",)),
            steps=((RelationshipPattern(types=("KNOWS",)), NodePattern("b")),),
            name="p",
        )
        assert render_pattern(p) == "p = (a:Person)-[:KNOWS]->(b)"

    def test_relationship_is_not_a_pattern_operand(self):
        with pytest.raises(TypeError):
            render_pattern(RelationshipPattern())


class TestItems:
    """Test projection, sort and set items."""

    def test_projection_with_alias(self):
        item = ProjectionItem(PropertyReference(Identifier("n"), "name"), "name")
        assert render_projection(item) == "n.name AS name"

    def test_projection_without_alias(self):
        assert render_projection(ProjectionItem(Identifier("n"))) == "n"

    def test_sort_item(self):
        assert render_sort_item(SortItem(Identifier("n"))) == "n"
        assert render_sort_item(SortItem(Identifier("n"), descending=True)) == "n DESC"

    def test_set_item(self):
        item = SetItem(PropertyReference(Identifier("n"), "age"), Literal(31))
        assert render_set_item(item) == "n.age = 31"


def test_package_exports_match_module():
    """The backends package re-exports the whole text backend API."""
    import cypherdsl.backends as backends
    import cypherdsl.backends.cypher as cypher

    assert sorted(backends.__all__) == sorted(cypher.__all__)
    for name in cypher.__all__:
        assert getattr(backends, name) is getattr(cypher, name)
