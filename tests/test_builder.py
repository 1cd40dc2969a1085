"""
Tests for the fluent builder.

Covers the factory helpers, every clause method, argument checking
and builder continuation.
"""

import pytest

from cypherdsl.builder import (
    CypherQuery,
    alias,
    and_,
    asc,
    assign,
    contains,
    desc,
    ends_with,
    eq,
    fn,
    gt,
    gte,
    identifier,
    in_,
    is_not_null,
    is_null,
    literal,
    lt,
    lte,
    matches,
    ne,
    node,
    not_,
    or_,
    param,
    path,
    prop,
    relationship,
    starts_with,
    xor,
)
from cypherdsl.clauses import ClauseKind
from cypherdsl.expressions import Direction, Identifier, Literal, PropertyReference
from cypherdsl.query import Query
from cypherdsl.validation import InvalidArgumentError


class TestFactories:
    """Test expression factory helpers."""

    def test_identifier(self):
        assert identifier("n") == Identifier("n")

    def test_identifier_rejects_empty(self):
        with pytest.raises(InvalidArgumentError):
            identifier("")

    def test_literal_freezes_lists(self):
        assert literal([1, [2, 3]]) == Literal((1, (2, 3)))

    def test_prop_from_string_owner(self):
        assert prop("n", "age") == PropertyReference(Identifier("n"), "age")

    def test_prop_rejects_empty_key(self):
        with pytest.raises(InvalidArgumentError, match="key"):
            prop("n", "")

    def test_param_rejects_none(self):
        with pytest.raises(InvalidArgumentError):
            param(None)

    def test_node_properties_keep_order(self):
        n = node("n", "Person", name="Alice", age=30)
        assert [k for k, _ in n.properties] == ["name", "age"]
        assert n.properties[0][1] == Literal("Alice")

    def test_node_rejects_empty_label(self):
        with pytest.raises(InvalidArgumentError, match="labels"):
            node("n", "")

    def test_relationship(self):
        r = relationship("r", "KNOWS", direction=Direction.BOTH, since=2020)
        assert r.types == ("KNOWS",)
        assert r.direction == Direction.BOTH

    def test_path(self):
        p = path(node("a"), (relationship(None, "KNOWS"), node("b")), name="p")
        assert p.name == "p"
        assert len(p.steps) == 1

    def test_path_rejects_null_step(self):
        with pytest.raises(InvalidArgumentError):
            path(node("a"), None)

    @pytest.mark.parametrize(
        "step",
        [
            (relationship(None, "KNOWS"),),
            (relationship(None, "KNOWS"), node("b"), node("c")),
            (node("b"), relationship(None, "KNOWS")),
            "KNOWS",
        ],
    )
    def test_path_rejects_malformed_step(self, step):
        """Each step must be a (relationship, node) pair."""
        with pytest.raises(InvalidArgumentError, match="steps"):
            path(node("a"), step)

    def test_path_rejects_non_node_start(self):
        with pytest.raises(InvalidArgumentError, match="start"):
            path(relationship(None, "KNOWS"))

    @pytest.mark.parametrize("value", [{"a": 1}, float("nan"), float("-inf"), [1, {2}], object()])
    def test_literal_rejects_unrenderable_values(self, value):
        with pytest.raises(InvalidArgumentError):
            literal(value)

    def test_literal_accepts_finite_float_and_null(self):
        assert literal(2.5) == Literal(2.5)
        assert literal(None) == Literal(None)

    def test_assign_requires_property_target(self):
        with pytest.raises(InvalidArgumentError, match="target"):
            assign(identifier("n"), 1)

    def test_fn_wraps_plain_values(self):
        call = fn("coalesce", prop("n", "nick"), "anonymous")
        assert call.arguments[1] == Literal("anonymous")

    def test_items(self):
        assert alias(identifier("n"), "m").alias == "m"
        assert asc(identifier("n")).descending is False
        assert desc(identifier("n")).descending is True
        assert assign(prop("n", "a"), 1).value == Literal(1)


class TestConditions:
    """Conditions render through a WHERE clause."""

    @pytest.mark.parametrize(
        "condition, text",
        [
            (eq(prop("n", "a"), 1), "n.a = 1"),
            (ne(prop("n", "a"), 1), "n.a <> 1"),
            (gt(prop("n", "a"), 1), "n.a > 1"),
            (gte(prop("n", "a"), 1), "n.a >= 1"),
            (lt(prop("n", "a"), 1), "n.a < 1"),
            (lte(prop("n", "a"), 1), "n.a <= 1"),
            (in_(prop("n", "a"), [1, 2]), "n.a IN [1, 2]"),
            (starts_with(prop("n", "s"), "x"), "n.s STARTS WITH 'x'"),
            (ends_with(prop("n", "s"), "x"), "n.s ENDS WITH 'x'"),
            (contains(prop("n", "s"), "x"), "n.s CONTAINS 'x'"),
            (matches(prop("n", "s"), "a.*"), "n.s =~ 'a.*'"),
            (is_null(prop("n", "s")), "n.s IS NULL"),
            (is_not_null(prop("n", "s")), "n.s IS NOT NULL"),
            (not_(eq(identifier("a"), 1)), "NOT a = 1"),
            (and_(eq(identifier("a"), 1), eq(identifier("b"), 2), eq(identifier("c"), 3)), "a = 1 AND b = 2 AND c = 3"),
            (or_(eq(identifier("a"), 1), eq(identifier("b"), 2)), "a = 1 OR b = 2"),
            (xor(eq(identifier("a"), 1), eq(identifier("b"), 2)), "a = 1 XOR b = 2"),
        ],
    )
    def test_condition_text(self, condition, text):
        q = CypherQuery().where(condition)
        assert str(q) == f"CYPHER 3.5 WHERE {text}"

    def test_and_requires_conditions(self):
        with pytest.raises(InvalidArgumentError):
            and_()

    def test_and_rejects_null(self):
        with pytest.raises(InvalidArgumentError):
            and_(eq(identifier("a"), 1), None)


class TestCypherQuery:
    """Test the fluent clause methods."""

    def test_read_query(self):
        q = (
            CypherQuery()
            .match(node("n", "Person"))
            .where(gt(prop("n", "age"), 30))
            .returns(prop("n", "name"))
        )
        assert str(q) == "CYPHER 3.5 MATCH (n:Person) WHERE n.age > 30 RETURN n.name"

    def test_where_calls_merge(self):
        q = (
            CypherQuery()
            .match(node("n"))
            .where(gt(prop("n", "age"), 30))
            .where(lt(prop("n", "age"), 60))
        )
        assert len(q.query) == 2
        assert str(q) == "CYPHER 3.5 MATCH (n) WHERE n.age > 30 AND n.age < 60"

    def test_where_after_other_clause_not_merged(self):
        q = (
            CypherQuery()
            .match(node("a"))
            .where(eq(prop("a", "x"), 1))
            .with_(identifier("a"))
            .where(eq(prop("a", "y"), 2))
        )
        assert [c.kind for c in q.query] == [
            ClauseKind.MATCH,
            ClauseKind.WHERE,
            ClauseKind.WITH,
            ClauseKind.WHERE,
        ]

    def test_optional_match_and_projection(self):
        q = (
            CypherQuery()
            .match(node("p", "Person"))
            .optional_match(path(node("p"), (relationship(None, "OWNS"), node("c", "Car"))))
            .with_(identifier("p"), alias(fn("count", identifier("c")), "cars"))
            .returns(identifier("p"), identifier("cars"), distinct=True)
            .order_by(desc(identifier("cars")), prop("p", "name"))
            .skip(5)
            .limit(10)
        )
        assert str(q) == (
            "CYPHER 3.5 MATCH (p:Person) OPTIONAL MATCH (p)-[:OWNS]->(c:Car)"
            " WITH p, count(c) AS cars RETURN DISTINCT p, cars"
            " ORDER BY cars DESC, p.name SKIP 5 LIMIT 10"
        )

    def test_write_query(self):
        q = (
            CypherQuery()
            .merge(node("t", "Tag", name="graph"))
            .create(node("a", "Article", title=param("title")))
            .set(assign(prop("a", "draft"), True))
            .returns(identifier("a"))
        )
        assert str(q) == (
            "CYPHER 3.5 MERGE (t:Tag {name: 'graph'})"
            " CREATE (a:Article {title: $title})"
            " SET a.draft = true RETURN a"
        )

    def test_delete_and_unwind(self):
        q = (
            CypherQuery()
            .unwind(param("ids"), "id")
            .match(node("n", id=identifier("id")))
            .delete("n", detach=True)
        )
        assert str(q) == "CYPHER 3.5 UNWIND $ids AS id MATCH (n {id: id}) DETACH DELETE n"

    def test_as_string_with_version(self):
        q = CypherQuery().match(node("n"))
        assert q.as_string("4.0") == "CYPHER 4.0 MATCH (n)"
        assert q.as_string() == "CYPHER 3.5 MATCH (n)"

    def test_wraps_existing_query(self):
        base = Query()
        q = CypherQuery(base).match(node("n"))
        assert q.query is base
        assert len(base) == 1


class TestArgumentChecks:
    """Rejected calls leave the query unchanged."""

    def _started(self) -> CypherQuery:
        return CypherQuery().match(node("n"))

    @pytest.mark.parametrize(
        "call",
        [
            lambda q: q.match(),
            lambda q: q.match(node("a"), None),
            lambda q: q.where(None),
            lambda q: q.returns(),
            lambda q: q.with_(None),
            lambda q: q.order_by(),
            lambda q: q.skip(-1),
            lambda q: q.limit(None),
            lambda q: q.limit(True),
            lambda q: q.limit("10"),
            lambda q: q.create(),
            lambda q: q.merge(None),
            lambda q: q.set(),
            lambda q: q.delete(),
            lambda q: q.delete(""),
            lambda q: q.unwind(None, "x"),
            lambda q: q.unwind("", "x"),
            lambda q: q.unwind([1, 2], ""),
            lambda q: q.where("n.age > 3"),
            lambda q: q.where(eq(prop("n", "x"), {"a": 1})),
            lambda q: q.where(eq(prop("n", "x"), float("nan"))),
            lambda q: q.where(gt(prop("n", "x"), float("inf"))),
            lambda q: q.where(in_(prop("n", "x"), [1, object()])),
            lambda q: q.where(not_("n.active")),
            lambda q: q.where(and_(eq(identifier("a"), 1), "b = 2")),
            lambda q: q.match(relationship(None, "KNOWS")),
            lambda q: q.match(node("a"), "(b)"),
            lambda q: q.optional_match(identifier("a")),
            lambda q: q.create("(n:Tag)"),
            lambda q: q.merge(relationship(None, "KNOWS")),
            lambda q: q.delete(5),
            lambda q: q.returns("n"),
            lambda q: q.order_by(3),
            lambda q: q.set(("n.a", 1)),
            lambda q: q.unwind({"a": 1}, "x"),
        ],
    )
    def test_invalid_call(self, call):
        q = self._started()
        before = str(q)
        with pytest.raises(InvalidArgumentError):
            call(q)
        assert str(q) == before
        assert len(q.query) == 1


class TestContinuation:
    """Test branching a builder with copy()."""

    def test_branches_are_independent(self):
        base = CypherQuery().match(node("p", "Person"))
        adults = base.copy().where(gte(prop("p", "age"), 18))
        minors = base.copy().where(lt(prop("p", "age"), 18))

        assert str(base) == "CYPHER 3.5 MATCH (p:Person)"
        assert str(adults) == "CYPHER 3.5 MATCH (p:Person) WHERE p.age >= 18"
        assert str(minors) == "CYPHER 3.5 MATCH (p:Person) WHERE p.age < 18"

    def test_branch_from_where_tail(self):
        base = CypherQuery().match(node("p")).where(eq(prop("p", "active"), True))
        narrowed = base.copy().where(gt(prop("p", "age"), 65))

        assert str(base) == "CYPHER 3.5 MATCH (p) WHERE p.active = true"
        assert str(narrowed) == "CYPHER 3.5 MATCH (p) WHERE p.active = true AND p.age > 65"
