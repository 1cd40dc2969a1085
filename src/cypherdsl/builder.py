"""
Fluent Query Builder

The builder is the layer that constructs clauses and hands them to
the Query core. It owns all argument checking, so a rejected call
raises InvalidArgumentError and leaves the query exactly as it was.

Example:
    q = (
        CypherQuery()
        .match(node("n", "Person"))
        .where(gt(prop("n", "age"), 30))
        .returns(prop("n", "name"))
    )
    str(q)  # CYPHER 3.5 MATCH (n:Person) WHERE n.age > 30 RETURN n.name

Builder continuation:
    base = CypherQuery().match(node("n", "Person"))
    adults = base.copy().where(gte(prop("n", "age"), 18))
    minors = base.copy().where(lt(prop("n", "age"), 18))
"""

from __future__ import annotations

from io import StringIO
from typing import Any, Optional, Sequence, Union

from cypherdsl.clauses import (
    CreateClause,
    DeleteClause,
    LimitClause,
    MatchClause,
    MergeClause,
    OrderByClause,
    ReturnClause,
    SetClause,
    SkipClause,
    UnwindClause,
    WhereClause,
    WithClause,
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
    Pattern,
    ProjectionItem,
    PropertyReference,
    RelationshipPattern,
    SetItem,
    SortItem,
    UnaryExpression,
    UnaryOperator,
)
from cypherdsl.query import Query
from cypherdsl.validation import (
    InvalidArgumentError,
    check_empty,
    check_empty_expression,
    check_empty_strings,
    check_expression,
    check_literal_value,
    check_no_nulls,
    check_null,
    check_pattern,
)

Operand = Union[Expression, int, float, str, bool, None, list, tuple]


# =============================================================================
# EXPRESSION FACTORIES
# =============================================================================

def identifier(name: str) -> Identifier:
    check_empty(name, "name")
    return Identifier(name)


def literal(value: Any) -> Literal:
    """Wrap a Python value; lists become tuples so the literal is hashable."""
    check_literal_value(value, "value")
    return Literal(_freeze(value))


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def param(name: str) -> Parameter:
    check_empty(name, "name")
    return Parameter(name)


def prop(owner: Union[str, Expression], key: str) -> PropertyReference:
    """``prop("n", "name")`` -> ``n.name``."""
    check_null(owner, "owner")
    check_empty(key, "key")
    if isinstance(owner, str):
        owner = identifier(owner)
    check_expression(owner, "owner")
    return PropertyReference(owner, key)


def _to_expression(value: Operand) -> Expression:
    # Plain Python values are literals; use identifier() for variables
    if isinstance(value, Expression):
        return value
    return literal(value)


def _properties(properties: dict) -> tuple:
    return tuple((key, _to_expression(value)) for key, value in properties.items())


def node(variable: Optional[str] = None, *labels: str, **properties: Operand) -> NodePattern:
    """``node("n", "Person", name="Alice")`` -> ``(n:Person {name: 'Alice'})``."""
    check_empty_strings(labels, "labels")
    return NodePattern(variable=variable or None, labels=tuple(labels), properties=_properties(properties))


def relationship(
    variable: Optional[str] = None,
    *types: str,
    direction: Direction = Direction.OUTGOING,
    **properties: Operand,
) -> RelationshipPattern:
    check_empty_strings(types, "types")
    check_null(direction, "direction")
    return RelationshipPattern(
        variable=variable or None,
        types=tuple(types),
        direction=direction,
        properties=_properties(properties),
    )


def path(start: NodePattern, *steps: Sequence, name: Optional[str] = None) -> PathPattern:
    """
    Build a path from a start node and (relationship, node) steps.

    Example:
        path(node("a"), (relationship(None, "KNOWS"), node("b")), name="p")
        ->  p = (a)-[:KNOWS]->(b)
    """
    check_null(start, "start")
    if not isinstance(start, NodePattern):
        raise InvalidArgumentError("start must be a node pattern")
    check_no_nulls(steps, "steps")
    frozen_steps = []
    for step in steps:
        if not isinstance(step, (tuple, list)) or len(step) != 2:
            raise InvalidArgumentError("steps must be (relationship, node) pairs")
        rel, target = step
        if not isinstance(rel, RelationshipPattern) or not isinstance(target, NodePattern):
            raise InvalidArgumentError("steps must be (relationship, node) pairs")
        frozen_steps.append((rel, target))
    return PathPattern(start=start, steps=tuple(frozen_steps), name=name or None)


def fn(name: str, *arguments: Operand, distinct: bool = False) -> FunctionCall:
    check_empty(name, "name")
    return FunctionCall(name, tuple(_to_expression(a) for a in arguments), distinct)


def alias(expression: Expression, name: str) -> ProjectionItem:
    check_expression(expression, "expression")
    check_empty(name, "alias")
    return ProjectionItem(expression, name)


def asc(expression: Expression) -> SortItem:
    check_expression(expression, "expression")
    return SortItem(expression)


def desc(expression: Expression) -> SortItem:
    check_expression(expression, "expression")
    return SortItem(expression, descending=True)


def assign(target: PropertyReference, value: Operand) -> SetItem:
    check_null(target, "target")
    if not isinstance(target, PropertyReference):
        raise InvalidArgumentError("target must be a property reference")
    return SetItem(target, _to_expression(value))


# =============================================================================
# CONDITIONS
# =============================================================================

def _binary(operator: BinaryOperator, left: Operand, right: Operand) -> BinaryExpression:
    return BinaryExpression(operator, _to_expression(left), _to_expression(right))


def eq(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.EQUALS, left, right)


def ne(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.NOT_EQUALS, left, right)


def gt(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.GREATER_THAN, left, right)


def gte(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.GREATER_EQUAL, left, right)


def lt(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.LESS_THAN, left, right)


def lte(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.LESS_EQUAL, left, right)


def in_(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.IN, left, right)


def starts_with(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.STARTS_WITH, left, right)


def ends_with(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.ENDS_WITH, left, right)


def contains(left: Operand, right: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.CONTAINS, left, right)


def matches(left: Operand, pattern: Operand) -> BinaryExpression:
    return _binary(BinaryOperator.REGEX_MATCH, left, pattern)


def _fold(operator: BinaryOperator, conditions: Sequence[Expression]) -> Expression:
    check_no_nulls(conditions, "conditions")
    if not conditions:
        raise InvalidArgumentError("conditions may not be null or empty")
    for condition in conditions:
        check_expression(condition, "conditions")
    result = conditions[0]
    for condition in conditions[1:]:
        result = BinaryExpression(operator, result, condition)
    return result


def and_(*conditions: Expression) -> Expression:
    return _fold(BinaryOperator.AND, conditions)


def or_(*conditions: Expression) -> Expression:
    return _fold(BinaryOperator.OR, conditions)


def xor(*conditions: Expression) -> Expression:
    return _fold(BinaryOperator.XOR, conditions)


def not_(condition: Expression) -> UnaryExpression:
    check_expression(condition, "condition")
    return UnaryExpression(UnaryOperator.NOT, condition)


def is_null(expression: Expression) -> UnaryExpression:
    check_expression(expression, "expression")
    return UnaryExpression(UnaryOperator.IS_NULL, expression)


def is_not_null(expression: Expression) -> UnaryExpression:
    check_expression(expression, "expression")
    return UnaryExpression(UnaryOperator.IS_NOT_NULL, expression)


# =============================================================================
# BUILDER
# =============================================================================

def _require_items(values: Sequence[Any], name: str) -> None:
    check_no_nulls(values, name)
    if not values:
        raise InvalidArgumentError(f"{name} may not be null or empty")


def _projection(item: Union[ProjectionItem, Expression]) -> ProjectionItem:
    if isinstance(item, ProjectionItem):
        return item
    check_expression(item, "items")
    return ProjectionItem(item)


def _sort_item(item: Union[SortItem, Expression]) -> SortItem:
    if isinstance(item, SortItem):
        return item
    check_expression(item, "items")
    return SortItem(item)


def _require_patterns(patterns: Sequence[Any]) -> None:
    _require_items(patterns, "patterns")
    for pattern in patterns:
        check_pattern(pattern, "patterns")


def _deletable(value: Union[str, Identifier]) -> Identifier:
    if isinstance(value, str):
        return identifier(value)
    if not isinstance(value, Identifier):
        raise InvalidArgumentError(f"identifiers must be names or identifiers, got {type(value).__name__}")
    return value


def _check_count(count: int, name: str) -> None:
    check_null(count, name)
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise InvalidArgumentError(f"{name} must be a non-negative integer")


class CypherQuery:
    """
    Fluent front end over a Query.

    Every method adds exactly one clause (or merges a WHERE) and
    returns the builder, so calls chain. Use copy() to branch.
    """

    def __init__(self, query: Optional[Query] = None) -> None:
        self._query = query if query is not None else Query()

    @property
    def query(self) -> Query:
        return self._query

    def match(self, *patterns: Pattern) -> CypherQuery:
        _require_patterns(patterns)
        self._query.add(MatchClause(tuple(patterns)))
        return self

    def optional_match(self, *patterns: Pattern) -> CypherQuery:
        _require_patterns(patterns)
        self._query.add(MatchClause(tuple(patterns), optional=True))
        return self

    def where(self, condition: Expression) -> CypherQuery:
        check_expression(condition, "condition")
        self._query.add(WhereClause(condition))
        return self

    def with_(self, *items: Union[ProjectionItem, Expression], distinct: bool = False) -> CypherQuery:
        _require_items(items, "items")
        self._query.add(WithClause(tuple(_projection(i) for i in items), distinct))
        return self

    def returns(self, *items: Union[ProjectionItem, Expression], distinct: bool = False) -> CypherQuery:
        _require_items(items, "items")
        self._query.add(ReturnClause(tuple(_projection(i) for i in items), distinct))
        return self

    def order_by(self, *items: Union[SortItem, Expression]) -> CypherQuery:
        _require_items(items, "items")
        self._query.add(OrderByClause(tuple(_sort_item(i) for i in items)))
        return self

    def skip(self, count: int) -> CypherQuery:
        _check_count(count, "skip")
        self._query.add(SkipClause(count))
        return self

    def limit(self, count: int) -> CypherQuery:
        _check_count(count, "limit")
        self._query.add(LimitClause(count))
        return self

    def create(self, *patterns: Pattern) -> CypherQuery:
        _require_patterns(patterns)
        self._query.add(CreateClause(tuple(patterns)))
        return self

    def merge(self, pattern: Pattern) -> CypherQuery:
        check_pattern(pattern, "pattern")
        self._query.add(MergeClause(pattern))
        return self

    def set(self, *items: SetItem) -> CypherQuery:
        _require_items(items, "items")
        for item in items:
            if not isinstance(item, SetItem):
                raise InvalidArgumentError("items must be assignments built with assign()")
        self._query.add(SetClause(tuple(items)))
        return self

    def delete(self, *identifiers: Union[str, Identifier], detach: bool = False) -> CypherQuery:
        _require_items(identifiers, "identifiers")
        resolved = tuple(_deletable(i) for i in identifiers)
        self._query.add(DeleteClause(resolved, detach))
        return self

    def unwind(self, expression: Operand, alias_name: str) -> CypherQuery:
        check_null(expression, "expression")
        expression = _to_expression(expression)
        check_empty_expression(expression, "expression")
        check_empty(alias_name, "alias")
        self._query.add(UnwindClause(expression, alias_name))
        return self

    def copy(self) -> CypherQuery:
        """Branch: the copy and this builder evolve independently."""
        return CypherQuery(self._query.copy())

    def as_string(self, cypher_version: Optional[str] = None) -> str:
        builder = StringIO()
        self._query.as_string(builder, cypher_version)
        return builder.getvalue()

    def __str__(self) -> str:
        return str(self._query)

    def __repr__(self) -> str:
        return f"CypherQuery({self._query!r})"


__all__ = [
    "CypherQuery",
    "identifier",
    "literal",
    "param",
    "prop",
    "node",
    "relationship",
    "path",
    "fn",
    "alias",
    "asc",
    "desc",
    "assign",
    "eq",
    "ne",
    "gt",
    "gte",
    "lt",
    "lte",
    "in_",
    "starts_with",
    "ends_with",
    "contains",
    "matches",
    "and_",
    "or_",
    "xor",
    "not_",
    "is_null",
    "is_not_null",
]
