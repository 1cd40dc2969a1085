"""
Expression System for Cypher DSL

Every fragment a clause carries (conditions, projections, patterns)
is represented as an Abstract Syntax Tree (AST), never as a raw string.

This ensures:
    - Values are escaped in exactly one place (the text backend)
    - Clauses can be compared and serialized
    - Conditions can be composed (e.g. merged WHERE clauses)

ARCHITECTURAL RULE:
    No Cypher text lives in this module.
    Rendering belongs in cypherdsl.backends.cypher.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Expression(ABC):
    """
    Base class for all AST expressions.

    This is intentionally minimal.
    It exists to provide type-safety for the expression hierarchy.

    DO NOT:
        - Add string representations (belongs in backends)
        - Add evaluation logic (the database evaluates Cypher, not us)

    This class is structure only.
    """
    pass


class BinaryOperator(Enum):
    """
    Binary operators supported in Cypher expressions.

    The value is the exact Cypher token.
    """

    # Logical operators
    AND = "AND"
    OR = "OR"
    XOR = "XOR"

    # Comparison operators
    EQUALS = "="
    NOT_EQUALS = "<>"
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    LESS_THAN = "<"
    LESS_EQUAL = "<="

    # List and string predicates
    IN = "IN"
    STARTS_WITH = "STARTS WITH"
    ENDS_WITH = "ENDS WITH"
    CONTAINS = "CONTAINS"
    REGEX_MATCH = "=~"


LOGICAL_OPERATORS = frozenset({BinaryOperator.AND, BinaryOperator.OR, BinaryOperator.XOR})


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Represents a binary logical or comparison expression.

    Example:
        n.age > 30 AND n.name STARTS WITH 'A'

    Becomes:
        BinaryExpression(
            operator=BinaryOperator.AND,
            left=BinaryExpression(
                operator=BinaryOperator.GREATER_THAN,
                left=PropertyReference(Identifier("n"), "age"),
                right=Literal(30)
            ),
            right=BinaryExpression(
                operator=BinaryOperator.STARTS_WITH,
                left=PropertyReference(Identifier("n"), "name"),
                right=Literal("A")
            )
        )

    IMPORTANT:
        This object is immutable (frozen=True).
        Merged WHERE clauses rely on that: a merge builds a new
        AND node instead of editing either operand.
    """

    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class Identifier(Expression):
    """
    A variable bound in the query (e.g. ``n``, ``friend``, ``p``).

    This object does NOT check that the variable was introduced
    by an earlier MATCH/WITH/UNWIND. Cypher itself reports that.
    """

    name: str


LiteralValue = Union[int, float, str, bool, None, Tuple["LiteralValue", ...]]


@dataclass(frozen=True)
class Literal(Expression):
    """
    Represents a literal constant value.

    Examples:
        - 30
        - 'Alice'
        - true
        - null
        - [1, 2, 3]   (stored as a tuple)
    """

    value: LiteralValue


@dataclass(frozen=True)
class Parameter(Expression):
    """A query parameter, rendered as ``$name``."""

    name: str


@dataclass(frozen=True)
class PropertyReference(Expression):
    """
    Property access on an expression.

    Example:
        n.name  ->  PropertyReference(Identifier("n"), "name")
    """

    owner: Expression
    key: str


@dataclass(frozen=True)
class FunctionCall(Expression):
    """
    Function invocation, e.g. ``count(DISTINCT friend)`` or ``id(n)``.
    """

    name: str
    arguments: Tuple[Expression, ...] = ()
    distinct: bool = False


class UnaryOperator(Enum):
    """Unary operators. NOT is a prefix, the null checks are postfix."""
    NOT = "NOT"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"


@dataclass(frozen=True)
class UnaryExpression(Expression):
    """
    Represents a unary operation.

    Example:
        NOT (n:Admin)  /  n.email IS NULL
    """

    operator: UnaryOperator
    operand: Expression


# =============================================================================
# PATTERNS
# =============================================================================

Properties = Tuple[Tuple[str, Expression], ...]


class Direction(Enum):
    """Relationship direction relative to the pattern's reading order."""
    OUTGOING = "outgoing"   # -[]->
    INCOMING = "incoming"   # <-[]-
    BOTH = "both"           # -[]-


@dataclass(frozen=True)
class NodePattern(Expression):
    """
    A node in a graph pattern.

    Example:
        (n:Person {name: 'Alice'})

    Properties are kept as ordered (key, expression) pairs so
    the pattern stays hashable and renders in insertion order.
    """

    variable: Optional[str] = None
    labels: Tuple[str, ...] = ()
    properties: Properties = ()


@dataclass(frozen=True)
class RelationshipPattern(Expression):
    """A relationship between two nodes in a pattern, e.g. ``-[r:KNOWS]->``."""

    variable: Optional[str] = None
    types: Tuple[str, ...] = ()
    direction: Direction = Direction.OUTGOING
    properties: Properties = ()


@dataclass(frozen=True)
class PathPattern(Expression):
    """
    A chain of nodes joined by relationships, optionally named.

    Example:
        p = (a:Person)-[:KNOWS]->(b)

    Becomes:
        PathPattern(
            start=NodePattern("a", ("Person",)),
            steps=((RelationshipPattern(types=("KNOWS",)), NodePattern("b")),),
            name="p"
        )
    """

    start: NodePattern
    steps: Tuple[Tuple[RelationshipPattern, NodePattern], ...] = ()
    name: Optional[str] = None


Pattern = Union[NodePattern, PathPattern]


# =============================================================================
# CLAUSE ITEMS
# =============================================================================

@dataclass(frozen=True)
class ProjectionItem:
    """An item of RETURN/WITH: ``expression [AS alias]``."""

    expression: Expression
    alias: Optional[str] = None


@dataclass(frozen=True)
class SortItem:
    """An item of ORDER BY."""

    expression: Expression
    descending: bool = False


@dataclass(frozen=True)
class SetItem:
    """An assignment in SET: ``n.key = value``."""

    target: PropertyReference
    value: Expression
