"""
Clause Objects

Each clause is one self-rendering fragment of a Cypher statement:
    - MATCH / OPTIONAL MATCH, CREATE, MERGE (patterns)
    - WHERE (a boolean condition)
    - WITH, RETURN, ORDER BY, SKIP, LIMIT (projection and paging)
    - SET, DELETE, UNWIND (updates and list expansion)

ARCHITECTURAL RULE:
    Clauses are immutable values (frozen dataclasses).
    The query core copies its clause list shallowly, so two queries
    branched from a common prefix may share clause instances.
    Nothing may edit a clause after it was created.

Every clause renders with a leading space so that the query core can
concatenate fragments without inserting separators of its own.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from io import StringIO
from typing import ClassVar, TextIO, Tuple

from cypherdsl.backends.cypher import (
    escape_name,
    join_rendered,
    render_expression,
    render_pattern,
    render_projection,
    render_set_item,
    render_sort_item,
)
from cypherdsl.expressions import (
    BinaryExpression,
    BinaryOperator,
    Expression,
    Identifier,
    Pattern,
    ProjectionItem,
    SetItem,
    SortItem,
)


class ClauseKind(Enum):
    """
    Tag identifying the kind of a clause.

    The query core discriminates clauses by this tag, never by
    inspecting their Python class.
    """
    MATCH = "match"
    WHERE = "where"
    WITH = "with"
    RETURN = "return"
    ORDER_BY = "order_by"
    SKIP = "skip"
    LIMIT = "limit"
    CREATE = "create"
    MERGE = "merge"
    SET = "set"
    DELETE = "delete"
    UNWIND = "unwind"


class Clause(ABC):
    """
    Base class for all clauses.

    Subclasses declare their ``kind`` and implement ``as_string``.
    """

    kind: ClassVar[ClauseKind]

    @abstractmethod
    def as_string(self, builder: TextIO) -> None:
        """Append this clause's text, starting with a space, to ``builder``."""

    def __str__(self) -> str:
        builder = StringIO()
        self.as_string(builder)
        return builder.getvalue()


@dataclass(frozen=True)
class MatchClause(Clause):
    """MATCH / OPTIONAL MATCH over one or more comma-separated patterns."""

    kind: ClassVar[ClauseKind] = ClauseKind.MATCH

    patterns: Tuple[Pattern, ...]
    optional: bool = False

    def as_string(self, builder: TextIO) -> None:
        builder.write(" OPTIONAL MATCH " if self.optional else " MATCH ")
        builder.write(join_rendered(self.patterns, render_pattern))


@dataclass(frozen=True)
class WhereClause(Clause):
    """
    WHERE <condition>.

    The only clause kind that merges: two consecutive WHERE clauses
    become one whose condition is the conjunction of both.
    """

    kind: ClassVar[ClauseKind] = ClauseKind.WHERE

    condition: Expression

    def merged_with(self, other: "WhereClause") -> "WhereClause":
        """
        Combine this clause with a following WHERE clause.

        Args:
            other: The WHERE clause admitted after this one

        Returns:
            A new WhereClause for ``self.condition AND other.condition``.
            Neither input is modified.
        """
        return WhereClause(
            BinaryExpression(
                operator=BinaryOperator.AND,
                left=self.condition,
                right=other.condition,
            )
        )

    def as_string(self, builder: TextIO) -> None:
        builder.write(" WHERE ")
        builder.write(render_expression(self.condition))


@dataclass(frozen=True)
class WithClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.WITH

    items: Tuple[ProjectionItem, ...]
    distinct: bool = False

    def as_string(self, builder: TextIO) -> None:
        builder.write(" WITH DISTINCT " if self.distinct else " WITH ")
        builder.write(join_rendered(self.items, render_projection))


@dataclass(frozen=True)
class ReturnClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.RETURN

    items: Tuple[ProjectionItem, ...]
    distinct: bool = False

    def as_string(self, builder: TextIO) -> None:
        builder.write(" RETURN DISTINCT " if self.distinct else " RETURN ")
        builder.write(join_rendered(self.items, render_projection))


@dataclass(frozen=True)
class OrderByClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.ORDER_BY

    items: Tuple[SortItem, ...]

    def as_string(self, builder: TextIO) -> None:
        builder.write(" ORDER BY ")
        builder.write(join_rendered(self.items, render_sort_item))


@dataclass(frozen=True)
class SkipClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.SKIP

    count: int

    def as_string(self, builder: TextIO) -> None:
        builder.write(f" SKIP {self.count}")


@dataclass(frozen=True)
class LimitClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.LIMIT

    count: int

    def as_string(self, builder: TextIO) -> None:
        builder.write(f" LIMIT {self.count}")


@dataclass(frozen=True)
class CreateClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.CREATE

    patterns: Tuple[Pattern, ...]

    def as_string(self, builder: TextIO) -> None:
        builder.write(" CREATE ")
        builder.write(join_rendered(self.patterns, render_pattern))


@dataclass(frozen=True)
class MergeClause(Clause):
    """MERGE takes exactly one pattern."""

    kind: ClassVar[ClauseKind] = ClauseKind.MERGE

    pattern: Pattern

    def as_string(self, builder: TextIO) -> None:
        builder.write(" MERGE ")
        builder.write(render_pattern(self.pattern))


@dataclass(frozen=True)
class SetClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.SET

    items: Tuple[SetItem, ...]

    def as_string(self, builder: TextIO) -> None:
        builder.write(" SET ")
        builder.write(join_rendered(self.items, render_set_item))


@dataclass(frozen=True)
class DeleteClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.DELETE

    identifiers: Tuple[Identifier, ...]
    detach: bool = False

    def as_string(self, builder: TextIO) -> None:
        builder.write(" DETACH DELETE " if self.detach else " DELETE ")
        builder.write(join_rendered(self.identifiers, render_expression))


@dataclass(frozen=True)
class UnwindClause(Clause):
    kind: ClassVar[ClauseKind] = ClauseKind.UNWIND

    expression: Expression
    alias: str

    def as_string(self, builder: TextIO) -> None:
        builder.write(f" UNWIND {render_expression(self.expression)} AS {escape_name(self.alias)}")


__all__ = [
    "ClauseKind",
    "Clause",
    "MatchClause",
    "WhereClause",
    "WithClause",
    "ReturnClause",
    "OrderByClause",
    "SkipClause",
    "LimitClause",
    "CreateClause",
    "MergeClause",
    "SetClause",
    "DeleteClause",
    "UnwindClause",
]
