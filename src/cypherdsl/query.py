"""
Query Model

The Query is the root container for a Cypher statement under
construction: an ordered list of clauses.

This is the ONLY place where structural decisions are made:
    - clause order (insertion order is render order)
    - merging of consecutive WHERE clauses
    - the "CYPHER <version>" prefix

It knows nothing about how an individual clause renders.

THREAD SAFETY:
    A Query has no internal locking. Use one builder thread per Query;
    branch with copy() to hand independent continuations to other threads.
"""

from io import StringIO
from typing import Iterator, List, Optional, TextIO, Tuple

import structlog

from cypherdsl import config
from cypherdsl.clauses import Clause, ClauseKind
from cypherdsl.validation import check_null

logger = structlog.get_logger(__name__)

QUERY_PREFIX = "CYPHER "


class Query:
    """
    Model for a Cypher query.

    Lifecycle:
        Created empty, grown only through add(). Rendering and copying
        never change it. There is a single "accumulating" stage; add(),
        as_string() and copy() may be interleaved freely.

    INVARIANTS:
        - Clauses are never reordered or deduplicated
        - The only structural rewrite is the WHERE merge in add()
        - Clause objects are immutable, so copies may share them
    """

    def __init__(self) -> None:
        self._clauses: List[Clause] = []

    @property
    def clauses(self) -> Tuple[Clause, ...]:
        """Read-only snapshot of the clause sequence."""
        return tuple(self._clauses)

    def add(self, clause: Clause) -> None:
        """
        Admit a clause at the end of the query.

        A WHERE clause that directly follows another WHERE clause is
        merged into it (conditions joined with AND) instead of being
        appended, so the clause count is unchanged. Only the last
        clause is considered: WHERE, MATCH, WHERE does not merge.

        Args:
            clause: Clause to admit

        Raises:
            InvalidArgumentError: if clause is None (query left untouched)
        """
        check_null(clause, "clause")

        # Only probe the tail when there is one
        if self._clauses and clause.kind is ClauseKind.WHERE:
            previous_where = self.last_clause(ClauseKind.WHERE)
            if previous_where is not None:
                self._clauses[-1] = previous_where.merged_with(clause)
                logger.debug(
                    "Merged consecutive WHERE clauses",
                    clause_count=len(self._clauses),
                )
                return

        self._clauses.append(clause)

    def last_clause(self, kind: ClauseKind) -> Optional[Clause]:
        """
        Return the last clause if it is of the given kind, else None.

        Only the tail is inspected; earlier clauses of the same kind are
        ignored.

        Raises:
            IndexError: if the query has no clauses
        """
        clause = self._clauses[-1]
        return clause if clause.kind is kind else None

    def as_string(self, builder: TextIO, cypher_version: Optional[str] = None) -> None:
        """
        Write the query text to ``builder``.

        Output is ``"CYPHER " + version`` followed by every clause's own
        text, in order. No separators are added here.

        Args:
            builder: Text sink with a ``write(str)`` method (e.g. StringIO)
            cypher_version: Version token; defaults to
                ``settings.DEFAULT_CYPHER_VERSION`` ("3.5")
        """
        if cypher_version is None:
            cypher_version = config.settings.DEFAULT_CYPHER_VERSION

        builder.write(QUERY_PREFIX)
        builder.write(cypher_version)

        for clause in self._clauses:
            clause.as_string(builder)

    def copy(self) -> "Query":
        """
        Duplicate the clause sequence for builder continuation.

        The new Query has its own list holding the same clause
        instances. Adding to either query afterwards does not affect
        the other.
        """
        duplicate = Query()
        duplicate._clauses = list(self._clauses)
        return duplicate

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(tuple(self._clauses))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Query):
            return NotImplemented
        return self._clauses == other._clauses

    __hash__ = None

    def __repr__(self) -> str:
        return f"Query(clauses={self._clauses!r})"

    def __str__(self) -> str:
        builder = StringIO()
        self.as_string(builder)
        return builder.getvalue()
