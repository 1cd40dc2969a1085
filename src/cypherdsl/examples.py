"""
Example queries for demos and tests.

Builds a friends-of-friends read query, a create/merge write query,
and shows builder continuation by branching one base query in two.
"""
from typing import Tuple

from cypherdsl.builder import (
    CypherQuery,
    alias,
    assign,
    desc,
    eq,
    fn,
    gte,
    identifier,
    lt,
    ne,
    node,
    param,
    path,
    prop,
    relationship,
)


def build_friends_of_friends_query(min_age: int = 18, limit: int = 10) -> CypherQuery:
    knows = relationship(None, "KNOWS")
    pattern = path(
        node("me", "Person"),
        (knows, node("friend", "Person")),
        (knows, node("fof", "Person")),
    )

    return (
        CypherQuery()
        .match(pattern)
        .where(eq(prop("me", "name"), param("name")))
        .where(ne(identifier("fof"), identifier("me")))
        .where(gte(prop("fof", "age"), min_age))
        .returns(
            alias(prop("fof", "name"), "name"),
            alias(fn("count", identifier("friend"), distinct=True), "mutual"),
        )
        .order_by(desc(identifier("mutual")))
        .limit(limit)
    )


def build_order_write_query() -> CypherQuery:
    return (
        CypherQuery()
        .merge(node("c", "Customer", email=param("email")))
        .create(
            path(
                node("c"),
                (relationship(None, "PLACED"), node("o", "Order", id=param("order_id"))),
            )
        )
        .set(assign(prop("o", "total"), param("total")), assign(prop("o", "status"), "new"))
        .returns(identifier("o"))
    )


def build_age_split_queries(threshold: int = 18) -> Tuple[CypherQuery, CypherQuery]:
    """Branch one MATCH into an adults query and a minors query."""
    base = CypherQuery().match(node("p", "Person"))

    adults = base.copy().where(gte(prop("p", "age"), threshold)).returns(identifier("p"))
    minors = base.copy().where(lt(prop("p", "age"), threshold)).returns(identifier("p"))
    return adults, minors
