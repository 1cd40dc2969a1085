#!/usr/bin/env python3
"""
Demo: Build Cypher queries with the fluent builder.

Shows WHERE merging, explicit versions, builder continuation
and a YAML round-trip.
"""

from cypherdsl.examples import (
    build_age_split_queries,
    build_friends_of_friends_query,
    build_order_write_query,
)
from cypherdsl.logging_utils import setup_logging
from cypherdsl.serialization import query_from_yaml, query_to_yaml


def main():
    setup_logging()

    print("=" * 80)
    print("CYPHER DSL DEMO")
    print("=" * 80)

    fof = build_friends_of_friends_query()
    print("\nREAD QUERY (three WHERE calls, one WHERE clause):")
    print("-" * 80)
    print(fof)
    print(fof.as_string("4.0"))

    print("\nWRITE QUERY:")
    print("-" * 80)
    print(build_order_write_query())

    print("\nBUILDER CONTINUATION:")
    print("-" * 80)
    adults, minors = build_age_split_queries()
    print(adults)
    print(minors)

    print("\nYAML ROUND-TRIP:")
    print("-" * 80)
    text = query_to_yaml(fof.query)
    print(text)
    restored = query_from_yaml(text)
    print("identical:", restored == fof.query)
    print("=" * 80)


if __name__ == "__main__":
    main()
