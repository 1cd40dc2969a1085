"""
Cypher DSL Query Model Package

This is the in-memory model of a Cypher statement under construction.

ARCHITECTURAL GUARANTEE:
------------------------
The query core knows ONLY:
    - the ordered sequence of clauses
    - when consecutive WHERE clauses merge
    - the "CYPHER <version>" prefix

It contains ZERO knowledge of:
    - how an individual clause renders itself
    - database drivers or execution
    - parsing Cypher text back into objects

Clauses are built by the fluent layer (cypherdsl.builder),
rendered by the text backend (cypherdsl.backends.cypher).
"""

__version__ = "0.1.0"
