"""Backends for Cypher DSL output generation."""

from .cypher import (
    escape_name,
    join_rendered,
    render_expression,
    render_literal,
    render_pattern,
    render_projection,
    render_set_item,
    render_sort_item,
)

__all__ = [
    "escape_name",
    "render_literal",
    "render_expression",
    "render_pattern",
    "render_projection",
    "render_sort_item",
    "render_set_item",
    "join_rendered",
]
