"""
Cypher text backend.

Converts expression, pattern and item ASTs into Cypher text.
Clauses call into this module from their own ``as_string``; the
query core never does.

Operands are parenthesized only where precedence requires it:
    OR < XOR < AND < NOT < comparisons < IS [NOT] NULL < atoms
"""

import re
from typing import Dict, Sequence

from cypherdsl.expressions import (
    LOGICAL_OPERATORS,
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
    Properties,
    PropertyReference,
    RelationshipPattern,
    SetItem,
    SortItem,
    UnaryExpression,
    UnaryOperator,
)

_PLAIN_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_ATOM_PRECEDENCE = 10
_POSTFIX_PRECEDENCE = 6
_COMPARISON_PRECEDENCE = 5
_NOT_PRECEDENCE = 4

_LOGICAL_PRECEDENCE: Dict[BinaryOperator, int] = {
    BinaryOperator.OR: 1,
    BinaryOperator.XOR: 2,
    BinaryOperator.AND: 3,
}


def escape_name(name: str) -> str:
    """Back-quote a variable, label, type or key unless it is a plain name."""
    if _PLAIN_NAME.match(name):
        return name
    return "`" + name.replace("`", "``") + "`"


def _escape_string(value: str) -> str:
    # Backslashes first
    value = value.replace("\\", "\\\\")
    value = value.replace("'", "\\'")
    return f"'{value}'"


def render_literal(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return _escape_string(value)
    if isinstance(value, (tuple, list)):
        return "[" + ", ".join(render_literal(v) for v in value) + "]"
    raise TypeError(f"Unsupported literal value: {value!r}")


def _precedence(expr: Expression) -> int:
    if isinstance(expr, BinaryExpression):
        return _LOGICAL_PRECEDENCE.get(expr.operator, _COMPARISON_PRECEDENCE)
    if isinstance(expr, UnaryExpression):
        if expr.operator == UnaryOperator.NOT:
            return _NOT_PRECEDENCE
        return _POSTFIX_PRECEDENCE
    return _ATOM_PRECEDENCE


def _binary_operand(child: Expression, parent: BinaryExpression) -> str:
    text = render_expression(child)
    child_prec = _precedence(child)
    parent_prec = _precedence(parent)
    if child_prec < parent_prec:
        return f"({text})"
    if child_prec == parent_prec:
        # a AND b AND c stays flat; a = b = c does not
        same_chain = (
            isinstance(child, BinaryExpression)
            and child.operator == parent.operator
            and parent.operator in LOGICAL_OPERATORS
        )
        if not same_chain:
            return f"({text})"
    return text


def _render_properties(properties: Properties) -> str:
    if not properties:
        return ""
    pairs = ", ".join(f"{escape_name(k)}: {render_expression(v)}" for k, v in properties)
    return " {" + pairs + "}"


def _render_node(node: NodePattern) -> str:
    inner = escape_name(node.variable) if node.variable else ""
    inner += "".join(f":{escape_name(label)}" for label in node.labels)
    props = _render_properties(node.properties)
    if not inner:
        props = props.lstrip()
    return f"({inner}{props})"


def _render_relationship(rel: RelationshipPattern) -> str:
    inner = escape_name(rel.variable) if rel.variable else ""
    if rel.types:
        inner += ":" + "|".join(escape_name(t) for t in rel.types)
    props = _render_properties(rel.properties)
    if not inner:
        props = props.lstrip()
    body = f"[{inner}{props}]" if inner or props else ""

    if rel.direction == Direction.OUTGOING:
        return f"-{body}->"
    if rel.direction == Direction.INCOMING:
        return f"<-{body}-"
    return f"-{body}-"


def _render_path(path: PathPattern) -> str:
    text = _render_node(path.start)
    for rel, node in path.steps:
        text += _render_relationship(rel) + _render_node(node)
    if path.name:
        return f"{escape_name(path.name)} = {text}"
    return text


def render_expression(expr: Expression) -> str:
    """
    Render any expression or pattern as Cypher text.

    Args:
        expr: Expression AST node

    Returns:
        Cypher text for the expression

    Raises:
        TypeError: for node types this backend does not know
    """
    if isinstance(expr, BinaryExpression):
        left = _binary_operand(expr.left, expr)
        right = _binary_operand(expr.right, expr)
        return f"{left} {expr.operator.value} {right}"

    elif isinstance(expr, UnaryExpression):
        operand = render_expression(expr.operand)
        if _precedence(expr.operand) < _precedence(expr):
            operand = f"({operand})"
        if expr.operator == UnaryOperator.NOT:
            return f"NOT {operand}"
        return f"{operand} {expr.operator.value}"

    elif isinstance(expr, Identifier):
        return escape_name(expr.name)

    elif isinstance(expr, Literal):
        return render_literal(expr.value)

    elif isinstance(expr, Parameter):
        return f"${escape_name(expr.name)}"

    elif isinstance(expr, PropertyReference):
        owner = render_expression(expr.owner)
        if _precedence(expr.owner) < _ATOM_PRECEDENCE:
            owner = f"({owner})"
        return f"{owner}.{escape_name(expr.key)}"

    elif isinstance(expr, FunctionCall):
        args = ", ".join(render_expression(a) for a in expr.arguments)
        if expr.distinct:
            args = f"DISTINCT {args}"
        return f"{expr.name}({args})"

    elif isinstance(expr, NodePattern):
        return _render_node(expr)

    elif isinstance(expr, RelationshipPattern):
        return _render_relationship(expr)

    elif isinstance(expr, PathPattern):
        return _render_path(expr)

    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def render_pattern(pattern: Expression) -> str:
    """Render a node or path pattern (MATCH/CREATE/MERGE operand)."""
    if not isinstance(pattern, (NodePattern, PathPattern)):
        raise TypeError(f"Unsupported pattern type: {type(pattern)}")
    return render_expression(pattern)


def render_projection(item: ProjectionItem) -> str:
    text = render_expression(item.expression)
    if item.alias:
        return f"{text} AS {escape_name(item.alias)}"
    return text


def render_sort_item(item: SortItem) -> str:
    text = render_expression(item.expression)
    return f"{text} DESC" if item.descending else text


def render_set_item(item: SetItem) -> str:
    return f"{render_expression(item.target)} = {render_expression(item.value)}"


def join_rendered(items: Sequence, render) -> str:
    """Render each item and join with ", "."""
    return ", ".join(render(item) for item in items)


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
