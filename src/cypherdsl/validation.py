"""
Argument guards for the fluent builder layer.

Every check has a fixed-shape signature: a single value, or a
sequence of values, plus the argument name used in the message.
Failures raise InvalidArgumentError at the offending call, before
anything is added to the query.
"""

import math
from typing import Any, Optional, Sequence

from cypherdsl.expressions import Expression, Literal, NodePattern, PathPattern


class InvalidArgumentError(ValueError):
    """Raised when a builder argument is null, empty or of the wrong type."""
    pass


def is_empty(string: Optional[str]) -> bool:
    return string is None or len(string) == 0


def check_null(value: Any, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} may not be null")


def check_no_nulls(values: Optional[Sequence[Any]], name: str) -> None:
    """Reject a missing sequence, or one holding a None element."""
    check_null(values, name)
    for value in values:
        if value is None:
            raise InvalidArgumentError(f"{name} may not be null")


def check_empty(string: Optional[str], name: str) -> None:
    if is_empty(string):
        raise InvalidArgumentError(f"{name} may not be null or empty string")


def check_empty_strings(strings: Optional[Sequence[Optional[str]]], name: str) -> None:
    check_null(strings, name)
    for string in strings:
        check_empty(string, name)


def check_empty_expression(expression: Optional[Expression], name: str) -> None:
    """
    Reject None, and literals whose text is empty (``Literal("")``).

    Any other expression is accepted as-is.
    """
    check_null(expression, name)
    if isinstance(expression, Literal) and isinstance(expression.value, str) and not expression.value:
        raise InvalidArgumentError(f"{name} may not be null or empty string")


def check_expression(value: Any, name: str) -> None:
    check_null(value, name)
    if not isinstance(value, Expression):
        raise InvalidArgumentError(f"{name} must be an expression, got {type(value).__name__}")


def check_pattern(value: Any, name: str) -> None:
    """Accept only node and path patterns (MATCH/CREATE/MERGE operands)."""
    check_null(value, name)
    if not isinstance(value, (NodePattern, PathPattern)):
        raise InvalidArgumentError(f"{name} must be a node or path pattern, got {type(value).__name__}")


def check_literal_value(value: Any, name: str) -> None:
    """
    Accept None, bool, int, finite float, str, and lists/tuples of those.

    NaN and infinity have no Cypher literal form.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidArgumentError(f"{name} must be a finite number")
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            check_literal_value(item, name)
        return
    raise InvalidArgumentError(f"{name} has unsupported literal type {type(value).__name__}")
