"""
Serialization helpers for Cypher DSL objects (Query, Clause, Expression).

Provides lossless JSON/YAML round-trip via intermediate dict representation,
so a partially built query can be saved to disk or sent over the wire.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List

import structlog
import yaml

from cypherdsl.clauses import (
    Clause,
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
    ProjectionItem,
    PropertyReference,
    RelationshipPattern,
    SetItem,
    SortItem,
    UnaryExpression,
    UnaryOperator,
)
from cypherdsl.query import Query

logger = structlog.get_logger(__name__)


def _literal_to_data(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_literal_to_data(v) for v in value]
    return value


def _literal_from_data(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_literal_from_data(v) for v in value)
    return value


def _properties_to_list(properties) -> List[Dict[str, Any]]:
    return [{"key": k, "value": expr_to_dict(v)} for k, v in properties]


def _properties_from_list(items) -> tuple:
    return tuple((p["key"], expr_from_dict(p["value"])) for p in items or [])


def expr_to_dict(expr: Expression | None) -> Any:
    if expr is None:
        return None
    if isinstance(expr, BinaryExpression):
        return {
            "type": "binary",
            "operator": expr.operator.value,
            "left": expr_to_dict(expr.left),
            "right": expr_to_dict(expr.right),
        }
    if isinstance(expr, UnaryExpression):
        return {
            "type": "unary",
            "operator": expr.operator.value,
            "operand": expr_to_dict(expr.operand),
        }
    if isinstance(expr, Identifier):
        return {"type": "id", "name": expr.name}
    if isinstance(expr, Literal):
        return {"type": "lit", "value": _literal_to_data(expr.value)}
    if isinstance(expr, Parameter):
        return {"type": "param", "name": expr.name}
    if isinstance(expr, PropertyReference):
        return {"type": "prop", "owner": expr_to_dict(expr.owner), "key": expr.key}
    if isinstance(expr, FunctionCall):
        return {
            "type": "fn",
            "name": expr.name,
            "arguments": [expr_to_dict(a) for a in expr.arguments],
            "distinct": expr.distinct,
        }
    if isinstance(expr, NodePattern):
        return {
            "type": "node",
            "variable": expr.variable,
            "labels": list(expr.labels),
            "properties": _properties_to_list(expr.properties),
        }
    if isinstance(expr, RelationshipPattern):
        return {
            "type": "rel",
            "variable": expr.variable,
            "types": list(expr.types),
            "direction": expr.direction.value,
            "properties": _properties_to_list(expr.properties),
        }
    if isinstance(expr, PathPattern):
        return {
            "type": "path",
            "name": expr.name,
            "start": expr_to_dict(expr.start),
            "steps": [
                {"relationship": expr_to_dict(rel), "node": expr_to_dict(node)}
                for rel, node in expr.steps
            ],
        }
    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def expr_from_dict(d: Any) -> Expression | None:
    if d is None:
        return None
    t = d.get("type")
    if t == "binary":
        op = BinaryOperator(d["operator"])
        return BinaryExpression(operator=op, left=expr_from_dict(d["left"]), right=expr_from_dict(d["right"]))
    if t == "unary":
        op = UnaryOperator(d["operator"])
        return UnaryExpression(operator=op, operand=expr_from_dict(d["operand"]))
    if t == "id":
        return Identifier(d["name"])
    if t == "lit":
        return Literal(_literal_from_data(d["value"]))
    if t == "param":
        return Parameter(d["name"])
    if t == "prop":
        return PropertyReference(expr_from_dict(d["owner"]), d["key"])
    if t == "fn":
        return FunctionCall(
            d["name"],
            tuple(expr_from_dict(a) for a in d.get("arguments", [])),
            d.get("distinct", False),
        )
    if t == "node":
        return NodePattern(
            variable=d.get("variable"),
            labels=tuple(d.get("labels", [])),
            properties=_properties_from_list(d.get("properties")),
        )
    if t == "rel":
        return RelationshipPattern(
            variable=d.get("variable"),
            types=tuple(d.get("types", [])),
            direction=Direction(d.get("direction", Direction.OUTGOING.value)),
            properties=_properties_from_list(d.get("properties")),
        )
    if t == "path":
        return PathPattern(
            start=expr_from_dict(d["start"]),
            steps=tuple(
                (expr_from_dict(s["relationship"]), expr_from_dict(s["node"]))
                for s in d.get("steps", [])
            ),
            name=d.get("name"),
        )
    raise TypeError(f"Unsupported expression dict type: {t}")


def projection_to_dict(item: ProjectionItem) -> Dict[str, Any]:
    return {"expression": expr_to_dict(item.expression), "alias": item.alias}


def projection_from_dict(d: Dict[str, Any]) -> ProjectionItem:
    return ProjectionItem(expr_from_dict(d["expression"]), d.get("alias"))


def sort_item_to_dict(item: SortItem) -> Dict[str, Any]:
    return {"expression": expr_to_dict(item.expression), "descending": item.descending}


def sort_item_from_dict(d: Dict[str, Any]) -> SortItem:
    return SortItem(expr_from_dict(d["expression"]), d.get("descending", False))


def set_item_to_dict(item: SetItem) -> Dict[str, Any]:
    return {"target": expr_to_dict(item.target), "value": expr_to_dict(item.value)}


def set_item_from_dict(d: Dict[str, Any]) -> SetItem:
    return SetItem(expr_from_dict(d["target"]), expr_from_dict(d["value"]))


def clause_to_dict(c: Clause) -> Dict[str, Any]:
    data: Dict[str, Any] = {"kind": c.kind.value}
    if isinstance(c, MatchClause):
        data["patterns"] = [expr_to_dict(p) for p in c.patterns]
        data["optional"] = c.optional
    elif isinstance(c, WhereClause):
        data["condition"] = expr_to_dict(c.condition)
    elif isinstance(c, (WithClause, ReturnClause)):
        data["items"] = [projection_to_dict(i) for i in c.items]
        data["distinct"] = c.distinct
    elif isinstance(c, OrderByClause):
        data["items"] = [sort_item_to_dict(i) for i in c.items]
    elif isinstance(c, (SkipClause, LimitClause)):
        data["count"] = c.count
    elif isinstance(c, CreateClause):
        data["patterns"] = [expr_to_dict(p) for p in c.patterns]
    elif isinstance(c, MergeClause):
        data["pattern"] = expr_to_dict(c.pattern)
    elif isinstance(c, SetClause):
        data["items"] = [set_item_to_dict(i) for i in c.items]
    elif isinstance(c, DeleteClause):
        data["identifiers"] = [expr_to_dict(i) for i in c.identifiers]
        data["detach"] = c.detach
    elif isinstance(c, UnwindClause):
        data["expression"] = expr_to_dict(c.expression)
        data["alias"] = c.alias
    else:
        raise TypeError(f"Unsupported Clause type: {type(c)}")
    return data


def clause_from_dict(d: Dict[str, Any]) -> Clause:
    kind = d.get("kind")
    if kind == "match":
        return MatchClause(tuple(expr_from_dict(p) for p in d["patterns"]), d.get("optional", False))
    if kind == "where":
        return WhereClause(expr_from_dict(d["condition"]))
    if kind == "with":
        return WithClause(tuple(projection_from_dict(i) for i in d["items"]), d.get("distinct", False))
    if kind == "return":
        return ReturnClause(tuple(projection_from_dict(i) for i in d["items"]), d.get("distinct", False))
    if kind == "order_by":
        return OrderByClause(tuple(sort_item_from_dict(i) for i in d["items"]))
    if kind == "skip":
        return SkipClause(d["count"])
    if kind == "limit":
        return LimitClause(d["count"])
    if kind == "create":
        return CreateClause(tuple(expr_from_dict(p) for p in d["patterns"]))
    if kind == "merge":
        return MergeClause(expr_from_dict(d["pattern"]))
    if kind == "set":
        return SetClause(tuple(set_item_from_dict(i) for i in d["items"]))
    if kind == "delete":
        return DeleteClause(tuple(expr_from_dict(i) for i in d["identifiers"]), d.get("detach", False))
    if kind == "unwind":
        return UnwindClause(expr_from_dict(d["expression"]), d["alias"])
    raise TypeError(f"Unsupported clause dict kind: {kind}")


def query_to_dict(q: Query) -> Dict[str, Any]:
    return {"clauses": [clause_to_dict(c) for c in q.clauses]}


def query_from_dict(d: Dict[str, Any]) -> Query:
    q = Query()
    for clause_data in d.get("clauses", []):
        q.add(clause_from_dict(clause_data))
    logger.debug("Restored query from dict", clause_count=len(q))
    return q


def query_to_json(q: Query) -> str:
    return json.dumps(query_to_dict(q), sort_keys=True)


def query_from_json(s: str) -> Query:
    d = json.loads(s)
    return query_from_dict(d)


def query_to_yaml(q: Query) -> str:
    return yaml.safe_dump(query_to_dict(q))


def query_from_yaml(s: str) -> Query:
    d = yaml.safe_load(s)
    return query_from_dict(d)
