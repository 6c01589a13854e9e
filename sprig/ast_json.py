"""JSON serialization/deserialization for the Sprig AST.

This module converts between Sprig AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node becomes a
dict with a ``"type"`` key naming its class plus one key per field;
child tuples become lists. The conversion round-trips for every node
type.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, List

from . import ast
from .ast import Node, Statement

NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls
    for cls in vars(ast).values()
    if isinstance(cls, type) and issubclass(cls, Node) and cls not in (Node, ast.Statement, ast.Expression)
}


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (bool, int, float, str)):
        return node
    if isinstance(node, (list, tuple)):
        return [ast_to_obj(item) for item in node]
    if isinstance(node, Node):
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj
    raise TypeError(f"cannot serialize {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, list):
        return tuple(ast_from_obj(item) for item in obj)
    if isinstance(obj, dict):
        type_name = obj.get("type")
        cls = NODE_TYPES.get(type_name)
        if cls is None:
            raise ValueError(f"unknown AST node type {type_name!r}")
        kwargs = {f.name: ast_from_obj(obj.get(f.name)) for f in fields(cls)}
        if cls is ast.Number:
            # JSON may give back an int for a whole number
            kwargs["value"] = float(kwargs["value"])
        return cls(**kwargs)
    raise ValueError(f"cannot deserialize {obj!r}")


def program_to_obj(statements: List[Statement]) -> List[Any]:
    return [ast_to_obj(stmt) for stmt in statements]


def program_from_obj(data: List[Any]) -> List[Statement]:
    if not isinstance(data, list):
        raise ValueError("AST JSON must be a list of statements")
    return [ast_from_obj(item) for item in data]
