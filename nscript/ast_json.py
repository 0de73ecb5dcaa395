"""JSON serialization/deserialization for NScript nodes.

This module converts between NScript node dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for every node kind, positions included.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Node,
    Position,
    Number,
    String,
    Identifier,
    NoneValue,
    Operator,
    Eof,
    Bad,
    Binary,
    Unary,
    Assign,
    Call,
)


def pos_to_obj(pos: Position) -> Dict[str, int]:
    return {"start": pos.start, "end": pos.end}


def pos_from_obj(o: Dict[str, Any]) -> Position:
    return Position(o["start"], o["end"])


def ast_to_obj(node: Node) -> Dict[str, Any]:
    pos = pos_to_obj(node.pos)
    if isinstance(node, Number):
        return {"type": "Number", "value": node.value, "pos": pos}
    if isinstance(node, String):
        return {"type": "String", "value": node.value, "pos": pos}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name, "pos": pos}
    if isinstance(node, NoneValue):
        return {"type": "None", "pos": pos}
    if isinstance(node, Operator):
        return {"type": "Operator", "text": node.text, "pos": pos}
    if isinstance(node, Bad):
        return {"type": "Bad", "text": node.text, "pos": pos}
    if isinstance(node, Eof):
        return {"type": "Eof", "pos": pos}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "op": ast_to_obj(node.op),
            "right": ast_to_obj(node.right),
            "pos": pos,
        }
    if isinstance(node, Unary):
        return {"type": "Unary", "op": ast_to_obj(node.op), "operand": ast_to_obj(node.operand), "pos": pos}
    if isinstance(node, Assign):
        return {"type": "Assign", "target": ast_to_obj(node.target), "expr": ast_to_obj(node.expr), "pos": pos}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "name": ast_to_obj(node.name),
            "args": [ast_to_obj(a) for a in node.args],
            "pos": pos,
        }
    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(o: Dict[str, Any]) -> Node:
    t = o.get("type")
    pos = pos_from_obj(o["pos"])
    if t == "Number":
        return Number(float(o["value"]), pos)
    if t == "String":
        return String(o["value"], pos)
    if t == "Identifier":
        return Identifier(o["name"], pos)
    if t == "None":
        return NoneValue(pos)
    if t == "Operator":
        return Operator(o["text"], pos)
    if t == "Bad":
        return Bad(o["text"], pos)
    if t == "Eof":
        return Eof(pos)
    if t == "Binary":
        return Binary(ast_from_obj(o["left"]), ast_from_obj(o["op"]), ast_from_obj(o["right"]), pos)
    if t == "Unary":
        return Unary(ast_from_obj(o["op"]), ast_from_obj(o["operand"]), pos)
    if t == "Assign":
        return Assign(ast_from_obj(o["target"]), ast_from_obj(o["expr"]), pos)
    if t == "Call":
        return Call(ast_from_obj(o["name"]), tuple(ast_from_obj(a) for a in o["args"]), pos)
    raise ValueError(f"Unknown node type in JSON: {t}")
