"""Runtime helpers for NScript values.

This module defines the error value carried by `NScriptError`, the kind
names used in diagnostics, and the canonical textual rendering of nodes
used by `print` and by the CLI to echo results.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any
import math

from .ast import (
    Node, Position, Number, String, Identifier, NoneValue, Operator, Eof,
    Bad, Binary, Unary, Assign, Call,
)
from .escapes import encode_escapes


@dataclass(frozen=True)
class ErrorVal:
    """Represents an NScript error.

    `name` is the error category (`LexError`, `ParseError`, `TypeError`,
    ...), `message` the composed text and `pos` the offending source range.
    """
    name: str
    message: str
    pos: Position

    @classmethod
    def of(cls, name: str, pos: Position, *fragments: Any) -> 'ErrorVal':
        """Build an error whose message is the concatenation of `fragments`."""
        return cls(name, ''.join(str(f) for f in fragments), pos)

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r}, pos={self.pos.start}..{self.pos.end})"


def type_name(node: Node) -> str:
    """Return the kind name of a node as shown in error messages."""
    if isinstance(node, Operator):
        return node.text
    return node.kind


def format_number(value: float) -> str:
    """Render a number in its shortest plain decimal form.

    `3.0` becomes `3`, `3.50` becomes `3.5` and `1e20` is spelled out, so
    that the result always tokenizes back to the same value.
    """
    if math.isnan(value):
        return 'nan'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def to_string(node: Node) -> str:
    """Convert a node to its canonical textual form."""
    if isinstance(node, Number):
        return format_number(node.value)
    if isinstance(node, String):
        return "'" + encode_escapes(node.value) + "'"
    if isinstance(node, Binary):
        return f"{to_string(node.left)} {node.op.text} {to_string(node.right)}"
    if isinstance(node, Unary):
        return node.op.text + to_string(node.operand)
    if isinstance(node, Assign):
        return f"{to_string(node.target)} = {to_string(node.expr)}"
    if isinstance(node, Call):
        return to_string(node.name) + '(' + ', '.join(to_string(a) for a in node.args) + ')'
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, (Operator, Bad)):
        return node.text
    if isinstance(node, NoneValue):
        return 'none'
    if isinstance(node, Eof):
        return '<eof>'
    raise TypeError(f"cannot render {type(node).__name__}")
