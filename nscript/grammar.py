"""Lark grammar for NScript.

This module describes the well-formed part of the language as a Lark
LALR grammar and transforms the resulting parse tree into the same
`Node` dataclasses (positions included) that the hand-written parser in
`nscript.parser` produces. It serves as an independent front end: the
test-suite parses the same statements with both and expects identical
trees.

The grammar is slightly narrower than the recursive-descent parser: an
assignment may only appear as a whole statement or as a whole
parenthesized / argument expression, never as the right operand of a
binary operator, and postfix calls only apply to bare names.
"""

from __future__ import annotations

from typing import Any, List

from lark import Lark, Transformer, Token
from lark.exceptions import UnexpectedInput, VisitError

from .ast import (
    Node, Position, Number, String, Identifier, NoneValue, Operator,
    Binary, Unary, Assign, Call,
)
from .errors import NScriptError, PARSE_ERROR
from .escapes import decode_escapes
from .types import ErrorVal


NSCRIPT_GRAMMAR = r"""
    ?start: expression

    ?expression: assign
               | additive

    assign: IDENTIFIER "=" expression

    ?additive: multiplicative
             | additive ADD_OP multiplicative -> binary

    ?multiplicative: unary
                   | multiplicative MUL_OP unary -> binary

    ?unary: ADD_OP unary
          | atom

    ?atom: IDENTIFIER -> identifier
         | NUMBER -> number
         | STRING -> string
         | call
         | "(" expression ")" -> group

    call: callee "(" [arguments] RPAR
    ?callee: IDENTIFIER -> identifier
           | STRING -> string
    arguments: expression ("," expression)*

    // Tokens
    ADD_OP: "+" | "-"
    MUL_OP: "*" | "/"
    RPAR: ")"
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /[0-9]+(\.[0-9]+)?|\.[0-9]+/
    STRING: /'(\\.|[^'\\])*'/s

    %import common.WS
    %ignore WS
"""


NSCRIPT_PARSER = Lark(
    NSCRIPT_GRAMMAR,
    parser='lalr',
    maybe_placeholders=False,
)


def token_pos(token: Token) -> Position:
    return Position(token.start_pos, token.end_pos)


class NodeTransformer(Transformer):
    """Transforms the raw parse tree into NScript nodes."""

    def identifier(self, items):
        token = items[0]
        if str(token) == 'none':
            return NoneValue(token_pos(token))
        return Identifier(str(token), token_pos(token))

    def number(self, items):
        token = items[0]
        return Number(float(token), token_pos(token))

    def string(self, items):
        token = items[0]
        return String(decode_escapes(str(token)[1:-1], token.start_pos + 1), token_pos(token))

    def group(self, items):
        return items[0]

    def unary(self, items):
        op = Operator(str(items[0]), token_pos(items[0]))
        operand = items[1]
        return Unary(op, operand, op.pos.span(operand.pos))

    def binary(self, items):
        left, op_token, right = items
        op = Operator(str(op_token), token_pos(op_token))
        return Binary(left, op, right, left.pos.span(right.pos))

    def assign(self, items):
        name, expr = items
        target = Identifier(str(name), token_pos(name))
        return Assign(target, expr, target.pos.span(expr.pos))

    def arguments(self, items):
        return list(items)

    def call(self, items):
        name = items[0]
        if isinstance(name, NoneValue):
            raise NScriptError(ErrorVal.of(PARSE_ERROR, name.pos, 'expected string or identifier call name'))
        rpar = items[-1]
        args: List[Node] = items[1] if len(items) == 3 else []
        return Call(name, tuple(args), name.pos.span(token_pos(rpar)))


def parse_with_lark(source: str) -> Node:
    """Parse one NScript statement with the Lark grammar."""
    try:
        tree = NSCRIPT_PARSER.parse(source)
    except UnexpectedInput as e:
        offset: Any = getattr(e, 'pos_in_stream', None)
        if offset is None or offset < 0:
            offset = len(source)
        raise NScriptError(ErrorVal.of(PARSE_ERROR, Position(offset, offset + 1), 'syntax error: ', e))
    try:
        return NodeTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, NScriptError):
            raise e.orig_exc from None
        raise
