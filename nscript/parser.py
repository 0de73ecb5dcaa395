"""Recursive-descent parser for NScript.

Grammar, from lowest to highest precedence::

    expression     := additive
    additive       := multiplicative (('+' | '-') multiplicative)*
    multiplicative := term (('*' | '/') term)*
    term           := ('+' | '-') term
                    | Identifier | Number | String | None
                    | '(' expression ')'
    term           := term postfix?
    postfix        := '(' argList ')'        # call
                    | '=' expression         # assignment
    argList        := (expression (',' expression)*)?

The parser keeps a single token of lookahead (`current`) pulled from the
lexer on demand, plus the token consumed last (`previous`). One source
string holds exactly one statement, so anything left over after the root
expression is reported as an unexpected token.

Nesting is bounded by `max_depth` in two ways. Each nested term
(parentheses, unary chains, assignment and call operands) counts one level
of parser recursion, and no node may be taller than the limit (a leaf has
height 1, any other node one more than its tallest child), because
evaluation and rendering recurse once per level of the tree. Going past
either bound raises a `ParseError` rather than letting deep input exhaust
the interpreter stack. `max_depth` itself may not exceed
`max_nesting_limit()`, which follows the Python recursion limit.
"""

from __future__ import annotations

import sys
from typing import Callable, FrozenSet, List

from .ast import (
    Node, Position, Number, String, Identifier, NoneValue, Operator, Eof,
    Binary, Unary, Assign, Call,
)
from .errors import NScriptError, PARSE_ERROR
from .lexer import Lexer
from .types import ErrorVal, to_string

MAX_NESTING_DEPTH = 100

# one parenthesis level costs about 7 parser frames
FRAMES_PER_LEVEL = 8
RESERVED_FRAMES = 200


def max_nesting_limit() -> int:
    """Largest `max_depth` the current Python recursion limit can serve."""
    return (sys.getrecursionlimit() - RESERVED_FRAMES) // FRAMES_PER_LEVEL


def check_max_depth(max_depth: int) -> int:
    limit = max_nesting_limit()
    if not 1 <= max_depth <= limit:
        raise ValueError(f"max_depth must be between 1 and {limit} (got {max_depth})")
    return max_depth


class Parser:
    def __init__(self, source: str, max_depth: int = MAX_NESTING_DEPTH):
        self.source = source
        self.lexer = Lexer(source)
        self.max_depth = check_max_depth(max_depth)
        self.depth = 0
        # height of the node built last
        self.height = 0
        self.previous: Node = Eof(Position(0, 0))
        self.current: Node = self.lexer.next_token()

    # Token helpers
    def advance(self) -> Node:
        self.previous = self.current
        self.current = self.lexer.next_token()
        return self.previous

    def match(self, *texts: str) -> bool:
        return isinstance(self.current, Operator) and self.current.text in texts

    def at_eof(self) -> bool:
        return isinstance(self.current, Eof)

    def expect(self, text: str) -> Operator:
        if not self.match(text):
            raise self.error(self.current.pos, 'expected `', text, '` (found `', to_string(self.current), '`)')
        return self.advance()

    def error(self, pos: Position, *fragments) -> NScriptError:
        return NScriptError(ErrorVal.of(PARSE_ERROR, pos, *fragments))

    def too_deep(self, pos: Position) -> NScriptError:
        return self.error(pos, 'expression is nested too deeply (limit ', self.max_depth, ')')

    def enter(self, pos: Position):
        if self.depth + 1 > self.max_depth:
            raise self.too_deep(pos)

    def measure(self, node: Node, *child_heights: int) -> Node:
        self.height = 1 + max(child_heights, default=0)
        if self.height > self.max_depth:
            raise self.too_deep(node.pos)
        return node

    # Entry point
    def parse(self) -> Node:
        root = self.parse_expression()
        if not self.at_eof():
            raise self.error(self.current.pos, 'unexpected token (found `', to_string(self.current), '`)')
        return root

    # Expressions
    def parse_expression(self) -> Node:
        return self.parse_additive()

    def parse_additive(self) -> Node:
        return self.parse_binary(self.parse_multiplicative, frozenset('+-'))

    def parse_multiplicative(self) -> Node:
        return self.parse_binary(self.parse_term, frozenset('*/'))

    def parse_binary(self, operand: Callable[[], Node], operators: FrozenSet[str]) -> Node:
        left = operand()
        # folding to the left keeps `a - b - c` as `(a - b) - c`
        while not self.at_eof() and self.match(*operators):
            left_height = self.height
            op = self.advance()
            right = operand()
            left = self.measure(Binary(left, op, right, left.pos.span(right.pos)), left_height, self.height)
        return left

    def parse_term(self) -> Node:
        self.enter(self.current.pos)
        self.depth += 1
        try:
            term = self.parse_prefix()
            if self.match('('):
                term = self.parse_call(term)
            elif self.match('='):
                term = self.parse_assign(term)
            return term
        finally:
            self.depth -= 1

    def parse_prefix(self) -> Node:
        token = self.advance()
        if isinstance(token, (Identifier, Number, String, NoneValue)):
            return self.measure(token)
        if isinstance(token, Operator) and token.text in ('+', '-'):
            operand = self.parse_term()
            return self.measure(Unary(token, operand, token.pos.span(operand.pos)), self.height)
        if isinstance(token, Operator) and token.text == '(':
            # parentheses group without adding a node
            expr = self.parse_expression()
            self.expect(')')
            return expr
        raise self.error(token.pos, 'unexpected token (found `', to_string(token), '`)')

    def parse_assign(self, target: Node) -> Assign:
        if not isinstance(target, Identifier):
            raise self.error(target.pos, 'expected an identifier when assigning')
        # eating `=`
        self.advance()
        expr = self.parse_expression()
        return self.measure(Assign(target, expr, target.pos.span(expr.pos)), 1, self.height)

    def parse_call(self, name: Node) -> Call:
        if not isinstance(name, (Identifier, String)):
            raise self.error(name.pos, 'expected string or identifier call name')
        start = self.current.pos.start
        args: List[Node] = []
        heights = [1]
        # eating `(`
        self.advance()
        while True:
            if self.at_eof():
                raise self.error(Position(start, self.previous.pos.end), 'unclosed call parameters list')
            if self.match(')'):
                self.advance()
                return self.measure(Call(name, tuple(args), name.pos.span(self.previous.pos)), *heights)
            if args:
                self.expect(',')
            args.append(self.parse_expression())
            heights.append(self.height)


def parse(source: str, max_depth: int = MAX_NESTING_DEPTH) -> Node:
    """Parse one NScript statement into its syntax tree."""
    return Parser(source, max_depth).parse()
