"""Node definitions for the NScript language.

A single family of frozen dataclasses serves two roles: the tokens the
lexer hands to the parser and the nodes of the syntax tree the parser
hands to the interpreter. Every node carries a `Position` so that any
error raised while tokenizing, parsing or evaluating can point back at
the source text it came from.

Composite nodes (`Binary`, `Unary`, `Assign`, `Call`) own their children.
Since nodes are immutable and call arguments are stored as tuples, a
subtree can never be shared or mutated after construction, and a value
stored in the environment is a snapshot rather than a live reference.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple


@dataclass(frozen=True)
class Position:
    """Half-open `[start, end)` offset range into the source string."""
    start: int
    end: int

    def span(self, other: 'Position') -> 'Position':
        return Position(self.start, other.end)

    def text(self, source: str) -> str:
        return source[self.start:self.end]


@dataclass(frozen=True)
class Node:
    """Base class for all tokens and syntax tree nodes."""
    kind: ClassVar[str] = 'Node'


@dataclass(frozen=True)
class Number(Node):
    value: float
    pos: Position
    kind: ClassVar[str] = 'Number'


@dataclass(frozen=True)
class String(Node):
    value: str  # decoded text
    pos: Position
    kind: ClassVar[str] = 'String'


@dataclass(frozen=True)
class Identifier(Node):
    name: str
    pos: Position
    kind: ClassVar[str] = 'Identifier'


@dataclass(frozen=True)
class NoneValue(Node):
    pos: Position
    kind: ClassVar[str] = 'None'


@dataclass(frozen=True)
class Operator(Node):
    """One-character token: `+ - * / ( ) , =`."""
    text: str
    pos: Position
    kind: ClassVar[str] = 'Operator'


@dataclass(frozen=True)
class Eof(Node):
    pos: Position
    kind: ClassVar[str] = 'Eof'


@dataclass(frozen=True)
class Bad(Node):
    text: str
    pos: Position
    kind: ClassVar[str] = 'Bad'


@dataclass(frozen=True)
class Binary(Node):
    left: Node
    op: Operator
    right: Node
    pos: Position
    kind: ClassVar[str] = 'Binary'


@dataclass(frozen=True)
class Unary(Node):
    op: Operator
    operand: Node
    pos: Position
    kind: ClassVar[str] = 'Unary'


@dataclass(frozen=True)
class Assign(Node):
    target: Identifier
    expr: Node
    pos: Position
    kind: ClassVar[str] = 'Assign'


@dataclass(frozen=True)
class Call(Node):
    name: Node  # Identifier or String
    args: Tuple[Node, ...]
    pos: Position
    kind: ClassVar[str] = 'Call'


OPERATOR_CHARS = frozenset('+-*/(),=')
BINARY_OPERATORS = frozenset('+-*/')
UNARY_OPERATORS = frozenset('+-')
