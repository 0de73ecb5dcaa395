"""Tokenizer for the NScript language.

The lexer is pull-based: the parser asks for one token at a time through
`Lexer.next_token`, and nothing beyond the requested token is scanned.
Tokens are ordinary `Node` instances (see `nscript.ast`). Once the source
is exhausted every further request returns an `Eof` token.
"""

from __future__ import annotations

import math
from typing import Iterator, List

from .ast import (
    Node, Position, Number, String, Identifier, NoneValue, Operator, Eof,
    Bad, OPERATOR_CHARS,
)
from .errors import NScriptError, LEX_ERROR, NUMBER_FORMAT_ERROR
from .escapes import decode_escapes
from .types import ErrorVal

DIGITS = '0123456789'
KEYWORDS = {'none': NoneValue}


def is_digit(c: str) -> bool:
    return c != '' and c in DIGITS


def is_identifier_char(c: str, first: bool) -> bool:
    if c.isalpha() or c == '_':
        return True
    return not first and is_digit(c)


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.index = 0

    def __iter__(self) -> Iterator[Node]:
        while True:
            token = self.next_token()
            yield token
            if isinstance(token, Eof):
                return

    def eof(self, offset: int = 0) -> bool:
        return self.index + offset >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        if self.eof(offset):
            return ''
        return self.source[self.index + offset]

    def skip_whitespace(self):
        while not self.eof() and self.source[self.index].isspace():
            self.index += 1

    def next_token(self) -> Node:
        self.skip_whitespace()
        if self.eof():
            return Eof(Position(len(self.source), len(self.source)))
        c = self.peek()
        if is_identifier_char(c, True):
            return self.read_identifier()
        if is_digit(c) or (c == '.' and is_digit(self.peek(1))):
            return self.read_number()
        if c == "'":
            return self.read_string()
        pos = Position(self.index, self.index + 1)
        self.index += 1
        if c in OPERATOR_CHARS:
            return Operator(c, pos)
        return Bad(c, pos)

    def read_identifier(self) -> Node:
        start = self.index
        while not self.eof() and is_identifier_char(self.peek(), False):
            self.index += 1
        name = self.source[start:self.index]
        pos = Position(start, self.index)
        if name in KEYWORDS:
            return KEYWORDS[name](pos)
        return Identifier(name, pos)

    def read_number(self) -> Number:
        start = self.index
        while not self.eof() and (is_digit(self.peek()) or self.peek() == '.'):
            self.index += 1
        text = self.source[start:self.index]
        pos = Position(start, self.index)
        # e.g. 0.0.1 or 1.2.3
        if text.count('.') > 1:
            raise NScriptError(ErrorVal.of(NUMBER_FORMAT_ERROR, pos, 'number cannot include more than one dot'))
        # e.g. 0. or 2.
        if text.endswith('.'):
            raise NScriptError(ErrorVal.of(
                NUMBER_FORMAT_ERROR, pos,
                'number cannot end with a dot (correction: `', text[:-1], '`)',
            ))
        # e.g. 123hello or 123_
        if not self.eof() and is_identifier_char(self.peek(), False):
            raise NScriptError(ErrorVal.of(
                NUMBER_FORMAT_ERROR, Position(start, self.index + 1),
                'number cannot include part of identifier (correction: `', text, ' ', self.peek(), '...`)',
            ))
        value = float(text)
        # e.g. 400 nines, which would overflow to inf
        if not math.isfinite(value):
            raise NScriptError(ErrorVal.of(NUMBER_FORMAT_ERROR, pos, 'number is too large'))
        return Number(value, pos)

    def read_string(self) -> String:
        start = self.index
        # eating the opening quote
        self.index += 1
        while not self.eof() and self.peek() != "'":
            # a backslash always takes the next character with it, so a quote
            # preceded by an odd run of backslashes never closes the literal
            self.index += 2 if self.peek() == '\\' else 1
        if self.eof():
            raise NScriptError(ErrorVal.of(LEX_ERROR, Position(start, len(self.source)), 'unclosed string'))
        raw = self.source[start + 1:self.index]
        # eating the closing quote
        self.index += 1
        return String(decode_escapes(raw, start + 1), Position(start, self.index))


def tokenize(source: str) -> List[Node]:
    """Return every token of `source`, ending with a single `Eof`."""
    return list(Lexer(source))
