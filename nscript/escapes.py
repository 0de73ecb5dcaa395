"""Escape codec for NScript string literals.

`decode_escapes` turns the raw text between the quotes of a literal into
its runtime value; `encode_escapes` is its exact inverse and is used when
a string is rendered back into source form.

Supported escapes: `\\\\`, `\\'`, `\\n`, `\\t`, `\\r` and `\\0`.
"""

from __future__ import annotations

from typing import Dict

from .ast import Position

ESCAPES: Dict[str, str] = {
    '\\': '\\',
    "'": "'",
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
}

_REVERSE: Dict[str, str] = {value: code for code, value in ESCAPES.items()}


def decode_escapes(raw: str, offset: int = 0) -> str:
    """Decode the escape sequences of `raw`.

    `offset` is the source index of `raw[0]`; it is only used to position
    the error raised for an unknown escape code.
    """
    # imported here to avoid a cycle: errors -> types -> escapes
    from .errors import NScriptError
    from .types import ErrorVal

    result = []
    i = 0
    while i < len(raw):
        c = raw[i]
        if c != '\\':
            result.append(c)
            i += 1
            continue
        code = raw[i + 1] if i + 1 < len(raw) else ''
        if code not in ESCAPES:
            pos = Position(offset + i, offset + min(i + 2, len(raw)))
            raise NScriptError(ErrorVal.of('LexError', pos, 'unknown escape code `\\', code, '`'))
        result.append(ESCAPES[code])
        i += 2
    return ''.join(result)


def encode_escapes(value: str) -> str:
    """Re-escape every special character of `value`."""
    return ''.join('\\' + _REVERSE[c] if c in _REVERSE else c for c in value)
