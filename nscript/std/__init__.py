import math
from typing import Dict, List

from nscript.ast import Node, Number, NoneValue, Position
from nscript.builtin_function import BuiltinFunction
from nscript.errors import NScriptError, TYPE_ERROR, RUNTIME_ERROR
from nscript.types import ErrorVal, to_string, type_name


def expect_number(node: Node) -> Number:
    if not isinstance(node, Number):
        raise NScriptError(ErrorVal.of(
            TYPE_ERROR, node.pos,
            'expected a value with type ', Number.kind, ' (found ', type_name(node), ')',
        ))
    return node


def populate_builtins() -> Dict[str, BuiltinFunction]:
    """Return the builtin functions available to every interpreter.

    Each builtin receives its arguments and the position of the whole call;
    arity is checked by the interpreter beforehand. Arguments arrive
    evaluated unless the builtin is registered with `evaluate_args=False`,
    as `print` is: it writes the canonical form of each argument exactly as
    written, so `print(1 + x)` outputs `1 + x`.
    """

    def std_print(args: List[Node], pos: Position) -> Node:
        # no separator, no trailing newline
        print(''.join(to_string(a) for a in args), end='', flush=True)
        return NoneValue(pos)

    def std_floor(args: List[Node], pos: Position) -> Node:
        value = expect_number(args[0]).value
        if not math.isfinite(value):
            raise NScriptError(ErrorVal.of(RUNTIME_ERROR, args[0].pos, 'cannot truncate a non-finite number'))
        # truncates toward zero: floor(-2.5) is -2
        return Number(float(math.trunc(value)), pos)

    return {
        'print': BuiltinFunction('print', None, std_print, evaluate_args=False),
        'floor': BuiltinFunction('floor', 1, std_floor),
    }
