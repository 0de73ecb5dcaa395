"""Tree-walking interpreter for NScript.

An `Interpreter` owns one flat `Environment` that survives across calls,
so a host can feed it statements one at a time::

    interp = Interpreter()
    interp.run("x = 5")
    interp.run("print(x * 2)")

Every rule violation raises an `NScriptError` immediately; no partial
result is ever returned. Diagnostics are controlled by `debug_level`:

* 1 traces each statement and its result,
* 2 adds assignments and builtin calls,
* 3 traces every evaluated node.
"""

from __future__ import annotations

import sys
from dataclasses import replace
from typing import Dict, Optional

from .ast import (
    Node, Operator, Number, String, Identifier, NoneValue, Binary, Unary,
    Assign, Call,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import NScriptError, TYPE_ERROR, RUNTIME_ERROR, ARG_COUNT_ERROR
from .parser import MAX_NESTING_DEPTH, check_max_depth, parse
from .std import populate_builtins
from .types import ErrorVal, to_string, type_name


class Interpreter:
    """Core interpreter that evaluates NScript syntax trees."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = None,
                 max_depth: int = MAX_NESTING_DEPTH):
        self.env = Environment()
        self.builtins: Dict[str, BuiltinFunction] = populate_builtins()
        self.max_depth = check_max_depth(max_depth)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    # Public API
    def parse(self, source: str) -> Node:
        return parse(source, self.max_depth)

    def run(self, source: str) -> Node:
        """Parse and evaluate one statement."""
        tree = self.parse(source)
        if self.debug_level >= 1:
            self.debug(f"eval {to_string(tree)}")
        result = self.evaluate(tree)
        if self.debug_level >= 1:
            self.debug(f"  -> {to_string(result)}")
        return result

    def evaluate(self, node: Node) -> Node:
        if self.debug_level >= 3:
            self.debug(f"visit {node.kind} `{to_string(node)}`")
        if isinstance(node, (Number, String, NoneValue)):
            return node
        if isinstance(node, Identifier):
            # the stored snapshot is re-anchored to where it is referenced
            return replace(self.env.get(node.name, node.pos), pos=node.pos)
        if isinstance(node, Binary):
            return self.evaluate_binary(node)
        if isinstance(node, Unary):
            return self.evaluate_unary(node)
        if isinstance(node, Assign):
            return self.evaluate_assign(node)
        if isinstance(node, Call):
            return self.evaluate_call(node)
        raise NScriptError(ErrorVal.of(RUNTIME_ERROR, node.pos, 'cannot evaluate `', type_name(node), '`'))

    def evaluate_assign(self, node: Assign) -> Node:
        value = self.evaluate(node.expr)
        self.env.set(node.target.name, value)
        if self.debug_level >= 2:
            self.debug(f"assign {node.target.name}: {value.kind} = {to_string(value)}")
        return NoneValue(node.pos)

    def evaluate_unary(self, node: Unary) -> Node:
        operand = self.evaluate(node.operand)
        # unary can only be applied to numbers
        if not isinstance(operand, Number):
            raise NScriptError(ErrorVal.of(
                TYPE_ERROR, operand.pos,
                'type `', type_name(operand), '` does not support unary `', node.op.text, '`',
            ))
        value = -operand.value if node.op.text == '-' else operand.value
        return Number(value, node.pos)

    def evaluate_binary(self, node: Binary) -> Node:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        # every bin op can only be applied to values of the same type
        if type(left) is not type(right):
            raise NScriptError(ErrorVal.of(
                TYPE_ERROR, node.op.pos,
                'unknown bin `', node.op.text, '` between different types (`',
                type_name(left), '` and `', type_name(right), '`)',
            ))
        if isinstance(left, Number):
            return Number(self.apply_number_op(node, left.value, right.value), node.pos)
        if isinstance(left, String):
            return String(self.apply_string_op(node.op, left.value, right.value), node.pos)
        raise NScriptError(ErrorVal.of(TYPE_ERROR, node.op.pos, 'type `', type_name(left), '` does not support bin'))

    def apply_number_op(self, node: Binary, a: float, b: float) -> float:
        op = node.op.text
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if b == 0:
            raise NScriptError(ErrorVal.of(RUNTIME_ERROR, node.right.pos, 'dividing by 0'))
        return a / b

    def apply_string_op(self, op: Operator, a: str, b: str) -> str:
        # strings only support concatenation
        if op.text != '+':
            raise NScriptError(ErrorVal.of(TYPE_ERROR, op.pos, 'string does not support bin `', op.text, '`'))
        return a + b

    def evaluate_call(self, node: Call) -> Node:
        name = node.name
        if isinstance(name, String):
            raise NScriptError(ErrorVal.of(RUNTIME_ERROR, name.pos, 'calling processes is not supported'))
        builtin = self.builtins.get(name.name)
        if builtin is None:
            raise NScriptError(ErrorVal.of(RUNTIME_ERROR, name.pos, 'unknown builtin function'))
        if builtin.arity is not None and len(node.args) != builtin.arity:
            raise NScriptError(ErrorVal.of(
                ARG_COUNT_ERROR, name.pos,
                'expected args ', builtin.arity, ' (found ', len(node.args), ')',
            ))
        if builtin.evaluate_args:
            args = [self.evaluate(arg) for arg in node.args]
        else:
            args = list(node.args)
        if self.debug_level >= 2:
            self.debug(f"call {builtin!r} with {len(args)} args")
        return builtin.fn(args, node.pos)


def run_program(source: str, debug_level: int = 0) -> Node:
    """Convenience function to parse and evaluate one statement with a fresh interpreter."""
    with Interpreter(debug_level=debug_level) as interpreter:
        return interpreter.run(source)
