# NScript language package
# This package provides the tokenizer, parser and interpreter for NScript
# expressions and statements.
from .errors import NScriptError
from .interpreter import Interpreter, run_program
from .parser import parse

__all__ = [
    'Interpreter',
    'NScriptError',
    'parse',
    'run_program',
]
