"""CLI entry point for the NScript interpreter.

Usage:
    python -m nscript [-v|-vv|-vvv] -e EXPR [-e EXPR ...]
    python -m nscript [-v...] <script_file>
    python -m nscript --emit-ast EXPR
    python -m nscript [-v...] --ast <ast_json_file>
    python -m nscript [-v...]

Options:
  -v            Increase debug verbosity (can be repeated)
  -e EXPR       Evaluate a statement (can be repeated, one shared environment)
  --emit-ast    Parse a statement and print its AST as JSON
  --ast         Evaluate a previously emitted AST JSON file
  --debug-file  Write debug output to this file instead of stderr
  --max-depth   Maximum expression nesting depth

A script file holds one statement per line; blank lines are skipped.
Without any input an interactive console is started. Results other than
`none` are echoed in their canonical form.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast import NoneValue
from .ast_json import ast_to_obj, ast_from_obj
from .errors import NScriptError
from .interpreter import Interpreter
from .parser import MAX_NESTING_DEPTH, check_max_depth, parse
from .types import to_string


def echo(result) -> None:
    if not isinstance(result, NoneValue):
        print(to_string(result))


def run_statement(interpreter: Interpreter, source: str, label: str = '') -> bool:
    """Evaluate one statement, reporting any error on stderr."""
    try:
        result = interpreter.run(source)
    except NScriptError as e:
        print(label + e.render(source), file=sys.stderr)
        return False
    echo(result)
    return True


def console(interpreter: Interpreter) -> None:
    while True:
        try:
            line = input('>>> ')
        except EOFError:
            print()
            return
        if line.strip():
            run_statement(interpreter, line)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="NScript interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', metavar='PATH', help='write debug output to PATH')
    parser.add_argument('--max-depth', type=int, default=MAX_NESTING_DEPTH, help='maximum expression nesting depth')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-e', dest='exprs', action='append', metavar='EXPR', help='evaluate a statement')
    group.add_argument('--emit-ast', metavar='EXPR', help='print the AST of a statement as JSON')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='evaluate an AST from a JSON file')
    parser.add_argument('script', nargs='?', help='script file, one statement per line')
    args = parser.parse_args(argv)
    try:
        check_max_depth(args.max_depth)
    except ValueError as e:
        parser.error(str(e))

    # Emit AST mode
    if args.emit_ast is not None:
        try:
            tree = parse(args.emit_ast, args.max_depth)
        except NScriptError as e:
            print(e.render(args.emit_ast), file=sys.stderr)
            sys.exit(1)
        json.dump(ast_to_obj(tree), sys.stdout, ensure_ascii=False, indent=2)
        print()
        return

    with Interpreter(debug_level=args.v, debug_file=args.debug_file, max_depth=args.max_depth) as interpreter:
        # Evaluate from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            with open(ast_path, 'r', encoding='utf-8') as f:
                tree = ast_from_obj(json.load(f))
            try:
                echo(interpreter.evaluate(tree))
            except NScriptError as e:
                print(f"{e} (at {e.pos.start}..{e.pos.end})", file=sys.stderr)
                sys.exit(1)
            return

        if args.exprs:
            for expr in args.exprs:
                if not run_statement(interpreter, expr):
                    sys.exit(1)
            return

        if args.script:
            script_file = Path(args.script)
            if not script_file.exists():
                print(f"Error: file {script_file} not found", file=sys.stderr)
                sys.exit(1)
            with open(script_file, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
            for lineno, line in enumerate(lines, start=1):
                if line.strip() and not run_statement(interpreter, line, f"{script_file}:{lineno}: "):
                    sys.exit(1)
            return

        console(interpreter)


if __name__ == '__main__':
    main()
