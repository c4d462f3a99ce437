"""CLI entry point for the Lox interpreter.

Usage:
    python -m pylox [-v|-vv|-vvv|-vvvv] [--grammar] [script]
    python -m pylox [-v...] --emit-ast <script>
    python -m pylox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --grammar     Parse with the strict Lark reference grammar (no error recovery)
  --emit-ast    Parse the given script and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

With no script an interactive prompt is started; globals persist between
lines. Debug information is written to `debug.txt` in the current directory
when verbosity is greater than zero.

Exit codes follow the sysexits convention used by the reference Lox tools:
64 for bad usage, 65 for lexical or syntax errors, 66 for a missing input
file and 70 for runtime errors.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .ast_json import ast_from_obj, ast_to_obj
from .errors import Diagnostic, LoxError, Phase, format_diagnostic
from .grammar import parse_strict
from .interpreter import Interpreter, run_source
from .lexer import scan
from .parser import parse

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def report(diagnostics: List[Diagnostic]):
    for diagnostic in diagnostics:
        print(format_diagnostic(diagnostic), file=sys.stderr)


def exit_code(diagnostics: List[Diagnostic]) -> int:
    if any(d.phase is not Phase.RUNTIME for d in diagnostics):
        return EX_DATAERR
    if diagnostics:
        return EX_SOFTWARE
    return EX_OK


def run(source: str, interpreter: Interpreter, use_grammar: bool = False) -> List[Diagnostic]:
    """Run one unit of source against `interpreter`, returning all diagnostics."""
    if use_grammar:
        try:
            statements = parse_strict(source)
        except LoxError as ex:
            return [ex.diagnostic]
        return interpreter.execute(statements)
    if interpreter.debug_level >= 4:
        tokens, _ = scan(source)
        for token in tokens:
            interpreter.debug(repr(token))
    return run_source(source, interpreter=interpreter).diagnostics


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def run_prompt(interpreter: Interpreter, use_grammar: bool = False):
    while True:
        try:
            line = input('> ')
        except EOFError:
            print()
            return
        # Errors are reported but never end the session
        report(run(line, interpreter, use_grammar))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='pylox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--grammar', action='store_true',
                        help='parse with the strict reference grammar instead of the recovering parser')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='*', help='Lox script to execute')
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print('Usage: pylox [script]', file=sys.stderr)
        sys.exit(EX_USAGE)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        if args.grammar:
            try:
                statements = parse_strict(source)
            except LoxError as ex:
                report([ex.diagnostic])
                sys.exit(EX_DATAERR)
        else:
            tokens, lex_errors = scan(source)
            statements, parse_errors = parse(tokens)
            if lex_errors or parse_errors:
                report(lex_errors + parse_errors)
                sys.exit(EX_DATAERR)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    with Interpreter(debug_level=args.v) as interpreter:
        # Execute from AST JSON
        if args.ast:
            data = json.loads(read_source(Path(args.ast)))
            diagnostics = interpreter.execute(ast_from_obj(data))
            report(diagnostics)
            sys.exit(exit_code(diagnostics))

        if not args.script:
            run_prompt(interpreter, args.grammar)
            return

        diagnostics = run(read_source(Path(args.script[0])), interpreter, args.grammar)
    report(diagnostics)
    sys.exit(exit_code(diagnostics))


if __name__ == '__main__':
    main()
