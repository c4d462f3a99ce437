# Lox language package
# This package provides a scanner, a recovering parser and a tree-walking interpreter for Lox.
from .errors import Diagnostic, ErrorKind, LoxError, Phase, format_diagnostic
from .interpreter import Interpreter, RunResult, run_source
from .lexer import scan
from .parser import parse

__all__ = [
    'scan',
    'parse',
    'run_source',
    'Interpreter',
    'RunResult',
    'Diagnostic',
    'ErrorKind',
    'Phase',
    'LoxError',
    'format_diagnostic',
]
