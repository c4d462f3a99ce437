from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Phase(Enum):
    LEXICAL = 'Lexical'
    SYNTAX = 'Syntax'
    RUNTIME = 'Runtime'


class ErrorKind(Enum):
    # Lexical
    UNTERMINATED_STRING = 'UnterminatedString'
    UNEXPECTED_CHARACTER = 'UnexpectedCharacter'
    # Syntax
    EXPECT_EXPRESSION = 'ExpectExpression'
    EXPECT_RIGHT_PAREN = 'ExpectRightParen'
    EXPECT_RIGHT_BRACE = 'ExpectRightBrace'
    EXPECT_SEMICOLON = 'ExpectSemicolon'
    EXPECT_IDENTIFIER = 'ExpectIdentifier'
    INVALID_ASSIGNMENT_TARGET = 'InvalidAssignmentTarget'
    NESTING_TOO_DEEP = 'NestingTooDeep'
    # Runtime
    TYPE_MISMATCH_UNARY = 'TypeMismatchUnary'
    TYPE_MISMATCH_BINARY = 'TypeMismatchBinary'
    UNDEFINED_VARIABLE = 'UndefinedVariable'
    RECURSION_DEPTH_EXCEEDED = 'RecursionDepthExceeded'


@dataclass(frozen=True)
class Diagnostic:
    """A structured error report produced by one of the pipeline stages.

    `lexeme` is the text of the offending token, or None when the error is
    anchored at end of input (or, for lexical errors, not at a token at all).
    """
    phase: Phase
    kind: ErrorKind
    line: int
    message: str
    lexeme: Optional[str] = None
    at_end: bool = False


class LoxError(Exception):
    """Exception type used to carry a Lox diagnostic."""
    def __init__(self, diagnostic: Diagnostic):
        super().__init__(f"{diagnostic.kind.value}: {diagnostic.message} [line {diagnostic.line}]")
        self.diagnostic = diagnostic


class ParseError(LoxError):
    """Raised inside the parser to unwind to the next synchronization point."""


class LoxRuntimeError(LoxError):
    """Raised while evaluating a statement; aborts that statement only."""


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Render a diagnostic the way the reference Lox tools report errors."""
    if diagnostic.phase is Phase.RUNTIME:
        return f"{diagnostic.message}\n[line {diagnostic.line}]"
    if diagnostic.phase is Phase.LEXICAL:
        return f"[line {diagnostic.line}] Error: {diagnostic.message}"
    if diagnostic.at_end:
        where = ' at end'
    elif diagnostic.lexeme is not None:
        where = f" at '{diagnostic.lexeme}'"
    else:
        where = ''
    return f"[line {diagnostic.line}] Error{where}: {diagnostic.message}"
