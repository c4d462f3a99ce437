"""Token definitions for the Lox scanner.

A `Token` records the kind of lexeme, the exact source text it was cut from,
its decoded literal payload (for strings and numbers) and the 1-based line on
which it starts. Tokens are immutable once created.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class TokenKind(Enum):
    # Single-character tokens
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    COMMA = ','
    DOT = '.'
    MINUS = '-'
    PLUS = '+'
    SEMICOLON = ';'
    SLASH = '/'
    STAR = '*'

    # One or two character tokens
    BANG = '!'
    BANG_EQUAL = '!='
    EQUAL = '='
    EQUAL_EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    # Literals
    IDENTIFIER = 'identifier'
    STRING = 'string'
    NUMBER = 'number'

    # Keywords
    AND = 'and'
    CLASS = 'class'
    ELSE = 'else'
    FALSE = 'false'
    FUN = 'fun'
    FOR = 'for'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    SUPER = 'super'
    THIS = 'this'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    EOF = 'eof'


KEYWORDS: Dict[str, TokenKind] = {
    kind.value: kind
    for kind in (
        TokenKind.AND, TokenKind.CLASS, TokenKind.ELSE, TokenKind.FALSE,
        TokenKind.FUN, TokenKind.FOR, TokenKind.IF, TokenKind.NIL,
        TokenKind.OR, TokenKind.PRINT, TokenKind.RETURN, TokenKind.SUPER,
        TokenKind.THIS, TokenKind.TRUE, TokenKind.VAR, TokenKind.WHILE,
    )
}

# Keywords that begin a statement; the parser resynchronizes in front of them.
STATEMENT_KEYWORDS = frozenset({
    TokenKind.CLASS, TokenKind.FUN, TokenKind.VAR, TokenKind.FOR,
    TokenKind.IF, TokenKind.WHILE, TokenKind.PRINT, TokenKind.RETURN,
})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    line: int
    literal: Any = None  # str for STRING, float for NUMBER

    def __repr__(self) -> str:
        if self.literal is not None:
            return f"Token({self.kind.name}, {self.lexeme!r}, {self.literal!r}, line={self.line})"
        return f"Token({self.kind.name}, {self.lexeme!r}, line={self.line})"
