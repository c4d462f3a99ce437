"""Scanner for Lox source text.

The scanner walks the source once, left to right, applying maximal munch:
two-character operators (`!=`, `==`, `>=`, `<=`) are only formed when the
second character matches, and `//` starts a comment that runs to the end of
the line. Errors never stop the scan; they are collected as diagnostics and
the offending input is skipped. Exactly one EOF token ends every stream.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import Diagnostic, ErrorKind, Phase
from .tokens import KEYWORDS, Token, TokenKind


SINGLE_CHAR_TOKENS = {
    '(': TokenKind.LEFT_PAREN,
    ')': TokenKind.RIGHT_PAREN,
    '{': TokenKind.LEFT_BRACE,
    '}': TokenKind.RIGHT_BRACE,
    ',': TokenKind.COMMA,
    '.': TokenKind.DOT,
    '-': TokenKind.MINUS,
    '+': TokenKind.PLUS,
    ';': TokenKind.SEMICOLON,
    '*': TokenKind.STAR,
}

# first char -> (kind when followed by '=', kind otherwise)
ONE_OR_TWO_CHAR_TOKENS = {
    '!': (TokenKind.BANG_EQUAL, TokenKind.BANG),
    '=': (TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    '>': (TokenKind.GREATER_EQUAL, TokenKind.GREATER),
    '<': (TokenKind.LESS_EQUAL, TokenKind.LESS),
}

WHITESPACE = {' ', '\r', '\t'}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.diagnostics: List[Diagnostic] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def peek(self) -> str:
        if self.at_end():
            return ''
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return ''
        return self.source[self.current + 1]

    def match(self, expected: str) -> bool:
        if self.peek() != expected:
            return False
        self.current += 1
        return True

    def add_token(self, kind: TokenKind, literal=None, line: Optional[int] = None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(kind, lexeme, self.line if line is None else line, literal))

    def error(self, kind: ErrorKind, message: str, line: int, lexeme: Optional[str] = None):
        self.diagnostics.append(Diagnostic(Phase.LEXICAL, kind, line, message, lexeme=lexeme))

    def scan_tokens(self) -> List[Token]:
        while not self.at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenKind.EOF, '', self.line))
        return self.tokens

    def scan_token(self):
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
        elif c in ONE_OR_TWO_CHAR_TOKENS:
            two, one = ONE_OR_TWO_CHAR_TOKENS[c]
            self.add_token(two if self.match('=') else one)
        elif c == '/':
            if self.match('/'):
                while self.peek() not in ('\n', ''):
                    self.current += 1
            else:
                self.add_token(TokenKind.SLASH)
        elif c in WHITESPACE:
            pass
        elif c == '\n':
            self.line += 1
        elif c == '"':
            self.string()
        elif is_digit(c):
            self.number()
        elif is_alpha(c):
            self.identifier()
        else:
            self.error(ErrorKind.UNEXPECTED_CHARACTER, 'Unexpected character.', self.line, lexeme=c)

    def string(self):
        start_line = self.line
        while self.peek() != '"' and not self.at_end():
            if self.peek() == '\n':
                self.line += 1
            self.current += 1
        if self.at_end():
            self.error(ErrorKind.UNTERMINATED_STRING, 'Unterminated string.', start_line)
            return
        self.current += 1  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        # A multi-line string belongs to the line it started on
        self.add_token(TokenKind.STRING, value, line=start_line)

    def number(self):
        while is_digit(self.peek()):
            self.current += 1
        # A '.' only belongs to the number when a digit follows it
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.current += 1
            while is_digit(self.peek()):
                self.current += 1
        self.add_token(TokenKind.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while is_alpha(self.peek()) or is_digit(self.peek()):
            self.current += 1
        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))


def scan(source: str) -> Tuple[List[Token], List[Diagnostic]]:
    """Convert source text into a token list plus any lexical diagnostics."""
    lexer = Lexer(source)
    tokens = lexer.scan_tokens()
    return tokens, lexer.diagnostics
