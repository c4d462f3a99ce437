"""Recursive-descent parser for Lox.

Statements are parsed top-down, one method per grammar rule; expressions use
precedence climbing from assignment (lowest) to primary (highest), with every
binary level left-associative and assignment right-associative.

The parser never raises on malformed input. A statement-level error is
recorded as a diagnostic, then the parser enters panic mode: it discards
tokens until it has just consumed a `;`, or the next token starts a new
statement, or input runs out. Parsing then resumes with the next declaration,
so one pass can report several independent errors. Only the declaration that
entered panic mode is left out of the result; a block keeps the inner
statements that parsed.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .ast import (
    Assign, Binary, Block, Expr, ExpressionStmt, Grouping, IfStmt, Literal,
    Logical, PrintStmt, Stmt, Unary, VarDecl, Variable, WhileStmt,
)
from .errors import Diagnostic, ErrorKind, ParseError, Phase
from .tokens import STATEMENT_KEYWORDS, Token, TokenKind


LITERAL_KINDS = (
    TokenKind.NUMBER, TokenKind.STRING, TokenKind.TRUE, TokenKind.FALSE, TokenKind.NIL,
)


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0
        self.diagnostics: List[Diagnostic] = []

    # Token cursor

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def check(self, kind: TokenKind) -> bool:
        return self.peek().kind is kind

    def advance(self) -> Token:
        if not self.at_end():
            self.current += 1
        return self.previous()

    def match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenKind, error_kind: ErrorKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), error_kind, message)

    # Error handling

    def report(self, token: Token, kind: ErrorKind, message: str) -> Diagnostic:
        at_end = token.kind is TokenKind.EOF
        diagnostic = Diagnostic(
            Phase.SYNTAX, kind, token.line, message,
            lexeme=None if at_end else token.lexeme, at_end=at_end,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def error(self, token: Token, kind: ErrorKind, message: str) -> ParseError:
        return ParseError(self.report(token, kind, message))

    def synchronize(self):
        self.advance()
        while not self.at_end():
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            if self.peek().kind in STATEMENT_KEYWORDS:
                return
            self.advance()

    # Statements

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.at_end():
            try:
                stmt = self.declaration()
            except RecursionError:
                self.report(self.peek(), ErrorKind.NESTING_TOO_DEEP, 'Too much nesting.')
                # nothing after an overflow can be trusted
                self.current = len(self.tokens) - 1
                break
            if stmt is not None:
                statements.append(stmt)
        return statements

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenKind.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def var_declaration(self) -> Stmt:
        name = self.consume(TokenKind.IDENTIFIER, ErrorKind.EXPECT_IDENTIFIER, 'Expect variable name.')
        initializer: Optional[Expr] = None
        if self.match(TokenKind.EQUAL):
            initializer = self.expression()
        self.consume(TokenKind.SEMICOLON, ErrorKind.EXPECT_SEMICOLON,
                     "Expect ';' after variable declaration.")
        return VarDecl(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenKind.PRINT):
            return self.print_statement()
        if self.match(TokenKind.LEFT_BRACE):
            return Block(self.block())
        if self.match(TokenKind.IF):
            return self.if_statement()
        if self.match(TokenKind.WHILE):
            return self.while_statement()
        return self.expression_statement()

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(TokenKind.SEMICOLON, ErrorKind.EXPECT_SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(TokenKind.RIGHT_BRACE) and not self.at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenKind.RIGHT_BRACE, ErrorKind.EXPECT_RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def if_statement(self) -> Stmt:
        condition = self.expression()
        then_branch = self.statement()
        else_branch = None
        # Taken here, before returning to any enclosing if: dangling else binds innermost
        if self.match(TokenKind.ELSE):
            else_branch = self.statement()
        return IfStmt(condition, then_branch, else_branch)

    def while_statement(self) -> Stmt:
        condition = self.expression()
        body = self.statement()
        return WhileStmt(condition, body)

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume(TokenKind.SEMICOLON, ErrorKind.EXPECT_SEMICOLON, "Expect ';' after expression.")
        return ExpressionStmt(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # No panic mode: the statement keeps the right-hand side in place of the bad assignment
            self.report(equals, ErrorKind.INVALID_ASSIGNMENT_TARGET, 'Invalid assignment target.')
            return value
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(TokenKind.OR):
            operator = self.previous()
            right = self.logic_and()
            expr = Logical(expr, operator, right)
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(TokenKind.AND):
            operator = self.previous()
            right = self.equality()
            expr = Logical(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match(TokenKind.EQUAL_EQUAL, TokenKind.BANG_EQUAL):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(TokenKind.GREATER, TokenKind.GREATER_EQUAL,
                         TokenKind.LESS, TokenKind.LESS_EQUAL):
            operator = self.previous()
            right = self.term()
            expr = Binary(expr, operator, right)
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(TokenKind.PLUS, TokenKind.MINUS):
            operator = self.previous()
            right = self.factor()
            expr = Binary(expr, operator, right)
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(TokenKind.STAR, TokenKind.SLASH):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(*LITERAL_KINDS):
            return Literal(self.previous())
        if self.match(TokenKind.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenKind.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenKind.RIGHT_PAREN, ErrorKind.EXPECT_RIGHT_PAREN,
                         "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), ErrorKind.EXPECT_EXPRESSION, 'Expect expression.')


def parse(tokens: List[Token]) -> Tuple[List[Stmt], List[Diagnostic]]:
    """Parse a token list into statements plus any syntax diagnostics."""
    parser = Parser(tokens)
    statements = parser.parse()
    return statements, parser.diagnostics
