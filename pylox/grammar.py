"""Reference grammar for Lox, built on Lark.

This module describes the same language as `pylox.parser` declaratively, as
a Lark LALR grammar, and transforms the resulting parse tree into the same
AST dataclasses. Unlike the hand-written parser it does not recover: the
first lexical or syntax error is raised as a `LoxError`. It is used by the
CLI's `--grammar` mode and to cross-check the recursive-descent parser.

Dangling `else` is an LALR shift/reduce conflict; Lark resolves it by
shifting, which binds the `else` to the innermost `if`.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Assign, Binary, Block, ExpressionStmt, Grouping, IfStmt, Literal, Logical,
    PrintStmt, Stmt, Unary, VarDecl, Variable, WhileStmt,
)
from .errors import Diagnostic, ErrorKind, LoxError, Phase
from .tokens import KEYWORDS, Token, TokenKind


LOX_GRAMMAR = r"""
    start: declaration*

    ?declaration: var_decl
                | statement

    var_decl: "var" IDENTIFIER ("=" expression)? ";"

    ?statement: print_stmt
              | block
              | if_stmt
              | while_stmt
              | expr_stmt

    print_stmt: "print" expression ";"
    block: "{" declaration* "}"
    if_stmt: "if" expression statement ("else" statement)?
    while_stmt: "while" expression statement
    expr_stmt: expression ";"

    // Expressions, lowest precedence first
    ?expression: assignment
    ?assignment: IDENTIFIER "=" assignment -> assign
               | logic_or
    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((EQUAL_EQUAL | BANG_EQUAL) comparison)*
    ?comparison: term ((GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) term)*
    ?term: factor ((PLUS | MINUS) factor)*
    ?factor: unary ((STAR | SLASH) unary)*
    ?unary: (BANG | MINUS) unary -> unary_op
          | primary
    ?primary: NUMBER -> literal
            | STRING -> literal
            | TRUE -> literal
            | FALSE -> literal
            | NIL -> literal
            | IDENTIFIER -> variable
            | "(" expression ")" -> grouping

    // Tokens
    AND: "and"
    OR: "or"
    TRUE: "true"
    FALSE: "false"
    NIL: "nil"
    BANG_EQUAL: "!="
    BANG: "!"
    EQUAL_EQUAL: "=="
    GREATER_EQUAL: ">="
    GREATER: ">"
    LESS_EQUAL: "<="
    LESS: "<"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    NUMBER: /[0-9]+(\.[0-9]+)?/
    STRING: /"[^"]*"/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT
    %ignore /[ \t\r\n]+/
"""


LOX_PARSER = Lark(
    LOX_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
)


def keyword_error(token: Token) -> LoxError:
    # Reserved words the grammar has no rule for still lex as IDENTIFIER here
    return LoxError(Diagnostic(
        Phase.SYNTAX, ErrorKind.EXPECT_EXPRESSION, token.line,
        'Expect expression.', lexeme=token.lexeme,
    ))


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into a list of Lox statements."""

    def __default_token__(self, token):
        kind = TokenKind[token.type]
        text = str(token)
        literal = None
        if kind is TokenKind.NUMBER:
            literal = float(text)
        elif kind is TokenKind.STRING:
            literal = text[1:-1]
        elif kind is TokenKind.IDENTIFIER and text in KEYWORDS:
            raise keyword_error(Token(kind, text, token.line))
        return Token(kind, text, token.line, literal)

    def start(self, items) -> List[Stmt]:
        return list(items)

    # Statements
    def var_decl(self, items):
        initializer = items[1] if len(items) > 1 else None
        return VarDecl(items[0], initializer)

    def print_stmt(self, items):
        return PrintStmt(items[0])

    def block(self, items):
        return Block(list(items))

    def if_stmt(self, items):
        else_branch = items[2] if len(items) > 2 else None
        return IfStmt(items[0], items[1], else_branch)

    def while_stmt(self, items):
        return WhileStmt(items[0], items[1])

    def expr_stmt(self, items):
        return ExpressionStmt(items[0])

    # Expressions
    def assign(self, items):
        return Assign(items[0], items[1])

    def fold_binary(self, items, node_type):
        # items pattern: operand (operator operand)*, folded left-associatively
        left = items[0]
        for i in range(1, len(items), 2):
            left = node_type(left, items[i], items[i + 1])
        return left

    def logic_or(self, items):
        return self.fold_binary(items, Logical)

    def logic_and(self, items):
        return self.fold_binary(items, Logical)

    def equality(self, items):
        return self.fold_binary(items, Binary)

    def comparison(self, items):
        return self.fold_binary(items, Binary)

    def term(self, items):
        return self.fold_binary(items, Binary)

    def factor(self, items):
        return self.fold_binary(items, Binary)

    def unary_op(self, items):
        return Unary(items[0], items[1])

    def literal(self, items):
        return Literal(items[0])

    def variable(self, items):
        return Variable(items[0])

    def grouping(self, items):
        return Grouping(items[0])


def diagnostic_from_lark(exc: UnexpectedInput, source: str) -> Diagnostic:
    line = getattr(exc, 'line', None)
    if not isinstance(line, int) or line < 1:
        line = 1
    if isinstance(exc, UnexpectedCharacters):
        if source[exc.pos_in_stream:exc.pos_in_stream + 1] == '"':
            return Diagnostic(Phase.LEXICAL, ErrorKind.UNTERMINATED_STRING, line, 'Unterminated string.')
        return Diagnostic(Phase.LEXICAL, ErrorKind.UNEXPECTED_CHARACTER, line, 'Unexpected character.')
    if isinstance(exc, UnexpectedToken) and exc.token.type == '$END':
        return Diagnostic(Phase.SYNTAX, ErrorKind.EXPECT_EXPRESSION, line,
                          'Expect expression.', at_end=True)
    expected = getattr(exc, 'expected', None) or set()
    lexeme = str(exc.token) if isinstance(exc, UnexpectedToken) else None
    if 'SEMICOLON' in expected:
        kind, message = ErrorKind.EXPECT_SEMICOLON, "Expect ';'."
    elif 'RPAR' in expected:
        kind, message = ErrorKind.EXPECT_RIGHT_PAREN, "Expect ')' after expression."
    elif 'RBRACE' in expected:
        kind, message = ErrorKind.EXPECT_RIGHT_BRACE, "Expect '}' after block."
    else:
        kind, message = ErrorKind.EXPECT_EXPRESSION, 'Expect expression.'
    return Diagnostic(Phase.SYNTAX, kind, line, message, lexeme=lexeme)


def parse_strict(source: str) -> List[Stmt]:
    """Parse Lox source with the reference grammar.

    Raises `LoxError` on the first lexical or syntax error; there is no
    recovery.
    """
    try:
        tree = LOX_PARSER.parse(source)
    except UnexpectedInput as exc:
        raise LoxError(diagnostic_from_lark(exc, source)) from exc
    try:
        return ASTTransformer().transform(tree)
    except VisitError as exc:
        # Errors raised inside transformer callbacks arrive wrapped
        if isinstance(exc.orig_exc, LoxError):
            raise exc.orig_exc from exc
        raise
