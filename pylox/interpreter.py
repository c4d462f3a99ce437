"""Tree-walking interpreter for Lox.

The interpreter evaluates the statement list produced by the parser against
an `Environment` stack of scopes. Every top-level statement runs even when an
earlier one failed: runtime errors abort only the statement that raised them
and are collected as diagnostics. Inside a block the same rule applies per
statement, and the block's scope is always popped on the way out.

`run_source` chains the lexer, parser and interpreter for one unit of source
text and merges the diagnostics of all three stages.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .ast import (
    Assign, Binary, Block, Expr, ExpressionStmt, Grouping, IfStmt, Literal,
    Logical, Node, PrintStmt, Stmt, Unary, VarDecl, Variable, WhileStmt,
)
from .environment import Environment
from .errors import Diagnostic, ErrorKind, LoxRuntimeError, Phase
from .lexer import scan
from .parser import parse
from .tokens import Token, TokenKind
from .types import NIL, is_number, is_truthy, to_string, values_equal


def first_line(node: Node) -> int:
    """Return the line of the leftmost token under `node` (0 if it has none)."""
    # Iterative so it is safe to call on trees too deep to recurse through
    while True:
        if isinstance(node, (Binary, Logical)):
            node = node.left
        elif isinstance(node, Grouping):
            node = node.inner
        elif isinstance(node, Literal):
            return node.token.line
        elif isinstance(node, Unary):
            return node.operator.line
        elif isinstance(node, (Variable, Assign, VarDecl)):
            return node.name.line
        elif isinstance(node, (ExpressionStmt, PrintStmt)):
            node = node.expr
        elif isinstance(node, (IfStmt, WhileStmt)):
            node = node.condition
        elif isinstance(node, Block):
            if not node.statements:
                return 0
            node = node.statements[0]
        else:
            return 0


def operand_error(kind: ErrorKind, operator: Token, message: str) -> LoxRuntimeError:
    return LoxRuntimeError(Diagnostic(
        Phase.RUNTIME, kind, operator.line, message, lexeme=operator.lexeme,
    ))


class Interpreter:
    """Core interpreter that executes Lox statements."""
    def __init__(self, write_line: Callable[[str], Any] = print,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.environment = Environment()
        self.write_line = write_line
        self.errors: List[Diagnostic] = []
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Public API
    def execute(self, statements: List[Stmt]) -> List[Diagnostic]:
        """Run every statement, returning the runtime errors raised along the way."""
        self.errors = []
        for stmt in statements:
            if self.debug_level >= 1:
                self.debug(f"execute {type(stmt).__name__} (line {first_line(stmt)})")
            try:
                self.run_statement(stmt)
            except RecursionError:
                # Unwinding has already popped every block scope back to the globals
                self.report(Diagnostic(
                    Phase.RUNTIME, ErrorKind.RECURSION_DEPTH_EXCEEDED, first_line(stmt),
                    'Maximum recursion depth exceeded.',
                ))
        return self.errors

    def report(self, diagnostic: Diagnostic):
        if self.debug_level >= 1:
            self.debug(f"runtime error: {diagnostic.kind.value} on line {diagnostic.line}")
        self.errors.append(diagnostic)

    def run_statement(self, stmt: Stmt):
        """Execute one statement, collecting (not raising) a runtime error from it."""
        try:
            self.execute_stmt(stmt)
        except LoxRuntimeError as ex:
            self.report(ex.diagnostic)

    def execute_stmt(self, node: Stmt):
        if isinstance(node, ExpressionStmt):
            self.evaluate(node.expr)
            return
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr)
            self.write_line(to_string(value))
            return
        if isinstance(node, VarDecl):
            value = self.evaluate(node.initializer) if node.initializer is not None else NIL
            self.environment.declare(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme} = {to_string(value)}")
            return
        if isinstance(node, Block):
            self.execute_block(node.statements)
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute_stmt(node.then_branch)
            elif node.else_branch is not None:
                self.execute_stmt(node.else_branch)
            return
        if isinstance(node, WhileStmt):
            while True:
                cond = self.evaluate(node.condition)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)} -> {is_truthy(cond)}")
                if not is_truthy(cond):
                    break
                self.execute_stmt(node.body)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_block(self, statements: List[Stmt]):
        with self.environment.scope():
            if self.debug_level >= 3:
                self.debug(f"push scope (depth {self.environment.depth})")
            for stmt in statements:
                self.run_statement(stmt)
        if self.debug_level >= 3:
            self.debug(f"pop scope (depth {self.environment.depth})")

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return self.literal_value(node.token)
        if isinstance(node, Grouping):
            return self.evaluate(node.inner)
        if isinstance(node, Variable):
            return self.environment.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {to_string(value)}")
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            # Short-circuit: the deciding operand's value is the result
            if node.operator.kind is TokenKind.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right)
        if isinstance(node, Unary):
            operand = self.evaluate(node.right)
            if node.operator.kind is TokenKind.BANG:
                return not is_truthy(operand)
            if node.operator.kind is TokenKind.MINUS:
                if is_number(operand):
                    return -operand
                raise operand_error(ErrorKind.TYPE_MISMATCH_UNARY, node.operator,
                                    'Operand must be a number.')
            raise NotImplementedError(f"unsupported unary operator {node.operator.lexeme}")
        if isinstance(node, Binary):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.operator, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def literal_value(self, token: Token) -> Any:
        if token.kind is TokenKind.NIL:
            return NIL
        if token.kind is TokenKind.TRUE:
            return True
        if token.kind is TokenKind.FALSE:
            return False
        if token.kind in (TokenKind.NUMBER, TokenKind.STRING):
            return token.literal
        raise NotImplementedError(f"unexpected literal token {token!r}")

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.kind
        if op is TokenKind.EQUAL_EQUAL:
            return values_equal(a, b)
        if op is TokenKind.BANG_EQUAL:
            return not values_equal(a, b)
        if op is TokenKind.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise operand_error(ErrorKind.TYPE_MISMATCH_BINARY, operator,
                                'Operands must be two numbers or two strings.')
        if not (is_number(a) and is_number(b)):
            raise operand_error(ErrorKind.TYPE_MISMATCH_BINARY, operator,
                                'Operands must be numbers.')
        if op is TokenKind.MINUS:
            return a - b
        if op is TokenKind.STAR:
            return a * b
        if op is TokenKind.SLASH:
            return self.divide(a, b)
        if op is TokenKind.GREATER:
            return a > b
        if op is TokenKind.GREATER_EQUAL:
            return a >= b
        if op is TokenKind.LESS:
            return a < b
        if op is TokenKind.LESS_EQUAL:
            return a <= b
        raise NotImplementedError(f"unknown operator {operator.lexeme}")

    @staticmethod
    def divide(a: float, b: float) -> float:
        # IEEE-754 semantics: dividing by zero yields an infinity or NaN
        if b == 0.0:
            if a == 0.0 or math.isnan(a):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return a / b


@dataclass
class RunResult:
    """Diagnostics from one `run_source` call, in lexical, syntax, runtime order."""
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def had_error(self) -> bool:
        return any(d.phase is not Phase.RUNTIME for d in self.diagnostics)

    @property
    def had_runtime_error(self) -> bool:
        return any(d.phase is Phase.RUNTIME for d in self.diagnostics)


def run_source(source: str, write_line: Callable[[str], Any] = print,
               interpreter: Optional[Interpreter] = None) -> RunResult:
    """Scan, parse and execute one unit of Lox source text.

    Statements the parser recovered are executed even if other statements had
    lexical or syntax errors. Pass an existing `interpreter` to keep global
    variables across calls (as the REPL does).
    """
    tokens, lex_errors = scan(source)
    statements, parse_errors = parse(tokens)
    if interpreter is None:
        with Interpreter(write_line=write_line) as interp:
            runtime_errors = interp.execute(statements)
    else:
        runtime_errors = interpreter.execute(statements)
    return RunResult(lex_errors + parse_errors + runtime_errors)
