from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from .errors import Diagnostic, ErrorKind, LoxRuntimeError, Phase
from .tokens import Token


def undefined_variable(name: Token) -> LoxRuntimeError:
    return LoxRuntimeError(Diagnostic(
        Phase.RUNTIME, ErrorKind.UNDEFINED_VARIABLE, name.line,
        f"Undefined variable '{name.lexeme}'.", lexeme=name.lexeme,
    ))


class Environment:
    """A stack of scopes mapping variable names to values, innermost last.

    The first scope is the global scope; it is created with the environment
    and can never be popped.
    """
    def __init__(self):
        self.scopes: List[Dict[str, Any]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    @property
    def globals(self) -> Dict[str, Any]:
        return self.scopes[0]

    def push(self):
        self.scopes.append({})

    def pop(self):
        if len(self.scopes) == 1:
            raise IndexError('cannot pop the global scope')
        self.scopes.pop()

    @contextmanager
    def scope(self) -> Iterator[Dict[str, Any]]:
        """Push a scope for the duration of a `with` block, popping it on every exit path."""
        self.push()
        try:
            yield self.scopes[-1]
        finally:
            self.pop()

    def declare(self, name: str, value: Any):
        # Declaration always binds in the innermost scope, shadowing or overwriting
        self.scopes[-1][name] = value

    def get(self, name: Token) -> Any:
        for scope in reversed(self.scopes):
            if name.lexeme in scope:
                return scope[name.lexeme]
        raise undefined_variable(name)

    def set(self, name: Token, value: Any):
        # Assignment updates the nearest existing binding and never creates one
        for scope in reversed(self.scopes):
            if name.lexeme in scope:
                scope[name.lexeme] = value
                return
        raise undefined_variable(name)

    def is_defined(self, name: str) -> bool:
        return any(name in scope for scope in self.scopes)
