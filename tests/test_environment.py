import pytest

from pylox.environment import Environment
from pylox.errors import ErrorKind, LoxRuntimeError
from pylox.tokens import Token, TokenKind


def name(text, line=1):
    return Token(TokenKind.IDENTIFIER, text, line)


def test_lookup_searches_outward():
    env = Environment()
    env.declare('a', 1.0)
    env.push()
    env.declare('b', 2.0)
    assert env.get(name('a')) == 1.0
    assert env.get(name('b')) == 2.0
    env.pop()
    assert not env.is_defined('b')


def test_shadowing_and_assignment_hit_nearest_binding():
    env = Environment()
    env.declare('a', 'outer')
    with env.scope():
        env.declare('a', 'inner')
        env.set(name('a'), 'changed')
        assert env.get(name('a')) == 'changed'
    assert env.get(name('a')) == 'outer'


def test_assignment_never_creates_binding():
    env = Environment()
    with pytest.raises(LoxRuntimeError) as excinfo:
        env.set(name('missing', line=4), 1.0)
    assert excinfo.value.diagnostic.kind is ErrorKind.UNDEFINED_VARIABLE
    assert excinfo.value.diagnostic.line == 4
    assert excinfo.value.diagnostic.message == "Undefined variable 'missing'."
    assert not env.is_defined('missing')


def test_scope_is_popped_when_body_raises():
    env = Environment()
    with pytest.raises(LoxRuntimeError):
        with env.scope():
            env.get(name('nope'))
    assert env.depth == 1


def test_global_scope_cannot_be_popped():
    env = Environment()
    with pytest.raises(IndexError):
        env.pop()


def test_redeclaration_overwrites():
    env = Environment()
    env.declare('a', 1.0)
    env.declare('a', 2.0)
    assert env.globals == {'a': 2.0}
