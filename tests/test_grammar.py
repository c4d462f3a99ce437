from pathlib import Path

import pytest

from pylox.errors import ErrorKind, LoxError, Phase
from pylox.grammar import parse_strict
from pylox.lexer import scan
from pylox.parser import parse

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


@pytest.mark.parametrize('program', ['program_1', 'program_2', 'program_3', 'program_4', 'program_5', 'program_6', 'program_9'])
def test_grammar_agrees_with_recursive_descent_parser(program):
    with open(EXAMPLES / f'{program}.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    tokens, lex_errors = scan(source)
    statements, parse_errors = parse(tokens)
    assert lex_errors == [] and parse_errors == []
    assert parse_strict(source) == statements


def test_empty_program():
    assert parse_strict('// nothing here\n') == []


def test_missing_operand_at_end_of_input():
    with pytest.raises(LoxError) as excinfo:
        parse_strict('print 1 +')
    d = excinfo.value.diagnostic
    assert d.phase is Phase.SYNTAX
    assert d.kind is ErrorKind.EXPECT_EXPRESSION
    assert d.at_end


def test_unterminated_string():
    with pytest.raises(LoxError) as excinfo:
        parse_strict('print 1;\nprint "oops')
    d = excinfo.value.diagnostic
    assert d.phase is Phase.LEXICAL
    assert d.kind is ErrorKind.UNTERMINATED_STRING
    assert d.line == 2


def test_unexpected_character():
    with pytest.raises(LoxError) as excinfo:
        parse_strict('print @;')
    assert excinfo.value.diagnostic.kind is ErrorKind.UNEXPECTED_CHARACTER


def test_reserved_word_is_not_a_variable_name():
    with pytest.raises(LoxError) as excinfo:
        parse_strict('var class = 1;')
    assert excinfo.value.diagnostic.lexeme == 'class'
