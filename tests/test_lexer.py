from pylox.errors import ErrorKind, Phase
from pylox.lexer import scan
from pylox.tokens import TokenKind


def kinds(tokens):
    return [t.kind for t in tokens]


def test_two_char_operators_use_maximal_munch():
    tokens, diagnostics = scan('!= ! == = >= > <= <')
    assert kinds(tokens) == [
        TokenKind.BANG_EQUAL, TokenKind.BANG,
        TokenKind.EQUAL_EQUAL, TokenKind.EQUAL,
        TokenKind.GREATER_EQUAL, TokenKind.GREATER,
        TokenKind.LESS_EQUAL, TokenKind.LESS,
        TokenKind.EOF,
    ]
    assert diagnostics == []


def test_empty_source_is_just_eof():
    tokens, diagnostics = scan('')
    assert kinds(tokens) == [TokenKind.EOF]
    assert tokens[0].line == 1
    assert diagnostics == []


def test_comment_runs_to_end_of_line():
    tokens, _ = scan('1 // ignored ( ) "\n2')
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.EOF]
    assert [t.line for t in tokens] == [1, 2, 2]


def test_numbers():
    tokens, _ = scan('12.5 7 3.')
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.DOT, TokenKind.EOF]
    assert [t.literal for t in tokens[:3]] == [12.5, 7.0, 3.0]
    assert tokens[2].lexeme == '3'


def test_keywords_and_identifiers():
    tokens, _ = scan('or orchid _x1 nil')
    assert kinds(tokens) == [
        TokenKind.OR, TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.NIL, TokenKind.EOF,
    ]
    assert tokens[1].lexeme == 'orchid'


def test_multiline_string_keeps_start_line():
    tokens, diagnostics = scan('"ab\ncd" x')
    assert diagnostics == []
    assert tokens[0].kind is TokenKind.STRING
    assert tokens[0].literal == 'ab\ncd'
    assert tokens[0].line == 1
    assert tokens[1].lexeme == 'x'
    assert tokens[1].line == 2


def test_unterminated_string_reports_start_line():
    tokens, diagnostics = scan('print\n"oops\nmore')
    assert kinds(tokens) == [TokenKind.PRINT, TokenKind.EOF]
    assert len(diagnostics) == 1
    assert diagnostics[0].phase is Phase.LEXICAL
    assert diagnostics[0].kind is ErrorKind.UNTERMINATED_STRING
    assert diagnostics[0].line == 2
    assert tokens[-1].line == 3


def test_unexpected_characters_are_skipped():
    tokens, diagnostics = scan('1 @ 2\n#é')
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.EOF]
    assert [(d.kind, d.line) for d in diagnostics] == [
        (ErrorKind.UNEXPECTED_CHARACTER, 1),
        (ErrorKind.UNEXPECTED_CHARACTER, 2),
        (ErrorKind.UNEXPECTED_CHARACTER, 2),
    ]


def test_unexpected_character_keeps_its_text():
    _, diagnostics = scan('var a = 1 $ 2;')
    assert [(d.kind, d.lexeme) for d in diagnostics] == [(ErrorKind.UNEXPECTED_CHARACTER, '$')]
