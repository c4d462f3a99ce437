from pathlib import Path

from pylox.errors import ErrorKind, Phase
from pylox.interpreter import run_source

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_7_reports_every_syntax_error(capsys):
    with open(EXAMPLES / 'program_7.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    result = run_source(source)
    out = capsys.readouterr().out.strip().split('\n')
    # Statements around the broken ones still run
    assert out == ['before', 'middle', 'after']
    assert [(d.kind, d.line) for d in result.diagnostics] == [
        (ErrorKind.EXPECT_IDENTIFIER, 2),
        (ErrorKind.EXPECT_EXPRESSION, 4),
        (ErrorKind.EXPECT_RIGHT_PAREN, 5),
    ]
    assert all(d.phase is Phase.SYNTAX for d in result.diagnostics)
    assert result.had_error
