from pathlib import Path

from pylox.errors import ErrorKind, Phase
from pylox.interpreter import run_source

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_8_collects_runtime_errors(capsys):
    with open(EXAMPLES / 'program_8.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    result = run_source(source)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['start', 'still in block', 'end']
    assert [(d.kind, d.line) for d in result.diagnostics] == [
        (ErrorKind.TYPE_MISMATCH_UNARY, 2),
        (ErrorKind.TYPE_MISMATCH_BINARY, 3),
        (ErrorKind.UNDEFINED_VARIABLE, 4),
        (ErrorKind.UNDEFINED_VARIABLE, 5),
        (ErrorKind.TYPE_MISMATCH_BINARY, 8),
    ]
    assert all(d.phase is Phase.RUNTIME for d in result.diagnostics)
    assert result.had_runtime_error
    assert not result.had_error
