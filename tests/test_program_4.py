from pathlib import Path

from pylox.interpreter import run_source

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_4_logical_operators(capsys):
    with open(EXAMPLES / 'program_4.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    result = run_source(source)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['hi', 'yes', 'nil', '2', 'false', 'true', 'false', 'true']
    # `undeclared` is never looked up
    assert result.diagnostics == []
