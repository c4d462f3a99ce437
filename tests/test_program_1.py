from pathlib import Path

from pylox.interpreter import run_source

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_1_hello_world(capsys):
    with open(EXAMPLES / 'program_1.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    result = run_source(source)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
    assert result.diagnostics == []
