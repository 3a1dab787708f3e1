from pathlib import Path

from linea.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_no_closures(capsys):
    """A callee reads globals, not the caller's parameters, and assignment
    to an unbound name inside a function creates a global."""
    with open(EXAMPLES / 'program_8.linea', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['1', '99']
