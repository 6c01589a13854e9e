from pathlib import Path

from sprig.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_array_methods(capsys):
    with open(EXAMPLES / 'program_6.sprig', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip()
    assert out.split('\n') == ['[1, 2, 3, 4]', '4', '3', '10', '10-2-3', '10,2,3']
