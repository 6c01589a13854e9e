from pathlib import Path

from sprig.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_arithmetic_precedence(capsys):
    with open(EXAMPLES / 'program_2.sprig', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip()
    assert out.split('\n') == ['13', '7', '30', '2.5', '810', '14', '20']
