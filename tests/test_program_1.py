from pathlib import Path

from sprig.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1_hello_world(capsys):
    with open(EXAMPLES / 'program_1.sprig', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
