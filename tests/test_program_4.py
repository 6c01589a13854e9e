from pathlib import Path

from sprig.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_while_loop(capsys):
    with open(EXAMPLES / 'program_4.sprig', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip()
    # the loop body runs exactly three times
    assert out.split('\n') == ['1', '2', '3', '3']
