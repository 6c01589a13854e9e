from pathlib import Path

from sprig.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_function_declarations(capsys):
    with open(EXAMPLES / 'program_5.sprig', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.interpret(ast)
    out = capsys.readouterr().out.strip()
    # the second function is declared without the 'function' keyword
    assert out.split('\n') == ['5', '6']
