from pathlib import Path

import pytest

from sprig.errors import DivisionByZero
from sprig.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_9_division_by_zero_aborts(capsys):
    with open(EXAMPLES / 'program_9.sprig', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(DivisionByZero):
        interp.interpret(ast)
    out = capsys.readouterr().out.strip()
    # nothing after the failing statement runs
    assert out == 'before'
