from pathlib import Path

from corelang.environment import SymbolTable
from corelang.interpreter import Interpreter
from corelang.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1_assign_and_write(capsys):
    with open(EXAMPLES / 'program_1.core', 'r', encoding='utf-8') as f:
        source = f.read()
    symbols = SymbolTable()
    ast = parse_program(source, symbols)
    interp = Interpreter()
    interp.run(ast, symbols)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['X = 2', 'Y = 7']
    assert symbols.get('Y') == 7
