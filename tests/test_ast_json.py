from pathlib import Path

import pytest

from corelang.ast_json import ast_from_obj, ast_to_obj
from corelang.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_json_tree_keeps_lines():
    program = parse_program((EXAMPLES / 'program_3.core').read_text(encoding='utf-8'))
    loaded = ast_from_obj(ast_to_obj(program))
    assert loaded == program
    assert [s.line for s in loaded.stmts.statements] == [4, 5, 6, 10]


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'ForStmt'})
