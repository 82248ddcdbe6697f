import pytest

from corelang.console import Console
from corelang.environment import SymbolTable
from corelang.errors import (
    IntegerOverflowError, IntegerUnderflowError, OverflowUnderflowError,
    UninitializedError,
)
from corelang.interpreter import Interpreter, run_program
from corelang.parser import parse_program
from corelang.types import check_int32


def test_overflow():
    with pytest.raises(IntegerOverflowError) as excinfo:
        run_program("program int X; begin X = 2147483647 + 1; end")
    assert isinstance(excinfo.value, OverflowUnderflowError)
    assert excinfo.value.line == 1
    assert '2147483647 + 1' in excinfo.value.message


def test_max_value_plus_zero(capsys):
    symbols = run_program("program int X; begin X = 2147483647 + 0; write X; end")
    assert capsys.readouterr().out.strip() == 'X = 2147483647'
    assert symbols.get('X') == 2147483647


def test_underflow(capsys):
    source = (
        "program int X, Y;\n"
        "begin\n"
        "  X = 0 - 2147483647;\n"
        "  Y = X - 1;\n"
        "  write Y;\n"
        "  Y = Y - 1;\n"
        "  write Y;\n"
        "end\n"
    )
    with pytest.raises(IntegerUnderflowError) as excinfo:
        run_program(source)
    assert capsys.readouterr().out.strip() == 'Y = -2147483648'
    assert excinfo.value.line == 6
    assert 'Y - 1' in excinfo.value.message


def test_min_value_minus_one_from_table():
    symbols = SymbolTable()
    program = parse_program("program int X, Y; begin Y = X - 1; end", symbols)
    symbols.set('X', -2147483648)
    with pytest.raises(IntegerUnderflowError):
        Interpreter().run(program, symbols)


def test_multiplication_overflow():
    with pytest.raises(IntegerOverflowError) as excinfo:
        run_program("program int X; begin X = 65536 * 65536; end")
    assert '65536 * 65536' in excinfo.value.message


def test_overflow_inside_parentheses():
    with pytest.raises(IntegerOverflowError):
        run_program("program int X; begin X = 1 * ( 2147483647 + 1 ); end")


def test_intermediate_result_is_checked():
    # 2147483647 + 1 - 1 groups as 2147483647 + (1 - 1)
    symbols = run_program("program int X; begin X = 2147483647 + 1 - 1; end")
    assert symbols.get('X') == 2147483647
    with pytest.raises(IntegerOverflowError):
        run_program("program int X; begin X = ( 2147483647 + 1 ) - 1; end")


def test_write_uninitialized(capsys):
    with pytest.raises(UninitializedError) as excinfo:
        run_program("program int X; begin write X; end")
    assert excinfo.value.line == 1
    assert capsys.readouterr().out == ''


def test_write_uninitialized_reports_write_line():
    with pytest.raises(UninitializedError) as excinfo:
        run_program("program\n  int X;\nbegin\n  write X;\nend")
    assert excinfo.value.line == 4
    assert str(excinfo.value).startswith("Runtime Error: [Line 4]")


def test_write_after_assign(capsys):
    run_program("program int X; begin X = 0; write X; end")
    assert capsys.readouterr().out.strip() == 'X = 0'


def test_write_list_checks_every_variable_first(capsys):
    with pytest.raises(UninitializedError):
        run_program("program int X, Y; begin X = 1; write X, Y; end")
    assert capsys.readouterr().out == ''


def test_uninitialized_in_expression():
    with pytest.raises(UninitializedError):
        run_program("program int X, Y; begin Y = X + 1; end")


def test_uninitialized_in_condition():
    with pytest.raises(UninitializedError):
        run_program("program int X, Y; begin Y = 1; if [ ( Y > 0 ) or ( X > 0 ) ] then Y = 2; end; end")


def test_else_branch(capsys):
    run_program("program int X; begin X = 1; if !( X == 1 ) then write X; else X = 7; write X; end; end")
    assert capsys.readouterr().out.strip() == 'X = 7'


def test_while_loop_counts_down(capsys):
    run_program(
        "program int X, S; begin X = 4; S = 0;"
        " while ( X > 0 ) loop S = S + X; X = X - 1; end; write S; end"
    )
    assert capsys.readouterr().out.strip() == 'S = 10'


def test_while_loop_that_never_runs(capsys):
    run_program("program int X; begin X = 0; while ( X > 0 ) loop write X; end; write X; end")
    assert capsys.readouterr().out.strip() == 'X = 0'


def test_nested_loops(capsys):
    run_program(
        "program int I, J, N; begin I = 0; N = 0;"
        " while ( I < 3 ) loop J = 0;"
        "  while ( J < 2 ) loop N = N + 1; J = J + 1; end;"
        "  I = I + 1; end;"
        " write N; end"
    )
    assert capsys.readouterr().out.strip() == 'N = 6'


@pytest.mark.parametrize('op, expected', [
    ('!=', True), ('==', False), ('>=', True), ('<=', False), ('>', True), ('<', False),
])
def test_comparison_operators(op, expected, capsys):
    run_program(f"program int X; begin X = 0; if ( 2 {op} 1 ) then X = 1; end; write X; end")
    assert capsys.readouterr().out.strip() == ('X = 1' if expected else 'X = 0')


def test_read_assigns_values():
    answers = iter(['3', '-4'])
    written = []
    console = Console(input_fn=lambda prompt: next(answers), output_fn=written.append)
    symbols = SymbolTable()
    program = parse_program("program int X, Y; begin read X, Y; Y = X * Y; write Y; end", symbols)
    Interpreter(console=console).run(program, symbols)
    assert written == ['Y = -12']
    assert symbols.get('X') == 3


def test_run_without_table_builds_one_from_declarations(capsys):
    program = parse_program("program int X; begin X = 3; write X; end")
    symbols = Interpreter().run(program)
    assert symbols.names == ['X']
    assert capsys.readouterr().out.strip() == 'X = 3'


def test_debug_trace(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    symbols = SymbolTable()
    program = parse_program("program int X; begin X = 2; if ( X > 1 ) then X = 3; end; end", symbols)
    interp = Interpreter(debug_level=3, debug_file=str(debug_file))
    interp.run(program, symbols)
    trace = debug_file.read_text().splitlines()
    assert 'line 1: Assign' in trace
    assert 'store X = 2' in trace
    assert 'condition on line 1 -> True' in trace
    assert 'store X = 3' in trace


def test_debug_file_closed_after_error(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=1, debug_file=str(debug_file))
    with pytest.raises(UninitializedError):
        interp.run(parse_program("program int X; begin write X; end"))
    assert interp.debug_fp is None
    assert debug_file.read_text().splitlines() == ['line 1: WriteStmt']


def test_range_check_renders_expression_only_on_error():
    rendered = []

    def render():
        rendered.append(True)
        return 'X + 1'

    assert check_int32(2147483647, 1, render) == 2147483647
    assert check_int32(-2147483648, 1, render) == -2147483648
    assert rendered == []
    with pytest.raises(IntegerOverflowError) as excinfo:
        check_int32(2147483648, 3, render)
    assert rendered == [True]
    assert excinfo.value.line == 3
    assert excinfo.value.message == 'Integer overflow evaluating X + 1: 2147483648 > 2147483647'


def test_long_sum():
    symbols = run_program("program int X; begin X = " + " + ".join(['1'] * 1200) + "; end")
    assert symbols.get('X') == 1200


def test_long_difference_groups_right():
    # 1 - (1 - (1 - ...)) alternates between 1 and 0
    symbols = run_program("program int X; begin X = " + " - ".join(['1'] * 1201) + "; end")
    assert symbols.get('X') == 1


def test_long_sum_in_loop(capsys):
    sum_text = " + ".join(['1'] * 300)
    run_program(
        "program int I, S; begin I = 0; S = 0;"
        f" while ( I < 200 ) loop S = S + {sum_text}; I = I + 1; end; write S; end"
    )
    assert capsys.readouterr().out.strip() == 'S = 60000'


def test_long_product_overflow_reports_innermost_failing_term():
    with pytest.raises(IntegerOverflowError) as excinfo:
        run_program("program int X; begin X = " + " * ".join(['2'] * 40) + "; end")
    failing = " * ".join(['2'] * 31)
    assert f"evaluating {failing}: 2147483648 > 2147483647" in excinfo.value.message
