import pytest

from corelang.console import Console
from corelang.errors import EndOfInputError, InvalidInputError
from corelang.types import parse_int32


def make_console(answers):
    it = iter(answers)
    prompts = []
    written = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(it)

    return Console(input_fn=fake_input, output_fn=written.append), prompts, written


def test_read_valid_integer():
    console, prompts, written = make_console(['  42 '])
    assert console.read_int('X') == 42
    assert prompts == ['X =? ']
    assert written == []


def test_read_retries_until_valid():
    console, prompts, written = make_console(['', 'abc', '1.5', '2147483648', '-2147483649', '+7'])
    assert console.read_int('COUNT') == 7
    assert prompts == ['COUNT =? '] * 6
    assert len(written) == 5
    assert written[1] == "Invalid input 'abc': expected an integer in [-2147483648, 2147483647]"


def test_read_bounds():
    console, _, _ = make_console(['-2147483648', '2147483647'])
    assert console.read_int('X') == -2147483648
    assert console.read_int('X') == 2147483647


def test_read_closed_input():
    def closed(prompt):
        raise EOFError

    console = Console(input_fn=closed, output_fn=lambda *args: None)
    with pytest.raises(EndOfInputError) as excinfo:
        console.read_int('X', 9)
    assert excinfo.value.line == 9


def test_write_format():
    console, _, written = make_console([])
    console.write('TOTAL', -3)
    assert written == ['TOTAL = -3']


@pytest.mark.parametrize('text', ['', ' ', '--1', '1e3', '0x10', '12 3'])
def test_parse_int32_rejects(text):
    with pytest.raises(InvalidInputError):
        parse_int32(text)
