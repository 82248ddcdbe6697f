import builtins
from pathlib import Path

from corelang.interpreter import run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_factorial_from_input(capsys, monkeypatch):
    answers = iter(['5'])
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(answers)

    monkeypatch.setattr(builtins, 'input', fake_input)
    symbols = run_file(str(EXAMPLES / 'program_3.core'))
    out = capsys.readouterr().out.strip()
    assert out == 'F = 120'
    assert prompts == ['N =? ']
    assert symbols.get('N') == 0


def test_program_3_retries_bad_input(capsys, monkeypatch):
    answers = iter(['five', '99999999999', '3'])
    monkeypatch.setattr(builtins, 'input', lambda prompt: next(answers))
    run_file(str(EXAMPLES / 'program_3.core'))
    out = capsys.readouterr().out.strip().splitlines()
    assert out[0].startswith("Invalid input 'five'")
    assert out[1].startswith("Invalid input '99999999999'")
    assert out[2] == 'F = 6'
