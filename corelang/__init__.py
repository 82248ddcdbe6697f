# CORE language package
# This package provides a tokenizer, parser, pretty-printer and interpreter for CORE programs.
from .errors import CoreError
from .interpreter import run_program, run_file, Interpreter
from .parser import parse_program
from .printer import format_program

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'format_program',
    'Interpreter',
    'CoreError',
]
