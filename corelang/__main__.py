"""CLI entry point for the CORE interpreter.

Usage:
    python -m corelang [-v|-vv|-vvv] [-t|-p|-i] <program_file>
    python -m corelang [-v...] --emit-ast <program_file>
    python -m corelang [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  -t            Run the tokenizer only and print token codes
  -p            Parse and pretty-print the program
  -i            Parse and execute the program (default)
  --emit-ast    Parse the given program file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are reported on stderr and the
process exits with the error's exit code.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .environment import SymbolTable
from .errors import CoreError
from .interpreter import Interpreter
from .lexer import load_source, tokenize
from .parser import parse_program
from .printer import print_program


def _require_file(path: str) -> Path:
    file_path = Path(path)
    if not file_path.exists():
        print(f"Error: file {file_path} not found", file=sys.stderr)
        sys.exit(1)
    return file_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="CORE language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-t', dest='mode', action='store_const', const='tokens', help='run the tokenizer only')
    group.add_argument('-p', dest='mode', action='store_const', const='print', help='parse and pretty-print')
    group.add_argument('-i', dest='mode', action='store_const', const='run', help='parse and execute (default)')
    group.add_argument('--emit-ast', metavar='CORE_FILE', help='emit AST JSON for the given program file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='CORE program file to process')
    args = parser.parse_args(argv)

    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = _require_file(args.emit_ast)
            program = parse_program(load_source(str(program_file)))
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Execute from AST JSON
        if args.ast:
            ast_path = _require_file(args.ast)
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            program = ast_from_obj(data)
            Interpreter(debug_level=args.v).run(program)
            return

        if not args.program:
            parser.error('missing program file; or use --emit-ast/--ast')
        program_file = _require_file(args.program)
        source = load_source(str(program_file))

        if args.mode == 'tokens':
            for token in tokenize(source):
                print(token)
            return

        symbols = SymbolTable()
        program = parse_program(source, symbols)
        if args.mode == 'print':
            print_program(program)
            return
        Interpreter(debug_level=args.v).run(program, symbols)
    except CoreError as e:
        print(str(e), file=sys.stderr)
        sys.exit(e.exit_code)


if __name__ == '__main__':
    main()
