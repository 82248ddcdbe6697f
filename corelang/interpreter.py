"""Interpreter for the CORE language.

This module walks a parsed :class:`~corelang.ast.Program` and executes its
statements in order against a :class:`~corelang.environment.SymbolTable`.
Values are Python integers range-checked to 32 bits after every arithmetic
operation. Any error aborts the run; the only local recovery is the retry
loop for malformed console input in ``read`` statements.
"""

from __future__ import annotations

import operator
from typing import Optional

from .ast import (
    Program, StmtList, Statement, Assign, IfStmt, WhileStmt, ReadStmt,
    WriteStmt, Expression, TermExp, PlusExp, MinusExp, Term, FactorTerm,
    MulTerm, Factor, NumberFactor, IdentFactor, ParenFactor, Condition,
    CompCond, NotCond, AndCond, OrCond, Comparison,
)
from .console import Console
from .environment import SymbolTable
from .errors import UninitializedError
from .lexer import load_source
from .parser import parse_program
from .printer import format_exp, format_term
from .types import check_int32

COMPARISONS = {
    '!=': operator.ne,
    '==': operator.eq,
    '>=': operator.ge,
    '<=': operator.le,
    '>': operator.gt,
    '<': operator.lt,
}


class Interpreter:
    """Executes CORE syntax trees."""
    def __init__(self, console: Optional[Console] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt'):
        self.console = console if console is not None else Console()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    # Public API
    def run(self, program: Program, symbols: Optional[SymbolTable] = None) -> SymbolTable:
        """Run ``program`` and return the symbol table holding the final values.

        ``symbols`` should be the table the program was parsed with. When it
        is omitted (e.g. for a tree loaded from JSON) a fresh table is built
        from the program's declarations.
        """
        if symbols is None:
            symbols = SymbolTable()
            for decl in program.decls.decls:
                for name in decl.names:
                    symbols.declare(name, decl.line)
        try:
            self.execute_block(program.stmts, symbols)
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None
        return symbols

    def execute_block(self, block: StmtList, symbols: SymbolTable):
        for stmt in block.statements:
            self.execute(stmt, symbols)

    def execute(self, node: Statement, symbols: SymbolTable):
        if self.debug_level >= 1:
            self.debug(f"line {node.line}: {type(node).__name__}")
        if isinstance(node, Assign):
            value = self.evaluate(node.exp, symbols)
            symbols.set(node.target, value, node.line)
            if self.debug_level >= 2:
                self.debug(f"store {node.target} = {value}")
            return
        if isinstance(node, IfStmt):
            if self.test(node.condition, symbols):
                self.execute_block(node.then_body, symbols)
            elif node.else_body is not None:
                self.execute_block(node.else_body, symbols)
            return
        if isinstance(node, WhileStmt):
            while self.test(node.condition, symbols):
                self.execute_block(node.body, symbols)
            return
        if isinstance(node, ReadStmt):
            for name in node.names:
                value = self.console.read_int(name, node.line)
                symbols.set(name, value, node.line)
                if self.debug_level >= 2:
                    self.debug(f"store {name} = {value}")
            return
        if isinstance(node, WriteStmt):
            # Check every variable before printing so a failing write
            # produces no output at all.
            values = [self.lookup(name, node.line, symbols) for name in node.names]
            for name, value in zip(node.names, values):
                self.console.write(name, value)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def lookup(self, name: str, line: int, symbols: SymbolTable) -> int:
        value = symbols.get(name, line)
        if value is None:
            raise UninitializedError(f"Variable {name} is used before initialization", line)
        return value

    def evaluate(self, node: Expression, symbols: SymbolTable) -> int:
        # Terms are evaluated left to right, then the right spine is folded
        # from its innermost node outward.
        spine = []
        while isinstance(node, (PlusExp, MinusExp)):
            spine.append((node, self.evaluate_term(node.term, symbols)))
            node = node.exp
        if not isinstance(node, TermExp):
            raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")
        value = self.evaluate_term(node.term, symbols)
        for exp, left in reversed(spine):
            result = left + value if isinstance(exp, PlusExp) else left - value
            value = check_int32(result, exp.line, lambda: format_exp(exp))
        return value

    def evaluate_term(self, node: Term, symbols: SymbolTable) -> int:
        spine = []
        while isinstance(node, MulTerm):
            spine.append((node, self.evaluate_factor(node.factor, symbols)))
            node = node.term
        if not isinstance(node, FactorTerm):
            raise NotImplementedError(f"evaluate_term: unexpected node type {type(node)}")
        value = self.evaluate_factor(node.factor, symbols)
        for term, left in reversed(spine):
            value = check_int32(left * value, term.line, lambda: format_term(term))
        return value

    def evaluate_factor(self, node: Factor, symbols: SymbolTable) -> int:
        if isinstance(node, NumberFactor):
            return node.value
        if isinstance(node, IdentFactor):
            return self.lookup(node.name, node.line, symbols)
        if isinstance(node, ParenFactor):
            return self.evaluate(node.exp, symbols)
        raise NotImplementedError(f"evaluate_factor: unexpected node type {type(node)}")

    def test(self, node: Condition, symbols: SymbolTable) -> bool:
        result = self.evaluate_cond(node, symbols)
        if self.debug_level >= 3:
            self.debug(f"condition on line {node.line} -> {result}")
        return result

    def evaluate_cond(self, node: Condition, symbols: SymbolTable) -> bool:
        if isinstance(node, CompCond):
            return self.compare(node.comparison, symbols)
        if isinstance(node, NotCond):
            return not self.evaluate_cond(node.cond, symbols)
        if isinstance(node, AndCond):
            left = self.evaluate_cond(node.left, symbols)
            right = self.evaluate_cond(node.right, symbols)
            return left and right
        if isinstance(node, OrCond):
            left = self.evaluate_cond(node.left, symbols)
            right = self.evaluate_cond(node.right, symbols)
            return left or right
        raise NotImplementedError(f"evaluate_cond: unexpected node type {type(node)}")

    def compare(self, node: Comparison, symbols: SymbolTable) -> bool:
        left = self.evaluate_factor(node.left, symbols)
        right = self.evaluate_factor(node.right, symbols)
        return COMPARISONS[node.op](left, right)


def run_program(source: str, console: Optional[Console] = None, debug_level: int = 0) -> SymbolTable:
    """Convenience function to parse and run a CORE program from source string."""
    symbols = SymbolTable()
    program = parse_program(source, symbols)
    interpreter = Interpreter(console=console, debug_level=debug_level)
    return interpreter.run(program, symbols)


def run_file(file_path: str, console: Optional[Console] = None, debug_level: int = 0) -> SymbolTable:
    """Parse and run a CORE program file, returning its final symbol table."""
    return run_program(load_source(file_path), console=console, debug_level=debug_level)
