"""Pretty-printer for CORE syntax trees.

Renders a parsed program back to canonical source text: two spaces per
block level, one declaration or statement per line. The ``format_*``
helpers for expressions and conditions are also used by the interpreter to
quote the failing expression in error messages.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Program, Decl, StmtList, Statement, Assign, IfStmt, WhileStmt, ReadStmt,
    WriteStmt, Expression, TermExp, PlusExp, MinusExp, Term, FactorTerm,
    MulTerm, Factor, NumberFactor, IdentFactor, ParenFactor, Condition,
    CompCond, NotCond, AndCond, OrCond, Comparison,
)

INDENT = '  '


def format_factor(node: Factor) -> str:
    if isinstance(node, IdentFactor):
        return node.name
    if isinstance(node, NumberFactor):
        return str(node.value)
    if isinstance(node, ParenFactor):
        return f"( {format_exp(node.exp)} )"
    raise NotImplementedError(f"format_factor: unexpected node type {type(node)}")


def format_term(node: Term) -> str:
    parts = []
    while isinstance(node, MulTerm):
        parts.append(format_factor(node.factor))
        node = node.term
    if not isinstance(node, FactorTerm):
        raise NotImplementedError(f"format_term: unexpected node type {type(node)}")
    parts.append(format_factor(node.factor))
    return ' * '.join(parts)


def format_exp(node: Expression) -> str:
    parts = []
    while isinstance(node, (PlusExp, MinusExp)):
        parts.append(format_term(node.term))
        parts.append('+' if isinstance(node, PlusExp) else '-')
        node = node.exp
    if not isinstance(node, TermExp):
        raise NotImplementedError(f"format_exp: unexpected node type {type(node)}")
    parts.append(format_term(node.term))
    return ' '.join(parts)


def format_comparison(node: Comparison) -> str:
    return f"( {format_factor(node.left)} {node.op} {format_factor(node.right)} )"


def format_cond(node: Condition) -> str:
    if isinstance(node, CompCond):
        return format_comparison(node.comparison)
    if isinstance(node, NotCond):
        return f"!{format_cond(node.cond)}"
    if isinstance(node, AndCond):
        return f"[ {format_cond(node.left)} and {format_cond(node.right)} ]"
    if isinstance(node, OrCond):
        return f"[ {format_cond(node.left)} or {format_cond(node.right)} ]"
    raise NotImplementedError(f"format_cond: unexpected node type {type(node)}")


def format_decl(node: Decl, level: int) -> str:
    return f"{INDENT * level}int {', '.join(node.names)};"


def format_statement(node: Statement, level: int) -> List[str]:
    pad = INDENT * level
    if isinstance(node, Assign):
        return [f"{pad}{node.target} = {format_exp(node.exp)};"]
    if isinstance(node, IfStmt):
        lines = [f"{pad}if {format_cond(node.condition)} then"]
        lines.extend(format_stmt_list(node.then_body, level + 1))
        if node.else_body is not None:
            lines.append(f"{pad}else")
            lines.extend(format_stmt_list(node.else_body, level + 1))
        lines.append(f"{pad}end;")
        return lines
    if isinstance(node, WhileStmt):
        lines = [f"{pad}while {format_cond(node.condition)} loop"]
        lines.extend(format_stmt_list(node.body, level + 1))
        lines.append(f"{pad}end;")
        return lines
    if isinstance(node, ReadStmt):
        return [f"{pad}read {', '.join(node.names)};"]
    if isinstance(node, WriteStmt):
        return [f"{pad}write {', '.join(node.names)};"]
    raise NotImplementedError(f"format_statement: unexpected node type {type(node)}")


def format_stmt_list(node: StmtList, level: int) -> List[str]:
    lines: List[str] = []
    for stmt in node.statements:
        lines.extend(format_statement(stmt, level))
    return lines


def format_program(program: Program) -> str:
    """Render a whole program as text (no trailing newline)."""
    lines = ['program']
    for decl in program.decls.decls:
        lines.append(format_decl(decl, 1))
    lines.append(f"{INDENT}begin")
    lines.extend(format_stmt_list(program.stmts, 2))
    lines.append(f"{INDENT}end")
    return '\n'.join(lines)


def print_program(program: Program) -> None:
    print(format_program(program))
