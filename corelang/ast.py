"""Syntax tree definitions for the CORE language.

One dataclass per grammar alternative. Each syntactic category
(statement, expression, term, factor, condition) has a base class and a
closed set of variants; the printer and the interpreter dispatch on the
concrete variant. Every node records the line of its first token. Line
numbers are excluded from equality so two parses of the same program
compare equal regardless of layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Node:
    """Base class for all syntax tree nodes."""
    pass


# Factors

@dataclass
class Factor(Node):
    pass


@dataclass
class NumberFactor(Factor):
    value: int
    line: int = field(compare=False)


@dataclass
class IdentFactor(Factor):
    name: str
    line: int = field(compare=False)


@dataclass
class ParenFactor(Factor):
    exp: Expression
    line: int = field(compare=False)


# Terms: Fac ('*' Term)?

@dataclass
class Term(Node):
    pass


@dataclass
class FactorTerm(Term):
    factor: Factor
    line: int = field(compare=False)


@dataclass
class MulTerm(Term):
    factor: Factor
    term: Term
    line: int = field(compare=False)


# Expressions: Term (('+'|'-') Exp)?

@dataclass
class Expression(Node):
    pass


@dataclass
class TermExp(Expression):
    term: Term
    line: int = field(compare=False)


@dataclass
class PlusExp(Expression):
    term: Term
    exp: Expression
    line: int = field(compare=False)


@dataclass
class MinusExp(Expression):
    term: Term
    exp: Expression
    line: int = field(compare=False)


# Conditions

@dataclass
class Comparison(Node):
    op: str  # one of != == >= <= > <
    left: Factor
    right: Factor
    line: int = field(compare=False)


@dataclass
class Condition(Node):
    pass


@dataclass
class CompCond(Condition):
    comparison: Comparison
    line: int = field(compare=False)


@dataclass
class NotCond(Condition):
    cond: Condition
    line: int = field(compare=False)


@dataclass
class AndCond(Condition):
    left: Condition
    right: Condition
    line: int = field(compare=False)


@dataclass
class OrCond(Condition):
    left: Condition
    right: Condition
    line: int = field(compare=False)


# Statements

@dataclass
class Statement(Node):
    pass


@dataclass
class StmtList(Node):
    statements: List[Statement]
    line: int = field(compare=False)


@dataclass
class Assign(Statement):
    target: str
    exp: Expression
    line: int = field(compare=False)


@dataclass
class IfStmt(Statement):
    condition: Condition
    then_body: StmtList
    else_body: Optional[StmtList]
    line: int = field(compare=False)


@dataclass
class WhileStmt(Statement):
    condition: Condition
    body: StmtList
    line: int = field(compare=False)


@dataclass
class ReadStmt(Statement):
    names: List[str]
    line: int = field(compare=False)


@dataclass
class WriteStmt(Statement):
    names: List[str]
    line: int = field(compare=False)


# Declarations and program

@dataclass
class Decl(Node):
    names: List[str]
    line: int = field(compare=False)


@dataclass
class DeclList(Node):
    decls: List[Decl]
    line: int = field(compare=False)

    @property
    def names(self) -> List[str]:
        return [name for decl in self.decls for name in decl.names]


@dataclass
class Program(Node):
    decls: DeclList
    stmts: StmtList
    line: int = field(compare=False)
