"""Parser for the CORE language.

A recursive-descent parser with exactly one token of lookahead. Context
checks run in the same pass: an identifier is looked up in (or added to)
the symbol table the moment its token is consumed, so whichever problem
comes first in the token stream is the one that gets reported.

Grammar::

    prog    := 'program' decl+ 'begin' stmt+ 'end' EOF
    decl    := 'int' ID (',' ID)* ';'
    stmt    := assign | if | loop | in | out
    assign  := ID '=' exp ';'
    if      := 'if' cond 'then' stmt+ ('else' stmt+)? 'end' ';'
    loop    := 'while' cond 'loop' stmt+ 'end' ';'
    in      := 'read' ID (',' ID)* ';'
    out     := 'write' ID (',' ID)* ';'
    exp     := term (('+'|'-') exp)?
    term    := fac ('*' term)?
    fac     := NUM | ID | '(' exp ')'
    cond    := comp | '!' cond | '[' cond ('and'|'or') cond ']'
    comp    := '(' fac compop fac ')'

The public entry point is :func:`parse_program`.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Program, DeclList, Decl, StmtList, Statement, Assign, IfStmt, WhileStmt,
    ReadStmt, WriteStmt, Expression, TermExp, PlusExp, MinusExp, Term,
    FactorTerm, MulTerm, Factor, NumberFactor, IdentFactor, ParenFactor,
    Condition, CompCond, NotCond, AndCond, OrCond, Comparison,
)
from .environment import SymbolTable
from .errors import (
    ConsumeMismatchError, EmptySequenceError, UndeclaredError,
    UnexpectedTokenError,
)
from .lexer import TokenStream, tokenize
from .tokens import Token, TokenKind, describe
from .types import INT_MAX


class Parser:
    def __init__(self, tokens: TokenStream, symbols: SymbolTable):
        self.tokens = tokens
        self.symbols = symbols

    def peek(self) -> Token:
        return self.tokens.current()

    def match(self, kind: TokenKind) -> bool:
        return self.peek().kind == kind

    def consume(self, kind: TokenKind) -> Token:
        token = self.peek()
        if kind != TokenKind.EOF and token.kind == TokenKind.EOF:
            raise UnexpectedTokenError(
                f"Unexpected EOF while scanning for {describe(kind)}", token.line)
        if token.kind != kind:
            raise ConsumeMismatchError(
                f"Expected {describe(kind)}, got '{token.text}'", token.line)
        self.tokens.advance()
        return token

    def consume_range(self, low: TokenKind, high: TokenKind) -> Token:
        """Consume one token whose kind lies in ``low..high`` (inclusive)."""
        token = self.peek()
        if not low <= token.kind <= high:
            expected = f"token between {describe(low)} and {describe(high)}"
            if token.kind == TokenKind.EOF:
                raise UnexpectedTokenError(
                    f"Unexpected EOF while scanning for {expected}", token.line)
            raise ConsumeMismatchError(
                f"Expected {expected}, got '{token.text}'", token.line)
        self.tokens.advance()
        return token

    def unexpected(self, what: str) -> UnexpectedTokenError:
        token = self.peek()
        if token.kind == TokenKind.EOF:
            return UnexpectedTokenError(f"Unexpected EOF while scanning for {what}", token.line)
        return UnexpectedTokenError(f"Expected {what}, got '{token.text}'", token.line)

    def consume_declared(self) -> Token:
        token = self.consume(TokenKind.ID)
        if not self.symbols.contains(token.text):
            raise UndeclaredError(f"Using undeclared variable {token.text}", token.line)
        return token

    def parse_program(self) -> Program:
        start = self.consume(TokenKind.PROGRAM)
        decls = self.parse_decl_list()
        self.consume(TokenKind.BEGIN)
        stmts = self.parse_stmt_list()
        self.consume(TokenKind.END)
        self.consume(TokenKind.EOF)
        return Program(decls, stmts, start.line)

    def parse_decl_list(self) -> DeclList:
        line = self.peek().line
        decls: List[Decl] = []
        while self.match(TokenKind.INT):
            decls.append(self.parse_decl())
        if not decls:
            self.check_not_eof('declaration')
            raise EmptySequenceError("Declaration sequence is empty", self.peek().line)
        return DeclList(decls, line)

    def parse_decl(self) -> Decl:
        start = self.consume(TokenKind.INT)
        names: List[str] = []
        while True:
            token = self.consume(TokenKind.ID)
            self.symbols.declare(token.text, token.line)
            names.append(token.text)
            if not self.match(TokenKind.COMMA):
                break
            self.consume(TokenKind.COMMA)
        self.consume(TokenKind.SEMICOL)
        return Decl(names, start.line)

    def parse_stmt_list(self) -> StmtList:
        line = self.peek().line
        statements: List[Statement] = []
        while True:
            kind = self.peek().kind
            if kind in (TokenKind.END, TokenKind.ELSE, TokenKind.EOF):
                break
            statements.append(self.parse_statement())
        if not statements:
            self.check_not_eof('statement')
            raise EmptySequenceError("Statement sequence is empty", self.peek().line)
        return StmtList(statements, line)

    def check_not_eof(self, what: str):
        token = self.peek()
        if token.kind == TokenKind.EOF:
            raise UnexpectedTokenError(f"Unexpected EOF while scanning for {what}", token.line)

    def parse_statement(self) -> Statement:
        kind = self.peek().kind
        if kind == TokenKind.ID:
            return self.parse_assign()
        if kind == TokenKind.IF:
            return self.parse_if()
        if kind == TokenKind.WHILE:
            return self.parse_while()
        if kind == TokenKind.READ:
            start = self.consume(TokenKind.READ)
            return ReadStmt(self.parse_id_list(), start.line)
        if kind == TokenKind.WRITE:
            start = self.consume(TokenKind.WRITE)
            return WriteStmt(self.parse_id_list(), start.line)
        raise self.unexpected('statement')

    def parse_assign(self) -> Assign:
        target = self.consume_declared()
        self.consume(TokenKind.ASSIGN)
        exp = self.parse_exp()
        self.consume(TokenKind.SEMICOL)
        return Assign(target.text, exp, target.line)

    def parse_if(self) -> IfStmt:
        start = self.consume(TokenKind.IF)
        condition = self.parse_cond()
        self.consume(TokenKind.THEN)
        then_body = self.parse_stmt_list()
        else_body: Optional[StmtList] = None
        if self.match(TokenKind.ELSE):
            self.consume(TokenKind.ELSE)
            else_body = self.parse_stmt_list()
        self.consume(TokenKind.END)
        self.consume(TokenKind.SEMICOL)
        return IfStmt(condition, then_body, else_body, start.line)

    def parse_while(self) -> WhileStmt:
        start = self.consume(TokenKind.WHILE)
        condition = self.parse_cond()
        self.consume(TokenKind.LOOP)
        body = self.parse_stmt_list()
        self.consume(TokenKind.END)
        self.consume(TokenKind.SEMICOL)
        return WhileStmt(condition, body, start.line)

    def parse_id_list(self) -> List[str]:
        # ID (',' ID)* ';' where every ID must already be declared
        names = [self.consume_declared().text]
        while self.match(TokenKind.COMMA):
            self.consume(TokenKind.COMMA)
            names.append(self.consume_declared().text)
        self.consume(TokenKind.SEMICOL)
        return names

    # Expressions are right-recursive: 'A - B - C' is A - (B - C). The right
    # spine is read in a loop and folded from the right.
    def parse_exp(self) -> Expression:
        spine = []
        while True:
            line = self.peek().line
            term = self.parse_term()
            if self.match(TokenKind.PLUS):
                self.consume(TokenKind.PLUS)
                spine.append((PlusExp, term, line))
            elif self.match(TokenKind.MINUS):
                self.consume(TokenKind.MINUS)
                spine.append((MinusExp, term, line))
            else:
                break
        node: Expression = TermExp(term, line)
        for cls, left, left_line in reversed(spine):
            node = cls(left, node, left_line)
        return node

    def parse_term(self) -> Term:
        spine = []
        while True:
            line = self.peek().line
            factor = self.parse_factor()
            if not self.match(TokenKind.STAR):
                break
            self.consume(TokenKind.STAR)
            spine.append((factor, line))
        node: Term = FactorTerm(factor, line)
        for left, left_line in reversed(spine):
            node = MulTerm(left, node, left_line)
        return node

    def parse_factor(self) -> Factor:
        token = self.peek()
        if token.kind == TokenKind.ID:
            self.consume_declared()
            return IdentFactor(token.text, token.line)
        if token.kind == TokenKind.NUM:
            self.consume(TokenKind.NUM)
            value = int(token.text)
            if value > INT_MAX:
                raise UnexpectedTokenError(
                    f"Numeral {token.text} does not fit in a 32-bit integer", token.line)
            return NumberFactor(value, token.line)
        if token.kind == TokenKind.LPAREN:
            self.consume(TokenKind.LPAREN)
            exp = self.parse_exp()
            self.consume(TokenKind.RPAREN)
            return ParenFactor(exp, token.line)
        raise self.unexpected('factor')

    def parse_cond(self) -> Condition:
        token = self.peek()
        if token.kind == TokenKind.LPAREN:
            return CompCond(self.parse_comparison(), token.line)
        if token.kind == TokenKind.NOT:
            self.consume(TokenKind.NOT)
            return NotCond(self.parse_cond(), token.line)
        if token.kind == TokenKind.LBRACK:
            self.consume(TokenKind.LBRACK)
            left = self.parse_cond()
            if self.match(TokenKind.AND):
                self.consume(TokenKind.AND)
                right = self.parse_cond()
                node: Condition = AndCond(left, right, token.line)
            elif self.match(TokenKind.OR):
                self.consume(TokenKind.OR)
                right = self.parse_cond()
                node = OrCond(left, right, token.line)
            else:
                raise self.unexpected("'and' or 'or'")
            self.consume(TokenKind.RBRACK)
            return node
        raise self.unexpected('condition')

    def parse_comparison(self) -> Comparison:
        start = self.consume(TokenKind.LPAREN)
        left = self.parse_factor()
        op = self.consume_range(TokenKind.NEQ, TokenKind.LT)
        right = self.parse_factor()
        self.consume(TokenKind.RPAREN)
        return Comparison(op.text, left, right, start.line)


def parse_tokens(tokens: List[Token], symbols: Optional[SymbolTable] = None) -> Program:
    """Parse a token list, declaring variables into ``symbols``."""
    if symbols is None:
        symbols = SymbolTable()
    parser = Parser(TokenStream(tokens), symbols)
    try:
        return parser.parse_program()
    except RecursionError:
        raise UnexpectedTokenError(
            "Expression is nested too deeply", parser.peek().line) from None


def parse_program(source: str, symbols: Optional[SymbolTable] = None) -> Program:
    """Parse CORE source code into a Program tree.

    Variables are declared into ``symbols`` (a fresh table when omitted);
    pass the same table to the interpreter to run the program.
    """
    return parse_tokens(tokenize(source), symbols)
