"""Token definitions for the CORE language.

Token kinds keep fixed integer codes. The comparison operators occupy the
contiguous range ``NEQ..LT`` so the parser can match any of them with a
single range test.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TokenKind(IntEnum):
    PROGRAM = 1
    BEGIN = 2
    END = 3
    INT = 4
    IF = 5
    THEN = 6
    ELSE = 7
    WHILE = 8
    LOOP = 9
    READ = 10
    WRITE = 11
    AND = 12
    OR = 13
    SEMICOL = 14
    COMMA = 15
    ASSIGN = 16
    NOT = 17
    LBRACK = 18
    RBRACK = 19
    LPAREN = 20
    RPAREN = 21
    PLUS = 22
    MINUS = 23
    STAR = 24
    NEQ = 25
    EQ = 26
    GEQ = 27
    LEQ = 28
    GT = 29
    LT = 30
    NUM = 31
    ID = 32
    EOF = 33


# Surface text of every fixed token, used in error messages
TOKEN_TEXT = {
    TokenKind.PROGRAM: 'program',
    TokenKind.BEGIN: 'begin',
    TokenKind.END: 'end',
    TokenKind.INT: 'int',
    TokenKind.IF: 'if',
    TokenKind.THEN: 'then',
    TokenKind.ELSE: 'else',
    TokenKind.WHILE: 'while',
    TokenKind.LOOP: 'loop',
    TokenKind.READ: 'read',
    TokenKind.WRITE: 'write',
    TokenKind.AND: 'and',
    TokenKind.OR: 'or',
    TokenKind.SEMICOL: ';',
    TokenKind.COMMA: ',',
    TokenKind.ASSIGN: '=',
    TokenKind.NOT: '!',
    TokenKind.LBRACK: '[',
    TokenKind.RBRACK: ']',
    TokenKind.LPAREN: '(',
    TokenKind.RPAREN: ')',
    TokenKind.PLUS: '+',
    TokenKind.MINUS: '-',
    TokenKind.STAR: '*',
    TokenKind.NEQ: '!=',
    TokenKind.EQ: '==',
    TokenKind.GEQ: '>=',
    TokenKind.LEQ: '<=',
    TokenKind.GT: '>',
    TokenKind.LT: '<',
    TokenKind.NUM: 'NUM',
    TokenKind.ID: 'ID',
    TokenKind.EOF: '~EOF~',
}


def describe(kind: TokenKind) -> str:
    """Human readable name of a token kind, e.g. ``';'`` or ``ID``."""
    text = TOKEN_TEXT[kind]
    if kind in (TokenKind.NUM, TokenKind.ID, TokenKind.EOF):
        return text
    return f"'{text}'"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int

    def __str__(self) -> str:
        return str(int(self.kind))
