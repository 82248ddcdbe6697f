"""Tokenizer for the CORE language.

Tokenizing is done in two steps:

1. **Scanning**: a Lark basic lexer splits the source into raw terminals.
   Reserved words, operators and punctuation each have their own terminal;
   alphanumeric runs are scanned as ``NUM`` (starts with a digit), ``ID``
   (starts with an uppercase letter) or ``WORD`` (starts with a lowercase
   letter). Reserved words win over ``WORD`` through Lark's keyword
   handling.

2. **Validation**: each raw terminal is checked against the CORE lexical
   rules (identifier shape and length, numeral shape, no unknown words)
   and converted into a :class:`Token`.

The whole text is tokenized before the parser sees the first token, and the
resulting list always ends with a single ``EOF`` token.
"""

from __future__ import annotations

import re
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import InvalidTokenError
from .tokens import Token, TokenKind, TOKEN_TEXT

MAXLEN_ID = 8

_ID_RE = re.compile(r'[A-Z]+[0-9]*')
_NUM_RE = re.compile(r'[0-9]+')

CORE_TERMINALS = r"""
    start: _token*

    _token: PROGRAM | BEGIN | END | INT | IF | THEN | ELSE | WHILE | LOOP
          | READ | WRITE | AND | OR | SEMICOL | COMMA | ASSIGN | NOT
          | LBRACK | RBRACK | LPAREN | RPAREN | PLUS | MINUS | STAR
          | NEQ | EQ | GEQ | LEQ | GT | LT | NUM | ID | WORD

    PROGRAM: "program"
    BEGIN: "begin"
    END: "end"
    INT: "int"
    IF: "if"
    THEN: "then"
    ELSE: "else"
    WHILE: "while"
    LOOP: "loop"
    READ: "read"
    WRITE: "write"
    AND: "and"
    OR: "or"

    SEMICOL: ";"
    COMMA: ","
    ASSIGN: "="
    NOT: "!"
    LBRACK: "["
    RBRACK: "]"
    LPAREN: "("
    RPAREN: ")"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    NEQ: "!="
    EQ: "=="
    GEQ: ">="
    LEQ: "<="
    GT: ">"
    LT: "<"

    NUM: /[0-9][A-Za-z0-9]*/
    ID: /[A-Z][A-Za-z0-9]*/
    WORD: /[a-z][A-Za-z0-9]*/

    %import common.WS
    %ignore WS
"""


CORE_LEXER = Lark(
    CORE_TERMINALS,
    parser='lalr',
    lexer='basic',
)


def _convert(raw) -> Token:
    """Validate a raw Lark token and convert it into a CORE token."""
    text = str(raw)
    line = raw.line
    if raw.type == 'WORD':
        raise InvalidTokenError(f"Unknown reserved word {text}", line)
    kind = TokenKind[raw.type]
    if kind == TokenKind.ID:
        if not _ID_RE.fullmatch(text) or len(text) > MAXLEN_ID:
            raise InvalidTokenError(f"Invalid identifier {text}", line)
    elif kind == TokenKind.NUM:
        if not _NUM_RE.fullmatch(text):
            raise InvalidTokenError(f"Invalid numeral {text}", line)
    return Token(kind, text, line)


def tokenize(source: str) -> List[Token]:
    """Convert CORE source text into a list of tokens ending with ``EOF``."""
    tokens: List[Token] = []
    try:
        for raw in CORE_LEXER.lex(source):
            tokens.append(_convert(raw))
    except UnexpectedCharacters as e:
        raise InvalidTokenError(f"Invalid symbol {e.char}", e.line)
    last_line = source.count('\n') + 1
    tokens.append(Token(TokenKind.EOF, TOKEN_TEXT[TokenKind.EOF], last_line))
    return tokens


def load_source(path: str) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def tokenize_file(path: str) -> List[Token]:
    """Read a program file and tokenize it. The file is closed before lexing."""
    return tokenize(load_source(path))


class TokenStream:
    """Single-lookahead view over a token list.

    ``current()`` returns the token under the cursor and ``advance()`` moves
    the cursor one token forward and returns the new current token. Once the
    ``EOF`` token is reached both keep returning it.
    """

    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self.pos = 0

    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return self.current()
