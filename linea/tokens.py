"""Token definitions for the Linea language.

Every token produced by the lexer carries its kind, the exact lexeme it
was built from, and the position of its first character in the source.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    NUMBER = 'NUMBER'
    STRING = 'STRING'
    IDENT = 'IDENT'
    PLUS = 'PLUS'
    MINUS = 'MINUS'
    TIMES = 'TIMES'
    DIV = 'DIV'
    LPAREN = 'LPAREN'
    RPAREN = 'RPAREN'
    IF = 'IF'
    THEN = 'THEN'
    ELSE = 'ELSE'
    LET = 'LET'
    FUNC = 'FUNC'
    RETURN = 'RETURN'
    WHILE = 'WHILE'
    DO = 'DO'
    PRINT = 'PRINT'
    EQ = 'EQ'
    NEQ = 'NEQ'
    LE = 'LE'
    GE = 'GE'
    LT = 'LT'
    GT = 'GT'
    ASSIGN = 'ASSIGN'
    LBRACE = 'LBRACE'
    RBRACE = 'RBRACE'
    SEMI = 'SEMI'
    COMMA = 'COMMA'

    def __str__(self) -> str:
        return self.value


KEYWORDS = frozenset({
    TokenKind.IF, TokenKind.THEN, TokenKind.ELSE, TokenKind.LET,
    TokenKind.FUNC, TokenKind.RETURN, TokenKind.WHILE, TokenKind.DO,
    TokenKind.PRINT,
})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.kind} {self.lexeme!r}"
