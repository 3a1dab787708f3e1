"""Lexer for the Linea language.

The terminal table below is compiled once, at import time, into a lark
basic lexer. Lark orders the terminals so that the longest literal wins
(``<=`` before ``<``, ``==`` before ``=``) and folds the keyword literals
into the IDENT pattern: a word becomes a keyword only when the whole word
matches, so ``iffy`` and ``letter`` stay identifiers.

The grammar's single rule exists only so that lark keeps every terminal;
parsing proper is done by :mod:`linea.parser`.
"""

from __future__ import annotations

from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError
from .tokens import Token, TokenKind


LINEA_TERMINALS = r"""
    start: _token*
    _token: NUMBER | STRING | IDENT
          | PLUS | MINUS | TIMES | DIV | LPAREN | RPAREN
          | IF | THEN | ELSE | LET | FUNC | RETURN | WHILE | DO | PRINT
          | EQ | NEQ | LE | GE | LT | GT | ASSIGN
          | LBRACE | RBRACE | SEMI | COMMA

    NUMBER: /\d+(\.\d+)?/
    STRING: /"(?:[^"\\\n]|\\.)*"/ | /'(?:[^'\\\n]|\\.)*'/
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/

    IF: "if"
    THEN: "then"
    ELSE: "else"
    LET: "let"
    FUNC: "func"
    RETURN: "return"
    WHILE: "while"
    DO: "do"
    PRINT: "print"

    PLUS: "+"
    MINUS: "-"
    TIMES: "*"
    DIV: "/"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    SEMI: ";"
    COMMA: ","
    EQ: "=="
    NEQ: "!="
    LE: "<="
    GE: ">="
    LT: "<"
    GT: ">"
    ASSIGN: "="

    LINE_COMMENT: /\/\/[^\n]*/
    %ignore LINE_COMMENT

    %import common.WS
    %ignore WS
"""


LINEA_LEXER = Lark(
    LINEA_TERMINALS,
    parser='lalr',
    lexer='basic',
)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Whitespace and ``//`` comments are skipped. The first character that
    starts no token raises :class:`LexError`; no partial token list is
    returned.
    """
    tokens: List[Token] = []
    try:
        for tok in LINEA_LEXER.lex(source):
            tokens.append(Token(TokenKind[tok.type], str(tok.value), tok.line, tok.column, tok.start_pos))
    except UnexpectedCharacters as e:
        raise LexError(e.char, e.line, e.column, e.pos_in_stream) from None
    return tokens
