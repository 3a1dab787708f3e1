"""Parser for the Linea language.

A recursive-descent parser with one method per grammar rule and a single
token of lookahead. Expression precedence, from loosest to tightest:

    assignment   a = b = c            (right associative)
    additive     a + b - c            (left associative)
    multiplicative a * b / c          (left associative)
    unary        -a
    primary      literals, names, calls, parenthesised expressions

Comparisons are not expressions: they only appear as the condition of an
``if`` or a ``while`` and cannot be chained. Blocks may be written with
braces or as a single statement; both produce a :class:`Block`.

The first token that does not fit raises :class:`ParseError`. There is no
error recovery.
"""

from __future__ import annotations

import ast as py_ast
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Union

from .ast import (
    Program, Block, If, While, VariableDeclaration, FunctionDeclaration,
    ReturnStatement, PrintStatement, ExpressionStatement, Assign,
    Comparison, BinaryArith, Identifier, NumberLiteral, StringLiteral,
    Call, Node, ArithOp, CompareOp,
)
from .errors import ParseError
from .lexer import tokenize
from .tokens import Token, TokenKind


COMPARISON_OPS = {
    TokenKind.EQ: CompareOp.EQ,
    TokenKind.NEQ: CompareOp.NEQ,
    TokenKind.LT: CompareOp.LT,
    TokenKind.LE: CompareOp.LE,
    TokenKind.GT: CompareOp.GT,
    TokenKind.GE: CompareOp.GE,
}

ADDITIVE_OPS = {TokenKind.PLUS: ArithOp.ADD, TokenKind.MINUS: ArithOp.SUB}
MULTIPLICATIVE_OPS = {TokenKind.TIMES: ArithOp.MUL, TokenKind.DIV: ArithOp.DIV}

PRIMARY_START = (
    TokenKind.NUMBER, TokenKind.STRING, TokenKind.IDENT, TokenKind.LPAREN,
)

# statements and expressions nested deeper than this are rejected
MAX_NESTING_DEPTH = 100


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0
        self.depth = 0
        if self.tokens:
            last = self.tokens[-1]
            self.end_line = last.line
            self.end_column = last.column + len(last.lexeme)
        else:
            self.end_line, self.end_column = 1, 1

    def peek(self, ahead: int = 0) -> Optional[Token]:
        index = self.pos + ahead
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def consume(self, expected: Union[TokenKind, Sequence[TokenKind]]) -> Token:
        kinds = (expected,) if isinstance(expected, TokenKind) else tuple(expected)
        token = self.peek()
        if token is None:
            raise ParseError(kinds, None, self.end_line, self.end_column)
        if token.kind not in kinds:
            raise ParseError(kinds, token)
        self.pos += 1
        return token

    @contextmanager
    def nested(self) -> Iterator[None]:
        if self.depth >= MAX_NESTING_DEPTH:
            reason = f"nesting deeper than {MAX_NESTING_DEPTH} levels"
            raise ParseError((), self.peek(), self.end_line, self.end_column, reason=reason)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def match(self, expected: Union[TokenKind, Sequence[TokenKind]]) -> bool:
        token = self.peek()
        if token is None:
            return False
        if isinstance(expected, TokenKind):
            return token.kind == expected
        return token.kind in expected

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while self.peek() is not None:
            statements.append(self.parse_statement())
        return Program(tuple(statements))

    def parse_statement(self) -> Node:
        with self.nested():
            if self.match(TokenKind.IF):
                return self.parse_if_stmt()
            if self.match(TokenKind.WHILE):
                return self.parse_while_stmt()
            if self.match(TokenKind.FUNC):
                return self.parse_func_decl()
            if self.match(TokenKind.RETURN):
                return self.parse_return_stmt()
            if self.match(TokenKind.LET):
                return self.parse_var_decl()
            if self.match(TokenKind.PRINT):
                return self.parse_print_stmt()
            expr = self.parse_expression()
            self.consume(TokenKind.SEMI)
        return ExpressionStatement(expr)

    def parse_block(self) -> Block:
        # a block without braces holds exactly one statement
        if not self.match(TokenKind.LBRACE):
            return Block((self.parse_statement(),))
        self.consume(TokenKind.LBRACE)
        statements: List[Node] = []
        while not self.match(TokenKind.RBRACE):
            if self.peek() is None:
                raise ParseError((TokenKind.RBRACE,), None, self.end_line, self.end_column)
            statements.append(self.parse_statement())
        self.consume(TokenKind.RBRACE)
        return Block(tuple(statements))

    def parse_if_stmt(self) -> If:
        self.consume(TokenKind.IF)
        condition = self.parse_comparison()
        if self.match(TokenKind.THEN):
            self.consume(TokenKind.THEN)
        then_block = self.parse_block()
        else_block = None
        if self.match(TokenKind.ELSE):
            self.consume(TokenKind.ELSE)
            else_block = self.parse_block()
        return If(condition, then_block, else_block)

    def parse_while_stmt(self) -> While:
        self.consume(TokenKind.WHILE)
        condition = self.parse_comparison()
        self.consume(TokenKind.DO)
        body = self.parse_block()
        return While(condition, body)

    def parse_func_decl(self) -> FunctionDeclaration:
        self.consume(TokenKind.FUNC)
        name_token = self.consume(TokenKind.IDENT)
        self.consume(TokenKind.LPAREN)
        params: List[str] = []
        if not self.match(TokenKind.RPAREN):
            params.append(self.consume(TokenKind.IDENT).lexeme)
            while self.match(TokenKind.COMMA):
                self.consume(TokenKind.COMMA)
                params.append(self.consume(TokenKind.IDENT).lexeme)
        self.consume(TokenKind.RPAREN)
        body = self.parse_block()
        return FunctionDeclaration(name_token.lexeme, tuple(params), body)

    def parse_return_stmt(self) -> ReturnStatement:
        self.consume(TokenKind.RETURN)
        expr = self.parse_expression()
        self.consume(TokenKind.SEMI)
        return ReturnStatement(expr)

    def parse_var_decl(self) -> VariableDeclaration:
        self.consume(TokenKind.LET)
        name_token = self.consume(TokenKind.IDENT)
        self.consume(TokenKind.ASSIGN)
        init = self.parse_expression()
        self.consume(TokenKind.SEMI)
        return VariableDeclaration(name_token.lexeme, init)

    def parse_print_stmt(self) -> PrintStatement:
        self.consume(TokenKind.PRINT)
        self.consume(TokenKind.LPAREN)
        expr = self.parse_expression()
        self.consume(TokenKind.RPAREN)
        self.consume(TokenKind.SEMI)
        return PrintStatement(expr)

    def parse_comparison(self) -> Comparison:
        left = self.parse_additive()
        op_token = self.consume(tuple(COMPARISON_OPS))
        right = self.parse_additive()
        return Comparison(COMPARISON_OPS[op_token.kind], left, right)

    def parse_expression(self) -> Node:
        with self.nested():
            return self.parse_assignment()

    # assignment: additive ('=' assignment)?
    def parse_assignment(self) -> Node:
        left = self.parse_additive()
        if not self.match(TokenKind.ASSIGN):
            return left
        eq_token = self.consume(TokenKind.ASSIGN)
        if not isinstance(left, Identifier):
            raise ParseError((TokenKind.IDENT,), eq_token)
        value = self.parse_expression()
        return Assign(left.name, value)

    def parse_additive(self) -> Node:
        node = self.parse_multiplicative()
        while self.match(tuple(ADDITIVE_OPS)):
            op_token = self.consume(tuple(ADDITIVE_OPS))
            right = self.parse_multiplicative()
            node = BinaryArith(ADDITIVE_OPS[op_token.kind], node, right)
        return node

    def parse_multiplicative(self) -> Node:
        node = self.parse_unary()
        while self.match(tuple(MULTIPLICATIVE_OPS)):
            op_token = self.consume(tuple(MULTIPLICATIVE_OPS))
            right = self.parse_unary()
            node = BinaryArith(MULTIPLICATIVE_OPS[op_token.kind], node, right)
        return node

    def parse_unary(self) -> Node:
        if not self.match(TokenKind.MINUS):
            return self.parse_primary()
        self.consume(TokenKind.MINUS)
        operand = self.parse_primary()
        if isinstance(operand, NumberLiteral):
            return NumberLiteral(-operand.value)
        return BinaryArith(ArithOp.SUB, NumberLiteral(0), operand)

    def parse_primary(self) -> Node:
        token = self.consume(PRIMARY_START)
        if token.kind == TokenKind.NUMBER:
            if '.' in token.lexeme:
                return NumberLiteral(float(token.lexeme))
            return NumberLiteral(int(token.lexeme))
        if token.kind == TokenKind.STRING:
            # quoting and escapes follow Python's string literal rules
            try:
                return StringLiteral(py_ast.literal_eval(token.lexeme))
            except (SyntaxError, ValueError):
                raise ParseError((TokenKind.STRING,), token) from None
        if token.kind == TokenKind.IDENT:
            if self.match(TokenKind.LPAREN):
                return self.parse_call(token)
            return Identifier(token.lexeme)
        expr = self.parse_expression()
        self.consume(TokenKind.RPAREN)
        return expr

    def parse_call(self, name_token: Token) -> Call:
        self.consume(TokenKind.LPAREN)
        args: List[Node] = []
        if not self.match(TokenKind.RPAREN):
            args.append(self.parse_expression())
            while self.match(TokenKind.COMMA):
                self.consume(TokenKind.COMMA)
                args.append(self.parse_expression())
        self.consume(TokenKind.RPAREN)
        return Call(name_token.lexeme, tuple(args))


def parse(tokens: Sequence[Token]) -> Program:
    """Parse a token sequence into a Program AST."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Tokenize and parse Linea source code into a Program AST."""
    return parse(tokenize(source))
