"""Abstract Syntax Tree (AST) definitions for the Linea language.

The AST classes defined in this module represent the syntactic structure
of parsed Linea programs. The parser builds them, and the interpreter,
the bytecode emitter and the JSON/tree serializers read them. Nodes are
frozen and hold their children in tuples, so a tree cannot be changed
once the parser has returned it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class ArithOp(Enum):
    ADD = 'Add'
    SUB = 'Sub'
    MUL = 'Mul'
    DIV = 'Div'


class CompareOp(Enum):
    EQ = '=='
    NEQ = '!='
    LT = '<'
    LE = '<='
    GT = '>'
    GE = '>='


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Node, ...]


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple[Node, ...]


@dataclass(frozen=True)
class If(Node):
    condition: 'Comparison'
    then_block: Block
    else_block: Optional[Block] = None


@dataclass(frozen=True)
class While(Node):
    condition: 'Comparison'
    body: Block


@dataclass(frozen=True)
class VariableDeclaration(Node):
    name: str
    init: Node


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    name: str
    params: Tuple[str, ...]
    body: Block


@dataclass(frozen=True)
class ReturnStatement(Node):
    expr: Node


@dataclass(frozen=True)
class PrintStatement(Node):
    expr: Node


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expr: Node


@dataclass(frozen=True)
class Assign(Node):
    target: str
    expr: Node


@dataclass(frozen=True)
class Comparison(Node):
    op: CompareOp
    left: Node
    right: Node


@dataclass(frozen=True)
class BinaryArith(Node):
    op: ArithOp
    left: Node
    right: Node


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class NumberLiteral(Node):
    value: Union[int, float]


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str


@dataclass(frozen=True)
class Call(Node):
    callee: str
    args: Tuple[Node, ...]
