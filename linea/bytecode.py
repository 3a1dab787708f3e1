"""Bytecode listing for Linea programs.

The emitter walks the AST and writes one stack-machine instruction per
step, as text. The listing is for display only; nothing executes it.
Control flow uses symbolic labels named after the construct (``else``,
``end``, ``loop_start``, ``loop_end``). Labels are not numbered, so nested
or repeated constructs of the same kind share label names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .ast import (
    Program, Block, If, While, VariableDeclaration, FunctionDeclaration,
    ReturnStatement, PrintStatement, ExpressionStatement, Assign,
    Comparison, BinaryArith, Identifier, NumberLiteral, StringLiteral,
    Call, Node, ArithOp,
)
from .types import format_number


ARITH_OPCODES = {
    ArithOp.ADD: 'ADD',
    ArithOp.SUB: 'SUB',
    ArithOp.MUL: 'MUL',
    ArithOp.DIV: 'DIV',
}


@dataclass(frozen=True)
class Instruction:
    opcode: str
    operand: str = ''

    def __str__(self) -> str:
        if self.operand:
            return f"{self.opcode} {self.operand}"
        return self.opcode


class BytecodeEmitter:
    def __init__(self):
        self.instructions: List[Instruction] = []

    def emit(self, opcode: str, operand: str = ''):
        self.instructions.append(Instruction(opcode, operand))

    def compile(self, program: Program) -> List[Instruction]:
        if not isinstance(program, Program):
            raise TypeError("BytecodeEmitter expects a Program node at the top")
        for stmt in program.statements:
            self.compile_stmt(stmt)
        return self.instructions

    # -------- statements --------
    def compile_stmt(self, node: Node):
        if isinstance(node, ExpressionStatement):
            self.compile_expr(node.expr)
            return
        if isinstance(node, PrintStatement):
            self.compile_expr(node.expr)
            self.emit('CALL', 'print 1')
            return
        if isinstance(node, VariableDeclaration):
            self.compile_expr(node.init)
            self.emit('STORE', node.name)
            return
        if isinstance(node, ReturnStatement):
            self.compile_expr(node.expr)
            self.emit('RETURN')
            return
        if isinstance(node, Block):
            for stmt in node.statements:
                self.compile_stmt(stmt)
            return
        if isinstance(node, If):
            self.compile_if(node)
            return
        if isinstance(node, While):
            self.compile_while(node)
            return
        if isinstance(node, FunctionDeclaration):
            self.compile_funcdef(node)
            return
        raise NotImplementedError(f"Unknown statement node: {type(node).__name__}")

    def compile_if(self, node: If):
        self.compile_expr(node.condition)
        if node.else_block is None:
            self.emit('JUMP_IF_FALSE', 'end')
            self.compile_stmt(node.then_block)
            self.emit('LABEL', 'end')
            return
        self.emit('JUMP_IF_FALSE', 'else')
        self.compile_stmt(node.then_block)
        self.emit('JUMP', 'end')
        self.emit('LABEL', 'else')
        self.compile_stmt(node.else_block)
        self.emit('LABEL', 'end')

    def compile_while(self, node: While):
        self.emit('LABEL', 'loop_start')
        self.compile_expr(node.condition)
        self.emit('JUMP_IF_FALSE', 'loop_end')
        self.compile_stmt(node.body)
        self.emit('JUMP', 'loop_start')
        self.emit('LABEL', 'loop_end')

    def compile_funcdef(self, node: FunctionDeclaration):
        self.emit('FUNCTION', node.name)
        for param in node.params:
            self.emit('PARAM', param)
        self.compile_stmt(node.body)
        # implicit return when control reaches the end of the body
        statements = node.body.statements
        if not statements or not isinstance(statements[-1], ReturnStatement):
            self.emit('RETURN')

    # -------- expressions --------
    def compile_expr(self, node: Node):
        if isinstance(node, NumberLiteral):
            self.emit('PUSH', format_number(node.value))
            return
        if isinstance(node, StringLiteral):
            self.emit('PUSH', f'"{node.value}"')
            return
        if isinstance(node, Identifier):
            self.emit('LOAD', node.name)
            return
        if isinstance(node, Assign):
            self.compile_expr(node.expr)
            self.emit('STORE', node.target)
            return
        if isinstance(node, BinaryArith):
            self.compile_expr(node.left)
            self.compile_expr(node.right)
            self.emit(ARITH_OPCODES[node.op])
            return
        if isinstance(node, Comparison):
            self.compile_expr(node.left)
            self.compile_expr(node.right)
            self.emit('COMPARE', node.op.value)
            return
        if isinstance(node, Call):
            for arg in node.args:
                self.compile_expr(arg)
            self.emit('CALL', f"{node.callee} {len(node.args)}")
            return
        raise NotImplementedError(f"Unknown expression node: {type(node).__name__}")


def emit_instructions(program: Program) -> List[Instruction]:
    return BytecodeEmitter().compile(program)


def emit_bytecode(program: Program) -> List[str]:
    """Return the bytecode listing of `program`, one instruction per string."""
    return [str(ins) for ins in emit_instructions(program)]
