"""Tree-walking interpreter for the Linea language.

The interpreter executes a :class:`~linea.ast.Program` statement by
statement against an :class:`~linea.environment.Environment`. Every
statement executor returns a control signal, either ``NORMAL`` or a
``ReturnSignal`` carrying the returned value; blocks, conditionals, loops
and the program itself stop at the first ``ReturnSignal`` and hand it to
their caller. Expressions are evaluated by :meth:`Interpreter.evaluate`.

Output goes through a print sink, a callable that receives each printed
value. Values printed before a runtime error stay printed.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from .ast import (
    Program, Block, If, While, VariableDeclaration, FunctionDeclaration,
    ReturnStatement, PrintStatement, ExpressionStatement, Assign,
    Comparison, BinaryArith, Identifier, NumberLiteral, StringLiteral,
    Call, Node, ArithOp, CompareOp,
)
from .environment import Environment
from .errors import LineaRuntimeError, ReturnSignal, NORMAL
from .parser import parse_program
from .types import in_number_range, is_number, to_string, type_name


MAX_LOOP_ITERATIONS = 1000
MAX_CALL_DEPTH = 64

PrintSink = Callable[[Any], None]


def stdout_sink(value: Any) -> None:
    print(to_string(value))


class Interpreter:
    """Core interpreter that executes Linea AST."""
    def __init__(self, print_sink: Optional[PrintSink] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.env = Environment()
        self.print_sink = print_sink if print_sink is not None else stdout_sink
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    # Public API
    def run(self, program: Program) -> Any:
        """Execute `program`; returns the value of a top-level `return`, if any."""
        self.debug(f"run: {len(program.statements)} statements")
        try:
            result = self.execute_block(program.statements)
            self.debug('run: finished')
        except LineaRuntimeError as e:
            self.debug(f"runtime error: {e}")
            raise
        except RecursionError:
            self.debug("runtime error: nesting too deep")
            raise LineaRuntimeError.nesting_limit() from None
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None
        if isinstance(result, ReturnSignal):
            return result.value
        return None

    def execute_block(self, statements: Sequence[Node]) -> Any:
        for stmt in statements:
            result = self.execute(stmt)
            if isinstance(result, ReturnSignal):
                return result
        return NORMAL

    def execute(self, node: Node) -> Any:
        if isinstance(node, ExpressionStatement):
            self.evaluate(node.expr)
            return NORMAL
        if isinstance(node, PrintStatement):
            self.print_sink(self.evaluate(node.expr))
            return NORMAL
        if isinstance(node, VariableDeclaration):
            value = self.evaluate(node.init)
            self.env.declare(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {type_name(value)} = {to_string(value)}")
            return NORMAL
        if isinstance(node, FunctionDeclaration):
            self.env.define_function(node)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return NORMAL
        if isinstance(node, ReturnStatement):
            return ReturnSignal(self.evaluate(node.expr))
        if isinstance(node, Block):
            return self.execute_block(node.statements)
        if isinstance(node, If):
            cond = self.evaluate(node.condition)
            if self.debug_level >= 3:
                self.debug(f"if condition -> {to_string(cond)}")
            if cond:
                return self.execute(node.then_block)
            if node.else_block is not None:
                return self.execute(node.else_block)
            return NORMAL
        if isinstance(node, While):
            return self.execute_while(node)
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def execute_while(self, node: While) -> Any:
        iterations = 0
        while self.evaluate(node.condition):
            if iterations >= MAX_LOOP_ITERATIONS:
                raise LineaRuntimeError.iteration_limit(MAX_LOOP_ITERATIONS)
            iterations += 1
            if self.debug_level >= 3:
                self.debug(f"while iteration {iterations}")
            result = self.execute(node.body)
            if isinstance(result, ReturnSignal):
                return result
        return NORMAL

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, NumberLiteral):
            return node.value
        if isinstance(node, StringLiteral):
            return node.value
        if isinstance(node, Identifier):
            return self.env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.expr)
            self.env.set(node.target, value)
            return value
        if isinstance(node, BinaryArith):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_arith(node.op, left, right)
        if isinstance(node, Comparison):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_compare(node.op, left, right)
        if isinstance(node, Call):
            args = [self.evaluate(arg) for arg in node.args]
            return self.call_function(node.callee, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def call_function(self, name: str, args: List[Any]) -> Any:
        func = self.env.lookup_function(name)
        if len(args) != len(func.params):
            raise LineaRuntimeError.arity_mismatch(name, len(func.params), len(args))
        if self.env.depth >= MAX_CALL_DEPTH:
            raise LineaRuntimeError.recursion_limit(name, MAX_CALL_DEPTH)
        if self.debug_level >= 2:
            self.debug(f"call {name}({', '.join(to_string(a) for a in args)})")
        self.env.push_frame(dict(zip(func.params, args)))
        try:
            result = self.execute(func.body)
        finally:
            self.env.pop_frame()
        if isinstance(result, ReturnSignal):
            return result.value
        return None

    def apply_arith(self, op: ArithOp, a: Any, b: Any) -> Any:
        if op == ArithOp.ADD and (isinstance(a, str) or isinstance(b, str)):
            return to_string(a) + to_string(b)
        if not is_number(a) or not is_number(b):
            raise LineaRuntimeError.type_mismatch(
                f"unsupported operand types for {op.value}: {type_name(a)} and {type_name(b)}")
        if op == ArithOp.DIV and b == 0:
            raise LineaRuntimeError.division_by_zero()
        try:
            if op == ArithOp.ADD:
                result = a + b
            elif op == ArithOp.SUB:
                result = a - b
            elif op == ArithOp.MUL:
                result = a * b
            elif op == ArithOp.DIV:
                result = a / b
            else:
                raise NotImplementedError(f"unknown arithmetic operator {op}")
        except OverflowError:
            raise LineaRuntimeError.numeric_overflow(op.value) from None
        if not in_number_range(result):
            raise LineaRuntimeError.numeric_overflow(op.value)
        return result

    def apply_compare(self, op: CompareOp, a: Any, b: Any) -> bool:
        if op == CompareOp.EQ:
            return a == b
        if op == CompareOp.NEQ:
            return a != b
        comparable = (is_number(a) and is_number(b)) or (isinstance(a, str) and isinstance(b, str))
        if not comparable:
            raise LineaRuntimeError.type_mismatch(
                f"cannot compare {type_name(a)} and {type_name(b)} with {op.value}")
        if op == CompareOp.LT:
            return a < b
        if op == CompareOp.LE:
            return a <= b
        if op == CompareOp.GT:
            return a > b
        if op == CompareOp.GE:
            return a >= b
        raise NotImplementedError(f"unknown comparison operator {op}")


def evaluate(program: Program, print_sink: Optional[PrintSink] = None, debug_level: int = 0) -> Any:
    """Run `program` in a fresh interpreter, sending printed values to `print_sink`."""
    return Interpreter(print_sink=print_sink, debug_level=debug_level).run(program)


def run_program(source: str, print_sink: Optional[PrintSink] = None, debug_level: int = 0) -> Any:
    """Convenience function to compile and run a Linea program from source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(print_sink=print_sink, debug_level=debug_level)
    return interpreter.run(ast_program)
