"""One-shot compile-and-run pipeline.

`compile_source` runs lexing, parsing, bytecode emission and evaluation
in that order and reports the outcome as a :class:`CompileResult`
instead of raising. The first failing stage stops the pipeline; whatever
the earlier stages produced (and any values printed before a runtime
error) is kept on the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .ast import Program
from .bytecode import emit_bytecode
from .errors import LineaError
from .interpreter import Interpreter, PrintSink
from .lexer import tokenize
from .parser import parse
from .tokens import Token


@dataclass
class CompileResult:
    tokens: List[Token] = field(default_factory=list)
    program: Optional[Program] = None
    bytecode: List[str] = field(default_factory=list)
    output: List[Any] = field(default_factory=list)
    return_value: Any = None
    error: Optional[LineaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def compile_source(source: str, print_sink: Optional[PrintSink] = None,
                   debug_level: int = 0, debug_file: str = 'debug.txt') -> CompileResult:
    result = CompileResult()

    def sink(value: Any):
        result.output.append(value)
        if print_sink is not None:
            print_sink(value)

    try:
        result.tokens = tokenize(source)
        result.program = parse(result.tokens)
        result.bytecode = emit_bytecode(result.program)
        interpreter = Interpreter(print_sink=sink, debug_level=debug_level, debug_file=debug_file)
        result.return_value = interpreter.run(result.program)
    except LineaError as e:
        result.error = e
    return result
