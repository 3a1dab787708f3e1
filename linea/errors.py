from enum import Enum
from typing import Any, Optional, Sequence

from linea.tokens import Token, TokenKind


class LineaError(Exception):
    """Base type for every error raised while compiling or running Linea code."""
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class LexError(LineaError):
    """Raised on the first character that starts no token."""
    def __init__(self, char: str, line: int, column: int, offset: int):
        super().__init__(f"unrecognized character {char!r} at {line}:{column}", line, column)
        self.char = char
        self.offset = offset


class ParseError(LineaError):
    """Raised when a token does not fit the grammar at its position."""
    def __init__(self, expected: Sequence[TokenKind], actual: Optional[Token],
                 line: Optional[int] = None, column: Optional[int] = None,
                 reason: Optional[str] = None):
        self.expected = tuple(expected)
        self.actual = actual
        if actual is not None:
            line, column = actual.line, actual.column
        if reason is not None:
            wanted = reason
        elif len(self.expected) == 1:
            wanted = f"expected {self.expected[0]}"
        else:
            wanted = f"expected one of ({', '.join(str(k) for k in self.expected)})"
        if actual is None:
            message = f"{wanted} at end of input"
        else:
            message = f"{wanted} at {line}:{column}, got {actual}"
        super().__init__(message, line, column)


class RuntimeErrorKind(Enum):
    DIVISION_BY_ZERO = 'DivisionByZero'
    UNDEFINED_VARIABLE = 'UndefinedVariable'
    UNDEFINED_FUNCTION = 'UndefinedFunction'
    ARITY_MISMATCH = 'ArityMismatch'
    ITERATION_LIMIT_EXCEEDED = 'IterationLimitExceeded'
    TYPE_MISMATCH = 'TypeMismatch'
    RECURSION_LIMIT_EXCEEDED = 'RecursionLimitExceeded'
    NUMERIC_OVERFLOW = 'NumericOverflow'


class LineaRuntimeError(LineaError):
    """Raised by the interpreter; `kind` tells which rule was broken."""
    def __init__(self, kind: RuntimeErrorKind, message: str, name: Optional[str] = None,
                 expected: Optional[int] = None, actual: Optional[int] = None):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.name = name
        self.expected = expected
        self.actual = actual

    @classmethod
    def division_by_zero(cls) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.DIVISION_BY_ZERO, 'division by zero')

    @classmethod
    def undefined_variable(cls, name: str) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.UNDEFINED_VARIABLE, f"undefined variable '{name}'", name=name)

    @classmethod
    def undefined_function(cls, name: str) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.UNDEFINED_FUNCTION, f"undefined function '{name}'", name=name)

    @classmethod
    def arity_mismatch(cls, name: str, expected: int, actual: int) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.ARITY_MISMATCH,
                   f"function '{name}' expects {expected} arguments, got {actual}",
                   name=name, expected=expected, actual=actual)

    @classmethod
    def iteration_limit(cls, limit: int) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.ITERATION_LIMIT_EXCEEDED,
                   f'while loop exceeded {limit} iterations', expected=limit)

    @classmethod
    def recursion_limit(cls, name: str, limit: int) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.RECURSION_LIMIT_EXCEEDED,
                   f"call depth exceeded {limit} in function '{name}'", name=name, expected=limit)

    @classmethod
    def nesting_limit(cls) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.RECURSION_LIMIT_EXCEEDED, 'program is nested too deeply to evaluate')

    @classmethod
    def numeric_overflow(cls, op: str) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.NUMERIC_OVERFLOW, f"result of {op} is too large")

    @classmethod
    def type_mismatch(cls, message: str) -> 'LineaRuntimeError':
        return cls(RuntimeErrorKind.TYPE_MISMATCH, message)


class ReturnSignal:
    """Control signal produced by a `return` statement.

    Statement execution returns either `NORMAL` or a `ReturnSignal`; every
    enclosing block stops at the first `ReturnSignal` and hands it upward.
    """
    __slots__ = ('value',)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"


class _Normal:
    __slots__ = ()

    def __repr__(self) -> str:
        return 'NORMAL'


NORMAL = _Normal()
