# Linea language package
# This package provides a lexer, parser, interpreter and bytecode listing for the Linea language.
from .lexer import tokenize
from .parser import parse, parse_program
from .interpreter import evaluate, run_program, Interpreter
from .bytecode import emit_bytecode
from .compiler import compile_source, CompileResult
from .ast_json import ast_to_obj, ast_from_obj, render_tree
from .errors import LineaError, LexError, ParseError, LineaRuntimeError, RuntimeErrorKind

__all__ = [
    'tokenize',
    'parse',
    'parse_program',
    'evaluate',
    'run_program',
    'Interpreter',
    'emit_bytecode',
    'compile_source',
    'CompileResult',
    'ast_to_obj',
    'ast_from_obj',
    'render_tree',
    'LineaError',
    'LexError',
    'ParseError',
    'LineaRuntimeError',
    'RuntimeErrorKind',
]
