"""CLI entry point for the Linea interpreter.

Usage:
    python -m linea [-v|-vv|-vvv] <program_file>
    python -m linea [-v...] --emit-ast <program_file>
    python -m linea [-v...] --ast <ast_json_file>
    python -m linea --bytecode <program_file>
    python -m linea --tokens <program_file>
    python -m linea --tree <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .linea file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --bytecode    Print the bytecode listing of the given .linea file
  --tokens      Print the token stream of the given .linea file
  --tree        Print the AST of the given .linea file as an indented tree

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj, render_tree
from .bytecode import emit_bytecode
from .errors import LexError, LineaError, ParseError
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import parse, parse_program


def format_error(error: LineaError) -> str:
    if isinstance(error, LexError):
        return f"Lex error: {error}"
    if isinstance(error, ParseError):
        return f"Parse error: {error}"
    return f"Runtime error: {error}"


def read_source(path: str) -> str:
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def load_ast(path: str) -> Program:
    try:
        program = ast_from_obj(json.loads(read_source(path)))
        if not isinstance(program, Program):
            raise TypeError("top-level node is not a Program")
        return program
    except (KeyError, TypeError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"Error: invalid AST file {path}: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='linea', description="Linea language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LINEA_FILE', help='emit AST JSON for the given .linea file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--bytecode', metavar='LINEA_FILE', help='print the bytecode listing')
    group.add_argument('--tokens', metavar='LINEA_FILE', help='print the token stream')
    group.add_argument('--tree', metavar='LINEA_FILE', help='print the AST as an indented tree')
    parser.add_argument('program', nargs='?', help='Linea program file (.linea) to execute')
    args = parser.parse_args(argv)

    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            ast_program = parse_program(read_source(args.emit_ast))
            obj = ast_to_obj(ast_program)
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(obj, out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        if args.tokens:
            for token in tokenize(read_source(args.tokens)):
                print(f"{token.line}:{token.column}\t{token.kind}\t{token.lexeme}")
            return

        if args.bytecode:
            for line in emit_bytecode(parse_program(read_source(args.bytecode))):
                print(line)
            return

        if args.tree:
            print(render_tree(parse_program(read_source(args.tree))))
            return

        # Execute from AST JSON
        if args.ast:
            ast_program = load_ast(args.ast)
            Interpreter(debug_level=args.v).run(ast_program)
            return

        # Default: execute source file
        if not args.program:
            parser.error('missing program file; or use --emit-ast/--ast/--bytecode/--tokens/--tree')
        ast_program = parse(tokenize(read_source(args.program)))
        Interpreter(debug_level=args.v).run(ast_program)
    except LineaError as e:
        print(format_error(e), file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
