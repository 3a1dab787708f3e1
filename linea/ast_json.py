"""JSON serialization/deserialization for Linea AST.

This module converts between Linea AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types. It also renders a tree as an indented
text outline, one node per line, for display.
"""

from __future__ import annotations

from typing import Any, List

from .ast import (
    Program,
    Block,
    If,
    While,
    VariableDeclaration,
    FunctionDeclaration,
    ReturnStatement,
    PrintStatement,
    ExpressionStatement,
    Assign,
    Comparison,
    BinaryArith,
    Identifier,
    NumberLiteral,
    StringLiteral,
    Call,
    ArithOp,
    CompareOp,
    Node,
)
from .types import format_number


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_block": ast_to_obj(node.then_block),
            "else_block": ast_to_obj(node.else_block),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, VariableDeclaration):
        return {"type": "VariableDeclaration", "name": node.name, "init": ast_to_obj(node.init)}
    if isinstance(node, FunctionDeclaration):
        return {
            "type": "FunctionDeclaration",
            "name": node.name,
            "params": list(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, ReturnStatement):
        return {"type": "ReturnStatement", "expr": ast_to_obj(node.expr)}
    if isinstance(node, PrintStatement):
        return {"type": "PrintStatement", "expr": ast_to_obj(node.expr)}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Assign):
        return {"type": "Assign", "target": node.target, "expr": ast_to_obj(node.expr)}
    if isinstance(node, Comparison):
        return {"type": "Comparison", "op": node.op.value, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, BinaryArith):
        return {"type": "BinaryArith", "op": node.op.value, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, NumberLiteral):
        return {"type": "NumberLiteral", "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "value": node.value}
    if isinstance(node, Call):
        return {"type": "Call", "callee": node.callee, "args": [ast_to_obj(a) for a in node.args]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(statements=tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "Block":
        return Block(statements=tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "If":
        return If(
            condition=ast_from_obj(obj["condition"]),
            then_block=ast_from_obj(obj["then_block"]),
            else_block=ast_from_obj(obj.get("else_block")),
        )
    if t == "While":
        return While(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "VariableDeclaration":
        return VariableDeclaration(name=obj["name"], init=ast_from_obj(obj["init"]))
    if t == "FunctionDeclaration":
        return FunctionDeclaration(
            name=obj["name"],
            params=tuple(obj["params"]),
            body=ast_from_obj(obj["body"]),
        )
    if t == "ReturnStatement":
        return ReturnStatement(expr=ast_from_obj(obj["expr"]))
    if t == "PrintStatement":
        return PrintStatement(expr=ast_from_obj(obj["expr"]))
    if t == "ExpressionStatement":
        return ExpressionStatement(expr=ast_from_obj(obj["expr"]))
    if t == "Assign":
        return Assign(target=obj["target"], expr=ast_from_obj(obj["expr"]))
    if t == "Comparison":
        return Comparison(op=CompareOp(obj["op"]), left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "BinaryArith":
        return BinaryArith(op=ArithOp(obj["op"]), left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "Identifier":
        return Identifier(name=obj["name"])
    if t == "NumberLiteral":
        return NumberLiteral(value=obj["value"])
    if t == "StringLiteral":
        return StringLiteral(value=obj["value"])
    if t == "Call":
        return Call(callee=obj["callee"], args=tuple(ast_from_obj(a) for a in obj["args"]))

    raise ValueError(f"Unknown AST node type: {t}")


def _label(node: Node) -> str:
    name = type(node).__name__
    if isinstance(node, (Comparison, BinaryArith)):
        return f"{name} {node.op.value}"
    if isinstance(node, (Identifier, VariableDeclaration)):
        return f"{name} {node.name}"
    if isinstance(node, FunctionDeclaration):
        return f"{name} {node.name}({', '.join(node.params)})"
    if isinstance(node, Assign):
        return f"{name} {node.target}"
    if isinstance(node, Call):
        return f"{name} {node.callee}"
    if isinstance(node, NumberLiteral):
        return f"{name} {format_number(node.value)}"
    if isinstance(node, StringLiteral):
        return f"{name} {node.value!r}"
    return name


def _children(node: Node) -> List[Node]:
    if isinstance(node, (Program, Block)):
        return list(node.statements)
    if isinstance(node, If):
        return [c for c in (node.condition, node.then_block, node.else_block) if c is not None]
    if isinstance(node, While):
        return [node.condition, node.body]
    if isinstance(node, FunctionDeclaration):
        return [node.body]
    if isinstance(node, VariableDeclaration):
        return [node.init]
    if isinstance(node, (ReturnStatement, PrintStatement, ExpressionStatement, Assign)):
        return [node.expr]
    if isinstance(node, (Comparison, BinaryArith)):
        return [node.left, node.right]
    if isinstance(node, Call):
        return list(node.args)
    return []


def render_tree(node: Node, indent: int = 0) -> str:
    """Render `node` and its descendants as an indented outline."""
    lines: List[str] = []

    def walk(n: Node, depth: int):
        lines.append('  ' * depth + _label(n))
        for child in _children(n):
            walk(child, depth + 1)

    walk(node, indent)
    return '\n'.join(lines)
