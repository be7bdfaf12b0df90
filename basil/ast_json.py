"""JSON serialization/deserialization for the Basil AST.

This module converts between Basil AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. A program is encoded as
``{"type": "Program", "body": [...]}``. Every node object carries its
``type`` name and ``line``.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Binary,
    Block,
    Break,
    Continue,
    Grouping,
    If,
    Input,
    Let,
    Literal,
    Print,
    Program,
    Rnd,
    ToNum,
    ToStr,
    Unary,
    Variable,
    While,
)
from .values import coerce_literal


def program_to_obj(program: Program) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(s) for s in program]}


def program_from_obj(obj: Dict[str, Any]) -> Program:
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise ValueError("Invalid AST document: expected a Program object")
    return [ast_from_obj(s) for s in obj["body"]]


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "line": node.line, "value": node.value}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "line": node.line, "inner": ast_to_obj(node.inner)}
    if isinstance(node, Unary):
        return {"type": "Unary", "line": node.line, "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "line": node.line,
            "left": ast_to_obj(node.left),
            "op": node.op,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "line": node.line, "name": node.name}

    # Statements
    if isinstance(node, Print):
        return {"type": "Print", "line": node.line, "expr": ast_to_obj(node.expr)}
    if isinstance(node, Input):
        return {"type": "Input", "line": node.line, "prompt": ast_to_obj(node.prompt), "target": node.target}
    if isinstance(node, Let):
        return {"type": "Let", "line": node.line, "expr": ast_to_obj(node.expr), "target": node.target}
    if isinstance(node, ToNum):
        return {"type": "ToNum", "line": node.line, "source": node.source, "dest": node.dest}
    if isinstance(node, ToStr):
        return {"type": "ToStr", "line": node.line, "source": node.source, "dest": node.dest}
    if isinstance(node, Rnd):
        return {
            "type": "Rnd",
            "line": node.line,
            "dest": node.dest,
            "low": ast_to_obj(node.low),
            "high": ast_to_obj(node.high),
        }
    if isinstance(node, Block):
        return {"type": "Block", "line": node.line, "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, If):
        return {
            "type": "If",
            "line": node.line,
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, While):
        return {
            "type": "While",
            "line": node.line,
            "condition": ast_to_obj(node.condition),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Break):
        return {"type": "Break", "line": node.line}
    if isinstance(node, Continue):
        return {"type": "Continue", "line": node.line}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    line = int(obj.get("line", 0))

    if t == "Literal":
        return Literal(line=line, value=coerce_literal(obj["value"]))
    if t == "Grouping":
        return Grouping(line=line, inner=ast_from_obj(obj["inner"]))
    if t == "Unary":
        return Unary(line=line, op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "Binary":
        return Binary(
            line=line,
            left=ast_from_obj(obj["left"]),
            op=obj["op"],
            right=ast_from_obj(obj["right"]),
        )
    if t == "Variable":
        return Variable(line=line, name=obj["name"])

    if t == "Print":
        return Print(line=line, expr=ast_from_obj(obj["expr"]))
    if t == "Input":
        return Input(line=line, prompt=ast_from_obj(obj["prompt"]), target=obj["target"])
    if t == "Let":
        return Let(line=line, expr=ast_from_obj(obj["expr"]), target=obj["target"])
    if t == "ToNum":
        return ToNum(line=line, source=obj["source"], dest=obj.get("dest"))
    if t == "ToStr":
        return ToStr(line=line, source=obj["source"], dest=obj.get("dest"))
    if t == "Rnd":
        return Rnd(line=line, dest=obj["dest"], low=ast_from_obj(obj["low"]), high=ast_from_obj(obj["high"]))
    if t == "Block":
        statements: List[Any] = [ast_from_obj(s) for s in obj["statements"]]
        return Block(line=line, statements=tuple(statements))
    if t == "If":
        return If(
            line=line,
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
        )
    if t == "While":
        return While(line=line, condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "Break":
        return Break(line=line)
    if t == "Continue":
        return Continue(line=line)

    raise ValueError(f"Unknown AST node type: {t}")
