"""Abstract Syntax Tree (AST) definitions for the Basil language.

Nodes are frozen dataclasses. Every node records the source line of the
token that completed it so that runtime errors can point back at the
script. A program is a plain list of statements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .values import Value


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    line: int


# Expressions ----------------------------------------------------------------

@dataclass(frozen=True)
class Literal(Node):
    value: Value


@dataclass(frozen=True)
class Grouping(Node):
    inner: 'Expr'


@dataclass(frozen=True)
class Unary(Node):
    op: str  # '-' or 'not'
    operand: 'Expr'


@dataclass(frozen=True)
class Binary(Node):
    left: 'Expr'
    op: str  # '+', '-', '*', '/', '<', '<=', '>', '>=', '==', '<>', 'and', 'or'
    right: 'Expr'


@dataclass(frozen=True)
class Variable(Node):
    name: str


Expr = Union[Literal, Grouping, Unary, Binary, Variable]


# Statements -----------------------------------------------------------------

@dataclass(frozen=True)
class Print(Node):
    expr: Expr


@dataclass(frozen=True)
class Input(Node):
    prompt: Expr
    target: str


@dataclass(frozen=True)
class Let(Node):
    expr: Expr
    target: str


@dataclass(frozen=True)
class ToNum(Node):
    source: str
    dest: Optional[str] = None


@dataclass(frozen=True)
class ToStr(Node):
    source: str
    dest: Optional[str] = None


@dataclass(frozen=True)
class Rnd(Node):
    dest: str
    low: Expr
    high: Expr


@dataclass(frozen=True)
class Block(Node):
    statements: Tuple['Stmt', ...]


@dataclass(frozen=True)
class If(Node):
    condition: Expr
    then_branch: Block
    else_branch: Optional[Block] = None


@dataclass(frozen=True)
class While(Node):
    condition: Expr
    body: Block


@dataclass(frozen=True)
class Break(Node):
    pass


@dataclass(frozen=True)
class Continue(Node):
    pass


Stmt = Union[Print, Input, Let, ToNum, ToStr, Rnd, Block, If, While, Break, Continue]

Program = List[Stmt]
