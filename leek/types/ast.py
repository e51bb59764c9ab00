# Syntax tree for Leek programs.
#
# Every node is a frozen dataclass whose first field is the `span` it was parsed
# from. Spans are offsets into the exact text handed to the parser: a tree is
# only valid for that revision and is discarded, never patched, after an edit.
#
# The node set is closed. Queries dispatch on it with `match`, so adding a kind
# means touching `leek.analysis.query`.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from leek.types.position import Span


# -----------------------
# Expressions
# -----------------------

@dataclass(frozen=True)
class Const:
    span: Span
    value: int


@dataclass(frozen=True)
class Var:
    span: Span
    name: str


@dataclass(frozen=True)
class ListExpr:
    span: Span
    items: tuple[Expr, ...]


@dataclass(frozen=True)
class Call:
    span: Span
    name: str
    args: tuple[Expr, ...]


@dataclass(frozen=True)
class PrefixOp:
    span: Span
    op: str
    operand: Expr


@dataclass(frozen=True)
class InfixOp:
    # Arithmetic operators; the grammar does not produce these yet.
    span: Span
    lhs: Expr
    op: str
    rhs: Expr


Expr = Union[Const, Var, ListExpr, Call, PrefixOp, InfixOp]


# -----------------------
# Statements
# -----------------------

@dataclass(frozen=True)
class Declare:
    span: Span
    name: str
    init: Expr
    name_span: Span


@dataclass(frozen=True)
class Assign:
    span: Span
    name: str
    value: Expr


@dataclass(frozen=True)
class If:
    span: Span
    cond: Expr
    then: tuple[Stmt, ...]
    orelse: Optional[tuple[Stmt, ...]] = None


@dataclass(frozen=True)
class While:
    span: Span
    cond: Expr
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class DefineFunction:
    span: Span
    name: str
    params: tuple[str, ...]
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class ExprCall:
    span: Span
    name: str
    args: tuple[Expr, ...]


@dataclass(frozen=True)
class Return:
    span: Span
    value: Expr


Stmt = Union[Declare, Assign, If, While, DefineFunction, ExprCall, Return]

Node = Union[Expr, Stmt]


@dataclass(frozen=True)
class Declaration:
    """A `var name = expr;` site: the statement span plus the declared name."""
    span: Span
    name: str
    name_span: Span
