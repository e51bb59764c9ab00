from leek.types.position import Position, Range, Span
from leek.types.ast import (
    Const,
    Var,
    ListExpr,
    Call,
    PrefixOp,
    InfixOp,
    Declare,
    Assign,
    If,
    While,
    DefineFunction,
    ExprCall,
    Return,
    Declaration,
    Expr,
    Stmt,
    Node,
)

__all__ = [
    "Position", "Range", "Span",
    "Const", "Var", "ListExpr", "Call", "PrefixOp", "InfixOp",
    "Declare", "Assign", "If", "While", "DefineFunction", "ExprCall", "Return",
    "Declaration", "Expr", "Stmt", "Node",
]
