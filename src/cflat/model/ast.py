# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Abstract syntax tree for cflat expressions and conditionals.

Every node renders to a canonical parenthesized-prefix form through ``str()``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from cflat.lexer.token import Token

# ###############
# Public Interface
# ###############

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class Op(Enum):
    """Operators the parser combines into unary and binary nodes."""

    MINUS = "-"
    PLUS = "+"
    MULT = "*"
    DIV = "/"
    GRT = ">"
    LES = "<"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_text(cls, text: str) -> Op | None:
        """Return the operator spelled *text*, or None if it is not one of ours."""
        try:
            return cls(text)
        except ValueError:
            return None

    @classmethod
    def from_token(cls, token: Token) -> Op | None:
        if not token.is_op():
            return None
        return cls.from_text(token.text)


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class IntAtom(_Node):
    """A signed 32-bit integer literal."""

    kind: Literal["int"] = "int"
    value: Annotated[int, _Field(ge=INT32_MIN, le=INT32_MAX)]

    def __str__(self) -> str:
        return str(self.value)


class IdAtom(_Node):
    """A reference to a name."""

    kind: Literal["id"] = "id"
    name: str

    def __str__(self) -> str:
        return self.name


Atom = Annotated[IntAtom | IdAtom, _Field(discriminator="kind")]


class AtomExpr(_Node):
    kind: Literal["atom"] = "atom"
    atom: Atom

    def __str__(self) -> str:
        return render(self)


class UnaryExpr(_Node):
    """A prefix operator applied to one operand."""

    kind: Literal["unary"] = "unary"
    op: Op
    operand: Expr

    def __str__(self) -> str:
        return render(self)


class BinaryExpr(_Node):
    """An infix operator with its left and right operands."""

    kind: Literal["binary"] = "binary"
    op: Op
    lhs: Expr
    rhs: Expr

    def __str__(self) -> str:
        return render(self)


class IfExpr(_Node):
    """A conditional without an else branch."""

    kind: Literal["if"] = "if"
    condition: Expr
    body: Expr

    def __str__(self) -> str:
        return render(self)


class IfElseExpr(_Node):
    """A conditional with both branches; ``else if`` nests another conditional."""

    kind: Literal["if_else"] = "if_else"
    condition: Expr
    then: Expr
    otherwise: Expr

    def __str__(self) -> str:
        return render(self)


# An expression node. The `kind` discriminator makes JSON round-trips unambiguous.
Expr = Annotated[
    AtomExpr | UnaryExpr | BinaryExpr | IfExpr | IfElseExpr,
    _Field(discriminator="kind"),
]


def render(expr: Expr) -> str:
    """Render *expr* in canonical parenthesized-prefix form.

    Walks the tree with an explicit stack, so arbitrarily long operator
    chains render without hitting the interpreter recursion limit.
    """
    parts: list[str] = []
    stack: list[str | _Node] = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        else:
            stack.extend(reversed(_layout(item)))
    return "".join(parts)


def int_expr(value: int) -> AtomExpr:
    """Shorthand for an integer leaf."""
    return AtomExpr(atom=IntAtom(value=value))


def id_expr(name: str) -> AtomExpr:
    """Shorthand for an identifier leaf."""
    return AtomExpr(atom=IdAtom(name=name))


# ################
# Implementation
# ################


def _layout(node: _Node) -> list[str | _Node]:
    """Return the literal text and child nodes of *node* in output order."""
    if isinstance(node, AtomExpr):
        return [str(node.atom)]
    if isinstance(node, UnaryExpr):
        return [f"({node.op} ", node.operand, ")"]
    if isinstance(node, BinaryExpr):
        return [f"({node.op} ", node.lhs, " ", node.rhs, ")"]
    if isinstance(node, IfExpr):
        return ["(if (", node.condition, ") (", node.body, "))"]
    if isinstance(node, IfElseExpr):
        return ["(if (", node.condition, ") then (", node.then, ") else (", node.otherwise, "))"]
    raise TypeError(f"Not an expression node: {type(node).__name__}")


# Resolve forward references for models that use Expr.
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
IfExpr.model_rebuild()
IfElseExpr.model_rebuild()
