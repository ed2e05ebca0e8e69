# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Syntax tree model for cflat programs."""

from cflat.model.ast import (
    INT32_MAX,
    INT32_MIN,
    Atom,
    AtomExpr,
    BinaryExpr,
    Expr,
    IdAtom,
    IfElseExpr,
    IfExpr,
    IntAtom,
    Op,
    UnaryExpr,
    id_expr,
    int_expr,
    render,
)

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "Atom",
    "AtomExpr",
    "BinaryExpr",
    "Expr",
    "IdAtom",
    "IfElseExpr",
    "IfExpr",
    "IntAtom",
    "Op",
    "UnaryExpr",
    "id_expr",
    "int_expr",
    "render",
]
