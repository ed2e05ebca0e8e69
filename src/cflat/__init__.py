# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""cflat: scanner and precedence-climbing parser for a small experimental language."""

from cflat.lexer import Scanner, Span, Token, TokenCursor, TokenKind, tokenize
from cflat.model import Expr, Op
from cflat.parser import ParseError, parse

__version__ = "0.1.0"

__all__ = [
    "Expr",
    "Op",
    "ParseError",
    "Scanner",
    "Span",
    "Token",
    "TokenCursor",
    "TokenKind",
    "parse",
    "tokenize",
]
