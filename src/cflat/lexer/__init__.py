# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner and token model for cflat source text."""

from cflat.lexer.scanner import Scanner, TokenCursor, TraceSink, stderr_sink, tokenize
from cflat.lexer.token import KEYWORDS, LAMBDA, Span, Token, TokenKind, lookup_keyword

__all__ = [
    "KEYWORDS",
    "LAMBDA",
    "Scanner",
    "Span",
    "Token",
    "TokenCursor",
    "TokenKind",
    "TraceSink",
    "lookup_keyword",
    "stderr_sink",
    "tokenize",
]
