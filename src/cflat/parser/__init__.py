# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for cflat source text."""

from cflat.parser.parser import (
    MAX_NESTING_DEPTH,
    BadTokenError,
    ExpectedTokenError,
    MalformedLiteralError,
    NestingTooDeepError,
    ParseError,
    Parser,
    Precedence,
    parse,
    precedence_of,
)

__all__ = [
    "MAX_NESTING_DEPTH",
    "BadTokenError",
    "ExpectedTokenError",
    "MalformedLiteralError",
    "NestingTooDeepError",
    "ParseError",
    "Parser",
    "Precedence",
    "parse",
    "precedence_of",
]
