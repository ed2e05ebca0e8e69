# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Precedence-climbing parser for cflat.

Conditionals are parsed by plain recursive descent; operators by a table of
binding powers. The parser reads the scanner through a one-token lookahead.
"""

from __future__ import annotations

import enum

from cflat.lexer.scanner import Scanner, TokenCursor, TraceSink, stderr_sink
from cflat.lexer.token import Span, Token
from cflat.model.ast import (
    INT32_MAX,
    INT32_MIN,
    AtomExpr,
    BinaryExpr,
    Expr,
    IdAtom,
    IfElseExpr,
    IfExpr,
    IntAtom,
    Op,
    UnaryExpr,
)

# ###############
# Public Interface
# ###############


# Open groups, unary operators and conditionals each add one level.
MAX_NESTING_DEPTH = 128


class ParseError(Exception):
    """Raised when the parser encounters a syntactically invalid construct.

    Attributes:
        token: The offending token.
        span: Byte span of the offending token.
    """

    def __init__(self, message: str, token: Token, span: Span) -> None:
        super().__init__(f"{span} {message}")
        self.message = message
        self.token = token
        self.span = span


class BadTokenError(ParseError):
    """Raised when no expression can start at the current token."""

    def __init__(self, token: Token, span: Span) -> None:
        super().__init__(f"bad token {token!r}", token, span)


class ExpectedTokenError(ParseError):
    """Raised when a mandatory keyword or punctuation token is missing.

    Attributes:
        expected: The token that was required.
    """

    def __init__(self, expected: Token, found: Token, span: Span) -> None:
        super().__init__(f"expected {expected!r} but found {found!r}", found, span)
        self.expected = expected


class MalformedLiteralError(ParseError):
    """Raised when an integer literal does not fit a signed 32-bit value."""

    def __init__(self, token: Token, span: Span) -> None:
        super().__init__(f"malformed integer literal {token.text!r}", token, span)


class NestingTooDeepError(ParseError):
    """Raised when groups, unary operators or conditionals nest past MAX_NESTING_DEPTH."""

    def __init__(self, token: Token, span: Span) -> None:
        super().__init__(f"nesting deeper than {MAX_NESTING_DEPTH} levels at {token!r}", token, span)


class Precedence(enum.IntEnum):
    """Binding powers, lowest first."""

    NONE = 0
    PRIMARY = 1
    TERM = 2  # + -
    FACTOR = 3  # * /
    COMPARISON = 4  # > < >= <= == !=
    ASSIGNMENT = 5  # =
    UNARY = 6  # ! -


def precedence_of(token: Token) -> Precedence:
    """Look up the binding power of *token* when it appears in infix position."""
    if token.is_op():
        return _OP_PRECEDENCE.get(token.text, Precedence.NONE)
    if token.is_keyword() and token.text in ("true", "false"):
        return Precedence.PRIMARY
    return Precedence.NONE


class Parser:
    """Recursive-descent parser over a cflat token stream.

    Args:
        scanner: Token source; consumed sequentially.
        ast_debug: When True, the parsed program is dumped to *sink*.
        sink: Destination for the AST dump (defaults to standard error).
        lenient_grouping: When True, the token after a parenthesized
            expression is consumed without checking that it is ``)``.
    """

    def __init__(
        self,
        scanner: Scanner,
        ast_debug: bool = False,
        sink: TraceSink | None = None,
        lenient_grouping: bool = False,
    ) -> None:
        self._cursor = TokenCursor(scanner)
        self._ast_debug = ast_debug
        self._sink = sink if sink is not None else stderr_sink
        self._lenient_grouping = lenient_grouping
        self._depth = 0

    def parse(self) -> list[Expr]:
        """Parse top-level program units until EOF."""
        result: list[Expr] = []
        while not self._cursor.at_end():
            result.append(self._program())
        if self._ast_debug:
            for index, expr in enumerate(result):
                self._sink(f"ast[{index}]: {expr}")
        return result

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _check(self, expected: Token) -> bool:
        """Return True if the lookahead equals *expected* (without consuming)."""
        return self._cursor.peek_token() == expected

    def _consume(self, expected: Token) -> Span:
        """Consume the lookahead if it equals *expected* and return its span."""
        token, span = self._cursor.peek()
        if token != expected:
            raise ExpectedTokenError(expected, token, span)
        return self._cursor.advance()[1]

    def _enter(self, token: Token, span: Span) -> None:
        """Open one nesting level at *token*; the caller closes it."""
        if self._depth >= MAX_NESTING_DEPTH:
            raise NestingTooDeepError(token, span)
        self._depth += 1

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _program(self) -> Expr:
        """Parse one program unit: an if-statement or an expression."""
        if self._check(_IF):
            return self._if_statement()
        return self._expression(Precedence.NONE)

    def _if_statement(self) -> Expr:
        """Parse: if <expr> { <unit> } [else ( <if-statement> | { <unit> } )]"""
        token, span = self._cursor.peek()
        self._consume(_IF)
        self._enter(token, span)
        try:
            return self._if_body()
        finally:
            self._depth -= 1

    def _if_body(self) -> Expr:
        condition = self._expression(Precedence.NONE)
        branch = self._braced_unit()
        if not self._check(_ELSE):
            return IfExpr(condition=condition, body=branch)
        self._consume(_ELSE)
        if self._check(_IF):
            otherwise = self._if_statement()
        else:
            otherwise = self._braced_unit()
        return IfElseExpr(condition=condition, then=branch, otherwise=otherwise)

    def _braced_unit(self) -> Expr:
        self._consume(_LBRACE)
        unit = self._program()
        self._consume(_RBRACE)
        return unit

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _expression(self, min_bp: Precedence) -> Expr:
        """Parse an expression whose operators all bind tighter than *min_bp*."""
        lhs = self._primary()
        while True:
            token = self._cursor.peek_token()
            op = Op.from_token(token)
            bp = precedence_of(token)
            if op is None or bp <= min_bp:
                break
            self._cursor.advance()
            rhs = self._expression(bp)
            lhs = BinaryExpr(op=op, lhs=lhs, rhs=rhs)
        return lhs

    def _primary(self) -> Expr:
        token, span = self._cursor.advance()
        if token.is_int():
            return AtomExpr(atom=IntAtom(value=_int_value(token, span)))
        if token.is_id():
            return AtomExpr(atom=IdAtom(name=token.text))
        if token == _LPAREN:
            self._enter(token, span)
            try:
                inner = self._expression(Precedence.NONE)
                if self._lenient_grouping:
                    self._cursor.advance()
                else:
                    self._consume(_RPAREN)
            finally:
                self._depth -= 1
            return inner
        if token == _MINUS:
            self._enter(token, span)
            try:
                operand = self._expression(Precedence.UNARY)
            finally:
                self._depth -= 1
            return UnaryExpr(op=Op.MINUS, operand=operand)
        raise BadTokenError(token, span)


def parse(
    source: str,
    token_debug: bool = False,
    ast_debug: bool = False,
    *,
    sink: TraceSink | None = None,
    lenient_grouping: bool = False,
) -> list[Expr]:
    """Parse cflat source text into its top-level expressions.

    Args:
        source: The full source text.
        token_debug: Trace every scanned token to *sink*.
        ast_debug: Dump the parsed program to *sink* before returning.
        sink: Destination for traces (defaults to standard error).
        lenient_grouping: Do not check the token closing a parenthesized group.

    Returns:
        One expression per top-level program unit, in source order.

    Raises:
        ParseError: On the first syntax error; no partial result is returned.
    """
    scanner = Scanner(source, token_debug=token_debug, sink=sink)
    parser = Parser(scanner, ast_debug=ast_debug, sink=sink, lenient_grouping=lenient_grouping)
    return parser.parse()


# ################
# Implementation
# ################

_IF = Token.keyword("if")
_ELSE = Token.keyword("else")
_LBRACE = Token.op("{")
_RBRACE = Token.op("}")
_LPAREN = Token.op("(")
_RPAREN = Token.op(")")
_MINUS = Token.op("-")

_OP_PRECEDENCE: dict[str, Precedence] = {
    "+": Precedence.TERM,
    "-": Precedence.TERM,
    "*": Precedence.FACTOR,
    "/": Precedence.FACTOR,
    ">": Precedence.COMPARISON,
    "<": Precedence.COMPARISON,
    ">=": Precedence.COMPARISON,
    "<=": Precedence.COMPARISON,
    "==": Precedence.COMPARISON,
    "!=": Precedence.COMPARISON,
    "=": Precedence.ASSIGNMENT,
}


def _int_value(token: Token, span: Span) -> int:
    """Convert INT token text to a signed 32-bit value; underscores group digits."""
    try:
        value = int(token.text)
    except ValueError:
        raise MalformedLiteralError(token, span) from None
    if not INT32_MIN <= value <= INT32_MAX:
        raise MalformedLiteralError(token, span)
    return value
