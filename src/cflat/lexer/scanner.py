# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for cflat source text.

Produces ``(Token, Span)`` pairs one at a time on demand. Once the input is
exhausted the scanner keeps returning EOF.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

from cflat.lexer.token import SINGLE_CHAR_OPS, TWO_CHAR_OPS, Span, Token, lookup_keyword

# ###############
# Public Interface
# ###############

# Receives one rendered diagnostic line per call.
TraceSink = Callable[[str], None]


def stderr_sink(line: str) -> None:
    """Default trace sink: write the line to standard error."""
    print(line, file=sys.stderr)


class Scanner:
    """Pull-based scanner over a single source string.

    Not restartable: construct a new instance to scan the same text again.

    Args:
        source: The full source text.
        token_debug: When True, every produced token is written to *sink*.
        sink: Destination for token traces (defaults to standard error).
    """

    def __init__(self, source: str, token_debug: bool = False, sink: TraceSink | None = None) -> None:
        self._source = source
        self._pos = 0
        self._start = 0
        self._end = 0
        self._token_debug = token_debug
        self._sink = sink if sink is not None else stderr_sink

    def next_token(self) -> tuple[Token, Span]:
        """Scan and return the next token with its byte span."""
        token, span = self._scan()
        if self._token_debug:
            self._sink(f"{token!r} {span}")
        return token, span

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _next_char(self) -> str:
        """Consume one character and widen the open span by its UTF-8 size.

        Returns '' at end of input.
        """
        if self._pos >= len(self._source):
            return ""
        ch = self._source[self._pos]
        self._pos += 1
        self._end += len(ch.encode("utf-8"))
        return ch

    def _peek_char(self) -> str:
        """Return the next unconsumed character, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _next_matches(self, predicate: Callable[[str], bool]) -> bool:
        """Return True if the next unconsumed character satisfies *predicate*."""
        ch = self._peek_char()
        return bool(ch) and predicate(ch)

    def _reset_span(self) -> None:
        self._start = self._end

    def _take_span(self) -> Span:
        """Close the open span and start a new one where it ended."""
        span = Span(self._start, self._end)
        self._reset_span()
        return span

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan(self) -> tuple[Token, Span]:
        while True:
            ch = self._next_char()
            if not ch:
                self._reset_span()
                return Token.eof(), self._take_span()
            if ch in " \n":
                self._reset_span()
                continue
            if _is_digit(ch):
                return self._scan_number(ch)
            if _is_letter(ch):
                return self._scan_identifier_or_keyword(ch)
            if ch + self._peek_char() in TWO_CHAR_OPS:
                return self._scan_op(ch + self._peek_char())
            if ch in SINGLE_CHAR_OPS:
                return self._scan_op(ch)
            return Token.error(ch), self._take_span()

    def _scan_number(self, first: str) -> tuple[Token, Span]:
        """Scan digits, underscores and dots; any dot makes the literal a FLOAT."""
        chars = [first]
        while self._next_matches(lambda c: _is_digit(c) or c in "_."):
            chars.append(self._next_char())
        text = "".join(chars)
        span = self._take_span()
        if "." in text:
            return Token.float(text), span
        return Token.int(text), span

    def _scan_identifier_or_keyword(self, first: str) -> tuple[Token, Span]:
        chars = [first]
        while self._next_matches(lambda c: c.isascii() and (c.isalnum() or c == "_")):
            chars.append(self._next_char())
        text = "".join(chars)
        span = self._take_span()
        return lookup_keyword(text) or Token.id(text), span

    def _scan_op(self, op: str) -> tuple[Token, Span]:
        # The first character is already consumed.
        for _ in range(len(op) - 1):
            self._next_char()
        return Token.op(op), self._take_span()


class TokenCursor:
    """One-token lookahead over a Scanner.

    At most one token is buffered: ``peek`` scans it if needed and
    ``advance`` hands it over and clears the buffer.
    """

    def __init__(self, scanner: Scanner) -> None:
        self._scanner = scanner
        self._lookahead: tuple[Token, Span] | None = None

    def peek(self) -> tuple[Token, Span]:
        """Return the next token without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._scanner.next_token()
        return self._lookahead

    def peek_token(self) -> Token:
        return self.peek()[0]

    def advance(self) -> tuple[Token, Span]:
        """Consume and return the next token."""
        pair = self.peek()
        self._lookahead = None
        return pair

    def at_end(self) -> bool:
        return self.peek_token().is_eof()


def tokenize(source: str) -> list[tuple[Token, Span]]:
    """Scan *source* completely.

    Returns:
        Every ``(Token, Span)`` pair in order, ending with exactly one EOF.
    """
    scanner = Scanner(source)
    pairs: list[tuple[Token, Span]] = []
    while True:
        token, span = scanner.next_token()
        pairs.append((token, span))
        if token.is_eof():
            return pairs


# ################
# Implementation
# ################


def _is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()
