# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token and span values produced by the cflat scanner."""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############

LAMBDA = "λ"

# Reserved words; identifier-shaped text matching one of these is a keyword.
KEYWORDS: frozenset[str] = frozenset({"fn", "true", "false", "return", "let", "and", "or", "not", "if", "else"})

TWO_CHAR_OPS: frozenset[str] = frozenset({"->", "==", ">=", "<=", "!="})

SINGLE_CHAR_OPS: frozenset[str] = frozenset("!><+-*/=:;,(){}[]" + LAMBDA)


class TokenKind(enum.Enum):
    """All token kinds produced by the cflat scanner."""

    ID = "Id"
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    CHAR = "Char"
    OP = "Op"
    KEYWORD = "KeyWord"
    ERROR = "Error"
    EOF = "Eof"


@dataclass(frozen=True)
class Span:
    """A half-open ``[start, end)`` range of UTF-8 byte offsets into the source.

    Attributes:
        start: Offset of the first byte belonging to the token.
        end: Offset one past the last byte belonging to the token.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is past its end {self.end}")

    def __str__(self) -> str:
        return f"{self.start}:{self.end}"

    @property
    def width(self) -> int:
        return self.end - self.start

    def slice(self, source: bytes) -> bytes:
        """Return the bytes of *source* covered by this span."""
        return source[self.start : self.end]

    def location(self, source: str) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` where this span starts.

        Columns count characters, not bytes, so they match what an editor shows.
        """
        prefix = source.encode("utf-8")[: self.start].decode("utf-8", errors="ignore")
        line = prefix.count("\n") + 1
        column = len(prefix) - (prefix.rfind("\n") + 1) + 1
        return line, column


@dataclass(frozen=True)
class Token:
    """A lexical token and the exact text it was scanned from.

    Attributes:
        kind: The kind of token.
        text: The matched source text (empty for EOF).
    """

    kind: TokenKind
    text: str = ""

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def id(cls, text: str) -> Token:
        return cls(TokenKind.ID, text)

    @classmethod
    def int(cls, text: str) -> Token:
        return cls(TokenKind.INT, text)

    @classmethod
    def float(cls, text: str) -> Token:
        return cls(TokenKind.FLOAT, text)

    @classmethod
    def op(cls, text: str) -> Token:
        return cls(TokenKind.OP, text)

    @classmethod
    def keyword(cls, text: str) -> Token:
        return cls(TokenKind.KEYWORD, text)

    @classmethod
    def error(cls, text: str) -> Token:
        return cls(TokenKind.ERROR, text)

    @classmethod
    def eof(cls) -> Token:
        return cls(TokenKind.EOF)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_id(self) -> bool:
        return self.kind == TokenKind.ID

    def is_int(self) -> bool:
        return self.kind == TokenKind.INT

    def is_float(self) -> bool:
        return self.kind == TokenKind.FLOAT

    def is_string(self) -> bool:
        return self.kind == TokenKind.STRING

    def is_char(self) -> bool:
        return self.kind == TokenKind.CHAR

    def is_op(self) -> bool:
        return self.kind == TokenKind.OP

    def is_keyword(self) -> bool:
        return self.kind == TokenKind.KEYWORD

    def is_error(self) -> bool:
        return self.kind == TokenKind.ERROR

    def is_eof(self) -> bool:
        return self.kind == TokenKind.EOF

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        if self.kind == TokenKind.EOF:
            return "Eof"
        return f"{self.kind.value}({self.text!r})"

    def __str__(self) -> str:
        if self.kind == TokenKind.ERROR:
            return f"unknown token: '{self.text}'"
        if self.kind == TokenKind.EOF:
            return "EOF"
        return self.text


def lookup_keyword(text: str) -> Token | None:
    """Return a KEYWORD token if *text* is a reserved word, else None."""
    if text in KEYWORDS:
        return Token.keyword(text)
    return None
