# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""File-level compile step: read a source file, parse it, optionally emit an artifact."""

from __future__ import annotations

from pathlib import Path

from cflat.compiler.artifact import write_artifact
from cflat.config.settings import FrontendSettings
from cflat.lexer.scanner import TraceSink
from cflat.model.ast import Expr
from cflat.parser.parser import ParseError, parse

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when a source file cannot be read or does not parse.

    Attributes:
        path: The source file being compiled.
        line: 1-based line of a parse error, or None for I/O failures.
        column: 1-based column of a parse error, or None for I/O failures.
    """

    def __init__(self, message: str, path: Path, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.line = line
        self.column = column


def compile_file(
    source_file: Path,
    settings: FrontendSettings | None = None,
    output: Path | None = None,
    sink: TraceSink | None = None,
) -> list[Expr]:
    """Parse one cflat source file.

    Args:
        source_file: Path to the source file.
        settings: Tracing and parser options; defaults apply when omitted.
        output: When given, the parsed program is also written there as an artifact.
        sink: Destination for token and AST traces.

    Returns:
        The top-level expressions of the file.

    Raises:
        CompilerError: If the file cannot be read or contains a syntax error.
    """
    if settings is None:
        settings = FrontendSettings()
    try:
        source = source_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CompilerError(f"failed to open '{source_file}': {exc}", source_file) from exc

    try:
        program = parse(
            source,
            token_debug=settings.token_debug,
            ast_debug=settings.ast_debug,
            sink=sink,
            lenient_grouping=settings.lenient_grouping,
        )
    except ParseError as exc:
        line, column = exc.span.location(source)
        raise CompilerError(
            f"{source_file}:{line}:{column}: {exc.message}",
            source_file,
            line,
            column,
        ) from exc

    if output is not None:
        write_artifact(program, output)
    return program
