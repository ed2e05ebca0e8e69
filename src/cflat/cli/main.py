# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the cflat command-line interface."""

import argparse
import sys
from pathlib import Path

from cflat.compiler.build import CompilerError, compile_file
from cflat.config.settings import FrontendSettings, SettingsError, find_settings, load_settings

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the cflat CLI."""
    parser = argparse.ArgumentParser(
        prog="cflat",
        description="cflat - scan and parse a cflat source file",
    )
    parser.add_argument("filename", nargs="?", help="Source file to parse")
    parser.add_argument(
        "--debug-token",
        action="store_true",
        help="Print every scanned token to stderr",
    )
    parser.add_argument(
        "--debug-ast",
        action="store_true",
        help="Print the parsed syntax tree to stderr",
    )
    parser.add_argument(
        "--debug-graph",
        action="store_true",
        help="Render the syntax tree as a graph (not implemented yet)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: .cflat.yaml next to the source file, if present)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the parsed program as a JSON artifact to this path",
    )

    args = parser.parse_args()
    sys.exit(_run(args))


# ################
# Implementation
# ################


def _run(args: argparse.Namespace) -> int:
    """Parse the requested file and print one canonical expression per line."""
    if args.debug_graph:
        print("Error: --debug-graph is not implemented yet", file=sys.stderr)
        return 1

    if args.filename is None:
        print("No file given", file=sys.stderr)
        return 1

    source_file = Path(args.filename)

    try:
        settings = _load_settings(args.config, source_file)
    except SettingsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    settings = settings.with_debug(token_debug=args.debug_token, ast_debug=args.debug_ast)

    try:
        program = compile_file(source_file, settings, output=args.output)
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for expr in program:
        print(expr)
    return 0


def _load_settings(config: Path | None, source_file: Path) -> FrontendSettings:
    if config is None:
        config = find_settings(source_file)
        if config is None:
            return FrontendSettings()
    return load_settings(config)


if __name__ == "__main__":
    main()
