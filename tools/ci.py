#!/usr/bin/env python3
# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, tests, and build."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["ruff", "format", "--check", "src/", "tests/"]),
    ("Lint", ["ruff", "check", "src/", "tests/"]),
    ("Tests", [sys.executable, "-m", "pytest", "--cov=cflat", "--cov-report=term-missing"]),
    ("Build", [sys.executable, "-m", "pip", "wheel", "--no-deps", "-w", "dist", "."]),
]


def main(steps: list[tuple[str, list[str]]] | None = None) -> int:
    """Run the CI steps in order and print a coloured pass/fail summary."""
    results = [_run_step(name, cmd) for name, cmd in (steps if steps is not None else STEPS)]

    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue("  Summary"))
    print(sep)
    for name, passed, elapsed in results:
        if passed:
            print(chalk.green(f"  PASS  {name} ({elapsed:.1f}s)"))
        else:
            print(chalk.red(f"  FAIL  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(name))
    print(sep)
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=_repo_root())
    return name, proc.returncode == 0, time.monotonic() - start


def _repo_root() -> Path:
    return Path(__file__).parent.parent


if __name__ == "__main__":
    sys.exit(main())
