# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for cflat files: parsing and artifact output."""

from cflat.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from cflat.compiler.build import CompilerError, compile_file

__all__ = [
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "compile_file",
    "CompilerError",
]
