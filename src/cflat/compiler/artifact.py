# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of parsed cflat programs.

Artifacts are stored as compact JSON files for portability and human-readability.
The format is versioned so future schema changes can be detected.

Nodes are stored as a flat table in post-order: every node record refers to its
children by their index in the table, and children always come before their
parent. Neither direction recurses, so long operator chains round-trip safely.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from cflat.model.ast import AtomExpr, BinaryExpr, Expr, IfElseExpr, IfExpr, UnaryExpr

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "2"
ARTIFACT_SUFFIX = ".cflat.json"


def serialize(program: list[Expr]) -> str:
    """Serialize parsed top-level expressions to a compact JSON string."""
    nodes: list[dict[str, Any]] = []
    roots = [_flatten(expr, nodes) for expr in program]
    envelope = {"v": ARTIFACT_FORMAT_VERSION, "nodes": nodes, "program": roots}
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def deserialize(data: str) -> list[Expr]:
    """Deserialize a program from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed top-level expressions.

    Raises:
        ValueError: If the artifact format version is not recognised or the
            payload is not a valid program.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    built: list[Expr] = []
    for position, record in enumerate(obj.get("nodes", [])):
        built.append(_node_from_dict(record, built, position))
    return [built[_index(root, len(built), "program")] for root in obj.get("program", [])]


def write_artifact(program: list[Expr], path: Path) -> None:
    """Write an artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(program), encoding="utf-8")


def read_artifact(path: Path) -> list[Expr]:
    """Read and deserialize an artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################

_NODE_TYPES: dict[str, type[AtomExpr | UnaryExpr | BinaryExpr | IfExpr | IfElseExpr]] = {
    "atom": AtomExpr,
    "unary": UnaryExpr,
    "binary": BinaryExpr,
    "if": IfExpr,
    "if_else": IfElseExpr,
}

# Child-bearing fields per node kind, in rendering order.
_CHILD_FIELDS: dict[str, tuple[str, ...]] = {
    "atom": (),
    "unary": ("operand",),
    "binary": ("lhs", "rhs"),
    "if": ("condition", "body"),
    "if_else": ("condition", "then", "otherwise"),
}


def _flatten(root: Expr, nodes: list[dict[str, Any]]) -> int:
    """Append *root* and its descendants to *nodes* in post-order; return the root's index."""
    index_of: dict[int, int] = {}
    stack: list[tuple[Expr, bool]] = [(root, False)]
    while stack:
        node, children_done = stack.pop()
        fields = _CHILD_FIELDS[node.kind]
        if children_done:
            record = node.model_dump(mode="json", exclude=set(fields))
            for name in fields:
                record[name] = index_of[id(getattr(node, name))]
            index_of[id(node)] = len(nodes)
            nodes.append(record)
            continue
        stack.append((node, True))
        stack.extend((getattr(node, name), False) for name in reversed(fields))
    return index_of[id(root)]


def _node_from_dict(record: Any, built: list[Expr], position: int) -> Expr:
    if not isinstance(record, dict):
        raise ValueError(f"nodes[{position}] must be an object")
    kind = record.get("kind")
    if kind not in _NODE_TYPES:
        raise ValueError(f"nodes[{position}]: unknown node kind {kind!r}")
    fields = dict(record)
    for name in _CHILD_FIELDS[kind]:
        fields[name] = built[_index(record.get(name), position, f"nodes[{position}].{name}")]
    return _NODE_TYPES[kind].model_validate(fields)


def _index(value: Any, limit: int, location: str) -> int:
    """Check that *value* refers to an already-built node (an index below *limit*)."""
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value < limit:
        raise ValueError(f"{location}: invalid node reference {value!r}")
    return value
