"""Helpers shared by the codec implementations."""

from __future__ import annotations

from typing import Any

from docsync.errors import SerializationError
from docsync.tree.paths import PathSegment, format_path


def ensure_acyclic(tree: Any) -> None:
    """Raise ``SerializationError`` if ``tree`` contains itself.

    Shared sub-trees (the same list referenced twice) are fine; only a
    container reachable from its own descendants is rejected.
    """
    cycle = _find_cycle(tree, [], set())
    if cycle is not None:
        msg = f"Cannot serialize cyclic structure at {format_path(cycle) or '<root>'!r}"
        raise SerializationError(msg)


def _find_cycle(
    node: Any, path: list[PathSegment], ancestors: set[int]
) -> list[PathSegment] | None:
    if isinstance(node, dict):
        children = [(str(k), v) for k, v in node.items()]
    elif isinstance(node, list):
        children = list(enumerate(node))
    else:
        return None

    if id(node) in ancestors:
        return path
    ancestors.add(id(node))
    try:
        for segment, child in children:
            found = _find_cycle(child, [*path, segment], ancestors)
            if found is not None:
                return found
    finally:
        ancestors.discard(id(node))
    return None
