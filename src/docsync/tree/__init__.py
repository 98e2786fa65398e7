"""Tree subpackage: Document primitives shared by the manager and the views.

Re-exports the public API for the tree module:
- ValueKind: StrEnum tagged union of Document node kinds
- RowBuilder / RowSpec: depth-first row projection used by the form view
- ValueNormalizer: typed scalar <-> control content conversion
- Path addressing helpers: parse_path, format_path, resolve, assign, coerce_to_array
"""

from docsync.tree.builder import RowBuilder, RowSpec, extract_paths
from docsync.tree.nodes import ValueKind, empty_default
from docsync.tree.normalizer import ValueNormalizer
from docsync.tree.paths import (
    MISSING,
    assign,
    coerce_to_array,
    format_path,
    join_index,
    join_key,
    match_key,
    parse_path,
    resolve,
    split_parent,
)

__all__ = [
    "MISSING",
    "RowBuilder",
    "RowSpec",
    "ValueKind",
    "ValueNormalizer",
    "assign",
    "coerce_to_array",
    "empty_default",
    "extract_paths",
    "format_path",
    "join_index",
    "join_key",
    "match_key",
    "parse_path",
    "resolve",
    "split_parent",
]
