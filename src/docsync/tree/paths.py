"""Path addressing: parse, format, resolve and assign dot/bracket paths.

A path addresses a location inside a Document.  Textually it is a
dot-delimited sequence of map keys, where any key may carry one or more
``[<integer>]`` suffixes selecting array elements::

    customer.name          -> ("customer", "name")
    items[2].title         -> ("items", 2, "title")
    grid[1][0]             -> ("grid", 1, 0)
    [0].name               -> (0, "name")          # root-level array
    ""                     -> ()                   # the root itself

Reads never fail: ``resolve`` returns ``MISSING`` for an absent key or an
out-of-range index.  Writes (``assign``) create intermediate maps for absent
keys, pad arrays with empty-map placeholders up to the requested index, and
convert a map sitting where an array is expected via ``coerce_to_array``.

Paths are positional: they are only meaningful against the Document snapshot
they were computed from.
"""

from __future__ import annotations

import re
from typing import Any, Final

from docsync.errors import PathResolutionError, PathSyntaxError

__all__ = [
    "MISSING",
    "Path",
    "PathSegment",
    "assign",
    "coerce_to_array",
    "format_path",
    "join_index",
    "join_key",
    "match_key",
    "parse_path",
    "resolve",
    "split_parent",
]

PathSegment = str | int
Path = tuple[PathSegment, ...]

# One dot-separated part: an optional bare key followed by any number of
# "[<digits>]" suffixes.
_PART = re.compile(r"^(?P<key>[^\[\]]*)(?P<indices>(?:\[\d+\])*)$")
_INDEX = re.compile(r"\[(\d+)\]")
_DIGITS = re.compile(r"^\d+$")


class _Missing:
    """Sentinel type for an unresolvable location (distinct from ``None``)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


# ---------------------------------------------------------------------------
# Parsing and formatting
# ---------------------------------------------------------------------------


def parse_path(path: str) -> Path:
    """Parse a path string into a tuple of key and index segments.

    Args:
        path: Textual path such as ``"a.b[2].c"``.  The empty string is the root.

    Returns:
        Tuple of segments: ``str`` for map keys, ``int`` for array indices.

    Raises:
        PathSyntaxError: If a part has unbalanced brackets, a non-integer
            index, or an empty key anywhere but a leading root-level index.
    """
    if path == "":
        return ()

    segments: list[PathSegment] = []
    for position, part in enumerate(path.split(".")):
        match = _PART.match(part)
        if match is None:
            msg = f"Malformed path segment {part!r} in {path!r}"
            raise PathSyntaxError(msg)

        key = match.group("key")
        indices = [int(i) for i in _INDEX.findall(match.group("indices"))]

        if key:
            segments.append(key)
        elif not (position == 0 and indices):
            # Only "[0].x" (root-level array) may omit the key.
            msg = f"Empty key in path {path!r}"
            raise PathSyntaxError(msg)

        segments.extend(indices)

    return tuple(segments)


def format_path(segments: Path | list[PathSegment]) -> str:
    """Render a segment sequence back into its textual form.

    ``format_path(parse_path(p)) == p`` for every well-formed ``p``.
    """
    out: list[str] = []
    for segment in segments:
        if isinstance(segment, int) and not isinstance(segment, bool):
            out.append(f"[{segment}]")
        else:
            out.append(f".{segment}" if out else str(segment))
    return "".join(out)


def join_key(parent: str, key: Any) -> str:
    """Return the path of map entry ``key`` under ``parent``."""
    return f"{parent}.{key}" if parent else str(key)


def join_index(parent: str, index: int) -> str:
    """Return the path of array element ``index`` under ``parent``."""
    return f"{parent}[{index}]"


def split_parent(path: str | Path) -> tuple[str, PathSegment | None]:
    """Split a path into its parent path and final segment.

    Example::

        split_parent("a.b[2]")   # ("a.b", 2)
        split_parent("a.b")      # ("a", "b")
        split_parent("")         # ("", None)
    """
    segments = _segments(path)
    if not segments:
        return "", None
    return format_path(segments[:-1]), segments[-1]


def _segments(path: str | Path) -> Path:
    if isinstance(path, tuple):
        return path
    return parse_path(path)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def match_key(mapping: dict[Any, Any], key: str) -> Any:
    """Return the actual dict key addressed by textual ``key``.

    Codecs may produce non-string keys (``{1: "x"}`` from YAML); those are
    addressed by their ``str()`` form, which is how rows label them.
    """
    if key in mapping:
        return key
    for candidate in mapping:
        if str(candidate) == key:
            return candidate
    return MISSING


def resolve(root: Any, path: str | Path, default: Any = MISSING) -> Any:
    """Return the value at ``path`` inside ``root``.

    An absent key, an out-of-range index, or a segment whose kind does not
    match the node (key into an array, index into a map) yields ``default``
    rather than raising.

    Args:
        root:    Document root.
        path:    Path string or pre-parsed segment tuple.
        default: Value returned when the location does not exist.

    Returns:
        The addressed value, or ``default``.
    """
    node = root
    for segment in _segments(path):
        if isinstance(segment, int):
            if not isinstance(node, list) or not 0 <= segment < len(node):
                return default
            node = node[segment]
        else:
            if not isinstance(node, dict):
                return default
            actual = match_key(node, segment)
            if actual is MISSING:
                return default
            node = node[actual]
    return node


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def coerce_to_array(node: Any) -> list[Any]:
    """Return ``node`` as a new list, without mutating the input.

    - A list is shallow-copied.
    - A map keeps its integer-keyed members (``0``, ``"1"`` ...) at their
      index; gaps are filled with empty-map placeholders and every other key
      is dropped.
    - Anything else becomes an empty list.
    """
    if isinstance(node, list):
        return list(node)
    if not isinstance(node, dict):
        return []

    indexed: dict[int, Any] = {}
    for key, value in node.items():
        if isinstance(key, int) and not isinstance(key, bool) and key >= 0:
            indexed[key] = value
        elif isinstance(key, str) and _DIGITS.match(key):
            indexed[int(key)] = value

    if not indexed:
        return []
    return [indexed.get(i, {}) for i in range(max(indexed) + 1)]


def _fit(child: Any, next_segment: PathSegment, path: Path) -> Any:
    """Return a container able to hold ``next_segment``, reusing ``child`` if it can."""
    if isinstance(next_segment, int):
        return child if isinstance(child, list) else coerce_to_array(child)
    if isinstance(child, dict):
        return child
    if isinstance(child, list):
        msg = (
            f"Cannot address key {next_segment!r} inside an array "
            f"in path {format_path(path)!r}"
        )
        raise PathResolutionError(msg)
    # Absent or scalar: replaced by a fresh map.
    return {}


def _get_child(node: Any, segment: PathSegment) -> Any:
    if isinstance(segment, int):
        return node[segment] if segment < len(node) else MISSING
    actual = match_key(node, segment)
    return MISSING if actual is MISSING else node[actual]


def _set_child(node: Any, segment: PathSegment, value: Any) -> None:
    if isinstance(segment, int):
        while len(node) < segment:
            node.append({})
        if segment == len(node):
            node.append(value)
        else:
            node[segment] = value
        return
    actual = match_key(node, segment)
    node[segment if actual is MISSING else actual] = value


def assign(root: Any, path: str | Path, value: Any) -> Any:
    """Write ``value`` at ``path`` inside ``root`` and return the (new) root.

    Containers are mutated in place.  The returned root differs from the
    input only when the root itself had to change shape (an empty path, or
    a leading index against a map root).

    Args:
        root:  Document root.
        path:  Path string or pre-parsed segment tuple.
        value: Value stored at the final segment (overwritten in place).

    Returns:
        The Document root after the write.

    Raises:
        PathSyntaxError: If ``path`` is malformed.
        PathResolutionError: If a key segment addresses an existing array.
    """
    segments = _segments(path)
    if not segments:
        return value

    root = _fit(root, segments[0], segments)
    node = root
    for segment, next_segment in zip(segments, segments[1:], strict=False):
        child = _get_child(node, segment)
        fitted = _fit(child, next_segment, segments)
        if fitted is not child:
            _set_child(node, segment, fitted)
        node = fitted

    _set_child(node, segments[-1], value)
    return root
