"""RowBuilder: projects a Document into the ordered row list of the form view.

Uses a depth-first walk over maps and arrays.  Every map entry and every
array element becomes one row, whether it holds a scalar or a container, so
the row list doubles as the Document's path set for structural diffing.

Paths are built during traversal:
- Top-level map entries are addressed by their bare key (``name``).
- Nested map entries append ``.key`` (``customer.name``).
- Array elements append ``[index]`` (``items[0]``; ``[0]`` for a root array).

Nesting levels: the children of a row at level ``L`` sit at level ``L + 1``,
so a map entry holding an array of maps renders as key row ``L``, element
rows ``L + 1`` and element properties ``L + 2``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from docsync.tree.nodes import ValueKind
from docsync.tree.paths import Path, join_index, join_key


@dataclass(frozen=True, slots=True)
class RowSpec:
    """One row of the projected Document.

    Attributes:
        path:   Textual path of the row's value.
        label:  Display label: the key for map entries, ``"<i>:"`` for elements.
        level:  Nesting level, 0 for entries of the root container.
        kind:   ValueKind of ``value``.
        value:  The node itself (a live reference into the Document).
        key:    Original map key for map entries; ``None`` for elements.
        index:  Element index for array elements; ``None`` for map entries.
        parent: Textual path of the containing node (``""`` for the root).
        segments: Parsed form of ``path``, built during traversal so keys
            containing ``.`` or brackets are still addressed exactly.
    """

    path: str
    label: str
    level: int
    kind: ValueKind
    value: Any
    key: Any = None
    index: int | None = None
    parent: str = ""
    segments: Path = ()

    @property
    def is_element(self) -> bool:
        """True when the row is an array element rather than a map entry."""
        return self.index is not None


@dataclass
class RowBuilder:
    """Converts a Document into its flat, ordered list of ``RowSpec`` rows.

    Insertion order of maps is preserved; arrays are walked by index.  A
    scalar root produces no rows.

    Example::

        builder = RowBuilder()
        rows = builder.build({"items": [{"a": 1}]})
        [r.path for r in rows]   # ["items", "items[0]", "items[0].a"]
    """

    def build(self, value: Any) -> list[RowSpec]:
        """Return the rows of ``value`` in depth-first order.

        Args:
            value: Document root.

        Returns:
            Ordered list of rows; empty for scalar roots and empty containers.
        """
        rows: list[RowSpec] = []
        self._walk(value, "", (), 0, rows, set())
        return rows

    def paths(self, value: Any) -> list[str]:
        """Return every path present in ``value``, in depth-first order."""
        return [row.path for row in self.build(value)]

    def _walk(
        self,
        value: Any,
        path: str,
        segments: Path,
        level: int,
        rows: list[RowSpec],
        ancestors: set[int],
    ) -> None:
        kind = ValueKind.of(value)
        if kind.is_container:
            # A container that contains itself is listed once, not expanded.
            if id(value) in ancestors:
                return
            ancestors = ancestors | {id(value)}

        if kind == ValueKind.MAP:
            for key, child in value.items():
                child_path = join_key(path, key)
                child_segments = (*segments, str(key))
                rows.append(
                    RowSpec(
                        path=child_path,
                        label=str(key),
                        level=level,
                        kind=ValueKind.of(child),
                        value=child,
                        key=key,
                        parent=path,
                        segments=child_segments,
                    )
                )
                self._walk(child, child_path, child_segments, level + 1, rows, ancestors)

        elif kind == ValueKind.ARRAY:
            for index, child in enumerate(value):
                child_path = join_index(path, index)
                child_segments = (*segments, index)
                rows.append(
                    RowSpec(
                        path=child_path,
                        label=f"{index}:",
                        level=level,
                        kind=ValueKind.of(child),
                        value=child,
                        index=index,
                        parent=path,
                        segments=child_segments,
                    )
                )
                self._walk(child, child_path, child_segments, level + 1, rows, ancestors)


def extract_paths(value: Any) -> list[str]:
    """Return the sorted path set of ``value`` (the structural fingerprint)."""
    return sorted(RowBuilder().paths(value))
