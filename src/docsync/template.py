"""Template substitution over a flattened Document.

The form view copies ``{{path}}`` placeholders to the clipboard; this module
is the consumer side.  ``flatten_document`` projects a Document into a flat
``path -> text`` mapping, and ``TemplateRenderer`` substitutes placeholders
in a template string from that projection.

Flattening rules:
- scalars become their text (``null`` becomes ``""``, booleans ``true``/``false``);
- a map gets an entry of its own, formatted ``k: v, k2: v2``, plus one entry
  per member;
- an array gets one entry per element (``items[0]``) plus a whole-array
  entry joining the elements with ``", "``; an empty array flattens to ``""``;
- an array nested directly in an array is rendered as JSON;
- recursion stops at ``max_depth`` nesting levels.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from docsync.errors import TemplateError
from docsync.tree.nodes import ValueKind
from docsync.tree.paths import join_index, join_key

__all__ = ["TemplateRenderer", "flatten_document", "format_mapping"]

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{\{([^}]+)\}\}")

DEFAULT_MAX_DEPTH = 10


def _scalar_text(value: Any) -> str:
    kind = ValueKind.of(value)
    if kind == ValueKind.NULL:
        return ""
    if kind == ValueKind.BOOLEAN:
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_mapping(mapping: dict[Any, Any], depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Format a map as a single readable line: ``k: v, k2: v2``.

    Nested maps are formatted inline; arrays of maps format each element and
    join them with ``", "``.  Past ``max_depth`` the map is summarised as
    ``[object with N properties]``.
    """
    if depth >= max_depth:
        return f"[object with {len(mapping)} properties]"

    entries: list[str] = []
    for key, value in mapping.items():
        kind = ValueKind.of(value)
        if kind == ValueKind.MAP:
            entries.append(f"{key}: {format_mapping(value, depth + 1, max_depth)}")
        elif kind == ValueKind.ARRAY:
            if not value:
                entries.append(f"{key}: []")
            else:
                entries.append(f"{key}: {_join_items(value, depth + 1, max_depth)}")
        else:
            entries.append(f"{key}: {_scalar_text(value)}")
    return ", ".join(entries)


def _join_items(items: list[Any], depth: int, max_depth: int) -> str:
    parts = []
    for item in items:
        if isinstance(item, dict):
            parts.append(format_mapping(item, depth, max_depth))
        elif isinstance(item, list):
            parts.append(json.dumps(item, ensure_ascii=False, separators=(",", ":")))
        else:
            parts.append(_scalar_text(item))
    return ", ".join(parts)


def flatten_document(document: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> dict[str, str]:
    """Project ``document`` into a flat ``path -> text`` mapping.

    Args:
        document:  Document root.  A scalar root flattens to ``{}``.
        max_depth: Maximum nesting depth that is expanded.

    Returns:
        Ordered mapping from every addressable path to its text.
    """
    flattened: dict[str, str] = {}
    if isinstance(document, dict):
        _flatten_map(document, "", max_depth, flattened)
    elif isinstance(document, list):
        _flatten_array(document, "", max_depth, flattened)
    return flattened


def _flatten_map(mapping: dict[Any, Any], prefix: str, depth: int, out: dict[str, str]) -> None:
    if depth <= 0:
        return
    for key, value in mapping.items():
        path = join_key(prefix, key)
        kind = ValueKind.of(value)
        if kind == ValueKind.MAP:
            out[path] = format_mapping(value)
            _flatten_map(value, path, depth - 1, out)
        elif kind == ValueKind.ARRAY:
            _flatten_array(value, path, depth, out)
        else:
            out[path] = _scalar_text(value)


def _flatten_array(items: list[Any], path: str, depth: int, out: dict[str, str]) -> None:
    if not items:
        if path:
            out[path] = ""
        return
    for index, item in enumerate(items):
        item_path = join_index(path, index)
        if isinstance(item, dict):
            _flatten_map(item, item_path, depth - 1, out)
        elif isinstance(item, list):
            out[item_path] = json.dumps(item, ensure_ascii=False, separators=(",", ":"))
        else:
            out[item_path] = _scalar_text(item)
    if path:
        out[path] = _join_items(items, 0, DEFAULT_MAX_DEPTH)


class TemplateRenderer:
    """Substitutes ``{{path}}`` placeholders from a flattened Document.

    A placeholder counts as present when the projection has an entry for it,
    or when it names a parent of an entry (``{{customer}}`` with only
    ``customer.name`` present).  Parent-only placeholders are left verbatim.

    Example::

        renderer = TemplateRenderer("Hello {{customer.name}}!")
        renderer.render({"customer": {"name": "Ada"}})   # "Hello Ada!"
    """

    def __init__(self, template: str = "", max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            msg = f"max_depth must be >= 1, got {max_depth}"
            raise ValueError(msg)
        self.template = template
        self.max_depth = max_depth

    def placeholders(self) -> list[str]:
        """Distinct placeholder names in order of first appearance."""
        return list(dict.fromkeys(PLACEHOLDER.findall(self.template)))

    def missing_fields(self, document: Any) -> list[str]:
        """Placeholders that neither exist in nor parent any entry of the projection."""
        flattened = flatten_document(document, self.max_depth)
        return [name for name in self.placeholders() if not _present(name, flattened)]

    def validate(self, document: Any) -> list[str]:
        """Return the list of problems that would make ``render`` fail."""
        if not self.template.strip():
            return ["Template cannot be empty"]
        missing = self.missing_fields(document)
        if missing:
            return [f"Missing fields for placeholders: {', '.join(missing)}"]
        return []

    def render(self, document: Any) -> str:
        """Substitute every placeholder of the template from ``document``.

        Raises:
            TemplateError: If the template is empty or references missing fields.
        """
        errors = self.validate(document)
        if errors:
            msg = "Validation failed: " + ", ".join(errors)
            raise TemplateError(msg)

        flattened = flatten_document(document, self.max_depth)
        logger.debug("Rendering template with %d fields", len(flattened))
        return PLACEHOLDER.sub(
            lambda match: flattened.get(match.group(1), match.group(0)), self.template
        )


def _present(name: str, flattened: dict[str, str]) -> bool:
    if name in flattened:
        return True
    prefix = name + "."
    return any(key.startswith(prefix) for key in flattened)
