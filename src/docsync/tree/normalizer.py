"""ValueNormalizer: converts between typed scalars and control content.

Form controls hold display content (a string, or a bool for toggles), while
the Document holds typed scalars.  The normalizer performs both directions
and the comparison the incremental renderer uses to decide whether a
control's content is stale:

- STRING  : content is the text itself.
- NUMBER  : content is the decimal rendering; parsing accepts ints and
            floats and falls back to ``0`` for anything unparsable.
- BOOLEAN : content is the bool; the strings ``"true"``/``"false"`` also parse.
- NULL    : content is the literal ``"null"``; parsing maps ``null`` (any
            case) to ``None`` and keeps any other text as a string.
"""

from __future__ import annotations

import math
import re
from typing import Any

from docsync.tree.nodes import ValueKind

# Signed integer literal, e.g. "42", "-7", "+3"
_INT = re.compile(r"^[+-]?\d+$")


class ValueNormalizer:
    """Stateless converter between Document scalars and control content.

    Example usage:
        normalizer = ValueNormalizer()
        normalizer.parse("12", ValueKind.NUMBER)       # 12
        normalizer.parse("1.5", ValueKind.NUMBER)      # 1.5
        normalizer.parse("abc", ValueKind.NUMBER)      # 0
        normalizer.to_content(3.0, ValueKind.NUMBER)   # "3"
    """

    def to_content(self, value: Any, kind: ValueKind) -> str | bool:
        """Render a scalar as the content of a control of ``kind``."""
        if kind == ValueKind.BOOLEAN:
            return value is True or value == "true"
        if kind == ValueKind.NULL:
            return "null"
        if kind == ValueKind.NUMBER:
            return self._format_number(value)
        return "" if value is None else str(value)

    def parse(self, content: str | bool, kind: ValueKind) -> Any:
        """Convert control content back into a typed scalar of ``kind``."""
        if kind == ValueKind.BOOLEAN:
            if isinstance(content, bool):
                return content
            return str(content).strip().lower() == "true"
        if kind == ValueKind.NUMBER:
            return self._parse_number(str(content))
        if kind == ValueKind.NULL:
            text = str(content)
            return None if text.strip().lower() == "null" else text
        return str(content)

    def differs(self, content: str | bool, value: Any, kind: ValueKind) -> bool:
        """Return True if ``content`` no longer shows ``value``.

        Both sides are normalized to ``kind`` before comparison, so ``"3"``
        and ``3.0`` are equal for a NUMBER control.
        """
        if kind == ValueKind.NUMBER:
            return self._parse_number(str(content)) != self._parse_number(
                self._format_number(value)
            )
        if kind == ValueKind.BOOLEAN:
            return self.parse(content, kind) != self.to_content(value, kind)
        if kind == ValueKind.NULL:
            return self.parse(content, kind) != value
        return str(content) != self.to_content(value, kind)

    # ------------------------------------------------------------------
    # Number helpers
    # ------------------------------------------------------------------

    def _format_number(self, value: Any) -> str:
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, float):
            if math.isfinite(value) and value.is_integer():
                return str(int(value))
            return repr(value)
        if isinstance(value, int):
            return str(value)
        return str(self._parse_number(str(value)))

    def _parse_number(self, text: str) -> int | float:
        text = text.strip()
        if _INT.match(text):
            return int(text)
        try:
            number = float(text)
        except ValueError:
            return 0
        return number if math.isfinite(number) else 0
