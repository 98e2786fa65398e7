"""ValueKind StrEnum: the tagged union of Document node kinds.

A Document is a plain Python value tree (dict / list / str / int / float /
bool / None).  Every place that needs to branch on the shape of a value
(row rendering, control selection, array item templating, flattening) goes
through ``ValueKind.of`` instead of ad-hoc ``isinstance`` chains.
"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import Any

# Type alias for Document values
DocumentValue = dict[Any, Any] | list[Any] | str | int | float | bool | None


class ValueKind(StrEnum):
    """Enumeration of the six kinds a Document node can take.

    StrEnum values are the lowercased member names (Python 3.11+):
    - MAP      -> "map"     : mapping of keys to nodes
    - ARRAY    -> "array"   : ordered sequence of nodes
    - STRING   -> "string"  : text scalar
    - NUMBER   -> "number"  : int or float scalar (never bool)
    - BOOLEAN  -> "boolean" : True / False
    - NULL     -> "null"    : None
    """

    MAP = auto()
    ARRAY = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()

    @classmethod
    def of(cls, value: Any) -> ValueKind:
        """Classify ``value`` into its ValueKind.

        The dispatch order is critical: bool MUST be checked before int
        because bool is a subclass of int in Python.  Values of any other
        Python type (dates parsed by the codec, custom objects) are treated
        as strings, which is how the form renders them.

        Args:
            value: Any Document node.

        Returns:
            The matching ValueKind member.
        """
        if value is None:
            return cls.NULL
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, dict):
            return cls.MAP
        if isinstance(value, list):
            return cls.ARRAY
        return cls.STRING

    @property
    def is_container(self) -> bool:
        """True for MAP and ARRAY."""
        return self in (ValueKind.MAP, ValueKind.ARRAY)

    @property
    def is_scalar(self) -> bool:
        """True for STRING, NUMBER, BOOLEAN and NULL."""
        return not self.is_container


def empty_default(value: Any) -> Any:
    """Return the type-appropriate empty value for ``value``.

    Used when a new array element is templated from the first element's
    key set: booleans become ``False``, numbers ``0``, everything else ``""``.
    """
    kind = ValueKind.of(value)
    if kind == ValueKind.BOOLEAN:
        return False
    if kind == ValueKind.NUMBER:
        return 0
    return ""
