"""SyncConfig and Origin for document synchronization.

SyncConfig is a frozen (immutable) dataclass holding the manager, codec and
text-surface parameters.  Origin tags which surface initiated a mutation so
each view can ignore the echo of its own edits.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class Origin(StrEnum):
    """Which editing surface initiated a change.

    - FORM: the structured form view.
    - TEXT: the serialized-text surface.

    Notifications use ``None`` for changes with no originating view
    (construction, programmatic ``set_text`` / ``set_tree``).
    """

    FORM = auto()
    TEXT = auto()


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Immutable configuration for a DocumentStateManager and its views.

    Attributes:
        debounce_delay: Seconds a non-immediate conversion waits before
            running (>= 0).  0 means "on the next tick", not synchronously.
        indent: Spaces per nesting level in serialized text, 1..9.
        line_width: Preferred maximum line width of serialized text.  Any
            negative value disables wrapping; otherwise at least 20.
        no_refs: When True, serialized text never uses anchors/aliases for
            repeated sub-trees.
        indent_unit: Columns added/removed per structural indent on the
            text surface (>= 1).
        path_cache_size: Parsed paths held by each manager's PathCache (>= 1).
    """

    debounce_delay: float = 0.0
    indent: int = 2
    line_width: int = -1
    no_refs: bool = True
    indent_unit: int = 2
    path_cache_size: int = 1024

    def __post_init__(self) -> None:
        if self.debounce_delay < 0.0:
            msg = f"debounce_delay must be >= 0.0, got {self.debounce_delay}"
            raise ValueError(msg)
        if not 1 <= self.indent <= 9:
            msg = f"indent must be in [1, 9], got {self.indent}"
            raise ValueError(msg)
        if 0 <= self.line_width < 20:
            msg = f"line_width must be negative (unlimited) or >= 20, got {self.line_width}"
            raise ValueError(msg)
        if self.indent_unit < 1:
            msg = f"indent_unit must be >= 1, got {self.indent_unit}"
            raise ValueError(msg)
        if self.path_cache_size < 1:
            msg = f"path_cache_size must be >= 1, got {self.path_cache_size}"
            raise ValueError(msg)

    @property
    def unlimited_width(self) -> bool:
        """True when serialized lines are never wrapped."""
        return self.line_width < 0
