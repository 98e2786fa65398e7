"""ChangeNotification dataclass delivered to every manager subscriber.

This module provides the message type passed to observers after each
conversion.  It is transient: the manager does not retain it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from docsync.config import Origin

__all__ = ["ChangeNotification"]


@dataclass(frozen=True, slots=True)
class ChangeNotification:
    """Snapshot of the manager state right after a conversion.

    Attributes:
        tree: The canonical Document (a live reference, not a copy).  While
            ``is_valid`` is False this is the last valid Document.
        text: The serialized text.  While ``is_valid`` is False after a text
            edit this is the user's in-progress (unparsable) text.
        is_valid: True when ``tree`` and ``text`` describe the same Document.
        error: Human-readable description of the last failure, else None.
        origin: Surface that initiated the change, or None.
    """

    tree: Any
    text: str
    is_valid: bool
    error: str | None
    origin: Origin | None

    def is_from(self, origin: Origin) -> bool:
        """True when this notification echoes a change made by ``origin``."""
        return self.origin == origin
