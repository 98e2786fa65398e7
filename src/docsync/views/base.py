"""ViewStateMachine: the Idle/Editing state and Suspended flag shared by views.

Both editing surfaces move ``Idle -> Editing -> Idle`` around user input.
``Suspended`` is an independent flag raised for the duration of a
self-triggered (programmatic) update so the update is never mistaken for a
fresh user edit and broadcast back to the manager.
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from enum import StrEnum, auto

__all__ = ["ViewState", "ViewStateMachine"]


class ViewState(StrEnum):
    """Whether the user is currently interacting with a view."""

    IDLE = auto()
    EDITING = auto()


class ViewStateMachine:
    """Tracks ``ViewState`` plus the nestable ``suspended`` flag.

    Example::

        machine = ViewStateMachine()
        with machine.suspended():
            machine.is_suspended   # True
            machine.accepts_input  # False
        machine.is_suspended       # False
    """

    def __init__(self) -> None:
        self._state = ViewState.IDLE
        self._suspend_depth = 0

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def is_suspended(self) -> bool:
        return self._suspend_depth > 0

    @property
    def accepts_input(self) -> bool:
        """True when input should be forwarded to the manager."""
        return not self.is_suspended

    def begin_editing(self) -> None:
        self._state = ViewState.EDITING

    def end_editing(self) -> None:
        self._state = ViewState.IDLE

    @contextlib.contextmanager
    def editing(self) -> Iterator[None]:
        """Hold ``EDITING`` for the duration of one user input event."""
        previous = self._state
        self._state = ViewState.EDITING
        try:
            yield
        finally:
            self._state = previous if previous == ViewState.EDITING else ViewState.IDLE

    @contextlib.contextmanager
    def suspended(self) -> Iterator[None]:
        """Raise the Suspended flag; nested uses stack."""
        self._suspend_depth += 1
        try:
            yield
        finally:
            self._suspend_depth -= 1
