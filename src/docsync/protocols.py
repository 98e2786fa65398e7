"""Structural protocols for docsync extension points.

Defines the interfaces collaborators must satisfy.  Users can plug in custom
codecs, schedulers or clipboards without inheriting from any base class:
any class with conformant methods passes ``isinstance`` checks.

Example::

    from docsync.protocols import Codec

    class UpperCodec:
        def parse(self, text: str) -> Any: ...
        def dump(self, tree: Any) -> str: ...

    assert isinstance(UpperCodec(), Codec)  # True, structural conformance
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from docsync.result import ChangeNotification


@runtime_checkable
class Codec(Protocol):
    """Text <-> tree conversion used by the manager.

    ``parse`` must raise ``ParseError`` on malformed text and ``dump`` must
    raise ``SerializationError`` on trees it cannot encode.  For any acyclic
    tree of maps, arrays and scalars, ``parse(dump(tree)) == tree``.
    """

    def parse(self, text: str) -> Any: ...

    def dump(self, tree: Any) -> str: ...


@runtime_checkable
class Observer(Protocol):
    """Callable receiving every ChangeNotification."""

    def __call__(self, notification: ChangeNotification) -> None: ...


@runtime_checkable
class TimerHandle(Protocol):
    """Handle of a scheduled callback."""

    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Runs a callback after ``delay`` seconds on the caller's event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


@runtime_checkable
class Clipboard(Protocol):
    """Destination of the form view's copy-placeholder affordance."""

    def write_text(self, text: str) -> None: ...
