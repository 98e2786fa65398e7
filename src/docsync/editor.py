"""SyncedEditor: one manager wired to one text surface and one form view.

This is the host-facing entry point for the side-by-side editor.  It owns
the lifecycle of its three parts and forwards every notification to an
optional ``on_change`` callback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from docsync.manager import DocumentStateManager
from docsync.views.form import StructuredFormView
from docsync.views.text import TextSurfaceView

if TYPE_CHECKING:
    from docsync.config import SyncConfig
    from docsync.manager import Subscription
    from docsync.protocols import Clipboard, Codec, Scheduler
    from docsync.result import ChangeNotification

__all__ = ["SyncedEditor"]

logger = logging.getLogger(__name__)


class SyncedEditor:
    """Side-by-side text and form editing of one Document.

    Args:
        initial_text: Initial serialized text (empty means ``{}``).
        on_change: Called with every ChangeNotification.
        codec: Passed to the manager.
        config: Passed to the manager.
        scheduler: Passed to the manager.
        clipboard: Destination of the form's copy-placeholder affordance.

    Example::

        editor = SyncedEditor("title: Draft\\n", on_change=print)
        editor.form.edit("title", "Final")
        editor.text_view.text   # "title: Final\\n"
        editor.destroy()
    """

    def __init__(
        self,
        initial_text: str = "",
        on_change: Callable[[ChangeNotification], None] | None = None,
        codec: Codec | None = None,
        config: SyncConfig | None = None,
        scheduler: Scheduler | None = None,
        clipboard: Clipboard | None = None,
    ) -> None:
        self.manager: DocumentStateManager | None = DocumentStateManager(
            initial_text, codec=codec, config=config, scheduler=scheduler
        )
        self._forwarder: Subscription | None = None
        if on_change is not None:
            self._forwarder = self.manager.subscribe(on_change)
        self.text_view: TextSurfaceView | None = TextSurfaceView(self.manager)
        self.form: StructuredFormView | None = StructuredFormView(self.manager, clipboard)
        self.is_active = False

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False

    # ------------------------------------------------------------------
    # Document access
    # ------------------------------------------------------------------

    def get_tree(self) -> Any:
        return self.manager.get_tree() if self.manager is not None else {}

    def get_text(self) -> str:
        return self.manager.get_text() if self.manager is not None else ""

    def set_tree(self, tree: Any) -> None:
        """Replace the Document and re-render both views immediately."""
        if self.manager is not None:
            self.manager.set_tree(tree, immediate=True)

    def set_text(self, text: str) -> None:
        """Replace the text and re-render both views immediately."""
        if self.manager is not None:
            self.manager.set_text(text, immediate=True)

    def is_valid(self) -> bool:
        return self.manager.is_valid_state() if self.manager is not None else False

    def get_error(self) -> str | None:
        return self.manager.get_error() if self.manager is not None else None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def destroy(self) -> None:
        """Tear down both views, then the manager.  Safe to call twice."""
        if self.text_view is not None:
            self.text_view.destroy()
            self.text_view = None
        if self.form is not None:
            self.form.destroy()
            self.form = None
        if self.manager is not None:
            self.manager.destroy()
            self.manager = None
        self._forwarder = None
        self.is_active = False
        logger.debug("Editor destroyed")
