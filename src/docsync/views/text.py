"""TextSurfaceView: headless model of the serialized-text editor.

The view owns a ``TextBuffer`` (text plus selection offsets) and pushes every
user edit to ``DocumentStateManager.set_text(..., origin=TEXT)``.  Editing
affordances mirror a code editor:

- Tab inserts one indent unit at the caret, or indents every line touched by
  the selection; Shift+Tab outdents those lines by up to one unit.  After an
  indent/outdent the selection covers the whole modified line range.
- Enter inserts a line break followed by the current line's leading
  whitespace.

When a notification from another surface carries different text, the buffer
is replaced and the previous selection offsets are restored, clamped to the
new length.  Notifications the text surface caused only update the validity
indicator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from docsync.config import Origin
from docsync.views.base import ViewStateMachine
from docsync.views.highlight import Token, YamlHighlighter

if TYPE_CHECKING:
    from docsync.manager import DocumentStateManager
    from docsync.result import ChangeNotification

__all__ = ["TextBuffer", "TextSurfaceView"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TextBuffer:
    """Editable text with a selection (``start == end`` is a caret)."""

    text: str = ""
    selection_start: int = 0
    selection_end: int = 0

    @property
    def has_selection(self) -> bool:
        return self.selection_start != self.selection_end

    def select(self, start: int, end: int | None = None) -> None:
        """Set the selection, clamping both offsets into the text."""
        end = start if end is None else end
        size = len(self.text)
        start = min(max(start, 0), size)
        end = min(max(end, 0), size)
        self.selection_start, self.selection_end = min(start, end), max(start, end)

    def replace_selection(self, insert: str) -> None:
        """Replace the selected range with ``insert`` and put the caret after it."""
        start, end = self.selection_start, self.selection_end
        self.text = self.text[:start] + insert + self.text[end:]
        caret = start + len(insert)
        self.selection_start = self.selection_end = caret

    def line_range(self) -> tuple[int, int]:
        """Return ``(start, end)`` offsets of the lines touched by the selection.

        A selection ending right after a newline does not touch the next line.
        """
        text = self.text
        start = text.rfind("\n", 0, self.selection_start) + 1
        stop = self.selection_end
        if self.has_selection and text[stop - 1] == "\n":
            stop -= 1
        end = text.find("\n", stop)
        return start, len(text) if end == -1 else end


class TextSurfaceView:
    """Text projection of a ``DocumentStateManager``.

    Args:
        manager: Manager to edit and observe.
        highlighter: Overlay tokenizer.  Defaults to ``YamlHighlighter()``.

    Example::

        manager = DocumentStateManager()
        surface = TextSurfaceView(manager)
        surface.type_text("name: Ada")
        manager.flush()
        manager.get_tree()   # {"name": "Ada"}
    """

    def __init__(
        self,
        manager: DocumentStateManager,
        highlighter: YamlHighlighter | None = None,
    ) -> None:
        self._manager = manager
        self._highlighter = highlighter if highlighter is not None else YamlHighlighter()
        self._machine = ViewStateMachine()
        self._indent = " " * manager.config.indent_unit

        self._buffer = TextBuffer(text=manager.get_text())
        self._is_valid = manager.is_valid_state()
        self._error = manager.get_error()
        self.replacement_count = 0

        self._subscription = manager.subscribe(self._on_change)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def selection(self) -> tuple[int, int]:
        return self._buffer.selection_start, self._buffer.selection_end

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def state_machine(self) -> ViewStateMachine:
        return self._machine

    def overlay(self) -> list[list[Token]]:
        """Syntax tokens of the current text, one list per line."""
        return self._highlighter.highlight(self._buffer.text)

    def overlay_html(self) -> str:
        return self._highlighter.render_html(self._buffer.text)

    # ------------------------------------------------------------------
    # User input
    # ------------------------------------------------------------------

    def select(self, start: int, end: int | None = None) -> None:
        self._buffer.select(start, end)

    def set_content(self, text: str) -> None:
        """Replace the whole buffer as if the user pasted ``text`` over it."""
        self._buffer.text = text
        self._buffer.select(len(text))
        self._push()

    def type_text(self, text: str) -> None:
        """Type ``text`` over the current selection."""
        self.insert_text(text)

    def insert_text(self, text: str) -> None:
        self._buffer.replace_selection(text)
        self._push()

    def press_enter(self) -> None:
        """Break the line, carrying over the current line's indentation."""
        buffer = self._buffer
        line_start = buffer.text.rfind("\n", 0, buffer.selection_start) + 1
        line = buffer.text[line_start:]
        indentation = line[: len(line) - len(line.lstrip(" \t"))]
        self.insert_text("\n" + indentation)

    def press_tab(self, shift: bool = False) -> None:
        """Indent (or with ``shift`` outdent) like a code editor's Tab key."""
        if self._buffer.has_selection:
            if shift:
                self.outdent_selection()
            else:
                self.indent_selection()
        elif shift:
            self.outdent_selection()
        else:
            self.insert_text(self._indent)

    def indent_selection(self) -> None:
        """Prefix every line touched by the selection with one indent unit."""
        self._rewrite_lines(lambda line: self._indent + line)

    def outdent_selection(self) -> None:
        """Remove up to one indent unit of leading spaces from each touched line."""
        width = len(self._indent)

        def outdent(line: str) -> str:
            strip = len(line[:width]) - len(line[:width].lstrip(" "))
            return line[strip:]

        self._rewrite_lines(outdent)

    def destroy(self) -> None:
        self._subscription.unsubscribe()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _rewrite_lines(self, transform: Callable[[str], str]) -> None:
        buffer = self._buffer
        start, end = buffer.line_range()
        block = "\n".join(transform(line) for line in buffer.text[start:end].split("\n"))
        buffer.text = buffer.text[:start] + block + buffer.text[end:]
        buffer.selection_start, buffer.selection_end = start, start + len(block)
        self._push()

    def _push(self) -> None:
        if not self._machine.accepts_input:
            return
        with self._machine.editing():
            self._manager.set_text(self._buffer.text, origin=Origin.TEXT)

    def _on_change(self, notification: ChangeNotification) -> None:
        if self._machine.is_suspended:
            return
        self._is_valid = notification.is_valid
        self._error = notification.error
        if notification.is_from(Origin.TEXT):
            return
        if notification.text == self._buffer.text:
            return

        with self._machine.suspended():
            start, end = self.selection
            self._buffer.text = notification.text
            self._buffer.select(start, end)
            self.replacement_count += 1
            logger.debug("Text surface replaced with %d characters", len(notification.text))
