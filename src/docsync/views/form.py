"""StructuredFormView: headless view model of the field-by-field form.

The form renders the Document as a flat, indented list of ``FormRow``
objects, one per map entry and array element at every depth.  Scalar rows
own a ``FieldControl`` (the editable element); the path -> control map is
the FieldBinding cache.

Rendering strategy on every accepted notification:

1. Compute the sorted path set of the new Document.
2. Full rebuild when nothing is rendered yet, or when the path set (or the
   container/scalar shape of any row) differs from what is rendered: every
   row and binding is discarded and rebuilt, and focus is cleared.
3. Otherwise an incremental update: each binding is re-read from the new
   Document.  The focused binding is skipped, a binding whose value kind
   changed is replaced by a fresh control, and a binding whose content is
   merely stale has its content overwritten in place.  Focus and selection
   are restored afterwards.

Echo handling: notifications the form itself caused (``origin=FORM``) are
ignored, except for structural actions (add/remove item or property), which
mark themselves pending so the form re-renders the new shape.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from docsync.config import Origin
from docsync.tree.builder import RowBuilder, RowSpec
from docsync.tree.nodes import ValueKind
from docsync.tree.normalizer import ValueNormalizer
from docsync.tree.paths import MISSING, Path, format_path, resolve
from docsync.views.base import ViewStateMachine

if TYPE_CHECKING:
    from docsync.manager import DocumentStateManager
    from docsync.protocols import Clipboard
    from docsync.result import ChangeNotification

__all__ = [
    "FieldControl",
    "FormRow",
    "MemoryClipboard",
    "RenderMode",
    "RowAction",
    "RowActionKind",
    "StructuredFormView",
]

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No data to display"


def placeholder_for(path: str) -> str:
    """Template placeholder text for ``path``: ``{{path}}``."""
    return f"{{{{{path}}}}}"


class RenderMode(StrEnum):
    FULL = auto()
    INCREMENTAL = auto()


class RowActionKind(StrEnum):
    """Structural affordances a row can expose."""

    ADD_ITEM = auto()
    ADD_PROPERTY = auto()
    REMOVE_ITEM = auto()
    REMOVE_PROPERTY = auto()


@dataclass(frozen=True, slots=True)
class RowAction:
    """A structural button bound to a container path.

    Attributes:
        kind:  What the button does.
        path:  Container the action applies to (the row itself for "add",
               the row's parent for "remove").
        index: Element index for ``REMOVE_ITEM``.
        key:   Property name for ``REMOVE_PROPERTY``.
        segments: Exact segments of ``path`` when the action comes from a
               rendered row; ``None`` means ``path`` is parsed.
    """

    kind: RowActionKind
    path: str
    index: int | None = None
    key: str | None = None
    segments: Path | None = field(default=None, compare=False)

    @property
    def target(self) -> str | Path:
        return self.segments if self.segments is not None else self.path


@dataclass(slots=True)
class FieldControl:
    """Editable element of a scalar row.

    ``content`` is a ``bool`` for toggles and the display text otherwise.
    Null rows get a disabled ``"null"`` placeholder.
    """

    path: str
    kind: ValueKind
    content: str | bool
    disabled: bool = False


@dataclass(slots=True)
class FormRow:
    """One rendered row.

    Attributes:
        path:          Path of the row's value.
        label:         Key label (``"<i>:"`` for array elements).
        level:         Nesting level used for indentation.
        kind:          ValueKind of the value.
        control:       Editable element for scalar rows; None for containers.
        add_action:    "+" affordance of container rows.
        remove_action: "x" affordance; absent for top-level rows.
    """

    path: str
    label: str
    level: int
    kind: ValueKind
    control: FieldControl | None = None
    add_action: RowAction | None = None
    remove_action: RowAction | None = None

    @property
    def placeholder(self) -> str:
        """Template placeholder copied when the label is clicked."""
        return placeholder_for(self.path)


class MemoryClipboard:
    """In-process clipboard; keeps the last text written."""

    def __init__(self) -> None:
        self.text: str | None = None

    def write_text(self, text: str) -> None:
        self.text = text


class StructuredFormView:
    """Form projection of a ``DocumentStateManager``'s Document.

    The view subscribes on construction and renders the current Document
    immediately.  Hosts drive it through ``focus``, ``edit``, ``toggle``,
    ``activate`` and ``copy_placeholder``, and read ``rows`` to draw.

    Example::

        manager = DocumentStateManager("name: Ada\\nadmin: false\\n")
        form = StructuredFormView(manager)
        [row.path for row in form.rows]   # ["name", "admin"]
        form.toggle("admin")
        manager.get_text()                # "name: Ada\\nadmin: true\\n"
    """

    def __init__(
        self,
        manager: DocumentStateManager,
        clipboard: Clipboard | None = None,
    ) -> None:
        self._manager = manager
        self._clipboard: Clipboard = clipboard if clipboard is not None else MemoryClipboard()
        self._machine = ViewStateMachine()
        self._builder = RowBuilder()
        self._normalizer = ValueNormalizer()

        self._rows: list[FormRow] = []
        self._rows_by_path: dict[str, FormRow] = {}
        self._bindings: dict[str, FieldControl] = {}
        self._segments: dict[str, Path] = {}
        self._rendered_shape: list[tuple[str, bool]] = []
        self._empty = False
        self._last_mode: RenderMode | None = None

        self._focused: str | None = None
        self._selection: tuple[int, int] | None = None
        self._structural_pending = False

        self._is_valid = manager.is_valid_state()
        self._error = manager.get_error()

        with self._machine.suspended():
            self._render(manager.get_tree())
        self._subscription = manager.subscribe(self._on_change)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def rows(self) -> list[FormRow]:
        return list(self._rows)

    @property
    def bindings(self) -> dict[str, FieldControl]:
        """Snapshot of the FieldBinding cache (path -> control)."""
        return dict(self._bindings)

    @property
    def rendered_paths(self) -> list[str]:
        return [path for path, _ in self._rendered_shape]

    @property
    def empty_message(self) -> str | None:
        """Empty-state text when the Document is not a map or array."""
        return EMPTY_MESSAGE if self._empty else None

    @property
    def last_render_mode(self) -> RenderMode | None:
        return self._last_mode

    @property
    def focused_path(self) -> str | None:
        return self._focused

    @property
    def selection(self) -> tuple[int, int] | None:
        return self._selection

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def state_machine(self) -> ViewStateMachine:
        return self._machine

    def row(self, path: str) -> FormRow:
        """Return the rendered row at ``path``.

        Raises:
            KeyError: If no row is rendered for ``path``.
        """
        return self._rows_by_path[path]

    def control(self, path: str) -> FieldControl:
        """Return the bound control at ``path``.

        Raises:
            KeyError: If ``path`` has no editable control.
        """
        try:
            return self._bindings[path]
        except KeyError:
            msg = f"No editable field at path {path!r}"
            raise KeyError(msg) from None

    # ------------------------------------------------------------------
    # User input
    # ------------------------------------------------------------------

    def focus(self, path: str, selection: tuple[int, int] | None = None) -> None:
        """Give input focus to the control at ``path``."""
        control = self.control(path)
        if selection is None and isinstance(control.content, str):
            end = len(control.content)
            selection = (end, end)
        self._focused = path
        self._selection = selection

    def blur(self) -> None:
        self._focused = None
        self._selection = None

    def select(self, start: int, end: int) -> None:
        """Move the selection inside the focused control."""
        if self._focused is not None:
            self._selection = (start, end)

    def edit(self, path: str, content: str | bool) -> None:
        """Apply user input to the control at ``path`` and push it to the manager.

        The content is converted to a typed value according to the control's
        kind (``"12"`` -> ``12`` for numbers, falling back to ``0``) and written
        with ``update_path(..., immediate=True, origin=FORM)``.  Disabled
        (null) controls ignore input.
        """
        control = self.control(path)
        if control.disabled:
            logger.debug("Ignoring input on disabled field %r", path)
            return
        if not self._machine.accepts_input:
            return

        with self._machine.editing():
            if self._focused != path:
                self.focus(path)
            control.content = content
            if isinstance(content, str):
                self._selection = (len(content), len(content))
            value = self._normalizer.parse(content, control.kind)
            self._manager.update_path(
                self._segments[path], value, immediate=True, origin=Origin.FORM
            )

    def toggle(self, path: str) -> None:
        """Flip a boolean control."""
        control = self.control(path)
        if control.kind != ValueKind.BOOLEAN:
            msg = f"Field {path!r} is a {control.kind} field, not a toggle"
            raise TypeError(msg)
        self.edit(path, not control.content)

    def activate(self, action: RowAction, key: str | None = None) -> None:
        """Run a row's structural affordance.

        Args:
            action: The row's ``add_action`` or ``remove_action``.
            key:    Property name for ``ADD_PROPERTY``.  Without a key the
                    action is cancelled.
        """
        if not self._machine.accepts_input:
            return
        if action.kind == RowActionKind.ADD_PROPERTY and not key:
            logger.debug("Add property on %r cancelled: no key given", action.path)
            return

        self._structural_pending = True
        try:
            with self._machine.editing():
                self._dispatch(action, key)
        finally:
            self._structural_pending = False

    def add_property(self, key: str, path: str = "") -> None:
        """Add ``key`` to the map at ``path`` (the root by default)."""
        self.activate(RowAction(RowActionKind.ADD_PROPERTY, path), key=key)

    def copy_placeholder(self, path: str) -> str:
        """Copy ``{{path}}`` to the clipboard; the Document is untouched."""
        placeholder = placeholder_for(path)
        self._clipboard.write_text(placeholder)
        return placeholder

    def destroy(self) -> None:
        """Unsubscribe and drop every row and binding."""
        self._subscription.unsubscribe()
        self._rows.clear()
        self._rows_by_path.clear()
        self._bindings.clear()
        self._segments.clear()
        self._rendered_shape = []
        self.blur()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _dispatch(self, action: RowAction, key: str | None) -> None:
        manager = self._manager
        if action.kind == RowActionKind.ADD_ITEM:
            manager.add_array_item(action.target, "", immediate=True, origin=Origin.FORM)
        elif action.kind == RowActionKind.REMOVE_ITEM:
            manager.remove_array_item(
                action.target, action.index or 0, immediate=True, origin=Origin.FORM
            )
        elif action.kind == RowActionKind.ADD_PROPERTY:
            manager.add_object_property(
                action.target, key or "", "", immediate=True, origin=Origin.FORM
            )
        else:
            manager.remove_object_property(
                action.target,
                action.key or "",
                immediate=True,
                origin=Origin.FORM,
            )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _on_change(self, notification: ChangeNotification) -> None:
        if self._machine.is_suspended:
            return
        self._is_valid = notification.is_valid
        self._error = notification.error
        if notification.is_from(Origin.FORM) and not self._structural_pending:
            return
        with self._machine.suspended():
            self._render(notification.tree)

    def _render(self, tree: Any) -> None:
        if not ValueKind.of(tree).is_container:
            self._rebuild([])
            self._empty = True
            return

        self._empty = False
        specs = self._builder.build(tree)
        shape = sorted((spec.path, spec.kind.is_container) for spec in specs)
        if not self._rows or shape != self._rendered_shape:
            self._rebuild(specs)
        else:
            self._update(tree)

    def _rebuild(self, specs: list[RowSpec]) -> None:
        self._rows = [self._make_row(spec) for spec in specs]
        self._rows_by_path = {row.path: row for row in self._rows}
        self._bindings = {
            row.path: row.control for row in self._rows if row.control is not None
        }
        self._segments = {spec.path: spec.segments for spec in specs}
        self._rendered_shape = sorted((spec.path, spec.kind.is_container) for spec in specs)
        self.blur()
        self._last_mode = RenderMode.FULL
        logger.debug("Form fully rebuilt with %d rows", len(self._rows))

    def _update(self, tree: Any) -> None:
        focused, selection = self._focused, self._selection
        replaced = changed = 0

        for path, control in list(self._bindings.items()):
            value = resolve(tree, self._segments[path])
            if value is MISSING:
                continue
            kind = ValueKind.of(value)
            if path == focused:
                # Keep the user's content; only retype how it is parsed.
                if kind != control.kind:
                    control.kind = kind
                    control.disabled = kind == ValueKind.NULL
                    self._rows_by_path[path].kind = kind
                    replaced += 1
                continue
            if kind != control.kind:
                fresh = self._make_control(path, value, kind)
                self._bindings[path] = fresh
                row = self._rows_by_path[path]
                row.control = fresh
                row.kind = kind
                replaced += 1
            elif not control.disabled and self._normalizer.differs(
                control.content, value, kind
            ):
                control.content = self._normalizer.to_content(value, kind)
                changed += 1

        self._focused, self._selection = focused, selection
        self._last_mode = RenderMode.INCREMENTAL
        logger.debug(
            "Form updated incrementally: %d fields replaced, %d refreshed", replaced, changed
        )

    def _make_row(self, spec: RowSpec) -> FormRow:
        row = FormRow(path=spec.path, label=spec.label, level=spec.level, kind=spec.kind)
        parent = spec.segments[:-1]
        if spec.kind == ValueKind.MAP:
            # A map inside an array is one record of a set: extend them all.
            target = parent if spec.is_element else spec.segments
            row.add_action = _action(RowActionKind.ADD_PROPERTY, target)
        elif spec.kind == ValueKind.ARRAY:
            row.add_action = _action(RowActionKind.ADD_ITEM, spec.segments)
        else:
            row.control = self._make_control(spec.path, spec.value, spec.kind)

        if spec.level > 0:
            if spec.is_element:
                row.remove_action = _action(RowActionKind.REMOVE_ITEM, parent, index=spec.index)
            else:
                row.remove_action = _action(
                    RowActionKind.REMOVE_PROPERTY, _record_set(parent), key=str(spec.key)
                )
        return row

    def _make_control(self, path: str, value: Any, kind: ValueKind) -> FieldControl:
        return FieldControl(
            path=path,
            kind=kind,
            content=self._normalizer.to_content(value, kind),
            disabled=kind == ValueKind.NULL,
        )


def _action(
    kind: RowActionKind, segments: Path, index: int | None = None, key: str | None = None
) -> RowAction:
    return RowAction(kind, format_path(segments), index=index, key=key, segments=segments)


def _record_set(parent: Path) -> Path:
    """Segments a property edit applies to: the enclosing array when ``parent`` is an element."""
    if parent and isinstance(parent[-1], int):
        return parent[:-1]
    return parent
