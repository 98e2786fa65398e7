"""Headless editing surfaces bound to a DocumentStateManager."""

from docsync.views.base import ViewState, ViewStateMachine
from docsync.views.form import (
    FieldControl,
    FormRow,
    MemoryClipboard,
    RenderMode,
    RowAction,
    RowActionKind,
    StructuredFormView,
)
from docsync.views.highlight import Token, TokenKind, YamlHighlighter
from docsync.views.text import TextBuffer, TextSurfaceView

__all__ = [
    "FieldControl",
    "FormRow",
    "MemoryClipboard",
    "RenderMode",
    "RowAction",
    "RowActionKind",
    "StructuredFormView",
    "TextBuffer",
    "TextSurfaceView",
    "Token",
    "TokenKind",
    "ViewState",
    "ViewStateMachine",
    "YamlHighlighter",
]
